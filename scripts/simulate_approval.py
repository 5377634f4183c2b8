"""Walk one payment through create -> simulated approval -> success.

Runs against a service started in `mock` or `mock-applepay` mode. The
simulated approval endpoint redirects to the success callback, which httpx
follows, so the final response is the executed payment.
"""

import argparse
import asyncio
import json
from uuid import uuid4

import httpx


async def run(base_url: str, email: str, amount: str, currency: str, description: str) -> int:
    """Create one payment, follow its approval URL, then fetch its details."""

    payload = {
        "userEmail": email,
        "description": description,
        "amount": amount,
        "currency": currency,
        "orderId": f"ORDER-{uuid4().hex[:8].upper()}",
    }
    headers = {"x-correlation-id": str(uuid4())}
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0, follow_redirects=True) as client:
        created = await client.post("/api/payment/create", json=payload, headers=headers)
        print(f"create status={created.status_code} body={json.dumps(created.json())}")
        if created.status_code != 201:
            return 1
        body = created.json()

        executed = await client.get(body["approvalUrl"], headers=headers)
        print(f"execute status={executed.status_code} body={json.dumps(executed.json())}")
        if executed.status_code != 200:
            return 1

        details = await client.get(f"/api/payment/{body['paymentId']}", headers=headers)
        print(f"details status={details.status_code} body={json.dumps(details.json())}")
    return 0 if details.status_code == 200 else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a full mock payment lifecycle.")
    parser.add_argument("--base-url", default="http://localhost:8080")
    parser.add_argument("--email", default="buyer@example.com")
    parser.add_argument("--amount", default="10.00")
    parser.add_argument("--currency", default="USD")
    parser.add_argument("--description", default="Test purchase")
    args = parser.parse_args()
    raise SystemExit(asyncio.run(run(args.base_url, args.email, args.amount, args.currency, args.description)))


if __name__ == "__main__":
    main()
