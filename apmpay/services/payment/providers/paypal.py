"""PayPal REST (v1 payments) backed provider."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from apmpay.common.config import CommonSettings
from apmpay.common.errors import PaymentError
from apmpay.common.state_machine import resolve_execution_status
from apmpay.services.payment.providers.base import PaymentProvider
from apmpay.services.payment.schemas import PaymentDetails, PaymentRequest, PaymentResponse, PaymentStatus

logger = logging.getLogger(__name__)

API_BASE_URLS = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}


class PayPalApiError(Exception):
    """Non-2xx answer from the PayPal REST API."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"PayPal API returned {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class PayPalApiSession:
    """Authenticated access to the PayPal payments API.

    A client-credentials token is requested for every call; nothing is cached
    between calls.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        mode: str = "sandbox",
        timeout_seconds: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if mode not in API_BASE_URLS:
            raise ValueError(f"Unknown PayPal mode: {mode}")
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = API_BASE_URLS[mode]
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def _access_token(self, client: httpx.AsyncClient) -> str:
        resp = await client.post(
            "/v1/oauth2/token",
            data={"grant_type": "client_credentials"},
            auth=(self.client_id, self.client_secret),
            headers={"Accept": "application/json"},
        )
        if resp.status_code >= 400:
            raise PayPalApiError(resp.status_code, resp.text)
        token = resp.json().get("access_token")
        if not token:
            raise PayPalApiError(resp.status_code, "token response has no access_token")
        return token

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self._transport,
        ) as client:
            token = await self._access_token(client)
            resp = await client.request(
                method,
                path,
                json=json,
                headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"},
            )
        if resp.status_code >= 400:
            raise PayPalApiError(resp.status_code, resp.text)
        return resp.json()

    async def create_payment(self, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/v1/payments/payment", json=body)

    async def execute_payment(self, payment_id: str, payer_id: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/v1/payments/payment/{quote(payment_id, safe='')}/execute",
            json={"payer_id": payer_id},
        )

    async def get_payment(self, payment_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/v1/payments/payment/{quote(payment_id, safe='')}")


class PayPalProvider(PaymentProvider):
    """Creates, executes and fetches payments through PayPal."""

    name = "paypal"

    def __init__(self, config: CommonSettings, session: PayPalApiSession | None = None) -> None:
        self.return_url = config.paypal_return_url
        self.cancel_url = config.paypal_cancel_url
        self.session = session or PayPalApiSession(
            config.paypal_client_id,
            config.paypal_client_secret,
            mode=config.paypal_mode,
            timeout_seconds=config.provider_timeout_seconds,
        )

    def build_payment_body(self, request: PaymentRequest, total: str) -> dict[str, Any]:
        """PayPal v1 `sale` payment with one transaction and the configured redirect URLs."""

        return {
            "intent": "sale",
            "payer": {
                "payment_method": "paypal",
                "payer_info": {"email": request.user_email},
            },
            "transactions": [
                {
                    "amount": {"currency": request.currency, "total": total},
                    "description": request.description,
                }
            ],
            "redirect_urls": {"return_url": self.return_url, "cancel_url": self.cancel_url},
        }

    @staticmethod
    def extract_approval_url(payment: PaymentDetails) -> str:
        link = payment.find_link("approval_url")
        if link is None:
            raise PaymentError("No approval URL found in PayPal response")
        return link.href

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        logger.info(
            "Creating PayPal payment for user: %s, amount: %s %s",
            request.user_email,
            request.amount,
            request.currency,
        )
        total = self.check_amount(request)
        try:
            created = PaymentDetails.model_validate(
                await self.session.create_payment(self.build_payment_body(request, total))
            )
        except PayPalApiError as exc:
            logger.error("PayPal REST API error: %s", exc)
            raise PaymentError(f"Failed to create PayPal payment: {exc}", exc) from exc
        except Exception as exc:
            logger.exception("Unexpected error creating payment: %s", exc)
            raise PaymentError(f"Failed to create payment: {exc}", exc) from exc

        logger.info("Payment created successfully. Payment ID: %s", created.id)
        return PaymentResponse.success(created.id, self.extract_approval_url(created), request.order_id)

    async def execute_payment(self, payment_id: str, payer_id: str) -> PaymentResponse:
        logger.info("Executing PayPal payment. Payment ID: %s, Payer ID: %s", payment_id, payer_id)
        self.check_payment_id(payment_id, "PayPal payment")
        try:
            executed = PaymentDetails.model_validate(await self.session.execute_payment(payment_id, payer_id))
        except PayPalApiError as exc:
            logger.error("PayPal REST API error during execution: %s", exc)
            raise PaymentError(f"Failed to execute PayPal payment: {exc}", exc) from exc
        except Exception as exc:
            logger.exception("Unexpected error executing payment: %s", exc)
            raise PaymentError(f"Failed to execute payment: {exc}", exc) from exc

        logger.info("Payment executed. State: %s", executed.state)
        if resolve_execution_status(executed.state) is PaymentStatus.APPROVED:
            return PaymentResponse.approved(executed.id)
        return PaymentResponse.failed(f"Payment not approved. State: {executed.state}")

    async def get_payment_details(self, payment_id: str) -> PaymentDetails:
        logger.info("Fetching payment details for payment ID: %s", payment_id)
        try:
            payment = PaymentDetails.model_validate(await self.session.get_payment(payment_id))
        except Exception as exc:
            logger.error("Failed to get payment details: %s", exc)
            raise PaymentError(f"Failed to get payment details: {exc}", exc) from exc
        logger.info("Payment details retrieved. State: %s", payment.state)
        return payment
