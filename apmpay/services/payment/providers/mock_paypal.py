"""Simulated PayPal provider for local development without credentials.

No network calls are made. Approval is simulated by the local
`/mock-paypal-approval` endpoint, or by calling the success endpoint directly.
"""

import logging

from apmpay.common.config import CommonSettings
from apmpay.common.errors import PaymentError
from apmpay.services.payment.providers.base import MOCK_PAYPAL_PREFIX, PaymentProvider, failures_as, short_token
from apmpay.services.payment.schemas import (
    Amount,
    Link,
    Payer,
    PayerInfo,
    PaymentDetails,
    PaymentRequest,
    PaymentResponse,
    Transaction,
)

logger = logging.getLogger(__name__)

MOCK_PAYER_ID = "MOCK-PAYER-123"


class MockPayPalProvider(PaymentProvider):
    """PayPal stand-in: `MOCK-PAY-` ids, always-approved execution."""

    name = "mock-paypal"
    id_prefix = MOCK_PAYPAL_PREFIX

    def __init__(self, config: CommonSettings) -> None:
        self.base_url = config.public_base_url.rstrip("/")
        self.return_url = config.paypal_return_url
        self.cancel_url = config.paypal_cancel_url

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        logger.info(
            "MOCK: Creating PayPal payment for user: %s, amount: %s %s",
            request.user_email,
            request.amount,
            request.currency,
        )
        with failures_as("create mock payment"):
            self.check_amount(request)

            payment_id = self.mint_payment_id()
            token = f"MOCK-TOKEN-{short_token()}"
            approval_url = f"{self.base_url}/mock-paypal-approval?token={token}&paymentId={payment_id}"

        logger.info("MOCK: Payment created successfully. Payment ID: %s", payment_id)
        logger.info("MOCK: Approval URL: %s", approval_url)
        logger.info(
            "MOCK: To simulate approval call: GET %s?paymentId=%s&PayerID=%s",
            self.return_url,
            payment_id,
            MOCK_PAYER_ID,
        )
        return PaymentResponse.success(payment_id, approval_url, request.order_id)

    async def execute_payment(self, payment_id: str, payer_id: str) -> PaymentResponse:
        logger.info("MOCK: Executing PayPal payment. Payment ID: %s, Payer ID: %s", payment_id, payer_id)
        with failures_as("execute mock payment"):
            self.check_payment_id(payment_id, "mock payment")
        logger.info("MOCK: Payment executed successfully. State: approved")
        return PaymentResponse.approved(payment_id)

    async def get_payment_details(self, payment_id: str) -> PaymentDetails:
        """Fabricate a consistent snapshot for any id, created here or not."""

        logger.info("MOCK: Fetching payment details for payment ID: %s", payment_id)
        if not payment_id:
            raise PaymentError("Failed to get mock payment details: empty payment ID")
        with failures_as("get mock payment details"):
            return self.fabricate_details(payment_id)

    def fabricate_details(self, payment_id: str) -> PaymentDetails:
        return PaymentDetails(
            id=payment_id,
            state="approved",
            intent="sale",
            create_time="2025-12-29T10:00:00Z",
            update_time="2025-12-29T10:01:00Z",
            payer=Payer(
                payment_method="paypal",
                status="VERIFIED",
                payer_info=PayerInfo(
                    email="mock-user@example.com",
                    first_name="Mock",
                    last_name="User",
                    payer_id=MOCK_PAYER_ID,
                ),
            ),
            transactions=[
                Transaction(
                    amount=Amount(currency="USD", total="10.00"),
                    description="Mock payment transaction",
                )
            ],
            links=[
                Link(
                    href=f"{self.base_url}/mock-paypal-approval?token=MOCK-TOKEN",
                    rel="approval_url",
                    method="REDIRECT",
                ),
                Link(href=f"{self.base_url}/api/payment/{payment_id}", rel="self", method="GET"),
            ],
        )
