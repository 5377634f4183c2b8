"""Simulated Apple Pay provider for local development and tests."""

import logging

from apmpay.common.config import CommonSettings
from apmpay.services.payment.providers.base import MOCK_APPLEPAY_PREFIX, PaymentProvider, failures_as, short_token
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

MOCK_AP_PAYER_ID = "MOCK-AP-PAYER-123"


class MockApplePayProvider(PaymentProvider):
    """Apple Pay stand-in: `AP-MOCK-` ids, always-approved execution."""

    name = "mock-applepay"
    id_prefix = MOCK_APPLEPAY_PREFIX

    def __init__(self, config: CommonSettings) -> None:
        self.base_url = config.public_base_url.rstrip("/")
        self.merchant_name = config.applepay_merchant_name
        self.return_url = config.applepay_return_url
        self.cancel_url = config.applepay_cancel_url

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        logger.info(
            "MOCK APPLE PAY: Creating payment for user: %s, amount: %s %s",
            request.user_email,
            request.amount,
            request.currency,
        )
        with failures_as("create mock Apple Pay payment"):
            self.check_amount(request)

            transaction_id = self.mint_payment_id()
            session_url = (
                f"{self.base_url}/mock-applepay-session"
                f"?token=MOCK-AP-TOKEN-{short_token()}&transactionId={transaction_id}"
            )
        logger.info("MOCK APPLE PAY: Transaction ID: %s", transaction_id)
        logger.info("MOCK APPLE PAY: Session URL: %s", session_url)
        logger.info(
            "MOCK APPLE PAY: To simulate approval call: GET %s?paymentId=%s&PayerID=%s",
            self.return_url,
            transaction_id,
            MOCK_AP_PAYER_ID,
        )
        return PaymentResponse.success(transaction_id, session_url, request.order_id)

    async def execute_payment(self, payment_id: str, payer_id: str) -> PaymentResponse:
        logger.info("MOCK APPLE PAY: Processing payment. Transaction ID: %s, Token: %s", payment_id, payer_id)
        with failures_as("process mock Apple Pay payment"):
            self.check_payment_id(payment_id, "mock Apple Pay transaction")
        logger.info("MOCK APPLE PAY: Payment authorized successfully")
        return PaymentResponse.approved(payment_id)

    async def get_payment_details(self, payment_id: str) -> PaymentDetails:
        logger.info("MOCK APPLE PAY: Fetching payment details for transaction ID: %s", payment_id)
        with failures_as("get mock Apple Pay payment details"):
            self.check_payment_id(payment_id, "mock Apple Pay transaction")
            return self.fabricate_details(payment_id)

    def fabricate_details(self, payment_id: str) -> PaymentDetails:
        return PaymentDetails(
            id=payment_id,
            state="approved",
            intent="sale",
            payer=Payer(
                payment_method="apple_pay",
                payer_info=PayerInfo(
                    email="mock-applepay-user@example.com",
                    first_name="Mock",
                    last_name="Apple Pay User",
                    payer_id=MOCK_AP_PAYER_ID,
                ),
            ),
            transactions=[
                Transaction(
                    amount=Amount(currency="USD", total="100.00"),
                    description="Mock Apple Pay Transaction",
                )
            ],
            links=[Link(href=f"{self.base_url}/api/payment/{payment_id}", rel="self", method="GET")],
        )

    def simulate_payment_sheet(self, request: PaymentRequest) -> str:
        """Text rendering of the sheet Apple Pay would show for this request."""

        return (
            "Mock Apple Pay sheet would be displayed with:\n"
            f"- Merchant: {self.merchant_name}\n"
            f"- Amount: {request.amount} {request.currency}\n"
            f"- Description: {request.description}\n"
            "- User can approve or cancel using Face ID/Touch ID"
        )
