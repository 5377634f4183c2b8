"""Apple Pay provider.

Merchant-session negotiation and payment-token decryption are not performed
here. They are the two extension points a full integration overrides:

- `validate_merchant_session`: validate the merchant with Apple and open a
  payment session before the payment sheet is shown.
- `process_payment_token`: decrypt and verify the token returned by Apple Pay
  JS, charge it through the payment processor, and report the resulting state.
"""

import logging

from apmpay.common.config import CommonSettings
from apmpay.common.state_machine import APPROVED_STATE, resolve_execution_status
from apmpay.services.payment.providers.base import APPLEPAY_PREFIX, PaymentProvider, failures_as
from apmpay.services.payment.schemas import (
    Payer,
    PaymentDetails,
    PaymentRequest,
    PaymentResponse,
    PaymentStatus,
)

logger = logging.getLogger(__name__)


class ApplePayProvider(PaymentProvider):
    """Apple Pay lifecycle with `AP-TXN-` transaction ids."""

    name = "applepay"
    id_prefix = APPLEPAY_PREFIX

    def __init__(self, config: CommonSettings) -> None:
        self.merchant_id = config.applepay_merchant_id
        self.session_url = config.applepay_session_url
        self.return_url = config.applepay_return_url
        self.cancel_url = config.applepay_cancel_url

    async def validate_merchant_session(self, request: PaymentRequest) -> None:
        """Validate the merchant with Apple before the payment sheet is shown."""

        logger.info("APPLE PAY: merchant session validation skipped for merchant %s", self.merchant_id)

    async def process_payment_token(self, payment_id: str, payment_token: str) -> str:
        """Decrypt the Apple Pay token, charge it, and return the resulting state."""

        logger.info("APPLE PAY: token processing skipped for transaction %s", payment_id)
        return APPROVED_STATE

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        logger.info(
            "APPLE PAY: Creating payment for user: %s, amount: %s %s",
            request.user_email,
            request.amount,
            request.currency,
        )
        with failures_as("create Apple Pay payment"):
            self.check_amount(request)
            await self.validate_merchant_session(request)

            transaction_id = self.mint_payment_id()
            logger.info("APPLE PAY: Payment session created. Transaction ID: %s", transaction_id)
            logger.info("APPLE PAY: Session URL: %s", self.session_url)
            return PaymentResponse.success(transaction_id, self.session_url, request.order_id)

    async def execute_payment(self, payment_id: str, payer_id: str) -> PaymentResponse:
        logger.info("APPLE PAY: Processing payment. Transaction ID: %s", payment_id)
        with failures_as("process Apple Pay payment"):
            self.check_payment_id(payment_id, "Apple Pay transaction")
            state = await self.process_payment_token(payment_id, payer_id)

        if resolve_execution_status(state) is PaymentStatus.APPROVED:
            logger.info("APPLE PAY: Payment processed successfully. State: %s", state)
            return PaymentResponse.approved(payment_id)
        logger.warning("APPLE PAY: Payment not approved. State: %s", state)
        return PaymentResponse.failed(f"Payment not approved. State: {state}")

    async def get_payment_details(self, payment_id: str) -> PaymentDetails:
        logger.info("APPLE PAY: Fetching payment details for transaction ID: %s", payment_id)
        with failures_as("get Apple Pay payment details"):
            self.check_payment_id(payment_id, "Apple Pay transaction")
            # TODO: query the payment processor once process_payment_token charges through one.
            return PaymentDetails(
                id=payment_id,
                state=APPROVED_STATE,
                intent="sale",
                payer=Payer(payment_method="apple_pay"),
            )
