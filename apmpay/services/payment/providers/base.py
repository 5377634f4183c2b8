"""Provider capability every payment backend implements.

Providers own no mutable state beyond the configuration handed to them at
construction, so one instance serves concurrent requests without locking.
Approval happens out of band: `create_payment` returns a redirect target and
`execute_payment` is a later, independent call correlated by payment id.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Iterator
from uuid import uuid4

from apmpay.common.errors import PaymentError
from apmpay.services.payment.schemas import (
    PaymentDetails,
    PaymentRequest,
    PaymentResponse,
    format_amount,
)

MOCK_PAYPAL_PREFIX = "MOCK-PAY-"
APPLEPAY_PREFIX = "AP-TXN-"
MOCK_APPLEPAY_PREFIX = "AP-MOCK-"
# Prefixes minted by this service; real PayPal ids are opaque and never carry one.
KNOWN_PREFIXES = (MOCK_PAYPAL_PREFIX, APPLEPAY_PREFIX, MOCK_APPLEPAY_PREFIX)

logger = logging.getLogger(__name__)


def short_token() -> str:
    """Eight upper-case hex characters used for ids and simulated tokens."""

    return uuid4().hex[:8].upper()


@contextmanager
def failures_as(action: str) -> Iterator[None]:
    """Pass `PaymentError` through; wrap any other exception as `Failed to <action>: ...`."""

    try:
        yield
    except PaymentError:
        raise
    except Exception as exc:
        logger.exception("Failed to %s", action)
        raise PaymentError(f"Failed to {action}: {exc}", exc) from exc


class PaymentProvider(ABC):
    """Create / execute / fetch contract shared by real and simulated backends."""

    name: str
    id_prefix: str | None = None

    @abstractmethod
    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        """Start a payment and return a `created` response with an approval URL."""

    @abstractmethod
    async def execute_payment(self, payment_id: str, payer_id: str) -> PaymentResponse:
        """Finalize an approved payment; `approved` or `failed` by provider state."""

    @abstractmethod
    async def get_payment_details(self, payment_id: str) -> PaymentDetails:
        """Return the provider's current snapshot of a payment."""

    def mint_payment_id(self) -> str:
        return f"{self.id_prefix}{short_token()}"

    @staticmethod
    def check_amount(request: PaymentRequest) -> str:
        """Return the provider-formatted amount, rejecting non-positive values."""

        if request.amount is None:
            raise PaymentError("Invalid amount")
        # quantize and ordering both signal InvalidOperation for NaN or too many digits
        try:
            total = format_amount(request.amount)
            positive = Decimal(total) > 0
        except InvalidOperation as exc:
            raise PaymentError("Invalid amount", exc) from exc
        if not positive:
            raise PaymentError("Invalid amount")
        return total

    def check_payment_id(self, payment_id: str, label: str) -> None:
        """Reject ids that were not minted by this provider/mode."""

        if not payment_id:
            raise PaymentError(f"Invalid {label} ID format")
        if self.id_prefix is not None:
            if not payment_id.startswith(self.id_prefix):
                raise PaymentError(f"Invalid {label} ID format")
        elif payment_id.startswith(KNOWN_PREFIXES):
            raise PaymentError(f"Invalid {label} ID format")
