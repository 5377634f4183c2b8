"""Request/response schemas crossing the payment API boundary.

`PaymentRequest`/`PaymentResponse` use camelCase JSON aliases so existing
clients (`userEmail`, `paymentId`, `approvalUrl`) keep working. The details
snapshot keeps PayPal's snake_case field names and is shared by every provider.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

CENTS = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    """Scale to two places rounding half-up, as provider APIs expect (9.999 -> "10.00")."""

    return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


class PaymentStatus(str, Enum):
    """Closed set of statuses a `PaymentResponse` can carry."""

    CREATED = "created"
    APPROVED = "approved"
    FAILED = "failed"
    CANCELLED = "cancelled"


class PaymentRequest(BaseModel):
    """Immutable payment initiation request handed to a provider."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    user_email: EmailStr
    description: str
    amount: Decimal
    currency: str
    order_id: str | None = None
    metadata: str | None = None

    @field_validator("description", "currency")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class PaymentCreateRequest(PaymentRequest):
    """Payload accepted by `POST /api/payment/create`."""

    amount: Decimal = Field(ge=CENTS)


class PaymentResponse(BaseModel):
    """Outcome of a payment operation.

    Build instances through the named constructors only; each status has a
    fixed set of populated fields.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    payment_id: str | None = None
    status: PaymentStatus
    approval_url: str | None = None
    message: str
    order_id: str | None = None

    @classmethod
    def success(cls, payment_id: str, approval_url: str, order_id: str | None) -> "PaymentResponse":
        return cls(
            payment_id=payment_id,
            status=PaymentStatus.CREATED,
            approval_url=approval_url,
            message="Payment created successfully. Please redirect to the provider for approval.",
            order_id=order_id,
        )

    @classmethod
    def approved(cls, payment_id: str, order_id: str | None = None) -> "PaymentResponse":
        return cls(
            payment_id=payment_id,
            status=PaymentStatus.APPROVED,
            message="Payment completed successfully.",
            order_id=order_id,
        )

    @classmethod
    def failed(cls, message: str) -> "PaymentResponse":
        return cls(status=PaymentStatus.FAILED, message=message)

    @classmethod
    def cancelled(cls) -> "PaymentResponse":
        return cls(status=PaymentStatus.CANCELLED, message="Payment was cancelled by user.")


# ── Details snapshot ─────────────────────────────────────────────────


class Amount(BaseModel):
    currency: str
    total: str


class Transaction(BaseModel):
    amount: Amount
    description: str | None = None


class PayerInfo(BaseModel):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    payer_id: str | None = None


class Payer(BaseModel):
    payment_method: str
    status: str | None = None
    payer_info: PayerInfo | None = None


class Link(BaseModel):
    href: str
    rel: str
    method: str | None = None


class PaymentDetails(BaseModel):
    """Read-only view of a payment as reported by its provider."""

    id: str
    state: str
    intent: str | None = None
    payer: Payer | None = None
    transactions: list[Transaction] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)
    create_time: str | None = None
    update_time: str | None = None

    def find_link(self, rel: str) -> Link | None:
        """Return the first hypermedia link with the given `rel`, if any."""

        for link in self.links:
            if link.rel == rel:
                return link
        return None
