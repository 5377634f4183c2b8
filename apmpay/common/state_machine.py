"""Mapping from provider lifecycle states to the closed response statuses."""

from apmpay.services.payment.schemas import PaymentStatus

# Provider state reported after a successful execute round-trip.
APPROVED_STATE = "approved"


def resolve_execution_status(state: str | None) -> PaymentStatus:
    """Return `APPROVED` for the provider's approved state, `FAILED` for anything else."""

    if state == APPROVED_STATE:
        return PaymentStatus.APPROVED
    return PaymentStatus.FAILED
