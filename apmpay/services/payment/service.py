"""Payment lifecycle orchestration.

Stateless pass-through to the active provider: create, execute after the
out-of-band approval, fetch details. Provider failures propagate as
`PaymentError`; turning them into a `failed` response is the HTTP layer's job.
"""

from contextlib import contextmanager
from typing import Iterator

from apmpay.common.errors import PaymentError
from apmpay.common.logging import logger, payment_id_ctx
from apmpay.common.metrics import (
    payment_cancelled_total,
    provider_latency_seconds,
    provider_operations_total,
)
from apmpay.services.payment.providers.base import PaymentProvider
from apmpay.services.payment.schemas import PaymentDetails, PaymentRequest, PaymentResponse


class PaymentOrchestrator:
    """Delegates each lifecycle phase to one provider chosen at startup."""

    def __init__(self, provider: PaymentProvider, service_name: str = "payment-api") -> None:
        self.provider = provider
        self.service_name = service_name

    @contextmanager
    def _observe(self, operation: str) -> Iterator[None]:
        """Record latency and outcome of one provider call."""

        labels = {"service": self.service_name, "provider": self.provider.name, "operation": operation}
        try:
            with provider_latency_seconds.labels(**labels).time():
                yield
        except PaymentError:
            provider_operations_total.labels(**labels, outcome="error").inc()
            raise
        provider_operations_total.labels(**labels, outcome="ok").inc()

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        """Start a payment; the response carries the approval URL to redirect to."""

        with self._observe("create"):
            response = await self.provider.create_payment(request)
        payment_id_ctx.set(response.payment_id or "")
        logger.info("payment created status=%s order_id=%s", response.status.value, request.order_id)
        return response

    async def execute_payment(self, payment_id: str, payer_id: str) -> PaymentResponse:
        """Finalize a payment after the user approved it with the provider."""

        payment_id_ctx.set(payment_id)
        with self._observe("execute"):
            response = await self.provider.execute_payment(payment_id, payer_id)
        logger.info("payment executed status=%s", response.status.value)
        return response

    async def get_payment_details(self, payment_id: str) -> PaymentDetails:
        payment_id_ctx.set(payment_id)
        with self._observe("details"):
            return await self.provider.get_payment_details(payment_id)

    def cancel_payment(self) -> PaymentResponse:
        """User backed out at the provider; nothing is sent to the provider."""

        payment_cancelled_total.labels(service=self.service_name).inc()
        logger.info("payment cancelled by user")
        return PaymentResponse.cancelled()
