"""HTTP surface for payment creation, provider callbacks and lookups.

Request shape is validated here before the orchestrator runs; `PaymentError`
raised by a provider is rendered as a `failed` PaymentResponse with status 400.
Importing this module builds nothing; `main` wires the configured provider.
"""

from time import perf_counter
from urllib.parse import urlencode
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from apmpay.common.config import CommonSettings, settings
from apmpay.common.errors import PaymentError
from apmpay.common.logging import logger, trace_id_ctx
from apmpay.common.metrics import http_request_duration_seconds, http_requests_total, metrics_response
from apmpay.common.tracing import instrument_app
from apmpay.services.payment.providers.mock_applepay import MOCK_AP_PAYER_ID, MockApplePayProvider
from apmpay.services.payment.providers.mock_paypal import MOCK_PAYER_ID, MockPayPalProvider
from apmpay.services.payment.schemas import PaymentCreateRequest, PaymentDetails, PaymentResponse
from apmpay.services.payment.service import PaymentOrchestrator


def _callback_redirect(return_url: str, payment_id: str, payer_id: str) -> RedirectResponse:
    query = urlencode({"paymentId": payment_id, "PayerID": payer_id})
    return RedirectResponse(url=f"{return_url}?{query}", status_code=302)


def create_app(orchestrator: PaymentOrchestrator, config: CommonSettings = settings) -> FastAPI:
    """Build the API around one orchestrator (and therefore one provider)."""

    app = FastAPI(title="APM Payments API")
    instrument_app(app)
    router = APIRouter(prefix="/api/payment")

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        """Record request count and latency, and bind the correlation id."""

        trace_id_ctx.set(request.headers.get("x-correlation-id") or str(uuid4()))
        start = perf_counter()
        route = request.url.path
        method = request.method
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            route_obj = request.scope.get("route")
            if route_obj is not None and getattr(route_obj, "path", None):
                route = route_obj.path
            return response
        finally:
            elapsed = max(0.0, perf_counter() - start)
            http_request_duration_seconds.labels(
                service=config.service_name,
                route=route,
                method=method,
            ).observe(elapsed)
            http_requests_total.labels(
                service=config.service_name,
                route=route,
                method=method,
                status_code=str(status_code),
            ).inc()

    @app.exception_handler(PaymentError)
    async def payment_error_handler(_: Request, exc: PaymentError) -> JSONResponse:
        logger.error("payment operation failed: %s", exc.message)
        body = PaymentResponse.failed(exc.message).model_dump(mode="json", by_alias=True)
        return JSONResponse(status_code=400, content=body)

    @router.post("/create", response_model=PaymentResponse, status_code=201)
    async def create_payment(req: PaymentCreateRequest):
        """Start a payment; the client redirects the user to `approvalUrl`."""

        logger.info("Received payment request from: %s", req.user_email)
        return await orchestrator.create_payment(req)

    @router.get("/success", response_model=PaymentResponse)
    async def payment_success(
        payment_id: str = Query(alias="paymentId"),
        payer_id: str = Query(alias="PayerID"),
    ):
        """Provider redirect after the user approved the payment."""

        logger.info("Payment success callback - Payment ID: %s, Payer ID: %s", payment_id, payer_id)
        return await orchestrator.execute_payment(payment_id, payer_id)

    @router.get("/cancel", response_model=PaymentResponse)
    def payment_cancel():
        """Provider redirect after the user cancelled; no provider call."""

        return orchestrator.cancel_payment()

    @router.get("/health", response_class=PlainTextResponse)
    def health():
        """Liveness check."""

        return "Payment service is running"

    @router.get("/{payment_id}", response_model=PaymentDetails)
    async def get_payment_details(payment_id: str):
        logger.info("Fetching payment details for: %s", payment_id)
        return await orchestrator.get_payment_details(payment_id)

    app.include_router(router)

    provider = orchestrator.provider
    if isinstance(provider, MockPayPalProvider):

        @app.get("/mock-paypal-approval")
        def mock_paypal_approval(token: str, payment_id: str = Query(alias="paymentId")):
            """Simulated PayPal approval page: approves and redirects back."""

            logger.info("MOCK: approval simulated token=%s payment_id=%s", token, payment_id)
            return _callback_redirect(provider.return_url, payment_id, MOCK_PAYER_ID)

    if isinstance(provider, MockApplePayProvider):

        @app.get("/mock-applepay-session")
        def mock_applepay_session(token: str, transaction_id: str = Query(alias="transactionId")):
            """Simulated Apple Pay sheet: authorizes and redirects back."""

            logger.info("MOCK APPLE PAY: sheet approved token=%s transaction_id=%s", token, transaction_id)
            return _callback_redirect(provider.return_url, transaction_id, MOCK_AP_PAYER_ID)

    @app.get("/metrics")
    def metrics():
        """Prometheus scrape endpoint."""

        return metrics_response()

    return app
