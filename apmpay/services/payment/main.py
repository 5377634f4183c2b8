"""Process entrypoint: `uvicorn apmpay.services.payment.main:app`.

Configures logging and tracing, then builds the one provider selected by
`PAYMENT_MODE`. Real PayPal mode without credentials fails here, at startup.
"""

from apmpay.common.config import settings
from apmpay.common.logging import configure_logging
from apmpay.common.startup import log_startup_config
from apmpay.common.tracing import setup_tracing
from apmpay.services.payment.api import create_app
from apmpay.services.payment.providers.factory import build_provider
from apmpay.services.payment.service import PaymentOrchestrator

configure_logging()
setup_tracing(settings)
log_startup_config(settings)

app = create_app(PaymentOrchestrator(build_provider(settings), settings.service_name), settings)
