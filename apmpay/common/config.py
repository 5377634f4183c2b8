"""Central environment-driven settings for the payment API.

Loaded once at process startup (see `.env.example`). The active provider is
chosen by `PAYMENT_MODE`; switching providers requires a restart.
"""

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentMode(str, Enum):
    """Mutually exclusive provider profiles."""

    PAYPAL = "paypal"
    MOCK_PAYPAL = "mock"
    APPLEPAY = "applepay"
    MOCK_APPLEPAY = "mock-applepay"


class CommonSettings(BaseSettings):
    """Typed, read-only view of runtime configuration from environment variables."""

    service_name: str = "payment-api"
    log_level: str = "INFO"
    payment_mode: PaymentMode = PaymentMode.MOCK_PAYPAL
    public_base_url: str = "http://localhost:8080"
    paypal_mode: str = "sandbox"
    paypal_client_id: str = ""
    paypal_client_secret: str = ""
    paypal_return_url: str = "http://localhost:8080/api/payment/success"
    paypal_cancel_url: str = "http://localhost:8080/api/payment/cancel"
    applepay_merchant_id: str = "merchant.com.example"
    applepay_merchant_name: str = "APM Payment Demo"
    applepay_return_url: str = "http://localhost:8080/api/payment/success"
    applepay_cancel_url: str = "http://localhost:8080/api/payment/cancel"
    applepay_session_url: str = "https://apple-pay-gateway.apple.com/paymentservices/startSession"
    provider_timeout_seconds: float = 20.0
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    tracing_enabled: bool = False
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)


settings = CommonSettings()
