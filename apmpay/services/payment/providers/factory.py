"""Selects the single active provider from configuration at startup."""

from apmpay.common.config import CommonSettings, PaymentMode
from apmpay.common.logging import logger
from apmpay.services.payment.providers.applepay import ApplePayProvider
from apmpay.services.payment.providers.base import PaymentProvider
from apmpay.services.payment.providers.mock_applepay import MockApplePayProvider
from apmpay.services.payment.providers.mock_paypal import MockPayPalProvider
from apmpay.services.payment.providers.paypal import PayPalProvider


def build_provider(config: CommonSettings) -> PaymentProvider:
    """Construct the provider for `config.payment_mode`.

    Raises `ValueError` when real PayPal is selected without credentials.
    """

    mode = config.payment_mode
    if mode is PaymentMode.PAYPAL:
        if not config.paypal_client_id or not config.paypal_client_secret:
            raise ValueError("PAYPAL_CLIENT_ID and PAYPAL_CLIENT_SECRET must be set for paypal mode.")
        provider: PaymentProvider = PayPalProvider(config)
    elif mode is PaymentMode.MOCK_PAYPAL:
        logger.warning("MOCK MODE ENABLED: no real PayPal API calls will be made")
        provider = MockPayPalProvider(config)
    elif mode is PaymentMode.APPLEPAY:
        provider = ApplePayProvider(config)
    elif mode is PaymentMode.MOCK_APPLEPAY:
        logger.warning("MOCK MODE ENABLED: Apple Pay payments will be simulated locally")
        provider = MockApplePayProvider(config)
    else:
        raise ValueError(f"Unknown payment mode: {mode}")
    logger.info("payment provider selected mode=%s provider=%s", mode.value, provider.name)
    return provider
