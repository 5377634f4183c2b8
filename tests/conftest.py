"""Shared fixtures: explicit settings and request builders."""

from decimal import Decimal

import pytest

from apmpay.common.config import CommonSettings, PaymentMode
from apmpay.services.payment.schemas import PaymentRequest


@pytest.fixture
def config():
    """Settings independent of the developer's environment."""

    return CommonSettings(
        service_name="payment-api-test",
        payment_mode=PaymentMode.MOCK_PAYPAL,
        public_base_url="http://localhost:8080",
        paypal_client_id="client-id",
        paypal_client_secret="client-secret",
        paypal_return_url="http://localhost:8080/api/payment/success",
        paypal_cancel_url="http://localhost:8080/api/payment/cancel",
        applepay_return_url="http://localhost:8080/api/payment/success",
        applepay_cancel_url="http://localhost:8080/api/payment/cancel",
    )


@pytest.fixture
def make_request():
    """Build a core PaymentRequest; amount is not range-checked at this level."""

    def _make(amount="25.00", **overrides):
        fields = {
            "user_email": "a@b.com",
            "description": "widget",
            "amount": Decimal(amount),
            "currency": "USD",
        }
        fields.update(overrides)
        return PaymentRequest(**fields)

    return _make
