"""Startup configuration logging."""

from apmpay.common.startup import redacted_settings


def test_credentials_are_masked(config):
    safe = redacted_settings(config)

    assert safe["paypal_client_id"] == "<redacted>"
    assert safe["paypal_client_secret"] == "<redacted>"
    assert safe["payment_mode"] == "mock"
    assert safe["public_base_url"] == "http://localhost:8080"


def test_unset_credentials_are_reported_as_unset(config):
    blank = config.model_copy(update={"paypal_client_id": "", "paypal_client_secret": ""})

    safe = redacted_settings(blank)

    assert safe["paypal_client_id"] == "<unset>"
    assert safe["paypal_client_secret"] == "<unset>"
