"""HTTP boundary: routes, status codes, validation and error rendering."""

import sys

import pytest
from fastapi.testclient import TestClient

from apmpay.services.payment.api import create_app
from apmpay.services.payment.providers.applepay import ApplePayProvider
from apmpay.services.payment.providers.mock_applepay import MockApplePayProvider
from apmpay.services.payment.providers.mock_paypal import MockPayPalProvider
from apmpay.services.payment.service import PaymentOrchestrator

VALID_BODY = {
    "userEmail": "a@b.com",
    "description": "widget",
    "amount": 9.99,
    "currency": "USD",
    "orderId": "ORDER-1",
}


def client_for(provider, config):
    return TestClient(create_app(PaymentOrchestrator(provider, config.service_name), config))


@pytest.fixture
def paypal_client(config):
    return client_for(MockPayPalProvider(config), config)


@pytest.fixture
def applepay_client(config):
    return client_for(MockApplePayProvider(config), config)


def test_create_returns_201_with_camel_case_body(paypal_client):
    resp = paypal_client.post("/api/payment/create", json=VALID_BODY)

    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "created"
    assert body["paymentId"].startswith("MOCK-PAY-")
    assert body["approvalUrl"].startswith("http://localhost:8080/mock-paypal-approval")
    assert body["orderId"] == "ORDER-1"


@pytest.mark.parametrize(
    "overrides",
    [
        {"userEmail": "nope"},
        {"description": ""},
        {"amount": 0},
        {"amount": -3},
        {"currency": " "},
    ],
)
def test_create_rejects_malformed_request(paypal_client, overrides):
    resp = paypal_client.post("/api/payment/create", json={**VALID_BODY, **overrides})

    assert resp.status_code == 422


def test_success_callback_executes_payment(paypal_client):
    payment_id = paypal_client.post("/api/payment/create", json=VALID_BODY).json()["paymentId"]

    resp = paypal_client.get("/api/payment/success", params={"paymentId": payment_id, "PayerID": "MOCK-PAYER-123"})

    assert resp.status_code == 200
    assert resp.json() == {
        "paymentId": payment_id,
        "status": "approved",
        "approvalUrl": None,
        "message": "Payment completed successfully.",
        "orderId": None,
    }


def test_success_callback_requires_both_params(paypal_client):
    resp = paypal_client.get("/api/payment/success", params={"paymentId": "MOCK-PAY-1234ABCD"})

    assert resp.status_code == 422


def test_payment_error_renders_failed_response(paypal_client):
    resp = paypal_client.get("/api/payment/success", params={"paymentId": "AP-MOCK-1234ABCD", "PayerID": "X"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == "failed"
    assert body["paymentId"] is None
    assert body["approvalUrl"] is None
    assert body["message"] == "Invalid mock payment ID format"


def test_cancel_returns_cancelled(paypal_client):
    resp = paypal_client.get("/api/payment/cancel")

    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"
    assert resp.json()["paymentId"] is None


def test_health_is_plain_text(paypal_client):
    resp = paypal_client.get("/api/payment/health")

    assert resp.status_code == 200
    assert resp.text == "Payment service is running"


def test_details_snapshot(paypal_client):
    resp = paypal_client.get("/api/payment/MOCK-PAY-ABCD1234")

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == "MOCK-PAY-ABCD1234"
    assert body["state"] == "approved"
    assert sorted(link["rel"] for link in body["links"]) == ["approval_url", "self"]


def test_simulated_paypal_approval_redirects_to_success(paypal_client, config):
    payment_id = paypal_client.post("/api/payment/create", json=VALID_BODY).json()["paymentId"]

    resp = paypal_client.get(
        "/mock-paypal-approval",
        params={"token": "MOCK-TOKEN-1", "paymentId": payment_id},
        follow_redirects=False,
    )

    assert resp.status_code == 302
    assert resp.headers["location"] == (
        f"{config.paypal_return_url}?paymentId={payment_id}&PayerID=MOCK-PAYER-123"
    )


def test_simulated_applepay_session_redirects_to_success(applepay_client, config):
    payment_id = applepay_client.post("/api/payment/create", json=VALID_BODY).json()["paymentId"]

    resp = applepay_client.get(
        "/mock-applepay-session",
        params={"token": "MOCK-AP-TOKEN-1", "transactionId": payment_id},
        follow_redirects=False,
    )

    assert resp.status_code == 302
    assert resp.headers["location"].endswith(f"paymentId={payment_id}&PayerID=MOCK-AP-PAYER-123")


def test_simulated_approval_routes_only_exist_for_mock_providers(config):
    client = client_for(ApplePayProvider(config), config)

    assert client.get("/mock-paypal-approval", params={"token": "t", "paymentId": "p"}).status_code == 404
    assert client.get("/mock-applepay-session", params={"token": "t", "transactionId": "p"}).status_code == 404


def test_metrics_endpoint_exposes_provider_counters(paypal_client):
    paypal_client.post("/api/payment/create", json=VALID_BODY)

    resp = paypal_client.get("/metrics")

    assert resp.status_code == 200
    assert "provider_operations_total" in resp.text
    assert "http_requests_total" in resp.text


def test_amount_too_large_to_scale_renders_failed_response(paypal_client):
    resp = paypal_client.post("/api/payment/create", json={**VALID_BODY, "amount": "1E+27"})

    assert resp.status_code == 400
    assert resp.json()["status"] == "failed"
    assert resp.json()["message"] == "Invalid amount"


def test_app_factory_module_builds_no_provider_on_import():
    import apmpay.services.payment.api as api_module

    assert not hasattr(api_module, "app")
    assert "apmpay.services.payment.main" not in sys.modules
