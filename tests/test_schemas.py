"""Request validation, amount formatting and response constructor contracts."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from apmpay.services.payment.schemas import (
    Link,
    PaymentCreateRequest,
    PaymentDetails,
    PaymentResponse,
    PaymentStatus,
    format_amount,
)


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        ("9.999", "10.00"),
        ("10.005", "10.01"),
        ("10.004", "10.00"),
        ("0.01", "0.01"),
        ("7", "7.00"),
    ],
)
def test_format_amount_rounds_half_up_to_cents(amount, expected):
    assert format_amount(Decimal(amount)) == expected


def test_create_request_accepts_camel_case_payload():
    req = PaymentCreateRequest.model_validate(
        {
            "userEmail": "a@b.com",
            "description": "widget",
            "amount": "9.999",
            "currency": "USD",
            "orderId": "ORDER-1",
        }
    )

    assert req.user_email == "a@b.com"
    assert req.amount == Decimal("9.999")
    assert req.order_id == "ORDER-1"
    assert req.metadata is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"userEmail": "not-an-email"},
        {"description": "   "},
        {"currency": ""},
        {"amount": "0"},
        {"amount": "0.009"},
        {"amount": "-1"},
    ],
)
def test_create_request_rejects_invalid_shapes(overrides):
    payload = {"userEmail": "a@b.com", "description": "widget", "amount": "10", "currency": "USD"}
    payload.update(overrides)

    with pytest.raises(ValidationError):
        PaymentCreateRequest.model_validate(payload)


def test_request_is_immutable(make_request):
    req = make_request()

    with pytest.raises(ValidationError):
        req.amount = Decimal("1")


def test_success_response_carries_approval_url():
    resp = PaymentResponse.success("MOCK-PAY-1", "http://approve", "ORDER-1")

    assert resp.status is PaymentStatus.CREATED
    assert resp.approval_url == "http://approve"
    assert resp.payment_id == "MOCK-PAY-1"
    assert resp.order_id == "ORDER-1"


def test_approved_response_has_no_approval_url_or_order():
    resp = PaymentResponse.approved("MOCK-PAY-1")

    assert resp.status is PaymentStatus.APPROVED
    assert resp.approval_url is None
    assert resp.order_id is None


def test_failed_response_never_has_approval_url():
    resp = PaymentResponse.failed("Payment not approved. State: failed")

    assert resp.status is PaymentStatus.FAILED
    assert resp.approval_url is None
    assert resp.payment_id is None
    assert resp.message == "Payment not approved. State: failed"


def test_cancelled_response_has_no_payment_id():
    resp = PaymentResponse.cancelled()

    assert resp.status is PaymentStatus.CANCELLED
    assert resp.payment_id is None
    assert resp.message == "Payment was cancelled by user."


def test_response_serializes_with_camel_case_aliases():
    body = PaymentResponse.success("MOCK-PAY-1", "http://approve", None).model_dump(mode="json", by_alias=True)

    assert body["paymentId"] == "MOCK-PAY-1"
    assert body["approvalUrl"] == "http://approve"
    assert body["status"] == "created"
    assert "orderId" in body


def test_details_find_link_returns_first_match():
    details = PaymentDetails(
        id="PAYID-1",
        state="created",
        links=[
            Link(href="http://self", rel="self", method="GET"),
            Link(href="http://approve", rel="approval_url", method="REDIRECT"),
        ],
    )

    assert details.find_link("approval_url").href == "http://approve"
    assert details.find_link("execute") is None
