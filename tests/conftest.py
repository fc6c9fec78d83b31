"""
Shared fixtures for all tests in the project.
"""

import hashlib
import hmac
import json
import os
import sys
from typing import Any, Callable, Dict

import pytest

# Add the project root to the path so that we can import from the package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from thor_webhooks.schemas.thor_event import ThorWebhookEvent  # noqa: E402

WEBHOOK_SECRET = "whsec_test"

SAMPLE_EVENT_BODY = (
    b'{"id":"whr_1","object":"event","created":1700000000,'
    b'"idempotency_key":"11111111-1111-1111-1111-111111111111",'
    b'"data":{"object":{"id":"order_1"}},"type":"order.created"}'
)


def _hmac_hex(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


@pytest.fixture
def webhook_secret() -> str:
    """Test webhook secret."""
    return WEBHOOK_SECRET


@pytest.fixture
def sample_body() -> bytes:
    """Raw body of an order.created delivery."""
    return SAMPLE_EVENT_BODY


@pytest.fixture
def sign_simple() -> Callable[[bytes, str], str]:
    """Build a sha256=<hex> header."""

    def _sign(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
        return "sha256=" + _hmac_hex(secret, body)

    return _sign


@pytest.fixture
def sign_timestamped() -> Callable[[bytes, int, str], str]:
    """Build a t=<unix>,v1=<hex> header."""

    def _sign(body: bytes, timestamp: int, secret: str = WEBHOOK_SECRET) -> str:
        return f"t={timestamp},v1=" + _hmac_hex(secret, f"{timestamp}.".encode() + body)

    return _sign


@pytest.fixture
def make_event_payload() -> Callable[..., Dict[str, Any]]:
    """Build an event document, overriding top-level fields as needed."""

    def _make(**overrides: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": "whr_01kc4gj71aexas8x0m022enwth",
            "object": "event",
            "created": 1700000000,
            "idempotency_key": "0b7f4c2e-8d1a-4f3b-9a65-2f1c7e9d3b10",
            "data": {"object": {"id": "order_01kc4gj6smfg9tan4k99e0zrb8"}},
            "type": "order.created",
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def make_event(make_event_payload) -> Callable[..., ThorWebhookEvent]:
    """Build a decoded event."""

    def _make(**overrides: Any) -> ThorWebhookEvent:
        return ThorWebhookEvent.model_validate_json(json.dumps(make_event_payload(**overrides)))

    return _make


@pytest.fixture
def order_data() -> Dict[str, Any]:
    """Admin API order document as returned under data.order."""
    return {
        "id": "order_1",
        "orderNumber": 1042,
        "paymentState": "paid",
        "shipmentState": "pending",
        "customer": {"email": "jane@example.com", "firstName": "Jane", "lastName": "Doe"},
        "shippingAddress": {
            "firstName": "Jane",
            "lastName": "Doe",
            "address1": "Nørregade 1",
            "city": "København",
            "postalCode": "1165",
            "countryCode": "DK",
        },
        "billingAddress": None,
        "lineItems": {
            "nodes": [
                {
                    "productName": "Linen Shirt",
                    "quantity": 2,
                    "variant": {"image": {"src": "https://cdn.example.com/shirt.jpg"}},
                    "unitPrice": {"value": {"centAmount": 49900, "currencyCode": "DKK"}},
                },
                {
                    "productName": "Gift Card",
                    "quantity": 1,
                    "variant": None,
                    "unitPrice": {"value": {"centAmount": 10000, "currencyCode": "DKK"}},
                },
            ]
        },
        "subtotal": {"centAmount": 109800, "currencyCode": "DKK"},
        "shippingLines": [
            {"total": {"centAmount": 3900, "currencyCode": "DKK"}},
            {"total": {"centAmount": 1000, "currencyCode": "DKK"}},
        ],
        "total": {"centAmount": 114700, "currencyCode": "DKK"},
    }
