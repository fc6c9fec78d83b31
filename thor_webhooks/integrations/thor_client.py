"""
Thor Commerce Admin API client (GraphQL over HTTPS).
"""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from thor_webhooks.core.exceptions import ConfigurationError, ExternalServiceError
from thor_webhooks.schemas.thor_order import ThorOrder

logger = logging.getLogger(__name__)

SERVICE_NAME = "Thor Commerce API"
DEFAULT_API_URL = "https://api.thorcommerce.io"

GET_ORDER_QUERY = """
query GetOrder($id: ID!) {
  order(id: $id) {
    id
    orderNumber
    paymentState
    shipmentState
    customer { email firstName lastName }
    shippingAddress { firstName lastName address1 address2 city postalCode countryCode }
    billingAddress { firstName lastName address1 address2 city postalCode countryCode }
    lineItems {
      nodes {
        productName
        quantity
        variant { image { src } }
        unitPrice { value { centAmount currencyCode } }
      }
    }
    subtotal { centAmount currencyCode }
    shippingLines { total { centAmount currencyCode } }
    total { centAmount currencyCode }
  }
}
"""


class ThorClient:
    """Client for the Thor Commerce Admin GraphQL API."""

    def __init__(
        self,
        api_key: str,
        tenant: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Admin API key, sent as X-API-Key
            tenant: Tenant slug used in the endpoint path
            api_url: Base URL of the Admin API
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.endpoint = f"{api_url.rstrip('/')}/{tenant}/admin/graphql"
        self.timeout = timeout
        self._headers = {"X-API-Key": api_key, "Content-Type": "application/json"}
        self._transport = transport

    @classmethod
    def from_settings(cls, settings) -> "ThorClient":
        if not settings.thor_api_key or not settings.thor_tenant:
            raise ConfigurationError("Missing required settings: THOR_API_KEY and THOR_TENANT")
        return cls(
            api_key=settings.thor_api_key,
            tenant=settings.thor_tenant,
            api_url=settings.thor_api_url,
            timeout=settings.thor_api_timeout,
        )

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Run a GraphQL operation and return its ``data`` object.

        Raises:
            ExternalServiceError: On transport failures, non-2xx responses or GraphQL errors
        """
        payload = {"query": query, "variables": variables or {}}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, json=payload, headers=self._headers)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(SERVICE_NAME, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(SERVICE_NAME, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise ExternalServiceError(SERVICE_NAME, "Response was not valid JSON") from e

        if not isinstance(body, dict):
            raise ExternalServiceError(SERVICE_NAME, "Unexpected response shape")
        errors = body.get("errors")
        if errors:
            messages = "; ".join(str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors)
            raise ExternalServiceError(SERVICE_NAME, messages)
        return body.get("data") or {}

    async def get_order(self, order_id: str) -> Optional[ThorOrder]:
        """
        Fetch an order by ID.

        Returns:
            The order, or None if the API has no order with that ID
        """
        data = await self.execute(GET_ORDER_QUERY, {"id": order_id})
        order = data.get("order")
        if not order:
            return None
        try:
            return ThorOrder.model_validate(order)
        except ValidationError as e:
            raise ExternalServiceError(SERVICE_NAME, f"Unexpected order shape: {e.error_count()} errors") from e
