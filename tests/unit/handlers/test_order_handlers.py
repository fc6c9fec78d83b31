"""
Unit tests for order event handlers.
"""
from unittest.mock import AsyncMock, Mock, patch

import pytest

from thor_webhooks.core.exceptions import ConfigurationError, ExternalServiceError
from thor_webhooks.handlers import OrderEventHandlers, default_handler_table
from thor_webhooks.handlers.orders import build_order_confirmation
from thor_webhooks.schemas.thor_order import ThorOrder
from thor_webhooks.services.email_service import EmailMessage, EmailResult


@pytest.fixture
def order(order_data):
    """Decoded Admin API order."""
    return ThorOrder.model_validate(order_data)


@pytest.fixture
def mock_client(order):
    """Admin API client returning the sample order."""
    client = Mock()
    client.get_order = AsyncMock(return_value=order)
    return client


@pytest.fixture
def mock_email_provider():
    """Email provider reporting successful delivery."""
    provider = Mock()
    provider.send_email = AsyncMock(return_value=EmailResult(success=True, message_id="<abc@example.com>"))
    return provider


@pytest.fixture
def handlers(mock_client, mock_email_provider):
    """Order handlers wired to mocks."""
    return OrderEventHandlers(client=mock_client, email_provider=mock_email_provider, email_from="shop@example.com")


class TestHandlerTable:
    """Test cases for the default handler table."""

    def test_registered_event_types(self, handlers):
        table = default_handler_table(handlers)

        assert set(table) == {
            "order.created",
            "order.payment_state.changed",
            "order.fulfillment_state.changed",
            "order.cancelled",
        }
        assert "order.updated" not in table

    def test_entries_are_bound_methods(self, handlers):
        table = handlers.handler_table()
        assert table["order.created"] == handlers.handle_order_created
        assert table["order.cancelled"] == handlers.handle_order_cancelled


class TestOrderCreated:
    """Test cases for order.created."""

    @pytest.mark.asyncio
    async def test_sends_confirmation(self, handlers, mock_client, mock_email_provider, make_event):
        event = make_event(data={"object": {"id": "order_1"}})

        await handlers.handle_order_created(event)

        mock_client.get_order.assert_awaited_once_with("order_1")
        mock_email_provider.send_email.assert_awaited_once()
        message = mock_email_provider.send_email.await_args.args[0]
        assert isinstance(message, EmailMessage)
        assert message.to == "jane@example.com"
        assert message.from_address == "shop@example.com"
        assert message.subject == "Order Confirmation #1042"
        assert message.text == "Thank you for your order! Order number: 1042"
        assert "#1042" in message.html
        assert "Linen Shirt" in message.html

    @pytest.mark.asyncio
    async def test_order_not_found(self, handlers, mock_client, mock_email_provider, make_event, caplog):
        mock_client.get_order.return_value = None

        with caplog.at_level("ERROR"):
            await handlers.handle_order_created(make_event())

        mock_email_provider.send_email.assert_not_called()
        assert "Order not found" in caplog.text

    @pytest.mark.asyncio
    async def test_missing_email_provider_raises(self, mock_client, make_event):
        handlers = OrderEventHandlers(client=mock_client)

        with pytest.raises(ConfigurationError, match="No email provider configured"):
            await handlers.handle_order_created(make_event())

    @pytest.mark.asyncio
    async def test_customer_without_email(self, handlers, mock_client, mock_email_provider, order_data, make_event):
        order_data["customer"]["email"] = None
        mock_client.get_order.return_value = ThorOrder.model_validate(order_data)

        await handlers.handle_order_created(make_event())

        mock_email_provider.send_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_delivery_is_logged_not_raised(self, handlers, mock_email_provider, make_event, caplog):
        mock_email_provider.send_email.return_value = EmailResult(success=False, error="Connection refused")

        with caplog.at_level("ERROR"):
            await handlers.handle_order_created(make_event())

        assert "Failed to send order confirmation" in caplog.text

    @pytest.mark.asyncio
    async def test_api_error_propagates(self, handlers, mock_client, make_event):
        mock_client.get_order.side_effect = ExternalServiceError("Thor Commerce API", "HTTP 503")

        with pytest.raises(ExternalServiceError):
            await handlers.handle_order_created(make_event())

    @pytest.mark.asyncio
    async def test_uses_template_renderer(self, handlers, mock_email_provider, make_event):
        with patch("thor_webhooks.handlers.orders.render_email_template", return_value="<p>rendered</p>") as mock_render:
            await handlers.handle_order_created(make_event())

        assert mock_render.call_args.args[0] == "order-confirmation"
        assert mock_email_provider.send_email.await_args.args[0].html == "<p>rendered</p>"


class TestStateChangeHandlers:
    """Test cases for the logging-only order handlers."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "state,expected",
        [
            ("paid", "Payment confirmed"),
            ("failed", "Payment failed"),
            ("refunded", "Refund processed"),
        ],
    )
    async def test_payment_state(self, handlers, mock_client, order_data, make_event, caplog, state, expected):
        order_data["paymentState"] = state
        mock_client.get_order.return_value = ThorOrder.model_validate(order_data)

        with caplog.at_level("INFO"):
            await handlers.handle_order_payment_state_changed(make_event(type="order.payment_state.changed"))

        assert expected in caplog.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("state,expected", [("shipped", "shipped"), ("delivered", "delivered")])
    async def test_fulfillment_state(self, handlers, mock_client, order_data, make_event, caplog, state, expected):
        order_data["shipmentState"] = state
        mock_client.get_order.return_value = ThorOrder.model_validate(order_data)

        with caplog.at_level("INFO"):
            await handlers.handle_order_fulfillment_state_changed(make_event(type="order.fulfillment_state.changed"))

        assert f"Order order_1 {expected}" in caplog.text

    @pytest.mark.asyncio
    async def test_cancelled(self, handlers, mock_client, mock_email_provider, make_event, caplog):
        with caplog.at_level("INFO"):
            await handlers.handle_order_cancelled(make_event(type="order.cancelled"))

        mock_client.get_order.assert_awaited_once()
        mock_email_provider.send_email.assert_not_called()
        assert "(#1042) cancelled" in caplog.text

    @pytest.mark.asyncio
    async def test_state_handlers_tolerate_missing_order(self, handlers, mock_client, make_event):
        mock_client.get_order.return_value = None

        await handlers.handle_order_payment_state_changed(make_event())
        await handlers.handle_order_fulfillment_state_changed(make_event())
        await handlers.handle_order_cancelled(make_event())

    @pytest.mark.asyncio
    async def test_state_handler_errors_propagate(self, handlers, mock_client, make_event):
        mock_client.get_order.side_effect = ExternalServiceError("Thor Commerce API", "timeout")

        with pytest.raises(ExternalServiceError):
            await handlers.handle_order_payment_state_changed(make_event())


class TestBuildOrderConfirmation:
    """Test cases for mapping orders onto template data."""

    def test_amounts(self, order):
        data = build_order_confirmation(order)

        assert data.order_number == "1042"
        assert data.subtotal.value == "1098.00"
        assert data.shipping_price.value == "49.00"
        assert data.shipping_price.currency_code == "DKK"
        assert data.total.value == "1147.00"

    def test_line_items(self, order):
        items = build_order_confirmation(order).line_items

        assert [item.name for item in items] == ["Linen Shirt", "Gift Card"]
        assert items[0].quantity == 2
        assert items[0].unit_price.value == "499.00"
        assert items[0].image_url == "https://cdn.example.com/shirt.jpg?w=200&f=webp"
        assert items[1].image_url is None

    def test_billing_falls_back_to_shipping(self, order):
        data = build_order_confirmation(order)
        assert data.billing_address == data.shipping_address
        assert data.billing_address.city == "København"

    def test_separate_billing_address(self, order_data):
        order_data["billingAddress"] = {"firstName": "Acme", "city": "Aarhus", "countryCode": "DK"}
        data = build_order_confirmation(ThorOrder.model_validate(order_data))

        assert data.billing_address.first_name == "Acme"
        assert data.shipping_address.city == "København"

    def test_no_shipping_lines(self, order_data):
        order_data["shippingLines"] = []
        data = build_order_confirmation(ThorOrder.model_validate(order_data))

        assert data.shipping_price.value == "0.00"
        assert data.shipping_price.currency_code == "DKK"
