"""
Order event handlers for Thor Commerce webhooks.
"""

import logging
from typing import Dict, Optional

from thor_webhooks.core.exceptions import ConfigurationError
from thor_webhooks.integrations.thor_client import ThorClient
from thor_webhooks.schemas.thor_event import ThorWebhookEvent
from thor_webhooks.schemas.thor_order import Address, ThorOrder
from thor_webhooks.services.email_service import EmailMessage, EmailProvider
from thor_webhooks.services.email_templates import (
    EmailAddress,
    EmailLineItem,
    OrderConfirmationData,
    Price,
    render_email_template,
)
from thor_webhooks.utils.currency import cents_to_amount
from thor_webhooks.webhooks.base import EventHandler
from thor_webhooks.webhooks.dispatcher import ThorEventType

logger = logging.getLogger(__name__)

IMAGE_SUFFIX = "?w=200&f=webp"
DEFAULT_CURRENCY = "DKK"


class OrderEventHandlers:
    """Handlers for order.* events. Each call fetches fresh order data."""

    # Event type -> handler method name
    HANDLED_EVENTS: Dict[str, str] = {
        ThorEventType.ORDER_CREATED.value: "handle_order_created",
        ThorEventType.ORDER_PAYMENT_STATE_CHANGED.value: "handle_order_payment_state_changed",
        ThorEventType.ORDER_FULFILLMENT_STATE_CHANGED.value: "handle_order_fulfillment_state_changed",
        ThorEventType.ORDER_CANCELLED.value: "handle_order_cancelled",
    }

    def __init__(self, client: ThorClient, email_provider: Optional[EmailProvider] = None, email_from: Optional[str] = None):
        """
        Initialize order handlers.

        Args:
            client: Thor Commerce Admin API client
            email_provider: Provider used for customer emails; required by order.created only
            email_from: Sender address for customer emails
        """
        self.client = client
        self.email_provider = email_provider
        self.email_from = email_from

    def handler_table(self) -> Dict[str, EventHandler]:
        return {event_type: getattr(self, name) for event_type, name in self.HANDLED_EVENTS.items()}

    async def handle_order_created(self, event: ThorWebhookEvent) -> None:
        """Send the order confirmation email for a newly placed order."""
        order_id = event.resource_id
        logger.info(f"Order created: {order_id}")

        try:
            order = await self.client.get_order(order_id)
            if order is None:
                logger.error(f"Order not found: {order_id}")
                return

            html = render_email_template("order-confirmation", build_order_confirmation(order))

            if self.email_provider is None:
                raise ConfigurationError("No email provider configured for order confirmations")
            if not order.customer.email:
                logger.warning(f"Order {order_id} has no customer email; confirmation not sent")
                return

            result = await self.email_provider.send_email(
                EmailMessage(
                    to=order.customer.email,
                    from_address=self.email_from,
                    subject=f"Order Confirmation #{order.order_number}",
                    html=html,
                    text=f"Thank you for your order! Order number: {order.order_number}",
                )
            )
            if result.success:
                logger.info(f"Order confirmation email sent: {result.message_id}")
            else:
                logger.error(f"Failed to send order confirmation for {order_id}: {result.error}")

            logger.info(f"Order confirmation processed for {order_id}")
        except Exception as e:
            logger.error(f"Failed to process order.created for {order_id}: {e}", exc_info=True)
            raise

    async def handle_order_payment_state_changed(self, event: ThorWebhookEvent) -> None:
        order_id = event.resource_id
        logger.info(f"Order payment state changed: {order_id}")

        try:
            order = await self.client.get_order(order_id)
            if order is None:
                logger.error(f"Order not found: {order_id}")
                return

            logger.info(f"Payment state for {order.id}: {order.payment_state}")
            if order.payment_state == "paid":
                logger.info(f"Payment confirmed for order {order.id}")
            elif order.payment_state == "failed":
                logger.warning(f"Payment failed for order {order.id}")
            elif order.payment_state == "refunded":
                logger.info(f"Refund processed for order {order.id}")
        except Exception as e:
            logger.error(f"Failed to process payment state change for {order_id}: {e}", exc_info=True)
            raise

    async def handle_order_fulfillment_state_changed(self, event: ThorWebhookEvent) -> None:
        order_id = event.resource_id
        logger.info(f"Order fulfillment state changed: {order_id}")

        try:
            order = await self.client.get_order(order_id)
            if order is None:
                logger.error(f"Order not found: {order_id}")
                return

            logger.info(f"Shipment state for {order.id}: {order.shipment_state}")
            if order.shipment_state == "shipped":
                logger.info(f"Order {order.id} shipped")
            elif order.shipment_state == "delivered":
                logger.info(f"Order {order.id} delivered")
        except Exception as e:
            logger.error(f"Failed to process fulfillment state change for {order_id}: {e}", exc_info=True)
            raise

    async def handle_order_cancelled(self, event: ThorWebhookEvent) -> None:
        order_id = event.resource_id
        logger.info(f"Order cancelled: {order_id}")

        try:
            order = await self.client.get_order(order_id)
            if order is None:
                logger.error(f"Order not found: {order_id}")
                return
            logger.info(
                f"Order {order.id} (#{order.order_number}) cancelled; "
                f"payment={order.payment_state} shipment={order.shipment_state}"
            )
        except Exception as e:
            logger.error(f"Failed to process order cancellation for {order_id}: {e}", exc_info=True)
            raise


def _email_address(address: Optional[Address]) -> EmailAddress:
    if address is None:
        return EmailAddress()
    return EmailAddress(**address.model_dump())


def build_order_confirmation(order: ThorOrder) -> OrderConfirmationData:
    """Map an Admin API order onto the order confirmation template data."""
    shipping_address = _email_address(order.shipping_address)
    billing_address = _email_address(order.billing_address) if order.billing_address else shipping_address

    line_items = []
    for item in order.line_items.nodes:
        image = item.variant.image if item.variant else None
        line_items.append(
            EmailLineItem(
                name=item.product_name,
                quantity=item.quantity,
                image_url=f"{image.src}{IMAGE_SUFFIX}" if image else None,
                unit_price=Price(
                    value=cents_to_amount(item.unit_price.value.cent_amount),
                    currency_code=item.unit_price.value.currency_code,
                ),
            )
        )

    shipping_cents = sum(line.total.cent_amount for line in order.shipping_lines)
    shipping_currency = order.shipping_lines[0].total.currency_code if order.shipping_lines else DEFAULT_CURRENCY

    return OrderConfirmationData(
        order_number=str(order.order_number),
        shipping_address=shipping_address,
        billing_address=billing_address,
        line_items=line_items,
        subtotal=Price(value=cents_to_amount(order.subtotal.cent_amount), currency_code=order.subtotal.currency_code),
        shipping_price=Price(value=cents_to_amount(shipping_cents), currency_code=shipping_currency),
        total=Price(value=cents_to_amount(order.total.cent_amount), currency_code=order.total.currency_code),
    )
