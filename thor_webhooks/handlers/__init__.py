"""
Business handlers invoked by the webhook dispatcher.
"""

from typing import Dict

from thor_webhooks.webhooks.base import EventHandler

from .orders import OrderEventHandlers


def default_handler_table(order_handlers: OrderEventHandlers) -> Dict[str, EventHandler]:
    """Event type to handler table shipped with the receiver."""
    return order_handlers.handler_table()


__all__ = ["OrderEventHandlers", "default_handler_table"]
