"""
Route decoded webhook events to the handler registered for their type.
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Union

from thor_webhooks.schemas.thor_event import ThorWebhookEvent
from thor_webhooks.webhooks.base import EventHandler

logger = logging.getLogger(__name__)


class ThorEventType(str, Enum):
    """Event types Thor Commerce is known to send. The wire accepts any string."""

    ORDER_CREATED = "order.created"
    ORDER_UPDATED = "order.updated"
    ORDER_PAYMENT_STATE_CHANGED = "order.payment_state.changed"
    ORDER_FULFILLMENT_STATE_CHANGED = "order.fulfillment_state.changed"
    ORDER_CANCELLED = "order.cancelled"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of dispatching one event."""

    handled: bool
    event_type: str

    @classmethod
    def handled_event(cls, event_type: str) -> "DispatchResult":
        return cls(handled=True, event_type=event_type)

    @classmethod
    def unhandled(cls, event_type: str) -> "DispatchResult":
        return cls(handled=False, event_type=event_type)


class EventDispatcher:
    """Single-level event type to handler mapping."""

    def __init__(
        self,
        handlers: Mapping[Union[str, ThorEventType], EventHandler],
        fallback: Optional[EventHandler] = None,
    ):
        """
        Args:
            handlers: Event type to handler table; enum members and plain strings both work as keys
            fallback: Optional handler awaited for event types missing from the table
        """
        # Enum members hash by name, so normalize keys to their string value
        self._handlers: Dict[str, EventHandler] = {
            (key.value if isinstance(key, Enum) else str(key)): handler for key, handler in handlers.items()
        }
        self._fallback = fallback

    @property
    def event_types(self) -> List[str]:
        return sorted(self._handlers)

    async def dispatch(self, event: ThorWebhookEvent) -> DispatchResult:
        """
        Invoke the handler registered for event.event_type.

        Handler exceptions propagate unchanged; the pipeline decides how to report them.
        """
        handler = self._handlers.get(event.event_type)
        if handler is None:
            logger.info(f"Unhandled event type: {event.event_type} (event {event.id})")
            if self._fallback is not None:
                await _invoke(self._fallback, event)
            return DispatchResult.unhandled(event.event_type)

        logger.info(f"Dispatching {event.event_type} for {event.resource_id} (event {event.id})")
        await _invoke(handler, event)
        return DispatchResult.handled_event(event.event_type)


async def _invoke(handler: EventHandler, event: ThorWebhookEvent) -> None:
    result = handler(event)
    if inspect.isawaitable(result):
        await result
