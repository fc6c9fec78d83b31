"""
Thor Commerce webhook ingestion: signature verification, replay protection,
decoding and dispatch.
"""

from .base import WebhookDecodeError, WebhookHandlerError, WebhookResult, WebhookVerificationError
from .decoder import decode_event
from .dispatcher import DispatchResult, EventDispatcher, ThorEventType
from .pipeline import WebhookPipeline
from .replay import is_fresh
from .verification import verify_signature

__all__ = [
    "WebhookDecodeError",
    "WebhookHandlerError",
    "WebhookResult",
    "WebhookVerificationError",
    "decode_event",
    "DispatchResult",
    "EventDispatcher",
    "ThorEventType",
    "WebhookPipeline",
    "is_fresh",
    "verify_signature",
]
