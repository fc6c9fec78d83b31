"""
Base webhook types: errors raised inside the pipeline and the result it returns.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Optional, Union

from fastapi import status

from thor_webhooks.core.exceptions import AppExceptionBase, AuthenticationError, BadRequestError

if TYPE_CHECKING:
    from thor_webhooks.schemas.thor_event import ThorWebhookEvent
    from thor_webhooks.webhooks.dispatcher import DispatchResult

logger = logging.getLogger(__name__)

# Handlers receive the decoded event; coroutine functions are the norm
EventHandler = Callable[["ThorWebhookEvent"], Union[Awaitable[None], None]]


class WebhookVerificationError(AuthenticationError):
    """Raised when the signature or the timestamp of a webhook is rejected."""

    def __init__(self, message: str = "Invalid signature"):
        super().__init__(message=message)


class WebhookDecodeError(BadRequestError):
    """Raised when a webhook body is not valid JSON or fails schema validation."""

    def __init__(self, message: str = "Invalid webhook payload"):
        super().__init__(message=message)


class WebhookHandlerError(AppExceptionBase):
    """Raised when an event handler fails while processing a webhook."""

    def __init__(self, event_type: str, original: Optional[BaseException] = None):
        self.event_type = event_type
        self.original = original
        message = f"Handler for '{event_type}' failed"
        if original is not None:
            message += f": {original}"
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code="WEBHOOK_HANDLER_ERROR",
        )


@dataclass(frozen=True)
class WebhookResult:
    """Uniform outcome of one pipeline run, ready for the HTTP boundary."""

    success: bool
    status_code: int
    message: Optional[str] = None
    error: Optional[str] = None
    dispatch: Optional["DispatchResult"] = None

    @classmethod
    def ok(cls, message: str, dispatch: Optional["DispatchResult"] = None) -> "WebhookResult":
        return cls(success=True, status_code=status.HTTP_200_OK, message=message, dispatch=dispatch)

    @classmethod
    def failure(cls, status_code: int, error: str) -> "WebhookResult":
        return cls(success=False, status_code=status_code, error=error)

    def to_response_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": self.success}
        if self.message is not None:
            body["message"] = self.message
        if self.error is not None:
            body["error"] = self.error
        return body
