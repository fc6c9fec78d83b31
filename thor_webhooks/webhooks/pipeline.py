"""
Webhook pipeline: verify, check freshness, decode, dispatch.

One ``process`` call handles one request and stops at the first failure.
Every outcome, including failures, comes back as a WebhookResult; nothing is
raised to the caller.
"""

import logging
import time
from typing import Callable, Optional

from fastapi import status

from thor_webhooks.core.exceptions import AppExceptionBase, ConfigurationError
from thor_webhooks.webhooks.base import (
    WebhookDecodeError,
    WebhookHandlerError,
    WebhookResult,
    WebhookVerificationError,
)
from thor_webhooks.webhooks.decoder import decode_event
from thor_webhooks.webhooks.dispatcher import EventDispatcher
from thor_webhooks.webhooks.replay import DEFAULT_TOLERANCE_SECONDS, is_fresh
from thor_webhooks.webhooks.verification import verify_signature

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Webhook processed successfully"
CONFIG_ERROR_MESSAGE = "Webhook secret not configured"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class WebhookPipeline:
    """Orchestrates the verification and dispatch steps for inbound webhooks."""

    def __init__(
        self,
        secret: Optional[str],
        dispatcher: EventDispatcher,
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
        replay_fail_open: bool = True,
        clock: Callable[[], float] = time.time,
    ):
        self.secret = secret
        self.dispatcher = dispatcher
        self.tolerance_seconds = tolerance_seconds
        self.replay_fail_open = replay_fail_open
        self.clock = clock

    async def process(self, raw_body: bytes, signature_header: Optional[str]) -> WebhookResult:
        """
        Run one webhook through the pipeline.

        Args:
            raw_body: Request body exactly as received
            signature_header: Value of the signature header, or None if absent

        Returns:
            WebhookResult with 200, 400, 401 or 500
        """
        try:
            return await self._run(raw_body, signature_header)
        except ConfigurationError as e:
            logger.error(f"Webhook receiver misconfigured: {e.message}")
            return WebhookResult.failure(e.status_code, CONFIG_ERROR_MESSAGE)
        except WebhookVerificationError as e:
            # Which check failed stays in the server log
            logger.warning(f"Webhook rejected: {e.message}")
            return WebhookResult.failure(e.status_code, WebhookVerificationError().message)
        except WebhookDecodeError as e:
            return WebhookResult.failure(e.status_code, e.message)
        except WebhookHandlerError as e:
            logger.error(f"Error processing webhook: {e.message}", exc_info=e.original or e)
            return WebhookResult.failure(e.status_code, INTERNAL_ERROR_MESSAGE)
        except AppExceptionBase as e:
            logger.error(f"Error processing webhook: {e.message}", exc_info=True)
            return WebhookResult.failure(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    async def _run(self, raw_body: bytes, signature_header: Optional[str]) -> WebhookResult:
        if not self.secret:
            raise ConfigurationError("THOR_WEBHOOK_SECRET is not configured")

        if not verify_signature(raw_body, signature_header, self.secret):
            raise WebhookVerificationError("Invalid webhook signature received")

        if not is_fresh(
            signature_header,
            self.tolerance_seconds,
            now=self.clock(),
            fail_open=self.replay_fail_open,
        ):
            raise WebhookVerificationError("Webhook timestamp is too old or invalid")

        event = decode_event(raw_body)
        logger.info(
            f"Received Thor webhook: id={event.id} type={event.event_type} resource={event.resource_id}"
        )

        try:
            dispatch = await self.dispatcher.dispatch(event)
        except Exception as e:
            raise WebhookHandlerError(event.event_type, e) from e

        return WebhookResult.ok(SUCCESS_MESSAGE, dispatch=dispatch)
