"""
FastAPI dependencies that assemble the webhook pipeline for each request.

Nothing here is cached between requests. Collaborators that need extra
configuration (Admin API, SMTP) are built only when a handler actually runs,
so missing credentials never affect signature checks or unknown events.
"""

import logging
from typing import Dict

from fastapi import Depends

from thor_webhooks.config.settings import Settings, get_settings
from thor_webhooks.handlers import OrderEventHandlers, default_handler_table
from thor_webhooks.integrations.thor_client import ThorClient
from thor_webhooks.services.email_service import create_email_provider_from_settings
from thor_webhooks.webhooks.base import EventHandler
from thor_webhooks.webhooks.dispatcher import EventDispatcher
from thor_webhooks.webhooks.pipeline import WebhookPipeline

logger = logging.getLogger(__name__)


def build_order_handlers(settings: Settings) -> OrderEventHandlers:
    """
    Build order handlers from settings.

    Raises:
        ConfigurationError: If THOR_API_KEY or THOR_TENANT is missing
    """
    email_provider = create_email_provider_from_settings(settings) if settings.smtp_host else None
    return OrderEventHandlers(
        client=ThorClient.from_settings(settings),
        email_provider=email_provider,
        email_from=settings.email_from,
    )


def _deferred(settings: Settings, event_type: str) -> EventHandler:
    async def handler(event) -> None:
        table = default_handler_table(build_order_handlers(settings))
        await table[event_type](event)

    handler.__name__ = f"deferred_{event_type.replace('.', '_')}"
    return handler


def get_handler_table(settings: Settings = Depends(get_settings)) -> Dict[str, EventHandler]:
    """Handler table whose entries build their collaborators on first use."""
    return {event_type: _deferred(settings, event_type) for event_type in OrderEventHandlers.HANDLED_EVENTS}


def get_event_dispatcher(handlers: Dict[str, EventHandler] = Depends(get_handler_table)) -> EventDispatcher:
    return EventDispatcher(handlers)


def get_webhook_pipeline(
    settings: Settings = Depends(get_settings),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
) -> WebhookPipeline:
    """
    Dependency to get the webhook pipeline.

    The secret is passed through as-is; a missing secret is reported by the
    pipeline itself as a 500 result.
    """
    return WebhookPipeline(
        secret=settings.thor_webhook_secret,
        dispatcher=dispatcher,
        tolerance_seconds=settings.webhook_timestamp_tolerance,
        replay_fail_open=settings.webhook_replay_fail_open,
    )
