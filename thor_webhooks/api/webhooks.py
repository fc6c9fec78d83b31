"""
Webhook endpoints for Thor Commerce.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers

from thor_webhooks.config.settings import Settings, get_settings
from thor_webhooks.dependencies import get_event_dispatcher, get_webhook_pipeline
from thor_webhooks.webhooks.dispatcher import EventDispatcher
from thor_webhooks.webhooks.pipeline import WebhookPipeline

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


def get_signature_header(headers: Headers, settings: Settings) -> Optional[str]:
    """
    Read the signature header, falling back to the compatibility name.

    The canonical header wins when both are present.
    """
    signature = headers.get(settings.webhook_signature_header)
    if signature is not None:
        return signature

    fallback = settings.webhook_signature_fallback_header
    if fallback:
        signature = headers.get(fallback)
        if signature is not None:
            logger.warning(
                f"Webhook signed via fallback header {fallback}; "
                f"sender should switch to {settings.webhook_signature_header}"
            )
            return signature
    return None


@router.post("/thor")
async def thor_webhook(
    request: Request,
    pipeline: WebhookPipeline = Depends(get_webhook_pipeline),
    settings: Settings = Depends(get_settings),
):
    """
    Receive Thor Commerce webhooks.

    Headers:
        X-Webhook-Signature: sha256=<hex> or t=<unix>,v1=<hex>

    Returns:
        200 on success (including event types with no handler), 400 for an
        invalid payload, 401 for a rejected signature, 500 otherwise
    """
    # Raw body must be captured before any JSON parsing for HMAC verification
    body = await request.body()
    signature = get_signature_header(request.headers, settings)

    result = await pipeline.process(body, signature)
    return JSONResponse(status_code=result.status_code, content=result.to_response_body())


@router.get("/thor/status", status_code=status.HTTP_200_OK)
async def thor_webhook_status(
    settings: Settings = Depends(get_settings),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    """
    Check webhook configuration status.

    Returns:
        Configuration status and supported formats
    """
    is_configured = bool(settings.thor_webhook_secret)

    return {
        "status": "healthy" if is_configured else "not_configured",
        "webhook_secret_configured": is_configured,
        "endpoint": "/webhooks/thor",
        "supported_events": dispatcher.event_types,
        "signature_header": settings.webhook_signature_header,
        "signature_fallback_header": settings.webhook_signature_fallback_header,
        "signature_formats": ["sha256=<hex>", "t=<unix>,v1=<hex>"],
        "signature_algorithm": "HMAC-SHA256",
        "timestamp_tolerance_seconds": settings.webhook_timestamp_tolerance,
    }
