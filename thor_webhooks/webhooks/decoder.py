"""
Decode raw webhook bodies into validated ThorWebhookEvent envelopes.
"""

import logging

from pydantic import ValidationError

from thor_webhooks.schemas.thor_event import ThorWebhookEvent
from thor_webhooks.webhooks.base import WebhookDecodeError

logger = logging.getLogger(__name__)


def decode_event(raw_body: bytes) -> ThorWebhookEvent:
    """
    Parse and validate a webhook body.

    Args:
        raw_body: Request body exactly as received

    Returns:
        The validated, immutable event

    Raises:
        WebhookDecodeError: If the body is not JSON or does not match the schema
    """
    try:
        return ThorWebhookEvent.model_validate_json(raw_body)
    except ValidationError as e:
        # Log locations and error kinds only, never the attacker-controlled input
        problems = [f"{'.'.join(str(loc) for loc in err['loc']) or '<body>'}: {err['type']}" for err in e.errors()]
        if any(err["type"] == "json_invalid" for err in e.errors()):
            logger.warning("Webhook body is not valid JSON")
        else:
            logger.warning(f"Webhook payload failed validation: {'; '.join(problems)}")
        raise WebhookDecodeError() from e
