"""
Replay protection for timestamped webhook signatures.

Only the ``t=<unix>,v1=<hex>`` format carries a timestamp; headers without a
``t=`` component pass unchecked.
"""

import logging
import time
from typing import Optional

from thor_webhooks.webhooks.verification import parse_signature_header

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_SECONDS = 300


def extract_timestamp(signature_header: Optional[str]) -> Optional[str]:
    """Return the raw ``t=`` value of a signature header, or None."""
    if not signature_header:
        return None
    values = parse_signature_header(signature_header).get("t")
    if not values:
        return None
    return values[0]


def is_fresh(
    signature_header: Optional[str],
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    *,
    now: Optional[float] = None,
    fail_open: bool = True,
) -> bool:
    """
    Check that a timestamped signature is within the tolerance window.

    Args:
        signature_header: Value of the signature header, or None if absent
        tolerance_seconds: Maximum allowed distance from now, inclusive
        now: Current Unix time; defaults to time.time()
        fail_open: Result to return when the t= value cannot be parsed

    Returns:
        True if the request is fresh or carries no timestamp
    """
    timestamp = extract_timestamp(signature_header)
    if timestamp is None:
        return True

    # ASCII digits only; int() would also take signs, underscores and non-ASCII digits
    if not (timestamp.isascii() and timestamp.isdigit()):
        logger.warning(
            f"Unparseable webhook timestamp; replay check {'skipped' if fail_open else 'rejected'}"
        )
        return fail_open

    webhook_time = int(timestamp)
    current_time = int(time.time() if now is None else now)
    diff = abs(current_time - webhook_time)
    if diff > tolerance_seconds:
        logger.warning(f"Webhook timestamp outside tolerance: {diff}s > {tolerance_seconds}s")
        return False
    return True
