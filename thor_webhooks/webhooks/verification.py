"""
Thor Commerce webhook signature verification.

Thor Commerce signs webhooks with HMAC-SHA256 over the raw request body using
the shared webhook secret. Two header formats are accepted:

    sha256=<hex>              signed message is the raw body
    t=<unix>,v1=<hex>         signed message is "<t>." followed by the raw body
"""

import hashlib
import hmac
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

SIMPLE_PREFIX = "sha256="


def compute_signature(message: bytes, secret: str) -> str:
    """Return the lowercase hex HMAC-SHA256 of message keyed with secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def constant_time_compare(a: str, b: str) -> bool:
    """
    Compare two strings without leaking where they first differ.

    A length mismatch is rejected straight away (lengths are not secret);
    equal-length inputs are compared with hmac.compare_digest, which
    accumulates the XOR of every byte pair before deciding.
    """
    if len(a) != len(b):
        return False
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def parse_signature_header(signature_header: str) -> Dict[str, List[str]]:
    """
    Split a comma separated ``key=value`` header into a multi-map.

    Keys may repeat (several ``v1`` entries during secret rotation), so every
    value is kept in arrival order.
    """
    parts: Dict[str, List[str]] = {}
    for item in signature_header.split(","):
        key, sep, value = item.strip().partition("=")
        if not sep:
            continue
        parts.setdefault(key, []).append(value.strip())
    return parts


def verify_signature(raw_body: bytes, signature_header: Optional[str], secret: str) -> bool:
    """
    Verify a Thor Commerce webhook signature.

    Args:
        raw_body: Request body exactly as received
        signature_header: Value of the signature header, or None if absent
        secret: Shared webhook secret

    Returns:
        True only if the header carries a signature matching the body
    """
    if not signature_header:
        return False

    try:
        if signature_header.startswith(SIMPLE_PREFIX):
            message = raw_body
            candidates = [signature_header[len(SIMPLE_PREFIX):]]
        elif "v1=" in signature_header:
            parts = parse_signature_header(signature_header)
            timestamps = parts.get("t") or []
            candidates = [sig for sig in parts.get("v1", []) if sig]
            if not timestamps or not timestamps[0] or not candidates:
                logger.warning("Timestamped signature header is missing its t= or v1= component")
                return False
            message = f"{timestamps[0]}.".encode("utf-8") + raw_body
        else:
            logger.warning("Unrecognized webhook signature format")
            return False

        expected = compute_signature(message, secret)
        # Check every candidate so timing does not reveal which one matched
        matched = False
        for candidate in candidates:
            if constant_time_compare(expected, candidate):
                matched = True
        return matched
    except Exception as e:
        logger.error(f"Error verifying webhook signature: {e}", exc_info=True)
        return False
