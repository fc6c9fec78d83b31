"""
Log sanitization filter to keep signature material and credentials out of logs.

Webhook processing logs request metadata, collaborator errors and exception
tracebacks; any of these can carry a signature header, a secret or customer
PII. The filter rewrites records before they reach a handler.
"""

import logging
import re
import traceback
from typing import List, Optional, Pattern, Tuple


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that redacts sensitive data from log records.

    Each pattern is applied in order, so specific patterns come before the
    generic key=value ones.
    """

    # (compiled regex pattern, replacement string)
    SENSITIVE_PATTERNS: List[Tuple[Pattern[str], str]] = [
        # Simple signature header values
        (re.compile(r"\bsha256=[0-9a-fA-F]{16,}"), "sha256=REDACTED"),
        # Timestamped signature components (the timestamp itself is kept)
        (re.compile(r"\bv1=[0-9a-fA-F]{16,}"), "v1=REDACTED"),
        # Webhook secrets in their conventional prefixed form
        (re.compile(r"\bwhsec_[A-Za-z0-9_\-]+"), "whsec_REDACTED"),
        # X-API-Key header values
        (re.compile(r'(X-API-Key|x-api-key)\s*[:=]\s*["\']?([^\s"\',}]+)["\']?', re.IGNORECASE), r"\1=REDACTED"),
        # API keys, tokens and secrets in key=value or key: value form
        (
            re.compile(
                r'(api[_-]?key|apikey|token|secret|webhook[_-]?secret)\s*[:=]\s*["\']?([^\s"\',}]+)["\']?',
                re.IGNORECASE,
            ),
            r"\1=REDACTED",
        ),
        # SMTP and other passwords
        (re.compile(r'(password|passwd|pwd)\s*[:=]\s*["\']?([^\s"\',}]+)["\']?', re.IGNORECASE), r"\1=REDACTED"),
        # Customer email addresses
        (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "EMAIL_REDACTED"),
    ]

    def __init__(self, name: str = ""):
        super().__init__(name)

    def sanitize(self, text: str) -> str:
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Redact sensitive information in place.

        Returns:
            True (always allows the record through, but with redacted content)
        """
        record.msg = self.sanitize(str(record.getMessage()))
        record.args = ()  # Already formatted above

        if record.exc_info and record.exc_info[0] is not None:
            exc_text = "".join(traceback.format_exception(*record.exc_info))
            record.exc_text = self.sanitize(exc_text).strip()

        return True


def add_sensitive_data_filter(logger: Optional[logging.Logger] = None) -> None:
    """
    Add the sensitive data filter to a logger or to the root logger.

    Args:
        logger: The logger to add the filter to. If None, adds to root logger.
    """
    if logger is None:
        logger = logging.getLogger()

    for existing in logger.filters:
        if isinstance(existing, SensitiveDataFilter):
            return

    logger.addFilter(SensitiveDataFilter())


def configure_secure_logging() -> None:
    """Install the sensitive data filter on the root logger and its handlers."""
    add_sensitive_data_filter()

    # Records from child loggers skip root logger filters but not handler filters
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if not any(isinstance(f, SensitiveDataFilter) for f in handler.filters):
            handler.addFilter(SensitiveDataFilter())
