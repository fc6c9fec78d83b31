"""
Email delivery for webhook handlers.

Handlers depend on the EmailProvider interface; SMTPEmailProvider is the
production implementation and sends through aiosmtplib.
"""

import logging
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Optional

import aiosmtplib
from pydantic import BaseModel

from thor_webhooks.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class EmailMessage(BaseModel):
    to: str
    subject: str
    html: str
    text: Optional[str] = None
    from_address: Optional[str] = None
    reply_to: Optional[str] = None


class EmailResult(BaseModel):
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class EmailProvider(ABC):
    """Abstract base class for email providers."""

    @abstractmethod
    async def send_email(self, message: EmailMessage) -> EmailResult:
        """
        Send an email.

        Implementations report failures through EmailResult instead of raising.
        """
        pass


class SMTPEmailProvider(EmailProvider):
    """Sends multipart (HTML plus optional text) email over SMTP."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        default_from: str = "noreply@example.com",
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.default_from = default_from

    def build_mime(self, message: EmailMessage) -> MIMEMultipart:
        from_address = message.from_address or self.default_from
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = from_address
        msg["To"] = message.to
        msg["Message-ID"] = make_msgid(domain=from_address.rpartition("@")[2] or None)
        if message.reply_to:
            msg["Reply-To"] = message.reply_to

        # Plain text first so clients that prefer HTML pick the last part
        if message.text:
            msg.attach(MIMEText(message.text, "plain", "utf-8"))
        msg.attach(MIMEText(message.html, "html", "utf-8"))
        return msg

    async def send_email(self, message: EmailMessage) -> EmailResult:
        msg = self.build_mime(message)
        try:
            await aiosmtplib.send(
                msg,
                hostname=self.host,
                port=self.port,
                start_tls=self.use_tls,
                username=self.username,
                password=self.password,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP error sending '{message.subject}': {e}")
            return EmailResult(success=False, error=str(e) or type(e).__name__)

        logger.info(f"Email sent: {message.subject}")
        return EmailResult(success=True, message_id=msg["Message-ID"])


def create_email_provider_from_settings(settings) -> EmailProvider:
    """Create the SMTP provider from application settings."""
    if not settings.smtp_host:
        raise ConfigurationError("Missing required setting: SMTP_HOST")
    return SMTPEmailProvider(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_username,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        default_from=settings.email_from,
    )
