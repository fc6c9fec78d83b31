import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Load .env file if it exists (for platform secret files)
# Check multiple possible locations
for env_path in [Path(".env"), Path("/etc/secrets/.env"), Path("/app/.env")]:
    if env_path.exists():
        load_dotenv(env_path)
        logger.info(f"Loaded environment from {env_path}")
        break
else:
    # Also try loading without a specific path (uses default search)
    load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Webhook verification
    THOR_WEBHOOK_SECRET: Optional[str] = Field(None)
    WEBHOOK_SIGNATURE_HEADER: str = Field("X-Webhook-Signature")
    # Older integrations sign with this header name; read only when the canonical one is absent
    WEBHOOK_SIGNATURE_FALLBACK_HEADER: Optional[str] = Field("Thor-Signature")
    WEBHOOK_TIMESTAMP_TOLERANCE: int = Field(300, ge=0)
    WEBHOOK_REPLAY_FAIL_OPEN: bool = Field(True)  # Malformed t= values pass the replay check

    # Thor Commerce Admin API
    THOR_API_KEY: Optional[str] = Field(None)
    THOR_TENANT: Optional[str] = Field(None)
    THOR_API_URL: str = Field("https://api.thorcommerce.io")
    THOR_API_TIMEOUT: float = Field(30.0, gt=0)

    # Email delivery (SMTP)
    SMTP_HOST: Optional[str] = Field(None)
    SMTP_PORT: int = Field(587)
    SMTP_USERNAME: Optional[str] = Field(None)
    SMTP_PASSWORD: Optional[str] = Field(None)
    SMTP_USE_TLS: bool = Field(True)
    EMAIL_FROM: str = Field("noreply@example.com")

    # General App Settings
    LOG_LEVEL: str = Field("INFO")

    @field_validator("THOR_WEBHOOK_SECRET", "THOR_API_KEY", "THOR_TENANT", "SMTP_HOST", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty environment values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("THOR_API_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Property aliases for consistent case access
    @property
    def thor_webhook_secret(self):
        return self.THOR_WEBHOOK_SECRET

    @property
    def webhook_signature_header(self):
        return self.WEBHOOK_SIGNATURE_HEADER

    @property
    def webhook_signature_fallback_header(self):
        return self.WEBHOOK_SIGNATURE_FALLBACK_HEADER

    @property
    def webhook_timestamp_tolerance(self):
        return self.WEBHOOK_TIMESTAMP_TOLERANCE

    @property
    def webhook_replay_fail_open(self):
        return self.WEBHOOK_REPLAY_FAIL_OPEN

    @property
    def thor_api_key(self):
        return self.THOR_API_KEY

    @property
    def thor_tenant(self):
        return self.THOR_TENANT

    @property
    def thor_api_url(self):
        return self.THOR_API_URL

    @property
    def thor_api_timeout(self):
        return self.THOR_API_TIMEOUT

    @property
    def smtp_host(self):
        return self.SMTP_HOST

    @property
    def smtp_port(self):
        return self.SMTP_PORT

    @property
    def smtp_username(self):
        return self.SMTP_USERNAME

    @property
    def smtp_password(self):
        return self.SMTP_PASSWORD

    @property
    def smtp_use_tls(self):
        return self.SMTP_USE_TLS

    @property
    def email_from(self):
        return self.EMAIL_FROM

    @property
    def log_level(self):
        return self.LOG_LEVEL


# Create a single instance for easy import
settings = Settings()


# Function to get settings instance
def get_settings() -> Settings:
    return settings
