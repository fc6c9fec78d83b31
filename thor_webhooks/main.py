import logging
from datetime import datetime

import uvicorn
from fastapi import FastAPI

from thor_webhooks import __version__
from thor_webhooks.api.webhooks import router as webhooks_router
from thor_webhooks.config.settings import settings
from thor_webhooks.core.error_handlers import add_exception_handlers
from thor_webhooks.core.log_sanitizer import configure_secure_logging

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

# Configure secure logging with sensitive data filtering
configure_secure_logging()

logger = logging.getLogger(__name__)

# Create app instance
app = FastAPI(
    title="Thor Commerce Webhook Receiver",
    description="Verifies Thor Commerce webhooks and dispatches order events",
    version=__version__,
)

app.include_router(webhooks_router)

# Register custom exception handlers
add_exception_handlers(app)


# Health check endpoint
@app.get("/health", tags=["status"])
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
    }


if not settings.thor_webhook_secret:
    logger.warning("THOR_WEBHOOK_SECRET is not set; webhook requests will be rejected with 500")


if __name__ == "__main__":
    uvicorn.run("thor_webhooks.main:app", host="0.0.0.0", port=8000)
