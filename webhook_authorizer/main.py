"""
FastAPI application factory.

Serves the health endpoints. Webhook routes of the host application
protect themselves with `webhook_authorizer.api.deps.require_webhook_signature`.
"""

from fastapi import FastAPI
from webhook_authorizer.core.config import settings
from webhook_authorizer.core.logging import setup_logging
import logging

setup_logging(debug=settings.debug)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: A configured FastAPI application instance
    """
    app = FastAPI(
        title="Webhook Authorizer",
        description="Signature and schema gate for WhatsApp webhooks",
        version="1.0.0",
        # Docs only in debug mode
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    logger.info(f"FastAPI app created - Debug mode: {settings.debug}")

    from webhook_authorizer.api import health

    app.include_router(health.router)
    logger.info("Health endpoints registered at /health/*")

    return app


app = create_app()
