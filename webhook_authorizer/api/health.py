"""
Health check endpoints.

Liveness says the process answers. Readiness also checks that the app
secret for the current stage can be read, since without it every webhook
POST would be denied.
"""

from fastapi import APIRouter, Depends, Response, status
from typing import Dict, Any
import logging

from webhook_authorizer.api.deps import get_secret_provider
from webhook_authorizer.core.config import resolve_stage, settings
from webhook_authorizer.core.errors import SecretUnavailable
from webhook_authorizer.services.secrets import SecretProvider

router = APIRouter(prefix="/health", tags=["health"])

logger = logging.getLogger(__name__)


@router.get("/healthz")
async def health_check() -> Dict[str, str]:
    """
    Basic health check endpoint - "Is the app alive?"

    URL: GET /health/healthz

    Example response:
        {
            "status": "healthy",
            "service": "webhook-authorizer"
        }
    """
    logger.debug("Health check called")

    return {
        "status": "healthy",
        "service": "webhook-authorizer"
    }


@router.get("/readyz")
def readiness_check(
    response: Response,
    secret_provider: SecretProvider = Depends(get_secret_provider),
) -> Dict[str, Any]:
    """
    Readiness check - "Can the app actually authorize webhooks?"

    Plain def: FastAPI runs it in a worker thread, so the blocking SSM
    lookup does not stall the event loop.

    URL: GET /health/readyz

    Example response when NOT ready:
        {
            "status": "not_ready",
            "stage": "dev",
            "checks": {"config": true, "secret": false}
        }

    The secret itself is never part of the response.
    """
    logger.debug("Readiness check called")

    stage = resolve_stage(settings)
    checks = {
        "config": bool(settings.secret_namespace and settings.secret_suffix),
        "secret": False,
    }

    try:
        secret_provider.fetch(stage)
        checks["secret"] = True
    except SecretUnavailable as e:
        logger.error(f"Secret check failed: {e}")

    is_ready = all(checks.values())

    if not is_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("App not ready - some checks failed")
    else:
        logger.info("App is ready - all checks passed")

    return {
        "status": "ready" if is_ready else "not_ready",
        "stage": stage,
        "checks": checks
    }
