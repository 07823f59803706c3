"""
Shared FastAPI dependencies.

Lets a FastAPI app act as its own front door: any webhook route that
depends on `require_webhook_signature` only runs when the authorizer
allows the request.
"""

from fastapi import Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool
from functools import lru_cache
import logging

from webhook_authorizer.core.config import resolve_stage, settings
from webhook_authorizer.schemas.decision import AuthorizationDecision
from webhook_authorizer.schemas.request import InboundRequest
from webhook_authorizer.services.authorizer import AuthorizationDecider
from webhook_authorizer.services.secrets import SecretProvider, build_secret_provider


logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_secret_provider() -> SecretProvider:
    """
    Secret provider used by HTTP routes. Override in tests.

    Built once per process, so the boto3 client and the optional secret
    cache survive across requests.
    """
    return build_secret_provider(settings)


def get_decider(secret_provider: SecretProvider = Depends(get_secret_provider)) -> AuthorizationDecider:
    return AuthorizationDecider.from_settings(secret_provider, settings)


async def require_webhook_signature(
    request: Request,
    decider: AuthorizationDecider = Depends(get_decider),
) -> AuthorizationDecision:
    """
    Authorize the current request, or reject it with 403.

    The raw body is read as bytes, so the signature is checked against
    exactly what the sender signed. The URL path is used as the resource.

    Usage:
        @router.post("/webhook")
        async def receive(decision = Depends(require_webhook_signature)):
            ...
    """
    body = await request.body()
    inbound = InboundRequest(
        method=request.method,
        resource_id=request.url.path,
        headers=dict(request.headers),
        body=body,
    )

    # decide() may block on SSM; keep it off the event loop
    decision = await run_in_threadpool(decider.decide, inbound, resolve_stage(settings))
    if not decision.allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    logger.debug("Webhook request authorized")
    return decision
