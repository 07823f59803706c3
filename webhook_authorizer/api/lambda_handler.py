"""
API Gateway REST "REQUEST" authorizer entry point.

API Gateway invokes `handler` before every call to the webhook resource and
enforces the IAM policy it returns. Configure the Lambda handler as
`webhook_authorizer.api.lambda_handler.handler`.
"""

from typing import Any, Dict, Optional
import logging

from webhook_authorizer.core.config import resolve_stage, settings
from webhook_authorizer.core.logging import setup_logging
from webhook_authorizer.schemas.decision import AuthorizationDecision
from webhook_authorizer.schemas.request import InboundRequest
from webhook_authorizer.services.authorizer import AuthorizationDecider
from webhook_authorizer.services.secrets import build_secret_provider

setup_logging(debug=settings.debug)

logger = logging.getLogger(__name__)

# Built on first invocation, then reused while the container stays warm
_decider: Optional[AuthorizationDecider] = None


def get_decider() -> AuthorizationDecider:
    global _decider
    if _decider is None:
        _decider = AuthorizationDecider.from_settings(build_secret_provider(settings), settings)
    return _decider


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    Authorize one API Gateway request.

    Args:
        event: REST API REQUEST authorizer event (httpMethod, methodArn,
               headers, body...)
        context: Lambda context, unused

    Returns:
        Dict: IAM policy response (principalId + policyDocument)
    """
    logger.info(
        f"Authorizer invoked - Type: {event.get('type')}, HTTPMethod: {event.get('httpMethod')}, "
        f"Path: {event.get('path')}, MethodArn: {event.get('methodArn')}"
    )

    stage = resolve_stage(settings)

    try:
        request = InboundRequest.from_api_gateway_event(event)
    except ValueError as e:
        logger.warning(f"Denying request: could not read authorizer event: {e}")
        decision = AuthorizationDecision.deny(
            settings.principal_id, event.get("methodArn") or "", "malformed_event"
        )
        return decision.to_policy()

    decision = get_decider().decide(request, stage)
    return decision.to_policy()
