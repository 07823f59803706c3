"""
Pydantic schemas for requests, decisions and webhook payloads.

This module exports all schemas for easy importing.
"""

from webhook_authorizer.schemas.request import InboundRequest
from webhook_authorizer.schemas.decision import (
    AuthorizationDecision,
    Effect,
)
from webhook_authorizer.schemas.webhook import (
    WebhookChange,
    WebhookEntry,
    WebhookEnvelope,
    WebhookValue,
)

# Export all schemas
__all__ = [
    "InboundRequest",
    "AuthorizationDecision",
    "Effect",
    "WebhookChange",
    "WebhookEntry",
    "WebhookEnvelope",
    "WebhookValue",
]
