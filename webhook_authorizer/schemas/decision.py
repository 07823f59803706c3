"""
Authorization decision schema and its policy serialization.
"""

from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional
import enum

POLICY_VERSION = "2012-10-17"
INVOKE_ACTION = "execute-api:Invoke"


class Effect(str, enum.Enum):
    """IAM policy effect. Values match what API Gateway expects."""
    ALLOW = "Allow"
    DENY = "Deny"


class AuthorizationDecision(BaseModel):
    """
    The answer for one request.

    Built fresh for every request and never cached. `reason` is only for
    logs and tests; the front door sees principal, effect and resource.
    """
    principal_id: str
    effect: Effect
    resource: str
    reason: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def allow(cls, principal_id: str, resource: str) -> "AuthorizationDecision":
        return cls(principal_id=principal_id, effect=Effect.ALLOW, resource=resource)

    @classmethod
    def deny(cls, principal_id: str, resource: str, reason: str) -> "AuthorizationDecision":
        return cls(principal_id=principal_id, effect=Effect.DENY, resource=resource, reason=reason)

    @property
    def allowed(self) -> bool:
        return self.effect is Effect.ALLOW

    def to_policy(self) -> Dict[str, Any]:
        """
        Serialize to the Lambda authorizer response API Gateway enforces.

        Example:
            {
                "principalId": "whatsapp-webhook",
                "policyDocument": {
                    "Version": "2012-10-17",
                    "Statement": [{
                        "Action": "execute-api:Invoke",
                        "Effect": "Allow",
                        "Resource": ["arn:aws:execute-api:..."]
                    }]
                }
            }
        """
        return {
            "principalId": self.principal_id,
            "policyDocument": {
                "Version": POLICY_VERSION,
                "Statement": [
                    {
                        "Action": INVOKE_ACTION,
                        "Effect": self.effect.value,
                        "Resource": [self.resource],
                    }
                ],
            },
        }
