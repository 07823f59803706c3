"""
Inbound request schema.

The front door (API Gateway, FastAPI...) translates its own request shape
into this one before asking for a decision.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Mapping, Optional
import base64


class InboundRequest(BaseModel):
    """
    A normalized, immutable view of one webhook request.

    - method is kept as sent; HTTP methods are case-sensitive, so "get"
      is not the verification method
    - header names are lower-cased once here, so lookups never have to care
    - body is the raw bytes exactly as received; the signature covers these
      bytes, so nothing may re-encode or re-serialize them
    - resource_id is opaque and echoed back unchanged in the decision
    """

    method: str
    resource_id: str = Field(..., alias="resourceId")
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    @field_validator("headers", mode="before")
    @classmethod
    def normalize_headers(cls, v: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        """Lower-case header names and drop headers without a value."""
        if not v:
            return {}
        return {str(name).lower(): str(value) for name, value in v.items() if value is not None}

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup. Returns None when absent."""
        return self.headers.get(name.lower())

    @classmethod
    def from_api_gateway_event(cls, event: Mapping[str, Any]) -> "InboundRequest":
        """
        Build a request from an API Gateway REST "REQUEST" authorizer event.

        Example event (trimmed):
            {
                "httpMethod": "POST",
                "methodArn": "arn:aws:execute-api:eu-west-1:123:abc/dev/POST/webhook",
                "headers": {"X-Hub-Signature-256": "sha256=..."},
                "body": "{\"object\": ...}",
                "isBase64Encoded": false
            }

        Raises:
            ValueError: If the event cannot be translated (bad base64 body,
                        missing method...)
        """
        raw_body = event.get("body") or ""
        if event.get("isBase64Encoded"):
            body = base64.b64decode(raw_body, validate=True)
        elif isinstance(raw_body, bytes):
            body = raw_body
        else:
            body = raw_body.encode("utf-8")

        method = event.get("httpMethod") or (event.get("requestContext") or {}).get("httpMethod")

        return cls(
            method=method,
            resource_id=event.get("methodArn") or "",
            headers=event.get("headers"),
            body=body,
        )
