"""
Shared fixtures for authorizer tests.
"""

import json

import pytest

from webhook_authorizer.core.errors import SecretUnavailable
from webhook_authorizer.schemas.request import InboundRequest
from webhook_authorizer.services.authorizer import AuthorizationDecider
from webhook_authorizer.services.secrets import SecretProvider
from webhook_authorizer.services.signature import SignatureVerifier

APP_SECRET = "test-app-secret"
RESOURCE = "arn:aws:execute-api:eu-west-1:123456789012:abc123/dev/POST/webhook"


class CountingSecretProvider(SecretProvider):
    """In-memory secret store that records every lookup."""

    def __init__(self, secrets=None):
        self.secrets = dict(secrets or {})
        self.calls = []

    def fetch(self, stage):
        self.calls.append(stage)
        if stage not in self.secrets:
            raise SecretUnavailable(f"no secret for stage {stage}")
        return self.secrets[stage]


def make_body(**overrides) -> bytes:
    payload = {
        "object": "whatsapp_business_account",
        "entry": [{"changes": [{"value": {"messaging_product": "whatsapp"}}]}],
    }
    payload.update(overrides)
    return json.dumps(payload).encode("utf-8")


def make_request(method="POST", body=b"", headers=None, resource=RESOURCE) -> InboundRequest:
    return InboundRequest(method=method, resource_id=resource, headers=headers or {}, body=body)


def signed_request(body: bytes, secret: str = APP_SECRET, method="POST") -> InboundRequest:
    token = SignatureVerifier.sign(body, secret)
    return make_request(method=method, body=body, headers={"X-Hub-Signature-256": token})


@pytest.fixture()
def secret_provider():
    return CountingSecretProvider({"dev": APP_SECRET})


@pytest.fixture()
def decider(secret_provider):
    return AuthorizationDecider(secret_provider)


@pytest.fixture()
def valid_body() -> bytes:
    return b'{"object":"whatsapp_business_account","entry":[{"changes":[{"value":{"messaging_product":"whatsapp"}}]}]}'


@pytest.fixture(autouse=True)
def default_stage(monkeypatch):
    """Run every test against the default stage, whatever the shell exports."""
    from webhook_authorizer.core.config import settings

    monkeypatch.setattr(settings, "stage", None)
