"""
Tests for app secret providers.
"""

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber

from webhook_authorizer.core.config import Settings
from webhook_authorizer.core.errors import SecretUnavailable
from webhook_authorizer.services.secrets import (
    CachingSecretProvider,
    SSMSecretProvider,
    build_secret_provider,
    secret_name,
)

from conftest import CountingSecretProvider


@pytest.fixture()
def ssm_client():
    return boto3.client(
        "ssm",
        region_name="eu-west-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def test_secret_name_is_stage_scoped():
    assert secret_name("dev") == "/syrus/dev/whatsapp/app-secret"
    assert secret_name("prod", "acme", "meta/app-secret") == "/acme/prod/meta/app-secret"


def test_ssm_fetch_returns_decrypted_value(ssm_client):
    provider = SSMSecretProvider(client=ssm_client)

    with Stubber(ssm_client) as stubber:
        stubber.add_response(
            "get_parameter",
            {"Parameter": {"Name": "/syrus/prod/whatsapp/app-secret", "Type": "SecureString", "Value": "s3cret"}},
            {"Name": "/syrus/prod/whatsapp/app-secret", "WithDecryption": True},
        )
        assert provider.fetch("prod") == "s3cret"
        stubber.assert_no_pending_responses()


def test_ssm_parameter_not_found(ssm_client):
    provider = SSMSecretProvider(client=ssm_client)

    with Stubber(ssm_client) as stubber:
        stubber.add_client_error("get_parameter", service_error_code="ParameterNotFound", http_status_code=400)
        with pytest.raises(SecretUnavailable) as exc:
            provider.fetch("dev")

    assert "/syrus/dev/whatsapp/app-secret" in str(exc.value)
    assert exc.value.operational


def test_ssm_access_denied(ssm_client):
    provider = SSMSecretProvider(client=ssm_client)

    with Stubber(ssm_client) as stubber:
        stubber.add_client_error("get_parameter", service_error_code="AccessDeniedException", http_status_code=400)
        with pytest.raises(SecretUnavailable):
            provider.fetch("dev")


def test_ssm_parameter_without_value(ssm_client):
    provider = SSMSecretProvider(client=ssm_client)

    with Stubber(ssm_client) as stubber:
        stubber.add_response("get_parameter", {"Parameter": {"Name": "/syrus/dev/whatsapp/app-secret"}})
        with pytest.raises(SecretUnavailable, match="not found or has no value"):
            provider.fetch("dev")


def test_ssm_network_error():
    class UnreachableSSM:
        def get_parameter(self, **kwargs):
            raise EndpointConnectionError(endpoint_url="https://ssm.eu-west-1.amazonaws.com")

    with pytest.raises(SecretUnavailable):
        SSMSecretProvider(client=UnreachableSSM()).fetch("dev")


def test_ssm_provider_from_settings():
    provider = SSMSecretProvider.from_settings(
        Settings(secret_namespace="acme", secret_suffix="wa/secret", aws_region="us-east-1")
    )

    assert provider.namespace == "acme"
    assert provider.suffix == "wa/secret"
    assert provider.region_name == "us-east-1"


def test_cache_reuses_secret_within_ttl():
    now = [100.0]
    inner = CountingSecretProvider({"dev": "a"})
    cache = CachingSecretProvider(inner, ttl_seconds=60, clock=lambda: now[0])

    assert cache.fetch("dev") == "a"
    now[0] += 59
    assert cache.fetch("dev") == "a"
    assert inner.calls == ["dev"]


def test_cache_refetches_after_ttl():
    now = [100.0]
    inner = CountingSecretProvider({"dev": "old"})
    cache = CachingSecretProvider(inner, ttl_seconds=60, clock=lambda: now[0])
    cache.fetch("dev")

    inner.secrets["dev"] = "rotated"
    now[0] += 60

    assert cache.fetch("dev") == "rotated"
    assert inner.calls == ["dev", "dev"]


def test_cache_keeps_stages_apart():
    inner = CountingSecretProvider({"dev": "dev-secret", "prod": "prod-secret"})
    cache = CachingSecretProvider(inner, ttl_seconds=60)

    assert cache.fetch("dev") == "dev-secret"
    assert cache.fetch("prod") == "prod-secret"
    assert inner.calls == ["dev", "prod"]


def test_cache_does_not_remember_failures():
    inner = CountingSecretProvider({})
    cache = CachingSecretProvider(inner, ttl_seconds=60)

    with pytest.raises(SecretUnavailable):
        cache.fetch("dev")
    inner.secrets["dev"] = "now-there"

    assert cache.fetch("dev") == "now-there"


def test_cache_requires_positive_ttl():
    with pytest.raises(ValueError):
        CachingSecretProvider(CountingSecretProvider(), ttl_seconds=0)


def test_build_secret_provider_caches_only_when_configured():
    assert isinstance(build_secret_provider(Settings(secret_cache_ttl_seconds=0)), SSMSecretProvider)

    cached = build_secret_provider(Settings(secret_cache_ttl_seconds=30))
    assert isinstance(cached, CachingSecretProvider)
    assert isinstance(cached.inner, SSMSecretProvider)
