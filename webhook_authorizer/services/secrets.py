"""
Secret providers - where the webhook app secret comes from.

The app secret lives in SSM Parameter Store under a stage-scoped name:
    /<namespace>/<stage>/<suffix>   e.g. /syrus/prod/whatsapp/app-secret

Providers never retry. A failed lookup raises SecretUnavailable and the
request is denied; retrying is the boto3 client's business.
"""

from typing import Any, Callable, Dict, Optional, Tuple
import abc
import logging
import time

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from webhook_authorizer.core.config import Settings, settings
from webhook_authorizer.core.errors import SecretUnavailable

logger = logging.getLogger(__name__)


def secret_name(stage: str, namespace: str = "syrus", suffix: str = "whatsapp/app-secret") -> str:
    """Build the stage-scoped parameter name for the app secret."""
    return f"/{namespace}/{stage}/{suffix}"


class SecretProvider(abc.ABC):
    """Resolves the app secret for a deployment stage."""

    @abc.abstractmethod
    def fetch(self, stage: str) -> str:
        """
        Return the app secret for `stage`.

        Raises:
            SecretUnavailable: If the secret is missing or the lookup failed
        """


class SSMSecretProvider(SecretProvider):
    """
    Reads the app secret from AWS SSM Parameter Store (SecureString).

    The boto3 client is created on first use and kept, so a warm Lambda
    container does not rebuild it on every request.
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        namespace: str = "syrus",
        suffix: str = "whatsapp/app-secret",
        region_name: Optional[str] = None,
    ):
        self._client = client
        self.namespace = namespace
        self.suffix = suffix
        self.region_name = region_name

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "SSMSecretProvider":
        return cls(
            namespace=config.secret_namespace,
            suffix=config.secret_suffix,
            region_name=config.aws_region,
        )

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("ssm", region_name=self.region_name)
        return self._client

    def fetch(self, stage: str) -> str:
        name = secret_name(stage, self.namespace, self.suffix)
        logger.debug(f"Fetching app secret from SSM parameter {name}")

        try:
            result = self.client.get_parameter(Name=name, WithDecryption=True)
        except (ClientError, BotoCoreError) as e:
            raise SecretUnavailable(f"failed to get parameter {name}: {e}") from e

        value = (result.get("Parameter") or {}).get("Value")
        if not value:
            raise SecretUnavailable(f"parameter {name} not found or has no value")

        return value


class CachingSecretProvider(SecretProvider):
    """
    Keeps fetched secrets for a bounded time, per stage.

    Only successful lookups are cached, so a missing secret is retried on
    the next request. Keep the TTL short: a rotated key is only picked up
    once the cached entry expires.
    """

    def __init__(
        self,
        inner: SecretProvider,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.inner = inner
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    def fetch(self, stage: str) -> str:
        now = self._clock()
        cached = self._entries.get(stage)
        if cached is not None and cached[1] > now:
            return cached[0]

        value = self.inner.fetch(stage)
        self._entries[stage] = (value, now + self.ttl_seconds)
        return value

    def clear(self) -> None:
        self._entries.clear()


def build_secret_provider(config: Settings = settings) -> SecretProvider:
    """Create the SSM provider, wrapped in a cache when a TTL is configured."""
    provider: SecretProvider = SSMSecretProvider.from_settings(config)
    if config.secret_cache_ttl_seconds > 0:
        logger.info(f"Caching app secret for {config.secret_cache_ttl_seconds}s per stage")
        provider = CachingSecretProvider(provider, config.secret_cache_ttl_seconds)
    return provider
