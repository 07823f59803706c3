"""
Configuration module for the webhook authorizer.

This module handles all environment variables and authorizer settings.
It uses Pydantic to validate and parse environment variables automatically.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Settings class that manages all environment variables.

    Every field maps to an environment variable with the SYRUS_ prefix:
    - SYRUS_STAGE maps to the stage field
    - SYRUS_SECRET_CACHE_TTL_SECONDS maps to secret_cache_ttl_seconds

    Nothing here is required. An authorizer that cannot find its secret
    denies requests instead of refusing to start.

    Example:
        If you set SYRUS_STAGE="prod" in your environment,
        the app secret is read from /syrus/prod/whatsapp/app-secret.
    """

    # Deployment stage (dev, staging, prod...)
    stage: Optional[str] = None  # None means "fall back to default_stage"
    default_stage: str = "dev"

    # Secret store naming: /<namespace>/<stage>/<suffix>
    secret_namespace: str = "syrus"
    secret_suffix: str = "whatsapp/app-secret"
    aws_region: Optional[str] = None  # boto3 resolves it itself when unset

    # Webhook protocol details
    signature_header: str = "x-hub-signature-256"
    principal_id: str = "whatsapp-webhook"
    messaging_product: str = "whatsapp"  # Expected value.messaging_product

    # Secret caching across warm invocations (0 = fetch on every request)
    secret_cache_ttl_seconds: int = 0

    # Log expected/computed digests on signature mismatch
    log_signature_digests: bool = False

    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SYRUS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


def resolve_stage(config: Settings) -> str:
    """
    Return the configured stage, or the default one when unset.

    An empty SYRUS_STAGE counts as unset. Falling back is logged so a
    misconfigured deployment is visible in the logs.
    """
    if config.stage:
        return config.stage

    logger.info(f"SYRUS_STAGE not set, defaulting to '{config.default_stage}'")
    return config.default_stage


# Create a single instance to use throughout the app
settings = Settings()
