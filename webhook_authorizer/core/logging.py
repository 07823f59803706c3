"""
Logging configuration for the authorizer.

Every decision is logged as a single line tagged with the request context,
so a denied webhook can be traced without ever logging the secret.
"""

import logging
import sys
from typing import Any


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the entire application.

    Parameters:
    - debug: If True, show DEBUG messages (signature lengths, guard order)
             If False, only INFO level and above

    Calling this twice does not add a second handler, which matters in
    warm Lambda containers where the module may be imported again.
    """
    log_level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Lambda installs its own handler on the root logger; reuse it
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized at {logging.getLevelName(log_level)} level")


def with_context(logger: logging.Logger, **context: Any) -> logging.LoggerAdapter:
    """
    Return a LoggerAdapter that injects request context like method and resource.

    Usage:
        log = with_context(logging.getLogger(__name__), method="POST", stage="dev")
        log.info("Signature verified")
    """
    class ContextAdapter(logging.LoggerAdapter):
        def process(self, msg, kwargs):
            extra = kwargs.get("extra", {})
            merged = {**context, **extra}
            kwargs["extra"] = merged
            # Prefix message with keys for easy grep
            tags = " ".join(f"{k}={v}" for k, v in merged.items() if v is not None)
            return (f"[{tags}] {msg}" if tags else msg, kwargs)

    return ContextAdapter(logger, {})
