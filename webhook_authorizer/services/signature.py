"""
Webhook signature verification (X-Hub-Signature-256).

The sender signs the raw request body with HMAC-SHA256 using the shared
app secret and sends "sha256=<hex digest>" in the signature header.
"""

from typing import Union
import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="


def _key(secret: Union[str, bytes]) -> bytes:
    return secret if isinstance(secret, bytes) else secret.encode("utf-8")


class SignatureVerifier:
    """
    Checks a signature token against the body and the app secret.

    Args:
        log_digests: Log expected and computed digests on mismatch. Off by
                     default; digests end up in the log pipeline.
    """

    def __init__(self, log_digests: bool = False):
        self.log_digests = log_digests

    @staticmethod
    def sign(body: bytes, secret: Union[str, bytes]) -> str:
        """Return the "sha256=<hex>" token a sender would put in the header."""
        digest = hmac.new(_key(secret), body, hashlib.sha256).hexdigest()
        return SIGNATURE_PREFIX + digest

    def verify(self, body: bytes, token: str, secret: Union[str, bytes]) -> bool:
        """
        Return True if `token` is a valid signature of `body`.

        The token must start with "sha256="; anything else is rejected
        without hashing. The remainder is compared with hmac.compare_digest,
        which takes the same time wherever the first differing byte is.
        Empty bodies and empty digests are hashed and compared like any
        other input. Never raises for a malformed token.
        """
        if not token.startswith(SIGNATURE_PREFIX):
            logger.warning("Invalid signature format: missing 'sha256=' prefix")
            return False

        presented = token[len(SIGNATURE_PREFIX):]
        computed = hmac.new(_key(secret), body, hashlib.sha256).hexdigest()

        # Compare bytes: compare_digest refuses non-ASCII str, and header
        # values decoded from JSON may carry lone surrogates
        is_valid = hmac.compare_digest(
            presented.encode("utf-8", "surrogatepass"), computed.encode("ascii")
        )
        if not is_valid:
            if self.log_digests:
                logger.warning(
                    f"Signature verification failed - expected: {presented}, computed: {computed}"
                )
            else:
                logger.warning(f"Signature verification failed - body_len={len(body)}")
        return is_valid
