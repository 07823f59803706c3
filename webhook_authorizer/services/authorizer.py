"""
Authorization decider - the gate in front of the webhook endpoint.

Decision flow for one request:
- GET (webhook verification handshake) -> Allow, no checks
- POST, checked in this order, first failure -> Deny:
    1. signature header present
    2. app secret available for the stage
    3. signature matches the raw body
    4. payload has the expected envelope shape
  then Allow
- anything else -> Deny

Nothing is kept between requests. Every expected failure is an
AuthorizationError, caught in one place and turned into a Deny, so the
front door always gets a decision back (fail closed).
"""

from typing import Optional
import logging

from webhook_authorizer.core.config import Settings, settings
from webhook_authorizer.core.errors import (
    AuthorizationError,
    MissingSignature,
    SignatureMismatch,
    UnsupportedMethod,
)
from webhook_authorizer.core.logging import with_context
from webhook_authorizer.schemas.decision import AuthorizationDecision
from webhook_authorizer.schemas.request import InboundRequest
from webhook_authorizer.services.payload import PayloadValidator
from webhook_authorizer.services.secrets import SecretProvider
from webhook_authorizer.services.signature import SignatureVerifier

logger = logging.getLogger(__name__)

VERIFICATION_METHOD = "GET"
SUBMISSION_METHOD = "POST"


class AuthorizationDecider:
    """
    Produces an Allow/Deny decision for each inbound webhook request.

    The secret provider, verifier and validator are injected so tests can
    count secret lookups or swap in a fake store.
    """

    def __init__(
        self,
        secret_provider: SecretProvider,
        verifier: Optional[SignatureVerifier] = None,
        validator: Optional[PayloadValidator] = None,
        principal_id: str = "whatsapp-webhook",
        signature_header: str = "x-hub-signature-256",
    ):
        self.secret_provider = secret_provider
        self.verifier = verifier or SignatureVerifier()
        self.validator = validator or PayloadValidator()
        self.principal_id = principal_id
        self.signature_header = signature_header

    @classmethod
    def from_settings(cls, secret_provider: SecretProvider, config: Settings = settings) -> "AuthorizationDecider":
        return cls(
            secret_provider,
            verifier=SignatureVerifier(log_digests=config.log_signature_digests),
            validator=PayloadValidator(messaging_product=config.messaging_product),
            principal_id=config.principal_id,
            signature_header=config.signature_header,
        )

    def decide(self, request: InboundRequest, stage: str) -> AuthorizationDecision:
        """
        Decide whether `request` may reach the webhook handler.

        Args:
            request: The normalized request from the front door
            stage: Deployment stage, selects which app secret to use

        Returns:
            AuthorizationDecision: Allow or Deny for request.resource_id.
            Never raises for an expected failure.
        """
        log = with_context(logger, method=request.method, resource=request.resource_id, stage=stage)
        log.info(f"Authorizer invoked - body_len={len(request.body)}")

        try:
            if request.method == VERIFICATION_METHOD:
                log.info("Allowing GET request (webhook verification)")
            elif request.method == SUBMISSION_METHOD:
                self._check_submission(request, stage)
                log.info("POST request authorized - signature and schema valid")
            else:
                raise UnsupportedMethod(f"unsupported method: {request.method}")
        except AuthorizationError as e:
            if e.operational:
                log.error(f"Denying request ({e.reason}): {e}")
            else:
                log.warning(f"Denying request ({e.reason}): {e}")
            return AuthorizationDecision.deny(self.principal_id, request.resource_id, e.reason)

        return AuthorizationDecision.allow(self.principal_id, request.resource_id)

    def _check_submission(self, request: InboundRequest, stage: str) -> None:
        """Run the POST guards in order. Raises on the first one that fails."""
        # An empty header value counts as missing
        token = request.header(self.signature_header)
        if not token:
            raise MissingSignature(f"missing {self.signature_header} header")

        secret = self.secret_provider.fetch(stage)

        if not self.verifier.verify(request.body, token, secret):
            raise SignatureMismatch("signature verification failed")

        self.validator.validate(request.body)
