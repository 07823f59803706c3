"""
Webhook payload validation.

Checks the envelope shape only: object, entry, changes and
value.messaging_product. Message content, timestamps and sender fields
are deliberately not looked at.
"""

from pydantic import ValidationError
import json
import logging

from webhook_authorizer.core.errors import MalformedJSON, MissingField, UnexpectedValue
from webhook_authorizer.schemas.webhook import WebhookEnvelope

logger = logging.getLogger(__name__)


class PayloadValidator:
    """Validates a raw webhook body against the expected envelope."""

    def __init__(self, messaging_product: str = "whatsapp"):
        self.messaging_product = messaging_product

    def validate(self, body: bytes) -> WebhookEnvelope:
        """
        Parse and validate `body`, stopping at the first problem.

        Order of checks:
        1. body is a JSON object with the right field types -> MalformedJSON
        2. "object" is a non-empty string                   -> MissingField
        3. "entry" is a non-empty list                      -> MissingField
        4. every entry has a non-empty "changes" list       -> MissingField (with entry index)
        5. every change has the expected messaging_product  -> UnexpectedValue (with both indices)

        Returns:
            WebhookEnvelope: The parsed envelope

        Raises:
            SchemaError: One of the subclasses above
        """
        try:
            document = json.loads(body)
        except (UnicodeDecodeError, ValueError) as e:
            raise MalformedJSON(f"invalid JSON payload: {e}") from e

        if not isinstance(document, dict):
            raise MalformedJSON(f"invalid JSON payload: expected an object, got {type(document).__name__}")

        try:
            envelope = WebhookEnvelope.model_validate(document)
        except ValidationError as e:
            raise MalformedJSON(f"invalid JSON payload: {e.error_count()} type error(s)") from e

        if not envelope.object:
            raise MissingField("object")

        if not envelope.entry:
            raise MissingField("entry")

        for i, entry in enumerate(envelope.entry):
            if not entry.changes:
                raise MissingField("changes", entry_index=i)
            for j, change in enumerate(entry.changes):
                observed = change.value.messaging_product if change.value else None
                if observed != self.messaging_product:
                    raise UnexpectedValue(i, j, observed, self.messaging_product)

        logger.debug(f"Payload valid: {len(envelope.entry)} entries")
        return envelope
