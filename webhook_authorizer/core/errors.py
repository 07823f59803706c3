"""
Authorization failure taxonomy.

Every exception here is an expected outcome, not a crash: the decider
catches them and turns each one into a Deny decision. The `reason` code
is what ends up in the logs and on the decision object.
"""

from typing import Any, Optional


class AuthorizationError(Exception):
    """Base class for every condition that resolves to Deny."""

    reason = "denied"
    # True when the failure points at our own misconfiguration
    operational = False


class MissingSignature(AuthorizationError):
    """The signature header is absent."""

    reason = "missing_signature"


class SecretUnavailable(AuthorizationError):
    """The app secret could not be read from the secret store."""

    reason = "secret_unavailable"
    operational = True


class SignatureMismatch(AuthorizationError):
    """The presented signature does not match the body."""

    reason = "signature_mismatch"


class UnsupportedMethod(AuthorizationError):
    """The HTTP method is neither the verification nor the submission method."""

    reason = "unsupported_method"


class SchemaError(AuthorizationError):
    """Base class for payload shape failures."""

    reason = "schema_error"


class MalformedJSON(SchemaError):
    reason = "malformed_json"


class MissingField(SchemaError):
    """A required field is absent or empty."""

    reason = "missing_field"

    def __init__(self, field: str, entry_index: Optional[int] = None):
        self.field = field
        self.entry_index = entry_index
        if entry_index is None:
            message = f"missing or empty '{field}'"
        else:
            message = f"entry[{entry_index}] has no {field}"
        super().__init__(message)


class UnexpectedValue(SchemaError):
    """value.messaging_product holds something other than the expected literal."""

    reason = "unexpected_value"

    def __init__(self, entry_index: int, change_index: int, observed: Any, expected: str):
        self.entry_index = entry_index
        self.change_index = change_index
        self.observed = observed
        self.expected = expected
        super().__init__(
            f"entry[{entry_index}].changes[{change_index}].value.messaging_product "
            f"must be '{expected}', got: {observed!r}"
        )
