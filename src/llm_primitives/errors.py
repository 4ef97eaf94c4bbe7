"""
errors.py

PURPOSE: Error taxonomy shared by backends, the decoder and the model facade.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
Every failure a primitive can surface derives from PrimitiveError.
The facade stamps the name of the failing primitive on the error
(``operation``) and re-raises it, so callers can catch either the
specific kind or everything a given primitive raised.
"""


class PrimitiveError(Exception):
    """Base class for all llm_primitives errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.operation: str | None = None

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class ConfigurationError(PrimitiveError):
    """Missing credential or otherwise unusable configuration."""

    pass


# ============================================================================
# Chat backend errors
# ============================================================================


class ChatError(PrimitiveError):
    """Failure at the chat backend boundary."""

    pass


class TransportError(ChatError):
    """
    Non-success status, network failure or malformed provider envelope.

    ``status_code`` and ``body`` are set when the provider answered with a
    non-success status; both are None for network-level failures.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_status(cls, status_code: int, body: str) -> "TransportError":
        return cls(f"{status_code}: {body}", status_code=status_code, body=body)


class StructuredDecodeError(ChatError):
    """Structured output was requested but the reply is not a JSON object."""

    pass


# ============================================================================
# Response decoding errors
# ============================================================================


class DecodeError(PrimitiveError):
    """A reply could not be turned into the primitive's result type."""

    pass


class MissingObjectError(DecodeError):
    """The reply carries no decoded JSON object."""

    def __init__(self, message: str = "Object not found in response"):
        super().__init__(message)


class MissingFieldError(DecodeError):
    """A required field is absent from the decoded object."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class WrongTypeError(DecodeError):
    """A required field is present but has the wrong shape."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class InvalidChoiceError(DecodeError):
    """The model answered with a label that was not offered."""

    def __init__(self, label: str):
        super().__init__(f"Invalid classification: {label}")
        self.label = label


class SchemaMismatchError(DecodeError):
    """The decoded object does not deserialize into the parse target."""

    pass
