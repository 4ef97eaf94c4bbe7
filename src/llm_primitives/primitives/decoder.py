"""
decoder.py

PURPOSE: Validate model replies and extract each primitive's result.
DEPENDENCIES: pydantic

ARCHITECTURE NOTES:
Replies to structured prompts are validated once against a small typed
envelope per primitive (ClassificationReply, IntScoreReply,
FloatScoreReply). Pydantic validation errors are translated into the
MissingFieldError / WrongTypeError taxonomy here, so nothing downstream
ever probes the raw decoded dict.
"""

import json
from typing import Any, TypeVar

from pydantic import BaseModel, StrictStr, TypeAdapter, ValidationError, field_validator

from llm_primitives.choices import EncodedChoices
from llm_primitives.errors import (
    InvalidChoiceError,
    MissingFieldError,
    MissingObjectError,
    SchemaMismatchError,
    WrongTypeError,
)
from llm_primitives.messages import Message

T = TypeVar("T")
E = TypeVar("E", bound=BaseModel)


# ============================================================================
# Reply envelopes
# ============================================================================


def _require_number(value: Any) -> Any:
    # bool is an int subclass, but true/false is never a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("score must be a number")
    return value


class ClassificationReply(BaseModel):
    """``{"classification": "<LABEL>"}``"""

    classification: StrictStr


class IntScoreReply(BaseModel):
    """``{"score": <int>}``; integral floats such as 4.0 are accepted."""

    score: int

    @field_validator("score", mode="before")
    @classmethod
    def _integral(cls, value: Any) -> int:
        value = _require_number(value)
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError("score must be an integral value")
            return int(value)
        return value


class FloatScoreReply(BaseModel):
    """``{"score": <number>}``"""

    score: float

    @field_validator("score", mode="before")
    @classmethod
    def _numeric(cls, value: Any) -> float:
        try:
            return float(_require_number(value))
        except OverflowError as e:
            raise ValueError("score is out of range for a float") from e


def _require_object(message: Message) -> dict[str, Any]:
    if message.decoded is None:
        raise MissingObjectError()
    return message.decoded


def _validate_envelope(envelope: type[E], message: Message, field: str, label: str) -> E:
    """Validate the decoded object against ``envelope``, mapping failures onto the taxonomy."""
    decoded = _require_object(message)
    try:
        return envelope.model_validate(decoded)
    except ValidationError as e:
        error = e.errors()[0]
        if error["type"] == "missing":
            raise MissingFieldError(field, f"{label} not found in response") from e
        raise WrongTypeError(field, f"{label} not found in response: {error['msg']}") from e


# ============================================================================
# Per-primitive decoding
# ============================================================================


def decode_classification(message: Message, choices: EncodedChoices) -> int:
    """Index of the chosen option."""
    reply = _validate_envelope(ClassificationReply, message, "classification", "Classification")
    index = choices.decode(reply.classification)
    if index is None:
        raise InvalidChoiceError(reply.classification)
    return index


def decode_binary_classification(message: Message, choices: EncodedChoices) -> bool:
    """True iff the first option ("true") was chosen."""
    return decode_classification(message, choices) == 0


def decode_int_score(message: Message) -> int:
    return _validate_envelope(IntScoreReply, message, "score", "Score").score


def decode_float_score(message: Message) -> float:
    return _validate_envelope(FloatScoreReply, message, "score", "Score").score


def decode_parsed(message: Message, target: type[T]) -> T:
    """
    Deserialize the decoded object into ``target``.

    The object is re-serialized to canonical JSON and validated in strict
    mode, so unknown-field and required-field handling follow the target's
    own pydantic configuration.
    """
    decoded = _require_object(message)
    canonical = json.dumps(decoded, sort_keys=True)
    try:
        return TypeAdapter(target).validate_json(canonical, strict=True)
    except ValidationError as e:
        raise SchemaMismatchError(f"Failed to parse response: {e}") from e


def decode_text(message: Message) -> str:
    """Raw reply content, untouched."""
    return message.content
