"""
llm-primitives - Typed natural-language primitives on top of chat LLMs.

This package provides:
- classify / binary_classify over labelled choices
- generate_text for free-form replies
- score_int / score_float within a declared range
- parse into pydantic models, dataclasses and TypedDicts
"""

from llm_primitives.choices import EncodedChoices, encode, index_to_label, label_to_index
from llm_primitives.errors import (
    ChatError,
    ConfigurationError,
    DecodeError,
    InvalidChoiceError,
    MissingFieldError,
    MissingObjectError,
    PrimitiveError,
    SchemaMismatchError,
    StructuredDecodeError,
    TransportError,
    WrongTypeError,
)
from llm_primitives.llm import AnthropicBackend, ChatBackend, OpenAIBackend
from llm_primitives.messages import GenerationOptions, Message, Role
from llm_primitives.primitives import Model, PydanticSchemaProvider, SchemaProvider

__version__ = "0.1.0"

__all__ = [
    "AnthropicBackend",
    "ChatBackend",
    "ChatError",
    "ConfigurationError",
    "DecodeError",
    "EncodedChoices",
    "GenerationOptions",
    "InvalidChoiceError",
    "Message",
    "MissingFieldError",
    "MissingObjectError",
    "Model",
    "OpenAIBackend",
    "PrimitiveError",
    "PydanticSchemaProvider",
    "Role",
    "SchemaMismatchError",
    "SchemaProvider",
    "StructuredDecodeError",
    "TransportError",
    "WrongTypeError",
    "encode",
    "index_to_label",
    "label_to_index",
]
