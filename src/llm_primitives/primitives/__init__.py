"""Primitive operations: prompt building, reply decoding and the model facade."""

from llm_primitives.primitives.builder import ClassifyPrompt, PromptRequest
from llm_primitives.primitives.model import Model
from llm_primitives.primitives.schema import PydanticSchemaProvider, SchemaProvider

__all__ = [
    "ClassifyPrompt",
    "Model",
    "PromptRequest",
    "PydanticSchemaProvider",
    "SchemaProvider",
]
