"""
schema.py

PURPOSE: Derive JSON Schema documents from parse targets.
DEPENDENCIES: pydantic

ARCHITECTURE NOTES:
Any type pydantic can build a TypeAdapter for is a valid target:
BaseModel subclasses, dataclasses, TypedDicts.
"""

import json
from typing import Any, Protocol

from pydantic import TypeAdapter


class SchemaProvider(Protocol):
    """Produces the JSON Schema a parse target is described by."""

    def schema_for(self, target: type[Any]) -> dict[str, Any]:
        """Return a JSON Schema document for ``target``."""
        ...


class PydanticSchemaProvider:
    """Schema provider backed by pydantic's JSON Schema generation."""

    def schema_for(self, target: type[Any]) -> dict[str, Any]:
        return TypeAdapter(target).json_schema()


def render_schema(schema: dict[str, Any]) -> str:
    """Serialize a schema the way it is embedded in prompts."""
    return json.dumps(schema, indent=2)
