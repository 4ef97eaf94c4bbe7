"""
messages.py

PURPOSE: Transport-independent chat message and generation option types.
DEPENDENCIES: None (pure Python + typing)

ARCHITECTURE NOTES:
Messages are created per call and never persisted.
``decoded`` is only filled in by a backend when structured output was
requested and the reply content parsed as a JSON object.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Author of a chat message."""

    SYSTEM = "system"
    ASSISTANT = "assistant"
    USER = "user"


@dataclass(frozen=True)
class Message:
    """A single chat message."""

    role: Role
    content: str
    decoded: dict[str, Any] | None = None

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    def to_wire(self) -> dict[str, str]:
        """Role and content only, as sent to a provider."""
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class GenerationOptions:
    """Sampling options for one chat request."""

    temperature: float = 0.0
    force_structured_output: bool = False

    @classmethod
    def builder(cls) -> "GenerationOptionsBuilder":
        return GenerationOptionsBuilder()


class GenerationOptionsBuilder:
    """
    Fluent builder for GenerationOptions.

    Example:
        >>> GenerationOptions.builder().temperature(0.0).force_structured_output().build()
        GenerationOptions(temperature=0.0, force_structured_output=True)
    """

    def __init__(self) -> None:
        self._temperature = 0.0
        self._force_structured_output = False

    def temperature(self, temperature: float) -> "GenerationOptionsBuilder":
        self._temperature = temperature
        return self

    def force_structured_output(self, enabled: bool = True) -> "GenerationOptionsBuilder":
        self._force_structured_output = enabled
        return self

    def build(self) -> GenerationOptions:
        return GenerationOptions(
            temperature=self._temperature,
            force_structured_output=self._force_structured_output,
        )
