"""
backend.py

PURPOSE: Abstract chat backend interface.
DEPENDENCIES: None (pure Python + typing)

ARCHITECTURE NOTES:
A backend performs exactly one request per call and returns the first
candidate reply. It never retries and never streams. When structured
output is requested it must hand back a Message whose ``decoded`` field
holds the parsed JSON object, or fail with StructuredDecodeError.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Sequence

from llm_primitives.errors import StructuredDecodeError
from llm_primitives.messages import GenerationOptions, Message, Role


class ChatBackend(ABC):
    """Abstract base class for chat backends."""

    @abstractmethod
    async def chat(
        self,
        messages: Sequence[Message],
        options: GenerationOptions,
    ) -> Message:
        """
        Send a message sequence to the model and return its reply.

        Args:
            messages: Ordered conversation, usually system + user
            options: Sampling temperature and structured output flag

        Returns:
            The reply message; ``decoded`` is set iff structured output was requested

        Raises:
            TransportError: Non-success status, network failure or malformed envelope
            StructuredDecodeError: Structured output requested but content is not a JSON object
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the name of the model being used."""
        ...


def reply_message(role: Role, content: str, options: GenerationOptions) -> Message:
    """Build the reply Message, decoding JSON content when structured output was requested."""
    if not options.force_structured_output:
        return Message(role=role, content=content)

    try:
        decoded: Any = json.loads(content)
    except json.JSONDecodeError as e:
        raise StructuredDecodeError("Failed to parse response") from e

    if not isinstance(decoded, dict):
        raise StructuredDecodeError("Failed to parse response: content is not a JSON object")

    return Message(role=role, content=content, decoded=decoded)
