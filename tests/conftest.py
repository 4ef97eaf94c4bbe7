"""
conftest.py

Shared pytest fixtures for llm_primitives tests.
"""

import json
from typing import Any, Sequence

import pytest
from pydantic import BaseModel

from llm_primitives.llm.backend import ChatBackend
from llm_primitives.messages import GenerationOptions, Message, Role


class Address(BaseModel):
    """Parse target used across tests."""

    street: str
    number: int


class FakeBackend(ChatBackend):
    """
    Chat backend returning canned replies.

    Each reply is either a Message to return or an exception to raise.
    Every call is recorded in ``calls`` as ``(messages, options)``.
    """

    def __init__(self, *replies: Message | Exception):
        self._replies = list(replies)
        self.calls: list[tuple[tuple[Message, ...], GenerationOptions]] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def chat(self, messages: Sequence[Message], options: GenerationOptions) -> Message:
        self.calls.append((tuple(messages), options))
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def structured_reply(obj: dict[str, Any]) -> Message:
    """A reply as a backend returns it when structured output was requested."""
    return Message(role=Role.ASSISTANT, content=json.dumps(obj), decoded=obj)


def text_reply(content: str) -> Message:
    """A plain text reply."""
    return Message(role=Role.ASSISTANT, content=content)


def openai_completion(content: str, role: str = "assistant") -> dict[str, Any]:
    """Body of a successful OpenAI chat completion."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {"role": role, "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17},
    }


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials and settings out of every test."""
    for name in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "OPENAI_BASE_URL", "ANTHROPIC_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    for name in (
        "LLM_PRIMITIVES_LLM_PROVIDER",
        "LLM_PRIMITIVES_LLM_MODEL",
        "LLM_PRIMITIVES_LLM_OPENAI_API_KEY",
        "LLM_PRIMITIVES_LLM_ANTHROPIC_API_KEY",
        "LLM_PRIMITIVES_OTEL_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def openai_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Set a dummy OPENAI_API_KEY."""
    monkeypatch.setenv("OPENAI_API_KEY", "test-api-key")
    return "test-api-key"
