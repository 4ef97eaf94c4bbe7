"""Chat backend module."""

from llm_primitives.llm.anthropic import AnthropicBackend, create_anthropic_backend
from llm_primitives.llm.backend import ChatBackend, reply_message
from llm_primitives.llm.openai import OpenAIBackend, create_openai_backend

__all__ = [
    "AnthropicBackend",
    "ChatBackend",
    "OpenAIBackend",
    "create_anthropic_backend",
    "create_openai_backend",
    "reply_message",
]
