"""
anthropic.py

PURPOSE: Anthropic Claude chat backend.
DEPENDENCIES: anthropic SDK

ARCHITECTURE NOTES:
Uses the Anthropic Python SDK to communicate with Claude.
- System messages are sent as the ``system`` parameter
- Structured output is forced through a single tool whose input is a
  JSON object, with a fallback to parsing text content
- SDK retries are disabled; one call is one request
- OpenTelemetry tracing (when enabled)
"""

import json
import logging
import os
import time
from typing import Any, Sequence

import anthropic

from llm_primitives.config import ANTHROPIC_API_KEY_NAME, LLMSettings
from llm_primitives.errors import ConfigurationError, TransportError
from llm_primitives.llm.backend import ChatBackend, reply_message
from llm_primitives.messages import GenerationOptions, Message, Role
from llm_primitives.observability import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

STRUCTURED_TOOL_NAME = "structured_response"
STRUCTURED_TOOL = {
    "name": STRUCTURED_TOOL_NAME,
    "description": "Return the response as a JSON object",
    "input_schema": {"type": "object"},
}


class AnthropicBackend(ChatBackend):
    """
    Chat backend using Anthropic's Claude API.

    Supports both plain text and JSON-object completions.
    """

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        max_tokens: int = 4096,
        timeout: float | None = 120.0,
    ):
        """
        Initialize the Anthropic backend.

        Args:
            model: Model to use for completions.
            api_key: Anthropic API key. If None, uses ANTHROPIC_API_KEY env var.
            max_tokens: Maximum tokens in the reply.
            timeout: Request deadline in seconds; None waits forever.

        Raises:
            ConfigurationError: If no API key is available.
        """
        if api_key is None:
            api_key = os.environ.get(ANTHROPIC_API_KEY_NAME)
        if not api_key:
            raise ConfigurationError(f"{ANTHROPIC_API_KEY_NAME} not found in environment variables")

        self._client = anthropic.AsyncAnthropic(api_key=api_key, max_retries=0, timeout=timeout)
        self._model = model
        self._max_tokens = max_tokens

    @property
    def model_name(self) -> str:
        """Return the model name."""
        return self._model

    def _request_kwargs(
        self,
        messages: Sequence[Message],
        options: GenerationOptions,
    ) -> dict[str, Any]:
        # Convert messages to Anthropic format
        system = "\n\n".join(msg.content for msg in messages if msg.role is Role.SYSTEM)
        kwargs: dict[str, Any] = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": options.temperature,
            "messages": [msg.to_wire() for msg in messages if msg.role is not Role.SYSTEM],
        }

        if system:
            kwargs["system"] = system

        if options.force_structured_output:
            kwargs["tools"] = [STRUCTURED_TOOL]
            kwargs["tool_choice"] = {"type": "tool", "name": STRUCTURED_TOOL_NAME}

        return kwargs

    async def chat(
        self,
        messages: Sequence[Message],
        options: GenerationOptions,
    ) -> Message:
        """
        Send a message request to Claude.

        Args:
            messages: The conversation to send
            options: Sampling temperature and structured output flag

        Returns:
            The reply message
        """
        with tracer.start_as_current_span("llm.chat") as span:
            span.set_attribute("llm.provider", "anthropic")
            span.set_attribute("llm.model", self._model)
            span.set_attribute("llm.max_tokens", self._max_tokens)
            span.set_attribute("llm.temperature", options.temperature)
            span.set_attribute("llm.message_count", len(messages))
            span.set_attribute("llm.structured", options.force_structured_output)

            start_time = time.perf_counter()

            logger.debug(f"Sending request to {self._model}")

            try:
                response = await self._client.messages.create(
                    **self._request_kwargs(messages, options)
                )
            except anthropic.APIStatusError as e:
                span.record_exception(e)
                raise TransportError.from_status(e.status_code, e.response.text) from e
            except anthropic.APIError as e:
                span.record_exception(e)
                raise TransportError(f"Request failed: {e}") from e

            elapsed_ms = (time.perf_counter() - start_time) * 1000

            span.set_attribute("llm.input_tokens", response.usage.input_tokens)
            span.set_attribute("llm.output_tokens", response.usage.output_tokens)
            span.set_attribute("llm.latency_ms", elapsed_ms)
            span.set_attribute("llm.stop_reason", response.stop_reason or "unknown")

            logger.debug(
                f"Response: {response.usage.input_tokens} in, {response.usage.output_tokens} out"
            )

            if options.force_structured_output:
                # Extract tool use result
                for block in response.content:
                    if block.type == "tool_use" and block.name == STRUCTURED_TOOL_NAME:
                        span.set_attribute("llm.response_type", "tool_use")
                        decoded = dict(block.input)
                        return Message(
                            role=Role.ASSISTANT,
                            content=json.dumps(decoded),
                            decoded=decoded,
                        )
                span.set_attribute("llm.response_type", "text_json")

            content = "".join(block.text for block in response.content if block.type == "text")
            return reply_message(Role.ASSISTANT, content, options)


def create_anthropic_backend(settings: LLMSettings) -> AnthropicBackend:
    """
    Factory function to create an Anthropic backend from settings.

    Args:
        settings: LLM settings; an empty key falls back to ANTHROPIC_API_KEY

    Returns:
        Configured AnthropicBackend
    """
    return AnthropicBackend(
        model=settings.model,
        api_key=settings.anthropic_api_key or None,
        max_tokens=settings.max_tokens,
        timeout=settings.timeout_seconds,
    )
