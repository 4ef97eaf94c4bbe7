"""
openai.py

PURPOSE: OpenAI chat completions backend.
DEPENDENCIES: httpx

ARCHITECTURE NOTES:
Talks to POST {base_url}/chat/completions directly, so any
OpenAI-compatible server works. Structured output uses
``response_format: {"type": "json_object"}``.
Includes OpenTelemetry tracing.
"""

import logging
import os
import time
from typing import Any, Sequence

import httpx

from llm_primitives.config import (
    OPENAI_API_BASE,
    OPENAI_API_CHAT_ENDPOINT,
    OPENAI_API_KEY_NAME,
    LLMSettings,
)
from llm_primitives.errors import ConfigurationError, TransportError
from llm_primitives.llm.backend import ChatBackend, reply_message
from llm_primitives.messages import GenerationOptions, Message, Role
from llm_primitives.observability import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class OpenAIBackend(ChatBackend):
    """
    Chat backend using the OpenAI chat completions API.

    Supports both plain text and JSON-object completions.
    """

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        base_url: str = OPENAI_API_BASE,
        timeout: float | None = 120.0,
    ):
        """
        Initialize the OpenAI backend.

        Args:
            model: Model to use for completions.
            api_key: OpenAI API key. If None, uses OPENAI_API_KEY env var.
            base_url: Base URL of the API, without the endpoint path.
            timeout: Request deadline in seconds; None waits forever.

        Raises:
            ConfigurationError: If no API key is available.
        """
        if api_key is None:
            api_key = os.environ.get(OPENAI_API_KEY_NAME)
        if not api_key:
            raise ConfigurationError(f"{OPENAI_API_KEY_NAME} not found in environment variables")

        self._model = model
        self._api_key = api_key
        self._url = base_url.rstrip("/") + OPENAI_API_CHAT_ENDPOINT
        self._timeout = timeout

    @property
    def model_name(self) -> str:
        """Return the model name."""
        return self._model

    def _request_body(
        self,
        messages: Sequence[Message],
        options: GenerationOptions,
    ) -> dict[str, Any]:
        response_format = "json_object" if options.force_structured_output else "text"
        return {
            "model": self._model,
            "messages": [message.to_wire() for message in messages],
            "temperature": options.temperature,
            "response_format": {"type": response_format},
        }

    async def chat(
        self,
        messages: Sequence[Message],
        options: GenerationOptions,
    ) -> Message:
        """
        Send a chat completion request.

        Args:
            messages: The conversation to send
            options: Sampling temperature and structured output flag

        Returns:
            The first candidate reply
        """
        with tracer.start_as_current_span("llm.chat") as span:
            span.set_attribute("llm.provider", "openai")
            span.set_attribute("llm.model", self._model)
            span.set_attribute("llm.temperature", options.temperature)
            span.set_attribute("llm.message_count", len(messages))
            span.set_attribute("llm.structured", options.force_structured_output)

            start_time = time.perf_counter()
            headers = {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            }

            logger.debug(f"Sending request to {self._model}")

            try:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(
                        self._url,
                        headers=headers,
                        json=self._request_body(messages, options),
                    )
            except httpx.HTTPError as e:
                span.record_exception(e)
                raise TransportError(f"Request failed: {e}") from e

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            span.set_attribute("llm.latency_ms", elapsed_ms)
            span.set_attribute("llm.status_code", response.status_code)

            if not response.is_success:
                logger.debug(f"Request failed with status {response.status_code}")
                raise TransportError.from_status(response.status_code, response.text)

            data = self._response_data(response)
            role, content = self._first_choice(data)

            usage = data.get("usage")
            if isinstance(usage, dict):
                span.set_attribute("llm.input_tokens", usage.get("prompt_tokens", 0))
                span.set_attribute("llm.output_tokens", usage.get("completion_tokens", 0))
                logger.debug(
                    f"Response: {usage.get('prompt_tokens', 0)} in, "
                    f"{usage.get('completion_tokens', 0)} out"
                )

            return reply_message(role, content, options)

    @staticmethod
    def _response_data(response: httpx.Response) -> dict[str, Any]:
        """Decode the JSON envelope of a 2xx response."""
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Failed to parse response, error: {e}") from e
        if not isinstance(data, dict):
            raise TransportError("Failed to parse response, error: body is not a JSON object")
        return data

    @staticmethod
    def _first_choice(data: dict[str, Any]) -> tuple[Role, str]:
        """Extract role and content of the first candidate."""
        choices = data.get("choices")

        if not choices:
            raise TransportError("Choice not found in response")

        try:
            message = choices[0]["message"]
            role = Role(message["role"])
            content = message["content"]
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(f"Failed to parse response, error: {e}") from e

        if content is None:
            content = ""
        if not isinstance(content, str):
            raise TransportError("Failed to parse response, error: content is not a string")

        return role, content


def create_openai_backend(settings: LLMSettings) -> OpenAIBackend:
    """
    Factory function to create an OpenAI backend from settings.

    Args:
        settings: LLM settings; an empty key falls back to OPENAI_API_KEY

    Returns:
        Configured OpenAIBackend
    """
    return OpenAIBackend(
        model=settings.model,
        api_key=settings.openai_api_key or None,
        base_url=settings.openai_base_url,
        timeout=settings.timeout_seconds,
    )
