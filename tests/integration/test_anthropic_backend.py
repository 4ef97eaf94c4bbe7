"""
TEST DOC: Anthropic Backend

WHAT: Tests for the Claude chat backend
WHY: Alternate provider behind the same ChatBackend contract
HOW: Use respx to mock HTTP calls to the Anthropic API

CASES:
- Plain completion with system message
- Structured output through the forced tool
- Structured output falling back to JSON text

EDGE CASES:
- Missing API key
- Error status carries status and body
- Invalid JSON text when structured output was requested
- Installed SDK accepts the temperature parameter
"""

import inspect
import json

import pytest
import respx
from httpx import Response

from llm_primitives.errors import ConfigurationError, StructuredDecodeError, TransportError
from llm_primitives.llm.anthropic import STRUCTURED_TOOL_NAME, AnthropicBackend
from llm_primitives.messages import GenerationOptions, Message, Role

MESSAGES = [Message.system("You are a pirate."), Message.user("Who are you?")]


def anthropic_message(content: list[dict]) -> dict:
    """Body of a successful Anthropic messages response."""
    return {
        "id": "msg_123",
        "type": "message",
        "role": "assistant",
        "model": "claude-sonnet-4-20250514",
        "content": content,
        "stop_reason": "end_turn",
        "usage": {"input_tokens": 20, "output_tokens": 10},
    }


@pytest.fixture
def mock_anthropic():
    """Set up respx mock for Anthropic API."""
    with respx.mock(base_url="https://api.anthropic.com") as respx_mock:
        yield respx_mock


@pytest.fixture
def backend():
    """Create a test backend with a dummy API key."""
    return AnthropicBackend(model="claude-sonnet-4-20250514", api_key="test-api-key")


class TestAnthropicBackend:
    """Tests for the Anthropic backend."""

    def test_missing_key(self):
        """No key argument and no ANTHROPIC_API_KEY is a configuration error."""
        with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY not found"):
            AnthropicBackend(model="claude-sonnet-4-20250514")

    def test_model_name(self, backend):
        """Model name property returns correct value."""
        assert backend.model_name == "claude-sonnet-4-20250514"

    @pytest.mark.asyncio
    async def test_plain_text(self, mock_anthropic, backend):
        """System messages go to the system parameter; text is returned as is."""
        route = mock_anthropic.post("/v1/messages").mock(
            return_value=Response(
                200, json=anthropic_message([{"type": "text", "text": "I am a pirate!"}])
            )
        )

        reply = await backend.chat(MESSAGES, GenerationOptions())

        body = json.loads(route.calls.last.request.content)
        assert body["system"] == "You are a pirate."
        assert body["messages"] == [{"role": "user", "content": "Who are you?"}]
        assert body["temperature"] == 0.0
        assert "tools" not in body
        assert reply.role is Role.ASSISTANT
        assert reply.content == "I am a pirate!"
        assert reply.decoded is None

    @pytest.mark.asyncio
    async def test_structured_tool_use(self, mock_anthropic, backend):
        """Structured output is read from the forced tool call."""
        route = mock_anthropic.post("/v1/messages").mock(
            return_value=Response(
                200,
                json=anthropic_message(
                    [
                        {
                            "type": "tool_use",
                            "id": "tool_123",
                            "name": STRUCTURED_TOOL_NAME,
                            "input": {"score": 4},
                        }
                    ]
                ),
            )
        )

        reply = await backend.chat(MESSAGES, GenerationOptions(force_structured_output=True))

        body = json.loads(route.calls.last.request.content)
        assert body["tool_choice"] == {"type": "tool", "name": STRUCTURED_TOOL_NAME}
        assert reply.decoded == {"score": 4}
        assert json.loads(reply.content) == {"score": 4}

    @pytest.mark.asyncio
    async def test_structured_text_fallback(self, mock_anthropic, backend):
        """JSON text is accepted when no tool call came back."""
        mock_anthropic.post("/v1/messages").mock(
            return_value=Response(
                200,
                json=anthropic_message([{"type": "text", "text": '{"classification": "B"}'}]),
            )
        )

        reply = await backend.chat(MESSAGES, GenerationOptions(force_structured_output=True))

        assert reply.decoded == {"classification": "B"}

    @pytest.mark.asyncio
    async def test_structured_invalid_text(self, mock_anthropic, backend):
        """Non-JSON text fails when structured output was requested."""
        mock_anthropic.post("/v1/messages").mock(
            return_value=Response(
                200, json=anthropic_message([{"type": "text", "text": "Not valid JSON"}])
            )
        )

        with pytest.raises(StructuredDecodeError, match="Failed to parse response"):
            await backend.chat(MESSAGES, GenerationOptions(force_structured_output=True))

    @pytest.mark.asyncio
    async def test_error_status(self, mock_anthropic, backend):
        """A non-success status is a transport error with status and body, sent once."""
        route = mock_anthropic.post("/v1/messages").mock(
            return_value=Response(500, text="server error")
        )

        with pytest.raises(TransportError) as exc_info:
            await backend.chat(MESSAGES, GenerationOptions())

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "server error"
        assert route.call_count == 1

    def test_sdk_accepts_temperature(self):
        """The installed SDK still takes temperature on messages.create."""
        from anthropic.resources.messages import AsyncMessages

        assert "temperature" in inspect.signature(AsyncMessages.create).parameters
