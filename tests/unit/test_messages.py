"""
TEST DOC: Message Model

WHAT: Tests for Message and GenerationOptions
WHY: Backends and the prompt builder share these types
HOW: Construct values directly and through the builder

CASES:
- Builder defaults to temperature 0.0 and no structured output
- Builder setters chain
- Messages serialize to role/content only

EDGE CASES:
- Options and messages are immutable
"""

import dataclasses

import pytest

from llm_primitives.messages import GenerationOptions, Message, Role


class TestGenerationOptions:
    """Tests for GenerationOptions and its builder."""

    def test_builder_defaults(self):
        """Default options are deterministic plain text."""
        options = GenerationOptions.builder().build()
        assert options.temperature == 0.0
        assert options.force_structured_output is False
        assert options == GenerationOptions()

    def test_builder_chaining(self):
        """Setters return the builder."""
        options = GenerationOptions.builder().temperature(0.5).force_structured_output().build()
        assert options == GenerationOptions(temperature=0.5, force_structured_output=True)

    def test_immutable(self):
        """Built options cannot be changed."""
        options = GenerationOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.temperature = 1.0  # type: ignore[misc]


class TestMessage:
    """Tests for Message."""

    def test_constructors(self):
        """system() and user() set the role."""
        assert Message.system("s").role is Role.SYSTEM
        assert Message.user("u").role is Role.USER
        assert Message.user("u").decoded is None

    def test_to_wire_drops_decoded(self):
        """Only role and content go over the wire."""
        message = Message(role=Role.ASSISTANT, content='{"a": 1}', decoded={"a": 1})
        assert message.to_wire() == {"role": "assistant", "content": '{"a": 1}'}

    def test_role_values(self):
        """Roles use the provider wire names."""
        assert [role.value for role in Role] == ["system", "assistant", "user"]
        with pytest.raises(ValueError):
            Role("tool")
