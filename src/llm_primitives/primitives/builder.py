"""
builder.py

PURPOSE: Turn each primitive's arguments into messages and generation options.
DEPENDENCIES: None beyond this package

ARCHITECTURE NOTES:
Every builder is a pure function: identical arguments always give
byte-identical messages, so prompts can be tested without a backend.
Each prompt is a system message (the answer contract) followed by a
user message (the request). All primitives sample at temperature 0.0.
"""

from dataclasses import dataclass
from typing import Any, Sequence

from llm_primitives.choices import EncodedChoices, encode
from llm_primitives.messages import GenerationOptions, Message
from llm_primitives.primitives.prompts import (
    BINARY_CHOICES,
    CLASSIFY_PROMPT_TEMPLATE,
    CLASSIFY_SYSTEM_PROMPT,
    PARSE_PROMPT_TEMPLATE,
    PARSE_SYSTEM_PROMPT,
    SCORE_FLOAT_SYSTEM_PROMPT,
    SCORE_INT_SYSTEM_PROMPT,
    SCORE_PROMPT_TEMPLATE,
)
from llm_primitives.primitives.schema import render_schema


@dataclass(frozen=True)
class PromptRequest:
    """Messages and options for one chat request."""

    messages: tuple[Message, ...]
    options: GenerationOptions


@dataclass(frozen=True)
class ClassifyPrompt(PromptRequest):
    """A classification prompt, with the label table needed to decode its reply."""

    choices: EncodedChoices | None = None


def _structured_options() -> GenerationOptions:
    return GenerationOptions.builder().temperature(0.0).force_structured_output().build()


def build_classify_prompt(
    instruction: str,
    text: str,
    choices: Sequence[str],
) -> ClassifyPrompt:
    """Ask for ``{"classification": "<LABEL>"}`` over labelled choices."""
    encoded = encode(choices)
    user = CLASSIFY_PROMPT_TEMPLATE.format(
        instruction=instruction,
        text=text,
        choices=encoded.display,
    )
    return ClassifyPrompt(
        messages=(Message.system(CLASSIFY_SYSTEM_PROMPT), Message.user(user)),
        options=_structured_options(),
        choices=encoded,
    )


def build_binary_classify_prompt(instruction: str, text: str) -> ClassifyPrompt:
    """Classification over ``["true", "false"]``: label A is true, B is false."""
    return build_classify_prompt(instruction, text, BINARY_CHOICES)


def build_generate_text_prompt(instruction: str, text: str) -> PromptRequest:
    """Instruction as the system message, text as the user message, verbatim."""
    return PromptRequest(
        messages=(Message.system(instruction), Message.user(text)),
        options=GenerationOptions.builder().temperature(0.0).build(),
    )


def _build_score_prompt(
    system_prompt: str,
    instruction: str,
    text: str,
    min_bound: int | float,
    max_bound: int | float,
) -> PromptRequest:
    # The range is only stated to the model, never enforced on the reply
    user = SCORE_PROMPT_TEMPLATE.format(
        instruction=instruction,
        text=text,
        min_bound=min_bound,
        max_bound=max_bound,
    )
    return PromptRequest(
        messages=(Message.system(system_prompt), Message.user(user)),
        options=_structured_options(),
    )


def build_score_int_prompt(
    instruction: str,
    text: str,
    min_bound: int,
    max_bound: int,
) -> PromptRequest:
    """Ask for ``{"score": int}`` within ``[min_bound, max_bound]``."""
    return _build_score_prompt(SCORE_INT_SYSTEM_PROMPT, instruction, text, min_bound, max_bound)


def build_score_float_prompt(
    instruction: str,
    text: str,
    min_bound: float,
    max_bound: float,
) -> PromptRequest:
    """Ask for ``{"score": float}`` within ``[min_bound, max_bound]``."""
    return _build_score_prompt(SCORE_FLOAT_SYSTEM_PROMPT, instruction, text, min_bound, max_bound)


def build_parse_prompt(text: str, schema: dict[str, Any]) -> PromptRequest:
    """Ask for an object matching ``schema``, which is embedded verbatim."""
    user = PARSE_PROMPT_TEMPLATE.format(text=text, schema=render_schema(schema))
    return PromptRequest(
        messages=(Message.system(PARSE_SYSTEM_PROMPT), Message.user(user)),
        options=_structured_options(),
    )
