"""
model.py

PURPOSE: Public facade exposing the six primitives.
DEPENDENCIES: pydantic (through the schema provider and decoder)

ARCHITECTURE NOTES:
Each primitive is build prompt -> one backend call -> decode.
The facade holds only immutable configuration (the backend and the
schema provider), so one instance can serve any number of concurrent
calls. Errors are stamped with the primitive's name and re-raised;
nothing is retried.
Includes OpenTelemetry tracing.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Sequence, TypeVar

from llm_primitives.config import DEFAULT_ANTHROPIC_MODEL, DEFAULT_OPENAI_MODEL, Settings
from llm_primitives.errors import PrimitiveError
from llm_primitives.llm.anthropic import AnthropicBackend, create_anthropic_backend
from llm_primitives.llm.backend import ChatBackend
from llm_primitives.llm.openai import OpenAIBackend, create_openai_backend
from llm_primitives.observability import get_tracer
from llm_primitives.primitives import builder, decoder
from llm_primitives.primitives.schema import PydanticSchemaProvider, SchemaProvider

T = TypeVar("T")

tracer = get_tracer(__name__)


@contextmanager
def _primitive(name: str) -> Iterator[None]:
    """Trace one primitive call and tag any failure with its name."""
    with tracer.start_as_current_span(f"primitive.{name}"):
        try:
            yield
        except PrimitiveError as e:
            e.operation = name
            raise


class Model:
    """
    Natural-language primitives on top of a chat backend.

    Args:
        backend: The chat backend every primitive sends its request to
        schema_provider: Derives JSON Schema for ``parse`` targets
            (defaults to pydantic's generator)

    Example:
        >>> model = Model.from_openai("gpt-4o")
        >>> await model.classify(
        ...     "Determine the sentiment of the text",
        ...     "I love this product",
        ...     ["Positive", "Negative", "Neutral"],
        ... )
        0
    """

    def __init__(
        self,
        backend: ChatBackend,
        schema_provider: SchemaProvider | None = None,
    ):
        self._backend = backend
        self._schema_provider = schema_provider or PydanticSchemaProvider()

    @classmethod
    def from_openai(cls, model: str = DEFAULT_OPENAI_MODEL, api_key: str | None = None) -> "Model":
        """
        Create a model backed by OpenAI chat completions.

        Raises:
            ConfigurationError: If no API key is given and OPENAI_API_KEY is unset.
        """
        return cls(OpenAIBackend(model=model, api_key=api_key))

    @classmethod
    def from_anthropic(
        cls, model: str = DEFAULT_ANTHROPIC_MODEL, api_key: str | None = None
    ) -> "Model":
        """
        Create a model backed by Anthropic Claude.

        Raises:
            ConfigurationError: If no API key is given and ANTHROPIC_API_KEY is unset.
        """
        return cls(AnthropicBackend(model=model, api_key=api_key))

    @classmethod
    def from_settings(cls, settings: Settings) -> "Model":
        """Create a model for the configured provider."""
        if settings.llm.provider == "anthropic":
            llm_settings = settings.llm
            if llm_settings.model == DEFAULT_OPENAI_MODEL:
                llm_settings = llm_settings.model_copy(update={"model": DEFAULT_ANTHROPIC_MODEL})
            return cls(create_anthropic_backend(llm_settings))
        return cls(create_openai_backend(settings.llm))

    @property
    def backend(self) -> ChatBackend:
        return self._backend

    async def classify(self, instruction: str, text: str, choices: Sequence[str]) -> int:
        """
        Pick one of ``choices`` for ``text``.

        Args:
            instruction: What to classify by
            text: The text to classify
            choices: Options, shown to the model as ``A. ...``, ``B. ...``

        Returns:
            Zero-based index into ``choices``

        Raises:
            ChatError: The request failed or the reply was not a JSON object
            DecodeError: The reply did not name one of the offered labels
        """
        with _primitive("classify"):
            prompt = builder.build_classify_prompt(instruction, text, choices)
            reply = await self._backend.chat(prompt.messages, prompt.options)
            return decoder.decode_classification(reply, prompt.choices)

    async def binary_classify(self, instruction: str, text: str) -> bool:
        """Answer ``instruction`` about ``text`` with true or false."""
        with _primitive("binary_classify"):
            prompt = builder.build_binary_classify_prompt(instruction, text)
            reply = await self._backend.chat(prompt.messages, prompt.options)
            return decoder.decode_binary_classification(reply, prompt.choices)

    async def generate_text(self, instruction: str, text: str) -> str:
        """Free-text reply to ``text``, with ``instruction`` as the system prompt."""
        with _primitive("generate_text"):
            prompt = builder.build_generate_text_prompt(instruction, text)
            reply = await self._backend.chat(prompt.messages, prompt.options)
            return decoder.decode_text(reply)

    async def score_int(self, instruction: str, text: str, min_bound: int, max_bound: int) -> int:
        """
        Integer score for ``text``.

        The bounds are stated in the prompt only; the model's score is
        returned as received even when it falls outside them.
        """
        with _primitive("score_int"):
            prompt = builder.build_score_int_prompt(instruction, text, min_bound, max_bound)
            reply = await self._backend.chat(prompt.messages, prompt.options)
            return decoder.decode_int_score(reply)

    async def score_float(
        self, instruction: str, text: str, min_bound: float, max_bound: float
    ) -> float:
        """Float score for ``text``; bounds are advisory, as for score_int."""
        with _primitive("score_float"):
            prompt = builder.build_score_float_prompt(instruction, text, min_bound, max_bound)
            reply = await self._backend.chat(prompt.messages, prompt.options)
            return decoder.decode_float_score(reply)

    async def parse(self, target: type[T], text: str) -> T:
        """
        Extract an instance of ``target`` from ``text``.

        Args:
            target: A pydantic model, dataclass or TypedDict
            text: Free text describing the value

        Raises:
            SchemaMismatchError: The reply does not deserialize into ``target``
        """
        with _primitive("parse"):
            schema = self._schema_provider.schema_for(target)
            prompt = builder.build_parse_prompt(text, schema)
            reply = await self._backend.chat(prompt.messages, prompt.options)
            return decoder.decode_parsed(reply, target)
