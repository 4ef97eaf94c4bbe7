"""
config.py

PURPOSE: Configuration loading and settings management.
DEPENDENCIES: pydantic, pydantic-settings

ARCHITECTURE NOTES:
Configuration comes from multiple sources (in priority order):
1. CLI flags (highest priority)
2. Environment variables
3. Defaults (lowest priority)

Provider credentials are read from the provider's standard variable
(OPENAI_API_KEY, ANTHROPIC_API_KEY). Whether a credential is actually
present is checked when a backend is constructed, not here.
"""

import os
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

OPENAI_API_KEY_NAME = "OPENAI_API_KEY"
OPENAI_API_BASE = "https://api.openai.com/v1"
OPENAI_API_CHAT_ENDPOINT = "/chat/completions"

ANTHROPIC_API_KEY_NAME = "ANTHROPIC_API_KEY"

DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"


class LLMSettings(BaseSettings):
    """Settings for chat backends."""

    provider: Literal["openai", "anthropic"] = Field(
        default="openai",
        description="Chat backend to use",
    )
    model: str = Field(
        default=DEFAULT_OPENAI_MODEL,
        description="Model name/ID",
    )
    timeout_seconds: float = Field(
        default=120.0,
        gt=0.0,
        description="Deadline for a single chat request",
    )
    max_tokens: int = Field(
        default=4096,
        gt=0,
        description="Maximum tokens in response (required by Anthropic)",
    )

    # OpenAI-specific
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key (or set OPENAI_API_KEY env var)",
    )
    openai_base_url: str = Field(
        default=OPENAI_API_BASE,
        description="Base URL of an OpenAI-compatible chat completions API",
    )

    # Anthropic-specific
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key (or set ANTHROPIC_API_KEY env var)",
    )

    model_config = {"env_prefix": "LLM_PRIMITIVES_LLM_"}


class OpenTelemetrySettings(BaseSettings):
    """Settings for OpenTelemetry tracing."""

    enabled: bool = Field(
        default=False,
        description="Export spans for every primitive and chat request",
    )
    service_name: str = Field(
        default="llm-primitives",
        description="service.name resource attribute",
    )
    endpoint: str | None = Field(
        default=None,
        description="OTLP gRPC endpoint; console export only when unset",
    )

    model_config = {"env_prefix": "LLM_PRIMITIVES_OTEL_"}


class Settings(BaseSettings):
    """Main library settings."""

    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug output",
    )
    llm: LLMSettings = Field(
        default_factory=LLMSettings,
        description="Chat backend settings",
    )
    otel: OpenTelemetrySettings = Field(
        default_factory=OpenTelemetrySettings,
        description="Tracing settings",
    )

    model_config = {"env_prefix": "LLM_PRIMITIVES_"}


def get_settings() -> Settings:
    """Get settings, loading provider credentials from their standard env vars."""
    llm_settings = LLMSettings()

    # Prefixed variables win over the provider-standard ones
    if not llm_settings.openai_api_key:
        llm_settings.openai_api_key = os.environ.get(OPENAI_API_KEY_NAME, "")
    if not llm_settings.anthropic_api_key:
        llm_settings.anthropic_api_key = os.environ.get(ANTHROPIC_API_KEY_NAME, "")

    return Settings(llm=llm_settings)
