"""
cli.py

PURPOSE: Command-line interface for the primitives.
DEPENDENCIES: typer, rich

ARCHITECTURE NOTES:
One command per primitive, plus ``config`` to inspect settings.
Every command builds a Model from settings (provider and model can be
overridden with global options), runs a single primitive and prints
the result. Primitive failures print in red and exit with status 1.
"""

import asyncio
import importlib
import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, Any, Literal, TypeVar

import typer
from pydantic import TypeAdapter
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from llm_primitives import __version__
from llm_primitives.config import Settings, get_settings
from llm_primitives.errors import PrimitiveError
from llm_primitives.observability import init_telemetry, shutdown_telemetry
from llm_primitives.primitives import Model

T = TypeVar("T")

app = typer.Typer(
    name="llm-primitives",
    help="Classify, score, generate and parse text with an LLM.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def print_error(text: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]{escape(text)}[/red]")


def print_success(text: str) -> None:
    """Print a result."""
    console.print(f"[green]{escape(text)}[/green]")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"llm-primitives version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    provider: Annotated[
        str | None,
        typer.Option(
            "--provider",
            "-p",
            help="Chat backend: openai or anthropic",
        ),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option(
            "--model",
            "-m",
            help="Model name/ID",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Log request details",
        ),
    ] = False,
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """llm-primitives - typed natural-language primitives."""
    settings = get_settings()

    if provider is not None:
        if provider not in ("openai", "anthropic"):
            print_error(f"Unknown provider: {provider}")
            raise typer.Exit(2)
        settings.llm.provider = provider
    if model is not None:
        settings.llm.model = model

    level = "DEBUG" if verbose or settings.debug else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    init_telemetry(settings.otel)

    ctx.obj = settings


def _run(ctx: typer.Context, call: Callable[[Model], Awaitable[T]]) -> T:
    """Build a Model from settings, run one primitive and map failures to exit codes."""
    settings: Settings = ctx.obj
    try:
        model = Model.from_settings(settings)
        return asyncio.run(call(model))
    except PrimitiveError as e:
        print_error(str(e))
        raise typer.Exit(1) from None
    finally:
        shutdown_telemetry()


@app.command()
def classify(
    ctx: typer.Context,
    instruction: Annotated[str, typer.Argument(help="What to classify by")],
    text: Annotated[str, typer.Argument(help="Text to classify")],
    choices: Annotated[list[str], typer.Argument(help="Choices to pick from")],
) -> None:
    """Pick one of CHOICES for TEXT."""
    index = _run(ctx, lambda model: model.classify(instruction, text, choices))
    print_success(f"{index}: {choices[index]}")


@app.command("binary-classify")
def binary_classify(
    ctx: typer.Context,
    instruction: Annotated[str, typer.Argument(help="True/false question about the text")],
    text: Annotated[str, typer.Argument(help="Text to classify")],
) -> None:
    """Answer INSTRUCTION about TEXT with true or false."""
    result = _run(ctx, lambda model: model.binary_classify(instruction, text))
    print_success(str(result).lower())


@app.command("generate-text")
def generate_text(
    ctx: typer.Context,
    instruction: Annotated[str, typer.Argument(help="System instruction")],
    text: Annotated[str, typer.Argument(help="User message")],
) -> None:
    """Generate free text in reply to TEXT."""
    result = _run(ctx, lambda model: model.generate_text(instruction, text))
    console.print(result, markup=False, highlight=False)


@app.command("score-int")
def score_int(
    ctx: typer.Context,
    instruction: Annotated[str, typer.Argument(help="How to score")],
    text: Annotated[str, typer.Argument(help="Text to score")],
    min_bound: Annotated[int, typer.Option("--min", help="Lowest score")] = 1,
    max_bound: Annotated[int, typer.Option("--max", help="Highest score")] = 5,
) -> None:
    """Score TEXT with an integer."""
    result = _run(ctx, lambda model: model.score_int(instruction, text, min_bound, max_bound))
    print_success(str(result))


@app.command("score-float")
def score_float(
    ctx: typer.Context,
    instruction: Annotated[str, typer.Argument(help="How to score")],
    text: Annotated[str, typer.Argument(help="Text to score")],
    min_bound: Annotated[float, typer.Option("--min", help="Lowest score")] = 0.0,
    max_bound: Annotated[float, typer.Option("--max", help="Highest score")] = 1.0,
) -> None:
    """Score TEXT with a float."""
    result = _run(ctx, lambda model: model.score_float(instruction, text, min_bound, max_bound))
    print_success(str(result))


def load_target(path: str) -> Any:
    """Import a parse target given as ``package.module:Name``."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise typer.BadParameter(f"expected module:Name, got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"cannot import {module_name}: {e}") from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise typer.BadParameter(f"{module_name} has no attribute {attr}") from e


@app.command()
def parse(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Text to parse")],
    target: Annotated[
        str,
        typer.Option(
            "--target",
            "-t",
            help="Type to parse into, as module:Name (pydantic model, dataclass or TypedDict)",
        ),
    ],
) -> None:
    """Parse TEXT into an instance of TARGET."""
    target_type = load_target(target)
    result = _run(ctx, lambda model: model.parse(target_type, text))
    console.print_json(TypeAdapter(target_type).dump_json(result).decode())


@app.command()
def config(ctx: typer.Context) -> None:
    """Show current configuration."""
    settings: Settings = ctx.obj
    provider: Literal["openai", "anthropic"] = settings.llm.provider
    api_key = settings.llm.openai_api_key if provider == "openai" else settings.llm.anthropic_api_key

    console.print("[bold]LLM Settings:[/bold]")
    console.print(f"  Provider: {provider}")
    console.print(f"  Model: {settings.llm.model}")
    console.print(f"  API key: {'set' if api_key else '[red]not set[/red]'}")
    if provider == "openai":
        console.print(f"  Base URL: {settings.llm.openai_base_url}")
    console.print(f"  Timeout: {settings.llm.timeout_seconds}s")
    console.print()
    console.print("[bold]Telemetry:[/bold]")
    console.print(f"  Enabled: {settings.otel.enabled}")
    console.print(f"  Service name: {settings.otel.service_name}")
    endpoint_status = settings.otel.endpoint if settings.otel.endpoint else "(console only)"
    console.print(f"  Endpoint: {endpoint_status}")


if __name__ == "__main__":
    app()
