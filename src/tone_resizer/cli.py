"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from tone_resizer.clients.enhance_client import EnhanceClient
from tone_resizer.clients.llm_client import LLMClient
from tone_resizer.config import load_config
from tone_resizer.models.persona import Persona
from tone_resizer.models.rewrite import DocumentType, RewriteFailure, RewriteRequest
from tone_resizer.pipeline.enhancer import Enhancer
from tone_resizer.utils.sizing import LengthPreset, target_words_for_preset, words_for_height
from tone_resizer.utils.word_count import count_words, estimate_tokens

app = typer.Typer(
    name="tone-resizer",
    help="Rewrite text to a target word count and tone",
    no_args_is_help=True,
)
console = Console()


def _read_text(path: Path) -> str:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run the enhance API server."""
    import uvicorn

    from tone_resizer.api.app import create_app

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    config = load_config()
    api = create_app(config=config)
    if not api.state.enhancer.llm.is_available():
        console.print(
            "[yellow]ANTHROPIC_API_KEY is missing. AI features will be disabled.[/yellow]"
        )
    uvicorn.run(api, host=host or config.server.host, port=port or config.server.port)


@app.command()
def enhance(
    file: Path = typer.Argument(help="Text file to rewrite"),
    tone: str = typer.Option("professional", "--tone", "-t", help="Tone label"),
    words: int = typer.Option(None, "--words", "-w", help="Explicit target word count"),
    preset: LengthPreset = typer.Option(LengthPreset.BALANCED, "--preset", help="Length preset"),
    height: int = typer.Option(None, "--height", help="Target box height in pixels"),
    doc_type: DocumentType = typer.Option(DocumentType.EMAIL, "--type", help="Document type"),
    style: str = typer.Option(None, "--style", help="Persona style"),
    formality: str = typer.Option(None, "--formality", help="Persona formality"),
    context: str = typer.Option(None, "--context", help="Persona context"),
    trait: list[str] = typer.Option(None, "--trait", help="Persona trait (repeatable)"),
    remote: bool = typer.Option(False, "--remote", help="Go through the HTTP server"),
    retry: bool = typer.Option(False, "--retry", help="Retry over-long output (remote only)"),
) -> None:
    """Rewrite FILE toward a target length."""
    content = _read_text(file)
    config = load_config()

    if words is not None:
        target = words
    elif height is not None:
        target = words_for_height(height)
    else:
        target = target_words_for_preset(content, preset)

    overrides = {"style": style, "formality": formality, "context": context, "traits": trait or None}
    overrides = {k: v for k, v in overrides.items() if v is not None}
    tone_descriptor = Persona(**overrides).tone_descriptor(tone) if overrides else tone

    request = RewriteRequest(
        content=content, tone=tone_descriptor, target_words=target, document_type=doc_type
    )

    llm: LLMClient | None = None
    if remote:
        client = EnhanceClient.from_config(config.client)
        call = client.enhance_with_retry if retry else client.enhance
    else:
        llm = LLMClient(
            timeout=config.llm.timeout, base_url=config.llm.base_url, model=config.llm.model
        )
        call = Enhancer(llm, limits=config.limits).enhance

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(f"Rewriting to {target} words...", total=None)
        outcome = asyncio.run(call(request))

    if llm is not None:
        usage = llm.get_token_summary()
        if usage["calls"]:
            console.print(f"[dim]Tokens: {usage['input']} input, {usage['output']} output[/dim]")

    if isinstance(outcome, RewriteFailure):
        console.print(f"[red]{outcome.reason.value}: {outcome.message}[/red]")
        if outcome.draft:
            console.print(Panel(outcome.draft, title=f"Rejected draft ({outcome.word_count} words)"))
        raise typer.Exit(1)

    if outcome.subject:
        console.print(Panel(outcome.subject, title="Subject"))
    console.print(Panel(outcome.body, title=f"{outcome.word_count} words (target {target})"))


@app.command()
def count(file: Path = typer.Argument(help="Text file to count")) -> None:
    """Show word count and token estimate for FILE."""
    content = _read_text(file)
    console.print(f"{count_words(content)} words, ~{estimate_tokens(content)} tokens")


@app.command()
def height(pixels: int = typer.Argument(help="Output box height in pixels")) -> None:
    """Show the target word count for a box height."""
    console.print(f"Target: {words_for_height(pixels)} words")


if __name__ == "__main__":
    app()
