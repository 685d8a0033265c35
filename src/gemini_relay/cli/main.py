"""
Gemini Relay CLI

Command-line interface for running the relay server and trying it out
against the Gemini API.
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gemini_relay import (
    ConfigurationError,
    RelayService,
    UpstreamError,
    get_settings,
)
from gemini_relay.api_server.schemas import CompletionRequest
from gemini_relay.constants import DEFAULT_MIME_TYPE, DEFAULT_MODEL
from gemini_relay.logging_utils import configure_logging


app = typer.Typer(
    name="gemini-relay",
    help="OpenAI-style relay for the Google Gemini API.",
    no_args_is_help=True,
)
console = Console()


def _service() -> RelayService:
    return RelayService.from_settings(get_settings())


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", "--host", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (defaults to PORT)"),
    reload: bool = typer.Option(False, "--reload/--no-reload", help="Auto-reload on code changes"),
):
    """
    Run the relay HTTP server.
    """
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)

    effective_port = port or settings.port
    if not settings.google_api_key:
        console.print("[yellow]GOOGLE_API_KEY is not set, every relay call will fail.[/yellow]")

    console.print(f"[bold blue]Gemini relay listening on {host}:{effective_port}[/bold blue]")
    uvicorn.run(
        "gemini_relay.api_server.api:create_app",
        factory=True,
        host=host,
        port=effective_port,
        reload=reload,
        log_config=None,
    )


@app.command("models")
def models():
    """
    List the models available upstream.
    """
    try:
        names = asyncio.run(_service().list_models())
    except ConfigurationError:
        console.print("[red]GOOGLE_API_KEY is not set.[/red]")
        raise typer.Exit(1)
    except UpstreamError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Gemini Models")
    table.add_column("#", style="dim")
    table.add_column("Model", style="cyan")
    for i, name in enumerate(names, start=1):
        table.add_row(str(i), name)

    console.print(table)


@app.command("chat")
def chat(
    prompt: str = typer.Argument(..., help="Prompt text"),
    model: str = typer.Option(DEFAULT_MODEL, "--model", "-m", help="Model to use"),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="Attach a file as inline data"
    ),
    mime_type: str = typer.Option(DEFAULT_MIME_TYPE, "--mime-type", help="MIME type of the attached file"),
):
    """
    Send one prompt through the relay and print the reply.
    """
    request = CompletionRequest(
        model=model,
        prompt=prompt,
        mime_type=mime_type,
        inline_data=file.read_bytes() if file else None,
    )

    try:
        completion = asyncio.run(_service().generate_completion(request))
    except ConfigurationError:
        console.print("[red]GOOGLE_API_KEY is not set.[/red]")
        raise typer.Exit(1)
    except UpstreamError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    for choice in completion.choices:
        console.print(Panel.fit(
            Text(choice.message.content),
            title=f"{completion.model} ({choice.finish_reason})",
            border_style="green",
        ))

    usage = completion.usage
    console.print(
        f"[dim]Tokens: {usage.prompt_tokens} prompt, "
        f"{usage.completion_tokens} completion, {usage.total_tokens} total[/dim]"
    )


@app.command("version")
def version():
    """Show the version."""
    from gemini_relay import __version__
    console.print(f"gemini-relay {__version__}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
