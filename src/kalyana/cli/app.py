"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..config import ClientSettings, GatewaySettings
from ..exceptions import ConfigurationError
from ..log import configure_logging
from ..session import split_citation
from .providers import get_gateway, get_gateway_client, get_history_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="kalyana",
    help="Dhamma reflection companion: terminal chat client and Anthropic gateway",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _client_settings(
    gateway_url: str | None = None,
    history_dir: Path | None = None,
) -> ClientSettings:
    """Environment settings with command-line overrides applied."""
    try:
        settings = ClientSettings.from_env()
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    overrides: dict[str, object] = {}
    if gateway_url:
        overrides["gateway_url"] = gateway_url
    if history_dir:
        overrides["history_dir"] = history_dir.expanduser()
    return settings.model_copy(update=overrides) if overrides else settings


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    log_level: str = typer.Option("info", "--log-level", "-l", help="Log level"),
):
    """Run the gateway as an HTTP service."""
    import uvicorn

    from ..gateway.asgi import create_app

    configure_logging(log_level, console=console)
    try:
        settings = GatewaySettings.from_env()
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    if not settings.api_key:
        console.print(
            "[yellow]Warning: ANTHROPIC_API_KEY not set; "
            "chat requests will be answered with a 500 error[/yellow]"
        )

    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(f"[dim]Gateway listening on http://{bind_host}:{bind_port}/api/chat[/dim]")
    uvicorn.run(
        create_app(get_gateway(settings)),
        host=bind_host,
        port=bind_port,
        log_level=log_level.lower(),
    )


@app.command()
def chat(
    gateway_url: str | None = typer.Option(
        None,
        "--gateway-url",
        "-g",
        help="Gateway endpoint (default: run the gateway in this process)"
    ),
    history_dir: Path | None = typer.Option(
        None,
        "--history-dir",
        help="Directory holding the conversation history"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level for the session log file"
    ),
):
    """Open the terminal chat."""
    from ..session import SessionController
    from ..ui import run_textual_tui

    settings = _client_settings(gateway_url, history_dir)
    # The TUI owns the terminal, so log records go to a file
    configure_logging(log_level or settings.log_level, log_file=settings.log_file)

    async def _chat():
        async with get_gateway_client(settings, console) as client:
            controller = SessionController(client, get_history_store(settings))
            await run_textual_tui(controller)

    asyncio.run(_chat())


@app.command()
def history(
    limit: int = typer.Option(
        20,
        "--limit",
        "-n",
        help="Number of most recent turns to show"
    ),
    history_dir: Path | None = typer.Option(
        None,
        "--history-dir",
        help="Directory holding the conversation history"
    ),
):
    """Show the remembered conversation."""
    settings = _client_settings(history_dir=history_dir)
    turns = get_history_store(settings).load()

    if not turns:
        console.print("[dim]No conversation remembered on this device.[/dim]")
        return

    table = Table(title=f"Kalyana history ({len(turns)} turns)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Speaker", style="bold")
    table.add_column("Message")
    table.add_column("Citation", style="italic green")

    shown = turns[-limit:] if limit > 0 else turns
    offset = len(turns) - len(shown)
    for i, turn in enumerate(shown, offset + 1):
        main, citation = split_citation(turn.content)
        speaker = "You" if turn.role == "user" else ("Guide (closing)" if turn.closing else "Guide")
        table.add_row(str(i), speaker, main, citation)

    console.print(table)


@app.command()
def reset(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip the confirmation prompt"
    ),
    history_dir: Path | None = typer.Option(
        None,
        "--history-dir",
        help="Directory holding the conversation history"
    ),
):
    """Forget the remembered conversation."""
    settings = _client_settings(history_dir=history_dir)
    store = get_history_store(settings)

    if not store.load():
        console.print("[dim]Nothing to clear.[/dim]")
        return

    if not yes and not typer.confirm("Clear the remembered conversation?"):
        console.print("[dim]Aborted.[/dim]")
        return

    store.clear()
    console.print("[green]History cleared.[/green]")


@app.command()
def health():
    """Show configuration status."""
    try:
        gateway_settings = GatewaySettings.from_env()
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    settings = _client_settings()
    store = get_history_store(settings)

    table = Table(title="Kalyana configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    key_status = "[green]set[/green]" if gateway_settings.api_key else "[red]missing[/red]"
    table.add_row("ANTHROPIC_API_KEY", key_status)
    table.add_row("Model", gateway_settings.model)
    table.add_row("Max tokens", str(gateway_settings.max_tokens))
    table.add_row("Gateway", settings.gateway_url or "in-process")
    table.add_row("History backend", store.backend_type)
    table.add_row("History location", str(settings.history_dir))
    table.add_row("Remembered turns", str(len(store.load())))

    console.print(table)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
