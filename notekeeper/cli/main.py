"""
Notekeeper CLI.

Typer application with command groups for the notes API, categories,
health checks and the development server, plus an interactive shell.
"""

import asyncio

import typer
from rich.console import Console

from notekeeper.backend.core.config import find_project_root
from notekeeper.cli.commands import categories_app, health_app, notes_app, server_app
from notekeeper.cli.state import SyncStrategy

app = typer.Typer(
    name="notekeeper",
    help="Notekeeper CLI - Notes, categories, health checks and server management.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(notes_app, name="notes")
app.add_typer(categories_app, name="categories")
app.add_typer(health_app, name="health")
app.add_typer(server_app, name="server")


def _validate_project_root() -> None:
    """Validate that we're running inside the project."""
    try:
        find_project_root()
    except RuntimeError:
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.command()
def shell(
    patch: bool = typer.Option(
        False,
        "--patch",
        help="Apply server responses to the cached list instead of reloading it",
    ),
) -> None:
    """
    Start interactive shell mode.

    Keeps the current view (active/archived, category filter) between commands.
    """
    from notekeeper.cli.shell import run_shell

    asyncio.run(run_shell(SyncStrategy.PATCH if patch else SyncStrategy.RELOAD))


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notekeeper CLI.

    Most commands talk to a running server (see `server start`).
    """
    _validate_project_root()

    if debug:
        from notekeeper.backend.core.logging import setup_logging
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        from notekeeper.backend.core.logging import setup_logging
        setup_logging(level="INFO", format_type="console")


if __name__ == "__main__":
    app()
