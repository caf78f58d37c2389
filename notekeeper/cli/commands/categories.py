"""
Category Commands.

Commands for listing and creating categories (requires running server).
"""

import asyncio
from typing import NoReturn

import typer
from rich.console import Console

from notekeeper.backend.core.exceptions import ApplicationError
from notekeeper.cli.client import close_api_client
from notekeeper.cli.notes_api import NotesClient
from notekeeper.cli.render import categories_table

app = typer.Typer(help="Category commands")
console = Console()

DEFAULT_CATEGORIES = (
    "Personal",
    "Urgent",
    "Ideas",
    "Reminders",
    "Projects",
    "Study",
    "Finance",
    "Health",
)


def _fail(error: ApplicationError) -> NoReturn:
    console.print(f"[red]Error: {error.message}[/red]")
    raise typer.Exit(1)


@app.command("list")
def list_categories() -> None:
    """List all categories."""
    asyncio.run(_list())


async def _list() -> None:
    client = NotesClient()
    try:
        categories = await client.list_categories()
    except ApplicationError as e:
        _fail(e)
    finally:
        await close_api_client()

    console.print(categories_table(categories))


@app.command()
def add(name: str = typer.Argument(..., help="Category name")) -> None:
    """
    Create a category. Duplicate names are accepted by the server.

    Examples:
        cli.py categories add Work
    """
    asyncio.run(_add(name))


async def _add(name: str) -> None:
    client = NotesClient()
    try:
        category = await client.create_category(name)
    except ApplicationError as e:
        _fail(e)
    finally:
        await close_api_client()

    console.print(f"[green]Created category {category.name} (ID: {category.id})[/green]")


@app.command()
def seed() -> None:
    """
    Create the default demo categories.

    Names that already exist are skipped, so running it twice is harmless.
    """
    asyncio.run(_seed())


async def _seed() -> None:
    client = NotesClient()
    failures = 0
    try:
        try:
            existing = {category.name for category in await client.list_categories()}
        except ApplicationError as e:
            _fail(e)

        for name in DEFAULT_CATEGORIES:
            if name in existing:
                console.print(f"[dim]- {name} already exists[/dim]")
                continue
            try:
                category = await client.create_category(name)
            except ApplicationError as e:
                failures += 1
                console.print(f"[red]✗ {name}: {e.message}[/red]")
                continue
            console.print(f"[green]✓ {category.name} (ID: {category.id})[/green]")
    finally:
        await close_api_client()

    if failures:
        raise typer.Exit(1)
