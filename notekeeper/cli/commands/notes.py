"""
Note Commands.

Commands for listing, writing, archiving and tagging notes
(requires running server).
"""

import asyncio
from typing import NoReturn, Optional

import typer
from rich.console import Console

from notekeeper.backend.core.exceptions import ApplicationError
from notekeeper.cli.client import close_api_client
from notekeeper.cli.notes_api import NotesClient
from notekeeper.cli.reconcile import reconcile_categories
from notekeeper.cli.render import note_panel, notes_table

app = typer.Typer(help="Note commands")
console = Console()


def _fail(error: ApplicationError) -> NoReturn:
    console.print(f"[red]Error: {error.message}[/red]")
    raise typer.Exit(1)


@app.command("list")
def list_notes(
    archived: bool = typer.Option(False, "--archived", "-a", help="Show archived notes"),
    show_all: bool = typer.Option(False, "--all", help="Show active and archived notes"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Filter by category name"),
) -> None:
    """
    List notes, newest first.

    Examples:
        cli.py notes list
        cli.py notes list --archived
        cli.py notes list -c Work
    """
    asyncio.run(_list(None if show_all else archived, category))


async def _list(archived: bool | None, category: str | None) -> None:
    client = NotesClient()
    try:
        notes = await client.list_notes(archived=archived, category=category)
    except ApplicationError as e:
        _fail(e)
    finally:
        await close_api_client()

    if archived is None:
        title = "All notes"
    else:
        title = "Archived notes" if archived else "Active notes"
    if category:
        title = f"{title} in {category}"
    console.print(notes_table(notes, title=title))


@app.command()
def show(note_id: int = typer.Argument(..., help="Note ID")) -> None:
    """Show a single note."""
    asyncio.run(_show(note_id))


async def _show(note_id: int) -> None:
    client = NotesClient()
    try:
        note = await client.get_note(note_id)
    except ApplicationError as e:
        _fail(e)
    finally:
        await close_api_client()

    console.print(note_panel(note))


@app.command()
def add(
    title: str = typer.Option(..., "--title", "-t", help="Note title"),
    content: str = typer.Option(..., "--content", "-b", help="Note content"),
) -> None:
    """
    Create a note.

    Examples:
        cli.py notes add -t "Groceries" -b "Milk, eggs"
    """
    asyncio.run(_add(title, content))


async def _add(title: str, content: str) -> None:
    client = NotesClient()
    try:
        note = await client.create_note(title, content)
    except ApplicationError as e:
        _fail(e)
    finally:
        await close_api_client()

    console.print(f"[green]Created note {note.id}[/green]")


@app.command()
def edit(
    note_id: int = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-b", help="New content"),
) -> None:
    """Update the title and/or content of a note."""
    if title is None and content is None:
        console.print("[yellow]Nothing to update. Pass --title and/or --content.[/yellow]")
        raise typer.Exit(1)
    asyncio.run(_edit(note_id, title, content))


async def _edit(note_id: int, title: str | None, content: str | None) -> None:
    client = NotesClient()
    try:
        note = await client.update_note(note_id, title=title, content=content)
    except ApplicationError as e:
        _fail(e)
    finally:
        await close_api_client()

    console.print(note_panel(note))


@app.command()
def archive(note_id: int = typer.Argument(..., help="Note ID")) -> None:
    """Archive an active note, or restore an archived one."""
    asyncio.run(_archive(note_id))


async def _archive(note_id: int) -> None:
    client = NotesClient()
    try:
        note = await client.toggle_archive(note_id)
    except ApplicationError as e:
        _fail(e)
    finally:
        await close_api_client()

    state = "archived" if note.archived else "restored"
    console.print(f"[green]Note {note.id} {state}[/green]")


@app.command()
def delete(
    note_id: int = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Permanently delete a note."""
    if not yes:
        typer.confirm(f"Delete note {note_id}?", abort=True)
    asyncio.run(_delete(note_id))


async def _delete(note_id: int) -> None:
    client = NotesClient()
    try:
        await client.delete_note(note_id)
    except ApplicationError as e:
        _fail(e)
    finally:
        await close_api_client()

    console.print(f"[green]Deleted note {note_id}[/green]")


@app.command()
def tag(
    note_id: int = typer.Argument(..., help="Note ID"),
    category_ids: Optional[list[int]] = typer.Option(
        None, "--category-id", "-c", help="Category ID (repeatable). The note ends up with exactly these."
    ),
) -> None:
    """
    Set the categories of a note.

    Examples:
        cli.py notes tag 3 -c 1 -c 2   # exactly categories 1 and 2
        cli.py notes tag 3             # remove every category
    """
    asyncio.run(_tag(note_id, category_ids or []))


async def _tag(note_id: int, category_ids: list[int]) -> None:
    client = NotesClient()
    try:
        note = await client.get_note(note_id)
        note = await reconcile_categories(client, note, category_ids)
    except ApplicationError as e:
        _fail(e)
    finally:
        await close_api_client()

    console.print(note_panel(note))
