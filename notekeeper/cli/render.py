"""
Rich renderables for notes and categories.
"""

from rich.panel import Panel
from rich.table import Table

from notekeeper.backend.schemas.note import CategoryResponse, NoteResponse


def category_labels(note: NoteResponse) -> str:
    return ", ".join(category.name for category in note.categories) or "-"


def notes_table(notes: list[NoteResponse], title: str = "Notes") -> Table:
    table = Table(title=f"{title} ({len(notes)})", show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Categories")
    table.add_column("Created", style="dim")

    for note in notes:
        title_text = f"[dim]{note.title}[/dim]" if note.archived else note.title
        table.add_row(
            str(note.id),
            title_text,
            category_labels(note),
            note.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def categories_table(categories: list[CategoryResponse]) -> Table:
    table = Table(title=f"Categories ({len(categories)})", show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name")
    for category in categories:
        table.add_row(str(category.id), category.name)
    return table


def note_panel(note: NoteResponse) -> Panel:
    status = "[yellow]archived[/yellow]" if note.archived else "[green]active[/green]"
    body = (
        f"{note.content}\n\n"
        f"[dim]ID: {note.id} | {status} | "
        f"Created: {note.created_at:%Y-%m-%d %H:%M} | "
        f"Categories: {category_labels(note)}[/dim]"
    )
    return Panel(body, title=note.title)
