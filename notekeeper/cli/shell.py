"""
Interactive Shell Mode.

REPL over a NoteBoard: the shell keeps the current view (active or
archived, plus an optional category filter) between commands and
redraws the note list after every change.
"""

import shlex
from typing import Awaitable, Callable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from notekeeper.backend.core.exceptions import ApplicationError
from notekeeper.cli.client import close_api_client
from notekeeper.cli.notes_api import NotesClient
from notekeeper.cli.render import categories_table, note_panel, notes_table
from notekeeper.cli.state import NoteBoard, SyncStrategy, ViewMode

console = Console()


class ShellUsageError(Exception):
    """Raised when a shell command gets the wrong arguments."""


def _note_id(args: list[str], usage: str) -> int:
    if not args or not args[0].isdigit():
        raise ShellUsageError(usage)
    return int(args[0])


class InteractiveShell:
    """
    Interactive shell for note commands.

    Usage:
        shell = InteractiveShell(NoteBoard(NotesClient()))
        await shell.run()
    """

    def __init__(self, board: NoteBoard) -> None:
        self.board = board
        self.running = False
        self.commands: dict[str, Callable[[list[str]], Awaitable[None]]] = {
            "help": self._cmd_help,
            "list": self._cmd_list,
            "refresh": self._cmd_refresh,
            "view": self._cmd_view,
            "filter": self._cmd_filter,
            "show": self._cmd_show,
            "add": self._cmd_add,
            "edit": self._cmd_edit,
            "archive": self._cmd_archive,
            "delete": self._cmd_delete,
            "categories": self._cmd_categories,
            "category": self._cmd_category,
            "tag": self._cmd_tag,
            "clear": self._cmd_clear,
            "quit": self._cmd_quit,
            "exit": self._cmd_quit,
        }

    async def run(self) -> None:
        """Run the interactive shell."""
        self.running = True

        console.print(Panel(
            "[bold]Notekeeper Shell[/bold]\n"
            "Type [cyan]help[/cyan] for available commands, [cyan]quit[/cyan] to exit.",
            title="Welcome",
        ))

        await self.execute("list")

        while self.running:
            try:
                user_input = console.input(f"[bold cyan]{self._prompt()}>[/bold cyan] ").strip()
            except KeyboardInterrupt:
                console.print("\n[dim]Use 'quit' to exit[/dim]")
                continue
            except EOFError:
                break

            if user_input:
                await self.execute(user_input)

        await close_api_client()
        console.print("[dim]Goodbye![/dim]")

    async def execute(self, line: str) -> None:
        """Parse and run one command line."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            return

        command, args = parts[0].lower(), parts[1:]
        handler = self.commands.get(command)
        if handler is None:
            console.print(f"[red]Unknown command: {command}[/red]")
            console.print("Type [cyan]help[/cyan] for available commands.")
            return

        try:
            await handler(args)
        except ShellUsageError as e:
            console.print(f"[yellow]Usage: {e}[/yellow]")
        except ApplicationError as e:
            console.print(f"[red]{self.board.error or e.message}[/red]")

    def _prompt(self) -> str:
        prompt = self.board.view_mode.value
        if self.board.selected_category:
            prompt = f"{prompt}:{self.board.selected_category}"
        return prompt

    def _print_notes(self) -> None:
        title = "Archived notes" if self.board.view_mode is ViewMode.ARCHIVED else "Active notes"
        if self.board.selected_category:
            title = f"{title} in {self.board.selected_category}"
        console.print(notes_table(self.board.notes, title=title))

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    async def _cmd_help(self, args: list[str]) -> None:
        table = Table(title="Available Commands", show_header=True)
        table.add_column("Command", style="cyan")
        table.add_column("Description")

        table.add_row("list", "Show the notes in the current view")
        table.add_row("refresh", "Reload notes and categories from the server")
        table.add_row("view active|archived", "Switch between active and archived notes")
        table.add_row("filter <name> | filter", "Only notes in a category / all notes")
        table.add_row("show <id>", "Show one note")
        table.add_row("add <title> <content>", "Create a note")
        table.add_row("edit <id> title|content <text>", "Change a note")
        table.add_row("archive <id>", "Archive or restore a note")
        table.add_row("delete <id>", "Delete a note")
        table.add_row("categories", "List categories")
        table.add_row("category <name>", "Create a category")
        table.add_row("tag <id> [category ids...]", "Set exactly these categories on a note")
        table.add_row("clear", "Clear the screen")
        table.add_row("quit / exit", "Exit the shell")

        console.print(table)

    async def _cmd_list(self, args: list[str]) -> None:
        if not self.board.notes and not self.board.categories:
            await self.board.refresh()
        self._print_notes()

    async def _cmd_refresh(self, args: list[str]) -> None:
        await self.board.refresh()
        self._print_notes()

    async def _cmd_view(self, args: list[str]) -> None:
        try:
            mode = ViewMode(args[0].lower()) if args else None
        except ValueError:
            mode = None
        if mode is None:
            raise ShellUsageError("view active|archived")
        await self.board.set_view_mode(mode)
        self._print_notes()

    async def _cmd_filter(self, args: list[str]) -> None:
        await self.board.select_category(" ".join(args) if args else None)
        self._print_notes()

    async def _cmd_show(self, args: list[str]) -> None:
        note_id = _note_id(args, "show <id>")
        note = await self.board.get_note(note_id)
        console.print(note_panel(note))

    async def _cmd_add(self, args: list[str]) -> None:
        if len(args) != 2:
            raise ShellUsageError('add "<title>" "<content>"')
        note = await self.board.create_note(args[0], args[1])
        console.print(f"[green]Created note {note.id}[/green]")
        self._print_notes()

    async def _cmd_edit(self, args: list[str]) -> None:
        usage = 'edit <id> title|content "<text>"'
        note_id = _note_id(args, usage)
        if len(args) != 3 or args[1] not in ("title", "content"):
            raise ShellUsageError(usage)
        await self.board.update_note(note_id, **{args[1]: args[2]})
        self._print_notes()

    async def _cmd_archive(self, args: list[str]) -> None:
        note = await self.board.toggle_archive(_note_id(args, "archive <id>"))
        console.print(f"[green]Note {note.id} {'archived' if note.archived else 'restored'}[/green]")
        self._print_notes()

    async def _cmd_delete(self, args: list[str]) -> None:
        note_id = _note_id(args, "delete <id>")
        await self.board.delete_note(note_id)
        console.print(f"[green]Deleted note {note_id}[/green]")
        self._print_notes()

    async def _cmd_categories(self, args: list[str]) -> None:
        console.print(categories_table(self.board.categories))

    async def _cmd_category(self, args: list[str]) -> None:
        if not args:
            raise ShellUsageError("category <name>")
        category = await self.board.create_category(" ".join(args))
        console.print(f"[green]Created category {category.name} (ID: {category.id})[/green]")

    async def _cmd_tag(self, args: list[str]) -> None:
        usage = "tag <id> [category ids...]"
        note_id = _note_id(args, usage)
        if not all(arg.isdigit() for arg in args[1:]):
            raise ShellUsageError(usage)
        note = await self.board.set_note_categories(note_id, [int(arg) for arg in args[1:]])
        console.print(note_panel(note))

    async def _cmd_clear(self, args: list[str]) -> None:
        console.clear()

    async def _cmd_quit(self, args: list[str]) -> None:
        self.running = False


async def run_shell(strategy: SyncStrategy = SyncStrategy.RELOAD) -> None:
    """Run the interactive shell."""
    shell = InteractiveShell(NoteBoard(NotesClient(), strategy=strategy))
    await shell.run()
