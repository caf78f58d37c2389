"""
CLI Client Module.

Terminal client built with Typer and Rich for the notes API.

Architecture:
- CLI is a thin presentation layer over the HTTP API (httpx)
- NotesClient maps every endpoint to a typed call
- NoteBoard mirrors the notes of the current view for the interactive shell
- Sends X-Frontend-ID: cli header for log routing

Usage:
    python cli.py --help
    python cli.py notes list --archived
    python cli.py shell
"""
