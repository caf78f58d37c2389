"""
Notekeeper.

- backend/: FastAPI service, database models, repositories, services
- cli/: Terminal client (Typer + Rich) and client-side note state
"""
