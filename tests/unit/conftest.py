"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases
or a running server.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from notekeeper.backend.schemas.note import CategoryResponse, NoteResponse

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


# =============================================================================
# Response Model Factories
# =============================================================================


def build_note(
    note_id: int,
    title: str = "Note",
    content: str = "Content",
    archived: bool = False,
    categories: list[tuple[int, str]] | None = None,
    age_minutes: int | None = None,
) -> NoteResponse:
    """
    Build a NoteResponse.

    Higher ids are newer unless `age_minutes` says otherwise.
    """
    created_at = BASE_TIME + timedelta(minutes=note_id if age_minutes is None else -age_minutes)
    return NoteResponse(
        id=note_id,
        title=title,
        content=content,
        archived=archived,
        created_at=created_at,
        categories=[CategoryResponse(id=cid, name=name) for cid, name in categories or []],
    )


@pytest.fixture
def make_note() -> Callable[..., NoteResponse]:
    """Provide the NoteResponse factory."""
    return build_note


@pytest.fixture
def make_category() -> Callable[[int, str], CategoryResponse]:
    """Provide a CategoryResponse factory."""
    def _make(category_id: int, name: str) -> CategoryResponse:
        return CategoryResponse(id=category_id, name=name)

    return _make


# =============================================================================
# Notes API Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_notes_client() -> MagicMock:
    """
    Mock NotesClient with every endpoint as an AsyncMock.

    Usage:
        async def test_board(mock_notes_client):
            mock_notes_client.list_notes.return_value = [note]
            board = NoteBoard(mock_notes_client)
    """
    client = MagicMock()
    client.list_notes = AsyncMock(return_value=[])
    client.get_note = AsyncMock()
    client.create_note = AsyncMock()
    client.update_note = AsyncMock()
    client.delete_note = AsyncMock(return_value=None)
    client.toggle_archive = AsyncMock()
    client.list_categories = AsyncMock(return_value=[])
    client.create_category = AsyncMock()
    client.assign_category = AsyncMock()
    client.remove_category = AsyncMock()
    return client


@pytest.fixture
def mock_api_client() -> MagicMock:
    """
    Mock APIClient whose `request` returns whatever the test sets.

    Usage:
        mock_api_client.request.return_value = httpx.Response(200, json=[])
    """
    api = MagicMock()
    api.request = AsyncMock()
    return api


def api_error(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Body of an ErrorResponse as sent by the server."""
    return {
        "success": False,
        "data": None,
        "error": {"code": code, "message": message, "details": details},
        "metadata": {"timestamp": "2024-01-01T12:00:00", "request_id": "req-1"},
    }


@pytest.fixture
def error_body() -> Callable[..., dict[str, Any]]:
    """Provide the ErrorResponse body builder."""
    return api_error
