"""
Notes API Client.

Typed wrapper over APIClient for every notes endpoint. Responses are
validated into the backend's response schemas; error responses and
transport failures are raised as application exceptions:

    404        -> NotFoundError
    400, 422   -> ValidationError
    other 4xx/5xx and network errors -> ExternalServiceError
"""

from typing import Any

import httpx

from notekeeper.backend.core.exceptions import (
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from notekeeper.backend.schemas.note import CategoryResponse, NoteResponse
from notekeeper.cli.client import APIClient, get_api_client


def _error_payload(response: httpx.Response) -> tuple[str, dict[str, Any]]:
    """Pull message and details out of an ErrorResponse body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}", {}

    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return f"HTTP {response.status_code}", {}
    return error.get("message", f"HTTP {response.status_code}"), error.get("details") or {}


class NotesClient:
    """
    Client for the notes REST API.

    Usage:
        notes = NotesClient()
        note = await notes.create_note("Groceries", "Milk")
        note = await notes.toggle_archive(note.id)
    """

    def __init__(self, api: APIClient | None = None, prefix: str | None = None) -> None:
        """
        Args:
            api: Underlying HTTP client. Defaults to the shared CLI client.
            prefix: Route prefix. Defaults to application.yaml `api_prefix`.
        """
        if prefix is None:
            from notekeeper.backend.core.config import get_app_config

            prefix = get_app_config().application.api_prefix
        self.api = api or get_api_client()
        self.base_path = f"{prefix.rstrip('/')}/notes"

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded body (None for 204)."""
        try:
            response = await self.api.request(method, f"{self.base_path}{path}", **kwargs)
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Cannot reach the notes API: {e}") from e

        if response.is_success:
            if response.status_code == 204:
                return None
            return response.json()

        message, details = _error_payload(response)
        if response.status_code == 404:
            raise NotFoundError(message)
        if response.status_code in (400, 422):
            raise ValidationError(message, details=details)
        raise ExternalServiceError(message, status_code=response.status_code)

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    async def list_notes(
        self,
        archived: bool | None = None,
        category: str | None = None,
    ) -> list[NoteResponse]:
        """List notes, newest first. None leaves a filter off."""
        params: dict[str, str] = {}
        if archived is not None:
            params["archived"] = "true" if archived else "false"
        if category is not None:
            params["category"] = category

        body = await self._call("GET", "", params=params)
        return [NoteResponse.model_validate(item) for item in body]

    async def get_note(self, note_id: int) -> NoteResponse:
        body = await self._call("GET", f"/{note_id}")
        return NoteResponse.model_validate(body)

    async def create_note(self, title: str, content: str) -> NoteResponse:
        body = await self._call("POST", "", json={"title": title, "content": content})
        return NoteResponse.model_validate(body)

    async def update_note(
        self,
        note_id: int,
        title: str | None = None,
        content: str | None = None,
    ) -> NoteResponse:
        """Update a note. Arguments left as None are not sent."""
        payload = {
            key: value
            for key, value in (("title", title), ("content", content))
            if value is not None
        }
        body = await self._call("PUT", f"/{note_id}", json=payload)
        return NoteResponse.model_validate(body)

    async def delete_note(self, note_id: int) -> None:
        await self._call("DELETE", f"/{note_id}")

    async def toggle_archive(self, note_id: int) -> NoteResponse:
        body = await self._call("PUT", f"/{note_id}/archive")
        return NoteResponse.model_validate(body)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    async def list_categories(self) -> list[CategoryResponse]:
        body = await self._call("GET", "/category")
        return [CategoryResponse.model_validate(item) for item in body]

    async def create_category(self, name: str) -> CategoryResponse:
        body = await self._call("POST", "/category", json={"name": name})
        return CategoryResponse.model_validate(body)

    async def assign_category(self, note_id: int, category_id: int) -> NoteResponse:
        body = await self._call(
            "POST", f"/{note_id}/category", json={"categoryId": category_id}
        )
        return NoteResponse.model_validate(body)

    async def remove_category(self, note_id: int, category_id: int) -> NoteResponse:
        body = await self._call("DELETE", f"/{note_id}/category/{category_id}")
        return NoteResponse.model_validate(body)
