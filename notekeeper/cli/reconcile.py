"""
Category Reconciliation.

The API only attaches or detaches one category at a time. To make a
note's categories equal a target set, compute the difference against
the current set and issue one call per changed id:

    to_add    = target - current
    to_remove = current - target

Calls run one after another. A failing call stops the run and
propagates; calls that already succeeded stay applied.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from notekeeper.backend.core.logging import get_logger, log_with_source
from notekeeper.backend.schemas.note import NoteResponse
from notekeeper.cli.notes_api import NotesClient

logger = get_logger(__name__)


@dataclass(frozen=True)
class CategoryPlan:
    """Category ids to attach and detach, each sorted ascending."""

    to_add: tuple[int, ...] = ()
    to_remove: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove


def plan_category_changes(current: Iterable[int], target: Iterable[int]) -> CategoryPlan:
    """Compute the calls that turn the current category ids into the target ids."""
    current_ids = set(current)
    target_ids = set(target)
    return CategoryPlan(
        to_add=tuple(sorted(target_ids - current_ids)),
        to_remove=tuple(sorted(current_ids - target_ids)),
    )


async def apply_category_plan(
    client: NotesClient,
    note_id: int,
    plan: CategoryPlan,
) -> NoteResponse | None:
    """
    Execute a plan against the API.

    Returns:
        The note as returned by the last call, or None for an empty plan
    """
    note: NoteResponse | None = None

    for category_id in plan.to_remove:
        note = await client.remove_category(note_id, category_id)
    for category_id in plan.to_add:
        note = await client.assign_category(note_id, category_id)

    if not plan.is_empty:
        log_with_source(
            logger,
            "cli",
            "info",
            "Note categories reconciled",
            note_id=note_id,
            added=list(plan.to_add),
            removed=list(plan.to_remove),
        )
    return note


async def reconcile_categories(
    client: NotesClient,
    note: NoteResponse,
    target: Iterable[int],
) -> NoteResponse:
    """Bring a note's categories to exactly `target` and return the updated note."""
    plan = plan_category_changes(note.category_ids(), target)
    updated = await apply_category_plan(client, note.id, plan)
    return updated or note
