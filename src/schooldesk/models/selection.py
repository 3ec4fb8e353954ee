"""Models for the selection shared by the detail and edit views."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import EditStatus, SelectionMode
from .user import UserRecord

__all__ = [
    "Closed",
    "Editing",
    "SelectionState",
    "Viewing",
]


@dataclass(frozen=True, slots=True)
class Closed:
    """No user is selected and neither view is open."""

    @property
    def mode(self) -> SelectionMode:
        return SelectionMode.none


@dataclass(frozen=True, slots=True)
class Viewing:
    """The read-only detail view is open."""

    record: UserRecord
    """User being shown."""

    @property
    def mode(self) -> SelectionMode:
        return SelectionMode.viewing


@dataclass(frozen=True, slots=True)
class Editing:
    """The edit view is open.

    The draft starts as a copy of ``record`` and accumulates the user's
    changes. ``record`` itself is never modified.
    """

    record: UserRecord
    """User as it was when the edit view was opened."""

    draft: UserRecord
    """Unsaved changes."""

    status: EditStatus = EditStatus.open
    """Either ``open`` or ``submitting``."""

    error: str | None = None
    """User-readable message from the last failed submission, if any."""

    @property
    def mode(self) -> SelectionMode:
        return SelectionMode.editing


type SelectionState = Closed | Viewing | Editing
"""Exactly one of the possible selection states."""
