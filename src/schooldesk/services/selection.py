"""Selection shared by the detail and edit views."""

from __future__ import annotations

from ..models.enums import SelectionMode
from ..models.selection import Closed, Editing, SelectionState, Viewing
from ..models.user import UserRecord

__all__ = ["SelectionContext"]


class SelectionContext:
    """Holds which user is selected and which view is open over it.

    The detail and edit views are both driven through this single state, so
    at most one of them can be open at a time.
    """

    def __init__(self) -> None:
        self._state: SelectionState = Closed()

    @property
    def mode(self) -> SelectionMode:
        """Which view is open, if any."""
        return self._state.mode

    @property
    def selected_record(self) -> UserRecord | None:
        """User the open view is about, if any."""
        match self._state:
            case Viewing(record=record) | Editing(record=record):
                return record
            case _:
                return None

    @property
    def state(self) -> SelectionState:
        """Current selection state."""
        return self._state

    def close(self) -> None:
        """Close whichever view is open and clear the selection."""
        self._state = Closed()

    def transition(self, state: SelectionState) -> None:
        """Replace the selection state.

        Parameters
        ----------
        state
            New state.
        """
        self._state = state
