"""Read-only detail view of a user."""

from __future__ import annotations

from ..exceptions import InvalidTransitionError
from ..models.enums import EditStatus
from ..models.selection import Editing, Viewing
from ..models.user import UserRecord
from .selection import SelectionContext

__all__ = ["DetailPresenter"]


class DetailPresenter:
    """Open and close the detail view of a user.

    Opening the detail view replaces an open edit view, since both share the
    same selection. It exposes no way to change the user.

    Parameters
    ----------
    selection
        Selection shared with the edit view.
    """

    def __init__(self, selection: SelectionContext) -> None:
        self._selection = selection

    @property
    def is_open(self) -> bool:
        """Whether the detail view is open."""
        return isinstance(self._selection.state, Viewing)

    @property
    def record(self) -> UserRecord | None:
        """User shown, or `None` if the detail view is closed."""
        state = self._selection.state
        return state.record if isinstance(state, Viewing) else None

    def close(self) -> None:
        """Close the detail view, clearing the selected user.

        Does nothing if the detail view is not the open view.
        """
        if isinstance(self._selection.state, Viewing):
            self._selection.close()

    def fields(self) -> list[tuple[str, str]]:
        """Labelled values to display, empty if the view is closed."""
        record = self.record
        return record.detail_fields() if record else []

    def open(self, record: UserRecord | None) -> None:
        """Show the details of a user.

        Parameters
        ----------
        record
            User to show.

        Raises
        ------
        InvalidTransitionError
            Raised if no user was given or an edit of a user is being
            submitted.
        """
        if record is None:
            raise InvalidTransitionError("No user selected")
        state = self._selection.state
        submitting = EditStatus.submitting
        if isinstance(state, Editing) and state.status == submitting:
            raise InvalidTransitionError("Edit is being submitted")
        self._selection.transition(Viewing(record))
