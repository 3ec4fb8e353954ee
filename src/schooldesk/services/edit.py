"""Edit sessions for a single user."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

import structlog
from structlog.stdlib import BoundLogger

from ..cache import RosterCache
from ..constants import UPDATE_ERROR_PREFIX
from ..exceptions import (
    DirectoryError,
    ImmutableFieldError,
    InvalidTransitionError,
    SubmitInProgressError,
    UnknownFieldError,
)
from ..models.enums import EditStatus
from ..models.selection import Closed, Editing
from ..models.user import (
    EDITABLE_FIELDS,
    IMMUTABLE_FIELDS,
    UserPatch,
    UserRecord,
)
from ..storage.directory import DirectoryGateway
from .selection import SelectionContext

__all__ = ["EditCoordinator"]


class EditCoordinator:
    """Drive the edit view of a user through to a directory update.

    The edit view moves from closed to open when a user is selected, to
    submitting while the update is in flight, and then either closes on
    success or returns to open with the draft preserved and an error message
    set on failure. Failed updates are never retried.

    After a successful update, the whole roster is fetched again rather than
    patched with the draft, so the roster only ever shows what the directory
    actually stored.

    Parameters
    ----------
    gateway
        Directory to send updates to.
    selection
        Selection shared with the detail view.
    roster
        Roster cache to refresh after a successful update.
    logger
        Logger to use. If not given, the default structlog logger will be
        used.
    """

    def __init__(
        self,
        gateway: DirectoryGateway,
        selection: SelectionContext,
        roster: RosterCache,
        *,
        logger: BoundLogger | None = None,
    ) -> None:
        self._gateway = gateway
        self._selection = selection
        self._roster = roster
        self._logger = logger or structlog.get_logger("schooldesk")

    @property
    def draft(self) -> UserRecord | None:
        """Unsaved changes, or `None` if no edit is open."""
        state = self._selection.state
        return state.draft if isinstance(state, Editing) else None

    @property
    def error(self) -> str | None:
        """Message from the last failed submission of the open edit."""
        state = self._selection.state
        return state.error if isinstance(state, Editing) else None

    @property
    def record(self) -> UserRecord | None:
        """User as it was when the edit was opened."""
        state = self._selection.state
        return state.record if isinstance(state, Editing) else None

    @property
    def status(self) -> EditStatus:
        """Current state of the edit view."""
        state = self._selection.state
        if isinstance(state, Editing):
            return state.status
        return EditStatus.closed

    def close(self) -> None:
        """Close the edit view and discard the draft.

        Does nothing if the edit view is not the open view.

        Raises
        ------
        SubmitInProgressError
            Raised if the draft is being submitted.
        """
        state = self._selection.state
        if not isinstance(state, Editing):
            return
        if state.status == EditStatus.submitting:
            raise SubmitInProgressError("Edit is being submitted")
        self._selection.close()

    def open(self, record: UserRecord | None) -> None:
        """Start editing a user.

        Parameters
        ----------
        record
            User to edit. The draft starts as a copy of this record.

        Raises
        ------
        InvalidTransitionError
            Raised if no user was given.
        SubmitInProgressError
            Raised if another edit is being submitted.
        """
        if record is None:
            raise InvalidTransitionError("No user selected")
        if self.status == EditStatus.submitting:
            raise SubmitInProgressError("Edit is being submitted")
        draft = record.model_copy()
        self._selection.transition(Editing(record=record, draft=draft))

    def update_draft(self, **changes: Any) -> UserRecord:
        """Change fields of the draft.

        Parameters
        ----------
        **changes
            New values, keyed by `~schooldesk.models.user.UserRecord` field
            name. The identifier and role may be given only if unchanged.

        Returns
        -------
        UserRecord
            New draft.

        Raises
        ------
        ImmutableFieldError
            Raised if the changes would alter the identifier or role.
        InvalidTransitionError
            Raised if no edit is open.
        SubmitInProgressError
            Raised if the draft is being submitted.
        UnknownFieldError
            Raised if a field is not a user field.
        pydantic.ValidationError
            Raised if a new value is not valid for its field.
        """
        state = self._require_open()
        for field in changes:
            if field not in EDITABLE_FIELDS | IMMUTABLE_FIELDS:
                raise UnknownFieldError(field)
        data = state.draft.model_dump()
        data.update(changes)
        draft = UserRecord.model_validate(data)
        self._check_immutable(state, draft)
        self._selection.transition(replace(state, draft=draft))
        return draft

    async def submit(
        self, draft: UserRecord | None = None
    ) -> UserRecord | None:
        """Submit the draft to the directory.

        At most one submission may be in flight. The check happens before
        the coroutine first suspends, so a second submission is rejected
        immediately rather than queued. If the directory raises anything
        other than `~schooldesk.exceptions.DirectoryError`, the edit returns
        to open with the draft preserved and the exception is re-raised.

        Parameters
        ----------
        draft
            Draft to submit. If not given, the draft accumulated with
            `update_draft` is submitted.

        Returns
        -------
        UserRecord or None
            User as stored by the directory, or `None` if the update failed,
            in which case `error` holds the message to show.

        Raises
        ------
        ImmutableFieldError
            Raised if the given draft has a different identifier or role
            than the user being edited.
        InvalidTransitionError
            Raised if no edit is open.
        SubmitInProgressError
            Raised if a submission is already in flight.
        """
        state = self._require_open()
        if draft is None:
            draft = state.draft
        self._check_immutable(state, draft)

        submitting = replace(
            state, draft=draft, status=EditStatus.submitting, error=None
        )
        self._selection.transition(submitting)
        logger = self._logger.bind(identifier=draft.identifier)
        logger.info("Submitting user update")

        try:
            patch = UserPatch.from_record(draft)
            user = await self._gateway.update_user(draft.identifier, patch)
        except DirectoryError as e:
            logger.warning("User update failed", error=str(e))
            error = UPDATE_ERROR_PREFIX + str(e)
            failed = replace(submitting, status=EditStatus.open, error=error)
            if self._selection.state is submitting:
                self._selection.transition(failed)
            return None
        except BaseException:
            # Includes cancellation. The edit must not stay submitting.
            reopened = replace(submitting, status=EditStatus.open)
            if self._selection.state is submitting:
                self._selection.transition(reopened)
            raise

        logger.info("Updated user")
        if self._selection.state is submitting:
            self._selection.transition(Closed())
        try:
            await self._roster.refresh(self._gateway)
        except DirectoryError:
            logger.exception("Unable to refresh roster after update")
        return user

    def _check_immutable(self, state: Editing, draft: UserRecord) -> None:
        """Ensure a draft still has the identifier and role of the user.

        Raises
        ------
        ImmutableFieldError
            Raised if either field differs.
        """
        for field in sorted(IMMUTABLE_FIELDS):
            if getattr(draft, field) != getattr(state.record, field):
                raise ImmutableFieldError(field)

    def _require_open(self) -> Editing:
        """Return the edit state, requiring it to be open for changes.

        Raises
        ------
        InvalidTransitionError
            Raised if no edit is open.
        SubmitInProgressError
            Raised if the draft is being submitted.
        """
        state = self._selection.state
        if not isinstance(state, Editing):
            raise InvalidTransitionError("No edit in progress")
        if state.status == EditStatus.submitting:
            raise SubmitInProgressError("Edit is being submitted")
        return state
