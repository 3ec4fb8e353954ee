"""The user lookup and edit workflow as a whole."""

from __future__ import annotations

import structlog
from structlog.stdlib import BoundLogger

from ..cache import RosterCache
from ..exceptions import DirectoryError, InvalidRoleError
from ..models.enums import LOOKUP_ROLES, LookupStatus, UserRole
from ..models.lookup import LookupResult
from ..models.user import UserRecord
from ..storage.directory import DirectoryGateway
from .detail import DetailPresenter
from .edit import EditCoordinator
from .lookup import LookupController
from .roster import RosterView
from .selection import SelectionContext

__all__ = ["ConsultWorkflow"]


class ConsultWorkflow:
    """State behind the user consultation screen.

    Ties together the role selector, the identifier field and its lookup
    result panel, the filterable roster, and the detail and edit views. The
    roster comes from the cache, which is loaded by `mount` and refreshed by
    the edit view after every successful update. The lookup never touches
    the roster.

    Parameters
    ----------
    gateway
        Directory to use.
    roster
        Roster cache, if it should be shared with other components. A new
        one is created if not given.
    logger
        Logger to use. If not given, the default structlog logger will be
        used.
    """

    def __init__(
        self,
        gateway: DirectoryGateway,
        *,
        roster: RosterCache | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._gateway = gateway
        self._logger = logger or structlog.get_logger("schooldesk")
        self.roster = roster or RosterCache(self._logger)
        self.selection = SelectionContext()
        self.lookup = LookupController(gateway, logger=self._logger)
        self.detail = DetailPresenter(self.selection)
        self.editor = EditCoordinator(
            gateway, self.selection, self.roster, logger=self._logger
        )
        self.roster_view = RosterView(self.roster)
        self.identifier_input = ""

    @property
    def can_submit(self) -> bool:
        """Whether the lookup submit control should be enabled."""
        return self.lookup.can_submit(self.identifier_input)

    @property
    def filter_query(self) -> str:
        """Current contents of the roster name filter."""
        return self.roster_view.query

    @property
    def result(self) -> LookupResult:
        """Result of the most recent lookup."""
        return self.lookup.result

    @property
    def role(self) -> UserRole:
        """Currently selected role."""
        return self.roster_view.role

    @property
    def roster_entries(self) -> list[UserRecord]:
        """Roster users of the selected role matching the name filter."""
        return self.roster_view.entries

    @property
    def show_results(self) -> bool:
        """Whether the lookup result panel should be shown."""
        return self.lookup.result.status == LookupStatus.found

    def close_results(self) -> None:
        """Hide the lookup result panel and clear the identifier field."""
        self.lookup.reset()
        self.identifier_input = ""

    def edit(self, record: UserRecord | None) -> None:
        """Open the edit view for a roster row or the lookup result."""
        self.editor.open(record)

    async def mount(self) -> None:
        """Load the roster.

        A failure is logged and leaves the roster empty. The lookup still
        works without it.
        """
        try:
            await self.roster.refresh(self._gateway)
        except DirectoryError:
            self._logger.exception("Unable to load roster")

    def select_role(self, role: UserRole) -> None:
        """Change the selected role.

        The roster is filtered by the new role immediately. A lookup result
        already shown is kept.

        Raises
        ------
        InvalidRoleError
            Raised if the role cannot be selected.
        """
        if role not in LOOKUP_ROLES:
            raise InvalidRoleError(f"Cannot select {role.value} users")
        self.roster_view.role = role

    def set_filter(self, query: str) -> None:
        """Change the roster name filter."""
        self.roster_view.query = query

    def set_identifier(self, raw_identifier: str) -> None:
        """Change the contents of the identifier field."""
        self.identifier_input = raw_identifier

    async def submit_lookup(self) -> LookupResult:
        """Look up the identifier in the field under the selected role."""
        return await self.lookup.submit_lookup(
            self.role, self.identifier_input
        )

    def view(self, record: UserRecord | None) -> None:
        """Open the detail view for a roster row or the lookup result."""
        self.detail.open(record)
