"""Role-scoped, name-filtered views of the roster."""

from __future__ import annotations

from collections.abc import Iterable

from ..cache import RosterCache
from ..models.enums import LOOKUP_ROLES, UserRole
from ..models.user import UserRecord

__all__ = ["RosterView", "filter_roster"]


def filter_roster(
    snapshot: Iterable[UserRecord], role: UserRole, query: str
) -> list[UserRecord]:
    """Select the users of one role whose name contains a query.

    Parameters
    ----------
    snapshot
        Roster to filter. Not modified.
    role
        Only users with this role are kept.
    query
        Case-insensitive substring to look for in the display name. The
        empty string matches every name.

    Returns
    -------
    list of UserRecord
        Matching users, in roster order.
    """
    needle = query.lower()
    return [
        u
        for u in snapshot
        if u.role == role and needle in u.display_name.lower()
    ]


class RosterView:
    """Filtered view of the cached roster.

    The entries are derived from the cache on every access, so they always
    reflect the current role, query and roster snapshot.

    Parameters
    ----------
    cache
        Roster cache to read from.
    role
        Initially selected role.
    query
        Initial name filter.
    """

    def __init__(
        self,
        cache: RosterCache,
        *,
        role: UserRole = LOOKUP_ROLES[0],
        query: str = "",
    ) -> None:
        self._cache = cache
        self.role = role
        self.query = query

    @property
    def entries(self) -> list[UserRecord]:
        """Users matching the current role and query."""
        return filter_roster(self._cache.get(), self.role, self.query)
