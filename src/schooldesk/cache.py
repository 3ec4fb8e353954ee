"""In-memory roster cache.

The roster is the full list of directory users, fetched once when the
workflow is mounted and re-fetched after every successful edit. It is held
as an immutable tuple that is only ever replaced as a whole, so readers can
take the current snapshot without locking and never see a partial update.
Writers serialize on an `asyncio.Lock` so that overlapping refreshes are
applied in the order they were started.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import structlog
from structlog.stdlib import BoundLogger

from .models.user import UserRecord
from .storage.directory import DirectoryGateway

__all__ = ["RosterCache", "RosterSnapshot"]

type RosterSnapshot = tuple[UserRecord, ...]
"""Ordered, immutable sequence of every user in the directory."""


class RosterCache:
    """Most recent full roster fetched from the directory.

    Parameters
    ----------
    logger
        Logger to use. If not given, the default structlog logger will be
        used.
    """

    def __init__(self, logger: BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger("schooldesk")
        self._lock = asyncio.Lock()
        self._snapshot: RosterSnapshot = ()
        self._loaded = False

    @property
    def loaded(self) -> bool:
        """Whether the roster has been successfully fetched at least once."""
        return self._loaded

    async def clear(self) -> None:
        """Invalidate the cache.

        Used primarily for testing.
        """
        async with self._lock:
            self._snapshot = ()
            self._loaded = False

    def get(self) -> RosterSnapshot:
        """Return the current snapshot.

        Returns
        -------
        tuple of UserRecord
            Current roster, empty if it has never been loaded.
        """
        return self._snapshot

    async def refresh(self, gateway: DirectoryGateway) -> RosterSnapshot:
        """Re-fetch the full roster and replace the cached snapshot.

        The lock is held across the fetch so that the last refresh started
        is the last one written.

        Parameters
        ----------
        gateway
            Directory from which to fetch the roster.

        Returns
        -------
        tuple of UserRecord
            New snapshot.

        Raises
        ------
        DirectoryError
            Raised if the roster could not be retrieved. The previous
            snapshot is left in place.
        """
        async with self._lock:
            users = await gateway.list_users()
            self._store(users)
            self._logger.info("Refreshed roster", count=len(self._snapshot))
            return self._snapshot

    async def replace(self, users: Iterable[UserRecord]) -> None:
        """Replace the cached snapshot.

        Parameters
        ----------
        users
            New roster, in display order.
        """
        async with self._lock:
            self._store(users)

    def _store(self, users: Iterable[UserRecord]) -> None:
        self._snapshot = tuple(users)
        self._loaded = True
