"""Models for single-user lookups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from ..constants import LOOKUP_ERROR_PREFIX, LOOKUP_NOT_FOUND_MESSAGE
from ..util import normalize_identifier
from .enums import LookupStatus, UserRole
from .user import UserRecord

__all__ = [
    "LookupQuery",
    "LookupResult",
]


@dataclass(frozen=True, slots=True)
class LookupQuery:
    """A single lookup submission, consumed as soon as it is issued."""

    role: UserRole
    """Role selected when the lookup was submitted."""

    raw_identifier: str
    """Identifier as typed, possibly still carrying its display mask."""

    @property
    def identifier(self) -> str:
        """Canonical form of the identifier to send to the directory."""
        return normalize_identifier(self.raw_identifier)


@dataclass(frozen=True, slots=True)
class LookupResult:
    """Outcome of the most recent lookup.

    Use the class methods to construct instances so that ``record`` is only
    set for ``found`` and ``message`` only for the error states.
    """

    status: LookupStatus
    """Current state of the lookup."""

    record: UserRecord | None = None
    """Record found, set only when ``status`` is ``found``."""

    message: str | None = None
    """User-readable error message for ``not_found`` and errors."""

    @classmethod
    def not_started(cls) -> Self:
        return cls(LookupStatus.not_started)

    @classmethod
    def pending(cls) -> Self:
        return cls(LookupStatus.pending)

    @classmethod
    def found(cls, record: UserRecord) -> Self:
        return cls(LookupStatus.found, record=record)

    @classmethod
    def not_found(cls) -> Self:
        message = LOOKUP_ERROR_PREFIX + LOOKUP_NOT_FOUND_MESSAGE
        return cls(LookupStatus.not_found, message=message)

    @classmethod
    def transport_error(cls, error: str) -> Self:
        """Construct the result of a failed directory call.

        Parameters
        ----------
        error
            Message of the directory exception, included verbatim.
        """
        message = LOOKUP_ERROR_PREFIX + error
        return cls(LookupStatus.transport_error, message=message)

    @property
    def is_pending(self) -> bool:
        """Whether a lookup is in flight."""
        return self.status == LookupStatus.pending
