"""Enums used in schooldesk models."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "LOOKUP_ROLES",
    "EditStatus",
    "LookupStatus",
    "SelectionMode",
    "UserRole",
]


class UserRole(Enum):
    """Role of a user in the directory.

    The values match the role names used by the directory API.
    """

    admin = "ADMIN"
    """Administrative staff using the dashboard."""

    professor = "PROFESSOR"
    """A teacher."""

    parent = "PARENT"
    """Parent or guardian of a student."""

    student = "STUDENT"
    """A student."""

    @property
    def label(self) -> str:
        """Human-readable name of the role as shown in the dashboard."""
        return _ROLE_LABELS[self]


_ROLE_LABELS = {
    UserRole.admin: "Administrador",
    UserRole.professor: "Professor",
    UserRole.parent: "Pais",
    UserRole.student: "Aluno",
}

LOOKUP_ROLES = (UserRole.student, UserRole.professor, UserRole.parent)
"""Roles offered by the role selector, in display order.

The first entry is the default selection. Administrators cannot be looked
up.
"""


class LookupStatus(Enum):
    """State of a single-user lookup."""

    not_started = "not_started"
    pending = "pending"
    found = "found"
    not_found = "not_found"

    mismatched = "mismatched"
    """Record exists under a different role.

    Never exposed by `~schooldesk.services.lookup.LookupController`, which
    reports a mismatch as ``not_found``.
    """

    transport_error = "transport_error"


class SelectionMode(Enum):
    """Which view, if any, is open over the selected user."""

    none = "none"
    viewing = "viewing"
    editing = "editing"


class EditStatus(Enum):
    """State of an edit session."""

    closed = "closed"
    open = "open"
    submitting = "submitting"
