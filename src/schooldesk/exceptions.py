"""Exceptions for schooldesk."""

from __future__ import annotations

from safir.slack.blockkit import SlackException, SlackWebException

__all__ = [
    "DirectoryError",
    "DirectoryNotFoundError",
    "DirectoryValidationError",
    "DirectoryWebError",
    "EmptyIdentifierError",
    "ImmutableFieldError",
    "InvalidRoleError",
    "InvalidTransitionError",
    "SubmitInProgressError",
    "UnknownFieldError",
    "WorkflowError",
]


class DirectoryError(SlackException):
    """Base class for failures talking to the user directory.

    The workflow treats every subclass as an opaque transport error: the
    message is shown to the user verbatim and the operation is never retried
    automatically.
    """


class DirectoryValidationError(DirectoryError):
    """Directory response did not validate against the expected model."""


class DirectoryWebError(SlackWebException, DirectoryError):
    """An HTTP request to the directory failed."""


class DirectoryNotFoundError(DirectoryWebError):
    """The directory returned 404 for a record that must exist."""


class WorkflowError(Exception):
    """Base class for invalid use of the lookup and edit workflow.

    These represent programming errors in the presentation layer, such as
    submitting while the submit control should have been disabled, rather
    than failures of the directory.
    """


class EmptyIdentifierError(WorkflowError):
    """A lookup was submitted without an identifier."""


class ImmutableFieldError(WorkflowError):
    """An edit tried to change the identifier or role of a user."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Field {field} cannot be changed")
        self.field = field


class InvalidRoleError(WorkflowError):
    """The role is not valid for the requested operation."""


class InvalidTransitionError(WorkflowError):
    """A state machine was asked for a transition its state does not allow."""


class SubmitInProgressError(WorkflowError):
    """An edit submission was attempted while another is still in flight."""


class UnknownFieldError(WorkflowError):
    """An edit named a field that user records do not have."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Unknown user field {field}")
        self.field = field
