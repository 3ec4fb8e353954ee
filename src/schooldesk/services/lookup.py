"""Role-scoped lookup of a single user."""

from __future__ import annotations

import structlog
from structlog.stdlib import BoundLogger

from ..exceptions import DirectoryError, EmptyIdentifierError, InvalidRoleError
from ..models.enums import LOOKUP_ROLES, UserRole
from ..models.lookup import LookupQuery, LookupResult
from ..storage.directory import DirectoryGateway
from ..util import normalize_identifier

__all__ = ["LookupController"]


class LookupController:
    """Look up one user by role and identifier and hold the result.

    A record is only reported as found if the directory returned it with the
    role that was asked for. A record stored under any other role is
    reported exactly as if no record existed.

    Every submission is tagged with a sequence number. If a lookup finishes
    after a later one has been submitted, its result is discarded, so the
    displayed result always belongs to the last lookup submitted.

    Parameters
    ----------
    gateway
        Directory to query.
    logger
        Logger to use. If not given, the default structlog logger will be
        used.
    """

    def __init__(
        self, gateway: DirectoryGateway, *, logger: BoundLogger | None = None
    ) -> None:
        self._gateway = gateway
        self._logger = logger or structlog.get_logger("schooldesk")
        self._result = LookupResult.not_started()
        self._sequence = 0

    @property
    def result(self) -> LookupResult:
        """Result of the most recent lookup."""
        return self._result

    def can_submit(self, raw_identifier: str) -> bool:
        """Whether the submit control should be enabled.

        Parameters
        ----------
        raw_identifier
            Current contents of the identifier field.

        Returns
        -------
        bool
            `True` if the field contains an identifier and no lookup is in
            flight.
        """
        identifier = normalize_identifier(raw_identifier)
        return bool(identifier) and not self._result.is_pending

    def reset(self) -> None:
        """Discard the current result and any lookup still in flight."""
        self._sequence += 1
        self._result = LookupResult.not_started()

    async def submit_lookup(
        self, role: UserRole, raw_identifier: str
    ) -> LookupResult:
        """Look up a user.

        The previous result is cleared before the directory is queried. Any
        exception other than `~schooldesk.exceptions.DirectoryError` is
        re-raised after the result is reset to not started.

        Parameters
        ----------
        role
            Role selected for the lookup.
        raw_identifier
            Identifier as typed, possibly still carrying its display mask.

        Returns
        -------
        LookupResult
            Current result after the lookup completes. This is the result of
            this lookup unless another lookup was submitted or the result
            was reset while it was in flight.

        Raises
        ------
        EmptyIdentifierError
            Raised if the identifier contains no digits.
        InvalidRoleError
            Raised if the role cannot be looked up.
        """
        if role not in LOOKUP_ROLES:
            raise InvalidRoleError(f"Cannot look up {role.value} users")
        query = LookupQuery(role, raw_identifier)
        identifier = query.identifier
        if not identifier:
            raise EmptyIdentifierError("No identifier given")

        self._sequence += 1
        sequence = self._sequence
        self._result = LookupResult.pending()
        logger = self._logger.bind(role=role.value, identifier=identifier)
        logger.debug("Looking up user")

        try:
            record = await self._gateway.get_by_role(role, identifier)
        except DirectoryError as e:
            logger.warning("User lookup failed", error=str(e))
            result = LookupResult.transport_error(str(e))
        except BaseException:
            # Includes cancellation. The lookup must not stay pending.
            if sequence == self._sequence:
                self._result = LookupResult.not_started()
            raise
        else:
            if record is None:
                result = LookupResult.not_found()
            elif record.role != role:
                logger.info(
                    "User found with different role",
                    found_role=record.role.value if record.role else None,
                )
                result = LookupResult.not_found()
            else:
                result = LookupResult.found(record)

        if sequence != self._sequence:
            logger.debug("Discarding stale lookup result")
            return self._result
        self._result = result
        logger.info("Lookup complete", status=result.status.value)
        return result
