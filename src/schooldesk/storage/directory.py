"""Storage layer for the user directory."""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from datetime import timedelta
from typing import Any

import structlog
from httpx import AsyncClient, HTTPError, HTTPStatusError, Response, Timeout
from pydantic import SecretStr, TypeAdapter, ValidationError
from structlog.stdlib import BoundLogger

from ..exceptions import (
    DirectoryNotFoundError,
    DirectoryValidationError,
    DirectoryWebError,
    InvalidRoleError,
)
from ..models.enums import UserRole
from ..models.user import UserPatch, UserRecord

__all__ = [
    "DirectoryClient",
    "DirectoryGateway",
]

_USER_LIST_ADAPTER = TypeAdapter(list[UserRecord])


class DirectoryGateway(metaclass=ABCMeta):
    """Operations the workflow needs from the user directory.

    There is one lookup per role rather than a generic lookup by identifier,
    and the roster is always returned in full regardless of role. All
    methods raise a subclass of `~schooldesk.exceptions.DirectoryError` on
    failure.
    """

    async def get_by_role(
        self, role: UserRole, identifier: str
    ) -> UserRecord | None:
        """Look up a user through the lookup for the given role.

        Parameters
        ----------
        role
            Role selected for the lookup.
        identifier
            Canonical identifier of the user.

        Returns
        -------
        UserRecord or None
            Record returned by the directory, or `None` if there was none.
            The role of the record is not checked.

        Raises
        ------
        InvalidRoleError
            Raised if the role has no lookup, which is the case for
            administrators.
        """
        match role:
            case UserRole.parent:
                return await self.get_parent(identifier)
            case UserRole.professor:
                return await self.get_professor(identifier)
            case UserRole.student:
                return await self.get_student(identifier)
            case _:
                raise InvalidRoleError(f"Cannot look up {role.value} users")

    @abstractmethod
    async def get_parent(self, identifier: str) -> UserRecord | None:
        """Look up a parent by canonical identifier."""

    @abstractmethod
    async def get_professor(self, identifier: str) -> UserRecord | None:
        """Look up a professor by canonical identifier."""

    @abstractmethod
    async def get_student(self, identifier: str) -> UserRecord | None:
        """Look up a student by canonical identifier."""

    @abstractmethod
    async def list_users(self) -> list[UserRecord]:
        """Return every user in the directory, of every role."""

    @abstractmethod
    async def update_user(
        self, identifier: str, patch: UserPatch
    ) -> UserRecord:
        """Update a user.

        Parameters
        ----------
        identifier
            Canonical identifier of the user to update.
        patch
            Changes to apply.

        Returns
        -------
        UserRecord
            The user as stored by the directory after the update.
        """


class DirectoryClient(DirectoryGateway):
    """Client for the directory REST API.

    Parameters
    ----------
    base_url
        Base URL of the directory API.
    http_client
        Existing ``httpx.AsyncClient`` to use instead of creating a new one.
        This allows the caller to reuse an existing client and connection
        pool.
    token
        Bearer token to send with every request, if any.
    timeout
        Timeout for directory operations. If not given, defaults to the
        timeout of the underlying HTTPX client.
    logger
        Logger to use. If not given, the default structlog logger will be
        used.
    """

    def __init__(
        self,
        base_url: str,
        http_client: AsyncClient | None = None,
        *,
        token: SecretStr | None = None,
        timeout: timedelta | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = http_client or AsyncClient()
        self._token = token
        self._logger = logger or structlog.get_logger("schooldesk")

        # Whether the HTTP client needs to be explicitly closed because we
        # created it.
        self._close_client = http_client is None

        if timeout is not None:
            self._timeout: float | Timeout = timeout.total_seconds()
        else:
            self._timeout = self._client.timeout

    async def aclose(self) -> None:
        """Close the HTTP connection pool, if one wasn't provided.

        The object must not be used after calling this method.
        """
        if self._close_client:
            await self._client.aclose()

    async def get_parent(self, identifier: str) -> UserRecord | None:
        return await self._get_user(f"parents/cpf/{identifier}")

    async def get_professor(self, identifier: str) -> UserRecord | None:
        return await self._get_user(f"professors/cpf/{identifier}")

    async def get_student(self, identifier: str) -> UserRecord | None:
        return await self._get_user(f"students/cpf/{identifier}")

    async def list_users(self) -> list[UserRecord]:
        """Return every user in the directory, of every role.

        Raises
        ------
        DirectoryValidationError
            Raised if the response is not a list of valid users.
        DirectoryWebError
            Raised if the request failed.
        """
        r = await self._request("GET", "users")
        try:
            users = _USER_LIST_ADAPTER.validate_python(r.json() or [])
        except (ValidationError, ValueError) as e:
            raise DirectoryValidationError(f"Invalid user list: {e!s}") from e
        self._logger.debug("Retrieved user list", count=len(users))
        return users

    async def update_user(
        self, identifier: str, patch: UserPatch
    ) -> UserRecord:
        """Update a user.

        Raises
        ------
        DirectoryNotFoundError
            Raised if the user does not exist.
        DirectoryValidationError
            Raised if the response is not a valid user.
        DirectoryWebError
            Raised if the request failed.
        """
        route = f"users/{identifier}"
        r = await self._request("PUT", route, body=patch.to_wire())
        user = self._parse_user(r)
        if not user:
            msg = f"No user returned from update of {identifier}"
            raise DirectoryValidationError(msg)
        return user

    async def _get_user(self, route: str) -> UserRecord | None:
        """Retrieve a single user, mapping 404 to `None`.

        Parameters
        ----------
        route
            Route relative to the directory base URL.

        Returns
        -------
        UserRecord or None
            User if found, else `None`.
        """
        try:
            r = await self._request("GET", route)
        except DirectoryNotFoundError:
            return None
        return self._parse_user(r)

    def _parse_user(self, r: Response) -> UserRecord | None:
        """Parse a single user from a response.

        An empty or ``null`` body is treated as no user.
        """
        if not r.content:
            return None
        try:
            data = r.json()
            if data is None:
                return None
            return UserRecord.model_validate(data)
        except (ValidationError, ValueError) as e:
            msg = f"Invalid user from {r.request.url}: {e!s}"
            raise DirectoryValidationError(msg) from e

    async def _request(
        self, method: str, route: str, *, body: dict[str, Any] | None = None
    ) -> Response:
        """Make an HTTP request to the directory.

        Parameters
        ----------
        method
            HTTP method.
        route
            Route relative to the directory base URL. Must not start with
            ``/``.
        body
            JSON body to send, if any.

        Returns
        -------
        httpx.Response
            Successful response.

        Raises
        ------
        DirectoryNotFoundError
            Raised if the directory returned a 404 response.
        DirectoryWebError
            Raised if the request failed or returned another error status.
        """
        url = f"{self._base_url}/{route}"
        headers = {"Content-Type": "application/json"}
        if self._token:
            token = self._token.get_secret_value()
            headers["Authorization"] = f"Bearer {token}"
        self._logger.debug("Directory request", method=method, url=url)
        try:
            r = await self._client.request(
                method, url, headers=headers, json=body, timeout=self._timeout
            )
            r.raise_for_status()
        except HTTPError as e:
            if isinstance(e, HTTPStatusError):
                if e.response.status_code == 404:
                    raise DirectoryNotFoundError.from_exception(e) from e
            raise DirectoryWebError.from_exception(e) from e
        return r
