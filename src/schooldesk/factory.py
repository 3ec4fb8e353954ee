"""Create schooldesk components."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import aclosing, asynccontextmanager
from dataclasses import dataclass
from typing import Self

import structlog
from httpx import AsyncClient
from structlog.stdlib import BoundLogger

from .cache import RosterCache
from .config import Config
from .services.consult import ConsultWorkflow
from .storage.directory import DirectoryClient

__all__ = ["Factory", "ProcessContext"]


@dataclass(frozen=True, slots=True)
class ProcessContext:
    """Per-process application context.

    Holds the singletons that are shared by every workflow and only need to
    be recreated if the configuration changes.
    """

    config: Config
    """schooldesk configuration."""

    http_client: AsyncClient
    """Shared HTTP client."""

    roster_cache: RosterCache
    """Shared roster cache."""

    @classmethod
    def from_config(
        cls, config: Config, http_client: AsyncClient | None = None
    ) -> Self:
        """Create a new process context from the configuration.

        Parameters
        ----------
        config
            The schooldesk configuration.
        http_client
            HTTP client to use. If not given, a new one is created with the
            configured timeout.

        Returns
        -------
        ProcessContext
            Shared context for a schooldesk process.
        """
        if not http_client:
            timeout = config.timeout.total_seconds()
            http_client = AsyncClient(timeout=timeout)
        logger = structlog.get_logger("schooldesk")
        return cls(
            config=config,
            http_client=http_client,
            roster_cache=RosterCache(logger),
        )

    async def aclose(self) -> None:
        """Clean up a process context.

        Called during shutdown, or before recreating the process context
        using a different configuration.
        """
        await self.http_client.aclose()
        await self.roster_cache.clear()


class Factory:
    """Build schooldesk components.

    Parameters
    ----------
    context
        Shared process context.
    logger
        Logger to use.
    """

    @classmethod
    @asynccontextmanager
    async def standalone(
        cls, config: Config, http_client: AsyncClient | None = None
    ) -> AsyncIterator[Self]:
        """Async context manager for schooldesk components.

        Parameters
        ----------
        config
            schooldesk configuration.
        http_client
            HTTP client to use. If not given, one is created. Either way,
            the client is closed on exit.

        Yields
        ------
        Factory
            The factory. Must be used as an async context manager.

        Examples
        --------
        .. code-block:: python

           async with Factory.standalone(config) as factory:
               workflow = factory.create_consult_workflow()
               await workflow.mount()
        """
        context = ProcessContext.from_config(config, http_client)
        logger = structlog.get_logger("schooldesk")
        async with aclosing(cls(context, logger)) as factory:
            yield factory

    def __init__(self, context: ProcessContext, logger: BoundLogger) -> None:
        self._context = context
        self._logger = logger

    async def aclose(self) -> None:
        """Shut down the factory.

        After this method is called, the factory object is no longer valid
        and must not be used.
        """
        await self._context.aclose()

    def create_consult_workflow(self) -> ConsultWorkflow:
        """Create the user lookup and edit workflow.

        Returns
        -------
        ConsultWorkflow
            Newly-created workflow sharing the process roster cache.
        """
        return ConsultWorkflow(
            self.create_directory_client(),
            roster=self._context.roster_cache,
            logger=self._logger,
        )

    def create_directory_client(self) -> DirectoryClient:
        """Create a client for the directory API.

        Returns
        -------
        DirectoryClient
            Newly-created client using the shared HTTP client.
        """
        config = self._context.config
        return DirectoryClient(
            str(config.base_url),
            self._context.http_client,
            token=config.token,
            timeout=config.timeout,
            logger=self._logger,
        )
