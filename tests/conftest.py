"""Test fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
import respx

from schooldesk.config import Config
from schooldesk.factory import Factory
from schooldesk.models.user import UserRecord
from schooldesk.services.consult import ConsultWorkflow

from .support.constants import TEST_BASE_URL, TEST_TOKEN
from .support.data import read_test_users
from .support.directory import MockDirectory, register_mock_directory
from .support.gateway import StubDirectoryGateway


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear environment variables that would override test settings."""
    settings = ("BASE_URL", "CONFIG_PATH", "LOG_LEVEL", "LOG_PROFILE", "TOKEN")
    for setting in settings:
        monkeypatch.delenv(f"SCHOOLDESK_{setting}", raising=False)


@pytest.fixture
def config() -> Config:
    return Config(baseUrl=TEST_BASE_URL, token=TEST_TOKEN)


@pytest_asyncio.fixture
async def factory(config: Config) -> AsyncIterator[Factory]:
    async with Factory.standalone(config) as factory:
        yield factory


@pytest.fixture
def gateway(users: list[UserRecord]) -> StubDirectoryGateway:
    return StubDirectoryGateway(users)


@pytest.fixture
def mock_directory(
    respx_mock: respx.Router, users: list[UserRecord]
) -> MockDirectory:
    return register_mock_directory(respx_mock, users)


@pytest.fixture
def users() -> list[UserRecord]:
    return read_test_users()


@pytest_asyncio.fixture
async def workflow(gateway: StubDirectoryGateway) -> ConsultWorkflow:
    workflow = ConsultWorkflow(gateway)
    await workflow.mount()
    return workflow
