"""Tests for the user consultation workflow as a whole."""

from __future__ import annotations

import pytest

from schooldesk.exceptions import DirectoryValidationError, InvalidRoleError
from schooldesk.models.enums import (
    LOOKUP_ROLES,
    LookupStatus,
    SelectionMode,
    UserRole,
)
from schooldesk.models.user import UserRecord
from schooldesk.services.consult import ConsultWorkflow

from ..support.gateway import StubDirectoryGateway


@pytest.mark.asyncio
async def test_mount(gateway: StubDirectoryGateway) -> None:
    workflow = ConsultWorkflow(gateway)
    assert workflow.roster_entries == []
    assert workflow.role == UserRole.student

    await workflow.mount()
    assert gateway.list_calls == 1
    assert workflow.roster.loaded
    assert [u.display_name for u in workflow.roster_entries] == [
        "Mariana Souza",
        "Pedro Alves",
        "Luana Costa",
    ]


@pytest.mark.asyncio
async def test_mount_failure(gateway: StubDirectoryGateway) -> None:
    gateway.fail_list = DirectoryValidationError("Invalid user list")
    workflow = ConsultWorkflow(gateway)
    await workflow.mount()
    assert not workflow.roster.loaded
    assert workflow.roster_entries == []

    # The lookup does not depend on the roster.
    workflow.set_identifier("12345678900")
    result = await workflow.submit_lookup()
    assert result.status == LookupStatus.found


@pytest.mark.asyncio
async def test_lookup(
    workflow: ConsultWorkflow, gateway: StubDirectoryGateway
) -> None:
    assert not workflow.can_submit
    assert not workflow.show_results

    workflow.select_role(UserRole.parent)
    workflow.set_identifier("901.234.567-88")
    assert workflow.can_submit
    result = await workflow.submit_lookup()
    assert result.status == LookupStatus.found
    assert workflow.result == result
    assert workflow.show_results
    assert gateway.lookups == ["90123456788"]

    # The lookup never reloads the roster.
    assert gateway.list_calls == 1

    # Changing the role keeps the result but filters the roster.
    workflow.select_role(UserRole.professor)
    assert workflow.show_results
    assert len(workflow.roster_entries) == 5

    workflow.close_results()
    assert not workflow.show_results
    assert workflow.result.status == LookupStatus.not_started
    assert workflow.identifier_input == ""
    assert not workflow.can_submit

    with pytest.raises(InvalidRoleError):
        workflow.select_role(UserRole.admin)
    assert workflow.role == UserRole.professor


@pytest.mark.asyncio
async def test_not_found(workflow: ConsultWorkflow) -> None:
    workflow.select_role(UserRole.student)
    workflow.set_identifier("45678901233")
    result = await workflow.submit_lookup()
    assert result.status == LookupStatus.not_found
    assert not workflow.show_results


@pytest.mark.asyncio
async def test_filter(workflow: ConsultWorkflow) -> None:
    workflow.set_filter("an")
    assert workflow.filter_query == "an"
    assert [u.display_name for u in workflow.roster_entries] == [
        "Mariana Souza",
        "Luana Costa",
    ]
    workflow.set_filter("")
    assert len(workflow.roster_entries) == 3


@pytest.mark.asyncio
async def test_lookup_then_edit(
    workflow: ConsultWorkflow, gateway: StubDirectoryGateway
) -> None:
    workflow.set_identifier("12345678900")
    result = await workflow.submit_lookup()

    # The detail and edit views can be opened on the lookup result.
    workflow.view(result.record)
    assert workflow.selection.mode == SelectionMode.viewing
    workflow.edit(result.record)
    assert workflow.selection.mode == SelectionMode.editing
    workflow.editor.update_draft(phone="(11) 90000-0000")
    user = await workflow.editor.submit()
    assert user
    assert user.phone == "(11) 90000-0000"

    # The lookup result is not refreshed after an edit.
    assert workflow.result == result
    assert gateway.lookups == ["12345678900"]
    assert gateway.list_calls == 2


@pytest.mark.asyncio
async def test_missing_role(gateway: StubDirectoryGateway) -> None:
    roleless = UserRecord.model_validate(
        {
            "cpf": "55566677788",
            "name": "Sem Tipo",
            "email": "sem.tipo@example.com",
            "active": True,
        }
    )
    gateway.users[roleless.identifier] = roleless
    workflow = ConsultWorkflow(gateway)

    # The roster still loads, and the user without a role is in no
    # role-filtered list.
    await workflow.mount()
    assert workflow.roster.loaded
    assert roleless in workflow.roster.get()
    for role in LOOKUP_ROLES:
        workflow.select_role(role)
        assert workflow.roster_entries
        assert roleless not in workflow.roster_entries

    workflow.set_identifier("555.666.777-88")
    result = await workflow.submit_lookup()
    assert result.status == LookupStatus.not_found
