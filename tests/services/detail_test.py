"""Tests for the read-only detail view."""

from __future__ import annotations

import pytest

from schooldesk.exceptions import InvalidTransitionError
from schooldesk.models.enums import SelectionMode
from schooldesk.services.consult import ConsultWorkflow

from ..support.data import read_test_user


@pytest.mark.asyncio
async def test_open_close(workflow: ConsultWorkflow) -> None:
    detail = workflow.detail
    student = read_test_user("12345678900")
    assert not detail.is_open
    assert detail.record is None
    assert detail.fields() == []

    detail.open(student)
    assert detail.is_open
    assert detail.record == student
    assert workflow.selection.mode == SelectionMode.viewing
    assert workflow.selection.selected_record == student
    assert detail.fields()[0] == ("Nome", "Mariana Souza")
    assert ("Matrícula", "2024001") in detail.fields()

    detail.close()
    assert not detail.is_open
    assert workflow.selection.mode == SelectionMode.none
    assert workflow.selection.selected_record is None

    with pytest.raises(InvalidTransitionError):
        detail.open(None)


@pytest.mark.asyncio
async def test_replaces_edit(workflow: ConsultWorkflow) -> None:
    student = read_test_user("12345678900")
    parent = read_test_user("90123456788")

    # Opening the detail view closes the edit view and vice versa, so at
    # most one of them is ever open.
    workflow.edit(student)
    workflow.view(parent)
    assert workflow.selection.mode == SelectionMode.viewing
    assert workflow.editor.draft is None
    assert workflow.detail.record == parent

    workflow.edit(student)
    assert workflow.selection.mode == SelectionMode.editing
    assert not workflow.detail.is_open

    # Closing the detail view does not close an open edit.
    workflow.detail.close()
    assert workflow.selection.mode == SelectionMode.editing
