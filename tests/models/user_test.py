"""Tests for user record models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from schooldesk.models.enums import UserRole
from schooldesk.models.user import EDITABLE_FIELDS, UserPatch, UserRecord

from ..support.data import read_test_json, read_test_user


def test_wire_format() -> None:
    user = UserRecord.model_validate(
        {
            "cpf": "123.456.789-00",
            "name": "Mariana Souza",
            "email": "mariana@example.com",
            "role": "STUDENT",
            "active": False,
            "birthDate": "2010-03-14",
            "registration": "2024001",
            "somethingNew": "ignored",
        }
    )
    assert user.identifier == "12345678900"
    assert user.display_name == "Mariana Souza"
    assert user.role == UserRole.student
    assert not user.is_active
    assert user.birth_date == "2010-03-14"
    assert user.phone is None

    assert user.to_wire() == {
        "cpf": "12345678900",
        "name": "Mariana Souza",
        "email": "mariana@example.com",
        "role": "STUDENT",
        "active": False,
        "birthDate": "2010-03-14",
        "phone": None,
        "address": None,
        "registration": "2024001",
        "studentCPF": None,
        "expertiseArea": None,
        "academicTitle": None,
    }


def test_invalid_role() -> None:
    data = read_test_json("users/roster")[0]
    data["role"] = "JANITOR"
    with pytest.raises(ValidationError):
        UserRecord.model_validate(data)


def test_frozen() -> None:
    user = read_test_user("12345678900")
    with pytest.raises(ValidationError):
        user.role = UserRole.professor  # type: ignore[misc]
    with pytest.raises(ValidationError):
        user.identifier = "1"  # type: ignore[misc]


def test_detail_fields_professor() -> None:
    user = read_test_user("45678901233")
    assert user.detail_fields() == [
        ("Nome", "Ana Paula Ribeiro"),
        ("CPF", "456.789.012-33"),
        ("Email", "ana.ribeiro@example.com"),
        ("Tipo", "Professor"),
        ("Ativo", "Sim"),
        ("Data de nascimento", "1982-07-02"),
        ("Telefone", "(11) 98765-4321"),
        ("Endereço", "Avenida Central, 45"),
        ("Área de atuação", "Matemática"),
        ("Titulação", "Mestre"),
    ]


def test_detail_fields_parent() -> None:
    user = read_test_user("90123456788")
    assert user.student_identifier == "12345678900"
    assert user.detail_fields() == [
        ("Nome", "Sandra Souza"),
        ("CPF", "901.234.567-88"),
        ("Email", "sandra.souza@example.com"),
        ("Tipo", "Pais"),
        ("Ativo", "Sim"),
        ("Telefone", "(11) 91234-5678"),
        ("CPF do aluno", "123.456.789-00"),
    ]


def test_detail_fields_missing() -> None:
    user = read_test_user("23456789011")
    assert user.detail_fields() == [
        ("Nome", "Pedro Alves"),
        ("CPF", "234.567.890-11"),
        ("Email", "pedro.alves@example.com"),
        ("Tipo", "Aluno"),
        ("Ativo", "Não"),
        ("Matrícula", "2024002"),
    ]


def test_patch_from_record() -> None:
    user = read_test_user("34567890122")
    patch = UserPatch.from_record(user)
    wire = patch.to_wire()
    assert "cpf" not in wire
    assert "role" not in wire
    assert wire["name"] == "Luana Costa"
    assert wire["active"] is True
    assert wire["birthDate"] is None
    assert len(wire) == len(EDITABLE_FIELDS)


def test_patch_partial() -> None:
    patch = UserPatch(email="new@example.com")
    assert patch.to_wire() == {"email": "new@example.com"}
    with pytest.raises(ValidationError):
        UserPatch(role="STUDENT")  # type: ignore[call-arg]


def test_missing_role() -> None:
    user = UserRecord.model_validate(
        {
            "cpf": "555.666.777-88",
            "name": "Sem Tipo",
            "email": "sem.tipo@example.com",
            "active": True,
            "phone": "(11) 4000-0000",
        }
    )
    assert user.role is None
    assert user.to_wire()["role"] is None

    # Role-specific attributes are never shown without a role.
    assert user.detail_fields() == [
        ("Nome", "Sem Tipo"),
        ("CPF", "555.666.777-88"),
        ("Email", "sem.tipo@example.com"),
        ("Tipo", ""),
        ("Ativo", "Sim"),
    ]


def test_missing_active() -> None:
    data = read_test_json("users/roster")[2]
    del data["active"]
    with pytest.raises(ValidationError):
        UserRecord.model_validate(data)
