"""Models for directory user records."""

from __future__ import annotations

from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..util import format_identifier, normalize_identifier
from .enums import UserRole

__all__ = [
    "EDITABLE_FIELDS",
    "IMMUTABLE_FIELDS",
    "UserPatch",
    "UserRecord",
]

IMMUTABLE_FIELDS = frozenset({"identifier", "role"})
"""Fields of `UserRecord` that can never be changed by an edit."""


class UserRecord(BaseModel):
    """One entry in the user directory.

    A single model serves every role. The optional attributes are only
    meaningful for some roles, as noted on each field, but their presence is
    never enforced, and anything that displays them must cope with them being
    absent.
    """

    model_config = ConfigDict(
        extra="ignore", frozen=True, populate_by_name=True
    )

    identifier: Annotated[
        str,
        Field(
            title="Identifier",
            description="Canonical, digit-only CPF of the user",
            examples=["12345678900"],
            min_length=1,
            validation_alias="cpf",
            serialization_alias="cpf",
        ),
    ]

    display_name: Annotated[
        str,
        Field(
            title="Name",
            examples=["Ana Souza"],
            validation_alias="name",
            serialization_alias="name",
        ),
    ]

    email: Annotated[
        str, Field(title="Email address", examples=["ana@example.com"])
    ]

    role: Annotated[
        UserRole | None,
        Field(
            title="Role",
            description=(
                "Role of the user. Some directory entries have none, and such"
                " users never match a role."
            ),
        ),
    ] = None

    is_active: Annotated[
        bool,
        Field(
            title="Active",
            validation_alias="active",
            serialization_alias="active",
        ),
    ]

    birth_date: Annotated[
        str | None,
        Field(
            title="Birth date",
            description="Meaningful for students, parents and professors",
            examples=["2010-03-14"],
            validation_alias="birthDate",
            serialization_alias="birthDate",
        ),
    ] = None

    phone: Annotated[
        str | None,
        Field(
            title="Phone number",
            description="Meaningful for parents and professors",
        ),
    ] = None

    address: Annotated[
        str | None,
        Field(
            title="Address",
            description="Meaningful for students, parents and professors",
        ),
    ] = None

    registration: Annotated[
        str | None,
        Field(
            title="Registration number",
            description="Meaningful for students",
        ),
    ] = None

    student_identifier: Annotated[
        str | None,
        Field(
            title="Student identifier",
            description="CPF of the linked student, meaningful for parents",
            validation_alias="studentCPF",
            serialization_alias="studentCPF",
        ),
    ] = None

    expertise_area: Annotated[
        str | None,
        Field(
            title="Expertise area",
            description="Meaningful for professors",
            validation_alias="expertiseArea",
            serialization_alias="expertiseArea",
        ),
    ] = None

    academic_title: Annotated[
        str | None,
        Field(
            title="Academic title",
            description="Meaningful for professors",
            validation_alias="academicTitle",
            serialization_alias="academicTitle",
        ),
    ] = None

    @field_validator("identifier", "student_identifier", mode="before")
    @classmethod
    def _normalize_identifier(cls, v: Any) -> Any:
        if isinstance(v, str):
            return normalize_identifier(v)
        return v

    def detail_fields(self) -> list[tuple[str, str]]:
        """Return the labelled values to show in the detail view.

        Role-specific attributes are only included for the roles where they
        are meaningful, and absent values are skipped.

        Returns
        -------
        list of tuple
            Pairs of label and display value, in display order.
        """
        fields = [
            ("Nome", self.display_name),
            ("CPF", format_identifier(self.identifier)),
            ("Email", self.email),
            ("Tipo", self.role.label if self.role else ""),
            ("Ativo", "Sim" if self.is_active else "Não"),
        ]
        for attr, label, roles in _DETAIL_ATTRIBUTES:
            value = getattr(self, attr)
            if value and self.role in roles:
                if attr == "student_identifier":
                    value = format_identifier(value)
                fields.append((label, value))
        return fields

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON form used by the directory API."""
        return self.model_dump(mode="json", by_alias=True)


_DETAIL_ATTRIBUTES = (
    (
        "birth_date",
        "Data de nascimento",
        {UserRole.student, UserRole.parent, UserRole.professor},
    ),
    ("phone", "Telefone", {UserRole.parent, UserRole.professor}),
    (
        "address",
        "Endereço",
        {UserRole.student, UserRole.parent, UserRole.professor},
    ),
    ("registration", "Matrícula", {UserRole.student}),
    ("student_identifier", "CPF do aluno", {UserRole.parent}),
    ("expertise_area", "Área de atuação", {UserRole.professor}),
    ("academic_title", "Titulação", {UserRole.professor}),
)

EDITABLE_FIELDS = frozenset(UserRecord.model_fields) - IMMUTABLE_FIELDS
"""Fields of `UserRecord` that an edit may change."""


class UserPatch(BaseModel):
    """Changes to a user record sent to the directory.

    Only fields that were explicitly set are sent. The identifier and role
    are not part of a patch since neither may change.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    display_name: str | None = Field(None, serialization_alias="name")
    email: str | None = None
    is_active: bool | None = Field(None, serialization_alias="active")
    birth_date: str | None = Field(None, serialization_alias="birthDate")
    phone: str | None = None
    address: str | None = None
    registration: str | None = None
    student_identifier: str | None = Field(
        None, serialization_alias="studentCPF"
    )
    expertise_area: str | None = Field(
        None, serialization_alias="expertiseArea"
    )
    academic_title: str | None = Field(
        None, serialization_alias="academicTitle"
    )

    @classmethod
    def from_record(cls, record: UserRecord) -> Self:
        """Build a patch carrying every editable field of a record.

        Parameters
        ----------
        record
            Draft record whose editable fields should be sent.

        Returns
        -------
        UserPatch
            Patch with every editable field set, including those that are
            `None`.
        """
        return cls(**{f: getattr(record, f) for f in EDITABLE_FIELDS})

    def to_wire(self) -> dict[str, Any]:
        """Serialize the set fields to the JSON form of the directory API."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
