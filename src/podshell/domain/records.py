"""Versioned record models for every persisted table.

Rows are validated when written and when imported; a row that fails its
model is rejected at the boundary rather than tolerated at read time.
Stored cell names are camelCase (``contentType``, ``forClass``) so a
snapshot keeps the same shape across implementations.
"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from podshell.domain.vocab import is_qualified_iri

SCHEMA_VERSION = 1


class Table(StrEnum):
    """Table names in the backing store (stable contract)."""

    RESOURCES = "resources"
    PERSONAS = "personas"
    CONTACTS = "contacts"
    GROUPS = "groups"
    TYPE_INDEXES = "typeIndexes"
    CLI_SCRIPTS = "cliScripts"


class Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    schema_version: Literal[1] = SCHEMA_VERSION

    def to_row(self) -> dict[str, Any]:
        """Serialize to the stored cell mapping (camelCase, no ``None`` cells)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


class ResourceRow(Record):
    """A container or leaf resource in the pod tree."""

    type: Literal["Container", "Resource"]
    body: str | None = None
    content_type: str = "text/plain"
    parent_id: str | None = None
    updated: str
    # Leaf metadata (``file set-*``)
    title: str | None = None
    description: str | None = None
    author: str | None = None
    created: str | None = None
    modified: str | None = None

    @property
    def is_container(self) -> bool:
        return self.type == "Container"


# ---------------------------------------------------------------------------
# Typed entities
# ---------------------------------------------------------------------------


class PersonaRecord(Record):
    """An identity profile (WebID-style persona)."""

    id: str
    name: str = Field(min_length=1)
    nickname: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    homepage: str | None = None
    image: str | None = None
    inbox: str | None = None
    public_type_index: str | None = None
    private_type_index: str | None = None


class ContactRecord(Record):
    """An address-book entry for a person or a software agent."""

    id: str
    name: str = Field(min_length=1)
    uid: str
    nickname: str | None = None
    email: str | None = None
    phone: str | None = None
    url: str | None = None
    notes: str | None = None
    organization: str | None = None
    role: str | None = None
    webid: str | None = None
    is_agent: bool = False
    related: list[str] = Field(default_factory=list)


GroupType = Literal["organization", "team", "group"]


class GroupRecord(Record):
    """A group, team, or organization with member references."""

    id: str
    name: str = Field(min_length=1)
    group_type: GroupType = "group"
    description: str | None = None
    url: str | None = None
    parent: str | None = None
    members: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Type index
# ---------------------------------------------------------------------------

IndexType = Literal["public", "private"]
INDEX_TYPES: tuple[IndexType, ...] = ("public", "private")


class TypeIndexRow(Record):
    """One registration keyed by ``(index_type, for_class)``.

    ``instance`` holds a single locator bare, or several as a JSON array string.
    """

    for_class: str
    index_type: IndexType
    instance: str | None = None
    instance_container: str | None = None

    @field_validator("for_class")
    @classmethod
    def _qualified_class(cls, value: str) -> str:
        if not is_qualified_iri(value):
            msg = f"forClass must be a full IRI, got {value!r}"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _has_location(self) -> TypeIndexRow:
        if self.instance is None and self.instance_container is None:
            msg = "Either instance or instanceContainer must be provided"
            raise ValueError(msg)
        if self.instance is not None:
            decode_instances(self.instance)
        return self

    @property
    def instances(self) -> list[str]:
        return decode_instances(self.instance) if self.instance is not None else []


def encode_instances(instances: list[str]) -> str:
    """Store one locator bare, several as a JSON array string."""
    if len(instances) == 1:
        return instances[0]
    return json.dumps(instances)


def decode_instances(value: str) -> list[str]:
    """Inverse of :func:`encode_instances`.

    Raises:
        ValueError: If a ``[``-prefixed value is not a JSON list of strings.
    """
    if not value.startswith("["):
        return [value]
    parsed = json.loads(value)
    if not isinstance(parsed, list) or not all(isinstance(v, str) for v in parsed):
        msg = "instance must be a locator or a JSON array of locators"
        raise ValueError(msg)
    return parsed


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------


class ScriptRow(Record):
    """A saved, newline-delimited command script."""

    script: str = ""
    created_at: str
    updated_at: str


TABLE_MODELS: dict[str, type[Record]] = {
    Table.RESOURCES: ResourceRow,
    Table.PERSONAS: PersonaRecord,
    Table.CONTACTS: ContactRecord,
    Table.GROUPS: GroupRecord,
    Table.TYPE_INDEXES: TypeIndexRow,
    Table.CLI_SCRIPTS: ScriptRow,
}


def validate_row(table: str, data: dict[str, Any]) -> list[str]:
    """Return validation messages for *data* against *table*'s model.

    Unknown tables have no model and always fail.
    """
    model = TABLE_MODELS.get(table)
    if model is None:
        return [f"Unknown table: {table}"]
    try:
        model.model_validate(data)
    except ValidationError as exc:
        return [
            f"{'.'.join(str(p) for p in err['loc']) or '(row)'}: {err['msg']}"
            for err in exc.errors()
        ]
    return []
