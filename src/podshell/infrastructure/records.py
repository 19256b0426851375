"""Typed accessors over the table store.

Every read and write goes through the table's record model; a stored row
that no longer validates raises :class:`RecordValidationError` instead of
leaking a half-shaped dict to callers.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from podshell.domain.errors import RecordValidationError
from podshell.domain.records import (
    ContactRecord,
    GroupRecord,
    PersonaRecord,
    Record,
    ResourceRow,
    ScriptRow,
    Table,
    TypeIndexRow,
)
from podshell.infrastructure.store import TableStore


def _parse[M: Record](model: type[M], table: str, row_id: str, row: dict[str, Any]) -> M:
    try:
        return model.model_validate(row)
    except ValidationError as exc:
        raise RecordValidationError(table, row_id, str(exc)) from exc


def read_record[M: Record](store: TableStore, table: str, row_id: str, model: type[M]) -> M | None:
    row = store.get_row(table, row_id)
    if not row:
        return None
    return _parse(model, table, row_id, row)


def read_table[M: Record](store: TableStore, table: str, model: type[M]) -> dict[str, M]:
    return {
        row_id: _parse(model, table, row_id, row)
        for row_id, row in store.get_table(table).items()
    }


def write_record(store: TableStore, table: str, row_id: str, record: Record) -> None:
    store.set_row(table, row_id, record.to_row())


# --- resources ---


def get_resource(store: TableStore, url: str) -> ResourceRow | None:
    return read_record(store, Table.RESOURCES, url, ResourceRow)


def set_resource(store: TableStore, url: str, row: ResourceRow) -> None:
    write_record(store, Table.RESOURCES, url, row)


# --- personas ---


def get_persona(store: TableStore, persona_id: str) -> PersonaRecord | None:
    return read_record(store, Table.PERSONAS, persona_id, PersonaRecord)


def list_personas(store: TableStore) -> dict[str, PersonaRecord]:
    return read_table(store, Table.PERSONAS, PersonaRecord)


def set_persona(store: TableStore, record: PersonaRecord) -> None:
    write_record(store, Table.PERSONAS, record.id, record)


# --- contacts ---


def get_contact(store: TableStore, contact_id: str) -> ContactRecord | None:
    return read_record(store, Table.CONTACTS, contact_id, ContactRecord)


def list_contacts(store: TableStore) -> dict[str, ContactRecord]:
    return read_table(store, Table.CONTACTS, ContactRecord)


def set_contact(store: TableStore, record: ContactRecord) -> None:
    write_record(store, Table.CONTACTS, record.id, record)


# --- groups ---


def get_group(store: TableStore, group_id: str) -> GroupRecord | None:
    return read_record(store, Table.GROUPS, group_id, GroupRecord)


def list_groups(store: TableStore) -> dict[str, GroupRecord]:
    return read_table(store, Table.GROUPS, GroupRecord)


def set_group(store: TableStore, record: GroupRecord) -> None:
    write_record(store, Table.GROUPS, record.id, record)


# --- type index ---


def list_type_indexes(store: TableStore) -> dict[str, TypeIndexRow]:
    return read_table(store, Table.TYPE_INDEXES, TypeIndexRow)


# --- scripts ---


def get_script(store: TableStore, name: str) -> ScriptRow | None:
    return read_record(store, Table.CLI_SCRIPTS, name, ScriptRow)


def list_scripts(store: TableStore) -> dict[str, ScriptRow]:
    return read_table(store, Table.CLI_SCRIPTS, ScriptRow)


def set_script(store: TableStore, name: str, row: ScriptRow) -> None:
    write_record(store, Table.CLI_SCRIPTS, name, row)
