"""Tests for typed record access over the table store."""

from __future__ import annotations

import pytest

from podshell.domain.errors import RecordValidationError
from podshell.domain.records import PersonaRecord, ScriptRow, Table
from podshell.infrastructure.records import (
    get_persona,
    get_script,
    list_personas,
    read_table,
    set_persona,
    set_script,
)
from podshell.infrastructure.store import TableStore

PERSONA_ID = "https://pod.example/personas/alice#me"


class TestReadWrite:
    def test_missing_record_is_none(self, store: TableStore) -> None:
        assert get_persona(store, PERSONA_ID) is None

    def test_round_trip(self, store: TableStore) -> None:
        persona = PersonaRecord(id=PERSONA_ID, name="Alice", given_name="Alice")
        set_persona(store, persona)
        assert get_persona(store, PERSONA_ID) == persona
        assert store.get_row(Table.PERSONAS, PERSONA_ID)["givenName"] == "Alice"

    def test_list_is_keyed_by_id(self, store: TableStore) -> None:
        set_persona(store, PersonaRecord(id=PERSONA_ID, name="Alice"))
        assert list(list_personas(store)) == [PERSONA_ID]

    def test_script_rows(self, store: TableStore) -> None:
        set_script(store, "setup", ScriptRow(script="pwd", created_at="t", updated_at="t"))
        script = get_script(store, "setup")
        assert script is not None
        assert script.script == "pwd"


class TestValidation:
    def test_corrupt_row_raises(self, store: TableStore) -> None:
        store.set_row(Table.PERSONAS, PERSONA_ID, {"id": PERSONA_ID, "name": ""})
        with pytest.raises(RecordValidationError, match="personas"):
            get_persona(store, PERSONA_ID)

    def test_corrupt_row_fails_whole_table(self, store: TableStore) -> None:
        store.set_row(Table.PERSONAS, PERSONA_ID, {"id": PERSONA_ID, "unknown": 1})
        with pytest.raises(RecordValidationError) as excinfo:
            read_table(store, Table.PERSONAS, PersonaRecord)
        assert excinfo.value.row_id == PERSONA_ID
