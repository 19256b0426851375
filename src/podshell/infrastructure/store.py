"""Explicit table-store handle over SQLAlchemy Core.

Tables hold rows, rows hold JSON cells. Every write runs in its own
transaction and, after commit, notifies ``store_changed`` on the plugin
manager so a live view can refresh. Reads never notify.

The store is single-writer and in-process; no locking is done here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Connection, Engine

from podshell.infrastructure.database.engine import MEMORY_URL, init_database
from podshell.infrastructure.database.schema import cells, store_values
from podshell.plugins.manager import PluginManager

Row = dict[str, Any]
TableData = dict[str, Row]

# Pseudo table name reported to ``store_changed`` for key/value writes.
VALUES = "values"

logger = logging.getLogger(__name__)


class TableStore:
    """Tables of JSON rows plus a flat key/value map.

    Args:
        engine: Engine with the store schema already created.
        plugins: Receives ``store_changed`` after each write. A private
            manager with no plugins is used when omitted.
    """

    def __init__(self, engine: Engine, plugins: PluginManager | None = None) -> None:
        self._engine = engine
        self.plugins = plugins or PluginManager()

    @property
    def engine(self) -> Engine:
        return self._engine

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def get_row(self, table: str, row_id: str) -> Row:
        """Return a copy of the row, or ``{}`` when it does not exist."""
        with self._engine.connect() as conn:
            data = conn.execute(
                select(cells.c.data).where(
                    cells.c.table_name == table, cells.c.row_id == row_id
                )
            ).scalar_one_or_none()
        return dict(data) if data else {}

    def has_row(self, table: str, row_id: str) -> bool:
        with self._engine.connect() as conn:
            found = conn.execute(
                select(cells.c.row_id).where(
                    cells.c.table_name == table, cells.c.row_id == row_id
                )
            ).first()
        return found is not None

    def set_row(self, table: str, row_id: str, row: Row) -> None:
        """Replace the whole row. An empty *row* deletes it."""
        if not row:
            self.del_row(table, row_id)
            return
        with self._engine.begin() as conn:
            _write_row(conn, table, row_id, row)
        self._changed(table, row_id)

    def set_cell(self, table: str, row_id: str, cell: str, value: Any) -> None:
        with self._engine.begin() as conn:
            row = _read_row(conn, table, row_id)
            row[cell] = value
            _write_row(conn, table, row_id, row)
        self._changed(table, row_id)

    def del_cell(self, table: str, row_id: str, cell: str) -> None:
        """Remove one cell; a row left with no cells is removed."""
        with self._engine.begin() as conn:
            row = _read_row(conn, table, row_id)
            if cell not in row:
                return
            del row[cell]
            if row:
                _write_row(conn, table, row_id, row)
            else:
                _delete_row(conn, table, row_id)
        self._changed(table, row_id)

    def del_row(self, table: str, row_id: str) -> None:
        with self._engine.begin() as conn:
            removed = _delete_row(conn, table, row_id)
        if removed:
            self._changed(table, row_id)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def get_table(self, table: str) -> TableData:
        """All rows of *table*, ordered by row id."""
        with self._engine.connect() as conn:
            result = conn.execute(
                select(cells.c.row_id, cells.c.data)
                .where(cells.c.table_name == table)
                .order_by(cells.c.row_id)
            )
            return {r.row_id: dict(r.data) for r in result}

    def row_ids(self, table: str) -> list[str]:
        with self._engine.connect() as conn:
            result = conn.execute(
                select(cells.c.row_id)
                .where(cells.c.table_name == table)
                .order_by(cells.c.row_id)
            )
            return list(result.scalars())

    def is_table_empty(self, table: str) -> bool:
        """Single-query emptiness test."""
        with self._engine.connect() as conn:
            first = conn.execute(
                select(cells.c.row_id).where(cells.c.table_name == table).limit(1)
            ).first()
        return first is None

    def del_table(self, table: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(cells).where(cells.c.table_name == table))
        self._changed(table, None)

    def get_tables(self) -> dict[str, TableData]:
        tables: dict[str, TableData] = {}
        with self._engine.connect() as conn:
            result = conn.execute(
                select(cells.c.table_name, cells.c.row_id, cells.c.data).order_by(
                    cells.c.table_name, cells.c.row_id
                )
            )
            for r in result:
                tables.setdefault(r.table_name, {})[r.row_id] = dict(r.data)
        return tables

    def set_tables(self, tables: dict[str, TableData]) -> None:
        """Replace every table in one transaction."""
        with self._engine.begin() as conn:
            conn.execute(delete(cells))
            _insert_rows(conn, _flatten(tables))
        for table in tables:
            self._changed(table, None)

    def merge_tables(self, tables: dict[str, TableData]) -> None:
        """Upsert every given row in one transaction, keeping other rows."""
        with self._engine.begin() as conn:
            for table, rows in tables.items():
                for row_id, row in rows.items():
                    _write_row(conn, table, row_id, row)
        for table in tables:
            self._changed(table, None)

    def del_tables(self) -> None:
        with self._engine.begin() as conn:
            existing = list(conn.execute(select(cells.c.table_name).distinct()).scalars())
            conn.execute(delete(cells))
        for table in existing:
            self._changed(table, None)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def get_value(self, key: str, default: Any = None) -> Any:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(store_values.c.value).where(store_values.c.key == key)
            ).first()
        return default if row is None else row.value

    def set_value(self, key: str, value: Any) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(store_values).where(store_values.c.key == key))
            conn.execute(insert(store_values).values(key=key, value=value))
        self._changed(VALUES, key)

    def del_value(self, key: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(store_values).where(store_values.c.key == key))
        self._changed(VALUES, key)

    def get_values(self) -> dict[str, Any]:
        with self._engine.connect() as conn:
            result = conn.execute(
                select(store_values.c.key, store_values.c.value).order_by(store_values.c.key)
            )
            return {r.key: r.value for r in result}

    def set_values(self, values: dict[str, Any], *, merge: bool = False) -> None:
        """Replace all values (or upsert them when *merge* is set)."""
        with self._engine.begin() as conn:
            if merge:
                conn.execute(delete(store_values).where(store_values.c.key.in_(list(values))))
            else:
                conn.execute(delete(store_values))
            if values:
                conn.execute(
                    insert(store_values), [{"key": k, "value": v} for k, v in values.items()]
                )
        self._changed(VALUES, None)

    def del_values(self) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(store_values))
        self._changed(VALUES, None)

    # ------------------------------------------------------------------

    def _changed(self, table: str, row_id: str | None) -> None:
        logger.debug("store changed: %s/%s", table, row_id)
        self.plugins.notify_store_changed(table, row_id)


def create_store(url: str = MEMORY_URL, plugins: PluginManager | None = None) -> TableStore:
    """Build an engine for *url*, create the schema, and wrap it in a store."""
    return TableStore(init_database(url), plugins)


# ----------------------------------------------------------------------
# Connection-level helpers (caller owns the transaction)
# ----------------------------------------------------------------------


def _read_row(conn: Connection, table: str, row_id: str) -> Row:
    data = conn.execute(
        select(cells.c.data).where(cells.c.table_name == table, cells.c.row_id == row_id)
    ).scalar_one_or_none()
    return dict(data) if data else {}


def _delete_row(conn: Connection, table: str, row_id: str) -> bool:
    result = conn.execute(
        delete(cells).where(cells.c.table_name == table, cells.c.row_id == row_id)
    )
    return result.rowcount > 0


def _write_row(conn: Connection, table: str, row_id: str, row: Row) -> None:
    _delete_row(conn, table, row_id)
    conn.execute(insert(cells).values(table_name=table, row_id=row_id, data=dict(row)))


def _flatten(tables: dict[str, TableData]) -> Iterable[dict[str, Any]]:
    for table, rows in tables.items():
        for row_id, row in rows.items():
            yield {"table_name": table, "row_id": row_id, "data": dict(row)}


def _insert_rows(conn: Connection, rows: Iterable[dict[str, Any]]) -> None:
    batch = list(rows)
    if batch:
        conn.execute(insert(cells), batch)
