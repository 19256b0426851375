"""SQLAlchemy Core table definitions for the backing store.

The store is a generic tables-of-rows-of-cells structure: each row is one
JSON document keyed by ``(table_name, row_id)``. Key/value settings live
in ``store_values``.
"""

from __future__ import annotations

from sqlalchemy import JSON, Column, Index, MetaData, Table, Text

metadata = MetaData()

cells = Table(
    "cells",
    metadata,
    Column("table_name", Text, primary_key=True),
    Column("row_id", Text, primary_key=True),
    Column("data", JSON, nullable=False),
    Index("ix_cells_table_name", "table_name"),
)

store_values = Table(
    "store_values",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", JSON),
)
