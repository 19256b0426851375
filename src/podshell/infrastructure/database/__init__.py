"""SQLite engine and schema for the backing table store via SQLAlchemy Core."""

from podshell.infrastructure.database.engine import create_db_engine, init_database
from podshell.infrastructure.database.schema import cells, metadata, store_values

__all__ = [
    "cells",
    "create_db_engine",
    "init_database",
    "metadata",
    "store_values",
]
