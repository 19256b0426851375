"""Database engine setup for the backing store.

SQLAlchemy Core (not ORM): the store is a handful of JSON rows read and
written by a short-lived process, so there is nothing for a session or
identity map to do. An in-memory ``sqlite://`` URL is shared across
connections through a static pool so every command sees the same data.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from podshell.infrastructure.database.schema import metadata

MEMORY_URL = "sqlite://"


def create_db_engine(url: str = MEMORY_URL) -> Engine:
    """Create an engine for *url*, enabling WAL for file-backed SQLite."""
    parsed = make_url(url)
    is_sqlite = parsed.get_backend_name() == "sqlite"
    in_memory = is_sqlite and parsed.database in (None, "", ":memory:")

    kwargs: dict[str, Any] = {"echo": False}
    if in_memory:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    engine = create_engine(url, **kwargs)

    if is_sqlite and not in_memory:

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return engine


def init_database(url: str = MEMORY_URL) -> Engine:
    """Create the engine and all tables. Idempotent."""
    engine = create_db_engine(url)
    metadata.create_all(engine)
    return engine
