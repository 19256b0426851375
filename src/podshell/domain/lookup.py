"""Resolve loose user identifiers to canonical record ids.

Matching precedence, first phase with any hit wins:

1. exact canonical id
2. short id (table-specific fragment) equal to or prefixed by the query
3. case-insensitive display name, equal or substring

Every function here is pure and never raises; a miss is ``LookupResult(found=False)``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, model_validator

Rows = Mapping[str, Mapping[str, Any]]
ShortId = Callable[[str], str]


class LookupResult(BaseModel):
    """Outcome of a lookup. ``id`` is set iff ``found`` is true."""

    model_config = {"frozen": True}

    found: bool
    id: str | None = None

    @model_validator(mode="after")
    def _id_matches_found(self) -> LookupResult:
        if self.found != (self.id is not None):
            msg = "id must be present exactly when found is true"
            raise ValueError(msg)
        return self


NOT_FOUND = LookupResult(found=False)


# ---------------------------------------------------------------------------
# Short-id extraction rules
# ---------------------------------------------------------------------------


def persona_short_id(row_id: str) -> str:
    """Last path segment with a trailing ``#me`` removed."""
    tail = row_id.rsplit("/", 1)[-1]
    return tail.removesuffix("#me")


def contact_short_id(row_id: str) -> str:
    """Fragment after the last ``#``."""
    return row_id.rsplit("#", 1)[-1]


def group_short_id(row_id: str) -> str:
    """Text after ``/groups/`` up to the fragment."""
    _, sep, rest = row_id.partition("/groups/")
    if not sep:
        return row_id.rsplit("/", 1)[-1].split("#", 1)[0]
    return rest.split("#", 1)[0]


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def find_entity(
    rows: Rows,
    query: str,
    short_id: ShortId,
    name: str = "name",
) -> LookupResult:
    """Find the canonical id in *rows* matching *query*.

    Args:
        rows: Mapping of canonical id to row cells.
        query: What the user typed.
        short_id: Table-specific short-id extractor.
        name: Cell holding the display name.
    """
    query = query.strip()
    if not query or not rows:
        return NOT_FOUND

    if query in rows:
        return LookupResult(found=True, id=query)

    for row_id in rows:
        if short_id(row_id).startswith(query):
            return LookupResult(found=True, id=row_id)

    needle = query.lower()
    for row_id, row in rows.items():
        display = row.get(name)
        if not isinstance(display, str):
            continue
        lowered = display.lower()
        if lowered == needle or needle in lowered:
            return LookupResult(found=True, id=row_id)

    return NOT_FOUND


def find_persona(rows: Rows, query: str) -> LookupResult:
    return find_entity(rows, query, persona_short_id)


def find_contact(rows: Rows, query: str) -> LookupResult:
    return find_entity(rows, query, contact_short_id)


def find_group(rows: Rows, query: str) -> LookupResult:
    return find_entity(rows, query, group_short_id)
