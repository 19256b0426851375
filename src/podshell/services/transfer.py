"""Store snapshot export and import.

Snapshot format (version 1)::

    {"version": 1, "exportedAt": "...", "tables": {...}, "values": {...},
     "validation": {"valid": true, "errorCount": 0, "warningCount": 0}}

Import policy: strict mode rejects the whole snapshot when any row fails
its record model. Non-strict mode imports the valid rows and skips every
invalid one, reporting each. Invalid rows are never written.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, Field

from podshell.domain.records import TABLE_MODELS, validate_row
from podshell.infrastructure.store import TableStore
from podshell.services._helpers import now_iso

EXPORT_VERSION = 1

logger = logging.getLogger(__name__)


class ValidationIssue(BaseModel):
    model_config = {"frozen": True}

    table: str
    row_id: str
    message: str


class ExportResult(BaseModel):
    model_config = {"frozen": True}

    data: dict[str, Any]
    valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)


class ImportResult(BaseModel):
    model_config = {"frozen": True}

    success: bool
    error: str | None = None
    imported_rows: int = 0
    skipped_rows: int = 0
    validation_errors: list[ValidationIssue] = Field(default_factory=list)


class ExportValidationError(ValueError):
    """Strict export found rows that do not match their record model."""

    def __init__(self, errors: list[ValidationIssue]) -> None:
        super().__init__(f"Export validation failed:\n{format_validation_errors(errors)}")
        self.errors = errors


def format_validation_errors(errors: list[ValidationIssue]) -> str:
    """Group issues by ``table/row`` into an indented, human-readable block."""
    if not errors:
        return "No errors"
    grouped: dict[str, list[str]] = {}
    for issue in errors:
        grouped.setdefault(f"{issue.table}/{issue.row_id}", []).append(issue.message)
    lines: list[str] = []
    for key, messages in grouped.items():
        lines.append(f"{key}:")
        lines.extend(f"  - {m}" for m in messages)
    return "\n".join(lines)


def _validate_tables(
    tables: dict[str, dict[str, dict[str, Any]]],
) -> tuple[dict[str, dict[str, dict[str, Any]]], list[ValidationIssue]]:
    """Split *tables* into valid rows and issues for the invalid ones."""
    valid: dict[str, dict[str, dict[str, Any]]] = {}
    issues: list[ValidationIssue] = []
    for table, rows in tables.items():
        for row_id, row in rows.items():
            messages = (
                validate_row(table, row)
                if isinstance(row, dict)
                else ["row must be an object"]
            )
            if messages:
                issues.extend(
                    ValidationIssue(table=table, row_id=row_id, message=m) for m in messages
                )
            else:
                valid.setdefault(table, {})[row_id] = row
    return valid, issues


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def export_store(store: TableStore) -> ExportResult:
    """Snapshot every table and value, validating rows against their models.

    Tables without a record model are reported as warnings, not errors.
    """
    tables = store.get_tables()
    values = store.get_values()

    known = {t: rows for t, rows in tables.items() if t in TABLE_MODELS}
    warnings = [
        ValidationIssue(table=t, row_id="*", message=f'Unknown table "{t}" - no schema defined')
        for t in tables
        if t not in TABLE_MODELS
    ]
    _, errors = _validate_tables(known)

    data = {
        "version": EXPORT_VERSION,
        "exportedAt": now_iso(),
        "tables": tables,
        "values": values,
        "validation": {
            "valid": not errors,
            "errorCount": len(errors),
            "warningCount": len(warnings),
        },
    }
    return ExportResult(data=data, valid=not errors, errors=errors, warnings=warnings)


def export_store_json(store: TableStore, *, pretty: bool = True, strict: bool = False) -> str:
    """Serialize a snapshot.

    Raises:
        ExportValidationError: *strict* is set and some row is invalid.
    """
    result = export_store(store)
    if strict and not result.valid:
        raise ExportValidationError(result.errors)
    return json.dumps(result.data, indent=2 if pretty else None, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


def import_store_json(
    store: TableStore,
    text: str,
    *,
    merge: bool = False,
    strict: bool = True,
) -> ImportResult:
    """Load a snapshot into *store*.

    Without *merge* every existing table and value is replaced. The store is
    left untouched whenever the result is unsuccessful.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return ImportResult(success=False, error=f"Invalid JSON: {exc.msg}")

    if not isinstance(data, dict) or not data.get("version") or "tables" not in data:
        return ImportResult(
            success=False, error="Invalid export format: missing version or tables"
        )
    if data["version"] != EXPORT_VERSION:
        return ImportResult(success=False, error=f"Unsupported export version: {data['version']}")

    tables = data["tables"]
    values = data.get("values") or {}
    if not isinstance(tables, dict) or not all(isinstance(r, dict) for r in tables.values()):
        return ImportResult(success=False, error="Invalid export format: tables must be objects")
    if not isinstance(values, dict):
        return ImportResult(success=False, error="Invalid export format: values must be an object")

    valid, issues = _validate_tables(tables)
    if strict and issues:
        return ImportResult(
            success=False,
            error=(
                f"Validation failed with {len(issues)} error(s):\n"
                f"{format_validation_errors(issues)}"
            ),
            validation_errors=issues,
        )

    if merge:
        store.merge_tables(valid)
        if values:
            store.set_values(values, merge=True)
    else:
        store.set_tables(valid)
        store.set_values(values)

    imported = sum(len(rows) for rows in valid.values())
    skipped = len({(i.table, i.row_id) for i in issues})
    logger.debug("imported %d rows, skipped %d", imported, skipped)
    return ImportResult(
        success=True,
        imported_rows=imported,
        skipped_rows=skipped,
        validation_errors=issues,
    )
