"""Tests for the in-shell export command."""

from __future__ import annotations

from podshell.domain.errors import ErrorKind
from podshell.domain.records import Table
from podshell.shell.context import ShellContext
from podshell.shell.executor import execute_line


def test_export_snapshot(context: ShellContext) -> None:
    execute_line("mkdir docs", context)
    data = execute_line("export", context).data
    assert data["version"] == 1
    assert "https://pod.example/docs/" in data["tables"][Table.RESOURCES]
    assert data["validation"]["valid"] is True


def test_strict_export_rejects_invalid_rows(context: ShellContext) -> None:
    context.store.set_row(Table.PERSONAS, "broken", {"id": "broken"})
    assert execute_line("export", context).success

    result = execute_line("export --strict", context)
    assert result.error is not None
    assert result.error.code == ErrorKind.INVALID_ENTITY
    assert result.error.message.startswith("export: validation failed with 1 error(s):")
    assert result.error.details["errors"][0]["row_id"] == "broken"
