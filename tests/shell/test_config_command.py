"""Tests for the config command."""

from __future__ import annotations

from podshell.domain.errors import ErrorKind
from podshell.services import preferences
from podshell.services.result import CommandResult
from podshell.shell.context import ShellContext
from podshell.shell.executor import execute_line


def _run(context: ShellContext, line: str) -> CommandResult:
    return execute_line(line, context)


class TestConfig:
    def test_list_every_setting(self, context: ShellContext) -> None:
        settings = _run(context, "config list").data["settings"]
        assert [s["key"] for s in settings] == list(preferences.SETTINGS)
        assert all(s["isDefault"] for s in settings)

    def test_get(self, context: ShellContext) -> None:
        data = _run(context, "config get theme").data
        assert data["value"] == "system"
        assert data["options"] == ["light", "dark", "system"]
        assert data["kind"] == "enum"

    def test_set_parses_by_kind(self, context: ShellContext) -> None:
        result = _run(context, "config set showHiddenFiles yes")
        assert result.data == {"key": "showHiddenFiles", "value": True}
        assert result.message == "Set showHiddenFiles = true"
        assert _run(context, "config set cliHistorySize 50").data["value"] == 50
        data = _run(context, "config get cliHistorySize").data
        assert data["value"] == 50
        assert data["isDefault"] is False

    def test_set_invalid_value(self, context: ShellContext) -> None:
        result = _run(context, "config set theme purple")
        assert result.error is not None
        assert result.error.code == ErrorKind.INVALID_ARGUMENT
        assert result.error.message == (
            "config set: invalid value for theme (expected one of: light, dark, system)"
        )

    def test_unknown_key(self, context: ShellContext) -> None:
        result = _run(context, "config get colour")
        assert result.error is not None
        assert result.error.message.startswith("config get: unknown setting: colour.")

    def test_missing_value(self, context: ShellContext) -> None:
        result = _run(context, "config set theme")
        assert result.error is not None
        assert result.error.code == ErrorKind.MISSING_ARGUMENT

    def test_reset_one(self, context: ShellContext) -> None:
        _run(context, "config set theme dark")
        result = _run(context, "config reset theme")
        assert result.message == "Reset theme to default (system)"
        assert _run(context, "config get theme").data["isDefault"] is True

    def test_reset_all(self, context: ShellContext) -> None:
        _run(context, "config set theme dark")
        _run(context, "config set autoSaveInterval 10")
        assert _run(context, "config reset").data == {"key": None, "reset": True}
        assert context.store.get_values() == {}
