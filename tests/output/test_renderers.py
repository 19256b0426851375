"""Tests for the per-command Rich renderers."""

from __future__ import annotations

import json

from podshell.domain.errors import ErrorKind
from podshell.output.renderers import render_error, render_quiet, render_result
from podshell.services.result import CommandResult
from podshell.shell.context import ShellContext
from podshell.shell.executor import execute_line


def _render(context: ShellContext, line: str, *, verbose: bool = False) -> str:
    result = execute_line(line, context)
    assert result.success, result.error
    return render_result(line.split(), result, verbose=verbose)


class TestNavigation:
    def test_pwd_prints_url(self, context: ShellContext) -> None:
        assert _render(context, "pwd") == "https://pod.example/"

    def test_cd_prints_nothing(self, context: ShellContext) -> None:
        execute_line("mkdir docs", context)
        assert _render(context, "cd docs") == ""

    def test_ls_marks_containers(self, context: ShellContext) -> None:
        execute_line("mkdir docs", context)
        execute_line("touch a.txt", context)
        assert _render(context, "ls").splitlines() == ["docs/", "a.txt"]

    def test_ls_empty(self, context: ShellContext) -> None:
        assert _render(context, "ls") == "(no entries)"

    def test_cat_prints_content_verbatim(self, context: ShellContext) -> None:
        execute_line("touch a.txt --content [bold]x[/bold]", context)
        assert _render(context, "cat a.txt") == "[bold]x[/bold]"


class TestGeneric:
    def test_message_fallback(self, context: ShellContext) -> None:
        assert _render(context, "mkdir docs") == "Created directory docs"

    def test_usage_for_bare_subcommand_command(self, context: ShellContext) -> None:
        text = _render(context, "persona")
        assert text.startswith("Usage: persona <list|create")
        assert "set-default" in text

    def test_inline_json_flag(self, context: ShellContext) -> None:
        assert json.loads(_render(context, "pwd --json")) == {"url": "https://pod.example/"}

    def test_verbose_appends_message(self) -> None:
        result = CommandResult.ok(data={"url": "https://pod.example/"}, message="note")
        assert render_result(["pwd"], result, verbose=True).splitlines() == [
            "https://pod.example/",
            "note",
        ]


class TestEntities:
    def test_help_lists_commands(self, context: ShellContext) -> None:
        text = _render(context, "help")
        assert text.startswith("Available commands:")
        assert "typeindex" in text

    def test_help_for_one_command(self, context: ShellContext) -> None:
        text = _render(context, "help rm")
        assert text.splitlines()[0] == "rm - Remove a file or directory"
        assert "Usage: rm <path>" in text

    def test_persona_list_and_show(self, context: ShellContext) -> None:
        execute_line("persona create Alice --email alice@example.org", context)
        assert "Alice" in _render(context, "persona list")
        shown = _render(context, "persona show alice")
        assert shown.splitlines()[0] == "Alice (default)"
        assert "email: mailto:alice@example.org" in shown
        assert "schemaVersion" not in shown

    def test_empty_lists(self, context: ShellContext) -> None:
        assert _render(context, "persona list") == "(no personas)"
        assert _render(context, "contact list") == "(no contacts)"
        assert _render(context, "group list") == "(no groups)"
        assert _render(context, "script list") == "(no scripts saved)"

    def test_group_members(self, context: ShellContext) -> None:
        execute_line("group create Acme", context)
        execute_line("contact add Ann", context)
        execute_line("group add-member acme ann", context)
        assert "Ann [contact]" in _render(context, "group list-members acme")

    def test_typeindex_table(self, context: ShellContext) -> None:
        text = _render(context, "typeindex list")
        assert "foaf:Person" in text
        assert "https://pod.example/personas/" in text

    def test_config_get(self, context: ShellContext) -> None:
        text = _render(context, "config get theme")
        assert text.splitlines()[0] == "theme = system (default)"
        assert "options: light | dark | system" in text

    def test_export_is_json(self, context: ShellContext) -> None:
        assert json.loads(_render(context, "export"))["version"] == 1


class TestErrorsAndQuiet:
    def test_error_line(self) -> None:
        result = CommandResult.fail(ErrorKind.PATH_NOT_FOUND, "cat: nope")
        assert render_error(result) == "ERROR  PATH_NOT_FOUND - cat: nope"

    def test_verbose_error_details(self) -> None:
        result = CommandResult.fail(ErrorKind.INVALID_ARGUMENT, "bad", {"field": "x"})
        assert "details:" in render_error(result, verbose=True)
        assert "details:" not in render_error(result)

    def test_quiet_lists_ids(self, context: ShellContext) -> None:
        execute_line("mkdir docs", context)
        result = execute_line("ls", context)
        assert render_quiet(["ls"], result) == "https://pod.example/docs/"

    def test_quiet_content_and_plain(self, context: ShellContext) -> None:
        execute_line("touch a.txt --content hi", context)
        assert render_quiet(["cat"], execute_line("cat a.txt", context)) == "hi"
        assert render_quiet(["mkdir"], execute_line("mkdir docs", context)) == ""

    def test_quiet_error(self) -> None:
        result = CommandResult.fail(ErrorKind.PATH_NOT_FOUND, "cat: nope")
        assert render_quiet(["cat"], result) == "ERROR: cat: nope"
