"""Tests for command dispatch and the result envelope guarantees."""

from __future__ import annotations

from typing import Any

from podshell.domain.errors import ErrorKind
from podshell.infrastructure.pod import VirtualPod
from podshell.infrastructure.store import TableStore
from podshell.plugins import hookimpl
from podshell.services.result import CommandError, CommandOptions, CommandResult
from podshell.shell.commands import COMMANDS
from podshell.shell.context import BufferOutput, ShellContext
from podshell.shell.executor import exec_command, execute_line, extract_json_flag
from podshell.shell.registry import Command


class _Echo(Command):
    name = "echo"
    description = "Echo arguments and options"
    usage = "echo [args]"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        return CommandResult.ok(data={"args": args, "json": options.json})


class _Raw(Command):
    name = "raw"
    description = "Return whatever is stashed on the instance"
    usage = "raw"
    supports_json = False

    def __init__(self, value: Any) -> None:
        self.value = value

    def execute(self, args: list[str], context: ShellContext, options: CommandOptions) -> Any:
        return self.value


class _Boom(Command):
    name = "boom"
    description = "Always raises"
    usage = "boom"

    def execute(self, args: list[str], context: ShellContext, options: CommandOptions) -> None:
        msg = "kaboom"
        raise RuntimeError(msg)


class _Guarded(Command):
    name = "guarded"
    description = "Rejects every call in validate()"
    usage = "guarded"

    def validate(self, args: list[str], context: ShellContext) -> CommandError | None:
        return CommandError(code=ErrorKind.PERMISSION_DENIED, message="guarded: not allowed")

    def execute(self, args: list[str], context: ShellContext, options: CommandOptions) -> None:
        raise AssertionError("execute must not run")


def _context(pod: VirtualPod, output: BufferOutput, *commands: Command) -> ShellContext:
    table = {**COMMANDS, **{c.name: c for c in commands}}
    return ShellContext(pod.store, pod, commands=table, output=output)


class TestExtractJsonFlag:
    def test_strips_flags(self) -> None:
        assert extract_json_flag(["a", "--json", "b"]) == (["a", "b"], True)
        assert extract_json_flag(["-j"]) == ([], True)

    def test_explicit_values(self) -> None:
        assert extract_json_flag(["--json=false"]) == ([], False)
        assert extract_json_flag(["--json=YES"]) == ([], True)
        assert extract_json_flag(["--json", "--json=0"]) == ([], False)

    def test_no_flag(self) -> None:
        assert extract_json_flag(["--jsonx"]) == (["--jsonx"], False)


class TestExecuteLine:
    def test_empty_line_is_quiet_success(self, context: ShellContext) -> None:
        for line in ("", "   ", "\t"):
            result = execute_line(line, context)
            assert result.success
            assert result.message == ""

    def test_unknown_command(self, context: ShellContext, output: BufferOutput) -> None:
        result = execute_line("frobnicate now", context)
        assert not result.success
        assert result.error is not None
        assert result.error.code == ErrorKind.INVALID_ARGUMENT
        assert result.error.message == "Unknown command: frobnicate"
        assert output.texts("error") == [
            'Unknown command: frobnicate. Type "help" for available commands.'
        ]

    def test_command_names_are_case_insensitive(self, context: ShellContext) -> None:
        assert execute_line("PWD", context).success

    def test_silent_suppresses_output(self, context: ShellContext, output: BufferOutput) -> None:
        execute_line("nope", context, CommandOptions(silent=True))
        execute_line("cat missing.txt", context, CommandOptions(silent=True))
        assert output.lines == []

    def test_handler_failures_are_printed(
        self, context: ShellContext, output: BufferOutput
    ) -> None:
        result = execute_line("cat missing.txt", context)
        assert not result.success
        assert output.texts("error") == [result.error.message if result.error else ""]


class TestNormalization:
    def test_json_flag_stripped_before_handler(
        self, pod: VirtualPod, output: BufferOutput
    ) -> None:
        ctx = _context(pod, output, _Echo())
        result = execute_line("echo a --json b", ctx)
        assert result.data == {"args": ["a", "b"], "json": True}

    def test_json_flag_kept_when_unsupported(self, pod: VirtualPod, output: BufferOutput) -> None:
        ctx = _context(pod, output, _Raw(None))
        assert execute_line("raw --json", ctx).success

    def test_none_is_success(self, pod: VirtualPod, output: BufferOutput) -> None:
        result = execute_line("raw", _context(pod, output, _Raw(None)))
        assert result.success
        assert result.error is None

    def test_mapping_is_validated(self, pod: VirtualPod, output: BufferOutput) -> None:
        ctx = _context(pod, output, _Raw({"success": True, "data": {"x": 1}}))
        result = execute_line("raw", ctx)
        assert result.success
        assert result.data == {"x": 1}

    def test_values_without_success_are_plain_success(
        self, pod: VirtualPod, output: BufferOutput
    ) -> None:
        for value in (42, "text", {"data": 1}, ["a"]):
            result = execute_line("raw", _context(pod, output, _Raw(value)))
            assert result.success
            assert result.data is None
            assert result.error is None
        assert output.texts("error") == []

    def test_malformed_envelopes_become_operation_failed(
        self, pod: VirtualPod, output: BufferOutput
    ) -> None:
        for value in ({"success": False}, {"success": "maybe"}, {"success": True, "error": 5}):
            result = execute_line("raw", _context(pod, output, _Raw(value)))
            assert not result.success
            assert result.error is not None
            assert result.error.code == ErrorKind.OPERATION_FAILED
            assert result.error.message == "Command returned an invalid result shape"

    def test_raising_handler(self, pod: VirtualPod, output: BufferOutput) -> None:
        result = execute_line("boom", _context(pod, output, _Boom()))
        assert not result.success
        assert result.error is not None
        assert result.error.code == ErrorKind.OPERATION_FAILED
        assert result.error.message == "kaboom"
        assert output.texts("error") == ["Error: kaboom"]

    def test_validate_hook_short_circuits(self, pod: VirtualPod, output: BufferOutput) -> None:
        result = execute_line("guarded", _context(pod, output, _Guarded()))
        assert result.error is not None
        assert result.error.code == ErrorKind.PERMISSION_DENIED
        assert output.texts("error") == ["guarded: not allowed"]


class TestExecCommand:
    def test_arguments_keep_spaces(self, pod: VirtualPod, output: BufferOutput) -> None:
        ctx = _context(pod, output, _Echo())
        result = exec_command("echo", ["two words", "--json"], ctx)
        assert result.data == {"args": ["two words"], "json": True}

    def test_blank_name(self, context: ShellContext) -> None:
        result = exec_command("  ", [], context)
        assert result.success
        assert result.message == ""

    def test_matches_execute_line(self, context: ShellContext) -> None:
        assert exec_command("pwd", [], context) == execute_line("pwd", context)


class _Listener:
    def __init__(self) -> None:
        self.seen: list[tuple[str, bool]] = []

    @hookimpl
    def post_command(self, name: str, result: CommandResult) -> None:
        self.seen.append((name, result.success))


class _Broken:
    @hookimpl
    def post_command(self, name: str, result: CommandResult) -> None:
        msg = "plugin bug"
        raise RuntimeError(msg)


class TestPostCommandHook:
    def test_every_dispatch_is_reported(self, store: TableStore, context: ShellContext) -> None:
        listener = _Listener()
        store.plugins.register_plugin(listener)
        execute_line("pwd", context)
        execute_line("nope", context)
        execute_line("", context)
        assert listener.seen == [("pwd", True), ("nope", False)]

    def test_plugin_failure_does_not_break_command(
        self, store: TableStore, context: ShellContext
    ) -> None:
        store.plugins.register_plugin(_Broken())
        assert execute_line("pwd", context).success
