"""Command-line dispatch with a uniform result envelope.

``execute_line`` is total: every input, including an empty line, an unknown
command, a failing validation hook, a raising handler, or a malformed
handler return value, yields exactly one :class:`CommandResult`. Nothing
raises past this module.

Invocations are strictly sequential; the executor holds no state between
calls beyond what handlers store on the context.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from podshell.domain.args import tokenize
from podshell.domain.errors import ErrorKind
from podshell.services.result import CommandError, CommandOptions, CommandResult
from podshell.shell.context import ShellContext
from podshell.shell.registry import Command

_JSON_TRUTHY = {"", "1", "true", "yes"}

logger = logging.getLogger(__name__)


def extract_json_flag(args: list[str]) -> tuple[list[str], bool]:
    """Strip ``--json``, ``-j`` and ``--json=<v>`` from *args*.

    The last occurrence wins; ``--json=`` with a non-truthy value turns it off.
    """
    json_mode = False
    cleaned: list[str] = []
    for arg in args:
        if arg in ("--json", "-j"):
            json_mode = True
        elif arg.startswith("--json="):
            json_mode = arg.removeprefix("--json=").lower() in _JSON_TRUTHY
        else:
            cleaned.append(arg)
    return cleaned, json_mode


def _print_error(context: ShellContext, message: str, options: CommandOptions) -> None:
    if not options.silent:
        context.output.write(message, "error")


def _coerce(raw: Any) -> CommandResult:
    """Turn a handler's return value into a validated result.

    Only a mapping carrying ``success`` is checked against the envelope;
    any other value counts as a plain success.

    Raises:
        ValidationError: *raw* has ``success`` but does not validate.
    """
    if isinstance(raw, CommandResult):
        return raw
    if isinstance(raw, Mapping) and "success" in raw:
        return CommandResult.model_validate(dict(raw))
    return CommandResult(success=True)


def _run(
    command: Command,
    raw_args: list[str],
    context: ShellContext,
    options: CommandOptions,
) -> CommandResult:
    if command.supports_json:
        args, json_flag = extract_json_flag(raw_args)
        effective = CommandOptions(json=options.json or json_flag, silent=options.silent)
    else:
        args, effective = raw_args, options

    error = command.validate(args, context)
    if error is not None:
        _print_error(context, error.message, effective)
        return CommandResult(success=False, error=error)

    logger.debug("dispatch %s %s", command.name, args)
    try:
        raw = command.execute(args, context, effective)
    except Exception as exc:
        logger.debug("command %s raised", command.name, exc_info=True)
        _print_error(context, f"Error: {exc}", effective)
        return CommandResult.fail(ErrorKind.OPERATION_FAILED, str(exc))

    try:
        result = _coerce(raw)
    except ValidationError as exc:
        error = CommandError(
            code=ErrorKind.OPERATION_FAILED,
            message="Command returned an invalid result shape",
            details=exc.errors(include_url=False, include_context=False, include_input=False),
        )
        _print_error(context, error.message, effective)
        return CommandResult(success=False, error=error)

    if result.error is not None and not result.success:
        _print_error(context, result.error.message, effective)
    return result


def _dispatch(
    raw_name: str,
    raw_args: list[str],
    context: ShellContext,
    options: CommandOptions,
) -> CommandResult:
    name = raw_name.lower()
    command = context.commands.get(name)
    if command is None:
        _print_error(
            context, f'Unknown command: {raw_name}. Type "help" for available commands.', options
        )
        result = CommandResult.fail(ErrorKind.INVALID_ARGUMENT, f"Unknown command: {raw_name}")
    else:
        result = _run(command, raw_args, context, options)

    context.store.plugins.notify_post_command(name, result)
    return result


def execute_line(
    line: str,
    context: ShellContext,
    options: CommandOptions | None = None,
) -> CommandResult:
    """Tokenize *line*, dispatch it, and return the normalized result."""
    tokens = tokenize(line)
    if not tokens:
        return CommandResult(success=True, message="")
    return _dispatch(tokens[0], tokens[1:], context, options or CommandOptions())


def exec_command(
    name: str,
    args: list[str],
    context: ShellContext,
    options: CommandOptions | None = None,
) -> CommandResult:
    """Run *name* with pre-split arguments.

    Arguments are passed through untokenized, so a value may contain spaces.
    """
    if not name.strip():
        return CommandResult(success=True, message="")
    return _dispatch(name.strip(), list(args), context, options or CommandOptions())
