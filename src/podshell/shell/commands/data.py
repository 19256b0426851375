"""export: snapshot the whole store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from podshell.domain.args import get_option_boolean, parse_cli_args
from podshell.domain.errors import ErrorKind
from podshell.services.result import CommandOptions, CommandResult
from podshell.services.transfer import export_store, format_validation_errors
from podshell.shell.registry import Command

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


class ExportCommand(Command):
    name = "export"
    description = "Export store data as a JSON snapshot"
    usage = "export [--strict]"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        strict = get_option_boolean(parse_cli_args(args), "strict")
        result = export_store(context.store)
        if strict and not result.valid:
            return CommandResult.fail(
                ErrorKind.INVALID_ENTITY,
                f"export: validation failed with {len(result.errors)} error(s):\n"
                f"{format_validation_errors(result.errors)}",
                details={"errors": [e.model_dump() for e in result.errors]},
            )
        return CommandResult.ok(data=result.data)
