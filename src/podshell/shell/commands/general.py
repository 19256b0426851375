"""help, clear, exit."""

from __future__ import annotations

from typing import TYPE_CHECKING

from podshell.domain.errors import ErrorKind
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.registry import Command, SubcommandCommand

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


class HelpCommand(Command):
    name = "help"
    description = "Show available commands"
    usage = "help [command]"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return CommandResult.ok(
                data={
                    "commands": [
                        {"name": c.name, "description": c.description, "usage": c.usage}
                        for c in context.commands.values()
                    ]
                }
            )

        command = context.commands.get(args[0].lower())
        if command is None:
            return CommandResult.fail(ErrorKind.INVALID_ARGUMENT, f"Unknown command: {args[0]}")
        data: dict[str, object] = {
            "name": command.name,
            "description": command.description,
            "usage": command.usage,
        }
        if isinstance(command, SubcommandCommand):
            data["subcommands"] = dict(command.subcommands)
        return CommandResult.ok(data=data)


class ClearCommand(Command):
    name = "clear"
    description = "Clear the terminal output"
    usage = "clear"
    supports_json = False

    def execute(self, args: list[str], context: ShellContext, options: CommandOptions) -> None:
        if not options.silent:
            context.output.clear()


class ExitCommand(Command):
    name = "exit"
    description = "Exit the shell"
    usage = "exit"
    supports_json = False

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        context.exit_requested = True
        return CommandResult.ok(data={"exit": True})
