"""Command base classes.

A command declares its name, help text, and whether it accepts ``--json``.
Handlers take the remaining tokens, the session context, and the effective
options, and return a :class:`CommandResult` (or ``None`` for a plain
success). Raising is allowed; the executor turns it into ``OPERATION_FAILED``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from podshell.domain.errors import ErrorKind
from podshell.services.result import CommandError, CommandOptions, CommandResult

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


class Command:
    """One entry of the command table."""

    name: ClassVar[str]
    description: ClassVar[str]
    usage: ClassVar[str]
    supports_json: ClassVar[bool] = True

    def validate(self, args: list[str], context: ShellContext) -> CommandError | None:
        """Pre-flight check run before :meth:`execute`; ``None`` means proceed."""
        return None

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult | dict[str, Any] | None:
        raise NotImplementedError


class SubcommandCommand(Command):
    """A command whose first token selects a ``sub_<name>`` method.

    ``subcommands`` maps each subcommand to a one-line description; dashes in
    names become underscores in method names (``set-title`` -> ``sub_set_title``).
    """

    subcommands: ClassVar[dict[str, str]]

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult | dict[str, Any] | None:
        if not args:
            return CommandResult.ok(
                data={"command": self.name, "usage": self.usage, "subcommands": self.subcommands}
            )
        sub, rest = args[0].lower(), args[1:]
        if sub not in self.subcommands:
            return CommandResult.fail(
                ErrorKind.UNKNOWN_SUBCOMMAND,
                f'Unknown subcommand: {args[0]}. Use "{self.name}" for help.',
            )
        handler = getattr(self, f"sub_{sub.replace('-', '_')}")
        return handler(rest, context, options)
