"""pwd, cd, ls."""

from __future__ import annotations

from typing import TYPE_CHECKING

from podshell.domain.args import parse_cli_args
from podshell.domain.errors import ErrorKind
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.commands._helpers import display_name, locate
from podshell.shell.registry import Command

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


class PwdCommand(Command):
    name = "pwd"
    description = "Print current working directory (URL)"
    usage = "pwd"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        return CommandResult.ok(data={"url": context.current_url})


class CdCommand(Command):
    name = "cd"
    description = "Change current directory"
    usage = "cd [path]"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        previous = context.current_url
        if not parsed.positional:
            context.current_url = context.root
            return CommandResult.ok(data={"url": context.root, "previousUrl": previous})

        path = parsed.positional[0]
        found = locate(context, "cd", path)
        if isinstance(found, CommandResult):
            if found.error and found.error.code == ErrorKind.PATH_NOT_FOUND:
                return CommandResult.fail(
                    ErrorKind.PATH_NOT_FOUND, f"cd: no such directory: {path}"
                )
            return found
        url, row = found
        if not row.is_container:
            return CommandResult.fail(ErrorKind.NOT_A_DIRECTORY, f"cd: not a directory: {path}")

        context.current_url = url
        return CommandResult.ok(data={"url": url, "previousUrl": previous})


class LsCommand(Command):
    name = "ls"
    description = "List directory contents"
    usage = "ls [path]"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        path = parsed.positional[0] if parsed.positional else "."
        found = locate(context, "ls", path)
        if isinstance(found, CommandResult):
            return found
        url, row = found

        if not row.is_container:
            children = [_entry(url, row.type, row.content_type, row.updated)]
        else:
            rows = context.pod.children(url)
            ordered = sorted(rows.items(), key=lambda item: (not item[1].is_container, item[0]))
            children = [_entry(u, r.type, r.content_type, r.updated) for u, r in ordered]

        return CommandResult.ok(data={"url": url, "children": children})


def _entry(url: str, kind: str, content_type: str, updated: str) -> dict[str, str]:
    return {
        "url": url,
        "name": display_name(url),
        "type": kind,
        "contentType": content_type,
        "updated": updated,
    }
