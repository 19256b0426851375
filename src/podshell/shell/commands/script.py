"""script: save and replay repeatable command lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from podshell.domain.args import get_option_boolean, parse_cli_args
from podshell.domain.errors import ErrorKind
from podshell.domain.records import ScriptRow, Table
from podshell.infrastructure.records import get_script, list_scripts, set_script
from podshell.services._helpers import now_iso
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.batch import run_lines, split_script
from podshell.shell.commands._helpers import missing
from podshell.shell.registry import SubcommandCommand

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


def _not_found(sub: str, name: str) -> CommandResult:
    return CommandResult.fail(ErrorKind.PATH_NOT_FOUND, f"script {sub}: not found: {name}")


class ScriptCommand(SubcommandCommand):
    name = "script"
    description = "Save and run repeatable command scripts"
    usage = "script <list|show|save|append|delete|run> [args]"
    subcommands = {
        "list": "List saved scripts",
        "show": "Show a script: script show <name>",
        "save": "Save (replace) a script with one line: script save <name> <command...>",
        "append": "Append a command line: script append <name> <command...>",
        "delete": "Delete a script: script delete <name>",
        "run": "Run line by line: script run <name> [--continue|-c]",
    }

    def sub_list(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        names = sorted(list_scripts(context.store))
        return CommandResult.ok(data={"count": len(names), "names": names})

    def sub_show(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        name = args[0].strip() if args else ""
        if not name:
            return missing("script show", "name")
        row = get_script(context.store, name)
        if row is None:
            return _not_found("show", name)
        return CommandResult.ok(
            data={"name": name, "script": row.script, "lines": split_script(row.script)}
        )

    def sub_save(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        return self._store_line("save", args, context)

    def sub_append(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        return self._store_line("append", args, context)

    def _store_line(self, sub: str, args: list[str], context: ShellContext) -> CommandResult:
        name = args[0].strip() if args else ""
        line = " ".join(args[1:]).strip()
        if not name:
            return missing(f"script {sub}", "name")
        if not line:
            return missing(f"script {sub}", "command line")

        existing = get_script(context.store, name)
        now = now_iso()
        if sub == "save" or existing is None:
            script = line
        else:
            script = "\n".join(part for part in (existing.script.rstrip(), line) if part)
        row = ScriptRow(
            script=script,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        set_script(context.store, name, row)
        verb = "Saved" if sub == "save" else "Appended"
        return CommandResult.ok(
            data={"name": name, "saved": True, "lineCount": len(split_script(script))},
            message=f"{verb} script: {name}",
        )

    def sub_delete(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        name = args[0].strip() if args else ""
        if not name:
            return missing("script delete", "name")
        if get_script(context.store, name) is None:
            return _not_found("delete", name)
        context.store.del_row(Table.CLI_SCRIPTS, name)
        return CommandResult.ok(
            data={"name": name, "deleted": True}, message=f"Deleted script: {name}"
        )

    def sub_run(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        name = parsed.positional[0].strip() if parsed.positional else ""
        keep_going = get_option_boolean(parsed, "continue", "c")
        if not name:
            return missing("script run", "name")
        row = get_script(context.store, name)
        if row is None:
            return _not_found("run", name)
        if name in context.running_scripts:
            return CommandResult.fail(
                ErrorKind.OPERATION_FAILED, f"script run: recursive call to {name}"
            )

        lines = split_script(row.script)
        context.running_scripts.add(name)
        try:
            outcome = run_lines(
                lines, context, keep_going=keep_going, options=CommandOptions(silent=options.silent)
            )
        finally:
            context.running_scripts.discard(name)

        data = {"name": name, "ran": True, "count": len(lines), "failures": outcome.failures}
        if not outcome.success:
            return CommandResult.fail(
                ErrorKind.OPERATION_FAILED,
                f"{outcome.failures} command(s) failed",
                data=data,
            )
        if not lines:
            return CommandResult.ok(data=data, message="(script is empty)")
        return CommandResult.ok(data=data, message=f"Ran script: {name} ({len(lines)} commands)")
