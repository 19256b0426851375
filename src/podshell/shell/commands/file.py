"""file: leaf resource metadata (title, description, author)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from podshell.domain.errors import ErrorKind
from podshell.domain.lookup import find_persona
from podshell.domain.records import ResourceRow, Table
from podshell.infrastructure.records import get_persona, set_resource
from podshell.services._helpers import now_iso
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.commands._helpers import display_name, locate, missing
from podshell.shell.registry import SubcommandCommand

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


def _leaf(
    context: ShellContext, command: str, path: str
) -> tuple[str, ResourceRow] | CommandResult:
    found = locate(context, command, path)
    if isinstance(found, CommandResult):
        return found
    if found[1].is_container:
        return CommandResult.fail(
            ErrorKind.NOT_A_FILE, f"{command}: {path}: is a directory (metadata applies to files)"
        )
    return found


def _touch_metadata(context: ShellContext, url: str, row: ResourceRow, **changes: Any) -> None:
    set_resource(context.store, url, row.model_copy(update={**changes, "modified": now_iso()}))


class FileCommand(SubcommandCommand):
    name = "file"
    description = "File metadata management"
    usage = "file <info|set-title|set-description|set-author> <path> [value]"
    subcommands = {
        "info": "Show file metadata",
        "set-title": "Set the file title",
        "set-description": "Set the file description",
        "set-author": "Set the file author to a persona",
    }

    def sub_info(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("file info", "file path")
        found = _leaf(context, "file info", args[0])
        if isinstance(found, CommandResult):
            return found
        url, row = found

        author_name = None
        if row.author:
            persona = get_persona(context.store, row.author)
            author_name = persona.name if persona else None
        return CommandResult.ok(
            data={
                "url": url,
                "name": display_name(url),
                "contentType": row.content_type,
                "size": len((row.body or "").encode("utf-8")),
                "updated": row.updated,
                "title": row.title,
                "description": row.description,
                "author": row.author,
                "authorName": author_name,
                "created": row.created,
                "modified": row.modified,
            }
        )

    def sub_set_title(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        return self._set_text(args, context, "set-title", "title")

    def sub_set_description(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        return self._set_text(args, context, "set-description", "description")

    def sub_set_author(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("file set-author", "file path")
        if len(args) < 2:
            return missing("file set-author", "persona")
        found = _leaf(context, "file set-author", args[0])
        if isinstance(found, CommandResult):
            return found
        url, row = found

        query = " ".join(args[1:])
        match = find_persona(context.store.get_table(Table.PERSONAS), query)
        if not match.found or match.id is None:
            return CommandResult.fail(
                ErrorKind.ENTITY_NOT_FOUND, f"file set-author: persona not found: {query}"
            )
        _touch_metadata(context, url, row, author=match.id)
        persona = get_persona(context.store, match.id)
        return CommandResult.ok(
            data={"url": url, "author": match.id, "authorName": persona.name if persona else None},
            message=f"Set author of {args[0]} to {persona.name if persona else match.id}",
        )

    def _set_text(
        self, args: list[str], context: ShellContext, sub: str, field: str
    ) -> CommandResult:
        command = f"file {sub}"
        if not args:
            return missing(command, "file path")
        value = " ".join(args[1:])
        if not value:
            return missing(command, field)
        found = _leaf(context, command, args[0])
        if isinstance(found, CommandResult):
            return found
        url, row = found
        _touch_metadata(context, url, row, **{field: value})
        return CommandResult.ok(
            data={"url": url, field: value}, message=f"Set {field} of {args[0]}"
        )
