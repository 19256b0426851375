"""persona: identity profiles and the default persona setting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from podshell.domain.args import parse_cli_args
from podshell.domain.errors import ErrorKind
from podshell.domain.lookup import find_persona
from podshell.domain.records import PersonaRecord, Table
from podshell.infrastructure.records import get_persona, list_personas, set_persona
from podshell.services import preferences
from podshell.services._helpers import new_uuid
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.commands._helpers import (
    FieldOption,
    as_mailto,
    as_tel,
    collect_options,
    missing,
    rebuild,
)
from podshell.shell.registry import SubcommandCommand

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext

PERSONA_FIELDS: list[FieldOption] = [
    (("name",), "name", None),
    (("nickname", "nick"), "nickname", None),
    (("given-name", "firstName"), "given_name", None),
    (("family-name", "lastName"), "family_name", None),
    (("email",), "email", as_mailto),
    (("phone",), "phone", as_tel),
    (("bio",), "bio", None),
    (("homepage",), "homepage", None),
    (("image", "avatar"), "image", None),
    (("inbox",), "inbox", None),
    (("public-type-index",), "public_type_index", None),
    (("private-type-index",), "private_type_index", None),
]


def persona_id(root: str) -> str:
    return f"{root}profiles/{new_uuid()}#me"


def _default_id(context: ShellContext) -> str | None:
    return preferences.get_setting(context.store, preferences.DEFAULT_PERSONA_ID)


def _find(context: ShellContext, command: str, query: str) -> PersonaRecord | CommandResult:
    match = find_persona(context.store.get_table(Table.PERSONAS), query)
    record = get_persona(context.store, match.id) if match.id else None
    if record is None:
        return CommandResult.fail(
            ErrorKind.ENTITY_NOT_FOUND, f"{command}: persona not found: {query}"
        )
    return record


class PersonaCommand(SubcommandCommand):
    name = "persona"
    description = "Manage identity personas"
    usage = "persona <list|create|show|edit|delete|set-default> [args]"
    subcommands = {
        "list": "List all personas",
        "create": "Create a persona: persona create <name> [--email ...]",
        "show": "Show persona details: persona show <id|name>",
        "edit": "Edit a persona: persona edit <id|name> [--name ...] [--email ...]",
        "delete": "Delete a persona",
        "set-default": "Make a persona the default",
    }

    def sub_list(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        default_id = _default_id(context)
        personas = [
            {
                "id": pid,
                "name": record.name,
                "nickname": record.nickname,
                "isDefault": pid == default_id,
            }
            for pid, record in list_personas(context.store).items()
        ]
        return CommandResult.ok(data={"personas": personas, "defaultId": default_id})

    def sub_create(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("persona create", "name")
        fields = collect_options(parsed, PERSONA_FIELDS)
        fields["name"] = " ".join(parsed.positional)

        draft = PersonaRecord(id=persona_id(context.root), name=fields["name"])
        record = rebuild(draft, fields, "persona create")
        if isinstance(record, CommandResult):
            return record

        first = context.store.is_table_empty(Table.PERSONAS)
        set_persona(context.store, record)
        if first or _default_id(context) is None:
            preferences.set_setting(context.store, preferences.DEFAULT_PERSONA_ID, record.id)
        is_default = _default_id(context) == record.id
        return CommandResult.ok(
            data={"id": record.id, "name": record.name, "isDefault": is_default},
            message=f"Created persona: {record.name}",
        )

    def sub_show(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("persona show", "persona id or name")
        record = _find(context, "persona show", " ".join(parsed.positional))
        if isinstance(record, CommandResult):
            return record
        return CommandResult.ok(
            data={"persona": record.to_row(), "isDefault": record.id == _default_id(context)}
        )

    def sub_edit(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("persona edit", "persona id or name")
        record = _find(context, "persona edit", parsed.positional[0])
        if isinstance(record, CommandResult):
            return record

        changes = collect_options(parsed, PERSONA_FIELDS)
        if not changes:
            return CommandResult.fail(
                ErrorKind.MISSING_ARGUMENT,
                "persona edit: no changes specified (use --name, --email, ...)",
            )
        updated = rebuild(record, changes, "persona edit")
        if isinstance(updated, CommandResult):
            return updated
        set_persona(context.store, updated)
        return CommandResult.ok(
            data={"id": updated.id, "updated": sorted(changes)},
            message=f"Updated persona: {updated.name}",
        )

    def sub_delete(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("persona delete", "persona id or name")
        record = _find(context, "persona delete", " ".join(args))
        if isinstance(record, CommandResult):
            return record

        context.store.del_row(Table.PERSONAS, record.id)
        new_default = _default_id(context)
        if new_default == record.id:
            remaining = context.store.row_ids(Table.PERSONAS)
            new_default = remaining[0] if remaining else None
            preferences.set_setting(context.store, preferences.DEFAULT_PERSONA_ID, new_default)
        return CommandResult.ok(
            data={"id": record.id, "name": record.name, "defaultId": new_default},
            message=f"Deleted persona: {record.name}",
        )

    def sub_set_default(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("persona set-default", "persona id or name")
        record = _find(context, "persona set-default", " ".join(args))
        if isinstance(record, CommandResult):
            return record
        preferences.set_setting(context.store, preferences.DEFAULT_PERSONA_ID, record.id)
        return CommandResult.ok(
            data={"id": record.id, "name": record.name},
            message=f"Default persona: {record.name}",
        )
