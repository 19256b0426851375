"""group: organizations, teams, and groups with member references."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, get_args

from podshell.domain.args import get_option_string, parse_cli_args
from podshell.domain.errors import ErrorKind
from podshell.domain.lookup import find_contact, find_group, find_persona
from podshell.domain.records import GroupRecord, GroupType, Table
from podshell.domain.vocab import COMMON_TYPES
from podshell.infrastructure.records import (
    get_contact,
    get_group,
    get_persona,
    list_groups,
    set_group,
)
from podshell.services._helpers import slugify
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.commands._helpers import FieldOption, collect_options, missing, rebuild
from podshell.shell.registry import SubcommandCommand

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext

GROUP_TYPES: tuple[str, ...] = get_args(GroupType)

RDF_TYPES: dict[str, list[str]] = {
    "organization": [COMMON_TYPES["org:Organization"], COMMON_TYPES["vcard:Organization"]],
    "team": [COMMON_TYPES["org:OrganizationalUnit"], COMMON_TYPES["vcard:Group"]],
    "group": [COMMON_TYPES["vcard:Group"], COMMON_TYPES["foaf:Group"]],
}

_FRAGMENTS = {"organization": "org", "team": "team", "group": "group"}

GROUP_FIELDS: list[FieldOption] = [
    (("name",), "name", None),
    (("description", "desc"), "description", None),
    (("url",), "url", None),
    (("parent",), "parent", None),
]


def group_id(root: str, name: str, group_type: str) -> str:
    return f"{root}groups/{slugify(name)}#{_FRAGMENTS[group_type]}"


def _summary(gid: str, record: GroupRecord) -> dict[str, Any]:
    return {
        "id": gid,
        "name": record.name,
        "type": record.group_type,
        "description": record.description,
        "memberCount": len(record.members),
    }


def _find(context: ShellContext, command: str, query: str) -> GroupRecord | CommandResult:
    match = find_group(context.store.get_table(Table.GROUPS), query)
    record = get_group(context.store, match.id) if match.id else None
    if record is None:
        return CommandResult.fail(
            ErrorKind.ENTITY_NOT_FOUND, f"{command}: group not found: {query}"
        )
    return record


def _find_member(context: ShellContext, query: str) -> tuple[str, str] | None:
    """Resolve a member reference: contacts first, then personas."""
    match = find_contact(context.store.get_table(Table.CONTACTS), query)
    if match.id:
        contact = get_contact(context.store, match.id)
        if contact is not None:
            return contact.id, contact.name
    match = find_persona(context.store.get_table(Table.PERSONAS), query)
    if match.id:
        persona = get_persona(context.store, match.id)
        if persona is not None:
            return persona.id, persona.name
    return None


class GroupCommand(SubcommandCommand):
    name = "group"
    description = "Manage groups, teams, and organizations"
    usage = "group <list|create|show|edit|delete|add-member|remove-member|list-members> [args]"
    subcommands = {
        "list": "List groups [--type organization|team|group]",
        "create": "Create a group: group create <name> [--type ...] [--description ...]",
        "show": "Show group details",
        "edit": "Edit a group: group edit <id|name> [--name ...] [--description ...]",
        "delete": "Delete a group",
        "add-member": "Add a member: group add-member <group> <contact|persona>",
        "remove-member": "Remove a member: group remove-member <group> <contact|persona>",
        "list-members": "List members of a group",
    }

    def sub_list(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        type_filter = get_option_string(parsed, "type", "t")
        groups = [
            _summary(gid, record)
            for gid, record in list_groups(context.store).items()
            if type_filter is None or record.group_type == type_filter
        ]
        return CommandResult.ok(data={"groups": groups})

    def sub_create(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("group create", "name")
        name = " ".join(parsed.positional)
        group_type = get_option_string(parsed, "type", "t") or "group"
        if group_type not in GROUP_TYPES:
            return CommandResult.fail(
                ErrorKind.INVALID_ARGUMENT,
                f"group create: invalid type {group_type!r} "
                f"(expected one of: {', '.join(GROUP_TYPES)})",
            )
        if not slugify(name):
            return CommandResult.fail(
                ErrorKind.INVALID_ARGUMENT, f"group create: name {name!r} has no usable characters"
            )

        gid = group_id(context.root, name, group_type)
        if context.store.has_row(Table.GROUPS, gid):
            return CommandResult.fail(
                ErrorKind.DUPLICATE_ENTITY, f"group create: group already exists: {gid}"
            )
        fields = collect_options(parsed, GROUP_FIELDS)
        fields.update(name=name, group_type=group_type)
        record = rebuild(GroupRecord(id=gid, name=name), fields, "group create")
        if isinstance(record, CommandResult):
            return record
        set_group(context.store, record)
        return CommandResult.ok(
            data=_summary(gid, record), message=f"Created {group_type}: {record.name}"
        )

    def sub_show(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("group show", "group id or name")
        record = _find(context, "group show", " ".join(args))
        if isinstance(record, CommandResult):
            return record
        return CommandResult.ok(
            data={"group": record.to_row(), "rdfTypes": RDF_TYPES[record.group_type]}
        )

    def sub_edit(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("group edit", "group id or name")
        record = _find(context, "group edit", parsed.positional[0])
        if isinstance(record, CommandResult):
            return record
        changes = collect_options(parsed, GROUP_FIELDS)
        if not changes:
            return CommandResult.fail(
                ErrorKind.MISSING_ARGUMENT,
                "group edit: no changes specified (use --name, --description, ...)",
            )
        updated = rebuild(record, changes, "group edit")
        if isinstance(updated, CommandResult):
            return updated
        set_group(context.store, updated)
        return CommandResult.ok(
            data={"id": updated.id, "updated": sorted(changes)},
            message=f"Updated group: {updated.name}",
        )

    def sub_delete(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("group delete", "group id or name")
        record = _find(context, "group delete", " ".join(args))
        if isinstance(record, CommandResult):
            return record
        context.store.del_row(Table.GROUPS, record.id)
        return CommandResult.ok(
            data={"id": record.id, "name": record.name}, message=f"Deleted group: {record.name}"
        )

    def sub_add_member(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if len(args) < 2:
            return missing(
                "group add-member", "group and member (group add-member <group> <member>)"
            )
        record = _find(context, "group add-member", args[0])
        if isinstance(record, CommandResult):
            return record
        member = _find_member(context, " ".join(args[1:]))
        if member is None:
            return CommandResult.fail(
                ErrorKind.ENTITY_NOT_FOUND, f"group add-member: member not found: {args[1]}"
            )
        member_id, member_name = member
        if member_id in record.members:
            return CommandResult.fail(
                ErrorKind.DUPLICATE_ENTITY,
                f"group add-member: {member_name} is already a member of {record.name}",
            )
        members = [*record.members, member_id]
        set_group(context.store, record.model_copy(update={"members": members}))
        return CommandResult.ok(
            data={"groupId": record.id, "memberId": member_id},
            message=f"Added {member_name} to {record.name}",
        )

    def sub_remove_member(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if len(args) < 2:
            return missing(
                "group remove-member", "group and member (group remove-member <group> <member>)"
            )
        record = _find(context, "group remove-member", args[0])
        if isinstance(record, CommandResult):
            return record
        member = _find_member(context, " ".join(args[1:]))
        if member is None or member[0] not in record.members:
            return CommandResult.fail(
                ErrorKind.ENTITY_NOT_FOUND,
                f"group remove-member: {args[1]} is not a member of {record.name}",
            )
        member_id, member_name = member
        remaining = [m for m in record.members if m != member_id]
        set_group(context.store, record.model_copy(update={"members": remaining}))
        return CommandResult.ok(
            data={"groupId": record.id, "memberId": member_id},
            message=f"Removed {member_name} from {record.name}",
        )

    def sub_list_members(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("group list-members", "group id or name")
        record = _find(context, "group list-members", " ".join(args))
        if isinstance(record, CommandResult):
            return record
        members = []
        for member_id in record.members:
            contact = get_contact(context.store, member_id)
            persona = None if contact else get_persona(context.store, member_id)
            entity = contact or persona
            members.append(
                {
                    "id": member_id,
                    "name": entity.name if entity else None,
                    "kind": "contact" if contact else "persona" if persona else "unknown",
                }
            )
        return CommandResult.ok(data={"groupId": record.id, "members": members})
