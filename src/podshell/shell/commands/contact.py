"""contact: address book entries for people and agents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from podshell.domain.args import get_option_boolean, parse_cli_args
from podshell.domain.errors import ErrorKind
from podshell.domain.lookup import find_contact, find_persona
from podshell.domain.records import ContactRecord, Table
from podshell.infrastructure.records import get_contact, get_persona, list_contacts, set_contact
from podshell.services._helpers import new_uuid
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.commands._helpers import (
    FieldOption,
    as_mailto,
    as_tel,
    collect_options,
    missing,
    rebuild,
    strip_scheme,
)
from podshell.shell.registry import SubcommandCommand

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext

CONTACT_FIELDS: list[FieldOption] = [
    (("name",), "name", None),
    (("nickname", "nick"), "nickname", None),
    (("email",), "email", as_mailto),
    (("phone",), "phone", as_tel),
    (("url",), "url", None),
    (("notes",), "notes", None),
    (("org", "organization"), "organization", None),
    (("role",), "role", None),
    (("webid",), "webid", None),
]

SEARCH_FIELDS = ("name", "email", "nickname", "organization", "notes")


def contact_id(root: str) -> str:
    return f"{root}contacts/people#{new_uuid()}"


def _summary(cid: str, record: ContactRecord) -> dict[str, Any]:
    return {
        "id": cid,
        "name": record.name,
        "email": strip_scheme(record.email),
        "organization": record.organization,
        "isAgent": record.is_agent,
    }


def _find(context: ShellContext, command: str, query: str) -> ContactRecord | CommandResult:
    match = find_contact(context.store.get_table(Table.CONTACTS), query)
    record = get_contact(context.store, match.id) if match.id else None
    if record is None:
        return CommandResult.fail(
            ErrorKind.ENTITY_NOT_FOUND, f"{command}: contact not found: {query}"
        )
    return record


class ContactCommand(SubcommandCommand):
    name = "contact"
    description = "Manage address book contacts"
    usage = "contact <list|add|show|edit|delete|search|link> [args]"
    subcommands = {
        "list": "List contacts [--agents|--people]",
        "add": "Add a contact: contact add <name> [--email ...] [--org ...] [--agent]",
        "show": "Show contact details",
        "edit": "Edit a contact: contact edit <id|name> [--name ...] [--email ...]",
        "delete": "Delete a contact",
        "search": "Search contacts by name, email, nickname, organization, notes",
        "link": "Link a contact to a persona: contact link <contact> <persona>",
    }

    def sub_list(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        agents_only = get_option_boolean(parsed, "agents", "a")
        people_only = get_option_boolean(parsed, "people", "p")
        contacts = [
            _summary(cid, record)
            for cid, record in list_contacts(context.store).items()
            if not (agents_only and not record.is_agent)
            and not (people_only and record.is_agent)
        ]
        return CommandResult.ok(data={"contacts": contacts})

    def sub_add(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("contact add", "name")
        fields = collect_options(parsed, CONTACT_FIELDS)
        fields["name"] = " ".join(parsed.positional)
        fields["is_agent"] = get_option_boolean(parsed, "agent")

        draft = ContactRecord(
            id=contact_id(context.root), name=fields["name"], uid=f"urn:uuid:{new_uuid()}"
        )
        record = rebuild(draft, fields, "contact add")
        if isinstance(record, CommandResult):
            return record
        set_contact(context.store, record)
        return CommandResult.ok(
            data=_summary(record.id, record), message=f"Added contact: {record.name}"
        )

    def sub_show(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("contact show", "contact id or name")
        record = _find(context, "contact show", " ".join(args))
        if isinstance(record, CommandResult):
            return record
        return CommandResult.ok(data={"contact": record.to_row()})

    def sub_edit(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("contact edit", "contact id or name")
        record = _find(context, "contact edit", parsed.positional[0])
        if isinstance(record, CommandResult):
            return record

        changes = collect_options(parsed, CONTACT_FIELDS)
        if not changes:
            return CommandResult.fail(
                ErrorKind.MISSING_ARGUMENT,
                "contact edit: no changes specified (use --name, --email, ...)",
            )
        updated = rebuild(record, changes, "contact edit")
        if isinstance(updated, CommandResult):
            return updated
        set_contact(context.store, updated)
        return CommandResult.ok(
            data={"id": updated.id, "updated": sorted(changes)},
            message=f"Updated contact: {updated.name}",
        )

    def sub_delete(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("contact delete", "contact id or name")
        record = _find(context, "contact delete", " ".join(args))
        if isinstance(record, CommandResult):
            return record
        context.store.del_row(Table.CONTACTS, record.id)
        return CommandResult.ok(
            data={"id": record.id, "name": record.name},
            message=f"Deleted contact: {record.name}",
        )

    def sub_search(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        query = " ".join(args).lower()
        if not query:
            return missing("contact search", "query")
        matches = []
        for cid, record in list_contacts(context.store).items():
            haystack = [getattr(record, f) or "" for f in SEARCH_FIELDS]
            if any(query in value.lower() for value in haystack):
                matches.append(_summary(cid, record))
        return CommandResult.ok(data={"query": query, "contacts": matches})

    def sub_link(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if len(args) < 2:
            return missing("contact link", "contact and persona (contact link <contact> <persona>)")
        record = _find(context, "contact link", args[0])
        if isinstance(record, CommandResult):
            return record
        match = find_persona(context.store.get_table(Table.PERSONAS), args[1])
        persona = get_persona(context.store, match.id) if match.id else None
        if persona is None:
            return CommandResult.fail(
                ErrorKind.ENTITY_NOT_FOUND, f"contact link: persona not found: {args[1]}"
            )

        linked = persona.id in record.related
        if not linked:
            set_contact(
                context.store,
                record.model_copy(update={"related": [*record.related, persona.id]}),
            )
        return CommandResult.ok(
            data={"contactId": record.id, "personaId": persona.id, "alreadyLinked": linked},
            message=(
                "Contact is already linked to this persona"
                if linked
                else f'Linked {record.name} to persona "{persona.name}"'
            ),
        )
