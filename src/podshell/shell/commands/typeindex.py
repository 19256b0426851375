"""typeindex: front end to the TypeRegistry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from podshell.domain.args import get_option_boolean, parse_cli_args
from podshell.domain.errors import ErrorKind, UnknownClassError
from podshell.domain.paths import PathError, resolve_path
from podshell.domain.records import IndexType
from podshell.domain.vocab import common_type_names, is_qualified_iri
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.commands._helpers import missing, path_failure
from podshell.shell.registry import SubcommandCommand

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


def _unknown_type(command: str, exc: UnknownClassError) -> CommandResult:
    hint = ", ".join(common_type_names()[:8])
    return CommandResult.fail(
        ErrorKind.INVALID_ARGUMENT,
        f"{command}: {exc}. Use a full IRI or one of: {hint}...",
    )


class TypeIndexCommand(SubcommandCommand):
    name = "typeindex"
    description = "Manage type indexes (public and private)"
    usage = "typeindex <list|show|register|unregister|locations> [args]"
    subcommands = {
        "list": "List all type registrations",
        "show": "Show one index: typeindex show <public|private>",
        "register": "Register a type: typeindex register <type> <location> [--public]",
        "unregister": "Remove a registration: typeindex unregister <type> [--public] [--private]",
        "locations": "Show every location for a type: typeindex locations <type>",
    }

    def sub_list(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        registrations = [r.model_dump(mode="json") for r in context.types.list_all()]
        return CommandResult.ok(data={"registrations": registrations})

    def sub_show(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("typeindex show", "index type (public|private)")
        kind = args[0].lower()
        if kind not in ("public", "private"):
            return CommandResult.fail(
                ErrorKind.INVALID_ARGUMENT,
                f"typeindex show: expected public or private, got {args[0]!r}",
            )
        index_type: IndexType = "public" if kind == "public" else "private"
        registrations = [
            r.model_dump(mode="json") for r in context.types.list_by_index_type(index_type)
        ]
        return CommandResult.ok(data={"indexType": index_type, "registrations": registrations})

    def sub_register(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if len(parsed.positional) < 2:
            return missing("typeindex register", "type and location")
        type_arg, location_arg = parsed.positional[:2]
        index_type: IndexType = "public" if get_option_boolean(parsed, "public") else "private"

        location = location_arg
        if not is_qualified_iri(location):
            resolved = resolve_path(context.root, location, context.root)
            if isinstance(resolved, PathError):
                return path_failure("typeindex register", resolved)
            location = resolved.url

        try:
            if location.endswith("/"):
                reg = context.types.register(type_arg, index_type, instance_container=location)
            else:
                reg = context.types.register(type_arg, index_type, instance=location)
        except UnknownClassError as exc:
            return _unknown_type("typeindex register", exc)

        target = "container" if location.endswith("/") else "instance"
        return CommandResult.ok(
            data=reg.model_dump(mode="json"),
            message=f"Registered {type_arg} -> {target} {location} ({index_type} index)",
        )

    def sub_unregister(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("typeindex unregister", "type")
        type_arg = parsed.positional[0]
        public = get_option_boolean(parsed, "public")
        private = get_option_boolean(parsed, "private")
        index_type: IndexType | None = None
        if public and not private:
            index_type = "public"
        elif private and not public:
            index_type = "private"

        try:
            removed = context.types.unregister(type_arg, index_type)
        except UnknownClassError as exc:
            return _unknown_type("typeindex unregister", exc)
        if not removed:
            return CommandResult.fail(
                ErrorKind.ENTITY_NOT_FOUND,
                f"typeindex unregister: no registration found for {type_arg}",
            )
        scope = f"{index_type} index" if index_type else "all indexes"
        return CommandResult.ok(
            data={"type": type_arg, "indexType": index_type, "removed": True},
            message=f"Unregistered {type_arg} from {scope}",
        )

    def sub_locations(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("typeindex locations", "type")
        try:
            locations = context.types.locations_for(args[0])
        except UnknownClassError as exc:
            return _unknown_type("typeindex locations", exc)
        return CommandResult.ok(data={"type": args[0], **locations.model_dump()})
