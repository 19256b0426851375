"""Shared plumbing for command handlers."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from podshell.domain.args import ParsedArgs, get_option_string
from podshell.domain.errors import ErrorKind
from podshell.domain.paths import PathError, decode_segment, remove_trailing_slash, resolve_path
from podshell.domain.records import Record, ResourceRow
from podshell.services.result import CommandResult

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


def missing(command: str, what: str) -> CommandResult:
    return CommandResult.fail(ErrorKind.MISSING_ARGUMENT, f"{command}: missing {what}")


def path_failure(command: str, error: PathError) -> CommandResult:
    return CommandResult.fail(error.code, f"{command}: {error.error}")


def resolve(context: ShellContext, command: str, path: str) -> str | CommandResult:
    """Resolve *path* against the working container, or a failure result."""
    resolved = resolve_path(context.current_url, path, context.root)
    if isinstance(resolved, PathError):
        return path_failure(command, resolved)
    return resolved.url


def find_resource(context: ShellContext, url: str) -> tuple[str, ResourceRow] | None:
    """Look up *url*; a leaf candidate also matches a container of that name."""
    row = context.pod.get(url)
    if row is not None:
        return url, row
    if not url.endswith("/"):
        container = f"{url}/"
        row = context.pod.get(container)
        if row is not None:
            return container, row
    return None


def locate(
    context: ShellContext, command: str, path: str
) -> tuple[str, ResourceRow] | CommandResult:
    """Resolve *path* and require an existing resource there."""
    url = resolve(context, command, path)
    if isinstance(url, CommandResult):
        return url
    found = find_resource(context, url)
    if found is None:
        return CommandResult.fail(
            ErrorKind.PATH_NOT_FOUND, f"{command}: no such file or directory: {path}"
        )
    return found


def display_name(url: str) -> str:
    """Decoded last segment of a locator."""
    tail = remove_trailing_slash(url).rsplit("/", 1)[-1]
    return decode_segment(tail)


# ---------------------------------------------------------------------------
# Entity editing
# ---------------------------------------------------------------------------

# (option aliases, record field, value transform)
FieldOption = tuple[tuple[str, ...], str, Callable[[str], Any] | None]


def collect_options(parsed: ParsedArgs, fields: list[FieldOption]) -> dict[str, Any]:
    """Map ``--option value`` pairs onto record fields, applying transforms."""
    changes: dict[str, Any] = {}
    for aliases, field, transform in fields:
        value = get_option_string(parsed, *aliases)
        if value is not None:
            changes[field] = transform(value) if transform else value
    return changes


def rebuild[R: Record](
    record: R, changes: dict[str, Any], command: str
) -> R | CommandResult:
    """Re-validate *record* with *changes* applied, or an INVALID_ENTITY failure."""
    try:
        return type(record).model_validate({**record.model_dump(), **changes})
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(p) for p in first["loc"])
        return CommandResult.fail(
            ErrorKind.INVALID_ENTITY,
            f"{command}: invalid {where}: {first['msg']}",
            exc.errors(include_url=False, include_context=False, include_input=False),
        )


def as_mailto(value: str) -> str:
    return value if value.startswith("mailto:") else f"mailto:{value}"


def as_tel(value: str) -> str:
    return value if value.startswith("tel:") else f"tel:{''.join(value.split())}"


def strip_scheme(value: str | None) -> str | None:
    if value is None:
        return None
    return value.removeprefix("mailto:").removeprefix("tel:")
