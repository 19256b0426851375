"""Command-specific Rich renderers for CommandResult.

Renderers read ``result.data`` only; handlers never format text. Dispatch
is by ``"<command> <subcommand>"`` first, then by ``"<command>"``. Results
with no renderer fall back to their message, a usage block, or JSON.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from podshell.output.console import create_console, get_output, style_for_kind
from podshell.services.preferences import format_setting_value
from podshell.shell.executor import extract_json_flag

if TYPE_CHECKING:
    from rich.console import Console

    from podshell.services.result import CommandResult

RenderFn = Callable[["CommandResult", "Console"], None]


def to_json(value: Any) -> str:
    return _json.dumps(value, indent=2, ensure_ascii=False, default=str)


# ── Public API ────────────────────────────────────────────────────────


def render_result(tokens: list[str], result: CommandResult, *, verbose: bool = False) -> str:
    """Render a successful result of the command line *tokens*.

    A ``--json`` flag on the line itself prints ``data`` as JSON.
    """
    args, json_flag = extract_json_flag(tokens[1:])
    if json_flag:
        return to_json(result.data)

    console = create_console()
    renderer = _lookup(tokens[:1] + args)
    if renderer is not None and isinstance(result.data, dict):
        renderer(result, console)
    else:
        _render_generic(result, console)
    if verbose and result.message and renderer is not None:
        console.print(Text(result.message, style="pod.key"))
    return get_output(console).rstrip("\n")


def render_error(result: CommandResult, *, verbose: bool = False) -> str:
    console = create_console()
    err = result.error
    label = Text("ERROR", style="pod.error")
    code = Text(f"  {err.code}" if err else "", style="pod.key")
    console.print(label, code, Text(" - "), Text(err.message if err else "Unknown error"), sep="")
    if verbose and err and err.details:
        console.print(Text("  details:", style="dim"))
        console.print(f"    {err.details}")
    return get_output(console).rstrip("\n")


def render_quiet(tokens: list[str], result: CommandResult) -> str:
    """Minimal output: ids or urls of list results, nothing for plain successes."""
    if not result.success:
        return f"ERROR: {result.error.message if result.error else 'Unknown error'}"
    data = result.data if isinstance(result.data, dict) else {}
    for key in ("children", "personas", "contacts", "groups", "members", "registrations"):
        items = data.get(key)
        if isinstance(items, list):
            return "\n".join(_extract_id(item) for item in items if _extract_id(item))
    if "names" in data:
        return "\n".join(data["names"])
    if "content" in data:
        return str(data["content"])
    return ""


# ── Helpers ───────────────────────────────────────────────────────────


def _lookup(tokens: list[str]) -> RenderFn | None:
    if not tokens:
        return None
    name = tokens[0].lower()
    if len(tokens) > 1:
        found = _RENDERERS.get(f"{name} {tokens[1].lower()}")
        if found is not None:
            return found
    return _RENDERERS.get(name)


def _extract_id(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("id", "url", "for_class"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    if value is None or value == "" or value == []:
        return
    k = Text(f"  {key}: ", style="pod.key")
    if isinstance(value, list):
        value = ", ".join(str(v) for v in value)
    if key == "id":
        v = Text(str(value), style="pod.id")
    elif key in ("url", "webId"):
        v = Text(str(value), style="pod.url")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _fields(console: Console, data: dict[str, Any], skip: tuple[str, ...] = ()) -> None:
    for key, value in data.items():
        if key not in skip and not isinstance(value, dict):
            _field(console, key, value)


def _empty(console: Console, what: str) -> None:
    console.print(Text(f"(no {what})", style="dim"))


# ── Generic ───────────────────────────────────────────────────────────


def _render_generic(result: CommandResult, console: Console) -> None:
    data = result.data
    if result.message is not None:
        if result.message:
            console.print(Text(result.message, style="pod.ok"))
        return
    if isinstance(data, dict) and "usage" in data:
        _render_usage(result, console)
        return
    if data is None:
        return
    console.print(to_json(data), markup=False)


def _render_usage(result: CommandResult, console: Console) -> None:
    d = result.data
    console.print(Text(f"Usage: {d['usage']}", style="pod.title"))
    subcommands = d.get("subcommands") or {}
    if subcommands:
        console.print()
        console.print("Subcommands:")
        width = max(len(s) for s in subcommands)
        for sub, text in subcommands.items():
            console.print(f"  {sub.ljust(width)}  {text}", markup=False)


# ── General / navigation / files ──────────────────────────────────────


def _render_help(result: CommandResult, console: Console) -> None:
    d = result.data
    if "commands" not in d:
        console.print(Text(d["name"], style="pod.title"), f" - {d['description']}", sep="")
        _render_usage(result, console)
        return
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Command", style="pod.title", no_wrap=True)
    table.add_column("Description")
    for cmd in d["commands"]:
        table.add_row(cmd["name"], cmd["description"])
    console.print("Available commands:")
    console.print(table)
    console.print(Text('\nType "help <command>" for details.', style="dim"))


def _render_nothing(result: CommandResult, console: Console) -> None:
    return None


def _render_url(result: CommandResult, console: Console) -> None:
    console.print(result.data["url"], markup=False)


def _render_ls(result: CommandResult, console: Console) -> None:
    children = result.data["children"]
    if not children:
        _empty(console, "entries")
        return
    for child in children:
        name = child["name"] + ("/" if child["type"] == "Container" else "")
        console.print(Text(name, style=style_for_kind(child["type"])))


def _render_cat(result: CommandResult, console: Console) -> None:
    console.print(result.data["content"], markup=False, end="")
    console.print()


def _render_rm(result: CommandResult, console: Console) -> None:
    deleted = result.data["deleted"]
    if not deleted:
        console.print(Text("Nothing removed", style="dim"))
        return
    console.print(Text(f"Removed {len(deleted)} item(s)", style="pod.ok"))
    for url in deleted:
        console.print(Text(f"  {url}", style="pod.url"))


def _render_file_info(result: CommandResult, console: Console) -> None:
    d = dict(result.data)
    if d.get("authorName"):
        d["author"] = f"{d.pop('authorName')} ({d['author']})"
    else:
        d.pop("authorName", None)
    console.print(Text(d.pop("name"), style="pod.title"))
    _fields(console, d)


# ── Entities ──────────────────────────────────────────────────────────


def _render_persona_list(result: CommandResult, console: Console) -> None:
    personas = result.data["personas"]
    if not personas:
        _empty(console, "personas")
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("", no_wrap=True)
    table.add_column("Name", style="pod.title")
    table.add_column("Nickname")
    table.add_column("ID", style="pod.id", no_wrap=True)
    for p in personas:
        marker = Text("*", style="pod.default") if p["isDefault"] else Text("")
        table.add_row(marker, p["name"], p.get("nickname") or "", p["id"])
    console.print(table)


def _render_persona_show(result: CommandResult, console: Console) -> None:
    persona = result.data["persona"]
    title = Text(persona["name"], style="pod.title")
    if result.data["isDefault"]:
        title.append(" (default)", style="pod.default")
    console.print(title)
    _fields(console, persona, skip=("name", "schemaVersion"))


def _render_contact_list(result: CommandResult, console: Console) -> None:
    contacts = result.data["contacts"]
    if not contacts:
        _empty(console, "contacts")
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Name", style="pod.title")
    table.add_column("Email")
    table.add_column("Organization")
    table.add_column("Kind")
    for c in contacts:
        kind = "agent" if c.get("isAgent") else "person"
        table.add_row(c["name"], c.get("email") or "", c.get("organization") or "", kind)
    console.print(table)


def _render_contact_show(result: CommandResult, console: Console) -> None:
    contact = result.data["contact"]
    console.print(Text(contact["name"], style="pod.title"))
    _fields(console, contact, skip=("name", "schemaVersion"))


def _render_group_list(result: CommandResult, console: Console) -> None:
    groups = result.data["groups"]
    if not groups:
        _empty(console, "groups")
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Name", style="pod.title")
    table.add_column("Type")
    table.add_column("Members", justify="right")
    table.add_column("ID", style="pod.id", no_wrap=True)
    for g in groups:
        table.add_row(g["name"], g["type"], str(g["memberCount"]), g["id"])
    console.print(table)


def _render_group_show(result: CommandResult, console: Console) -> None:
    group = result.data["group"]
    console.print(Text(group["name"], style="pod.title"))
    _fields(console, group, skip=("name", "schemaVersion"))
    _field(console, "rdfTypes", result.data["rdfTypes"])


def _render_group_members(result: CommandResult, console: Console) -> None:
    members = result.data["members"]
    if not members:
        _empty(console, "members")
        return
    for m in members:
        name = m["name"] or "(unknown)"
        detail = Text(f" [{m['kind']}] {m['id']}", style="dim")
        console.print(Text(name, style="pod.title"), detail, sep="")


# ── Type index ────────────────────────────────────────────────────────


def _registration_table(registrations: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Type", style="pod.title", no_wrap=True)
    table.add_column("Index")
    table.add_column("Location", style="pod.url")
    for reg in registrations:
        locations = [*reg.get("instances", [])]
        if reg.get("instance_container"):
            locations.append(reg["instance_container"])
        table.add_row(reg["class_display_name"], reg["index_type"], "\n".join(locations))
    return table


def _render_registrations(result: CommandResult, console: Console) -> None:
    registrations = result.data["registrations"]
    if not registrations:
        _empty(console, "type registrations")
        return
    console.print(_registration_table(registrations))


def _render_type_locations(result: CommandResult, console: Console) -> None:
    d = result.data
    console.print(Text(d["type"], style="pod.title"))
    if not d["instances"] and not d["containers"]:
        _empty(console, "locations")
        return
    _field(console, "instances", d["instances"])
    _field(console, "containers", d["containers"])


# ── Scripts / config ──────────────────────────────────────────────────


def _render_script_list(result: CommandResult, console: Console) -> None:
    names = result.data["names"]
    if not names:
        _empty(console, "scripts saved")
        return
    for name in names:
        console.print(name, markup=False)


def _render_script_show(result: CommandResult, console: Console) -> None:
    console.print(Text(result.data["name"], style="pod.title"))
    lines = result.data["lines"]
    if not lines:
        console.print(Text("(empty)", style="dim"))
    for line in lines:
        console.print(f"  {line}", markup=False)


def _render_config_list(result: CommandResult, console: Console) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Key", style="pod.title", no_wrap=True)
    table.add_column("Value")
    table.add_column("Description", style="dim")
    for s in result.data["settings"]:
        value = _setting_text(s)
        table.add_row(s["key"], value, s["description"])
    console.print(table)


def _render_config_get(result: CommandResult, console: Console) -> None:
    s = result.data
    console.print(Text(s["key"], style="pod.title"), f" = {_setting_text(s)}", sep="")
    console.print(Text(f"  {s['description']}", style="dim"))
    if s["options"]:
        console.print(Text(f"  options: {' | '.join(s['options'])}", style="dim"))


def _setting_text(setting: dict[str, Any]) -> str:
    text = format_setting_value(setting["value"])
    return f"{text} (default)" if setting["isDefault"] else text


def _render_export(result: CommandResult, console: Console) -> None:
    console.print(to_json(result.data), markup=False)


# ── Dispatch ──────────────────────────────────────────────────────────

_RENDERERS: dict[str, RenderFn] = {
    "help": _render_help,
    "pwd": _render_url,
    "cd": _render_nothing,
    "exit": _render_nothing,
    "clear": _render_nothing,
    "ls": _render_ls,
    "cat": _render_cat,
    "rm": _render_rm,
    "file info": _render_file_info,
    "persona list": _render_persona_list,
    "persona show": _render_persona_show,
    "contact list": _render_contact_list,
    "contact search": _render_contact_list,
    "contact show": _render_contact_show,
    "group list": _render_group_list,
    "group show": _render_group_show,
    "group list-members": _render_group_members,
    "typeindex list": _render_registrations,
    "typeindex show": _render_registrations,
    "typeindex locations": _render_type_locations,
    "script list": _render_script_list,
    "script show": _render_script_show,
    "config list": _render_config_list,
    "config get": _render_config_get,
    "export": _render_export,
}
