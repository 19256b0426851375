"""config: typed preferences kept as store values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from podshell.domain.errors import ErrorKind
from podshell.services import preferences
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.commands._helpers import missing
from podshell.shell.registry import SubcommandCommand

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


def _unknown_key(sub: str, key: str) -> CommandResult:
    valid = ", ".join(preferences.SETTINGS)
    return CommandResult.fail(
        ErrorKind.INVALID_ARGUMENT,
        f"config {sub}: unknown setting: {key}. Valid keys: {valid}",
    )


def _describe(context: ShellContext, key: str) -> dict[str, Any]:
    meta = preferences.SETTINGS[key]
    stored = context.store.get_value(key)
    return {
        "key": key,
        "label": meta.label,
        "description": meta.description,
        "kind": meta.kind,
        "options": list(meta.options),
        "value": meta.default if stored is None else stored,
        "default": meta.default,
        "isDefault": stored is None,
    }


class ConfigCommand(SubcommandCommand):
    name = "config"
    description = "Settings and preferences management"
    usage = "config <list|get|set|reset> [args]"
    subcommands = {
        "list": "Show all settings with current values",
        "get": "Get one setting: config get <key>",
        "set": "Set a setting: config set <key> <value>",
        "reset": "Reset one setting, or all: config reset [key]",
    }

    def sub_list(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        return CommandResult.ok(
            data={"settings": [_describe(context, key) for key in preferences.SETTINGS]}
        )

    def sub_get(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("config get", "key")
        key = args[0]
        if not preferences.is_setting_key(key):
            return _unknown_key("get", key)
        return CommandResult.ok(data=_describe(context, key))

    def sub_set(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("config set", "key")
        key, text = args[0], " ".join(args[1:]).strip()
        if not text:
            return missing("config set", "value")
        if not preferences.is_setting_key(key):
            return _unknown_key("set", key)

        value = preferences.parse_setting_value(key, text)
        if value is None:
            return CommandResult.fail(
                ErrorKind.INVALID_ARGUMENT,
                f"config set: invalid value for {key} ({preferences.expected_hint(key)})",
            )
        preferences.set_setting(context.store, key, value)
        return CommandResult.ok(
            data={"key": key, "value": value},
            message=f"Set {key} = {preferences.format_setting_value(value)}",
        )

    def sub_reset(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            preferences.reset_setting(context.store)
            return CommandResult.ok(
                data={"key": None, "reset": True},
                message="All settings have been reset to defaults",
            )
        key = args[0]
        if not preferences.is_setting_key(key):
            return _unknown_key("reset", key)
        preferences.reset_setting(context.store, key)
        default = preferences.format_setting_value(preferences.SETTINGS[key].default)
        return CommandResult.ok(
            data={"key": key, "reset": True},
            message=f"Reset {key} to default ({default})",
        )
