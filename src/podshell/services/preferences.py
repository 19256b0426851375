"""Typed user preferences stored as store values.

Each key has a kind (string, number, boolean, or enum) that drives how
``config set`` parses its text argument. Unset keys read as their default.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

from podshell.infrastructure.store import TableStore

SettingKind = Literal["string", "number", "boolean", "enum"]

DEFAULT_PERSONA_ID = "defaultPersonaId"
THEME = "theme"
CLI_HISTORY_SIZE = "cliHistorySize"
AUTO_SAVE_INTERVAL = "autoSaveInterval"
SHOW_HIDDEN_FILES = "showHiddenFiles"
DEFAULT_CONTENT_TYPE = "defaultContentType"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


class SettingMeta(BaseModel):
    model_config = {"frozen": True}

    label: str
    description: str
    kind: SettingKind
    default: Any = None
    options: tuple[str, ...] = ()


SETTINGS: dict[str, SettingMeta] = {
    DEFAULT_PERSONA_ID: SettingMeta(
        label="Default Persona",
        description="The persona used by default for authoring content",
        kind="string",
    ),
    THEME: SettingMeta(
        label="Theme",
        description="Color theme preference",
        kind="enum",
        default="system",
        options=("light", "dark", "system"),
    ),
    CLI_HISTORY_SIZE: SettingMeta(
        label="CLI History Size",
        description="Number of CLI commands to keep in history",
        kind="number",
        default=100,
    ),
    AUTO_SAVE_INTERVAL: SettingMeta(
        label="Auto-save Interval",
        description="Auto-save interval in milliseconds (0 = disabled)",
        kind="number",
        default=0,
    ),
    SHOW_HIDDEN_FILES: SettingMeta(
        label="Show Hidden Files",
        description="Show files starting with . in listings",
        kind="boolean",
        default=False,
    ),
    DEFAULT_CONTENT_TYPE: SettingMeta(
        label="Default Content Type",
        description="MIME type for new files",
        kind="string",
        default="text/plain",
    ),
}


def is_setting_key(key: str) -> bool:
    return key in SETTINGS


def parse_setting_value(key: str, text: str) -> str | int | bool | None:
    """Parse *text* for *key*; ``None`` when it does not fit the key's kind."""
    meta = SETTINGS[key]
    if meta.kind == "number":
        try:
            return int(text.strip())
        except ValueError:
            return None
    if meta.kind == "boolean":
        lowered = text.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        return None
    if meta.kind == "enum":
        return text if text in meta.options else None
    return text


def expected_hint(key: str) -> str:
    """What ``config set`` should say when a value does not parse."""
    meta = SETTINGS[key]
    if meta.kind == "number":
        return "expected a number"
    if meta.kind == "boolean":
        return "expected true/false"
    if meta.kind == "enum":
        return f"expected one of: {', '.join(meta.options)}"
    return "expected a string"


def format_setting_value(value: Any) -> str:
    if value is None:
        return "(not set)"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def get_setting(store: TableStore, key: str) -> Any:
    return store.get_value(key, SETTINGS[key].default)


def set_setting(store: TableStore, key: str, value: Any) -> None:
    """Store *value*; ``None`` clears the key back to its default."""
    if value is None:
        store.del_value(key)
    else:
        store.set_value(key, value)


def get_all_settings(store: TableStore) -> dict[str, Any]:
    """Effective value of every known key (stored or default)."""
    values = store.get_values()
    return {key: values.get(key, meta.default) for key, meta in SETTINGS.items()}


def reset_setting(store: TableStore, key: str | None = None) -> None:
    """Reset one key, or every known key when *key* is None."""
    for k in [key] if key else list(SETTINGS):
        store.del_value(k)
