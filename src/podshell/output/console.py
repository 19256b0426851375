"""Rich Console factory and theme for podshell output.

Consoles render into a StringIO buffer so renderers keep a plain
``render_*() -> str`` contract. Outside a TTY (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

POD_THEME = Theme(
    {
        "pod.ok": "bold green",
        "pod.error": "bold red",
        "pod.warning": "bold yellow",
        "pod.key": "dim",
        "pod.id": "bold blue",
        "pod.url": "dim",
        "pod.title": "bold",
        "pod.container": "bold blue",
        "pod.resource": "",
        "pod.default": "green",
    }
)

_KIND_STYLES: dict[str, str] = {
    "Container": "pod.container",
    "Resource": "pod.resource",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps tables stable in tests).
    """
    return Console(
        file=StringIO(),
        theme=POD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a resource kind."""
    return _KIND_STYLES.get(kind, "")
