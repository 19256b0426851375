"""Per-session state handed to every command handler."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Literal, Protocol

from podshell.domain.paths import ensure_trailing_slash
from podshell.infrastructure.pod import VirtualPod
from podshell.infrastructure.store import TableStore
from podshell.services.typeindex import TypeRegistry

if TYPE_CHECKING:
    from podshell.services.result import CommandResult
    from podshell.shell.registry import Command

OutputKind = Literal["input", "output", "error", "success"]

# Turns a finished command into display text; supplied by the front end.
Renderer = Callable[[list[str], "CommandResult"], str | None]


class OutputSink(Protocol):
    """Side-channel for human-readable lines."""

    def write(self, text: str, kind: OutputKind = "output") -> None: ...

    def clear(self) -> None: ...


class NullOutput:
    """Discards everything (headless and programmatic callers)."""

    def write(self, text: str, kind: OutputKind = "output") -> None:
        return None

    def clear(self) -> None:
        return None


class BufferOutput:
    """Collects ``(kind, text)`` pairs in memory."""

    def __init__(self) -> None:
        self.lines: list[tuple[OutputKind, str]] = []

    def write(self, text: str, kind: OutputKind = "output") -> None:
        self.lines.append((kind, text))

    def clear(self) -> None:
        self.lines.clear()

    def texts(self, kind: OutputKind | None = None) -> list[str]:
        return [t for k, t in self.lines if kind is None or k == kind]


class ShellContext:
    """Mutable session state: store handle, pod, location, and output.

    Attributes:
        root: Pod root locator (always a container).
        current_url: Working container; ``cd`` changes it.
        commands: The command table, used for dispatch and ``help``.
        renderer: Optional result renderer, used when a command runs
            nested command lines (``script run``) and must show their output.
        exit_requested: Set by ``exit``; front ends stop their loop.
        running_scripts: Names of scripts currently executing.
    """

    def __init__(
        self,
        store: TableStore,
        pod: VirtualPod,
        *,
        commands: dict[str, Command],
        output: OutputSink | None = None,
        current_url: str | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.store = store
        self.pod = pod
        self.root = pod.root
        self.current_url = ensure_trailing_slash(current_url or pod.root)
        self.commands = commands
        self.output: OutputSink = output or NullOutput()
        self.renderer = renderer
        self.exit_requested = False
        self.running_scripts: set[str] = set()

    @property
    def types(self) -> TypeRegistry:
        return TypeRegistry(self.store)

    def show(self, tokens: list[str], result: CommandResult) -> None:
        """Render a nested command's successful result through the sink."""
        if self.renderer is None or not result.success:
            return
        text = self.renderer(tokens, result)
        if text:
            self.output.write(text, "output")


def create_context(
    store: TableStore,
    root: str,
    *,
    output: OutputSink | None = None,
    current_url: str | None = None,
    renderer: Renderer | None = None,
) -> ShellContext:
    """Build a context over *store* with the default command table.

    Creates the VirtualPod (and its root container row) and seeds the
    default type registrations when the registry is empty.
    """
    from podshell.shell.commands import COMMANDS

    pod = VirtualPod(store, root)
    TypeRegistry(store).initialize_defaults(pod.root)
    return ShellContext(
        store,
        pod,
        commands=COMMANDS,
        output=output,
        current_url=current_url,
        renderer=renderer,
    )
