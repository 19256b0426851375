"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Opens the store and the shell session lazily so
``--help`` and ``--version`` never touch the database, and centralizes
result emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from podshell.output.formatters import OutputSettings, format_envelope, format_result
from podshell.services.result import CommandOptions

if TYPE_CHECKING:
    from podshell.config.settings import PodSettings
    from podshell.infrastructure.store import TableStore
    from podshell.services.result import CommandResult
    from podshell.shell.context import OutputKind, ShellContext


class ClickOutput:
    """Output sink that echoes through Click; errors go to stderr."""

    def write(self, text: str, kind: OutputKind = "output") -> None:
        click.echo(text, err=kind == "error")

    def clear(self) -> None:
        click.clear()


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PodSettings) -> None:
        self.settings = settings
        self._store: TableStore | None = None
        self._session: ShellContext | None = None

        from podshell.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    @property
    def options(self) -> CommandOptions:
        """Options for top-level lines; JSON mode keeps stdout machine-readable."""
        json_output = self.settings.json_output
        return CommandOptions(json=json_output, silent=json_output)

    @property
    def store(self) -> TableStore:
        """The table store (opened lazily, plugins discovered on first use)."""
        if self._store is None:
            from podshell.infrastructure.store import create_store
            from podshell.plugins import PluginManager

            plugins = PluginManager()
            plugins.discover_and_load()
            self._store = create_store(self.settings.store.url, plugins)
        return self._store

    @property
    def session(self) -> ShellContext:
        """The shell session every subcommand executes lines in."""
        if self._session is None:
            from podshell.shell.context import create_context

            self._session = create_context(
                self.store,
                self.settings.pod.root,
                output=ClickOutput(),
                renderer=self.render,
            )
        return self._session

    def render(self, tokens: list[str], result: CommandResult) -> str:
        return format_result(tokens, result, settings=self.output_settings)

    def show(self, tokens: list[str], result: CommandResult) -> None:
        """Echo a successful result; failures were already reported by the executor."""
        if not result.success:
            return
        text = self.render(tokens, result)
        if text:
            click.echo(text)

    def emit(self, tokens: list[str], result: CommandResult) -> None:
        """Output a final result with correct exit semantics.

        * Success: rendered to stdout, returns normally.
        * Failure: the executor has already written the message to stderr
          (or, in JSON mode, the envelope goes to stderr here); exits 1.
        """
        if result.success:
            self.show(tokens, result)
            return
        if self.settings.json_output:
            click.echo(format_envelope(result), err=True)
        raise SystemExit(1)
