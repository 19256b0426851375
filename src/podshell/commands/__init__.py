"""Click subcommands for podshell.

Provides register_commands() which uses deferred imports to keep
``podshell --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every subcommand on the root CLI group."""
    from podshell.commands.batch import batch
    from podshell.commands.run import run
    from podshell.commands.shell import shell
    from podshell.commands.transfer import export_cmd, import_cmd

    cli.add_command(run)
    cli.add_command(shell)
    cli.add_command(batch)
    cli.add_command(import_cmd)
    cli.add_command(export_cmd)
