"""Command: interactive shell loop."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from podshell.domain.args import tokenize
from podshell.output.formatters import format_envelope
from podshell.shell.commands._helpers import display_name
from podshell.shell.executor import execute_line

if TYPE_CHECKING:
    from podshell.commands._context import AppContext
    from podshell.shell.context import ShellContext


def _prompt(app: AppContext, session: ShellContext) -> str:
    here = "/" if session.current_url == session.root else display_name(session.current_url)
    return f"{app.settings.shell.prompt}:{here}"


@click.command()
@click.pass_obj
def shell(app: AppContext) -> None:
    """Start an interactive session; type "exit" or send EOF to leave."""
    session = app.session
    if not app.settings.quiet:
        click.echo(f'Connected to {session.root}. Type "help" for available commands.')
    while not session.exit_requested:
        try:
            line = click.prompt(
                _prompt(app, session), default="", show_default=False, prompt_suffix="> "
            )
        except click.Abort:
            click.echo()
            break
        if not line.strip():
            continue
        result = execute_line(line, session, app.options)
        if app.settings.json_output:
            click.echo(format_envelope(result))
        else:
            app.show(tokenize(line), result)
