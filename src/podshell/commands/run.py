"""Command: run one shell command line."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from podshell.domain.args import tokenize
from podshell.shell.executor import execute_line

if TYPE_CHECKING:
    from podshell.commands._context import AppContext


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("words", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
def run(app: AppContext, words: tuple[str, ...]) -> None:
    """Execute a single command line against the pod."""
    line = " ".join(words)
    result = execute_line(line, app.session, app.options)
    app.emit(tokenize(line), result)
