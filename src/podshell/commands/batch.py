"""Command: run command lines from a file or stdin."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from podshell.domain.errors import ErrorKind
from podshell.services.result import CommandResult
from podshell.shell.batch import run_lines, split_script

if TYPE_CHECKING:
    from podshell.commands._context import AppContext


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--continue", "-c", "keep_going", is_flag=True, help="Keep going after a failure.")
@click.pass_obj
def batch(app: AppContext, source: TextIO, keep_going: bool) -> None:
    """Run newline-separated command lines in order; "#" lines are comments."""
    lines = split_script(source.read())
    outcome = run_lines(lines, app.session, keep_going=keep_going, options=app.options)
    data = {
        "count": outcome.count,
        "ran": outcome.ran,
        "failures": outcome.failures,
    }
    if outcome.success:
        result = CommandResult.ok(data=data, message=f"Ran {outcome.ran} command(s)")
    else:
        result = CommandResult.fail(
            ErrorKind.OPERATION_FAILED, f"{outcome.failures} command(s) failed", data=data
        )
    if app.settings.json_output or outcome.success:
        app.emit(["batch"], result)
    else:
        click.echo(f"Batch failed: {result.error.message if result.error else ''}", err=True)
        raise SystemExit(1)
