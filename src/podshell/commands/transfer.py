"""Commands: store snapshot import and export."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from podshell.domain.errors import ErrorKind
from podshell.services.result import CommandResult
from podshell.services.transfer import (
    ExportValidationError,
    export_store_json,
    import_store_json,
)

if TYPE_CHECKING:
    from podshell.commands._context import AppContext


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--merge", is_flag=True, help="Merge into existing data instead of replacing it.")
@click.option(
    "--strict/--no-strict",
    default=True,
    help="Reject the whole snapshot on any invalid row (default), or skip invalid rows.",
)
@click.pass_obj
def import_cmd(app: AppContext, path: Path, merge: bool, strict: bool) -> None:
    """Load a JSON store snapshot."""
    outcome = import_store_json(
        app.store, path.read_text(encoding="utf-8"), merge=merge, strict=strict
    )
    data = outcome.model_dump(mode="json")
    if outcome.success:
        message = f"Imported {outcome.imported_rows} row(s)"
        if outcome.skipped_rows:
            message += f", skipped {outcome.skipped_rows} invalid row(s)"
        result = CommandResult.ok(data=data, message=message)
    else:
        result = CommandResult.fail(
            ErrorKind.INVALID_ENTITY, outcome.error or "Import failed", data=data
        )
        if not app.settings.json_output:
            click.echo(f"Import failed: {result.error.message if result.error else ''}", err=True)
    app.emit(["import"], result)


@click.command("export")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the snapshot to a file instead of stdout.",
)
@click.option("--strict", is_flag=True, help="Fail when any stored row is invalid.")
@click.pass_obj
def export_cmd(app: AppContext, output: Path | None, strict: bool) -> None:
    """Write a JSON snapshot of every table and value."""
    try:
        text = export_store_json(app.store, strict=strict)
    except ExportValidationError as exc:
        raise click.ClickException(str(exc)) from exc
    if output is None:
        click.echo(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    if not app.settings.quiet:
        click.echo(f"Exported to {output}", err=True)
