"""Result formatting for the outer CLI.

Human output goes through the per-command Rich renderers; ``--json``
serializes the whole result envelope; ``--quiet`` keeps only what a
pipe needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from podshell.output.renderers import render_error, render_quiet, render_result, to_json

if TYPE_CHECKING:
    from podshell.services.result import CommandResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_envelope(result: CommandResult) -> str:
    """The ``{success, data, message, error}`` envelope as JSON."""
    return result.model_dump_json(indent=2, exclude_none=True)


def format_result(
    tokens: list[str],
    result: CommandResult,
    *,
    settings: OutputSettings | None = None,
) -> str:
    """Format *result* of the command line *tokens* for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return format_envelope(result)
    if settings.quiet:
        return render_quiet(tokens, result)
    if not result.success:
        return render_error(result, verbose=settings.verbose)
    return render_result(tokens, result, verbose=settings.verbose)
