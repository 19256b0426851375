"""Sequential execution of saved command lines."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from podshell.domain.args import tokenize
from podshell.services.result import CommandOptions
from podshell.shell.executor import execute_line

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchOutcome:
    count: int
    ran: int
    failures: int

    @property
    def success(self) -> bool:
        return self.failures == 0


def split_script(script: str) -> list[str]:
    """Return runnable lines: trimmed, no blanks, no ``#`` comments."""
    lines = (line.strip() for line in script.splitlines())
    return [line for line in lines if line and not line.startswith("#")]


def run_lines(
    lines: Iterable[str],
    context: ShellContext,
    *,
    keep_going: bool = False,
    options: CommandOptions | None = None,
) -> BatchOutcome:
    """Execute *lines* strictly in order.

    A failure stops the batch unless *keep_going* is set. Nothing already
    executed is rolled back. Successful results are shown through the
    context renderer when not silent.
    """
    options = options or CommandOptions()
    pending = list(lines)
    ran = failures = 0
    for line in pending:
        ran += 1
        result = execute_line(line, context, options)
        if result.success:
            if not options.silent:
                context.show(tokenize(line), result)
            continue
        failures += 1
        logger.debug("Batch line failed: %s", line)
        if not keep_going:
            break
    return BatchOutcome(count=len(pending), ran=ran, failures=failures)
