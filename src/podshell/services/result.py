"""CommandResult and CommandError: the one externally observable contract.

INVARIANT: Every command invocation produces exactly one CommandResult,
whether it ran in the interactive shell, a script, the CLI, or the
programmatic API. ``success=False`` always carries an ``error``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, model_validator

from podshell.domain.errors import ErrorKind


class CommandError(BaseModel):
    """Structured error payload within a CommandResult."""

    model_config = {"frozen": True}

    code: ErrorKind
    message: str
    details: Any = None


class CommandResult(BaseModel):
    """Universal return type for every command.

    Attributes:
        success: Whether the command succeeded.
        data: Command-specific payload (a closed record per command).
        message: Optional human-readable summary.
        error: Structured error; present iff ``success`` is False.
    """

    model_config = {"frozen": True}

    success: bool
    data: Any = None
    message: str | None = None
    error: CommandError | None = None

    @model_validator(mode="after")
    def _failure_has_error(self) -> CommandResult:
        if not self.success and self.error is None:
            msg = "a failed result must carry an error"
            raise ValueError(msg)
        return self

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> CommandResult:
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(
        cls,
        code: ErrorKind,
        message: str,
        details: Any = None,
        *,
        data: Any = None,
    ) -> CommandResult:
        return cls(
            success=False,
            data=data,
            error=CommandError(code=code, message=message, details=details),
        )


@dataclass(frozen=True)
class CommandOptions:
    """Per-invocation options resolved by the executor.

    Attributes:
        json: The caller asked for machine-readable output.
        silent: Suppress every write to the output side-channel.
    """

    json: bool = False
    silent: bool = False
