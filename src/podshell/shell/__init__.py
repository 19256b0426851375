"""Shell layer: command table, executor, and the programmatic API.

Commands compute :class:`~podshell.services.result.CommandResult` values and
never render; the executor owns the uniform validation and error envelope.
"""

from podshell.shell.context import ShellContext, create_context
from podshell.shell.executor import exec_command, execute_line

__all__ = ["ShellContext", "create_context", "exec_command", "execute_line"]
