"""Extension layer: change and command notifications via pluggy.

Discovery: entry points in the ``podshell.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from podshell.plugins.hookspecs import hookimpl
from podshell.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
