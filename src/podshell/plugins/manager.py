"""Plugin discovery, registration, and fault-isolated hook dispatch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pluggy

from podshell.plugins.hookspecs import PROJECT_NAME, PodshellHookSpec

if TYPE_CHECKING:
    from podshell.services.result import CommandResult

ENTRY_POINT_GROUP = "podshell.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PodshellHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load plugins advertised under the ``podshell.plugins`` entry point group.

        Returns the names of all registered plugins.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Dispatch (plugin failures are logged, never raised)
    # ------------------------------------------------------------------

    def notify_store_changed(self, table: str, row_id: str | None) -> None:
        try:
            self._pm.hook.store_changed(table=table, row_id=row_id)
        except Exception:
            logger.warning("store_changed hook failed for %s/%s", table, row_id, exc_info=True)

    def notify_post_command(self, name: str, result: CommandResult) -> None:
        try:
            self._pm.hook.post_command(name=name, result=result)
        except Exception:
            logger.warning("post_command hook failed for %s", name, exc_info=True)
