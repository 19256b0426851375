"""Pluggy hook specifications for podshell.

``store_changed`` is the subscribe/notify seam a live view uses to refresh
after any write to the backing table store. ``post_command`` fires once per
executed command line with its final result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from podshell.services.result import CommandResult

PROJECT_NAME = "podshell"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class PodshellHookSpec:
    """Hook specifications for the podshell plugin system."""

    @hookspec
    def store_changed(self, table: str, row_id: str | None) -> None:
        """Called after a row (or a whole table when *row_id* is None) changes."""

    @hookspec
    def post_command(self, name: str, result: CommandResult) -> None:
        """Called after a command finishes, successfully or not."""
