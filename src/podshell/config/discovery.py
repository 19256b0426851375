"""Config file discovery.

Walk-up finder locates ``podshell.toml``, similar to how git finds ``.git/``.
The ``PODSHELL_CONFIG`` env var and ``--config`` flag override discovery.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "podshell.toml"
CONFIG_ENV_VAR = "PODSHELL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``podshell.toml``.

    Checks ``PODSHELL_CONFIG`` first; an env path that is not a file means
    no config rather than a fallback to discovery.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent
