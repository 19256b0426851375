"""Small helpers shared by services and shell commands."""

from __future__ import annotations

import re
import uuid
from datetime import UTC, datetime

_NON_SLUG = re.compile(r"[^a-z0-9-]")


def now_iso() -> str:
    """Current UTC time as standard ISO 8601."""
    return datetime.now(UTC).isoformat()


def new_uuid() -> str:
    return str(uuid.uuid4())


def slugify(name: str) -> str:
    """Lowercase, spaces to hyphens, drop anything outside ``[a-z0-9-]``."""
    return _NON_SLUG.sub("", re.sub(r"\s+", "-", name.strip().lower()))
