"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``podshell.toml`` only holds
overrides. A fresh setup needs no file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from podshell.domain.paths import ensure_trailing_slash

# --- podshell.toml sections ---


class PodConfig(BaseModel):
    """[pod] section."""

    model_config = {"frozen": True}

    root: str = "https://pod.example/"

    @field_validator("root")
    @classmethod
    def _root_is_container(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            msg = f"pod root must be an http(s) URL, got {value!r}"
            raise ValueError(msg)
        return ensure_trailing_slash(value)


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    url: str = "sqlite://"


class ShellConfig(BaseModel):
    """[shell] section."""

    model_config = {"frozen": True}

    prompt: str = "pod"
