"""Path resolution and validation for pod locators.

Single source of truth for turning user-typed paths into canonical,
fully-qualified locators under a fixed root. Used by every shell command
and, as a safety net, by the VirtualPod.

- Containers end with a trailing slash ``/``
- Leaf resources never end with ``/``
- Every child name is stored as a percent-encoded segment

INVARIANT: No resolution may produce a locator outside the root subtree.
Everything here is pure: failures are returned as :class:`PathError`,
never raised.
"""

from __future__ import annotations

import re
from typing import Literal
from urllib.parse import quote, unquote, urljoin

from pydantic import BaseModel

from podshell.domain.errors import ErrorKind, SegmentDecodeError

SEPARATOR = "/"
MAX_SEGMENT_LENGTH = 255

# Characters encodeURIComponent leaves alone besides alphanumerics and "_.-~".
_SAFE_CHARS = "!*'()"
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class PathResult(BaseModel):
    """A successfully resolved locator."""

    model_config = {"frozen": True}

    valid: Literal[True] = True
    url: str
    is_container: bool


class PathError(BaseModel):
    """A rejected path with the error kind to surface to the caller."""

    model_config = {"frozen": True}

    valid: Literal[False] = False
    error: str
    code: ErrorKind


ResolveResult = PathResult | PathError


# ---------------------------------------------------------------------------
# Locator helpers
# ---------------------------------------------------------------------------


def ensure_trailing_slash(url: str) -> str:
    return url if url.endswith(SEPARATOR) else f"{url}{SEPARATOR}"


def remove_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith(SEPARATOR) else url


def is_container(url: str) -> bool:
    """Whether *url* addresses a container (ends with the separator)."""
    return url.endswith(SEPARATOR)


def is_descendant_of(url: str, ancestor_url: str) -> bool:
    """Whether *url* is *ancestor_url* itself or lies beneath it."""
    return url.startswith(ensure_trailing_slash(ancestor_url))


# ---------------------------------------------------------------------------
# Segment encoding
# ---------------------------------------------------------------------------


def encode_segment(name: str) -> str:
    """Percent-encode a decoded segment name (``encodeURIComponent`` rules)."""
    return quote(name, safe=_SAFE_CHARS)


def decode_segment(segment: str) -> str:
    """Decode a percent-encoded segment.

    Raises:
        SegmentDecodeError: On a ``%`` without two hex digits or when the
            escaped bytes are not valid UTF-8.
    """
    if _BAD_ESCAPE.search(segment):
        raise SegmentDecodeError(segment)
    try:
        return unquote(segment, errors="strict")
    except UnicodeDecodeError as exc:
        raise SegmentDecodeError(segment) from exc


def _has_control_chars(name: str) -> bool:
    return any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in name)


def validate_name(name: str) -> PathError | None:
    """Validate a single decoded segment name.

    Returns ``None`` when the name is acceptable, otherwise a
    :class:`PathError` with code ``INVALID_PATH``.
    """
    if not name or not name.strip():
        return PathError(error="Name cannot be empty", code=ErrorKind.INVALID_PATH)
    if SEPARATOR in name:
        return PathError(error="Name cannot contain forward slash", code=ErrorKind.INVALID_PATH)
    if len(name) > MAX_SEGMENT_LENGTH:
        return PathError(
            error=f"Name too long (max {MAX_SEGMENT_LENGTH} chars)",
            code=ErrorKind.INVALID_PATH,
        )
    if _has_control_chars(name):
        return PathError(
            error="Name contains invalid control characters",
            code=ErrorKind.INVALID_PATH,
        )
    return None


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


def get_parent_url(url: str, root: str) -> str:
    """Return the parent container of *url*, clamped at *root*."""
    base = ensure_trailing_slash(root)
    current = ensure_trailing_slash(url)
    try:
        parent = urljoin(current, "..")
    except ValueError:
        return base
    return parent if parent.startswith(base) else base


def get_segments(url: str, root: str) -> list[str]:
    """Decoded segment names from *root* down to *url*.

    Returns an empty list when *url* is not under *root*.
    """
    base = ensure_trailing_slash(root)
    if not url.startswith(base):
        return []
    rel = url[len(base) :]
    return [decode_segment(seg) for seg in rel.split(SEPARATOR) if seg]


def resolve_path(current_url: str, input_path: str, root: str) -> ResolveResult:
    """Resolve a user path to a fully-qualified locator under *root*.

    * ``""`` or ``"."`` returns *current_url* unchanged.
    * ``/a/b`` resolves against *root*; anything else against *current_url*.
    * ``..`` moves to the parent, never above *root*.
    * Each name segment is decoded, validated, and re-encoded.
    * Input without a trailing ``/`` that ends in a name is a leaf candidate.
    """
    base = ensure_trailing_slash(root)
    raw = input_path.strip()

    if not raw or raw == ".":
        return PathResult(url=current_url, is_container=is_container(current_url))

    if raw.startswith(SEPARATOR):
        return _resolve_relative(base, raw[1:], base)

    if raw in ("..", "../"):
        return PathResult(url=get_parent_url(current_url, base), is_container=True)

    return _resolve_relative(ensure_trailing_slash(current_url), raw, base)


def _resolve_relative(start: str, path: str, root: str) -> ResolveResult:
    trailing_slash = path.endswith(SEPARATOR)
    segments = [s for s in path.split(SEPARATOR) if s and s != "."]
    cur = ensure_trailing_slash(start)
    ends_in_name = False

    for seg in segments:
        if seg == "..":
            cur = get_parent_url(cur, root)
            ends_in_name = False
            continue

        # Users may type already-encoded names ("%20"); normalize through decode.
        try:
            decoded = decode_segment(seg)
        except SegmentDecodeError as exc:
            return PathError(error=str(exc), code=ErrorKind.INVALID_PATH)

        # "%2E%2E" must not re-encode into a literal dot segment.
        if decoded in (".", ".."):
            return PathError(
                error=f"Encoded dot segment not allowed: {seg}", code=ErrorKind.INVALID_PATH
            )

        name_error = validate_name(decoded)
        if name_error is not None:
            return name_error

        cur = f"{cur}{encode_segment(decoded)}{SEPARATOR}"
        ends_in_name = True

    if not cur.startswith(root):
        return PathError(error="Path escapes root directory", code=ErrorKind.ESCAPE_ATTEMPT)

    resolved = cur
    if not trailing_slash and ends_in_name:
        resolved = remove_trailing_slash(resolved)

    return PathResult(url=resolved, is_container=is_container(resolved))
