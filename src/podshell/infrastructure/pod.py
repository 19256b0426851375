"""VirtualPod: in-process resource backend over the ``resources`` table.

Implements GET/PUT/DELETE on locators under a fixed root and keeps
``parentId`` bookkeeping so containers can list their children. Every
request URL is re-validated segment by segment even though callers resolve
paths first; nothing outside the root is ever read or written.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from urllib.parse import urljoin, urlsplit

from pydantic import BaseModel, Field

from podshell.domain.errors import SegmentDecodeError
from podshell.domain.paths import (
    SEPARATOR,
    decode_segment,
    ensure_trailing_slash,
    is_container,
    remove_trailing_slash,
    validate_name,
)
from podshell.domain.records import ResourceRow, Table
from podshell.infrastructure.records import get_resource, read_table, set_resource
from podshell.infrastructure.store import TableStore

ROOT_CONTENT_TYPE = "text/turtle"
DEFAULT_CONTENT_TYPE = "text/plain"

logger = logging.getLogger(__name__)


class PodResponse(BaseModel):
    """Conventional HTTP-style status with an optional body and headers."""

    model_config = {"frozen": True}

    status: int
    body: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class VirtualPod:
    """CRUD over resource rows keyed by locator."""

    def __init__(self, store: TableStore, root: str) -> None:
        self.store = store
        self.root = ensure_trailing_slash(root)
        if get_resource(store, self.root) is None:
            set_resource(
                store,
                self.root,
                ResourceRow(type="Container", content_type=ROOT_CONTENT_TYPE, updated=_now_iso()),
            )

    def handle_request(
        self,
        url: str,
        method: str = "GET",
        body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> PodResponse:
        rejected = self._check_url(url)
        if rejected is not None:
            return rejected

        verb = method.upper()
        logger.debug("pod %s %s", verb, url)
        if verb == "GET":
            return self._get(url)
        if verb == "PUT":
            return self._put(url, body, headers or {})
        if verb == "DELETE":
            return self._delete(url)
        return PodResponse(status=405, body="Method Not Allowed")

    # ------------------------------------------------------------------
    # Reads used by listing commands
    # ------------------------------------------------------------------

    def get(self, url: str) -> ResourceRow | None:
        return get_resource(self.store, url)

    def children(self, container_url: str) -> dict[str, ResourceRow]:
        """Rows whose ``parentId`` is *container_url*, keyed by locator."""
        return {
            url: row
            for url, row in read_table(self.store, Table.RESOURCES, ResourceRow).items()
            if row.parent_id == container_url and url != self.root
        }

    def descendants(self, container_url: str) -> list[str]:
        """Every locator strictly beneath *container_url*, deepest first."""
        prefix = ensure_trailing_slash(container_url)
        urls = [
            u for u in self.store.row_ids(Table.RESOURCES) if u.startswith(prefix) and u != prefix
        ]
        return sorted(urls, key=lambda u: (-remove_trailing_slash(u).count(SEPARATOR), u))

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def _check_url(self, url: str) -> PodResponse | None:
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            return PodResponse(status=400, body="Invalid URL")
        if not url.startswith(self.root):
            return PodResponse(status=403, body="Access denied: path outside pod")

        for seg in url[len(self.root) :].split(SEPARATOR):
            if not seg:
                continue
            try:
                decoded = decode_segment(seg)
            except SegmentDecodeError:
                return PodResponse(status=400, body="Invalid URL encoding")
            if decoded in (".", ".."):
                return PodResponse(status=400, body="Invalid path segment")
            err = validate_name(decoded)
            if err is not None:
                return PodResponse(status=400, body=err.error)
        return None

    def _get(self, url: str) -> PodResponse:
        row = get_resource(self.store, url)
        if row is None:
            return PodResponse(status=404, body="Not Found")
        return PodResponse(
            status=200,
            body=row.body,
            headers={"Content-Type": row.content_type or DEFAULT_CONTENT_TYPE},
        )

    def _put(self, url: str, body: str | None, headers: dict[str, str]) -> PodResponse:
        container = is_container(url)
        parent_url = urljoin(url, "..") if container else urljoin(url, ".")

        if url != self.root and get_resource(self.store, parent_url) is None:
            return PodResponse(status=409, body="Parent folder missing")

        set_resource(
            self.store,
            url,
            ResourceRow(
                type="Container" if container else "Resource",
                body=body,
                content_type=headers.get("Content-Type") or DEFAULT_CONTENT_TYPE,
                parent_id=parent_url,
                updated=_now_iso(),
            ),
        )
        return PodResponse(status=201, body="Created")

    def _delete(self, url: str) -> PodResponse:
        if url == self.root:
            return PodResponse(status=405, body="Cannot delete root")
        self.store.del_row(Table.RESOURCES, url)
        return PodResponse(status=204, body="Deleted")
