"""Tests for the in-store VirtualPod resource tree."""

from __future__ import annotations

from podshell.domain.records import Table
from podshell.infrastructure.pod import VirtualPod
from podshell.infrastructure.store import TableStore

ROOT = "https://pod.example/"


class TestConstruction:
    def test_root_container_created(self, pod: VirtualPod) -> None:
        root = pod.get(ROOT)
        assert root is not None
        assert root.is_container
        assert root.content_type == "text/turtle"

    def test_root_gets_trailing_slash(self, store: TableStore) -> None:
        assert VirtualPod(store, "https://pod.example").root == ROOT

    def test_existing_root_is_kept(self, store: TableStore, pod: VirtualPod) -> None:
        before = store.get_row(Table.RESOURCES, ROOT)
        VirtualPod(store, ROOT)
        assert store.get_row(Table.RESOURCES, ROOT) == before


class TestRequests:
    def test_put_then_get(self, pod: VirtualPod) -> None:
        put = pod.handle_request(
            f"{ROOT}a.txt", "PUT", body="hello", headers={"Content-Type": "text/markdown"}
        )
        assert put.status == 201
        got = pod.handle_request(f"{ROOT}a.txt")
        assert got.status == 200
        assert got.ok
        assert got.body == "hello"
        assert got.headers["Content-Type"] == "text/markdown"

    def test_put_sets_parent(self, pod: VirtualPod) -> None:
        pod.handle_request(f"{ROOT}docs/", "PUT")
        pod.handle_request(f"{ROOT}docs/a.txt", "PUT", body="")
        docs = pod.get(f"{ROOT}docs/")
        leaf = pod.get(f"{ROOT}docs/a.txt")
        assert docs is not None and docs.parent_id == ROOT
        assert leaf is not None and leaf.parent_id == f"{ROOT}docs/"

    def test_put_without_parent_conflicts(self, pod: VirtualPod) -> None:
        response = pod.handle_request(f"{ROOT}missing/a.txt", "PUT", body="x")
        assert response.status == 409
        assert response.body == "Parent folder missing"

    def test_get_missing(self, pod: VirtualPod) -> None:
        assert pod.handle_request(f"{ROOT}nope").status == 404

    def test_outside_root_denied(self, pod: VirtualPod) -> None:
        response = pod.handle_request("https://evil.example/a.txt", "PUT", body="x")
        assert response.status == 403

    def test_invalid_url(self, pod: VirtualPod) -> None:
        assert pod.handle_request("not a url").status == 400

    def test_bad_segment_encoding(self, pod: VirtualPod) -> None:
        assert pod.handle_request(f"{ROOT}bad%zz", "PUT", body="x").status == 400

    def test_dot_segments_rejected(self, pod: VirtualPod) -> None:
        assert pod.handle_request(f"{ROOT}a/../b", "PUT", body="x").status == 400

    def test_delete(self, pod: VirtualPod) -> None:
        pod.handle_request(f"{ROOT}a.txt", "PUT", body="x")
        assert pod.handle_request(f"{ROOT}a.txt", "DELETE").status == 204
        assert pod.get(f"{ROOT}a.txt") is None

    def test_delete_root_not_allowed(self, pod: VirtualPod) -> None:
        assert pod.handle_request(ROOT, "DELETE").status == 405

    def test_unknown_method(self, pod: VirtualPod) -> None:
        assert pod.handle_request(ROOT, "PATCH").status == 405


class TestListing:
    def test_children_excludes_root_and_grandchildren(self, pod: VirtualPod) -> None:
        pod.handle_request(f"{ROOT}docs/", "PUT")
        pod.handle_request(f"{ROOT}docs/a.txt", "PUT", body="")
        pod.handle_request(f"{ROOT}b.txt", "PUT", body="")
        assert sorted(pod.children(ROOT)) == [f"{ROOT}b.txt", f"{ROOT}docs/"]
        assert list(pod.children(f"{ROOT}docs/")) == [f"{ROOT}docs/a.txt"]

    def test_descendants_deepest_first(self, pod: VirtualPod) -> None:
        pod.handle_request(f"{ROOT}a/", "PUT")
        pod.handle_request(f"{ROOT}a/b/", "PUT")
        pod.handle_request(f"{ROOT}a/b/c.txt", "PUT", body="")
        pod.handle_request(f"{ROOT}a/d.txt", "PUT", body="")
        assert pod.descendants(f"{ROOT}a/") == [
            f"{ROOT}a/b/c.txt",
            f"{ROOT}a/b/",
            f"{ROOT}a/d.txt",
        ]
