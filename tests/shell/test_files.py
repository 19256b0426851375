"""Tests for cat, touch, mkdir, and rm."""

from __future__ import annotations

from podshell.domain.errors import ErrorKind
from podshell.infrastructure.pod import VirtualPod
from podshell.services.result import CommandResult
from podshell.shell.context import ShellContext
from podshell.shell.executor import execute_line

ROOT = "https://pod.example/"


def _run(context: ShellContext, line: str) -> CommandResult:
    return execute_line(line, context)


def _code(context: ShellContext, line: str) -> ErrorKind | None:
    result = execute_line(line, context)
    return result.error.code if result.error else None


class TestTouchCat:
    def test_touch_then_cat(self, context: ShellContext) -> None:
        created = _run(context, "touch hello.txt --content hi")
        assert created.data == {"url": f"{ROOT}hello.txt", "created": True}
        assert created.message == "Created hello.txt"
        assert _run(context, "cat hello.txt").data == {
            "url": f"{ROOT}hello.txt",
            "content": "hi",
            "contentType": "text/plain",
        }

    def test_touch_without_content_is_empty(self, context: ShellContext) -> None:
        _run(context, "touch empty.txt")
        assert _run(context, "cat empty.txt").data["content"] == ""

    def test_explicit_type(self, context: ShellContext) -> None:
        _run(context, "touch page.md --type text/markdown")
        assert _run(context, "cat page.md").data["contentType"] == "text/markdown"

    def test_default_type_follows_preference(self, context: ShellContext) -> None:
        _run(context, "config set defaultContentType text/markdown")
        _run(context, "touch page.md")
        assert _run(context, "cat page.md").data["contentType"] == "text/markdown"

    def test_touch_existing(self, context: ShellContext) -> None:
        _run(context, "touch a.txt")
        assert _code(context, "touch a.txt") == ErrorKind.ALREADY_EXISTS

    def test_touch_over_container(self, context: ShellContext) -> None:
        _run(context, "mkdir docs")
        assert _code(context, "touch docs") == ErrorKind.ALREADY_EXISTS

    def test_touch_trailing_slash(self, context: ShellContext) -> None:
        assert _code(context, "touch docs/") == ErrorKind.INVALID_ARGUMENT

    def test_touch_missing_parent(self, context: ShellContext) -> None:
        result = _run(context, "touch nope/a.txt")
        assert result.error is not None
        assert result.error.code == ErrorKind.PARENT_NOT_FOUND
        assert result.error.message == "touch: parent folder does not exist: nope/a.txt"

    def test_touch_missing_name(self, context: ShellContext) -> None:
        assert _code(context, "touch") == ErrorKind.MISSING_ARGUMENT

    def test_touch_control_characters(self, context: ShellContext) -> None:
        assert _code(context, "touch bad%01name") == ErrorKind.INVALID_PATH

    def test_cat_directory(self, context: ShellContext) -> None:
        _run(context, "mkdir docs")
        assert _code(context, "cat docs") == ErrorKind.NOT_A_FILE

    def test_cat_missing(self, context: ShellContext) -> None:
        assert _code(context, "cat nope.txt") == ErrorKind.PATH_NOT_FOUND
        assert _code(context, "cat") == ErrorKind.MISSING_ARGUMENT


class TestMkdir:
    def test_creates_container(self, context: ShellContext, pod: VirtualPod) -> None:
        result = _run(context, "mkdir docs")
        assert result.data == {"url": f"{ROOT}docs/", "created": True}
        row = pod.get(f"{ROOT}docs/")
        assert row is not None
        assert row.is_container
        assert row.parent_id == ROOT

    def test_nested_relative_to_current(self, context: ShellContext) -> None:
        _run(context, "mkdir a")
        _run(context, "cd a")
        assert _run(context, "mkdir b").data["url"] == f"{ROOT}a/b/"

    def test_existing(self, context: ShellContext) -> None:
        _run(context, "mkdir docs")
        assert _code(context, "mkdir docs") == ErrorKind.ALREADY_EXISTS
        assert _code(context, "mkdir /") == ErrorKind.ALREADY_EXISTS

    def test_file_with_same_name(self, context: ShellContext) -> None:
        _run(context, "touch a")
        result = _run(context, "mkdir a")
        assert result.error is not None
        assert result.error.message == "mkdir: a: a file with that name exists"

    def test_missing_parent(self, context: ShellContext) -> None:
        assert _code(context, "mkdir x/y") == ErrorKind.PARENT_NOT_FOUND


class TestRm:
    def test_remove_file(self, context: ShellContext, pod: VirtualPod) -> None:
        _run(context, "touch a.txt")
        result = _run(context, "rm a.txt")
        assert result.data == {"url": f"{ROOT}a.txt", "deleted": [f"{ROOT}a.txt"]}
        assert pod.get(f"{ROOT}a.txt") is None

    def test_empty_directory_needs_no_flag(self, context: ShellContext) -> None:
        _run(context, "mkdir docs")
        assert _run(context, "rm docs").data["deleted"] == [f"{ROOT}docs/"]

    def test_non_empty_directory(self, context: ShellContext) -> None:
        _run(context, "mkdir docs")
        _run(context, "touch docs/a.txt")
        assert _code(context, "rm docs") == ErrorKind.DIRECTORY_NOT_EMPTY

    def test_recursive_removes_deepest_first(
        self, context: ShellContext, pod: VirtualPod
    ) -> None:
        _run(context, "mkdir docs")
        _run(context, "mkdir docs/sub")
        _run(context, "touch docs/sub/a.txt")
        result = _run(context, "rm docs -r")
        assert result.data["deleted"] == [
            f"{ROOT}docs/sub/a.txt",
            f"{ROOT}docs/sub/",
            f"{ROOT}docs/",
        ]
        assert list(pod.children(ROOT)) == []

    def test_removing_current_directory_moves_up(self, context: ShellContext) -> None:
        _run(context, "mkdir a")
        _run(context, "mkdir a/b")
        _run(context, "cd a/b")
        _run(context, "rm /a --recursive")
        assert context.current_url == ROOT

    def test_missing(self, context: ShellContext) -> None:
        assert _code(context, "rm nope") == ErrorKind.PATH_NOT_FOUND
        assert _run(context, "rm nope -f").data == {"url": f"{ROOT}nope", "deleted": []}

    def test_root_is_protected(self, context: ShellContext) -> None:
        assert _code(context, "rm / -r") == ErrorKind.PERMISSION_DENIED
