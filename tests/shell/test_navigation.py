"""Tests for pwd, cd, and ls."""

from __future__ import annotations

from podshell.domain.errors import ErrorKind
from podshell.services.result import CommandResult
from podshell.shell.context import ShellContext
from podshell.shell.executor import execute_line

ROOT = "https://pod.example/"


def _run(context: ShellContext, line: str) -> CommandResult:
    return execute_line(line, context)


class TestPwdCd:
    def test_starts_at_root(self, context: ShellContext) -> None:
        assert _run(context, "pwd").data == {"url": ROOT}

    def test_cd_into_container(self, context: ShellContext) -> None:
        _run(context, "mkdir docs")
        result = _run(context, "cd docs")
        assert result.success
        assert result.data == {"url": f"{ROOT}docs/", "previousUrl": ROOT}
        assert context.current_url == f"{ROOT}docs/"

    def test_cd_without_args_returns_to_root(self, context: ShellContext) -> None:
        _run(context, "mkdir docs")
        _run(context, "cd docs/")
        assert _run(context, "cd").data == {"url": ROOT, "previousUrl": f"{ROOT}docs/"}

    def test_cd_parent_and_absolute(self, context: ShellContext) -> None:
        _run(context, "mkdir a")
        _run(context, "mkdir a/b")
        _run(context, "cd /a/b")
        assert context.current_url == f"{ROOT}a/b/"
        _run(context, "cd ..")
        assert context.current_url == f"{ROOT}a/"

    def test_cd_never_leaves_root(self, context: ShellContext) -> None:
        result = _run(context, "cd ../../..")
        assert result.success
        assert context.current_url == ROOT

    def test_cd_missing(self, context: ShellContext) -> None:
        result = _run(context, "cd nowhere")
        assert result.error is not None
        assert result.error.code == ErrorKind.PATH_NOT_FOUND
        assert result.error.message == "cd: no such directory: nowhere"
        assert context.current_url == ROOT

    def test_cd_into_file(self, context: ShellContext) -> None:
        _run(context, "touch notes.txt")
        result = _run(context, "cd notes.txt")
        assert result.error is not None
        assert result.error.code == ErrorKind.NOT_A_DIRECTORY

    def test_cd_invalid_path(self, context: ShellContext) -> None:
        result = _run(context, "cd bad%zz")
        assert result.error is not None
        assert result.error.code == ErrorKind.INVALID_PATH


class TestLs:
    def test_empty_root(self, context: ShellContext) -> None:
        assert _run(context, "ls").data == {"url": ROOT, "children": []}

    def test_containers_first_then_by_url(self, context: ShellContext) -> None:
        _run(context, "touch b.txt")
        _run(context, "mkdir zeta")
        _run(context, "touch a.txt")
        names = [c["name"] for c in _run(context, "ls").data["children"]]
        assert names == ["zeta", "a.txt", "b.txt"]

    def test_child_fields(self, context: ShellContext) -> None:
        _run(context, "mkdir docs")
        [child] = _run(context, "ls").data["children"]
        assert child["url"] == f"{ROOT}docs/"
        assert child["type"] == "Container"
        assert child["contentType"] == "text/turtle"
        assert child["updated"]

    def test_ls_other_directory(self, context: ShellContext) -> None:
        _run(context, "mkdir docs")
        _run(context, "touch docs/readme.md")
        result = _run(context, "ls docs")
        assert result.data["url"] == f"{ROOT}docs/"
        assert [c["name"] for c in result.data["children"]] == ["readme.md"]

    def test_ls_file_lists_itself(self, context: ShellContext) -> None:
        _run(context, "touch a.txt")
        result = _run(context, "ls a.txt")
        assert [c["url"] for c in result.data["children"]] == [f"{ROOT}a.txt"]

    def test_names_are_decoded(self, context: ShellContext) -> None:
        _run(context, "touch café.txt")
        [child] = _run(context, "ls").data["children"]
        assert child["name"] == "café.txt"
        assert child["url"] == f"{ROOT}caf%C3%A9.txt"

    def test_ls_missing(self, context: ShellContext) -> None:
        result = _run(context, "ls nope")
        assert result.error is not None
        assert result.error.code == ErrorKind.PATH_NOT_FOUND
