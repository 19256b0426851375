"""Programmatic API: commands as typed data calls.

Each wrapper validates its input, runs the same command implementation the
shell uses (silent, JSON mode), and validates the returned ``data`` against
a closed model. Bad input yields ``INVALID_ARGUMENT``; data that does not
match its model yields ``OPERATION_FAILED``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from podshell.domain.errors import ErrorKind
from podshell.infrastructure.pod import VirtualPod
from podshell.infrastructure.store import TableStore
from podshell.services.result import CommandOptions, CommandResult
from podshell.services.typeindex import TypeRegistry
from podshell.shell.commands import COMMANDS
from podshell.shell.context import NullOutput, ShellContext
from podshell.shell.executor import exec_command

_API_OPTIONS = CommandOptions(json=True, silent=True)


def create_api_context(
    store: TableStore,
    pod: VirtualPod,
    current_url: str | None = None,
) -> ShellContext:
    """A headless context: output is discarded, no renderer.

    Seeds the default type registrations when the registry is empty.
    """
    TypeRegistry(store).initialize_defaults(pod.root)
    return ShellContext(
        store, pod, commands=COMMANDS, output=NullOutput(), current_url=current_url
    )


# ---------------------------------------------------------------------------
# Output data
# ---------------------------------------------------------------------------


class _Data(BaseModel):
    model_config = {"frozen": True, "populate_by_name": True}


class PwdData(_Data):
    url: str


class CdData(_Data):
    url: str
    previous_url: str = Field(alias="previousUrl")


class LsChild(_Data):
    url: str
    name: str
    type: Literal["Container", "Resource"]
    content_type: str | None = Field(default=None, alias="contentType")
    updated: str | None = None


class LsData(_Data):
    url: str
    children: list[LsChild]


class CatData(_Data):
    url: str
    content: str
    content_type: str = Field(alias="contentType")


class CreatedData(_Data):
    url: str
    created: bool


class RmData(_Data):
    url: str
    deleted: list[str]


class FileInfoData(_Data):
    url: str
    name: str
    content_type: str = Field(alias="contentType")
    size: int
    updated: str | None = None
    title: str | None = None
    description: str | None = None
    author: str | None = None
    author_name: str | None = Field(default=None, alias="authorName")
    created: str | None = None
    modified: str | None = None


class FileSetData(_Data):
    url: str
    title: str | None = None
    description: str | None = None
    author: str | None = None
    author_name: str | None = Field(default=None, alias="authorName")


class ScriptListData(_Data):
    count: int
    names: list[str]


class ScriptShowData(_Data):
    name: str
    script: str
    lines: list[str]


class ScriptSavedData(_Data):
    name: str
    saved: Literal[True]
    line_count: int = Field(alias="lineCount")


class ScriptDeletedData(_Data):
    name: str
    deleted: Literal[True]


class ScriptRunData(_Data):
    name: str
    ran: Literal[True]
    count: int
    failures: int


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


class _Input(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}


class PathInput(_Input):
    path: str = Field(min_length=1)


class TouchInput(_Input):
    name: str = Field(min_length=1)
    content: str | None = None
    content_type: str | None = None


class MkdirInput(_Input):
    name: str = Field(min_length=1)


class RmInput(_Input):
    path: str = Field(min_length=1)
    recursive: bool = False
    force: bool = False


class FileSetTitleInput(_Input):
    path: str = Field(min_length=1)
    title: str = Field(min_length=1)


class FileSetDescriptionInput(_Input):
    path: str = Field(min_length=1)
    description: str = Field(min_length=1)


class FileSetAuthorInput(_Input):
    path: str = Field(min_length=1)
    persona: str = Field(min_length=1)


class ScriptNameInput(_Input):
    name: str = Field(min_length=1)


class ScriptLineInput(_Input):
    name: str = Field(min_length=1)
    line: str = Field(min_length=1)


class ScriptRunInput(_Input):
    name: str = Field(min_length=1)
    continue_on_error: bool = False


# ---------------------------------------------------------------------------
# Wrappers
# ---------------------------------------------------------------------------


def _invalid_input(operation: str, exc: ValidationError) -> CommandResult:
    return CommandResult.fail(
        ErrorKind.INVALID_ARGUMENT,
        f"Invalid {operation} input",
        exc.errors(include_url=False, include_context=False),
    )


def _parse_input[I: _Input](model: type[I], operation: str, raw: Any) -> I | CommandResult:
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        return _invalid_input(operation, exc)


class PodApi:
    """Typed wrappers over the command table, bound to one context."""

    def __init__(self, context: ShellContext) -> None:
        self.context = context

    def _exec[D: _Data](self, command: str, args: list[str], model: type[D]) -> CommandResult:
        result = exec_command(command, args, self.context, _API_OPTIONS)
        if not result.success:
            return CommandResult(success=False, error=result.error)
        try:
            data = model.model_validate(result.data)
        except ValidationError as exc:
            return CommandResult.fail(
                ErrorKind.OPERATION_FAILED,
                f"Invalid {command} result data",
                exc.errors(include_url=False, include_context=False),
            )
        return CommandResult.ok(data=data, message=result.message)

    # --- navigation ---

    def pwd(self) -> CommandResult:
        return self._exec("pwd", [], PwdData)

    def cd(self, path: str | None = None) -> CommandResult:
        return self._exec("cd", [path] if path else [], CdData)

    def ls(self, path: str | None = None) -> CommandResult:
        return self._exec("ls", [path] if path else [], LsData)

    # --- files ---

    def cat(self, path: str) -> CommandResult:
        parsed = _parse_input(PathInput, "cat", {"path": path})
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec("cat", [parsed.path], CatData)

    def touch(
        self, name: str, content: str | None = None, content_type: str | None = None
    ) -> CommandResult:
        parsed = _parse_input(
            TouchInput, "touch", {"name": name, "content": content, "content_type": content_type}
        )
        if isinstance(parsed, CommandResult):
            return parsed
        args = [parsed.name]
        if parsed.content_type:
            args.append(f"--type={parsed.content_type}")
        if parsed.content is not None:
            args.append(f"--content={parsed.content}")
        return self._exec("touch", args, CreatedData)

    def mkdir(self, name: str) -> CommandResult:
        parsed = _parse_input(MkdirInput, "mkdir", {"name": name})
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec("mkdir", [parsed.name], CreatedData)

    def rm(self, path: str, *, recursive: bool = False, force: bool = False) -> CommandResult:
        parsed = _parse_input(
            RmInput, "rm", {"path": path, "recursive": recursive, "force": force}
        )
        if isinstance(parsed, CommandResult):
            return parsed
        args = [parsed.path]
        if parsed.recursive:
            args.append("-r")
        if parsed.force:
            args.append("-f")
        return self._exec("rm", args, RmData)

    def file_info(self, path: str) -> CommandResult:
        parsed = _parse_input(PathInput, "file_info", {"path": path})
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec("file", ["info", parsed.path], FileInfoData)

    def file_set_title(self, path: str, title: str) -> CommandResult:
        parsed = _parse_input(FileSetTitleInput, "file_set_title", {"path": path, "title": title})
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec("file", ["set-title", parsed.path, parsed.title], FileSetData)

    def file_set_description(self, path: str, description: str) -> CommandResult:
        parsed = _parse_input(
            FileSetDescriptionInput,
            "file_set_description",
            {"path": path, "description": description},
        )
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec(
            "file", ["set-description", parsed.path, parsed.description], FileSetData
        )

    def file_set_author(self, path: str, persona: str) -> CommandResult:
        parsed = _parse_input(
            FileSetAuthorInput, "file_set_author", {"path": path, "persona": persona}
        )
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec("file", ["set-author", parsed.path, parsed.persona], FileSetData)

    # --- scripts ---

    def script_list(self) -> CommandResult:
        return self._exec("script", ["list"], ScriptListData)

    def script_show(self, name: str) -> CommandResult:
        parsed = _parse_input(ScriptNameInput, "script_show", {"name": name})
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec("script", ["show", parsed.name], ScriptShowData)

    def script_save(self, name: str, line: str) -> CommandResult:
        parsed = _parse_input(ScriptLineInput, "script_save", {"name": name, "line": line})
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec("script", ["save", parsed.name, parsed.line], ScriptSavedData)

    def script_append(self, name: str, line: str) -> CommandResult:
        parsed = _parse_input(ScriptLineInput, "script_append", {"name": name, "line": line})
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec("script", ["append", parsed.name, parsed.line], ScriptSavedData)

    def script_delete(self, name: str) -> CommandResult:
        parsed = _parse_input(ScriptNameInput, "script_delete", {"name": name})
        if isinstance(parsed, CommandResult):
            return parsed
        return self._exec("script", ["delete", parsed.name], ScriptDeletedData)

    def script_run(self, name: str, *, continue_on_error: bool = False) -> CommandResult:
        parsed = _parse_input(
            ScriptRunInput, "script_run", {"name": name, "continue_on_error": continue_on_error}
        )
        if isinstance(parsed, CommandResult):
            return parsed
        args = ["run", parsed.name]
        if parsed.continue_on_error:
            args.append("--continue")
        return self._exec("script", args, ScriptRunData)
