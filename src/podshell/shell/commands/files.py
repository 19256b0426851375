"""cat, touch, mkdir, rm: resource CRUD through the VirtualPod."""

from __future__ import annotations

from typing import TYPE_CHECKING

from podshell.domain.args import get_option_boolean, get_option_string, parse_cli_args
from podshell.domain.errors import ErrorKind
from podshell.domain.paths import ensure_trailing_slash, get_parent_url
from podshell.infrastructure.pod import PodResponse
from podshell.services import preferences
from podshell.services.result import CommandOptions, CommandResult
from podshell.shell.commands._helpers import find_resource, locate, missing, resolve
from podshell.shell.registry import Command

if TYPE_CHECKING:
    from podshell.shell.context import ShellContext


def _put_failure(command: str, target: str, response: PodResponse) -> CommandResult:
    if response.status == 409:
        return CommandResult.fail(
            ErrorKind.PARENT_NOT_FOUND, f"{command}: parent folder does not exist: {target}"
        )
    if response.status == 403:
        return CommandResult.fail(ErrorKind.PERMISSION_DENIED, f"{command}: {response.body}")
    if response.status == 400:
        return CommandResult.fail(ErrorKind.INVALID_PATH, f"{command}: {response.body}")
    return CommandResult.fail(
        ErrorKind.OPERATION_FAILED,
        f"{command}: failed ({response.status}): {response.body}",
        {"status": response.status},
    )


class CatCommand(Command):
    name = "cat"
    description = "Display file contents"
    usage = "cat <file>"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("cat", "file operand")
        found = locate(context, "cat", args[0])
        if isinstance(found, CommandResult):
            return found
        url, row = found
        if row.is_container:
            return CommandResult.fail(ErrorKind.NOT_A_FILE, f"cat: {args[0]}: is a directory")

        response = context.pod.handle_request(url, "GET")
        if not response.ok:
            return CommandResult.fail(ErrorKind.PATH_NOT_FOUND, f"cat: {args[0]}: {response.body}")
        return CommandResult.ok(
            data={
                "url": url,
                "content": response.body or "",
                "contentType": response.headers.get("Content-Type", row.content_type),
            }
        )


class TouchCommand(Command):
    name = "touch"
    description = "Create a new file"
    usage = "touch <filename> [--content <text>] [--type <mime>]"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("touch", "file name")
        name = parsed.positional[0]

        target = resolve(context, "touch", name)
        if isinstance(target, CommandResult):
            return target
        if target.endswith("/"):
            return CommandResult.fail(
                ErrorKind.INVALID_ARGUMENT, f"touch: {name}: use mkdir to create directories"
            )
        if find_resource(context, target) is not None:
            return CommandResult.fail(ErrorKind.ALREADY_EXISTS, f"touch: {name}: already exists")

        content = get_option_string(parsed, "content", "c") or ""
        content_type = get_option_string(parsed, "type", "t") or preferences.get_setting(
            context.store, preferences.DEFAULT_CONTENT_TYPE
        )
        response = context.pod.handle_request(
            target, "PUT", body=content, headers={"Content-Type": content_type}
        )
        if response.status != 201:
            return _put_failure("touch", name, response)
        return CommandResult.ok(data={"url": target, "created": True}, message=f"Created {name}")


class MkdirCommand(Command):
    name = "mkdir"
    description = "Create a new directory"
    usage = "mkdir <name>"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        if not args:
            return missing("mkdir", "directory name")
        name = args[0]

        target = resolve(context, "mkdir", ensure_trailing_slash(name))
        if isinstance(target, CommandResult):
            return target
        if target == context.root or context.pod.get(target) is not None:
            return CommandResult.fail(ErrorKind.ALREADY_EXISTS, f"mkdir: {name}: already exists")
        if context.pod.get(target.rstrip("/")) is not None:
            return CommandResult.fail(
                ErrorKind.ALREADY_EXISTS, f"mkdir: {name}: a file with that name exists"
            )

        response = context.pod.handle_request(
            target, "PUT", headers={"Content-Type": "text/turtle"}
        )
        if response.status != 201:
            return _put_failure("mkdir", name, response)
        return CommandResult.ok(
            data={"url": target, "created": True}, message=f"Created directory {name}"
        )


class RmCommand(Command):
    name = "rm"
    description = "Remove a file or directory"
    usage = "rm <path> [-r|--recursive] [-f|--force]"

    def execute(
        self, args: list[str], context: ShellContext, options: CommandOptions
    ) -> CommandResult:
        parsed = parse_cli_args(args)
        if not parsed.positional:
            return missing("rm", "operand")
        path = parsed.positional[0]
        recursive = get_option_boolean(parsed, "r", "recursive")
        force = get_option_boolean(parsed, "f", "force")

        target = resolve(context, "rm", path)
        if isinstance(target, CommandResult):
            return target
        found = find_resource(context, target)
        if found is None:
            if force:
                return CommandResult.ok(data={"url": target, "deleted": []})
            return CommandResult.fail(
                ErrorKind.PATH_NOT_FOUND, f"rm: no such file or directory: {path}"
            )
        url, row = found
        if url == context.root:
            return CommandResult.fail(ErrorKind.PERMISSION_DENIED, "rm: cannot remove root")

        doomed = [url]
        if row.is_container:
            below = context.pod.descendants(url)
            if below and not recursive:
                return CommandResult.fail(
                    ErrorKind.DIRECTORY_NOT_EMPTY, f"rm: {path}: directory not empty (use -r)"
                )
            doomed = [*below, url]

        deleted: list[str] = []
        for item in doomed:
            response = context.pod.handle_request(item, "DELETE")
            if response.status != 204:
                return CommandResult.fail(
                    ErrorKind.OPERATION_FAILED,
                    f"rm: failed to remove {item}: {response.body}",
                    {"status": response.status},
                    data={"url": url, "deleted": deleted},
                )
            deleted.append(item)

        if row.is_container and context.current_url.startswith(url):
            context.current_url = get_parent_url(url, context.root)
        return CommandResult.ok(data={"url": url, "deleted": deleted})
