"""Built-in shell commands, keyed by name."""

from __future__ import annotations

from podshell.shell.commands.config import ConfigCommand
from podshell.shell.commands.contact import ContactCommand
from podshell.shell.commands.data import ExportCommand
from podshell.shell.commands.file import FileCommand
from podshell.shell.commands.files import CatCommand, MkdirCommand, RmCommand, TouchCommand
from podshell.shell.commands.general import ClearCommand, ExitCommand, HelpCommand
from podshell.shell.commands.group import GroupCommand
from podshell.shell.commands.navigation import CdCommand, LsCommand, PwdCommand
from podshell.shell.commands.persona import PersonaCommand
from podshell.shell.commands.script import ScriptCommand
from podshell.shell.commands.typeindex import TypeIndexCommand
from podshell.shell.registry import Command

COMMANDS: dict[str, Command] = {
    cmd.name: cmd
    for cmd in (
        HelpCommand(),
        ClearCommand(),
        ExitCommand(),
        PwdCommand(),
        CdCommand(),
        LsCommand(),
        CatCommand(),
        TouchCommand(),
        MkdirCommand(),
        RmCommand(),
        FileCommand(),
        PersonaCommand(),
        ContactCommand(),
        GroupCommand(),
        TypeIndexCommand(),
        ScriptCommand(),
        ConfigCommand(),
        ExportCommand(),
    )
}

__all__ = ["COMMANDS"]
