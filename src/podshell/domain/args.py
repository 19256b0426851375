"""Command-line argument parsing for shell command handlers.

Lines are whitespace-tokenized with no quoting. ``--key=value`` sets a
string, ``--key value`` consumes the next token unless it starts with
``-``, a lone ``--key`` or ``-x`` is boolean true. Everything else is
positional, in order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

OptionValue = str | bool


@dataclass(frozen=True)
class ParsedArgs:
    positional: list[str] = field(default_factory=list)
    options: dict[str, OptionValue] = field(default_factory=dict)


def tokenize(line: str) -> list[str]:
    return line.split()


def parse_cli_args(args: list[str]) -> ParsedArgs:
    positional: list[str] = []
    options: dict[str, OptionValue] = {}
    i = 0
    while i < len(args):
        token = args[i]
        if token.startswith("--") and len(token) > 2:
            key, eq, value = token[2:].partition("=")
            if eq:
                options[key] = value
            elif i + 1 < len(args) and not args[i + 1].startswith("-"):
                options[key] = args[i + 1]
                i += 1
            else:
                options[key] = True
        elif token.startswith("-") and len(token) > 1:
            options[token[1:]] = True
        else:
            positional.append(token)
        i += 1
    return ParsedArgs(positional=positional, options=options)


def get_option_string(parsed: ParsedArgs, *names: str) -> str | None:
    """First string value among *names* (aliases such as ``"content", "c"``)."""
    for name in names:
        value = parsed.options.get(name)
        if isinstance(value, str):
            return value
    return None


def get_option_boolean(parsed: ParsedArgs, *names: str) -> bool:
    """True if any of *names* was given as a flag or a truthy string."""
    for name in names:
        value = parsed.options.get(name)
        if value is True:
            return True
        if isinstance(value, str) and value.lower() in {"true", "1", "yes", ""}:
            return True
    return False
