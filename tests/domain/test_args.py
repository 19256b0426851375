"""Tests for whitespace tokenizing and flag parsing."""

from __future__ import annotations

from podshell.domain.args import get_option_boolean, get_option_string, parse_cli_args, tokenize


def test_tokenize_splits_on_whitespace() -> None:
    assert tokenize("  touch   a.txt\t--content  hi ") == ["touch", "a.txt", "--content", "hi"]
    assert tokenize("   ") == []


class TestParseCliArgs:
    def test_long_flag_with_equals(self) -> None:
        parsed = parse_cli_args(["--type=text/markdown", "a.md"])
        assert parsed.options == {"type": "text/markdown"}
        assert parsed.positional == ["a.md"]

    def test_long_flag_consumes_next_token(self) -> None:
        parsed = parse_cli_args(["--name", "Alice", "extra"])
        assert parsed.options == {"name": "Alice"}
        assert parsed.positional == ["extra"]

    def test_long_flag_before_flag_is_boolean(self) -> None:
        parsed = parse_cli_args(["--public", "--force"])
        assert parsed.options == {"public": True, "force": True}

    def test_trailing_long_flag_is_boolean(self) -> None:
        assert parse_cli_args(["x", "--continue"]).options == {"continue": True}

    def test_short_flags_are_boolean(self) -> None:
        parsed = parse_cli_args(["-r", "docs", "-f"])
        assert parsed.options == {"r": True, "f": True}
        assert parsed.positional == ["docs"]

    def test_equals_keeps_rest_of_value(self) -> None:
        assert parse_cli_args(["--content=a=b"]).options == {"content": "a=b"}


class TestOptionAccessors:
    def test_string_aliases(self) -> None:
        parsed = parse_cli_args(["--content", "hello"])
        assert get_option_string(parsed, "content", "c") == "hello"
        assert get_option_string(parsed, "missing") is None

    def test_boolean_flag_is_not_a_string(self) -> None:
        assert get_option_string(parse_cli_args(["--content"]), "content") is None

    def test_boolean_aliases(self) -> None:
        assert get_option_boolean(parse_cli_args(["-c"]), "continue", "c") is True
        assert get_option_boolean(parse_cli_args([]), "continue", "c") is False

    def test_boolean_from_string(self) -> None:
        assert get_option_boolean(parse_cli_args(["--public=true"]), "public") is True
        assert get_option_boolean(parse_cli_args(["--public=no"]), "public") is False
