"""Tests for the root CLI group, ``run`` and ``shell``."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from podshell import __version__
from podshell.cli import cli


class TestRootGroup:
    def test_no_subcommand_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "batch" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_unknown_root_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--bogus"])
        assert result.exit_code == 2
        assert "No such option" in result.output

    def test_invalid_root_is_a_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--root", "ftp://pod.example/", "run", "pwd"])
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output

    def test_root_gets_trailing_slash(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--root", "https://alice.example", "run", "pwd"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "https://alice.example/"

    def test_root_from_config_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text('[pod]\nroot = "https://bob.example/"\n', encoding="utf-8")
        result = cli_runner.invoke(cli, ["--config", str(config), "run", "pwd"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "https://bob.example/"

    def test_root_from_env(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["run", "pwd"], env={"PODSHELL_POD__ROOT": "https://carol.example/"}
        )
        assert result.stdout.strip() == "https://carol.example/"


class TestRun:
    def test_success_goes_to_stdout(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "mkdir", "docs"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "Created directory docs"

    def test_options_pass_through(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "touch", "a.txt", "--content", "hello"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "Created a.txt"

    def test_failure_exits_one(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "cat", "nope"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "cat: no such file or directory: nope" in result.stderr

    def test_unknown_command(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "frobnicate"])
        assert result.exit_code == 1
        assert "Unknown command: frobnicate" in result.stderr

    def test_requires_words(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["run"]).exit_code == 2

    def test_json_envelope(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "run", "pwd"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "success": True,
            "data": {"url": "https://pod.example/"},
        }

    def test_json_failure_envelope_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "run", "cat", "nope"])
        assert result.exit_code == 1
        assert result.stdout == ""
        envelope = json.loads(result.stderr)
        assert envelope["success"] is False
        assert envelope["error"]["code"] == "PATH_NOT_FOUND"

    def test_quiet_listing(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        env = {"PODSHELL_STORE__URL": f"sqlite:///{tmp_path / 'pod.db'}"}
        cli_runner.invoke(cli, ["run", "mkdir", "docs"], env=env)
        result = cli_runner.invoke(cli, ["-q", "run", "ls"], env=env)
        assert result.stdout.strip() == "https://pod.example/docs/"

    def test_file_store_persists(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        env = {"PODSHELL_STORE__URL": f"sqlite:///{tmp_path / 'pod.db'}"}
        cli_runner.invoke(cli, ["run", "touch", "a.txt", "--content", "kept"], env=env)
        result = cli_runner.invoke(cli, ["run", "cat", "a.txt"], env=env)
        assert result.stdout.strip() == "kept"

    def test_memory_store_is_fresh_each_time(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["run", "touch", "a.txt"])
        assert cli_runner.invoke(cli, ["run", "cat", "a.txt"]).exit_code == 1


class TestShell:
    def test_session(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["shell"], input="mkdir docs\ncd docs\n\npwd\nexit\n"
        )
        assert result.exit_code == 0
        assert 'Connected to https://pod.example/. Type "help"' in result.stdout
        assert "pod:docs> " in result.stdout
        assert "https://pod.example/docs/" in result.stdout

    def test_failure_keeps_session_alive(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell"], input="cat nope\npwd\nexit\n")
        assert result.exit_code == 0
        assert "cat: no such file or directory: nope" in result.stderr
        assert "https://pod.example/" in result.stdout

    def test_eof_ends_session(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell"], input="pwd\n")
        assert result.exit_code == 0
        assert "https://pod.example/" in result.stdout

    def test_quiet_skips_banner(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "shell"], input="exit\n")
        assert "Connected to" not in result.stdout

    def test_custom_prompt(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "podshell.toml"
        config.write_text('[shell]\nprompt = "alice"\n', encoding="utf-8")
        result = cli_runner.invoke(cli, ["-c", str(config), "shell"], input="exit\n")
        assert "alice:/> " in result.stdout

    def test_json_lines(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "shell"], input="pwd\nexit\n")
        assert result.exit_code == 0
        assert '"url": "https://pod.example/"' in result.stdout
