"""Root CLI group for podshell with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from podshell import __version__
from podshell.commands import register_commands
from podshell.commands._context import AppContext
from podshell.config.settings import PodSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="podshell")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--root", default=None, help="Pod root URL (overrides [pod] root).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    root: str | None,
) -> None:
    """podshell - a command shell over a virtual personal data pod."""
    ctx.ensure_object(dict)
    try:
        settings = PodSettings.from_cli(
            config_path=config_path,
            root=root,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        raise click.UsageError(f"Invalid configuration: {exc}") from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
