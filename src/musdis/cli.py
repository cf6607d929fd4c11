"""Root CLI group for musdis with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from musdis import __version__
from musdis.commands import register_commands
from musdis.commands._context import AppContext
from musdis.config.settings import MusdisSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="musdis")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--data-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the .musdis/ catalog.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    data_root: Path | None,
) -> None:
    """musdis: music catalog and identity CLI."""
    settings = MusdisSettings.from_cli(
        config_path=config_path,
        data_root=data_root,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
