"""``unictl`` entry point: global options, settings, and command registration."""

from __future__ import annotations

import click

from unictl import __version__
from unictl.commands import register_commands
from unictl.commands._context import AppContext
from unictl.config.settings import UniSettings


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="unictl")
@click.option(
    "--caller",
    metavar="ID",
    default=None,
    help="Identity performing mutating commands (env: UNICTL_CALLER).",
)
@click.option("-c", "--config", "config_path", metavar="PATH", help="Use this unictl.toml.")
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Emit bare values only.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs, error detail, and timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.pass_context
def cli(
    ctx: click.Context,
    caller: str | None,
    config_path: str | None,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """unictl: control a capped, mintable token ledger."""
    app = AppContext(
        UniSettings.from_cli(
            config_path=config_path,
            caller=caller,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
