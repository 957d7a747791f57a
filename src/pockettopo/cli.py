"""``pockettopo`` entry point: global output flags and settings."""

from __future__ import annotations

import click
from pydantic import ValidationError

from pockettopo import __version__
from pockettopo.codec import VERSION
from pockettopo.commands import register_commands
from pockettopo.commands._context import AppContext
from pockettopo.config.settings import PocketTopoSettings

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"], "max_content_width": 100}


def _config_problem(exc: ValidationError) -> str:
    fields = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return f"Invalid configuration: {fields}"


@click.group(
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    epilog="Settings come from pockettopo.toml (nearest parent directory) "
    "and POCKETTOPO_* environment variables.",
)
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="pockettopo",
    message=f"%(prog)s %(version)s (.top format version {VERSION})",
)
@click.option("--json", "json_output", is_flag=True, help="Print the ServiceResult as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Tab-separated lines, one per item.")
@click.option("-v", "--verbose", is_flag=True, help="Comments, colors, timings and debug logs.")
@click.option("--log-json", is_flag=True, help="Write log records to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=str),
    envvar="POCKETTOPO_CONFIG",
    default=None,
    help="TOML settings file to use instead of the discovered pockettopo.toml.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Read PocketTopo .top cave-survey files."""
    try:
        settings = PocketTopoSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        raise click.ClickException(_config_problem(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
