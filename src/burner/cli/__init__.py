"""The burner command line: the top-level group and its shared state."""

from pathlib import Path

import click

from burner.cli.exit_codes import ExitCode
from burner.config import build_logging_config, get_config
from burner.config.models import LOG_LEVELS
from burner.exceptions import ConfigError
from burner.logging import configure_logging
from burner.tools.terminal import SynchronizedWriter, TerminalRedrawWriter


def make_console() -> SynchronizedWriter:
    """Create the shared console on stderr.

    ffmpeg output, progress lines and log records all go through it.
    """
    return SynchronizedWriter(TerminalRedrawWriter(click.get_text_stream("stderr")))


@click.group()
@click.version_option(package_name="burner")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level for this run.",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Write log records to this file instead of the console.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Emit log records as JSON lines.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Read settings from this TOML file instead of ~/.burner/config.toml.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """Burner - burn subtitles into videos with two-pass ffmpeg encodes."""
    ctx.ensure_object(dict)

    # Callers may inject both through obj, e.g. CliRunner.invoke(main, obj=...)
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path=config_path)
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(ExitCode.CONFIG_ERROR)
    if "console" not in ctx.obj:
        ctx.obj["console"] = make_console()

    config = ctx.obj["config"]
    try:
        logging_config = build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        click.echo(f"Error: Invalid logging configuration: {e}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)
    configure_logging(logging_config, stream=ctx.obj["console"])


def _register_commands() -> None:
    # Subcommand modules import from this package
    from burner.cli.burn import burn_command
    from burner.cli.prepare import prepare_command
    from burner.cli.version import version_command

    main.add_command(burn_command)
    main.add_command(prepare_command)
    main.add_command(version_command)


_register_commands()
