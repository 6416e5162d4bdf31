"""CLI command for preparing the working directories."""

import logging
from pathlib import Path

import click

from burner.cli.exit_codes import ExitCode
from burner.config import BurnerConfig

logger = logging.getLogger(__name__)


def prepare_directories(*directories: Path) -> list[Path]:
    """Create missing directories.

    Returns:
        The directories that were created.

    Raises:
        OSError: If a directory cannot be created.
    """
    created = []
    for directory in directories:
        if directory.is_dir():
            logger.debug("Directory already exists: %s", directory)
            continue
        directory.mkdir(parents=True)
        created.append(directory)
    return created


@click.command("prepare")
@click.pass_context
def prepare_command(ctx: click.Context) -> None:
    """Create the 'in' and 'out' directories."""
    config: BurnerConfig = ctx.obj["config"]
    try:
        created = prepare_directories(config.input_dir, config.output_dir)
    except OSError as e:
        click.echo(f"Error: was not able to create directory: {e}", err=True)
        ctx.exit(ExitCode.GENERAL_ERROR)

    if not created:
        click.echo("Input and output directories already exist.")
    for directory in created:
        click.echo(f"Created {directory}")
