"""CLI command printing version information."""

import platform

import click

from burner import __version__
from burner.config import BurnerConfig
from burner.tools.detection import find_tool, get_tool_version


@click.command("version")
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Print the build information for burner and the tools it drives."""
    config: BurnerConfig = ctx.obj["config"]

    click.echo(f"Burner {__version__}")
    click.echo(f"    python {platform.python_version()}")

    for name in ("ffmpeg", "ffprobe"):
        path = find_tool(name, config.get_tool_path(name))
        if path is None:
            click.echo(f"  [--] {name}: not found")
            continue
        version = get_tool_version(path) or "unknown version"
        click.echo(f"  [OK] {name}: {version} ({path})")
