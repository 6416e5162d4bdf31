"""CLI command for burning subtitles.

Provides the `burner burn` command that transcodes every file of the input
directory into the output directory with the selected profile.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import click

from burner.cli.exit_codes import ExitCode
from burner.config import BurnerConfig, VideoConfig, apply_preset, load_preset
from burner.config.presets import PresetNotFoundError
from burner.core.file_utils import list_files_with_ext
from burner.exceptions import PresetError, SetupError
from burner.executor.burn import BurnExecutor
from burner.executor.ffmpeg_base import FFmpegSupervisor
from burner.executor.profiles import MENU_ORDER, PROFILE_TOKENS, Profile
from burner.executor.types import BurnSummary
from burner.tools.classifiers import build_classifier_chain
from burner.tools.detection import find_tool, require_tool
from burner.tools.terminal import TextSink

logger = logging.getLogger(__name__)

MODE_HELP = """mode of the encoding

\b
smp4 - Sample MP4. A one minute sample with burned-in subtitles.
fmp4 - Fragmented MP4. HLS with burned-in subtitles.
mp4 - MP4. Burned-in subtitles.
transcode - Re-encode the video, keeping subtitles as streams."""


def prompt_profile() -> Profile:
    """Ask for a profile until a valid menu index is entered."""
    while True:
        click.echo("Select mode:")
        for profile in MENU_ORDER:
            click.echo(f"[{profile.value}] {profile.label}")
        profile = Profile.from_index(click.prompt("", prompt_suffix="> ", type=str))
        if profile is not None:
            return profile


def _resolve_video(
    video: VideoConfig,
    height: int | None,
    bitrate: str | None,
    keep_bitrate: bool,
    upscaling: bool,
) -> VideoConfig:
    overrides: dict[str, object] = {}
    if height is not None:
        overrides["height"] = height
    if bitrate is not None:
        overrides["bitrate"] = bitrate
    if keep_bitrate:
        overrides["keep_bitrate"] = True
    if upscaling:
        overrides["upscaling"] = True
    return dataclasses.replace(video, **overrides)


def _check_directory(path: Path, label: str) -> Path:
    resolved = path.expanduser().resolve()
    if not resolved.is_dir():
        raise SetupError(
            f"{label} directory does not exist: {resolved}. "
            "Run 'burner prepare' to create it."
        )
    return resolved


def _display_summary(console: TextSink, summary: BurnSummary) -> None:
    console.write(
        f"Processed {summary.processed} file(s): "
        f"{summary.succeeded} succeeded, {summary.failed} failed"
    )
    for path, message in summary.failures:
        console.write(f"  {path.name}: {message}")


@click.command("burn")
@click.option(
    "--mode",
    "-m",
    type=click.Choice(PROFILE_TOKENS),
    default=None,
    help=MODE_HELP,
)
@click.option(
    "--input",
    "-i",
    "input_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory of the input files (default: ./in).",
)
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory of the output files (default: ./out).",
)
@click.option(
    "--preset",
    default=None,
    help="Apply a video preset from ~/.burner/presets/<name>.yaml.",
)
@click.option(
    "--ignore-font-error",
    is_flag=True,
    default=False,
    help="Skip font errors during encode.",
)
@click.option("--v-height", type=int, default=None, help="Target video height.")
@click.option("--v-bitrate", default=None, help="Target video bitrate.")
@click.option(
    "--v-keep-bitrate",
    is_flag=True,
    default=False,
    help="Never lower the bitrate when the source is smaller than expected.",
)
@click.option(
    "--v-upscaling",
    is_flag=True,
    default=False,
    help="Allow upscaling.",
)
@click.option(
    "--progress-stride",
    type=click.IntRange(min=1),
    default=None,
    help="Progress updates folded into one status line.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Verbose output.")
@click.pass_context
def burn_command(
    ctx: click.Context,
    mode: str | None,
    input_dir: Path | None,
    output_dir: Path | None,
    preset: str | None,
    ignore_font_error: bool,
    v_height: int | None,
    v_bitrate: str | None,
    v_keep_bitrate: bool,
    v_upscaling: bool,
    progress_stride: int | None,
    verbose: bool,
) -> None:
    """Transcode all files in the input folder.

    The results are saved to the output folder. When no mode is given the
    mode is asked for interactively.
    """
    config: BurnerConfig = ctx.obj["config"]
    console = ctx.obj["console"]

    profile = Profile.from_token(mode) if mode else None
    video = config.video
    ignore_font_error = ignore_font_error or config.ignore_font_error

    if preset:
        try:
            loaded = load_preset(preset)
        except PresetNotFoundError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(ExitCode.PRESET_NOT_FOUND)
        except PresetError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(ExitCode.CONFIG_ERROR)
        video = apply_preset(video, loaded)
        if profile is None and loaded.profile:
            profile = Profile.from_token(loaded.profile)
        if loaded.ignore_font_error is not None and not ignore_font_error:
            ignore_font_error = loaded.ignore_font_error

    try:
        video = _resolve_video(video, v_height, v_bitrate, v_keep_bitrate, v_upscaling)
    except ValueError as e:
        click.echo(f"Error: Invalid video settings: {e}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    try:
        source_dir = _check_directory(input_dir or config.input_dir, "Input")
        target_dir = _check_directory(output_dir or config.output_dir, "Output")
    except SetupError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.TARGET_NOT_FOUND)

    try:
        ffmpeg_path = require_tool("ffmpeg", config.tools.ffmpeg)
    except SetupError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.TOOL_NOT_AVAILABLE)
    ffprobe_path = find_tool("ffprobe", config.tools.ffprobe)
    if ffprobe_path is None and not video.keep_bitrate:
        logger.warning("ffprobe not found, bitrate will not be adjusted")

    verbose = verbose or config.verbose
    if verbose:
        logger.info("Using %s", ffmpeg_path)

    if profile is None:
        profile = prompt_profile()

    files = list_files_with_ext(source_dir)
    if not files:
        click.echo(f"No input files found in {source_dir}", err=True)
        ctx.exit(ExitCode.SUCCESS)

    supervisor = FFmpegSupervisor(
        console,
        build_classifier_chain(ignore_font_error=ignore_font_error, verbose=verbose),
        progress_stride=progress_stride or config.progress_stride,
    )
    executor = BurnExecutor(
        profile=profile,
        output_dir=target_dir,
        ffmpeg_path=ffmpeg_path,
        ffprobe_path=ffprobe_path,
        video=video,
        supervisor=supervisor,
        console=console,
        verbose=verbose,
    )
    try:
        summary = executor.burn_all(files)
    except KeyboardInterrupt:
        click.echo("\nInterrupted.", err=True)
        ctx.exit(ExitCode.INTERRUPTED)
    _display_summary(console, summary)

    if summary.failed:
        ctx.exit(ExitCode.OPERATION_FAILED)
