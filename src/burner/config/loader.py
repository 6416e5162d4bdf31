"""Merging of defaults, ~/.burner/config.toml, BURNER_* variables and CLI flags.

Later sources win: defaults < config file < environment < CLI arguments.
Recognised variables:
- BURNER_FFMPEG_PATH: Path to ffmpeg executable
- BURNER_FFPROBE_PATH: Path to ffprobe executable
- BURNER_INPUT_DIR: Directory of the input files
- BURNER_OUTPUT_DIR: Directory of the output files
- BURNER_VIDEO_HEIGHT: Target video height
- BURNER_VIDEO_BITRATE: Target video bitrate
- BURNER_VIDEO_KEEP_BITRATE: Never lower the bitrate for small sources
- BURNER_VIDEO_UPSCALING: Allow upscaling
- BURNER_IGNORE_FONT_ERROR: Keep encoding on font errors
- BURNER_PROGRESS_STRIDE: Progress updates per status line
- BURNER_LOG_LEVEL: Log level
- BURNER_LOG_FILE: Log file path
- BURNER_LOG_FORMAT: Log format (text or json)
- BURNER_CONFIG_PATH: Path to config file (overrides default location)
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from burner.config.env import EnvReader
from burner.config.models import (
    DEFAULT_BITRATE,
    DEFAULT_HEIGHT,
    BurnerConfig,
    LoggingConfig,
    ToolPathsConfig,
    VideoConfig,
)
from burner.exceptions import ConfigError
from burner.tools.ffmpeg_progress import DEFAULT_PROGRESS_STRIDE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".burner"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(env: EnvReader | None = None) -> Path:
    """BURNER_CONFIG_PATH if set, else ~/.burner/config.toml."""
    env = env or EnvReader()
    return env.get_path("BURNER_CONFIG_PATH", must_exist=False) or DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, env: EnvReader | None = None) -> dict:
    """Parse the TOML config file into a dict.

    A missing file is normal and yields an empty dict. An unreadable or
    malformed one is logged and also yields an empty dict.
    """
    if path is None:
        path = get_default_config_path(env)

    if not path.exists():
        logger.debug("No config file at %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}
    logger.debug("Loaded config from %s", path)
    return config


def _file_path(section: dict[str, Any], key: str) -> Path | None:
    value = section.get(key)
    return Path(value).expanduser() if value else None


def get_config(
    config_path: Path | None = None,
    env: EnvReader | None = None,
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
) -> BurnerConfig:
    """Build the effective BurnerConfig.

    ``config_path`` replaces the BURNER_CONFIG_PATH lookup; ``ffmpeg_path``
    and ``ffprobe_path`` beat every other source.

    Raises:
        ConfigError: If a merged value fails validation.
    """
    env = env or EnvReader()
    file_config = load_config_file(config_path, env)

    tools_file = file_config.get("tools", {})
    video_file = file_config.get("video", {})
    logging_file = file_config.get("logging", {})
    burn_file = file_config.get("burn", {})

    try:
        tools = ToolPathsConfig(
            ffmpeg=(
                ffmpeg_path
                or env.get_path("BURNER_FFMPEG_PATH")
                or _file_path(tools_file, "ffmpeg")
            ),
            ffprobe=(
                ffprobe_path
                or env.get_path("BURNER_FFPROBE_PATH")
                or _file_path(tools_file, "ffprobe")
            ),
        )

        video = VideoConfig(
            height=env.get_int(
                "BURNER_VIDEO_HEIGHT", video_file.get("height", DEFAULT_HEIGHT)
            ),
            bitrate=env.get_str(
                "BURNER_VIDEO_BITRATE", video_file.get("bitrate", DEFAULT_BITRATE)
            ),
            keep_bitrate=env.get_bool(
                "BURNER_VIDEO_KEEP_BITRATE", video_file.get("keep_bitrate", False)
            ),
            upscaling=env.get_bool(
                "BURNER_VIDEO_UPSCALING", video_file.get("upscaling", False)
            ),
        )

        logging_config = LoggingConfig(
            level=env.get_str("BURNER_LOG_LEVEL", logging_file.get("level", "info")),
            file=(
                env.get_path("BURNER_LOG_FILE", must_exist=False)
                or _file_path(logging_file, "file")
            ),
            format=env.get_str(
                "BURNER_LOG_FORMAT", logging_file.get("format", "text")
            ),
            include_stderr=logging_file.get("include_stderr", False),
            max_bytes=logging_file.get("max_bytes", LoggingConfig.max_bytes),
            backup_count=logging_file.get("backup_count", LoggingConfig.backup_count),
        )

        return BurnerConfig(
            tools=tools,
            video=video,
            logging=logging_config,
            input_dir=(
                env.get_path("BURNER_INPUT_DIR", must_exist=False)
                or _file_path(burn_file, "input_dir")
                or Path("in")
            ),
            output_dir=(
                env.get_path("BURNER_OUTPUT_DIR", must_exist=False)
                or _file_path(burn_file, "output_dir")
                or Path("out")
            ),
            ignore_font_error=env.get_bool(
                "BURNER_IGNORE_FONT_ERROR", burn_file.get("ignore_font_error", False)
            ),
            verbose=burn_file.get("verbose", False),
            progress_stride=env.get_int(
                "BURNER_PROGRESS_STRIDE",
                burn_file.get("progress_stride", DEFAULT_PROGRESS_STRIDE),
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
