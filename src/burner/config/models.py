"""Configuration dataclasses.

Each section validates itself on construction, so a BurnerConfig that
exists is a usable one.
"""

from dataclasses import dataclass, field
from pathlib import Path

from burner.executor.bitrate import parse_bitrate
from burner.tools.ffmpeg_progress import DEFAULT_PROGRESS_STRIDE

DEFAULT_HEIGHT = 720
DEFAULT_BITRATE = "1371k"

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMATS = ("text", "json")


@dataclass
class ToolPathsConfig:
    """Explicit ffmpeg/ffprobe locations; unset tools are searched on PATH."""

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass
class VideoConfig:
    """Target video shaping."""

    height: int = DEFAULT_HEIGHT
    """Output height in pixels; width follows the aspect ratio."""

    bitrate: str = DEFAULT_BITRATE
    """Target video bitrate, e.g. "1371k" or "2M"."""

    keep_bitrate: bool = False
    """Never lower the bitrate for small sources."""

    upscaling: bool = False
    """Allow scaling sources smaller than the target up."""

    def __post_init__(self) -> None:
        if self.height <= 0:
            raise ValueError(f"height must be positive, got {self.height}")
        if not isinstance(self.bitrate, str) or parse_bitrate(self.bitrate) <= 0:
            raise ValueError(
                f"bitrate must be a positive number followed by k or M, "
                f"got {self.bitrate!r}"
            )


@dataclass
class LoggingConfig:
    level: str = "info"
    file: Path | None = None
    """Log file; records go to the console when unset."""

    format: str = "text"
    include_stderr: bool = False
    """Keep logging to the console when a file is set."""

    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self) -> None:
        if self.level.casefold() not in LOG_LEVELS:
            raise ValueError(
                f"log level {self.level!r} is not one of {', '.join(LOG_LEVELS)}"
            )
        if self.format.casefold() not in LOG_FORMATS:
            raise ValueError(
                f"log format {self.format!r} is not one of {', '.join(LOG_FORMATS)}"
            )


@dataclass
class BurnerConfig:
    """Everything a burn run needs, after file, env and CLI are merged."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    video: VideoConfig = field(default_factory=VideoConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    input_dir: Path = Path("in")
    output_dir: Path = Path("out")

    ignore_font_error: bool = False
    """Keep encoding when subtitles need missing fonts or glyphs."""

    verbose: bool = False
    """Print the commands and every unclassified ffmpeg line."""

    progress_stride: int = DEFAULT_PROGRESS_STRIDE
    """Progress updates folded into one status line."""

    def __post_init__(self) -> None:
        if self.progress_stride < 1:
            raise ValueError(
                f"progress_stride must be at least 1, got {self.progress_stride}"
            )

    def get_tool_path(self, tool_name: str) -> Path | None:
        """Configured location of ``tool_name``, or None for unknown tools."""
        return getattr(self.tools, tool_name.lower(), None)
