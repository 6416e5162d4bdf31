"""FFmpeg progress parsing and throttling.

ffmpeg invoked with ``-progress pipe:1`` writes blocks of ``key=value`` lines
to stdout, each block closed by a ``progress=continue`` (or
``progress=end``) line. By default a block is written every half second,
which floods a console. ProgressReducer folds the blocks into one status
line emitted every few updates.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

# Default number of progress blocks folded into one status line.
# ffmpeg writes a block every 0.5s, so 4 yields one line every 2 seconds.
DEFAULT_PROGRESS_STRIDE = 4

PROGRESS_KEY = "progress"
PROGRESS_END = "end"


def _optional_text(value: str) -> str | None:
    return None if value == "N/A" else value


# Fields kept from each block, with their converters. Numeric fields whose
# value does not convert (ffmpeg writes N/A before the first frame) are
# skipped so the previous value stays.
_FIELDS: dict[str, Callable[[str], int | float | str | None]] = {
    "frame": int,
    "fps": float,
    "total_size": int,
    "out_time_us": int,
    "bitrate": _optional_text,
    "speed": _optional_text,
}


@dataclass
class FFmpegProgress:
    """Latest values of the progress fields burner displays."""

    frame: int | None = None
    fps: float | None = None
    bitrate: str | None = None
    total_size: int | None = None
    out_time_us: int | None = None
    speed: str | None = None

    @property
    def out_time_seconds(self) -> float | None:
        return None if self.out_time_us is None else self.out_time_us / 1e6

    def get_percent(self, duration_seconds: float | None) -> float:
        """Share of ``duration_seconds`` encoded so far, capped at 100.

        0.0 when either the duration or the output time is unknown.
        """
        out_time = self.out_time_seconds
        if not duration_seconds or duration_seconds < 0 or out_time is None:
            return 0.0
        return min(100.0, out_time * 100 / duration_seconds)

    def format_status(self, duration_seconds: float | None = None) -> str:
        """Render a one-line status in ffmpeg's own stats style."""
        parts: list[str] = []
        if self.frame is not None:
            parts.append(f"frame={self.frame:>6}")
        if self.fps is not None:
            parts.append(f"fps={self.fps:>6.1f}")
        if self.total_size is not None:
            parts.append(f"size={self.total_size // 1024:>8}KiB")
        out_time = self.out_time_seconds
        if out_time is not None:
            parts.append(f"time={_format_timestamp(out_time)}")
        if self.bitrate is not None:
            parts.append(f"bitrate={self.bitrate}")
        if self.speed is not None:
            parts.append(f"speed={self.speed}")
        if duration_seconds:
            parts.append(f"({self.get_percent(duration_seconds):.1f}%)")
        return " ".join(parts)


def _format_timestamp(seconds: float) -> str:
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{int(hours):02d}:{int(minutes):02d}:{secs:05.2f}"


def parse_progress_line(line: str) -> dict[str, str | int | float | None]:
    """Turn one ``key=value`` line into ``{field: value}``.

    Lines that are not ``key=value``, carry a field burner does not show,
    or hold an unparseable number yield an empty dict.
    """
    key, sep, raw = line.strip().partition("=")
    convert = _FIELDS.get(key.strip()) if sep else None
    if convert is None:
        return {}
    try:
        return {key.strip(): convert(raw.strip())}
    except ValueError:
        return {}


class ProgressReducer:
    """Folds ``-progress`` blocks into periodic status lines.

    Fields accumulate across blocks; every ``stride``-th block, and the
    final ``progress=end`` block, produces one status line ending in a
    carriage return so the console overwrites it in place.

    Usage:
        reducer = ProgressReducer(console.write, stride=4)
        for line in LineScanner(process.stdout):
            reducer.feed(line)
    """

    def __init__(
        self,
        emit: Callable[[str], object],
        stride: int = DEFAULT_PROGRESS_STRIDE,
        duration_seconds: float | None = None,
    ) -> None:
        if stride < 1:
            raise ValueError(f"stride must be at least 1, got {stride}")
        self._emit = emit
        self._stride = stride
        self._duration_seconds = duration_seconds
        self._progress = FFmpegProgress()
        self._updates = 0
        self._flushed = 0

    @property
    def progress(self) -> FFmpegProgress:
        """Latest accumulated progress."""
        return self._progress

    @property
    def updates(self) -> int:
        """Number of progress blocks seen so far."""
        return self._updates

    @property
    def flushed(self) -> int:
        """Number of status lines emitted so far."""
        return self._flushed

    def feed(self, line: str) -> None:
        """Consume one line of ``-progress`` output."""
        key, sep, value = line.strip().partition("=")
        if not sep:
            return
        if key.strip() == PROGRESS_KEY:
            self._updates += 1
            if value.strip() == PROGRESS_END or self._updates % self._stride == 0:
                self.flush()
            return
        for name, converted in parse_progress_line(line).items():
            setattr(self._progress, name, converted)

    def flush(self) -> None:
        """Emit the accumulated status line now."""
        status = self._progress.format_status(self._duration_seconds)
        if not status:
            return
        self._flushed += 1
        self._emit(status + "\r")
