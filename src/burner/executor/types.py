"""Transcode data types and result classes.

This module defines the core data structures used throughout the burn
executor, including encode options, plans, pass outcomes and results.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

from burner.executor.profiles import Profile

logger = logging.getLogger(__name__)

# Number of trailing output lines kept per pass for failure diagnostics
OUTCOME_TAIL_LINES = 5

# Statistics files written by x264 during two-pass encoding
PASS_LOG_NAMES = ("ffmpeg2pass-0.log", "ffmpeg2pass-0.log.mbtree")


@dataclass(frozen=True)
class Option:
    """A single ffmpeg option and the passes it applies to."""

    flag: str
    value: str | None = None
    first_pass: bool = True
    second_pass: bool = True

    def to_args(self) -> list[str]:
        """Render as command line arguments."""
        if self.value is None:
            return [self.flag]
        return [self.flag, self.value]


@dataclass
class TranscodePlan:
    """Plan for the two passes of a single file."""

    profile: Profile
    input_path: Path
    output_dir: Path
    output_name: str
    bitrate: str
    options: list[Option] = field(default_factory=list)

    @property
    def output_path(self) -> Path:
        """Absolute path of the second pass output."""
        return self.output_dir / self.output_name


@dataclass
class PassLogFiles:
    """Pass statistics written into the encode working directory.

    x264 creates: ffmpeg2pass-0.log, ffmpeg2pass-0.log.mbtree
    """

    directory: Path

    @property
    def paths(self) -> list[Path]:
        return [self.directory / name for name in PASS_LOG_NAMES]

    def cleanup(self) -> None:
        """Remove pass log files after encoding."""
        for log_file in self.paths:
            try:
                log_file.unlink(missing_ok=True)
                logger.debug("Cleaned up pass log file: %s", log_file)
            except OSError as e:
                logger.warning("Could not clean up pass log file %s: %s", log_file, e)


@dataclass
class ProcessOutcome:
    """Outcome of one supervised ffmpeg pass."""

    exited_normally: bool = False
    was_killed: bool = False
    returncode: int | None = None
    last_lines: deque[str] = field(
        default_factory=lambda: deque(maxlen=OUTCOME_TAIL_LINES)
    )
    error: Exception | None = None

    @property
    def success(self) -> bool:
        """True if the process exited on its own with status 0."""
        return (
            self.error is None
            and not self.was_killed
            and self.exited_normally
            and self.returncode == 0
        )


@dataclass
class TranscodeResult:
    """Result of burning a single file."""

    input_path: Path
    success: bool
    output_path: Path | None = None
    bitrate: str | None = None
    error_message: str | None = None


@dataclass
class BurnSummary:
    """Totals for a whole run."""

    results: list[TranscodeResult] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.processed - self.succeeded

    @property
    def failures(self) -> list[tuple[Path, str]]:
        return [
            (r.input_path, r.error_message or "unknown error")
            for r in self.results
            if not r.success
        ]
