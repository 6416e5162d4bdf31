"""Duration probing with ffprobe."""

from __future__ import annotations

import json
import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from burner.core.subprocess_utils import run_command
from burner.exceptions import ProbeError

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 60


def build_probe_command(ffprobe_path: Path | str, path: Path) -> list[str | Path]:
    """Command printing the container duration as JSON."""
    return [
        ffprobe_path,
        "-i",
        path,
        "-show_entries",
        "format=duration",
        "-v",
        "quiet",
        "-of",
        "json",
    ]


def parse_duration(output: str) -> float:
    """Extract the duration from ffprobe JSON output.

    Raises:
        ProbeError: If the output is not JSON or carries no duration.
    """
    try:
        data = json.loads(output)
        return float(data["format"]["duration"])
    except json.JSONDecodeError as e:
        raise ProbeError(f"Invalid ffprobe output: {e}") from e
    except (KeyError, TypeError, ValueError) as e:
        raise ProbeError(f"No duration in ffprobe output: {output.strip()!r}") from e


def probe_duration(ffprobe_path: Path | str, path: Path) -> float:
    """Ask ffprobe how many seconds ``path`` lasts.

    Raises:
        ProbeError: If ffprobe cannot run or its output is unusable.
    """
    try:
        stdout, stderr, rc = run_command(
            build_probe_command(ffprobe_path, path), timeout=PROBE_TIMEOUT
        )
    except subprocess.TimeoutExpired as e:
        raise ProbeError(f"ffprobe timed out on {path} after {e.timeout}s") from e
    except OSError as e:
        raise ProbeError(f"Could not run ffprobe for {path}: {e}") from e

    if rc != 0:
        raise ProbeError(f"ffprobe failed for {path}: {stderr.strip() or rc}")

    duration = parse_duration(stdout)
    logger.debug("Probed duration of %s: %.3fs", path.name, duration)
    return duration
