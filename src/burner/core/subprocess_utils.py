"""Short-lived tool invocations.

Used for ffprobe queries and ``-version`` checks, which finish quickly and
whose whole output is wanted at once. ffmpeg encodes stream their output
and are supervised by burner.executor.ffmpeg_base instead.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120


def run_command(
    args: list[str | Path],
    timeout: int = DEFAULT_TIMEOUT,
    errors: str = "replace",
    **kwargs: Any,
) -> tuple[str, str, int]:
    """Run a command to completion and capture its text output.

    Non-zero exit codes are returned, not raised.

    Args:
        args: Executable followed by its arguments, Paths allowed.
        timeout: Seconds before the process is killed.
        errors: Decoding error handler for the captured output.
        **kwargs: Passed through to subprocess.run.

    Returns:
        Tuple of (stdout, stderr, returncode).

    Raises:
        subprocess.TimeoutExpired: If the command ran longer than timeout.
        OSError: If the executable cannot be started.
    """
    argv = [str(arg) for arg in args]
    tool = Path(argv[0]).name if argv else "unknown"
    logger.debug("Executing command: %s", " ".join(argv))

    started = time.monotonic()
    try:
        completed = subprocess.run(  # nosec B603 - argv is built by burner
            argv,
            capture_output=True,
            text=True,
            errors=errors,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        logger.warning("%s timed out after %ds", tool, timeout)
        raise

    logger.debug(
        "%s exited with code %d after %.3fs",
        tool,
        completed.returncode,
        time.monotonic() - started,
    )
    return completed.stdout or "", completed.stderr or "", completed.returncode
