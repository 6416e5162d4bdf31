"""Locating ffmpeg and ffprobe and asking them for their version."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess  # nosec B404 - version probing runs the tool itself
from pathlib import Path

from burner.core.subprocess_utils import run_command
from burner.exceptions import SetupError

logger = logging.getLogger(__name__)

VERSION_TIMEOUT = 10

# First line of -version output: "ffmpeg version 6.1.1-3ubuntu5 Copyright ..."
_VERSION_RE = re.compile(r"version\s+(\S+)")


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Resolve an executable, preferring an explicitly configured path.

    A configured path that is not a regular file is reported and the
    lookup continues on PATH.
    """
    if configured_path is not None:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "%s path %s is not a file, searching PATH", name, configured_path
        )

    located = shutil.which(name)
    return Path(located) if located else None


def require_tool(name: str, configured_path: Path | None = None) -> Path:
    """Like find_tool, but a missing tool is a SetupError."""
    located = find_tool(name, configured_path)
    if located is not None:
        return located
    raise SetupError(
        f"{name} not found. Install it, or point BURNER_{name.upper()}_PATH "
        "or the [tools] section of ~/.burner/config.toml at it"
    )


def get_tool_version(path: Path) -> str | None:
    """Return the version token of ``<tool> -version``, or None."""
    try:
        stdout, _, rc = run_command([path, "-version"], timeout=VERSION_TIMEOUT)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Could not query %s for its version: %s", path, e)
        return None
    found = _VERSION_RE.search(stdout) if rc == 0 else None
    return found.group(1) if found else None
