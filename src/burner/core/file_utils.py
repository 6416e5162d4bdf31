"""Filesystem helpers for input discovery and source linking."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# Extensions picked up from the input directory
INPUT_EXTENSIONS = (".mkv", ".mp4", ".avs")

# Base name of the hard link created next to the outputs
LINK_STEM = "tmp"


def list_files_with_ext(
    directory: Path, extensions: Iterable[str] = INPUT_EXTENSIONS
) -> list[Path]:
    """Recursively list files with one of the given extensions.

    Matching is case-insensitive.

    Args:
        directory: Root directory to walk.
        extensions: Extensions including the leading dot.

    Returns:
        Matching files, sorted by path.
    """
    wanted = {ext.lower() for ext in extensions}
    return sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lower() in wanted
    )


def link_source(source: Path, output_dir: Path) -> Path:
    """Hard link a source file into the output directory as tmp<ext>.

    A stale link left by an interrupted run is removed first.

    Args:
        source: File to link.
        output_dir: Directory receiving the link.

    Returns:
        Path of the created link.

    Raises:
        OSError: If the link cannot be created.
    """
    link = output_dir / f"{LINK_STEM}{source.suffix}"
    if link.exists() or link.is_symlink():
        logger.debug("Removing stale link %s", link)
        link.unlink()
    os.link(source, link)
    return link


def remove_quietly(path: Path) -> None:
    """Remove a file, logging instead of raising on failure."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove %s: %s", path, e)
