"""Core utilities package.

This package contains helpers with no dependencies on the rest of
burner: input discovery, source linking and subprocess invocation.
"""

from burner.core.file_utils import (
    INPUT_EXTENSIONS,
    link_source,
    list_files_with_ext,
    remove_quietly,
)
from burner.core.subprocess_utils import run_command

__all__ = [
    "INPUT_EXTENSIONS",
    "link_source",
    "list_files_with_ext",
    "remove_quietly",
    "run_command",
]
