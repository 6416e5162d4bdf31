"""Exit codes of the burner commands.

Codes are grouped in ranges so scripts can test for a whole category:

    0      success
    1-9    general and usage errors
    10-19  configuration and preset errors
    20-29  missing directories
    30-39  missing tools
    40-49  files that could not be burned
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit status of a burner command."""

    SUCCESS = 0

    GENERAL_ERROR = 1
    USAGE_ERROR = 2
    """Invalid options, reported by click itself."""
    INTERRUPTED = 3
    """The run was stopped with Ctrl+C."""

    CONFIG_ERROR = 11
    PRESET_NOT_FOUND = 12

    TARGET_NOT_FOUND = 20
    """Input or output directory is missing, see ``burner prepare``."""

    TOOL_NOT_AVAILABLE = 30
    """ffmpeg could not be found."""

    OPERATION_FAILED = 40
    """At least one file failed to burn."""
