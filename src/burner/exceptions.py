"""Custom exceptions for burner.

Setup errors stop a whole run; every other error aborts only the file
being processed.
"""


class BurnerError(Exception):
    """Base exception for burner errors.

    All burner exceptions inherit from this class, allowing callers
    to catch all of them with a single except clause if desired.
    """


class SetupError(BurnerError):
    """Raised when the run cannot start.

    Missing input or output directories and unresolvable executables
    are setup errors.
    """


class ConfigError(SetupError):
    """Raised when configuration values are invalid."""


class PresetError(ConfigError):
    """Raised when a video preset cannot be loaded or validated."""


class ProbeError(BurnerError):
    """Raised when the duration of a file cannot be determined."""


class PassFailedError(BurnerError):
    """Raised when an ffmpeg pass did not complete successfully.

    Attributes:
        pass_number: The failed pass, 1 or 2.
        returncode: Exit status of the process, None if it never ran.
    """

    def __init__(
        self, pass_number: int, returncode: int | None, message: str | None = None
    ) -> None:
        """Initialize the exception.

        Args:
            pass_number: The failed pass, 1 or 2.
            returncode: Exit status of the process, None if it never ran.
            message: Optional custom message.
        """
        self.pass_number = pass_number
        self.returncode = returncode
        default_msg = f"pass {pass_number} failed"
        if returncode is not None:
            default_msg += f" with exit code {returncode}"
        super().__init__(message or default_msg)
