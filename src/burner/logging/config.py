"""Root logger setup.

Log records share the console with ffmpeg's output and progress lines, so
the console handler writes to whatever sink the CLI hands in and uses a
short format. The optional log file keeps timestamps and logger names.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from burner.logging.context import FileContextFilter
from burner.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from burner.config.models import LoggingConfig
    from burner.tools.terminal import TextSink

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

TEXT_FORMAT = "%(asctime)s - %(file_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

CONSOLE_FORMAT = "%(file_tag)s%(message)s"


def _open_log_file(config: LoggingConfig) -> RotatingFileHandler | None:
    """Open the rotating log file, or return None if it is unavailable."""
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        # Logging is not set up yet, so report on stderr directly
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def configure_logging(
    config: LoggingConfig, stream: TextIO | TextSink | None = None
) -> None:
    """Install the root handlers described by a LoggingConfig.

    Existing root handlers are removed. Records go to the log file when one
    is configured and can be opened, and to the console when no file is
    used or ``include_stderr`` is set.

    Args:
        config: Logging configuration.
        stream: Console sink, defaults to sys.stderr. The CLI passes the
            shared console so log lines do not break progress lines.
    """
    level = _LEVELS.get(config.level.casefold(), logging.INFO)
    use_json = config.format.casefold() == "json"

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handlers: list[logging.Handler] = []
    file_handler = _open_log_file(config) if config.file else None
    if file_handler is not None:
        file_handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)
        )
        handlers.append(file_handler)

    if file_handler is None or config.include_stderr:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setFormatter(
            JSONFormatter() if use_json else logging.Formatter(CONSOLE_FORMAT)
        )
        handlers.append(console_handler)

    context_filter = FileContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(context_filter)
        root.addHandler(handler)
