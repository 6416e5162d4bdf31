"""Command line overrides for the logging section of the configuration."""

from __future__ import annotations

import dataclasses
from pathlib import Path

from burner.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Layer the --log-* options over the configured logging section.

    Options left as None keep the configured value. The base is never
    modified.

    Raises:
        ValueError: If an override is not a valid level or format.
    """
    overrides = {
        "level": level,
        "file": file.expanduser() if file is not None else None,
        "format": format,
        "include_stderr": include_stderr,
    }
    # replace() runs __post_init__ again, validating the overrides
    return dataclasses.replace(
        base, **{key: value for key, value in overrides.items() if value is not None}
    )
