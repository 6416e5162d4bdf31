"""Typed access to BURNER_* environment variables.

EnvReader reads from os.environ unless a mapping is injected, which keeps
configuration loading testable without touching the process environment.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

TRUTHY_VALUES = frozenset({"true", "1", "yes", "on"})


class EnvReader:
    """Environment variable reader with type conversion.

    Every getter returns its default when the variable is unset. Values
    that are set but unusable are logged and replaced by the default
    rather than failing the run.

    Example:
        reader = EnvReader(env={"BURNER_VIDEO_HEIGHT": "1080"})
        reader.get_int("BURNER_VIDEO_HEIGHT", 720)  # 1080
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def get_str(self, var: str, default: str | None = None) -> str | None:
        return self._env.get(var, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        raw = self._env.get(var)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not an integer", var, raw)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Read a flag; only true, 1, yes and on (any case) count as set."""
        raw = self._env.get(var)
        if raw is None:
            return default
        return raw.casefold() in TRUTHY_VALUES

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Read a path, expanding ``~``.

        Args:
            var: Environment variable name.
            must_exist: Ignore, with a warning, paths that do not exist.
                Directories burner creates itself pass False.
            default: Value used when unset or ignored.
        """
        raw = self._env.get(var)
        if raw is None:
            return default
        path = Path(raw).expanduser()
        if must_exist and not path.exists():
            logger.warning("Ignoring %s: non-existent path %s", var, raw)
            return default
        return path
