"""Burner settings: dataclass models, their loading and named presets.

get_config merges defaults, ~/.burner/config.toml, BURNER_* variables and
CLI overrides, in increasing priority. Named video presets
(~/.burner/presets/*.yaml) are layered on top by the CLI.
"""

from burner.config.env import EnvReader
from burner.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from burner.config.logging_factory import build_logging_config
from burner.config.models import (
    BurnerConfig,
    LoggingConfig,
    ToolPathsConfig,
    VideoConfig,
)
from burner.config.presets import (
    PresetModel,
    PresetNotFoundError,
    apply_preset,
    list_presets,
    load_preset,
)

__all__ = [
    "BurnerConfig",
    "LoggingConfig",
    "ToolPathsConfig",
    "VideoConfig",
    "EnvReader",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "build_logging_config",
    "PresetModel",
    "PresetNotFoundError",
    "apply_preset",
    "list_presets",
    "load_preset",
]
