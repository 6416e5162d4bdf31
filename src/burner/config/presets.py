"""Named video presets.

Presets store reusable video settings (for example one per release group
or target device) in ~/.burner/presets/<name>.yaml and are applied with
the --preset flag. Example preset:

    description: 1080p for the living room TV
    profile: mp4
    video:
      height: 1080
      bitrate: 4M
"""

from __future__ import annotations

import dataclasses
import logging
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from burner.config.models import VideoConfig
from burner.exceptions import PresetError
from burner.executor.bitrate import parse_bitrate
from burner.executor.profiles import PROFILE_TOKENS, Profile

logger = logging.getLogger(__name__)

PRESET_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


class PresetNotFoundError(PresetError):
    """Preset does not exist."""


class VideoSettingsModel(BaseModel):
    """Pydantic model for the video section of a preset."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    height: int | None = Field(default=None, gt=0)
    bitrate: str | None = None
    keep_bitrate: bool | None = None
    upscaling: bool | None = None

    @field_validator("bitrate")
    @classmethod
    def validate_bitrate(cls, v: str | None) -> str | None:
        """Validate bitrate format."""
        if v is not None and parse_bitrate(v) <= 0:
            raise ValueError(
                f"Invalid bitrate '{v}'. "
                "Must be a number followed by M or k (e.g., '2M', '1371k')."
            )
        return v


class PresetModel(BaseModel):
    """Pydantic model for a preset file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    description: str | None = None
    profile: str | None = None
    ignore_font_error: bool | None = None
    video: VideoSettingsModel = Field(default_factory=VideoSettingsModel)

    @field_validator("profile")
    @classmethod
    def validate_profile(cls, v: str | None) -> str | None:
        """Validate the profile token."""
        if v is not None and Profile.from_token(v) is None:
            raise ValueError(
                f"Invalid profile '{v}'. Must be one of: {', '.join(PROFILE_TOKENS)}"
            )
        return v


def get_presets_directory(config_dir: Path | None = None) -> Path:
    """Get the presets directory path.

    Returns:
        Path to ~/.burner/presets/ unless another config directory is given.
    """
    base = config_dir if config_dir is not None else Path.home() / ".burner"
    return base / "presets"


def list_presets(presets_dir: Path | None = None) -> list[str]:
    """List available preset names, sorted."""
    presets_dir = presets_dir or get_presets_directory()
    if not presets_dir.exists():
        return []
    return sorted(
        p.stem
        for p in presets_dir.glob("*.yaml")
        if p.is_file() and not p.name.startswith(".")
    )


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "preset"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def load_preset(name: str, presets_dir: Path | None = None) -> PresetModel:
    """Load a preset by name.

    Args:
        name: Preset name (without .yaml extension).
        presets_dir: Directory holding presets, defaults to ~/.burner/presets.

    Returns:
        Validated preset.

    Raises:
        PresetNotFoundError: If the preset doesn't exist.
        PresetError: If the preset is invalid.
    """
    if not PRESET_NAME_PATTERN.match(name):
        raise PresetError(f"Preset name must be alphanumeric (with - or _): {name}")

    preset_path = (presets_dir or get_presets_directory()) / f"{name}.yaml"
    if not preset_path.exists():
        raise PresetNotFoundError(f"Preset not found: {name}")

    try:
        with open(preset_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise PresetError(f"Invalid YAML in preset {name}: {e}") from e
    except OSError as e:
        raise PresetError(f"Could not read preset {name}: {e}") from e

    if not isinstance(data, dict):
        raise PresetError(f"Preset {name} must be a YAML mapping")

    try:
        preset = PresetModel.model_validate(data)
    except ValidationError as e:
        raise PresetError(
            f"Invalid preset {name}: {_format_validation_error(e)}"
        ) from e

    logger.debug("Loaded preset %s from %s", name, preset_path)
    return preset


def apply_preset(video: VideoConfig, preset: PresetModel) -> VideoConfig:
    """Overlay the video settings a preset defines onto a configuration."""
    overrides = {
        key: value
        for key, value in preset.video.model_dump().items()
        if value is not None
    }
    return dataclasses.replace(video, **overrides)
