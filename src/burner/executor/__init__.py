"""Two-pass ffmpeg encoding: profiles, command building and supervision."""

from burner.executor.bitrate import (
    advise_bitrate,
    compute_expected_encoded_bytes,
    format_bitrate,
    parse_bitrate,
)
from burner.executor.filters import FilterSpec
from burner.executor.profiles import MENU_ORDER, PROFILE_TOKENS, Profile
from burner.executor.types import (
    BurnSummary,
    Option,
    ProcessOutcome,
    TranscodePlan,
    TranscodeResult,
)

__all__ = [
    "BurnSummary",
    "FilterSpec",
    "MENU_ORDER",
    "Option",
    "PROFILE_TOKENS",
    "ProcessOutcome",
    "Profile",
    "TranscodePlan",
    "TranscodeResult",
    "advise_bitrate",
    "compute_expected_encoded_bytes",
    "format_bitrate",
    "parse_bitrate",
]
