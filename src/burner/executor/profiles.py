"""Output profiles.

A profile selects a fixed preset of encode options and an output layout.
"""

from __future__ import annotations

from enum import Enum


class Profile(Enum):
    """Output profile, valued by its numeric menu index."""

    SAMPLE = 0
    FRAGMENTED_HLS = 1
    MUX = 2
    TRANSCODE = 3

    @property
    def token(self) -> str:
        """Short selection token used on the command line."""
        return _TOKENS[self]

    @property
    def label(self) -> str:
        """User friendly description."""
        return _LABELS[self]

    @classmethod
    def from_token(cls, token: str) -> Profile | None:
        """Look up a profile by its selection token.

        Returns:
            Matching profile, or None if the token is unknown.
        """
        for profile, known in _TOKENS.items():
            if known == token:
                return profile
        return None

    @classmethod
    def from_index(cls, text: str) -> Profile | None:
        """Look up a profile by the menu index typed by a user.

        Only the first character is considered.

        Returns:
            Matching profile, or None for empty, non-numeric or unknown input.
        """
        if not text or not text[0].isdigit():
            return None
        index = int(text[0])
        for profile in MENU_ORDER:
            if profile.value == index:
                return profile
        return None


_TOKENS = {
    Profile.SAMPLE: "smp4",
    Profile.FRAGMENTED_HLS: "fmp4",
    Profile.MUX: "mp4",
    Profile.TRANSCODE: "transcode",
}

_LABELS = {
    Profile.SAMPLE: "Sample MP4 (mux)",
    Profile.FRAGMENTED_HLS: "Fragmented MP4 (HLS)",
    Profile.MUX: "MP4 (mux)",
    Profile.TRANSCODE: "Transcode (softsub)",
}

# Order in which profiles are offered in the interactive menu
MENU_ORDER = (
    Profile.FRAGMENTED_HLS,
    Profile.MUX,
    Profile.TRANSCODE,
    Profile.SAMPLE,
)

PROFILE_TOKENS = tuple(_TOKENS[profile] for profile in MENU_ORDER)
