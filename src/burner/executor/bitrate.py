"""Bitrate notation and adaptive bitrate advisory.

Bitrates are exchanged with ffmpeg in its short notation ("1371k", "1M")
and handled internally as integer kilobits.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Approximate audio track bitrate (kbit/s) added on top of the video bitrate
AUDIO_OVERHEAD_KILOBIT = 128

# Multipliers for the recognized suffixes
_SUFFIX_MULTIPLIERS = {
    "k": 1,
    "M": 1024,
}


def parse_bitrate(text: str) -> int:
    """Convert a bitrate string to kilobits.

    Only the ``k`` and ``M`` suffixes are recognized. Any other suffix
    yields 0, which callers treat as "unchanged".

    Args:
        text: Bitrate such as "1371k" or "2M".

    Returns:
        Bitrate in kilobits, or 0 for an unrecognized suffix.

    Raises:
        ValueError: If the suffix is recognized but the number is not an integer.
    """
    if not text:
        return 0
    multiplier = _SUFFIX_MULTIPLIERS.get(text[-1])
    if multiplier is None:
        return 0
    try:
        value = int(text[:-1])
    except ValueError as e:
        raise ValueError(f"Invalid bitrate value: {text!r}") from e
    return value * multiplier


def format_bitrate(kilobit: int) -> str:
    """Render a kilobit value in ffmpeg notation."""
    return f"{kilobit}k"


def compute_expected_encoded_bytes(
    duration_seconds: float, target_kilobit: int
) -> float:
    """Estimate the encoded file size for a duration and video bitrate.

    Args:
        duration_seconds: Media duration in seconds.
        target_kilobit: Requested video bitrate in kilobits.

    Returns:
        Expected output size in bytes, audio overhead included.
    """
    return (target_kilobit + AUDIO_OVERHEAD_KILOBIT) * duration_seconds / 8 * 1024


def advise_bitrate(
    duration_seconds: float,
    target_kilobit: int,
    source_bytes: int,
) -> int:
    """Lower the target bitrate when the source cannot sustain it.

    When the source file is smaller than what the target bitrate would
    produce, the bitrate implied by the source itself (minus the audio
    overhead) is used instead.

    Args:
        duration_seconds: Source duration in seconds, must be positive.
        target_kilobit: Requested video bitrate in kilobits.
        source_bytes: Size of the source file in bytes.

    Returns:
        Effective video bitrate in kilobits.
    """
    expected = compute_expected_encoded_bytes(duration_seconds, target_kilobit)
    if source_bytes >= expected:
        return target_kilobit
    implied = source_bytes * 8 / 1024 / duration_seconds
    advised = int(implied - AUDIO_OVERHEAD_KILOBIT)
    logger.debug(
        "Source implies %.1f kbit/s, expected %.0f bytes but found %d",
        implied,
        expected,
        source_bytes,
    )
    return advised
