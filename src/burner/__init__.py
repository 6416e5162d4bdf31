"""Burn subtitles into videos with two-pass ffmpeg encodes."""

__version__ = "0.1.0"
