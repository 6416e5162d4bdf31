"""Filter graph construction for burn-in encodes.

This module renders the ``-filter_complex`` value used by every profile:
an optional subtitle burn-in followed by an optional scale filter.
"""

from __future__ import annotations

from dataclasses import dataclass

# For YUV 4:2:0 outputs the width must be divisible by 2, -2 keeps the
# aspect ratio while honoring that constraint.
AUTO_WIDTH = -2


def escape_filter_path(path: str) -> str:
    """Escape a file path for use inside a filter graph argument.

    Backslashes are escaped before colons, otherwise the backslash added
    in front of each colon would be doubled.

    Args:
        path: Raw file path.

    Returns:
        Path safe to embed in a quoted filter argument.
    """
    return path.replace("\\", "\\\\").replace(":", "\\:")


@dataclass(frozen=True)
class FilterSpec:
    """Structural description of the video filter graph."""

    subtitle_path: str | None = None
    """Source file the subtitles are rendered from (None = no burn-in)."""

    width: int = 0
    """Target width, negative values keep the aspect ratio."""

    height: int = 0
    """Target height."""

    upscaling_allowed: bool = False
    """When False the output is never enlarged beyond the source."""

    def render(self) -> str:
        """Render the filter graph string.

        Returns:
            Comma separated filter expression, empty if no filter applies.
        """
        filters: list[str] = []
        if self.subtitle_path:
            filters.append(f"subtitles='{escape_filter_path(self.subtitle_path)}'")
        if self.width != 0 or self.height != 0:
            if self.upscaling_allowed:
                filters.append(f"scale={self.width}:{self.height}")
            else:
                filters.append(
                    f"scale='min({self.width},iw)':'min({self.height},ih)'"
                )
        return ", ".join(filters)

    def without_subtitles(self) -> FilterSpec:
        """Return a copy of this spec with subtitle burn-in disabled."""
        return FilterSpec(
            subtitle_path=None,
            width=self.width,
            height=self.height,
            upscaling_allowed=self.upscaling_allowed,
        )

    def __str__(self) -> str:
        return self.render()
