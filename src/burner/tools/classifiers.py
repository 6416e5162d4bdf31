"""Classification of ffmpeg diagnostic output.

Lines read from ffmpeg's stderr pass through an ordered chain of
classifiers. A classifier either recognizes a known-fatal diagnostic, in
which case it kills the process and reports a concise message, or lets the
line through to the next classifier. A printer terminates the chain.

Detected conditions:
- libass could not find a glyph for a character in any font
- libass silently replaced a requested font with a system fallback
- ffmpeg refused to overwrite an existing output and is waiting for input
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Sequence
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)

MESSAGE_PREFIX = "burner: "


class ClassificationResult(Enum):
    """Outcome of classifying a single line."""

    SUPPRESSED = "suppressed"
    """Line was fully handled, the chain stops."""

    PASS = "pass"
    """Line is forwarded unchanged to the next classifier."""


class ProcessControl(Protocol):
    """Capabilities a classifier has over the owning process."""

    def signal(self) -> None:
        """Kill the owning process."""
        ...

    def emit(self, text: str) -> None:
        """Write text to the user-facing sink."""
        ...


class LineClassifier(Protocol):
    """A single step of the classification chain."""

    def handle(self, control: ProcessControl, line: str) -> ClassificationResult:
        """Classify a line, acting on the process if needed."""
        ...


# All three glyph errors of libass share this prefix.
# https://github.com/libass/libass/blob/81e99a73d16873a782c99d068db99485043fcba4/libass/ass_font.c#L473-L499
GLYPH_NOT_FOUND_PATTERN = re.compile(
    r"^\[Parsed_subtitles_\d+ @ \w+\] Glyph 0x([0-9A-Fa-f]+) not found"
)

_FONTSELECT_PREFIX = (
    r"\[Parsed_subtitles_\d+ @ \w+\] fontselect: \((.*?), \d+, \d+\) -> .*?, -?\d+, "
)

# libass falls back to one of these families when no default font is set:
# Arial on Windows, DejaVuSans on Linux, Helvetica on macOS.
FONT_FALLBACK_PATTERNS: dict[str, re.Pattern[str]] = {
    "Arial": re.compile(
        _FONTSELECT_PREFIX + r"(?:ArialMT|Arial-BoldMT|Arial-ItalicMT)$"
    ),
    "DejaVuSans": re.compile(_FONTSELECT_PREFIX + r"(?:DejaVuSans)$"),
    "Helvetica": re.compile(_FONTSELECT_PREFIX + r"(?:Helvetica)$"),
}

NOT_OVERWRITING_SUFFIX = "Not overwriting - exiting"

# A period followed by whitespace or the end of the line
_SENTENCE_END = re.compile(r"\.(?=\s|$)")


def _render_code_point(code_point: int) -> str:
    # Surrogates and values past the Unicode range have no printable char
    if code_point > sys.maxunicode or 0xD800 <= code_point <= 0xDFFF:
        return f"U+{code_point:04X}"
    return chr(code_point)


class GlyphNotFoundClassifier:
    """Kills the process when libass cannot render a character."""

    def handle(self, control: ProcessControl, line: str) -> ClassificationResult:
        match = GLYPH_NOT_FOUND_PATTERN.match(line)
        if match is None:
            return ClassificationResult.PASS
        control.signal()
        char = _render_code_point(int(match.group(1), 16))
        control.emit(f"{MESSAGE_PREFIX}was not able to find font for `{char}` char")
        return ClassificationResult.SUPPRESSED


class FontReplacedClassifier:
    """Kills the process when a requested font was replaced by a fallback.

    A requested family that already starts with the fallback name (for
    example "Arial" resolving to ArialMT) is not a replacement.
    """

    def handle(self, control: ProcessControl, line: str) -> ClassificationResult:
        for family, pattern in FONT_FALLBACK_PATTERNS.items():
            match = pattern.search(line)
            if match is None:
                continue
            requested = match.group(1)
            if requested.startswith(family):
                continue
            control.signal()
            control.emit(f"{MESSAGE_PREFIX}missing `{requested}` font")
            return ClassificationResult.SUPPRESSED
        return ClassificationResult.PASS


class NotOverwritingClassifier:
    """Kills the process when ffmpeg refuses to overwrite its output."""

    def handle(self, control: ProcessControl, line: str) -> ClassificationResult:
        if not line.endswith(NOT_OVERWRITING_SUFFIX):
            return ClassificationResult.PASS
        match = _SENTENCE_END.search(line)
        reason = line[: match.end()] if match else line
        control.signal()
        control.emit(f"{MESSAGE_PREFIX}{reason}")
        return ClassificationResult.SUPPRESSED


class PrintLine:
    """Forwards every line verbatim, terminating the chain."""

    def handle(self, control: ProcessControl, line: str) -> ClassificationResult:
        control.emit(line)
        return ClassificationResult.SUPPRESSED


class DiscardLine:
    """Drops every line, terminating the chain (quiet mode)."""

    def handle(self, control: ProcessControl, line: str) -> ClassificationResult:
        return ClassificationResult.SUPPRESSED


class ClassifierChain:
    """Ordered classifiers evaluated front to back with early stop."""

    def __init__(self, classifiers: Sequence[LineClassifier]) -> None:
        self._classifiers = tuple(classifiers)

    @property
    def classifiers(self) -> tuple[LineClassifier, ...]:
        return self._classifiers

    def handle(self, control: ProcessControl, line: str) -> ClassificationResult:
        """Run the line through the chain.

        Returns:
            SUPPRESSED if a classifier handled the line, PASS if the line
            fell off the end of the chain.
        """
        for classifier in self._classifiers:
            if classifier.handle(control, line) is ClassificationResult.SUPPRESSED:
                return ClassificationResult.SUPPRESSED
        return ClassificationResult.PASS


def build_classifier_chain(
    ignore_font_error: bool = False,
    verbose: bool = True,
) -> ClassifierChain:
    """Build the canonical stderr classification chain.

    The glyph detector runs before the font detector: both match
    similar ``[Parsed_subtitles_N @ addr]`` lines and the glyph message is
    the more precise one.

    Args:
        ignore_font_error: Omit the glyph and font detectors.
        verbose: Print unclassified lines; when False they are discarded.

    Returns:
        Classifier chain, outermost first.
    """
    classifiers: list[LineClassifier] = []
    if not ignore_font_error:
        classifiers.append(GlyphNotFoundClassifier())
        classifiers.append(FontReplacedClassifier())
    classifiers.append(NotOverwritingClassifier())
    classifiers.append(PrintLine() if verbose else DiscardLine())
    return ClassifierChain(classifiers)
