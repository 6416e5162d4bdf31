"""ffmpeg output handling and external tool detection.

This package turns the raw output streams of a running ffmpeg into
something a user can follow: line tokenizing, diagnostic classification,
progress throttling and terminal redraw handling.
"""

from burner.tools.classifiers import (
    ClassificationResult,
    ClassifierChain,
    build_classifier_chain,
)
from burner.tools.detection import find_tool, get_tool_version, require_tool
from burner.tools.ffmpeg_progress import (
    DEFAULT_PROGRESS_STRIDE,
    FFmpegProgress,
    ProgressReducer,
    parse_progress_line,
)
from burner.tools.line_scanner import LineScanner, scan_lines
from burner.tools.terminal import SynchronizedWriter, TerminalRedrawWriter

__all__ = [
    "DEFAULT_PROGRESS_STRIDE",
    "ClassificationResult",
    "ClassifierChain",
    "FFmpegProgress",
    "LineScanner",
    "ProgressReducer",
    "SynchronizedWriter",
    "TerminalRedrawWriter",
    "build_classifier_chain",
    "find_tool",
    "get_tool_version",
    "parse_progress_line",
    "require_tool",
    "scan_lines",
]
