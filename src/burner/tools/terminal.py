"""Console writers for in-place progress output.

ffmpeg style progress lines end with a carriage return so the terminal
overwrites them on the next write. These writers keep such lines from
swallowing the log lines that follow them.
"""

from __future__ import annotations

import threading
from typing import Protocol, TextIO


class TextSink(Protocol):
    """Anything accepting text chunks."""

    def write(self, text: str) -> int: ...


class TerminalRedrawWriter:
    """Reconciles carriage-return progress lines with regular log lines.

    A chunk whose last ``\\r`` comes after its last ``\\n`` is a progress
    update and is written unchanged. The next regular chunk is prefixed with
    a newline so it starts below the progress line. Regular chunks always
    end with a newline.

    Not thread-safe; wrap in SynchronizedWriter when shared.
    """

    def __init__(self, stream: TextIO | TextSink) -> None:
        self._stream = stream
        self._progress_pending = False

    @property
    def progress_pending(self) -> bool:
        """True if the last chunk written was a progress update."""
        return self._progress_pending

    def write(self, text: str) -> int:
        if text.rfind("\r") > text.rfind("\n"):
            self._progress_pending = True
            return self._write(text)
        if self._progress_pending:
            self._progress_pending = False
            text = "\n" + text
        if not text.endswith("\n"):
            text += "\n"
        return self._write(text)

    def _write(self, text: str) -> int:
        written = self._stream.write(text)
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()
        return written

    def flush(self) -> None:
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()


class SynchronizedWriter:
    """Serializes writes from several threads onto one sink."""

    def __init__(self, sink: TextSink) -> None:
        self._sink = sink
        self._lock = threading.Lock()

    def write(self, text: str) -> int:
        with self._lock:
            return self._sink.write(text)

    def flush(self) -> None:
        with self._lock:
            flush = getattr(self._sink, "flush", None)
            if flush is not None:
                flush()
