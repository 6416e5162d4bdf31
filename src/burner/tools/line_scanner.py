"""Line tokenizer for ffmpeg output streams.

ffmpeg overwrites its status line in place by ending it with a bare carriage
return. The scanner in this module treats ``\\r`` as an alternate line
terminator so those updates surface as discrete lines without waiting for a
newline that may never come.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import BinaryIO

DEFAULT_CHUNK_SIZE = 4096


def _drop_cr(data: bytes) -> bytes:
    """Drop a single trailing carriage return."""
    if data.endswith(b"\r"):
        return data[:-1]
    return data


def scan_lines(data: bytes, at_eof: bool) -> tuple[int, bytes | None]:
    """Split function locating the next line in a buffer.

    Precedence, highest first:

    1. a ``\\n`` terminated line, with one preceding ``\\r`` dropped
    2. at end of input, the remaining unterminated data
    3. a line terminated by a bare ``\\r``
    4. request more data

    A ``\\r`` that is the last buffered byte requests more data as well,
    since the next byte may be the ``\\n`` completing a ``\\r\\n`` pair.

    Args:
        data: Buffered, not yet consumed bytes.
        at_eof: True when no more input will arrive.

    Returns:
        Tuple of (advance, token). ``advance`` is the number of bytes
        consumed; a None token with zero advance means more data is needed.
    """
    if at_eof and not data:
        return 0, None
    newline = data.find(b"\n")
    if newline >= 0:
        return newline + 1, _drop_cr(data[:newline])
    if at_eof:
        return len(data), _drop_cr(data)
    carriage = data.find(b"\r")
    if 0 <= carriage < len(data) - 1:
        return carriage + 1, data[:carriage]
    return 0, None


class LineScanner:
    """Lazily yields text lines read from a binary stream.

    Each scanner owns its buffer and may be iterated only once.

    Example:
        for line in LineScanner(process.stderr):
            handle(line)
    """

    def __init__(
        self,
        stream: BinaryIO,
        encoding: str = "utf-8",
        errors: str = "replace",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._stream = stream
        self._encoding = encoding
        self._errors = errors
        self._chunk_size = chunk_size
        self._buffer = b""
        self._at_eof = False

    def _read_chunk(self) -> bytes:
        # read1 returns whatever is available instead of waiting for a full chunk
        read1 = getattr(self._stream, "read1", None)
        if read1 is not None:
            return read1(self._chunk_size)
        return self._stream.read(self._chunk_size)

    def __iter__(self) -> Iterator[str]:
        while True:
            advance, token = scan_lines(self._buffer, self._at_eof)
            if token is not None:
                self._buffer = self._buffer[advance:]
                yield token.decode(self._encoding, self._errors)
                continue
            if self._at_eof:
                return
            chunk = self._read_chunk()
            if chunk:
                self._buffer += chunk
            else:
                self._at_eof = True
