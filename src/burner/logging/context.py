"""Per-file logging context.

While a file is being burned its position in the run lives in a context
variable, so every record logged meanwhile (including from ffmpeg drain
threads started with a copied context) can be tagged ``[NNN/TTT]``.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterator


class FilePosition(NamedTuple):
    index: int | None
    total: int | None
    path: str | None


_NO_FILE = FilePosition(None, None, None)

_position: contextvars.ContextVar[FilePosition] = contextvars.ContextVar(
    "burner_file_position", default=_NO_FILE
)


def format_file_tag(index: int, total: int) -> str:
    """Render a run position as [NNN/TTT]."""
    return f"[{index:03d}/{total:03d}]"


def _position_of(
    index: int, total: int, file_path: Path | str | None
) -> FilePosition:
    return FilePosition(index, total, None if file_path is None else str(file_path))


def set_file_context(
    index: int, total: int, file_path: Path | str | None = None
) -> None:
    _position.set(_position_of(index, total, file_path))


def clear_file_context() -> None:
    _position.set(_NO_FILE)


def get_file_context() -> FilePosition:
    """Return (index, total, file_path) of the file being burned.

    All three are None outside of a file.
    """
    return _position.get()


@contextmanager
def file_context(
    index: int, total: int, file_path: Path | str | None = None
) -> Iterator[None]:
    """Tag log records with a file position for the duration of the block.

    The enclosing position, if any, is restored on exit.

    Example:
        with file_context(3, 12, "/in/episode.mkv"):
            logger.info("bitrate was modified to 800k")  # [003/012] ...
    """
    token = _position.set(_position_of(index, total, file_path))
    try:
        yield
    finally:
        _position.reset(token)


class FileContextFilter(logging.Filter):
    """Copy the current file position onto each record.

    Sets ``file_index``, ``file_total`` and ``file_path`` for the JSON
    formatter and ``file_tag`` ("[003/012] " or "") for text formats.
    Records are never dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        index, total, path = _position.get()
        record.file_index = index
        record.file_total = total
        record.file_path = path
        record.file_tag = (
            f"{format_file_tag(index, total)} " if index is not None else ""
        )
        return True
