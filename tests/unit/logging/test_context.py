"""Unit tests for logging context module."""

import contextvars
import logging
import threading
from pathlib import Path

from burner.logging.context import (
    FileContextFilter,
    clear_file_context,
    file_context,
    format_file_tag,
    get_file_context,
    set_file_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="burner",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="bitrate was modified to 800k",
        args=(),
        exc_info=None,
    )


class TestFormatFileTag:
    """Tests for format_file_tag."""

    def test_zero_padded(self) -> None:
        assert format_file_tag(3, 12) == "[003/012]"

    def test_wide_values(self) -> None:
        assert format_file_tag(1000, 1200) == "[1000/1200]"


class TestSetAndGetFileContext:
    """Tests for set_file_context and get_file_context functions."""

    def test_set_and_get_full_context(self) -> None:
        """Test setting and getting all context values."""
        set_file_context(3, 12, "/in/episode.mkv")

        assert get_file_context() == (3, 12, "/in/episode.mkv")

        clear_file_context()

    def test_set_with_path_object(self) -> None:
        set_file_context(1, 1, Path("/in/episode.mkv"))

        assert get_file_context()[2] == "/in/episode.mkv"

        clear_file_context()

    def test_clear_context(self) -> None:
        set_file_context(1, 2)
        clear_file_context()

        assert get_file_context() == (None, None, None)


class TestFileContextManager:
    """Tests for file_context context manager."""

    def test_sets_and_restores(self) -> None:
        with file_context(2, 5, "/in/b.mkv"):
            assert get_file_context() == (2, 5, "/in/b.mkv")
        assert get_file_context() == (None, None, None)

    def test_nested_restores_outer(self) -> None:
        with file_context(1, 2, "/in/a.mkv"):
            with file_context(2, 2, "/in/b.mkv"):
                assert get_file_context()[0] == 2
            assert get_file_context() == (1, 2, "/in/a.mkv")

    def test_restores_on_exception(self) -> None:
        try:
            with file_context(1, 1):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert get_file_context() == (None, None, None)

    def test_copied_context_reaches_threads(self) -> None:
        """Threads started through a copied context see the file position."""
        seen = []

        with file_context(1, 1):
            thread = threading.Thread(
                target=contextvars.copy_context().run,
                args=(lambda: seen.append(get_file_context()),),
            )
            thread.start()
            thread.join()

        assert seen == [(1, 1, None)]


class TestFileContextFilter:
    """Tests for FileContextFilter."""

    def test_adds_tag_inside_context(self) -> None:
        record = _record()

        with file_context(3, 12, "/in/episode.mkv"):
            assert FileContextFilter().filter(record) is True

        assert record.file_tag == "[003/012] "
        assert record.file_index == 3
        assert record.file_total == 12
        assert record.file_path == "/in/episode.mkv"

    def test_empty_tag_outside_context(self) -> None:
        record = _record()

        FileContextFilter().filter(record)

        assert record.file_tag == ""
        assert record.file_index is None

    def test_tag_renders_in_console_format(self) -> None:
        record = _record()
        formatter = logging.Formatter("%(file_tag)s%(message)s")

        with file_context(1, 3):
            FileContextFilter().filter(record)

        assert formatter.format(record) == "[001/003] bitrate was modified to 800k"
