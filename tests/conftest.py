"""Shared test fixtures for burner."""

import io
import logging
import stat
import sys
import textwrap
from pathlib import Path

import pytest

from burner.config import BurnerConfig


class RecordingConsole:
    """Console sink collecting every chunk written to it."""

    def __init__(self) -> None:
        self.chunks: list[str] = []

    def write(self, text: str) -> int:
        self.chunks.append(text)
        return len(text)

    def flush(self) -> None:
        pass

    @property
    def text(self) -> str:
        return "".join(self.chunks)


class RecordingControl:
    """ProcessControl double recording kills and emitted text."""

    def __init__(self) -> None:
        self.signals = 0
        self.emitted: list[str] = []

    def signal(self) -> None:
        self.signals += 1

    def emit(self, text: str) -> None:
        self.emitted.append(text)


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root logger state between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def console() -> RecordingConsole:
    """Return a console that records everything written to it."""
    return RecordingConsole()


@pytest.fixture
def control() -> RecordingControl:
    """Return a process control double."""
    return RecordingControl()


@pytest.fixture
def byte_stream():
    """Factory for in-memory binary streams."""

    def _make(data: bytes) -> io.BytesIO:
        return io.BytesIO(data)

    return _make


@pytest.fixture
def work_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Create input and output directories."""
    input_dir = tmp_path / "in"
    output_dir = tmp_path / "out"
    input_dir.mkdir()
    output_dir.mkdir()
    return input_dir, output_dir


@pytest.fixture
def burner_config(work_dirs: tuple[Path, Path]) -> BurnerConfig:
    """Configuration pointing at temporary work directories."""
    input_dir, output_dir = work_dirs
    return BurnerConfig(input_dir=input_dir, output_dir=output_dir)


@pytest.fixture
def write_script():
    """Factory writing executable Python scripts run by this interpreter."""

    def _write(path: Path, body: str) -> Path:
        path.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _write
