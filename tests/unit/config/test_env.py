"""Tests for reading BURNER_* variables."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from burner.config.env import EnvReader


class TestEnvReaderGetStr:
    """Tests for get_str."""

    def test_returns_value_when_set(self) -> None:
        reader = EnvReader(env={"MY_VAR": "hello"})
        assert reader.get_str("MY_VAR") == "hello"

    def test_returns_default_when_not_set(self) -> None:
        reader = EnvReader(env={})
        assert reader.get_str("MY_VAR") is None
        assert reader.get_str("MY_VAR", "default") == "default"

    def test_returns_empty_string_when_set_to_empty(self) -> None:
        """An empty value is still a value."""
        reader = EnvReader(env={"MY_VAR": ""})
        assert reader.get_str("MY_VAR", "default") == ""

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall back to os.environ without an injected mapping."""
        monkeypatch.setenv("BURNER_TEST_VAR", "from-environ")
        assert EnvReader().get_str("BURNER_TEST_VAR") == "from-environ"


class TestEnvReaderGetInt:
    """Tests for get_int."""

    def test_parses_integer(self) -> None:
        reader = EnvReader(env={"BURNER_VIDEO_HEIGHT": "1080"})
        assert reader.get_int("BURNER_VIDEO_HEIGHT", 720) == 1080

    def test_returns_default_when_not_set(self) -> None:
        assert EnvReader(env={}).get_int("BURNER_VIDEO_HEIGHT", 720) == 720

    def test_invalid_value_logs_and_returns_default(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should warn and return default for unparseable values."""
        reader = EnvReader(env={"BURNER_VIDEO_HEIGHT": "tall"})

        with caplog.at_level(logging.WARNING):
            assert reader.get_int("BURNER_VIDEO_HEIGHT", 720) == 720

        assert "BURNER_VIDEO_HEIGHT" in caplog.text


class TestEnvReaderGetBool:
    """Tests for get_bool."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "On"])
    def test_truthy_values(self, value: str) -> None:
        assert EnvReader(env={"FLAG": value}).get_bool("FLAG") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", "", "maybe"])
    def test_other_values_are_false(self, value: str) -> None:
        assert EnvReader(env={"FLAG": value}).get_bool("FLAG", True) is False

    def test_returns_default_when_not_set(self) -> None:
        assert EnvReader(env={}).get_bool("FLAG", True) is True
        assert EnvReader(env={}).get_bool("FLAG") is None


class TestEnvReaderGetPath:
    """Tests for get_path."""

    def test_existing_path(self, tmp_path: Path) -> None:
        reader = EnvReader(env={"BURNER_FFMPEG_PATH": str(tmp_path)})
        assert reader.get_path("BURNER_FFMPEG_PATH") == tmp_path

    def test_missing_path_returns_default(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should ignore non-existent paths when they must exist."""
        reader = EnvReader(env={"BURNER_FFMPEG_PATH": str(tmp_path / "nope")})

        assert reader.get_path("BURNER_FFMPEG_PATH") is None
        assert "non-existent path" in caplog.text

    def test_missing_path_allowed(self, tmp_path: Path) -> None:
        reader = EnvReader(env={"BURNER_OUTPUT_DIR": str(tmp_path / "out")})
        result = reader.get_path("BURNER_OUTPUT_DIR", must_exist=False)
        assert result == tmp_path / "out"

    def test_expands_tilde(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        reader = EnvReader(env={"BURNER_LOG_FILE": "~/logs/burner.log"})

        result = reader.get_path("BURNER_LOG_FILE", must_exist=False)

        assert result == tmp_path / "logs" / "burner.log"
