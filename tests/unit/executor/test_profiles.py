"""Unit tests for output profiles."""

import pytest

from burner.executor.profiles import MENU_ORDER, PROFILE_TOKENS, Profile


class TestProfileTokens:
    """Tests for token lookup."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("smp4", Profile.SAMPLE),
            ("fmp4", Profile.FRAGMENTED_HLS),
            ("mp4", Profile.MUX),
            ("transcode", Profile.TRANSCODE),
        ],
    )
    def test_from_token(self, token: str, expected: Profile) -> None:
        assert Profile.from_token(token) is expected
        assert expected.token == token

    def test_unknown_token(self) -> None:
        """Unknown tokens map to None."""
        assert Profile.from_token("mkv") is None
        assert Profile.from_token("") is None

    def test_tokens_follow_menu_order(self) -> None:
        assert PROFILE_TOKENS == ("fmp4", "mp4", "transcode", "smp4")


class TestProfileMenu:
    """Tests for the interactive menu mapping."""

    def test_menu_order(self) -> None:
        """Fragmented HLS is offered first, the sample last."""
        assert MENU_ORDER == (
            Profile.FRAGMENTED_HLS,
            Profile.MUX,
            Profile.TRANSCODE,
            Profile.SAMPLE,
        )

    def test_menu_indices(self) -> None:
        assert [p.value for p in MENU_ORDER] == [1, 2, 3, 0]

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0", Profile.SAMPLE),
            ("1", Profile.FRAGMENTED_HLS),
            ("2", Profile.MUX),
            ("3", Profile.TRANSCODE),
            ("2\n", Profile.MUX),
            ("21", Profile.MUX),
        ],
    )
    def test_from_index(self, text: str, expected: Profile) -> None:
        """Only the first character is considered."""
        assert Profile.from_index(text) is expected

    @pytest.mark.parametrize("text", ["", "4", "9", "x", " 1", "-1"])
    def test_from_index_rejects(self, text: str) -> None:
        assert Profile.from_index(text) is None

    def test_labels(self) -> None:
        assert Profile.FRAGMENTED_HLS.label == "Fragmented MP4 (HLS)"
        assert Profile.TRANSCODE.label == "Transcode (softsub)"
