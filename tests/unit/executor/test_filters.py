"""Unit tests for filter graph rendering."""

from burner.executor.filters import AUTO_WIDTH, FilterSpec, escape_filter_path


class TestEscapeFilterPath:
    """Tests for escape_filter_path."""

    def test_plain_path_unchanged(self) -> None:
        """Paths without special characters pass through."""
        assert escape_filter_path("/in/file.mkv") == "/in/file.mkv"

    def test_escapes_windows_drive_and_separators(self) -> None:
        """Backslashes are doubled before colons are escaped."""
        assert escape_filter_path("C:\\in\\file.mkv") == "C\\:\\\\in\\\\file.mkv"

    def test_escapes_every_colon(self) -> None:
        """All colons are escaped, not only the first."""
        assert escape_filter_path("/a:b/c:d.mkv") == "/a\\:b/c\\:d.mkv"


class TestFilterSpecRender:
    """Tests for FilterSpec.render."""

    def test_subtitle_only(self) -> None:
        """A subtitle path alone yields a single burn-in filter."""
        assert FilterSpec(subtitle_path="/in/file.mkv").render() == (
            "subtitles='/in/file.mkv'"
        )

    def test_subtitle_escaped(self) -> None:
        """The subtitle path is escaped inside the quotes."""
        spec = FilterSpec(subtitle_path="C:\\in\\file.mkv")
        assert spec.render() == "subtitles='C\\:\\\\in\\\\file.mkv'"

    def test_scale_with_upscaling(self) -> None:
        """Upscaling allowed emits a plain scale filter."""
        spec = FilterSpec(width=-1, height=720, upscaling_allowed=True)
        assert spec.render() == "scale=-1:720"

    def test_scale_without_upscaling(self) -> None:
        """Without upscaling the size is capped at the source size."""
        spec = FilterSpec(width=320, height=240)
        assert spec.render() == "scale='min(320,iw)':'min(240,ih)'"

    def test_subtitle_comes_before_scale(self) -> None:
        """Burn-in happens before scaling."""
        spec = FilterSpec(
            subtitle_path="/in/file.mkv", width=320, height=240, upscaling_allowed=True
        )
        assert spec.render() == "subtitles='/in/file.mkv', scale=320:240"

    def test_zero_size_emits_no_scale(self) -> None:
        """Width and height both zero mean no scale filter."""
        assert FilterSpec(subtitle_path="/in/a.mkv").render() == "subtitles='/in/a.mkv'"
        assert FilterSpec().render() == ""

    def test_height_only_emits_scale(self) -> None:
        """A non-zero height alone is enough for a scale filter."""
        spec = FilterSpec(height=720, upscaling_allowed=True)
        assert spec.render() == "scale=0:720"

    def test_auto_width(self) -> None:
        """The auto width keeps the aspect ratio with an even width."""
        spec = FilterSpec(width=AUTO_WIDTH, height=720)
        assert spec.render() == "scale='min(-2,iw)':'min(720,ih)'"

    def test_str_matches_render(self) -> None:
        """str() renders the filter graph."""
        spec = FilterSpec(subtitle_path="/in/file.mkv", height=480)
        assert str(spec) == spec.render()


class TestFilterSpecWithoutSubtitles:
    """Tests for FilterSpec.without_subtitles."""

    def test_drops_only_the_subtitle(self) -> None:
        """Scaling settings survive."""
        spec = FilterSpec(
            subtitle_path="/in/file.mkv", width=-2, height=720, upscaling_allowed=True
        )
        stripped = spec.without_subtitles()

        assert stripped.subtitle_path is None
        assert stripped.render() == "scale=-2:720"
        assert spec.subtitle_path == "/in/file.mkv"
