"""Unit tests for ffmpeg diagnostic classifiers."""

import pytest

from burner.tools.classifiers import (
    ClassificationResult,
    ClassifierChain,
    DiscardLine,
    FontReplacedClassifier,
    GlyphNotFoundClassifier,
    NotOverwritingClassifier,
    PrintLine,
    build_classifier_chain,
)

GLYPH_LINE = (
    "[Parsed_subtitles_0 @ anyhex] Glyph 0x266F not found, "
    "selecting one more font for (anystring, 0, 0)"
)
NOT_OVERWRITING_LINE = (
    "File 'anyfile' already exists. Overwrite ? [y/N] Not overwriting - exiting"
)
FONT_LINE = (
    "[Parsed_subtitles_0 @ anyhex] fontselect: "
    "(HZsH_Xirwena, 400, 0) -> ArialMT, 0, ArialMT"
)


class TestGlyphNotFoundClassifier:
    """Tests for GlyphNotFoundClassifier."""

    def test_kills_on_missing_glyph(self, control) -> None:
        result = GlyphNotFoundClassifier().handle(control, GLYPH_LINE)

        assert result is ClassificationResult.SUPPRESSED
        assert control.signals == 1
        assert control.emitted == ["burner: was not able to find font for `♯` char"]

    def test_higher_filter_index(self, control) -> None:
        line = "[Parsed_subtitles_12 @ 0x55d0c8] Glyph 0x41 not found, selecting"
        GlyphNotFoundClassifier().handle(control, line)

        assert control.emitted == ["burner: was not able to find font for `A` char"]

    @pytest.mark.parametrize(
        ("code", "rendered"),
        [("110000", "U+110000"), ("FFFFFFFF", "U+FFFFFFFF"), ("D800", "U+D800")],
    )
    def test_unprintable_code_point_still_kills(
        self, control, code: str, rendered: str
    ) -> None:
        """Code points without a printable char are shown as U+XXXX."""
        line = f"[Parsed_subtitles_0 @ 0x55d] Glyph 0x{code} not found, selecting"

        result = build_classifier_chain().handle(control, line)

        assert result is ClassificationResult.SUPPRESSED
        assert control.signals == 1
        assert control.emitted == [
            f"burner: was not able to find font for `{rendered}` char"
        ]

    def test_passes_other_lines(self, control) -> None:
        result = GlyphNotFoundClassifier().handle(control, "any line")

        assert result is ClassificationResult.PASS
        assert control.signals == 0
        assert control.emitted == []

    def test_requires_line_start(self, control) -> None:
        line = "warning: [Parsed_subtitles_0 @ anyhex] Glyph 0x41 not found"
        assert GlyphNotFoundClassifier().handle(control, line) is ClassificationResult.PASS


class TestFontReplacedClassifier:
    """Tests for FontReplacedClassifier."""

    @pytest.mark.parametrize(
        ("line", "font"),
        [
            (FONT_LINE, "HZsH_Xirwena"),
            (
                "[Parsed_subtitles_1 @ 000002475be4c140] fontselect: "
                "(Teszt1, 400, 0) -> ArialMT, 0, ArialMT",
                "Teszt1",
            ),
            (
                "[Parsed_subtitles_1 @ 000002475be4c140] fontselect: "
                "(Teszt1, 400, 0) -> ArialMT, -1, ArialMT",
                "Teszt1",
            ),
            (
                "[Parsed_subtitles_0 @ 000002475be4c140] fontselect: "
                "(Teszt2, 700, 0) -> Arial-BoldMT, 0, Arial-BoldMT",
                "Teszt2",
            ),
            (
                "[Parsed_subtitles_0 @ anyhex] fontselect: "
                "(HZsH_Xirwena, 400, 0) -> /font/path/DejaVuSans.ttf, 0, DejaVuSans",
                "HZsH_Xirwena",
            ),
            (
                "[Parsed_subtitles_0 @ anyhex] fontselect: "
                "(HZsH_Xirwena, 400, 0) -> /font/path/DejaVuSans.ttf, 0, Helvetica",
                "HZsH_Xirwena",
            ),
        ],
    )
    def test_kills_on_fallback(self, control, line: str, font: str) -> None:
        result = FontReplacedClassifier().handle(control, line)

        assert result is ClassificationResult.SUPPRESSED
        assert control.signals == 1
        assert control.emitted == [f"burner: missing `{font}` font"]

    @pytest.mark.parametrize(
        "line",
        [
            "[Parsed_subtitles_0 @ anyhex] fontselect: "
            "(Arial, 400, 0) -> ArialMT, 0, ArialMT",
            "[Parsed_subtitles_0 @ anyhex] fontselect: "
            "(DejaVuSans, 400, 0) -> /font/path/DejaVuSans.ttf, 0, DejaVuSans",
            "[Parsed_subtitles_0 @ anyhex] fontselect: "
            "(Helvetica, 400, 0) -> /font/path/Helvetica.ttf, 0, Helvetica",
            "[Parsed_subtitles_0 @ anyhex] fontselect: "
            "(Noto Sans, 400, 0) -> /fonts/NotoSans.ttf, 0, NotoSans-Regular",
            "any line",
        ],
    )
    def test_passes_non_replacements(self, control, line: str) -> None:
        """The requested font itself, or an unrelated match, is fine."""
        result = FontReplacedClassifier().handle(control, line)

        assert result is ClassificationResult.PASS
        assert control.signals == 0


class TestNotOverwritingClassifier:
    """Tests for NotOverwritingClassifier."""

    def test_kills_and_reports_first_sentence(self, control) -> None:
        result = NotOverwritingClassifier().handle(control, NOT_OVERWRITING_LINE)

        assert result is ClassificationResult.SUPPRESSED
        assert control.signals == 1
        assert control.emitted == ["burner: File 'anyfile' already exists."]

    def test_dots_inside_file_names_are_kept(self, control) -> None:
        line = "File 'out.mp4' already exists. Overwrite ? [y/N] Not overwriting - exiting"
        NotOverwritingClassifier().handle(control, line)

        assert control.emitted == ["burner: File 'out.mp4' already exists."]

    def test_passes_other_lines(self, control) -> None:
        result = NotOverwritingClassifier().handle(control, "any line")

        assert result is ClassificationResult.PASS
        assert control.signals == 0


class TestTerminalClassifiers:
    """Tests for PrintLine and DiscardLine."""

    def test_print_line_emits(self, control) -> None:
        assert PrintLine().handle(control, "frame=1") is ClassificationResult.SUPPRESSED
        assert control.emitted == ["frame=1"]

    def test_discard_line_drops(self, control) -> None:
        assert DiscardLine().handle(control, "frame=1") is ClassificationResult.SUPPRESSED
        assert control.emitted == []


class TestClassifierChain:
    """Tests for chain evaluation."""

    def test_stops_at_first_suppression(self, control) -> None:
        chain = ClassifierChain([GlyphNotFoundClassifier(), PrintLine()])

        chain.handle(control, GLYPH_LINE)

        # The printer never sees the fatal line
        assert len(control.emitted) == 1
        assert control.emitted[0].startswith("burner: ")

    def test_falls_through(self, control) -> None:
        chain = ClassifierChain([GlyphNotFoundClassifier()])

        assert chain.handle(control, "any line") is ClassificationResult.PASS

    def test_empty_chain(self, control) -> None:
        assert ClassifierChain([]).handle(control, "x") is ClassificationResult.PASS


class TestBuildClassifierChain:
    """Tests for build_classifier_chain."""

    def test_default_order(self) -> None:
        chain = build_classifier_chain()
        kinds = [type(c) for c in chain.classifiers]

        assert kinds == [
            GlyphNotFoundClassifier,
            FontReplacedClassifier,
            NotOverwritingClassifier,
            PrintLine,
        ]

    def test_ignore_font_error_drops_font_detectors(self, control) -> None:
        chain = build_classifier_chain(ignore_font_error=True)

        chain.handle(control, GLYPH_LINE)
        chain.handle(control, FONT_LINE)

        assert control.signals == 0
        assert control.emitted == [GLYPH_LINE, FONT_LINE]

    def test_ignore_font_error_keeps_overwrite_detector(self, control) -> None:
        chain = build_classifier_chain(ignore_font_error=True)

        chain.handle(control, NOT_OVERWRITING_LINE)

        assert control.signals == 1

    def test_quiet_chain_discards(self, control) -> None:
        chain = build_classifier_chain(verbose=False)
        kinds = [type(c) for c in chain.classifiers]

        chain.handle(control, "frame=1")

        assert kinds[-1] is DiscardLine
        assert control.emitted == []
