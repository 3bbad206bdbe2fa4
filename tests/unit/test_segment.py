"""
Unit tests for cluster segmentation.
"""

from parsediag.segment import (
    CodePointSegmenter,
    GraphemeSegmenter,
    Segmentation,
    get_segmenter,
)


class TestSegmenters:
    def test_get_segmenter(self):
        assert isinstance(get_segmenter(), GraphemeSegmenter)
        assert isinstance(get_segmenter(Segmentation.GRAPHEME), GraphemeSegmenter)
        assert isinstance(get_segmenter(Segmentation.CODE_POINT), CodePointSegmenter)

    def test_code_points(self):
        assert CodePointSegmenter().split("e\u0301x") == ["e", "\u0301", "x"]

    def test_graphemes(self):
        """Combining marks and flag pairs form single clusters."""
        text = "e\u0301x\U0001F1EB\U0001F1F7o\u0308\u0332"
        assert GraphemeSegmenter().split(text) == [
            "e\u0301",
            "x",
            "\U0001F1EB\U0001F1F7",
            "o\u0308\u0332",
        ]

    def test_crlf_is_one_cluster(self):
        assert GraphemeSegmenter().split("a\r\n") == ["a", "\r\n"]


class TestColumnConversion:
    """Tests for converting code point columns into cluster columns."""

    def test_code_point_identity(self):
        assert CodePointSegmenter().column_of("e\u0301x", 2) == 2

    def test_after_cluster(self):
        assert GraphemeSegmenter().column_of("e\u0301x", 2) == 1

    def test_inside_cluster(self):
        """A column inside a cluster maps to the cluster start."""
        assert GraphemeSegmenter().column_of("e\u0301x", 1) == 0

    def test_start_and_end(self):
        segmenter = GraphemeSegmenter()
        assert segmenter.column_of("e\u0301x", 0) == 0
        assert segmenter.column_of("e\u0301x", 3) == 2

    def test_past_end_keeps_overshoot(self):
        assert GraphemeSegmenter().column_of("ab", 5) == 5
        assert GraphemeSegmenter().column_of("e\u0301", 4) == 3
