"""
Cluster segmentation strategies.

Long error lines are windowed by "characters". What a character is depends on
the segmenter: the grapheme segmenter keeps a base letter together with its
combining marks, the code point segmenter splits on every code point.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol

import regex


class Segmentation(Enum):
    """Unit used when windowing a long line."""

    GRAPHEME = "grapheme"
    CODE_POINT = "code_point"


class ClusterSegmenter(Protocol):
    """Splits a line into the units used for column arithmetic."""

    def split(self, text: str) -> list[str]: ...

    def column_of(self, text: str, codepoint_column: int) -> int: ...


class CodePointSegmenter:
    """One unit per Unicode code point."""

    mode = Segmentation.CODE_POINT

    def split(self, text: str) -> list[str]:
        return list(text)

    def column_of(self, text: str, codepoint_column: int) -> int:
        return codepoint_column


_GRAPHEME_PATTERN = regex.compile(r"\X")


class GraphemeSegmenter:
    """One unit per extended grapheme cluster (UAX #29)."""

    mode = Segmentation.GRAPHEME

    def split(self, text: str) -> list[str]:
        return _GRAPHEME_PATTERN.findall(text)

    def column_of(self, text: str, codepoint_column: int) -> int:
        """
        Convert a code point column into a cluster column.

        Counts the clusters that end at or before the given code point offset.
        A column pointing into the middle of a cluster maps to the start of
        that cluster. Columns past the end of the text keep their overshoot.
        """
        consumed = 0
        clusters = 0
        for cluster in self.split(text):
            if consumed + len(cluster) > codepoint_column:
                return clusters
            consumed += len(cluster)
            clusters += 1
        return clusters + (codepoint_column - consumed)


_SEGMENTERS: dict[Segmentation, ClusterSegmenter] = {
    Segmentation.GRAPHEME: GraphemeSegmenter(),
    Segmentation.CODE_POINT: CodePointSegmenter(),
}


def get_segmenter(mode: Segmentation = Segmentation.GRAPHEME) -> ClusterSegmenter:
    """Return the segmenter for the given mode."""
    return _SEGMENTERS[mode]


__all__ = [
    "Segmentation",
    "ClusterSegmenter",
    "CodePointSegmenter",
    "GraphemeSegmenter",
    "get_segmenter",
]
