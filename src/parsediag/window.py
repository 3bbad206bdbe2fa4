"""
Line and column windowing around an error position.

Both selectors are pure functions over their inputs. The line selector picks
the lines shown around the error and strips the indentation they share. The
column selector shortens an overly long error line to a window of characters
around the error column and reports which sides were cut.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from parsediag.segment import ClusterSegmenter, get_segmenter

# Tabs are replaced before indentation is measured.
TAB_REPLACEMENT = "  "


# =============================================================================
# Line Window
# =============================================================================


@dataclass(frozen=True, slots=True)
class WindowLine:
    """
    A single line selected for display.

    Attributes:
        number: 1-indexed line number in the original source
        text: Line text with tabs expanded and the shared indentation removed
        raw: The untouched source line
    """

    number: int
    text: str
    raw: str


@dataclass(frozen=True, slots=True)
class LineWindow:
    """Consecutive source lines around the error line."""

    lines: tuple[WindowLine, ...] = ()
    shared_prefix: int = 0

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[WindowLine]:
        return iter(self.lines)

    def get(self, number: int) -> Optional[WindowLine]:
        """Look up a line by its original line number."""
        for line in self.lines:
            if line.number == number:
                return line
        return None

    def display_column(self, line: WindowLine, column: int) -> int:
        """
        Map a column on the raw source line onto ``line.text``.

        Accounts for tab expansion and for the removed shared indentation.
        Never returns a negative column.
        """
        tabs = line.raw[:column].count("\t")
        expanded = column + tabs * (len(TAB_REPLACEMENT) - 1)
        return max(0, expanded - self.shared_prefix)


def split_lines(text: str) -> list[str]:
    """
    Split text on LF and CRLF line endings.

    A final line ending does not introduce an empty trailing line, and empty
    text has no lines at all.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def leading_whitespace(text: str) -> int:
    """Count the whitespace code points at the start of ``text``."""
    count = 0
    for char in text:
        if not char.isspace():
            break
        count += 1
    return count


def select_lines(source: str, error_line: Optional[int], context_lines: int) -> LineWindow:
    """
    Select the lines to show around ``error_line``.

    The window starts ``context_lines`` before the error line (but never
    before line 1) and spans ``context_lines * 2 + 1`` lines, clipped to the
    end of the source. The indentation common to every selected line is
    removed. An unknown error line or a window with no lines yields an empty
    ``LineWindow``.

    Args:
        source: Complete source text
        error_line: 1-indexed line of the error
        context_lines: Lines to show on each side of the error line

    Returns:
        The selected lines
    """
    if error_line is None:
        return LineWindow()

    first = max(1, error_line - context_lines)
    take = context_lines * 2 + 1
    selected = split_lines(source)[first - 1 : first - 1 + take]
    if not selected:
        return LineWindow()

    expanded = [raw.replace("\t", TAB_REPLACEMENT) for raw in selected]
    shared_prefix = min(leading_whitespace(text) for text in expanded)

    return LineWindow(
        lines=tuple(
            WindowLine(number=first + offset, text=text[shared_prefix:], raw=raw)
            for offset, (text, raw) in enumerate(zip(expanded, selected))
        ),
        shared_prefix=shared_prefix,
    )


# =============================================================================
# Column Window
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColumnWindow:
    """
    The part of the error line that is displayed.

    Attributes:
        text: Displayed text
        adjusted_column: Error column within ``text``, counted in the units
            of the segmenter that built it
        truncated_before: Characters were dropped at the start
        truncated_after: Characters were dropped at the end
    """

    text: str
    adjusted_column: int
    truncated_before: bool = False
    truncated_after: bool = False


def select_columns(
    line_text: str,
    error_column: Optional[int],
    context_characters: int,
    contextualize: bool = True,
    segmenter: Optional[ClusterSegmenter] = None,
) -> ColumnWindow:
    """
    Shorten a long error line to the characters around the error column.

    Lines of at most ``context_characters * 2 + 1`` units, or any line when
    ``contextualize`` is false, are returned unchanged. Otherwise the window
    starts ``context_characters + 1`` units before the error column and keeps
    ``context_characters * 2 + 1`` units, fewer when the line ends first.

    Args:
        line_text: The error line, already stripped of shared indentation
        error_column: Error column in segmenter units
        context_characters: Units to keep on each side of the error
        contextualize: Whether long lines are windowed at all
        segmenter: Unit strategy, grapheme clusters by default

    Returns:
        The displayed slice of the line
    """
    column = error_column or 0
    if not contextualize:
        return ColumnWindow(line_text, column)

    segmenter = segmenter or get_segmenter()
    clusters = segmenter.split(line_text)
    take = context_characters * 2 + 1
    if len(clusters) <= take:
        return ColumnWindow(line_text, column)

    skip = max(0, column - context_characters - 1)
    kept = clusters[skip : skip + take]

    return ColumnWindow(
        text="".join(kept),
        adjusted_column=max(0, column - skip),
        truncated_before=skip > 0,
        truncated_after=skip + take < len(clusters),
    )


__all__ = [
    "TAB_REPLACEMENT",
    "WindowLine",
    "LineWindow",
    "split_lines",
    "leading_whitespace",
    "select_lines",
    "ColumnWindow",
    "select_columns",
]
