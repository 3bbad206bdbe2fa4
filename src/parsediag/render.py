"""
Render a parse error as source context with a caret under the failure.

Example output (no colors):

       | values:
       |   - 'first'
       |   - 'second'
     4 |   - third:
       |          ^ values[2]: invalid type: map, expected a string

The block starts with an empty line so it does not run into text the caller
printed before it (for example "Error:"). When no position is known, or no source
line lies near the position, only the message is printed.
"""

from __future__ import annotations

import logging
from typing import Optional

from parsediag.config import RenderConfig, get_default_config
from parsediag.location import ErrorPosition
from parsediag.segment import get_segmenter
from parsediag.styles import Styler, get_styler
from parsediag.window import LineWindow, WindowLine, select_columns, select_lines

logger = logging.getLogger(__name__)

# Separator between the line number gutter and the source text
SEPARATOR = " | "

# Marks the side(s) of a long line that were cut off
ELLIPSIS = "..."


def render(
    source: str,
    message: str,
    position: Optional[ErrorPosition] = None,
    config: Optional[RenderConfig] = None,
) -> str:
    """
    Render ``message`` in the context of ``source``.

    Args:
        source: Text the parser failed on
        message: Error message to print next to the caret
        position: Where the parser failed
        config: Render settings (default: the context's default config)

    Returns:
        The rendered block, every row terminated by a newline
    """
    config = config or get_default_config()
    position = position or ErrorPosition()
    styler = get_styler(config.colorize)

    if not position.is_known:
        logger.debug("no error position, rendering message only")
        return _render_message_only(message, styler)

    window = select_lines(source, position.line, config.context_lines)
    if not window:
        logger.debug("no source lines around %s, rendering message only", position)
        return _render_message_only(message, styler)

    error_line = position.line or 0
    fill = " " * len(str(error_line))
    separator = styler.structural(SEPARATOR)

    lines = list(window)
    column = position.column or 0
    if window.get(error_line) is None:
        # EOF after a final newline reports a line the source does not have
        logger.debug("line %d is outside the source, rendering it empty", error_line)
        lines.append(WindowLine(number=error_line, text="", raw=""))
        lines.sort(key=lambda line: line.number)
        column = 0

    rows = ["\n"]
    for line in lines:
        if line.number == error_line:
            rows.extend(
                _render_error_line(line, window, message, column, config, styler, fill, separator)
            )
        elif config.contextualize:
            rows.append(f" {fill}{separator}{styler.context(line.text)}\n")

    return "".join(rows)


def _render_message_only(message: str, styler: Styler) -> str:
    return f"{styler.error(message)}\n"


def _render_error_line(
    line: WindowLine,
    window: LineWindow,
    message: str,
    column: int,
    config: RenderConfig,
    styler: Styler,
    fill: str,
    separator: str,
) -> list[str]:
    """Render the error line and the caret row beneath it."""
    segmenter = get_segmenter(config.segmentation)
    column = segmenter.column_of(line.text, window.display_column(line, column))

    shown = select_columns(
        line.text, column, config.context_characters, config.contextualize, segmenter
    )
    if shown.truncated_before or shown.truncated_after:
        logger.debug(
            "line %d shortened around column %d (before=%s, after=%s)",
            line.number,
            column,
            shown.truncated_before,
            shown.truncated_after,
        )

    ellipsis = styler.structural(ELLIPSIS)
    before = ellipsis if shown.truncated_before else ""
    after = ellipsis if shown.truncated_after else ""

    padding = shown.adjusted_column
    if shown.truncated_before:
        padding += len(ELLIPSIS)

    number = styler.structural(str(line.number))
    annotation = styler.error(f"{' ' * padding}^ {message}")

    return [
        f" {number}{separator}{before}{shown.text}{after}\n",
        f" {fill}{separator}{annotation}\n",
    ]


__all__ = ["SEPARATOR", "ELLIPSIS", "render"]
