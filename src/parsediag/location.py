"""
Error positions reported by parsers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class ErrorPosition:
    """
    Where a parse failed.

    Attributes:
        line: 1-indexed line number, or None when unknown
        column: Number of characters on the line that precede the failure
            point, so the caret is drawn directly after them. None when
            unknown.
    """

    line: Optional[int] = None
    column: Optional[int] = None

    @property
    def is_known(self) -> bool:
        """True if at least one coordinate is available."""
        return self.line is not None or self.column is not None

    def __str__(self) -> str:
        if self.line is None:
            return "<unknown>"
        if self.column is None:
            return f"{self.line}"
        return f"{self.line}:{self.column}"


__all__ = ["ErrorPosition"]
