"""
Output styling for rendered error blocks.

Three style classes are kept apart:

- structural: the line number gutter, the separator and ellipsis markers
- context: the lines shown around the error line
- error: the caret annotation and the message-only fallback
"""

from __future__ import annotations

from typing import Protocol


class Ansi:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class Styler(Protocol):
    def structural(self, text: str) -> str: ...

    def context(self, text: str) -> str: ...

    def error(self, text: str) -> str: ...


class PlainStyler:
    """Leaves text untouched."""

    def structural(self, text: str) -> str:
        return text

    def context(self, text: str) -> str:
        return text

    def error(self, text: str) -> str:
        return text


class AnsiStyler:
    """Wraps text in ANSI escapes. Empty text stays empty."""

    STRUCTURAL = Ansi.BOLD + Ansi.BLUE
    CONTEXT = Ansi.YELLOW
    ERROR = Ansi.BOLD + Ansi.RED

    @staticmethod
    def _wrap(prefix: str, text: str) -> str:
        if not text:
            return text
        return f"{prefix}{text}{Ansi.RESET}"

    def structural(self, text: str) -> str:
        return self._wrap(self.STRUCTURAL, text)

    def context(self, text: str) -> str:
        return self._wrap(self.CONTEXT, text)

    def error(self, text: str) -> str:
        return self._wrap(self.ERROR, text)


def get_styler(colorize: bool) -> Styler:
    """Pick the styler once for a render call."""
    return AnsiStyler() if colorize else PlainStyler()


__all__ = ["Ansi", "Styler", "PlainStyler", "AnsiStyler", "get_styler"]
