"""
Parse error reports.

``ParseErrorReport`` wraps a failed parse together with the text that was
being parsed. Printing it renders the source context:

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseErrorReport.from_json_error(text, exc) from exc

Column convention:
    Every adapter normalizes the parser's column to the number of characters
    on the line that precede the failure point. The caret is drawn after that
    many characters, i.e. directly under the offending character. Lines are
    always 1-indexed.

    - json: ``colno`` is 1-indexed at the offending character -> ``colno - 1``
    - PyYAML: ``Mark.column`` is 0-indexed at the offending character -> as is
    - tomllib: 1-indexed at the offending character -> ``column - 1``
"""

from __future__ import annotations

import json
import re
import tomllib
from typing import Optional

import yaml

from parsediag.config import RenderConfig
from parsediag.location import ErrorPosition
from parsediag.render import render

# tomllib before Python 3.14 only reports the position inside the message
_TOML_POSITION = re.compile(r"\s*\(at line (\d+), column (\d+)\)$")
_TOML_END = re.compile(r"\s*\(at end of document\)$")


class ParseErrorReport(Exception):
    """
    A parse error together with the source it occurred in.

    Attributes:
        source: The text the parser failed on
        message: Error message
        position: Where the parser failed
        config: Render settings used by ``str()``; None means the context's
            default config
    """

    def __init__(
        self,
        source: str,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        config: Optional[RenderConfig] = None,
    ) -> None:
        self.source = source
        self.message = message
        self.position = ErrorPosition(line, column)
        self.config = config
        super().__init__(message)

    @property
    def line(self) -> Optional[int]:
        return self.position.line

    @property
    def column(self) -> Optional[int]:
        return self.position.column

    def render(self, config: Optional[RenderConfig] = None) -> str:
        """Render the error with its source context."""
        return render(self.source, self.message, self.position, config or self.config)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, position={self.position})"

    # -------------------------------------------------------------------------
    # Adapters
    # -------------------------------------------------------------------------

    @classmethod
    def from_json_error(
        cls, source: str, error: json.JSONDecodeError, config: Optional[RenderConfig] = None
    ) -> "ParseErrorReport":
        """Wrap an error raised by ``json.loads``."""
        return cls(source, str(error), error.lineno, max(0, error.colno - 1), config)

    @classmethod
    def from_yaml_error(
        cls, source: str, error: yaml.YAMLError, config: Optional[RenderConfig] = None
    ) -> "ParseErrorReport":
        """
        Wrap an error raised by PyYAML.

        Errors without a mark (for example plain ``YAMLError``) carry no
        position and render as the message alone.
        """
        mark = None
        if isinstance(error, yaml.MarkedYAMLError):
            mark = error.problem_mark or error.context_mark
        if mark is None:
            return cls(source, str(error), config=config)

        problem = error.problem or error.context or "invalid YAML"
        message = f"{problem} at line {mark.line + 1} column {mark.column + 1}"
        if error.context and error.problem:
            message = f"{error.context}: {message}"
        return cls(source, message, mark.line + 1, mark.column, config)

    @classmethod
    def from_toml_error(
        cls, source: str, error: tomllib.TOMLDecodeError, config: Optional[RenderConfig] = None
    ) -> "ParseErrorReport":
        """Wrap an error raised by ``tomllib.loads``."""
        lineno = getattr(error, "lineno", None)
        colno = getattr(error, "colno", None)
        message = getattr(error, "msg", None) or str(error)

        if lineno is None:
            match = _TOML_POSITION.search(message)
            if match:
                lineno, colno = int(match.group(1)), int(match.group(2))
                message = message[: match.start()]
            else:
                message = _TOML_END.sub("", message)

        if lineno is None:
            return cls(source, message, config=config)

        message = f"{message} at line {lineno} column {colno}"
        return cls(source, message, lineno, max(0, colno - 1), config)

    @classmethod
    def from_exception(
        cls,
        source: str,
        error: BaseException,
        line: Optional[int] = None,
        column: Optional[int] = None,
        config: Optional[RenderConfig] = None,
    ) -> "ParseErrorReport":
        """Wrap any exception with a position supplied by the caller."""
        return cls(source, str(error), line, column, config)

    @classmethod
    def from_error(
        cls, source: str, error: BaseException, config: Optional[RenderConfig] = None
    ) -> "ParseErrorReport":
        """Wrap a json, PyYAML or tomllib error, or any other exception."""
        if isinstance(error, json.JSONDecodeError):
            return cls.from_json_error(source, error, config)
        if isinstance(error, yaml.YAMLError):
            return cls.from_yaml_error(source, error, config)
        if isinstance(error, tomllib.TOMLDecodeError):
            return cls.from_toml_error(source, error, config)
        return cls.from_exception(source, error, config=config)


__all__ = ["ParseErrorReport"]
