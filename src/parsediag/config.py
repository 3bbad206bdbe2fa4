"""
Render configuration.

A ``RenderConfig`` is passed explicitly to every render call. Callers that
do not want to thread one through can rely on the scoped default kept in a
ContextVar: each thread and asyncio task sees its own value, so changing the
default in one context never affects renders running in another.

Usage:
    config = RenderConfig(context_lines=1, colorize=True)
    print(render(source, message, position, config))

    with default_config(RenderConfig(context_characters=10)):
        print(ParseErrorReport(source, message, line=2, column=7))
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, TextIO

from parsediag.segment import Segmentation

DEFAULT_CONTEXT_LINES = 3
DEFAULT_CONTEXT_CHARACTERS = 30


class ColorMode(Enum):
    """When to emit ANSI colors."""

    ALWAYS = "always"
    NEVER = "never"
    ENVIRONMENT = "auto"

    def should_colorize(
        self,
        stream: Optional[TextIO] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> bool:
        """
        Resolve this mode to a yes/no answer.

        ENVIRONMENT honours CLICOLOR_FORCE, NO_COLOR and CLICOLOR (in that
        order) and otherwise colors only when the stream is a terminal.

        Args:
            stream: Stream the output is destined for (default: sys.stderr)
            environ: Environment mapping (default: os.environ)
        """
        if self is ColorMode.ALWAYS:
            return True
        if self is ColorMode.NEVER:
            return False

        env = os.environ if environ is None else environ
        force = env.get("CLICOLOR_FORCE")
        if force and force != "0":
            return True
        if env.get("NO_COLOR"):
            return False
        if env.get("CLICOLOR") == "0":
            return False

        target = sys.stderr if stream is None else stream
        isatty = getattr(target, "isatty", None)
        return bool(isatty and isatty())


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """
    Immutable settings for one render call.

    Attributes:
        context_lines: Lines shown before and after the error line
        context_characters: Characters shown before and after the error
            column when the error line is long
        contextualize: Show context lines and window long lines; when false
            only the error line and its caret are printed, untruncated
        colorize: Emit ANSI colors
        segmentation: Unit used when windowing long lines
    """

    context_lines: int = DEFAULT_CONTEXT_LINES
    context_characters: int = DEFAULT_CONTEXT_CHARACTERS
    contextualize: bool = True
    colorize: bool = False
    segmentation: Segmentation = Segmentation.GRAPHEME

    def __post_init__(self) -> None:
        if self.context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {self.context_lines}")
        if self.context_characters < 0:
            raise ValueError(
                f"context_characters must be >= 0, got {self.context_characters}"
            )

    def with_color_mode(
        self, mode: ColorMode, stream: Optional[TextIO] = None
    ) -> "RenderConfig":
        """Return a copy with ``colorize`` resolved from a color mode."""
        return replace(self, colorize=mode.should_colorize(stream))

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "RenderConfig":
        """
        Build a config from a mapping, ignoring unknown keys.

        ``segmentation`` may be given as a string ("grapheme" or "code_point")
        and ``color_mode`` ("always", "never", "auto") is resolved against
        stderr in place of ``colorize``.
        """
        valid_fields = set(cls.__dataclass_fields__)
        values = {k: v for k, v in config_dict.items() if k in valid_fields}
        if isinstance(values.get("segmentation"), str):
            values["segmentation"] = Segmentation(values["segmentation"])
        config = cls(**values)
        mode = config_dict.get("color_mode")
        if mode is not None:
            config = config.with_color_mode(ColorMode(mode))
        return config


_DEFAULT_CONFIG = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_default_config() -> RenderConfig:
    """Get the default config for the current context."""
    return _render_config.get()


def set_default_config(config: RenderConfig) -> None:
    """Set the default config for the current context only."""
    _render_config.set(config)


def reset_default_config() -> None:
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def default_config(config: RenderConfig) -> Iterator[RenderConfig]:
    """
    Temporarily replace the default config.

    The previous value is restored on exit, even if an exception is raised.
    """
    token = _render_config.set(config)
    try:
        yield config
    finally:
        _render_config.reset(token)


__all__ = [
    "DEFAULT_CONTEXT_LINES",
    "DEFAULT_CONTEXT_CHARACTERS",
    "ColorMode",
    "RenderConfig",
    "get_default_config",
    "set_default_config",
    "reset_default_config",
    "default_config",
]
