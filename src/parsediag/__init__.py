"""
parsediag - parse error messages for humans.

Renders a parse error as the surrounding source text with the failing line
numbered and a caret under the failure point, similar to compiler
diagnostics. Parsing itself is left to json, PyYAML, tomllib or any other
parser that can report a line and column.
"""

from parsediag.config import (
    ColorMode,
    RenderConfig,
    default_config,
    get_default_config,
    reset_default_config,
    set_default_config,
)
from parsediag.errors import ParseErrorReport
from parsediag.location import ErrorPosition
from parsediag.render import render
from parsediag.segment import Segmentation

__version__ = "0.3.0"
__all__ = [
    "render",
    "ErrorPosition",
    "ParseErrorReport",
    "RenderConfig",
    "ColorMode",
    "Segmentation",
    "default_config",
    "get_default_config",
    "set_default_config",
    "reset_default_config",
]
