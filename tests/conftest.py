"""
Pytest configuration and shared fixtures for parsediag tests.
"""

import pytest

from parsediag.config import RenderConfig, reset_default_config
from parsediag.location import ErrorPosition
from parsediag.render import render


@pytest.fixture(autouse=True)
def _reset_defaults():
    """Keep default config changes from leaking between tests."""
    reset_default_config()
    yield
    reset_default_config()


@pytest.fixture
def render_plain():
    """Render without colors, optionally overriding config fields."""

    def _render(source: str, message: str, line=None, column=None, **options) -> str:
        config = RenderConfig(colorize=False, **options)
        return render(source, message, ErrorPosition(line, column), config)

    return _render


@pytest.fixture
def render_color():
    """Render with ANSI colors, optionally overriding config fields."""

    def _render(source: str, message: str, line=None, column=None, **options) -> str:
        config = RenderConfig(colorize=True, **options)
        return render(source, message, ErrorPosition(line, column), config)

    return _render


@pytest.fixture
def long_config_line() -> str:
    """A config file whose second line is far too long to show in full."""
    return (
        "this is just a config file\nthe error that is somewhere in this line "
        "will be found somewhere after here maybe we can find it here: !, it "
        "could also be somewhere else maybe we will find that out someda, it "
        "could also be somewhere else maybe we will find that out someday"
    )
