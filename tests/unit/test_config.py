"""
Unit tests for render configuration and color mode resolution.
"""

import io
import threading

import pytest

from parsediag.config import (
    ColorMode,
    RenderConfig,
    default_config,
    get_default_config,
    reset_default_config,
    set_default_config,
)
from parsediag.segment import Segmentation


class FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestRenderConfig:
    def test_defaults(self):
        config = RenderConfig()
        assert config.context_lines == 3
        assert config.context_characters == 30
        assert config.contextualize is True
        assert config.colorize is False
        assert config.segmentation is Segmentation.GRAPHEME

    def test_frozen(self):
        with pytest.raises(AttributeError):
            RenderConfig().context_lines = 5

    @pytest.mark.parametrize("field", ["context_lines", "context_characters"])
    def test_negative_counts_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            RenderConfig(**{field: -1})

    def test_from_dict(self):
        config = RenderConfig.from_dict(
            {
                "context_lines": 1,
                "segmentation": "code_point",
                "color_mode": "always",
                "unknown_key": "ignored",
            }
        )
        assert config.context_lines == 1
        assert config.segmentation is Segmentation.CODE_POINT
        assert config.colorize is True

    def test_with_color_mode(self):
        config = RenderConfig().with_color_mode(ColorMode.ALWAYS)
        assert config.colorize is True
        assert config.with_color_mode(ColorMode.NEVER).colorize is False


class TestColorMode:
    """Tests for deciding whether to colorize."""

    def test_always_and_never(self):
        assert ColorMode.ALWAYS.should_colorize(io.StringIO(), {"NO_COLOR": "1"})
        assert not ColorMode.NEVER.should_colorize(FakeTTY(), {"CLICOLOR_FORCE": "1"})

    def test_follows_tty(self):
        assert ColorMode.ENVIRONMENT.should_colorize(FakeTTY(), {})
        assert not ColorMode.ENVIRONMENT.should_colorize(io.StringIO(), {})

    def test_no_color(self):
        assert not ColorMode.ENVIRONMENT.should_colorize(FakeTTY(), {"NO_COLOR": "1"})

    def test_empty_no_color_is_ignored(self):
        assert ColorMode.ENVIRONMENT.should_colorize(FakeTTY(), {"NO_COLOR": ""})

    def test_clicolor_zero(self):
        assert not ColorMode.ENVIRONMENT.should_colorize(FakeTTY(), {"CLICOLOR": "0"})

    def test_force(self):
        """CLICOLOR_FORCE wins over NO_COLOR and a missing terminal."""
        env = {"CLICOLOR_FORCE": "1", "NO_COLOR": "1"}
        assert ColorMode.ENVIRONMENT.should_colorize(io.StringIO(), env)
        assert not ColorMode.ENVIRONMENT.should_colorize(
            io.StringIO(), {"CLICOLOR_FORCE": "0"}
        )

    def test_stream_without_isatty(self):
        assert not ColorMode.ENVIRONMENT.should_colorize(object(), {})


class TestDefaultConfig:
    """Tests for the scoped default config."""

    def test_set_and_reset(self):
        custom = RenderConfig(context_lines=0)
        set_default_config(custom)
        assert get_default_config() is custom
        reset_default_config()
        assert get_default_config() == RenderConfig()

    def test_context_manager_restores(self):
        outer = get_default_config()
        with pytest.raises(RuntimeError):
            with default_config(RenderConfig(context_lines=9)) as config:
                assert get_default_config() is config
                raise RuntimeError("boom")
        assert get_default_config() is outer

    def test_other_threads_unaffected(self):
        """Changing the default in one thread does not leak into another."""
        seen = []

        def worker():
            set_default_config(RenderConfig(context_lines=7))
            seen.append(get_default_config())

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()
        assert seen == [RenderConfig(context_lines=7)]
        assert get_default_config() == RenderConfig()
