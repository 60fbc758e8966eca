"""
Unit tests for config.settings module.
"""
import logging

import pytest
from pydantic import ValidationError

from hocrkit.config.settings import LOG_FORMAT, Settings, configure_logging


class TestSettings:
    """Tests for Settings class."""

    def test_defaults(self, monkeypatch, tmp_path):
        """Test defaults when no environment variables are set."""
        monkeypatch.chdir(tmp_path)
        for name in ("HOCRKIT_LOG_LEVEL", "HOCRKIT_RENDER_SCALE", "HOCRKIT_RENDER_FONT_SIZE"):
            monkeypatch.delenv(name, raising=False)

        config = Settings()

        assert config.log_level == "WARNING"
        assert config.render_scale == 1.0
        assert config.render_font_size == 15

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test prefixed, case-insensitive environment variables."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOCRKIT_RENDER_SCALE", "0.5")
        monkeypatch.setenv("hocrkit_render_rectangle_color", "blue")

        config = Settings()

        assert config.render_scale == 0.5
        assert config.render_rectangle_color == "blue"

    def test_env_file(self, monkeypatch, tmp_path):
        """Test values are read from a .env file in the working directory."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("HOCRKIT_LOG_LEVEL", raising=False)
        (tmp_path / ".env").write_text("HOCRKIT_LOG_LEVEL=DEBUG\nUNRELATED=1\n")

        assert Settings().log_level == "DEBUG"

    def test_invalid_scale(self, monkeypatch, tmp_path):
        """Test non-positive render scales are rejected."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOCRKIT_RENDER_SCALE", "0")

        with pytest.raises(ValidationError):
            Settings()

    def test_renderer_config(self, monkeypatch, tmp_path):
        """Test renderer configuration keys."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOCRKIT_RENDER_STROKE_WIDTH", "2")

        config = Settings().get_renderer_config()

        assert config['stroke_width'] == 2
        assert set(config) == {
            'scale', 'stroke_width', 'font_path', 'font_size',
            'background_color', 'font_color', 'rectangle_color',
            'bold_font_path', 'italic_font_path', 'bold_italic_font_path',
        }
        assert config['bold_font_path'] is None


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_installs_handler(self, monkeypatch):
        """Test the root logger gets the level and format."""
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", root.level)

        configure_logging("debug")

        assert root.level == logging.DEBUG
        assert root.handlers[0].formatter._fmt == LOG_FORMAT
