"""
Configuration management using Pydantic Settings.

Environment variables (all optional, prefixed with HOCRKIT_):
- HOCRKIT_LOG_LEVEL: Level used by configure_logging
- HOCRKIT_RENDER_SCALE: Scale factor applied when rendering pages
- HOCRKIT_RENDER_STROKE_WIDTH: Outline width for rendered rectangles
- HOCRKIT_RENDER_FONT_PATH: TrueType font used for rendered words
- HOCRKIT_RENDER_BOLD_FONT_PATH / _ITALIC_FONT_PATH / _BOLD_ITALIC_FONT_PATH:
  Fonts for styled words; unset styles use the plain font
- HOCRKIT_RENDER_FONT_SIZE: Font size for rendered words
- HOCRKIT_RENDER_BACKGROUND_COLOR / _FONT_COLOR / _RECTANGLE_COLOR: Colors
"""
import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HOCRKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="WARNING")

    # Rendering
    render_scale: float = Field(default=1.0, gt=0)
    render_stroke_width: int = Field(default=3, ge=1)
    render_font_path: str = Field(default="/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf")
    render_bold_font_path: Optional[str] = Field(default=None)
    render_italic_font_path: Optional[str] = Field(default=None)
    render_bold_italic_font_path: Optional[str] = Field(default=None)
    render_font_size: int = Field(default=15, ge=1)
    render_background_color: str = Field(default="white")
    render_font_color: str = Field(default="red")
    render_rectangle_color: str = Field(default="orange")

    def get_renderer_config(self) -> dict:
        """Get renderer configuration as dictionary."""
        return {
            'scale': self.render_scale,
            'stroke_width': self.render_stroke_width,
            'font_path': self.render_font_path,
            'font_size': self.render_font_size,
            'background_color': self.render_background_color,
            'font_color': self.render_font_color,
            'rectangle_color': self.render_rectangle_color,
            'bold_font_path': self.render_bold_font_path,
            'italic_font_path': self.render_italic_font_path,
            'bold_italic_font_path': self.render_bold_italic_font_path,
        }


# Global settings instance
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install a basic log handler for the application.

    Args:
        level: Level name such as "DEBUG"; defaults to ``settings.log_level``
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
