"""Configuration package - Environment-driven settings and logging setup."""

from .settings import Settings, settings, configure_logging, LOG_FORMAT

__all__ = [
    'Settings',
    'settings',
    'configure_logging',
    'LOG_FORMAT',
]
