"""hifztrack utilities."""

from .settings_loader import load_settings, read_settings_file, DEFAULT_SETTINGS_PATH

__all__ = [
    "load_settings",
    "read_settings_file",
    "DEFAULT_SETTINGS_PATH",
]
