"""Configuration module for LIGHTFIELD."""

from lightfield.config.settings import (
    Settings,
    WindowSettings,
    FieldSettings,
    BoardSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "WindowSettings",
    "FieldSettings",
    "BoardSettings",
    "get_settings",
]
