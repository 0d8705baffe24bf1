"""Configuration package."""

from hubplanner.config.settings import (
    AppSettings,
    EngineSettings,
    ExportSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "EngineSettings",
    "ExportSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
