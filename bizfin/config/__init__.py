"""Configuration package."""

from bizfin.config.settings import (
    AppSettings,
    MatchingSettings,
    ReportSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "MatchingSettings",
    "ReportSettings",
    "Settings",
    "get_settings",
]
