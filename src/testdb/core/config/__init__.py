"""
Configuration management module.
"""

from .settings import (
    ApplicationSettings,
    PropertySourceSettings,
    Settings,
    get_settings,
    load_settings,
)

__all__ = [
    "Settings",
    "ApplicationSettings",
    "PropertySourceSettings",
    "get_settings",
    "load_settings",
]
