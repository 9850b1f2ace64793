"""Core building blocks: property store, errors and settings."""

from .exceptions import (
    ConfigOrderError,
    DdlModeError,
    DriverNotFoundError,
    MissingDataSourceFieldError,
    PropertiesFileError,
    TestConfigError,
    UnknownPlatformError,
)
from .properties import PropertyStore, load_properties

__all__ = [
    "PropertyStore",
    "load_properties",
    "TestConfigError",
    "DdlModeError",
    "MissingDataSourceFieldError",
    "DriverNotFoundError",
    "ConfigOrderError",
    "PropertiesFileError",
    "UnknownPlatformError",
]
