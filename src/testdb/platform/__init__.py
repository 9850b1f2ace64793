"""Test database platform configuration."""

from .config import Config
from .container import (
    DOCKER_PARAMS,
    ContainerParamBuilder,
    is_use_docker,
    trim_extensions,
)
from .datasource import (
    AcceptAllDriverRegistry,
    DataSourceConfig,
    DriverRegistry,
    ImportDriverRegistry,
    StaticDriverRegistry,
)
from .ddl import DDL_MODE_FLAGS, DDL_MODE_OPTIONS, DdlFlags, DdlMode
from .keys import PlatformKey, PlatformKeys, docker_key, platform_key
from .server import DatabaseServerConfig
from .setups import PLATFORM_SETUPS, PlatformSetup, get_setup, setup_platform

__all__ = [
    # Aggregate
    "Config",
    "DatabaseServerConfig",
    # Keys
    "PlatformKey",
    "PlatformKeys",
    "platform_key",
    "docker_key",
    # DDL
    "DdlMode",
    "DdlFlags",
    "DDL_MODE_FLAGS",
    "DDL_MODE_OPTIONS",
    # Datasource
    "DataSourceConfig",
    "AcceptAllDriverRegistry",
    "DriverRegistry",
    "ImportDriverRegistry",
    "StaticDriverRegistry",
    # Container
    "ContainerParamBuilder",
    "DOCKER_PARAMS",
    "is_use_docker",
    "trim_extensions",
    # Setups
    "PlatformSetup",
    "PLATFORM_SETUPS",
    "get_setup",
    "setup_platform",
]
