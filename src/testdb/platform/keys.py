"""Platform scoped key resolution.

All platform specific behaviour is expressed as optional keys under
``ebean.test.<platform>.<key>``. Container only parameters may additionally
be overridden under ``docker.<platform>.<key>``.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from testdb.core.properties import PropertyStore

logger = logging.getLogger(__name__)

TEST_PREFIX = "ebean.test"
DOCKER_PREFIX = "docker"

DDL_MODE_KEY = f"{TEST_PREFIX}.ddlMode"
USE_DOCKER_KEY = f"{TEST_PREFIX}.useDocker"
CONTAINER_MODE_KEY = f"{TEST_PREFIX}.containerMode"
DB_NAME_KEY = f"{TEST_PREFIX}.dbName"


class PlatformKey(str, Enum):
    """Keys recognised under the platform namespace."""

    PORT = "port"
    URL = "url"
    DRIVER = "driver"
    USERNAME = "username"
    PASSWORD = "password"
    DATABASE_NAME = "databaseName"
    DATABASE_PLATFORM_NAME = "databasePlatformName"
    USE_DOCKER = "useDocker"
    VERSION = "version"
    EXTENSIONS = "extensions"
    CONTAINER_NAME = "containerName"
    IMAGE = "image"
    INTERNAL_PORT = "internalPort"
    START_MODE = "startMode"
    STOP_MODE = "stopMode"
    MAX_READY_ATTEMPTS = "maxReadyAttempts"
    TMPFS = "tmpfs"
    DB_ADMIN_USER = "dbAdminUser"
    DB_ADMIN_PASSWORD = "dbAdminPassword"


def _key_name(key: PlatformKey | str) -> str:
    return key.value if isinstance(key, PlatformKey) else key


def platform_key(platform: str, key: PlatformKey | str) -> str:
    """Full property name of a platform scoped override."""
    return f"{TEST_PREFIX}.{platform}.{_key_name(key)}"


def docker_key(platform: str, key: PlatformKey | str) -> str:
    """Full property name of a docker specific override."""
    return f"{DOCKER_PREFIX}.{platform}.{_key_name(key)}"


@dataclass(frozen=True)
class PlatformKeys:
    """Resolves overrides for one platform against a property store."""

    properties: PropertyStore
    platform: str

    def resolve(
        self, key: PlatformKey | str, default: str | None = None
    ) -> str | None:
        """Return ``ebean.test.<platform>.<key>`` or default when absent."""
        name = platform_key(self.platform, key)
        value = self.properties.get_property(name)
        if value is None:
            return default
        logger.debug(f"Resolved {name} from properties")
        return value

    def docker(
        self, key: PlatformKey | str, default: str | None = None
    ) -> str | None:
        """Return ``docker.<platform>.<key>`` or default when absent."""
        return self.properties.get_property(docker_key(self.platform, key), default)
