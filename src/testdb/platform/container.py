"""Container (docker) launch parameters.

Builds the ``<platform>.<key>`` property map consumed by the container
launcher from the already resolved datasource values.
"""

import logging
import re

from testdb.platform.keys import (
    CONTAINER_MODE_KEY,
    USE_DOCKER_KEY,
    PlatformKey,
    PlatformKeys,
)

logger = logging.getLogger(__name__)

# Optional parameters copied to the container properties when set
DOCKER_PARAMS: tuple[PlatformKey, ...] = (
    PlatformKey.CONTAINER_NAME,
    PlatformKey.IMAGE,
    PlatformKey.INTERNAL_PORT,
    PlatformKey.START_MODE,
    PlatformKey.STOP_MODE,
    PlatformKey.MAX_READY_ATTEMPTS,
    PlatformKey.TMPFS,
    PlatformKey.DB_ADMIN_USER,
    PlatformKey.DB_ADMIN_PASSWORD,
)

_REPEATED_COMMAS = re.compile(r",{2,}")


def is_use_docker(keys: PlatformKeys) -> bool:
    """Container use is on unless useDocker resolves to "false"."""
    value = keys.resolve(
        PlatformKey.USE_DOCKER, keys.properties.get_property(USE_DOCKER_KEY)
    )
    return value is None or value.lower() != "false"


def trim_extensions(value: str) -> str:
    """Strip spaces and collapse repeated commas in an extension list."""
    return _REPEATED_COMMAS.sub(",", value.replace(" ", ""))


class ContainerParamBuilder:
    """Accumulates container properties for one platform."""

    def __init__(self, keys: PlatformKeys):
        self.keys = keys
        self.properties: dict[str, str] = {}

    def key(self, key: PlatformKey | str) -> str:
        name = key.value if isinstance(key, PlatformKey) else key
        return f"{self.keys.platform}.{name}"

    def put(self, key: PlatformKey | str, value: object | None) -> None:
        if value is not None:
            self.properties[self.key(key)] = str(value)

    def version(self, default: str | None) -> None:
        self.put(PlatformKey.VERSION, self.keys.resolve(PlatformKey.VERSION, default))

    def start_mode(self, drop_create: bool) -> None:
        if drop_create:
            self.put(PlatformKey.START_MODE, "dropCreate")
        mode = self.keys.properties.get_property(CONTAINER_MODE_KEY)
        if mode is not None:
            self.put(PlatformKey.START_MODE, mode)

    def connection(
        self,
        port: int,
        database_name: str | None,
        username: str | None,
        password: str | None,
        url: str | None,
        driver: str | None,
    ) -> None:
        self.put("port", port)
        self.put("dbName", database_name)
        self.put("dbUser", username)
        self.put("dbPassword", password)
        self.put("url", url)
        self.put("driver", driver)

    def optional_parameters(self) -> None:
        for key in DOCKER_PARAMS:
            value = self.keys.docker(key, self.keys.resolve(key))
            if value is not None:
                logger.debug(f"Container parameter {self.key(key)} set")
                self.put(key, value)

    def extensions(self, default: str | None) -> None:
        # ebean.test.postgres.extensions=hstore,pgcrypto
        value = self.keys.resolve(PlatformKey.EXTENSIONS, default)
        if value is not None:
            self.put("dbExtensions", trim_extensions(value))
