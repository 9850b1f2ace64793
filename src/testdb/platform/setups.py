"""Built-in platform setups.

Each setup carries the defaults of one database platform and runs the
``Config`` steps in their required order.
"""

import logging
from dataclasses import dataclass

from testdb.core.exceptions import UnknownPlatformError
from testdb.platform.config import Config
from testdb.platform.datasource import DriverRegistry
from testdb.platform.keys import DB_NAME_KEY
from testdb.platform.server import DatabaseServerConfig

logger = logging.getLogger(__name__)

DEFAULT_DB = "db"
DEFAULT_DATABASE_NAME = "test_db"
DEFAULT_DDL_MODE = "dropCreate"


@dataclass(frozen=True)
class PlatformSetup:
    """Defaults for one database platform.

    A username of None defaults to the database name, a password of None
    defaults to ``test``. A docker_version of None means the platform never
    runs in a container.
    """

    platform: str
    port: int
    url: str
    driver: str | None
    docker_version: str | None = None
    username: str | None = None
    password: str | None = None
    extensions: str | None = None
    ddl_mode: str = DEFAULT_DDL_MODE

    def setup(
        self,
        server_config: DatabaseServerConfig,
        db: str | None = None,
        database_name: str | None = None,
        registry: DriverRegistry | None = None,
    ) -> Config:
        """Resolve all settings for this platform into server_config."""
        db = db or server_config.name
        if database_name is None:
            database_name = server_config.properties.get_property(
                DB_NAME_KEY, DEFAULT_DATABASE_NAME
            )

        config = Config(db, self.platform, database_name, server_config)
        config.set_database_name(database_name)
        config.set_default_port(self.port)
        if self.username is None:
            config.set_username_default()
        else:
            config.set_username(self.username)
        if self.password is None:
            config.set_password_default()
        else:
            config.set_password(self.password)
        config.set_url(self.url)
        config.set_driver(self.driver)
        config.set_database_platform_name()

        config.ddl_mode(self.ddl_mode)
        config.datasource_defaults(registry)

        if self.docker_version is not None and config.is_use_docker():
            config.set_docker_version(self.docker_version)
            config.set_db_extensions(self.extensions)
        else:
            logger.info(f"Container not used for platform {self.platform}")
        return config


PLATFORM_SETUPS: dict[str, PlatformSetup] = {
    "postgres": PlatformSetup(
        platform="postgres",
        port=6432,
        url="postgresql+psycopg://localhost:${port}/${databaseName}",
        driver="psycopg",
        docker_version="15",
    ),
    "mysql": PlatformSetup(
        platform="mysql",
        port=4306,
        url="mysql+pymysql://localhost:${port}/${databaseName}",
        driver="pymysql",
        docker_version="8.0",
    ),
    "mariadb": PlatformSetup(
        platform="mariadb",
        port=4306,
        url="mariadb+pymysql://localhost:${port}/${databaseName}",
        driver="pymysql",
        docker_version="10.11",
    ),
    "sqlserver": PlatformSetup(
        platform="sqlserver",
        port=1433,
        url=(
            "mssql+pyodbc://localhost:${port}/${databaseName}"
            "?driver=ODBC+Driver+18+for+SQL+Server"
        ),
        driver="pyodbc",
        docker_version="2019-latest",
        username="sa",
        password="SqlS3rv#r",
    ),
    "sqlite": PlatformSetup(
        platform="sqlite",
        port=0,
        url="sqlite:///${databaseName}.db",
        driver="sqlite3",
    ),
}


def get_setup(platform: str) -> PlatformSetup:
    """Look up the built-in setup for a platform."""
    try:
        return PLATFORM_SETUPS[platform]
    except KeyError:
        raise UnknownPlatformError(platform, sorted(PLATFORM_SETUPS)) from None


def setup_platform(
    platform: str,
    server_config: DatabaseServerConfig,
    db: str | None = None,
    database_name: str | None = None,
    registry: DriverRegistry | None = None,
) -> Config:
    """Run the built-in setup for platform against server_config.

    Raises:
        UnknownPlatformError: If no setup exists for platform
        TestConfigError: For any configuration error raised by the setup steps
    """
    return get_setup(platform).setup(
        server_config, db=db, database_name=database_name, registry=registry
    )
