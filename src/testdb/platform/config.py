"""Config for a database / datasource with associated DDL mode and container setup."""

import logging

from testdb.core.exceptions import (
    ConfigOrderError,
    DriverNotFoundError,
    MissingDataSourceFieldError,
    TestConfigError,
)
from testdb.platform.container import ContainerParamBuilder, is_use_docker
from testdb.platform.datasource import (
    DataSourceConfig,
    DriverRegistry,
    ImportDriverRegistry,
)
from testdb.platform.ddl import DdlFlags, DdlMode, flags_for, read_ddl_mode
from testdb.platform.keys import PlatformKey, PlatformKeys
from testdb.platform.server import DatabaseServerConfig

logger = logging.getLogger(__name__)


class Config:
    """Resolves the settings of one datasource on one platform.

    The setup calls are expected in a fixed order: field defaults, then
    ``ddl_mode()``, then ``datasource_defaults()``, then (when
    ``is_use_docker()``) ``set_docker_version()`` and ``set_db_extensions()``.
    """

    def __init__(
        self,
        db: str,
        platform: str,
        database_name: str | None,
        server_config: DatabaseServerConfig,
    ):
        self.db = db
        self.platform = platform
        self.database_name = database_name
        self.server_config = server_config
        self.properties = server_config.properties
        self.keys = PlatformKeys(self.properties, platform)

        self.port: int = 0
        self.url: str | None = None
        self.driver: str | None = None
        self.username: str | None = None
        self.password: str | None = None
        self.container_drop_create = False

        self.ddl_flags: DdlFlags | None = None
        self.datasource: DataSourceConfig | None = None
        self.mode: DdlMode | None = None
        self._container = ContainerParamBuilder(self.keys)

    @property
    def container_properties(self) -> dict[str, str]:
        """Container parameters, empty unless container use was set up."""
        return self._container.properties

    @property
    def migration_disabled(self) -> bool:
        return self.ddl_flags is not None and self.ddl_flags.disable_migration

    # -- field defaults ---------------------------------------------------

    def set_default_port(self, default_port: int) -> None:
        value = self.keys.resolve(PlatformKey.PORT)
        if value is None:
            self.port = default_port
            return
        try:
            self.port = int(value)
        except ValueError as e:
            raise TestConfigError(
                f"Invalid port [{value}] for platform {self.platform}"
            ) from e

    def set_database_name(self, database_name: str | None) -> None:
        self.database_name = self.keys.resolve(PlatformKey.DATABASE_NAME, database_name)

    def set_url(self, url_pattern: str | None) -> None:
        value = self.keys.resolve(PlatformKey.URL, url_pattern)
        if value is not None:
            value = value.replace("${port}", str(self.port))
            if self.database_name is not None:
                value = value.replace("${databaseName}", self.database_name)
        self.url = value

    def set_driver(self, driver: str | None) -> None:
        self.driver = self.keys.resolve(PlatformKey.DRIVER, driver)

    def set_username(self, username: str | None) -> None:
        self.username = self.keys.resolve(PlatformKey.USERNAME, username)

    def set_username_default(self) -> None:
        """Default the username to the database name."""
        self.username = self.keys.resolve(
            PlatformKey.USERNAME,
            self.keys.resolve(PlatformKey.DATABASE_NAME, self.database_name),
        )

    def set_password(self, password: str | None) -> None:
        self.password = self.keys.resolve(PlatformKey.PASSWORD, password)

    def set_password_default(self) -> None:
        self.set_password("test")

    def set_database_platform_name(self) -> None:
        """Only needed where several platforms share a database kind (sqlserver)."""
        name = self.keys.resolve(PlatformKey.DATABASE_PLATFORM_NAME)
        if name is not None:
            self.properties.set_property(f"ebean.{self.db}.databasePlatformName", name)

    # -- ddl mode ---------------------------------------------------------

    def ddl_mode(self, default_mode: str | None) -> DdlFlags:
        """Select the ddl mode and apply its flags.

        Raises:
            DdlModeError: If no mode is set or the mode is unknown
        """
        if self.ddl_flags is not None:
            raise TestConfigError(f"ddl mode already selected for db {self.db}")

        mode = read_ddl_mode(self.properties, default_mode)
        flags = flags_for(mode)
        logger.info(f"Using ddl mode {mode.value} for db {self.db}")

        if flags.container_drop_create is not None:
            self.container_drop_create = flags.container_drop_create

        server = self.server_config
        if flags.disable_migration:
            server.migration_disabled = True
        if flags.run_migration:
            server.run_migration = True
            self.properties.set_property(f"ebean.{self.db}.migration.run", "true")
        if flags.ddl_generate:
            server.ddl_generate = True
            self.set_ddl_property("generate")
        if flags.ddl_run:
            server.ddl_run = True
            self.set_ddl_property("run")
        if flags.ddl_create_only:
            server.ddl_create_only = True
            self.set_ddl_property("createOnly")

        self.mode = mode
        self.ddl_flags = flags
        return flags

    def set_ddl_property(self, key: str) -> None:
        self.properties.set_property(f"ebean.{self.db}.ddl.{key}", "true")

    # -- datasource -------------------------------------------------------

    def datasource_defaults(
        self, registry: DriverRegistry | None = None
    ) -> DataSourceConfig:
        """Resolve the connection descriptor and mirror it into the properties.

        Raises:
            MissingDataSourceFieldError: If username or password is not set
            DriverNotFoundError: If the driver is not available in the registry
        """
        if not self.username:
            raise MissingDataSourceFieldError("username")
        if not self.password:
            raise MissingDataSourceFieldError("password")

        ds = DataSourceConfig(
            url=self.url,
            driver=self.driver,
            username=self.username,
            password=self.password,
        )
        if ds.driver is not None:
            registry = registry or ImportDriverRegistry()
            if not registry.is_available(ds.driver):
                raise DriverNotFoundError(ds.driver)

        self.mirror_datasource(ds)
        self.server_config.datasource = ds
        self.datasource = ds

        logger.info(f"Datasource {self.db} url:{ds.url} username:{ds.username}")
        return ds

    def mirror_datasource(self, ds: DataSourceConfig) -> None:
        """Write the resolved fields under ``datasource.<db>.<key>``."""
        for key, value in ds.to_dict().items():
            if value is not None:
                self.properties.set_property(f"datasource.{self.db}.{key}", value)

    # -- container --------------------------------------------------------

    def is_use_docker(self) -> bool:
        return is_use_docker(self.keys)

    def set_docker_version(self, version: str | None) -> None:
        """Build the container properties from the resolved state.

        Raises:
            ConfigOrderError: If ddl mode or datasource have not been resolved
        """
        if self.ddl_flags is None:
            raise ConfigOrderError("container setup", "ddl mode selection")
        if self.datasource is None:
            raise ConfigOrderError("container setup", "datasource resolution")

        builder = self._container
        builder.version(version)
        builder.start_mode(self.container_drop_create)
        builder.connection(
            port=self.port,
            database_name=self.database_name,
            username=self.username,
            password=self.password,
            url=self.url,
            driver=self.driver,
        )
        builder.optional_parameters()
        logger.info(
            f"Container properties for {self.platform}: "
            f"{len(builder.properties)} entries"
        )

    def set_db_extensions(self, default_value: str | None) -> None:
        self._container.extensions(default_value)
