"""Tests for the Config aggregate."""

import pytest

from testdb.core.exceptions import DdlModeError, TestConfigError
from testdb.platform.ddl import DDL_MODE_OPTIONS, DdlMode


class TestFieldDefaults:
    """Test the field setters."""

    @pytest.mark.unit
    def test_port_default_and_override(self, make_config, properties):
        # Arrange
        config = make_config(port=5432)

        # Act
        properties["ebean.test.postgres.port"] = "7432"
        config.set_default_port(5432)

        # Assert
        assert config.port == 7432

    @pytest.mark.unit
    def test_invalid_port(self, make_config, properties):
        # Arrange
        config = make_config()
        properties["ebean.test.postgres.port"] = "five"

        # Act / Assert
        with pytest.raises(TestConfigError, match="Invalid port \\[five\\]"):
            config.set_default_port(5432)

    @pytest.mark.unit
    def test_url_substitution(self, make_config):
        config = make_config(
            port=3306, database_name="shop", url="mysql://h:${port}/${databaseName}"
        )
        assert config.url == "mysql://h:3306/shop"

    @pytest.mark.unit
    def test_explicit_username_and_password(self, make_config, properties):
        # Arrange
        config = make_config()
        properties["ebean.test.postgres.password"] = "override"

        # Act
        config.set_username("sa")
        config.set_password("SqlS3rv#r")

        # Assert
        assert config.username == "sa"
        assert config.password == "override"

    @pytest.mark.unit
    def test_database_platform_name(self, make_config, properties):
        # Arrange
        properties["ebean.test.sqlserver.databasePlatformName"] = "sqlserver17"
        config = make_config(platform="sqlserver")

        # Act
        config.set_database_platform_name()

        # Assert
        assert properties["ebean.orders.databasePlatformName"] == "sqlserver17"

    @pytest.mark.unit
    def test_database_platform_name_absent(self, make_config, properties):
        # Arrange
        config = make_config()

        # Act
        config.set_database_platform_name()

        # Assert
        assert "ebean.orders.databasePlatformName" not in properties


class TestDdlModeSelection:
    """Test Config.ddl_mode applies each mode's flags."""

    @pytest.mark.unit
    def test_none(self, make_config, properties):
        # Arrange
        config = make_config()

        # Act
        flags = config.ddl_mode("none")

        # Assert
        server = config.server_config
        assert flags.disable_migration is True
        assert config.migration_disabled is True
        assert server.migration_disabled is True
        assert server.run_migration is False
        assert server.ddl_generate is False
        assert config.container_drop_create is False
        assert properties.with_prefix("ebean.orders.") == {}

    @pytest.mark.unit
    @pytest.mark.parametrize("keyword", ["migration", "migrations", "MIGRATION"])
    def test_migration(self, make_config, properties, keyword):
        # Arrange
        config = make_config()

        # Act
        config.ddl_mode(keyword)

        # Assert
        server = config.server_config
        assert config.mode is DdlMode.MIGRATION
        assert server.run_migration is True
        assert server.migration_disabled is False
        assert config.container_drop_create is False
        assert properties.with_prefix("ebean.orders.") == {
            "ebean.orders.migration.run": "true"
        }

    @pytest.mark.unit
    @pytest.mark.parametrize("keyword", ["migrationDropCreate", "migrationsdropcreate"])
    def test_migration_drop_create(self, make_config, properties, keyword):
        # Arrange
        config = make_config()

        # Act
        config.ddl_mode(keyword)

        # Assert
        assert config.server_config.run_migration is True
        assert config.container_drop_create is True
        assert properties["ebean.orders.migration.run"] == "true"

    @pytest.mark.unit
    def test_create_only(self, make_config, properties):
        # Arrange
        config = make_config()

        # Act
        config.ddl_mode("createOnly")

        # Assert
        server = config.server_config
        assert (server.ddl_generate, server.ddl_run, server.ddl_create_only) == (
            True,
            True,
            True,
        )
        assert server.migration_disabled is True
        assert config.container_drop_create is False
        assert properties.with_prefix("ebean.orders.") == {
            "ebean.orders.ddl.generate": "true",
            "ebean.orders.ddl.run": "true",
            "ebean.orders.ddl.createOnly": "true",
        }

    @pytest.mark.unit
    def test_create(self, make_config, properties):
        # Arrange
        config = make_config()

        # Act
        config.ddl_mode("CREATE")

        # Assert
        server = config.server_config
        assert (server.ddl_generate, server.ddl_run, server.ddl_create_only) == (
            True,
            True,
            True,
        )
        assert config.container_drop_create is True
        assert properties["ebean.orders.ddl.createOnly"] == "true"

    @pytest.mark.unit
    def test_drop_create(self, make_config, properties):
        # Arrange
        config = make_config()

        # Act
        config.ddl_mode("dropCreate")

        # Assert
        server = config.server_config
        assert server.ddl_generate is True
        assert server.ddl_run is True
        assert server.ddl_create_only is False
        assert config.container_drop_create is False
        assert "ebean.orders.ddl.createOnly" not in properties

    @pytest.mark.unit
    def test_property_beats_default(self, make_config, properties):
        # Arrange
        properties["ebean.test.ddlMode"] = "migration"
        config = make_config()

        # Act
        config.ddl_mode("dropCreate")

        # Assert
        assert config.mode is DdlMode.MIGRATION
        assert config.server_config.ddl_generate is False

    @pytest.mark.unit
    @pytest.mark.parametrize("default", [None, "rebuild"])
    def test_invalid_mode(self, make_config, properties, default):
        # Arrange
        config = make_config()

        # Act / Assert
        with pytest.raises(DdlModeError) as exc_info:
            config.ddl_mode(default)

        assert DDL_MODE_OPTIONS in str(exc_info.value)
        assert config.ddl_flags is None
        assert properties.with_prefix("ebean.orders.") == {}

    @pytest.mark.unit
    def test_selected_once(self, make_config):
        # Arrange
        config = make_config()
        config.ddl_mode("none")

        # Act / Assert
        with pytest.raises(TestConfigError, match="already selected"):
            config.ddl_mode("migration")


class TestEndToEnd:
    """Test the full setup sequence on a hand built Config."""

    @pytest.mark.integration
    def test_postgres_orders_create(self, make_config, registry, properties):
        """Test postgres / orders / create resolves flags, url and container."""
        # Arrange
        properties["ebean.test.ddlMode"] = "create"
        config = make_config(
            platform="postgres",
            database_name="orders",
            port=5432,
            url="jdbc:postgresql://localhost:${port}/${databaseName}",
        )

        # Act
        config.ddl_mode("dropCreate")
        ds = config.datasource_defaults(registry)
        assert config.is_use_docker()
        config.set_docker_version("15")
        config.set_db_extensions(None)

        # Assert
        server = config.server_config
        assert server.ddl_generate is True
        assert server.ddl_run is True
        assert server.ddl_create_only is True
        assert config.container_drop_create is True
        assert ds.url == "jdbc:postgresql://localhost:5432/orders"
        assert ds.username == "orders"
        assert properties["datasource.orders.url"] == ds.url
        assert config.container_properties["postgres.startMode"] == "dropCreate"
        assert config.container_properties["postgres.url"] == ds.url

    @pytest.mark.integration
    def test_url_override_is_substituted_in_every_output(
        self, make_config, registry, properties
    ):
        """Test a platform url template reaches all outputs with values filled in."""
        # Arrange
        properties["ebean.test.postgres.url"] = (
            "jdbc:postgresql://db:${port}/${databaseName}"
        )
        config = make_config(database_name="orders", port=5432)
        config.ddl_mode("migration")

        # Act
        ds = config.datasource_defaults(registry)
        config.set_docker_version("15")

        # Assert
        expected = "jdbc:postgresql://db:5432/orders"
        assert ds.url == expected
        assert config.server_config.datasource.url == expected
        assert properties["datasource.orders.url"] == expected
        assert config.container_properties["postgres.url"] == expected
