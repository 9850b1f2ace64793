"""Shared test fixtures and configuration."""

import sys
from pathlib import Path

import pytest

# Add src to path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from testdb.core.properties import PropertyStore  # noqa: E402
from testdb.platform import (  # noqa: E402
    Config,
    DatabaseServerConfig,
    StaticDriverRegistry,
)


@pytest.fixture
def properties() -> PropertyStore:
    """Provide an empty property store."""
    return PropertyStore()


@pytest.fixture
def server_config(properties: PropertyStore) -> DatabaseServerConfig:
    """Provide a server config sharing the properties fixture."""
    return DatabaseServerConfig(name="orders", properties=properties)


@pytest.fixture
def registry() -> StaticDriverRegistry:
    """Provide a driver registry knowing the built-in platform drivers."""
    return StaticDriverRegistry(["psycopg", "pymysql", "pyodbc", "sqlite3"])


@pytest.fixture
def make_config(server_config: DatabaseServerConfig):
    """Factory for a postgres Config with its fields defaulted."""

    def _make(
        platform: str = "postgres",
        database_name: str = "orders",
        port: int = 5432,
        url: str = "jdbc:postgresql://localhost:${port}/${databaseName}",
        driver: str | None = "psycopg",
    ) -> Config:
        config = Config("orders", platform, database_name, server_config)
        config.set_database_name(database_name)
        config.set_default_port(port)
        config.set_username_default()
        config.set_password_default()
        config.set_url(url)
        config.set_driver(driver)
        return config

    return _make
