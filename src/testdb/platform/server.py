"""Database server configuration handed to the ORM layer."""

from dataclasses import dataclass, field

from testdb.core.properties import PropertyStore
from testdb.platform.datasource import DataSourceConfig


@dataclass
class DatabaseServerConfig:
    """Configuration for one database server.

    ``properties`` is shared with every ``Config`` built for this server and
    receives the resolved values under datasource specific keys.
    """

    name: str = "db"
    properties: PropertyStore = field(default_factory=PropertyStore)

    # Schema management
    ddl_generate: bool = False
    ddl_run: bool = False
    ddl_create_only: bool = False
    run_migration: bool = False
    migration_disabled: bool = False

    datasource: DataSourceConfig | None = None
