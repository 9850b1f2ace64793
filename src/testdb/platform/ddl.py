"""DDL mode selection.

Maps the ``ebean.test.ddlMode`` keyword to the set of schema management flags
it implies. Each mode has a plain flag record; nothing is derived by chaining
one mode's setup into another.
"""

from dataclasses import dataclass
from enum import Enum

from testdb.core.exceptions import DdlModeError
from testdb.core.properties import PropertyStore
from testdb.platform.keys import DDL_MODE_KEY

DDL_MODE_OPTIONS = (
    "dropCreate, create, none, migration, createOnly or migrationDropCreate"
)


class DdlMode(str, Enum):
    """Schema management strategy for the test database."""

    NONE = "none"
    MIGRATION = "migration"
    MIGRATION_DROP_CREATE = "migrationDropCreate"
    CREATE_ONLY = "createOnly"
    CREATE = "create"
    DROP_CREATE = "dropCreate"

    @classmethod
    def parse(cls, keyword: str | None) -> "DdlMode":
        """Parse a mode keyword, ignoring case and accepting plural aliases.

        Raises:
            DdlModeError: If keyword is None or not a known mode
        """
        if keyword is None:
            raise DdlModeError(None, DDL_MODE_OPTIONS)
        mode = _KEYWORDS.get(keyword.lower())
        if mode is None:
            raise DdlModeError(keyword, DDL_MODE_OPTIONS)
        return mode


_KEYWORDS: dict[str, DdlMode] = {
    "none": DdlMode.NONE,
    "migration": DdlMode.MIGRATION,
    "migrations": DdlMode.MIGRATION,
    "migrationdropcreate": DdlMode.MIGRATION_DROP_CREATE,
    "migrationsdropcreate": DdlMode.MIGRATION_DROP_CREATE,
    "createonly": DdlMode.CREATE_ONLY,
    "create": DdlMode.CREATE,
    "dropcreate": DdlMode.DROP_CREATE,
}


@dataclass(frozen=True)
class DdlFlags:
    """Flags implied by a ddl mode.

    ``container_drop_create`` of None leaves the aggregate's current value
    unchanged.
    """

    run_migration: bool = False
    disable_migration: bool = False
    ddl_generate: bool = False
    ddl_run: bool = False
    ddl_create_only: bool = False
    container_drop_create: bool | None = None


DDL_MODE_FLAGS: dict[DdlMode, DdlFlags] = {
    DdlMode.NONE: DdlFlags(disable_migration=True),
    DdlMode.MIGRATION: DdlFlags(run_migration=True),
    DdlMode.MIGRATION_DROP_CREATE: DdlFlags(
        run_migration=True,
        container_drop_create=True,
    ),
    DdlMode.CREATE_ONLY: DdlFlags(
        disable_migration=True,
        ddl_generate=True,
        ddl_run=True,
        ddl_create_only=True,
    ),
    DdlMode.CREATE: DdlFlags(
        disable_migration=True,
        ddl_generate=True,
        ddl_run=True,
        ddl_create_only=True,
        container_drop_create=True,
    ),
    DdlMode.DROP_CREATE: DdlFlags(
        disable_migration=True,
        ddl_generate=True,
        ddl_run=True,
    ),
}


def read_ddl_mode(properties: PropertyStore, default_mode: str | None) -> DdlMode:
    """Read the ddl mode from properties, falling back to default_mode."""
    return DdlMode.parse(properties.get_property(DDL_MODE_KEY, default_mode))


def flags_for(mode: DdlMode) -> DdlFlags:
    """Flag record for a mode."""
    return DDL_MODE_FLAGS[mode]
