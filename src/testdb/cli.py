"""Command-line interface for testdb."""

import json
import logging
from pathlib import Path
from typing import Any

import click
from sqlalchemy.exc import ArgumentError

from testdb import __version__
from testdb.core.config.settings import LOG_LEVELS, get_settings
from testdb.core.exceptions import TestConfigError
from testdb.core.properties import PropertyStore, load_properties
from testdb.platform import (
    DDL_MODE_FLAGS,
    PLATFORM_SETUPS,
    AcceptAllDriverRegistry,
    Config,
    DatabaseServerConfig,
    DataSourceConfig,
    setup_platform,
)

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"


def setup_logging(log_level: str | None = None) -> None:
    """Configure root logging for CLI runs."""
    level = (log_level or get_settings().application.log_level).upper()
    logging.basicConfig(level=level, format=SIMPLE_FORMAT, force=True)


def parse_definitions(definitions: tuple[str, ...]) -> dict[str, str]:
    """Parse ``key=value`` property definitions."""
    values = {}
    for item in definitions:
        if "=" not in item:
            raise click.BadParameter(
                f"Invalid property '{item}'. Use key=value format.",
                param_hint="'-D'",
            )
        key, value = item.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def build_properties(
    properties_file: Path | None, definitions: tuple[str, ...]
) -> PropertyStore:
    """Load the property file (explicit or from settings) and apply -D entries."""
    store = PropertyStore()
    if properties_file is not None:
        store.update_from(load_properties(properties_file))
    else:
        source = get_settings().properties
        if source.properties_file.exists() or not source.ignore_missing_file:
            store.update_from(load_properties(source.properties_file))

    store.update_from(parse_definitions(definitions))
    return store


def connection_url(datasource: DataSourceConfig) -> str | None:
    """The datasource url as a SQLAlchemy url with credentials, password hidden."""
    if not datasource.url:
        return None
    try:
        url = datasource.sqlalchemy_url()
    except ArgumentError as e:
        raise TestConfigError(
            f"Datasource url is not a SQLAlchemy url: {datasource.url}"
        ) from e
    return url.render_as_string(hide_password=True)


def describe(config: Config) -> dict[str, Any]:
    """Summary of a resolved config for output.

    Raises:
        TestConfigError: If the datasource url cannot be parsed by SQLAlchemy
    """
    server = config.server_config
    datasource = None
    if server.datasource is not None:
        datasource = server.datasource.to_dict()
        datasource["connectionUrl"] = connection_url(server.datasource)
    return {
        "platform": config.platform,
        "db": config.db,
        "ddlMode": config.mode.value if config.mode else None,
        "ddl": {
            "generate": server.ddl_generate,
            "run": server.ddl_run,
            "createOnly": server.ddl_create_only,
            "runMigration": server.run_migration,
            "migrationDisabled": server.migration_disabled,
        },
        "containerDropCreate": config.container_drop_create,
        "datasource": datasource,
        "container": dict(config.container_properties),
    }


def echo_text(summary: dict[str, Any]) -> None:
    click.echo(f"Platform: {summary['platform']} (db: {summary['db']})")
    click.echo(f"DDL mode: {summary['ddlMode']}")
    for key, value in summary["ddl"].items():
        click.echo(f"   {key}: {str(value).lower()}")

    click.echo("Datasource:")
    for key, value in (summary["datasource"] or {}).items():
        if key == "password" and value:
            value = "***"
        click.echo(f"   {key}: {value}")

    container = summary["container"]
    if not container:
        click.echo("Container: not used")
        return
    click.echo("Container:")
    for key, value in container.items():
        if key.endswith("Password"):
            value = "***"
        click.echo(f"   {key}={value}")


@click.group()
@click.version_option(version=__version__, prog_name="testdb")
def cli() -> None:
    """testdb - test database settings resolver"""
    pass


@cli.command()
def info() -> None:
    """Show project information."""
    click.echo(f"testdb v{__version__}")
    click.echo("Resolves test database, ddl mode and container settings")


@cli.command()
def modes() -> None:
    """List the ddl modes and the flags each one sets."""
    for mode, flags in DDL_MODE_FLAGS.items():
        enabled = [name for name, value in vars(flags).items() if value]
        click.echo(f"{mode.value}: {', '.join(enabled) or '-'}")


@cli.command()
def platforms() -> None:
    """List the built-in platform setups."""
    for name, setup in PLATFORM_SETUPS.items():
        docker = setup.docker_version or "no container"
        click.echo(f"{name}: port {setup.port}, driver {setup.driver}, docker {docker}")


@cli.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("platform")
@click.option("--db", default=None, help="Logical datasource name (default: db)")
@click.option("--database-name", default=None, help="Database name")
@click.option(
    "--properties",
    "-p",
    "properties_file",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML or .properties file (overrides TESTDB_PROPERTIES_FILE)",
)
@click.option(
    "--define",
    "-D",
    "definitions",
    multiple=True,
    help="Property override (format: key=value)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "properties"]),
    default="text",
    help="Output format",
)
@click.option(
    "--skip-driver-check", is_flag=True, help="Do not check the driver is installed"
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (overrides LOG_LEVEL)",
)
def resolve(
    platform: str,
    db: str | None,
    database_name: str | None,
    properties_file: Path | None,
    definitions: tuple[str, ...],
    output_format: str,
    skip_driver_check: bool,
    log_level: str | None,
) -> None:
    """Resolve the settings for PLATFORM and print them.

    Examples:
        testdb resolve postgres -D ebean.test.ddlMode=create
        testdb resolve mysql --db orders -p application-test.yaml --format json
    """
    setup_logging(log_level)

    try:
        properties = build_properties(properties_file, definitions)
        server_config = DatabaseServerConfig(name=db or "db", properties=properties)
        registry = AcceptAllDriverRegistry() if skip_driver_check else None
        config = setup_platform(
            platform,
            server_config,
            database_name=database_name,
            registry=registry,
        )
        summary = describe(config)
    except TestConfigError as e:
        raise click.ClickException(f"❌ {e}") from e

    if output_format == "json":
        click.echo(json.dumps(summary, indent=2))
    elif output_format == "properties":
        for key, value in config.container_properties.items():
            click.echo(f"{key}={value}")
    else:
        echo_text(summary)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
