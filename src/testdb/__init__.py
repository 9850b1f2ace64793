"""testdb - resolves test database, ddl mode and container settings."""

__version__ = "0.1.0"
