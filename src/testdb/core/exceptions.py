"""Configuration exceptions.

Every error raised while assembling test database settings is fatal: the
caller is expected to abort before any connection or container is attempted.
"""

from pathlib import Path


class TestConfigError(Exception):
    """Base exception for test database configuration errors."""

    __test__ = False


class DdlModeError(TestConfigError):
    """Raised when the ddl mode keyword is missing or not recognised."""

    def __init__(self, mode: str | None, options: str):
        self.mode = mode
        self.options = options
        if mode is None:
            message = f"No ebean.test.ddlMode set?  Expect one of {options}"
        else:
            message = (
                f"Unknown ebean.test.ddlMode [{mode}] expecting one of {options}"
            )
        super().__init__(message)


class MissingDataSourceFieldError(TestConfigError):
    """Raised when a required datasource field has not been set."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} not set?")


class DriverNotFoundError(TestConfigError):
    """Raised when the configured driver is not available at runtime."""

    def __init__(self, driver: str):
        self.driver = driver
        super().__init__(
            f"Database driver {driver} does not appear to be installed?"
        )


class ConfigOrderError(TestConfigError):
    """Raised when a setup step runs before the steps it depends on."""

    def __init__(self, step: str, requires: str):
        self.step = step
        self.requires = requires
        super().__init__(f"Cannot run {step} before {requires}")


class PropertiesFileError(TestConfigError):
    """Raised when a properties file cannot be read or parsed."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"Properties file '{path}' failed: {message}")


class UnknownPlatformError(TestConfigError):
    """Raised when no built-in setup exists for a platform."""

    def __init__(self, platform: str, known: list[str]):
        self.platform = platform
        self.known = known
        super().__init__(
            f"Unknown platform '{platform}', expecting one of {', '.join(known)}"
        )
