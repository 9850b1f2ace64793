"""Datasource descriptor and driver registries."""

import importlib.util
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from sqlalchemy.engine import URL, make_url

logger = logging.getLogger(__name__)


@dataclass
class DataSourceConfig:
    """Resolved connection descriptor handed to the database server config."""

    url: str | None = None
    driver: str | None = None
    username: str | None = None
    password: str | None = None

    def sqlalchemy_url(self) -> URL:
        """Return the url as a SQLAlchemy URL carrying the credentials.

        Raises:
            ValueError: If no url is set
            sqlalchemy.exc.ArgumentError: If the url is not a SQLAlchemy url
        """
        if not self.url:
            raise ValueError("Datasource url not resolved")
        return make_url(self.url).set(username=self.username, password=self.password)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "url": self.url,
            "driver": self.driver,
            "username": self.username,
            "password": self.password,
        }

    def __repr__(self) -> str:
        return (
            f"DataSourceConfig(url={self.url!r}, driver={self.driver!r}, "
            f"username={self.username!r}, password='***')"
        )


@runtime_checkable
class DriverRegistry(Protocol):
    """Answers whether a driver identifier is usable in this environment."""

    def is_available(self, driver: str) -> bool: ...


class ImportDriverRegistry:
    """Treats drivers as DB-API module names and checks they can be imported.

    The module is located, not imported, so the check has no side effects.
    """

    def is_available(self, driver: str) -> bool:
        try:
            found = importlib.util.find_spec(driver) is not None
        except (ImportError, ValueError):
            found = False
        logger.debug(f"Driver {driver} available: {found}")
        return found


class AcceptAllDriverRegistry:
    """Registry that accepts every driver, for resolving settings offline."""

    def is_available(self, driver: str) -> bool:
        return True


class StaticDriverRegistry:
    """Registry backed by a fixed set of driver names."""

    def __init__(self, drivers: Iterable[str] = ()):
        self.drivers = set(drivers)

    def register(self, driver: str) -> None:
        self.drivers.add(driver)

    def is_available(self, driver: str) -> bool:
        return driver in self.drivers
