"""Property store and property file loading.

The property store is the single configuration medium shared by every
resolver. It is both read (overrides) and written (resolved values that
collaborators pick up under datasource specific keys).
"""

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from pathlib import Path
from typing import Any

import yaml

from testdb.core.exceptions import PropertiesFileError

logger = logging.getLogger(__name__)


class PropertyStore(MutableMapping[str, str]):
    """Ordered, mutable mapping of dotted keys to string values."""

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values: dict[str, str] = {}
        if values:
            for key, value in values.items():
                self[key] = value

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if value is None:
            raise ValueError(f"Property '{key}' cannot be set to None")
        self._values[str(key)] = _to_property_value(value)

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PropertyStore({self._values!r})"

    def get_property(self, key: str, default: str | None = None) -> str | None:
        """Return the value for key, or default when absent."""
        return self._values.get(key, default)

    def set_property(self, key: str, value: Any) -> None:
        """Set a property, converting the value to its string form."""
        logger.debug(f"Setting property {key}")
        self[key] = value

    def update_from(self, values: Mapping[str, Any]) -> None:
        """Apply values on top of the existing properties."""
        for key, value in values.items():
            self[key] = value

    def with_prefix(self, prefix: str) -> dict[str, str]:
        """Return the properties whose key starts with prefix."""
        return {k: v for k, v in self._values.items() if k.startswith(prefix)}


def _to_property_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_mapping(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted keys.

    Example:
        >>> flatten_mapping({"ebean": {"test": {"ddlMode": "create"}}})
        {'ebean.test.ddlMode': 'create'}
    """
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_mapping(value, full_key))
        elif isinstance(value, list):
            flat[full_key] = ",".join(_to_property_value(v) for v in value)
        elif value is not None:
            flat[full_key] = _to_property_value(value)
    return flat


def parse_properties_text(text: str) -> dict[str, str]:
    """Parse the content of a ``.properties`` file.

    Supports ``key=value`` and ``key: value`` entries, with ``#`` and ``!``
    comment lines. Continuation lines are not supported.
    """
    values: dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped[0] in "#!":
            continue

        separators = [i for i in (stripped.find("="), stripped.find(":")) if i > 0]
        if not separators:
            values[stripped] = ""
            continue

        index = min(separators)
        values[stripped[:index].strip()] = stripped[index + 1 :].strip()
    return values


def load_properties(path: Path | str) -> dict[str, str]:
    """Load properties from a YAML or ``.properties`` file.

    Args:
        path: File to read. ``.yaml``/``.yml`` files are flattened to dotted
            keys, anything else is parsed as a properties file.

    Returns:
        Mapping of dotted keys to string values

    Raises:
        PropertiesFileError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise PropertiesFileError(path, "file not found")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PropertiesFileError(path, str(e)) from e

    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            # BaseLoader keeps scalars as written, so 15.10 stays "15.10"
            data = yaml.load(text, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            raise PropertiesFileError(path, f"invalid YAML: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise PropertiesFileError(path, "top level must be a mapping")
        values = flatten_mapping(data)
    else:
        values = parse_properties_text(text)

    logger.info(f"Loaded {len(values)} properties from {path}")
    return values
