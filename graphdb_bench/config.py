r"""
Configuration sources and environment settings.

Benchmark parameters come from a properties (or TOML) file whose keys
are dotted paths. Connection credentials come from environment
variables prefixed with GRAPHDB_BENCH_, optionally set in a .env file.

    from graphdb_bench.config import load_configuration

    source = load_configuration("conf/bench.properties")
    socialsensor = source.subset("eu.socialsensor")
    print(socialsensor.get_list("databases"))
"""

import os
import tomllib
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

import javaproperties
from dotenv import load_dotenv

from graphdb_bench.errors import ConfigurationError

__all__ = [
    "ConfigSource",
    "DEFAULT_CONFIG_ROOT",
    "ENV_PREFIX",
    "get_env",
    "load_configuration",
]

# Look for .env in current dir, then next to the package
_env_file = Path(".env")
if not _env_file.exists():
    _env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

ENV_PREFIX = "GRAPHDB_BENCH_"

DEFAULT_CONFIG_ROOT = "eu.socialsensor"

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})
_MISSING = object()


def get_env(key: str, *, default: str | None = None) -> str | None:
    """Get environment variable with GRAPHDB_BENCH_ prefix.

    Args:
        key: Variable name without prefix (e.g., "ORIENT_USER").
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


class ConfigSource(Mapping[str, Any]):
    """Read-only view over dotted configuration keys.

    A subset strips a key prefix, so ``source.subset("eu").subset("socialsensor")``
    exposes ``eu.socialsensor.dataset`` as ``dataset``.
    """

    def __init__(self, values: Mapping[str, Any] | None = None, *, prefix: str = "") -> None:
        self._values: dict[str, Any] = dict(values or {})
        self._prefix = prefix

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"<ConfigSource prefix={self._prefix!r} keys={len(self._values)}>"

    @property
    def prefix(self) -> str:
        """Full dotted prefix of this view, empty for the root."""
        return self._prefix

    def qualified(self, key: str) -> str:
        """Full dotted name of a key in this view."""
        return f"{self._prefix}.{key}" if self._prefix else key

    def subset(self, prefix: str) -> "ConfigSource":
        """Return the keys below ``prefix`` with the prefix removed."""
        head = f"{prefix}."
        values = {key[len(head) :]: value for key, value in self._values.items() if key.startswith(head)}
        return ConfigSource(values, prefix=self.qualified(prefix))

    def contains(self, key: str) -> bool:
        return key in self._values

    def _lookup(self, key: str, default: Any) -> Any:
        if key in self._values:
            return self._values[key]
        if default is _MISSING:
            msg = f"configuration must specify {key}"
            raise ConfigurationError(msg, field=self.qualified(key))
        return default

    def _invalid(self, key: str, value: Any, expected: str) -> ConfigurationError:
        msg = f"{self.qualified(key)} must be {expected}, got {value!r}"
        return ConfigurationError(msg, field=self.qualified(key))

    def get_string(self, key: str, default: Any = _MISSING) -> str | None:
        value = self._lookup(key, default)
        if value is None:
            return None
        return str(value)

    def get_bool(self, key: str, default: Any = _MISSING) -> bool | None:
        value = self._lookup(key, default)
        if value is None or isinstance(value, bool):
            return value
        lowered = str(value).strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise self._invalid(key, value, "a boolean")

    def get_int(self, key: str, default: Any = _MISSING) -> int | None:
        value = self._lookup(key, default)
        if value is None:
            return None
        if isinstance(value, bool):
            raise self._invalid(key, value, "an integer")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError as e:
            raise self._invalid(key, value, "an integer") from e

    def get_float(self, key: str, default: Any = _MISSING) -> float | None:
        value = self._lookup(key, default)
        if value is None:
            return None
        if isinstance(value, bool):
            raise self._invalid(key, value, "a number")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise self._invalid(key, value, "a number") from e

    def get_list(self, key: str, default: Any = _MISSING) -> list[Any]:
        """Get a list value; strings are split on commas."""
        value = self._lookup(key, default)
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Sequence):
            return list(value)
        return [value]


def _flatten(table: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in table.items():
        name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


def _read_properties(path: Path) -> dict[str, str]:
    # Java line rules: leading whitespace ignored, trailing backslash continues
    return javaproperties.loads(path.read_text(encoding="utf-8"))


def load_configuration(path: str | Path) -> ConfigSource:
    """Load a configuration file into a ConfigSource.

    Args:
        path: A Java ``.properties`` file (``key = value``, ``key: value`` or
            ``key value`` lines, backslash continuations, comma-separated
            lists) or a ``.toml`` file (nested tables become dotted keys).

    Returns:
        Root configuration view.

    Raises:
        ConfigurationError: If the file does not exist or cannot be parsed.
    """
    path = Path(path)
    if not path.is_file():
        msg = f"configuration file {path} does not exist"
        raise ConfigurationError(msg)

    try:
        if path.suffix == ".toml":
            with path.open("rb") as fh:
                values = _flatten(tomllib.load(fh))
        else:
            values = _read_properties(path)
    except ValueError as e:
        msg = f"unable to parse configuration file {path}: {e}"
        raise ConfigurationError(msg) from e

    return ConfigSource(values)
