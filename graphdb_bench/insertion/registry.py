r"""
Registry of massive insertion drivers.

    from graphdb_bench.insertion.registry import InsertionRegistry
    from graphdb_bench.types import GraphDatabaseType

    driver = InsertionRegistry.create(GraphDatabaseType.ORIENT_DB, "remote:localhost/bench")
"""

from collections.abc import Callable
from typing import Any

from graphdb_bench.protocols import MassiveInsertion
from graphdb_bench.types import GraphDatabaseType

__all__ = ["InsertionRegistry"]

DriverFactory = Callable[..., MassiveInsertion]


class InsertionRegistry:
    """Maps each backend to its massive insertion driver."""

    _drivers: dict[GraphDatabaseType, DriverFactory] = {}

    @classmethod
    def register(cls, database: GraphDatabaseType) -> Any:
        """Decorator to register a driver class for a backend."""

        def decorator(driver_cls: DriverFactory) -> DriverFactory:
            cls._drivers[database] = driver_cls
            return driver_cls

        return decorator

    @classmethod
    def get(cls, database: GraphDatabaseType) -> DriverFactory | None:
        """Get the driver class for a backend."""
        return cls._drivers.get(database)

    @classmethod
    def list(cls) -> list[GraphDatabaseType]:
        """Backends with a registered driver, in canonical order."""
        return sorted(cls._drivers)

    @classmethod
    def create(cls, database: GraphDatabaseType, url: str, **kwargs: Any) -> MassiveInsertion:
        """Open a driver for ``database`` against ``url``."""
        driver_cls = cls.get(database)
        if driver_cls is None:
            valid = ", ".join(db.short_name for db in cls.list()) or "none"
            msg = f"No massive insertion driver for '{database.short_name}'. Registered: {valid}"
            raise ValueError(msg)
        return driver_cls(url, **kwargs)
