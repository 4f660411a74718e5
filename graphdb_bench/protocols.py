r"""
Protocol definitions for insertion drivers.

A massive insertion driver loads a whole dataset into one backend
through that backend's bulk-load API. Drivers do not share a base
class; any class providing these members can be registered.

    from graphdb_bench.protocols import MassiveInsertion

    assert isinstance(driver, MassiveInsertion)
"""

from typing import Any, Protocol, runtime_checkable

from graphdb_bench.types import GraphDatabaseType

__all__ = ["MassiveInsertion"]


@runtime_checkable
class MassiveInsertion(Protocol):
    """Protocol for bulk-load drivers.

    The driver is opened against its target when constructed and is
    used by a single caller until :meth:`post` is called.
    """

    @property
    def database(self) -> GraphDatabaseType:
        """Backend this driver loads into."""
        ...

    def get_or_create(self, value: str) -> Any:
        """Return the vertex id for a dataset token, creating it if needed."""
        ...

    def relate_nodes(self, source: Any, destination: Any) -> None:
        """Create an edge between two vertex ids."""
        ...

    def post(self) -> None:
        """Finish the load, flushing buffered writes and releasing resources."""
        ...
