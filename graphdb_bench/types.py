r"""
Core types and registries for graph database benchmarks.

    from graphdb_bench.types import DATABASE_BY_NAME, BenchmarkType, GraphDatabaseType

    database = DATABASE_BY_NAME["orient"]
    assert database is GraphDatabaseType.ORIENT_DB
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

__all__ = [
    "BenchmarkType",
    "DATABASE_BY_NAME",
    "GraphDatabaseType",
    "InsertionResult",
]


class GraphDatabaseType(Enum):
    """Supported graph database backends.

    Member order is the canonical order used when sorting a selection.

    Attributes:
        api: Engine family driving the backend.
        backend: Storage backend name (Titan only).
        short_name: Name used in configuration files.
    """

    TITAN_BERKELEYDB = ("Titan", "berkeleyje", "tbdb")
    TITAN_DYNAMODB = ("Titan", "com.amazon.titan.diskstorage.dynamodb.DynamoDBStoreManager", "tddb")
    TITAN_CASSANDRA = ("Titan", "cassandrathrift", "tc")
    TITAN_CASSANDRA_EMBEDDED = ("TitanEmbedded", "embeddedcassandra", "tce")
    TITAN_HBASE = ("Titan", "hbase", "thb")
    TITAN_PERSISTIT = ("Titan", "persistit", "tp")
    ORIENT_DB = ("OrientDB", None, "orient")
    NEO4J = ("Neo4j", None, "neo4j")
    SPARKSEE = ("Sparksee", None, "sparksee")

    def __init__(self, api: str, backend: str | None, short_name: str) -> None:
        self.api = api
        self.backend = backend
        self.short_name = short_name

    @property
    def rank(self) -> int:
        """Position in the canonical registry order."""
        return _CANONICAL_ORDER[self]

    @property
    def is_titan(self) -> bool:
        return self.backend is not None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, GraphDatabaseType):
            return NotImplemented
        return self.rank < other.rank


_CANONICAL_ORDER: dict[GraphDatabaseType, int] = {db: i for i, db in enumerate(GraphDatabaseType)}

DATABASE_BY_NAME: Mapping[str, GraphDatabaseType] = MappingProxyType(
    {db.short_name: db for db in GraphDatabaseType}
)


class BenchmarkType(Enum):
    """Benchmark kinds the harness can schedule.

    Attributes:
        long_name: Human-readable name.
        results_name: Prefix for result files.
    """

    MASSIVE_INSERTION = ("Massive Insertion", "MassiveInsertion")
    SINGLE_INSERTION = ("Single Insertion", "SingleInsertion")
    DELETION = ("Delete Graph", "DeleteGraph")
    FIND_NEIGHBOURS = ("Find Neighbours of All Nodes", "FindNeighbours")
    FIND_ADJACENT_NODES = ("Find Adjacent Nodes of All Edges", "FindAdjacent")
    FIND_SHORTEST_PATH = ("Find Shortest Path", "FindShortest")
    FIND_NEIGHBOURS_OF_NEIGHBOURS = ("Find Neighbours of Neighbours", "FindNeighboursOfNeighbours")
    CLUSTERING = ("Clustering", "Clustering")

    def __init__(self, long_name: str, results_name: str) -> None:
        self.long_name = long_name
        self.results_name = results_name


@dataclass(frozen=True, slots=True)
class InsertionResult:
    """Outcome of one massive insertion run.

    Attributes:
        database: Backend the dataset was loaded into.
        edges: Number of edges relayed to the driver.
        block_times_ms: Elapsed milliseconds for each completed block.
        total_ms: Elapsed milliseconds for the whole load, finalization included.
    """

    database: GraphDatabaseType
    edges: int
    block_times_ms: tuple[float, ...] = ()
    total_ms: float = 0.0

    @property
    def edges_per_second(self) -> float:
        """Insertion throughput based on total time."""
        if self.total_ms == 0:
            return float("inf")
        return self.edges / (self.total_ms / 1000)

    def times(self) -> list[float]:
        """Block times followed by the total, the layout written to result files."""
        return [*self.block_times_ms, self.total_ms]
