r"""
OrientDB massive insertion.

Requires: pip install pyorient

Environment variables:
    GRAPHDB_BENCH_ORIENT_USER: Database and server user (default: root)
    GRAPHDB_BENCH_ORIENT_PASSWORD: Password (default: root)

    from graphdb_bench.insertion.orient import OrientMassiveInsertion

    insertion = OrientMassiveInsertion("remote:localhost:2424/bench")
    insertion.relate_nodes(insertion.get_or_create("1"), insertion.get_or_create("2"))
    insertion.post()
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from graphdb_bench.config import get_env
from graphdb_bench.insertion.registry import InsertionRegistry
from graphdb_bench.types import GraphDatabaseType

__all__ = ["OrientBatchInsert", "OrientMassiveInsertion", "OrientTarget"]

logger = logging.getLogger(__name__)

DEFAULT_BINARY_PORT = 2424

ClientFactory = Callable[[str, int], Any]


@dataclass(frozen=True, slots=True)
class OrientTarget:
    """Parsed OrientDB URL.

    Attributes:
        host: Server host.
        port: Binary protocol port.
        database: Database name.
    """

    host: str
    port: int
    database: str

    @classmethod
    def parse(cls, url: str) -> "OrientTarget":
        """Parse ``remote:<host>[:<port>]/<database>``."""
        scheme, sep, rest = url.partition(":")
        if not sep or scheme != "remote":
            msg = f"Unsupported OrientDB URL '{url}'. Expected remote:<host>[:<port>]/<database>"
            raise ValueError(msg)
        address, sep, database = rest.partition("/")
        if not sep or not database or not address:
            msg = f"OrientDB URL '{url}' must name a host and a database"
            raise ValueError(msg)
        host, sep, port = address.partition(":")
        try:
            return cls(host=host, port=int(port) if sep else DEFAULT_BINARY_PORT, database=database)
        except ValueError as e:
            msg = f"Invalid port in OrientDB URL '{url}'"
            raise ValueError(msg) from e

    def __str__(self) -> str:
        return f"remote:{self.host}:{self.port}/{self.database}"


def _pyorient_client(host: str, port: int) -> Any:
    try:
        import pyorient
    except ImportError as e:
        msg = "pyorient package not installed. Install with: pip install pyorient"
        raise ImportError(msg) from e
    return pyorient.OrientDB(host, port)


class OrientBatchInsert:
    """Batch insertion session for one OrientDB database.

    Vertices are identified by caller-supplied integer ids stored in
    the ``uid`` property. Vertices and edges are buffered in memory and
    written through SQL batch scripts when the buffer fills and on
    :meth:`end`.
    """

    VERTEX_CLASS = "V"
    EDGE_CLASS = "E"

    def __init__(
        self,
        client: Any,
        target: OrientTarget,
        *,
        user: str,
        password: str,
        flush_size: int = 10_000,
        statements_per_script: int = 500,
    ) -> None:
        self._client = client
        self._target = target
        self._user = user
        self._password = password
        self._flush_size = flush_size
        self._statements_per_script = statements_per_script
        self._estimated_entries = 0
        self._average_edges_per_node = 0
        self._pending_vertices: list[int] = []
        self._pending_edges: list[tuple[int, int]] = []
        self._written: set[int] = set()
        self._active = False

    @property
    def estimated_entries(self) -> int:
        return self._estimated_entries

    @property
    def average_edges_per_node(self) -> int:
        return self._average_edges_per_node

    @property
    def active(self) -> bool:
        return self._active

    def set_estimated_entries(self, entries: int) -> None:
        self._estimated_entries = entries

    def set_average_edge_number_per_node(self, edges: int) -> None:
        self._average_edges_per_node = edges

    def begin(self) -> None:
        """Open the database and prepare the uid index."""
        self._client.db_open(self._target.database, self._user, self._password)
        try:
            self._client.command(f"CREATE PROPERTY {self.VERTEX_CLASS}.uid IF NOT EXISTS LONG")
            self._client.command(
                f"CREATE INDEX {self.VERTEX_CLASS}.uid IF NOT EXISTS ON {self.VERTEX_CLASS} (uid) UNIQUE_HASH_INDEX"
            )
        except Exception:
            self._client.db_close()
            raise
        self._active = True
        logger.info(
            "Batch insert into %s started (estimated entries %d, average edges per node %d)",
            self._target,
            self._estimated_entries,
            self._average_edges_per_node,
        )

    def create_edge(self, source: int, destination: int) -> None:
        """Buffer an edge, creating both endpoint vertices if unseen."""
        if not self._active:
            msg = "Batch insert session is not active, call begin() first"
            raise RuntimeError(msg)
        for vertex in (source, destination):
            if vertex not in self._written:
                self._written.add(vertex)
                self._pending_vertices.append(vertex)
        self._pending_edges.append((source, destination))
        if len(self._pending_edges) >= self._flush_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered vertices, then buffered edges."""
        vertex_statements = [f"CREATE VERTEX {self.VERTEX_CLASS} SET uid = {uid}" for uid in self._pending_vertices]
        edge_statements = [
            f"CREATE EDGE {self.EDGE_CLASS} FROM (SELECT FROM {self.VERTEX_CLASS} WHERE uid = {src}) "
            f"TO (SELECT FROM {self.VERTEX_CLASS} WHERE uid = {dst})"
            for src, dst in self._pending_edges
        ]
        logger.debug("Flushing %d vertices and %d edges", len(vertex_statements), len(edge_statements))
        self._run_scripts(vertex_statements)
        self._run_scripts(edge_statements)
        self._pending_vertices.clear()
        self._pending_edges.clear()

    def _run_scripts(self, statements: list[str]) -> None:
        step = self._statements_per_script
        for i in range(0, len(statements), step):
            script = ";".join(["begin", *statements[i : i + step], "commit"])
            self._client.batch(script)

    def end(self) -> None:
        """Flush remaining writes and close the database."""
        if not self._active:
            return
        try:
            self.flush()
        finally:
            self._client.db_close()
            self._active = False
        logger.info("Batch insert into %s finished, %d vertices", self._target, len(self._written))


@InsertionRegistry.register(GraphDatabaseType.ORIENT_DB)
class OrientMassiveInsertion:
    """Massive insertion into OrientDB.

    Bulk loads run from a single thread, so the server's concurrency
    guard is switched off while the driver is open. :meth:`post`
    restores the value the server had before.
    """

    ESTIMATED_ENTRIES = 1_000_000
    AVERAGE_NUMBER_OF_EDGES_PER_NODE = 40
    NUMBER_OF_ORIENT_CLUSTERS = 16
    CONCURRENT_SETTING = "environment.concurrent"

    def __init__(
        self,
        url: str,
        *,
        user: str | None = None,
        password: str | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._target = OrientTarget.parse(url)
        self._user = user or get_env("ORIENT_USER", default="root")
        self._password = password or get_env("ORIENT_PASSWORD", default="root")
        self._client_factory = client_factory or _pyorient_client
        self._saved_concurrent: str | None = None

        self._disable_concurrency()
        try:
            self._create_clusters()
            self.graph = OrientBatchInsert(
                self._client_factory(self._target.host, self._target.port),
                self._target,
                user=self._user,
                password=self._password,
            )
            self.graph.set_average_edge_number_per_node(self.AVERAGE_NUMBER_OF_EDGES_PER_NODE)
            self.graph.set_estimated_entries(self.ESTIMATED_ENTRIES)
            self.graph.begin()
        except Exception:
            self._restore_concurrency()
            raise

    @property
    def database(self) -> GraphDatabaseType:
        return GraphDatabaseType.ORIENT_DB

    @property
    def target(self) -> OrientTarget:
        return self._target

    def _server(self) -> Any:
        server = self._client_factory(self._target.host, self._target.port)
        server.connect(self._user, self._password)
        return server

    def _disable_concurrency(self) -> None:
        server = self._server()
        try:
            previous = str(server.config_get(self.CONCURRENT_SETTING) or "true")
            server.config_set(self.CONCURRENT_SETTING, "false")
            self._saved_concurrent = previous
        finally:
            server.close()

    def _restore_concurrency(self) -> None:
        if self._saved_concurrent is None:
            return
        server = self._server()
        try:
            server.config_set(self.CONCURRENT_SETTING, self._saved_concurrent)
        finally:
            server.close()
        logger.debug("Restored %s=%s on %s", self.CONCURRENT_SETTING, self._saved_concurrent, self._target)
        self._saved_concurrent = None

    def _create_clusters(self) -> None:
        transactionless = self._client_factory(self._target.host, self._target.port)
        transactionless.db_open(self._target.database, self._user, self._password)
        try:
            for i in range(self.NUMBER_OF_ORIENT_CLUSTERS):
                transactionless.command(f"ALTER CLASS {OrientBatchInsert.VERTEX_CLASS} ADDCLUSTER v_{i}")
                transactionless.command(f"ALTER CLASS {OrientBatchInsert.EDGE_CLASS} ADDCLUSTER e_{i}")
        finally:
            transactionless.db_close()
        logger.debug("Created %d vertex and edge clusters in %s", self.NUMBER_OF_ORIENT_CLUSTERS, self._target)

    def get_or_create(self, value: str) -> int:
        return int(value)

    def relate_nodes(self, source: int, destination: int) -> None:
        self.graph.create_edge(source, destination)

    def post(self) -> None:
        try:
            self.graph.end()
        finally:
            self._restore_concurrency()

    def __repr__(self) -> str:
        state = "open" if self.graph.active else "closed"
        return f"<OrientMassiveInsertion {self._target} ({state})>"
