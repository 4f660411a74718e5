r"""
Neo4j massive insertion.

Requires: pip install neo4j

Environment variables:
    GRAPHDB_BENCH_NEO4J_USER: Username (default: neo4j)
    GRAPHDB_BENCH_NEO4J_PASSWORD: Password (default: benchmark)

    from graphdb_bench.insertion.neo4j import Neo4jMassiveInsertion

    insertion = Neo4jMassiveInsertion("bolt://localhost:7687")
"""

import logging
from collections.abc import Callable
from typing import Any

from graphdb_bench.config import get_env
from graphdb_bench.insertion.registry import InsertionRegistry
from graphdb_bench.types import GraphDatabaseType

__all__ = ["Neo4jMassiveInsertion"]

logger = logging.getLogger(__name__)

DriverFactory = Callable[..., Any]

NODE_LABEL = "Node"
RELATIONSHIP_TYPE = "SIMILAR"


def _neo4j_driver(uri: str, *, auth: tuple[str, str] | None) -> Any:
    try:
        from neo4j import GraphDatabase
    except ImportError as e:
        msg = "neo4j package not installed. Install with: pip install neo4j"
        raise ImportError(msg) from e
    return GraphDatabase.driver(uri, auth=auth)


@InsertionRegistry.register(GraphDatabaseType.NEO4J)
class Neo4jMassiveInsertion:
    """Massive insertion into Neo4j through batched UNWIND statements."""

    def __init__(
        self,
        url: str,
        *,
        user: str | None = None,
        password: str | None = None,
        batch_size: int = 10_000,
        driver_factory: DriverFactory | None = None,
    ) -> None:
        user = user or get_env("NEO4J_USER", default="neo4j")
        password = password or get_env("NEO4J_PASSWORD", default="benchmark")
        auth = (user, password) if password else None

        self._url = url
        self._batch_size = batch_size
        self._pending: list[dict[str, int]] = []
        self._driver = (driver_factory or _neo4j_driver)(url, auth=auth)
        try:
            self._driver.verify_connectivity()
            with self._driver.session() as session:
                session.run(
                    f"CREATE CONSTRAINT node_uid IF NOT EXISTS FOR (n:{NODE_LABEL}) REQUIRE n.uid IS UNIQUE"
                )
        except Exception:
            self._driver.close()
            raise
        logger.info("Neo4j batch insert into %s started", url)

    @property
    def database(self) -> GraphDatabaseType:
        return GraphDatabaseType.NEO4J

    def get_or_create(self, value: str) -> int:
        return int(value)

    def relate_nodes(self, source: int, destination: int) -> None:
        if self._driver is None:
            msg = "Neo4j insertion already finished"
            raise RuntimeError(msg)
        self._pending.append({"src": source, "dst": destination})
        if len(self._pending) >= self._batch_size:
            self._flush()

    def _flush(self) -> None:
        if not self._pending:
            return
        query = f"""
        UNWIND $edges AS edge
        MERGE (a:{NODE_LABEL} {{uid: edge.src}})
        MERGE (b:{NODE_LABEL} {{uid: edge.dst}})
        CREATE (a)-[:{RELATIONSHIP_TYPE}]->(b)
        """
        with self._driver.session() as session:
            session.run(query, edges=self._pending)
        logger.debug("Flushed %d edges to %s", len(self._pending), self._url)
        self._pending = []

    def post(self) -> None:
        if self._driver is None:
            return
        try:
            self._flush()
        finally:
            self._driver.close()
            self._driver = None
        logger.info("Neo4j batch insert into %s finished", self._url)
