r"""
Massive insertion drivers for graphdb-bench.

Each driver loads a dataset into one backend through its bulk-load
API and is registered for its GraphDatabaseType.

    from graphdb_bench.insertion import InsertionRegistry
    from graphdb_bench.types import GraphDatabaseType

    driver = InsertionRegistry.create(GraphDatabaseType.ORIENT_DB, "remote:localhost/bench")
"""

from graphdb_bench.insertion.loader import results_file, run_massive_insertion, write_times
from graphdb_bench.insertion.neo4j import Neo4jMassiveInsertion
from graphdb_bench.insertion.orient import OrientBatchInsert, OrientMassiveInsertion, OrientTarget
from graphdb_bench.insertion.registry import InsertionRegistry

__all__ = [
    "InsertionRegistry",
    "Neo4jMassiveInsertion",
    "OrientBatchInsert",
    "OrientMassiveInsertion",
    "OrientTarget",
    "results_file",
    "run_massive_insertion",
    "write_times",
]
