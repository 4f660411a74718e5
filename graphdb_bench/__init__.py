r"""
graphdb-bench: benchmark harness for graph databases.

Drives OrientDB, Titan, Neo4j and Sparksee through a common insertion
interface, configured from a properties file.

    from graphdb_bench import BenchmarkConfiguration
    from graphdb_bench.insertion import InsertionRegistry

    config = BenchmarkConfiguration.load("conf/bench.properties")
    for database in config.selected_databases:
        print(database.short_name)
"""

from graphdb_bench.configuration import BenchmarkConfiguration
from graphdb_bench.errors import ConfigurationError, DatasetOpenError
from graphdb_bench.types import DATABASE_BY_NAME, BenchmarkType, GraphDatabaseType, InsertionResult

__all__ = [
    "BenchmarkConfiguration",
    "BenchmarkType",
    "ConfigurationError",
    "DATABASE_BY_NAME",
    "DatasetOpenError",
    "GraphDatabaseType",
    "InsertionResult",
]

__version__ = "0.1.0"
