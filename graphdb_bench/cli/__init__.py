r"""
Command-line interface for graphdb-bench.

    graphdb-bench validate conf/bench.properties
    graphdb-bench insert conf/bench.properties -d orient --url remote:localhost/bench
"""

from graphdb_bench.cli.main import app, main

__all__ = [
    "app",
    "main",
]
