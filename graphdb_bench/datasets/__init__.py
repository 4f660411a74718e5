r"""
Dataset access for graphdb-bench.

    from graphdb_bench.datasets import EdgeListDataset, validate_readable_file_stream

    factory = validate_readable_file_stream("data/network.txt", "dataset")
    edges = list(EdgeListDataset(factory))
"""

from graphdb_bench.datasets.edgelist import EdgeListDataset
from graphdb_bench.datasets.stream import FileStreamFactory, StreamFactory, validate_readable_file_stream

__all__ = [
    "EdgeListDataset",
    "FileStreamFactory",
    "StreamFactory",
    "validate_readable_file_stream",
]
