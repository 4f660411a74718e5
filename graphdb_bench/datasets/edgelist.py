r"""
Edge-list datasets in SNAP format.

One edge per line, source and destination separated by whitespace.
Lines starting with ``#`` are comments.

    from graphdb_bench.datasets import EdgeListDataset

    for source, destination in EdgeListDataset(config.dataset):
        ...
"""

import io
from collections.abc import Iterator

from graphdb_bench.datasets.stream import StreamFactory

__all__ = ["EdgeListDataset"]


class EdgeListDataset:
    """Iterable of (source, destination) node tokens.

    Every iteration opens a new stream from the factory.
    """

    def __init__(self, factory: StreamFactory, *, encoding: str = "utf-8") -> None:
        self._factory = factory
        self._encoding = encoding

    def __iter__(self) -> Iterator[tuple[str, str]]:
        with self._factory() as raw, io.TextIOWrapper(raw, encoding=self._encoding) as text:
            for lineno, line in enumerate(text, start=1):
                stripped = line.strip()
                if not stripped or stripped.startswith("#"):
                    continue
                tokens = stripped.split()
                if len(tokens) < 2:
                    msg = f"line {lineno}: expected source and destination, got {stripped!r}"
                    raise ValueError(msg)
                yield tokens[0], tokens[1]

    def node_ids(self) -> set[str]:
        """All node tokens appearing in the dataset."""
        nodes: set[str] = set()
        for source, destination in self:
            nodes.add(source)
            nodes.add(destination)
        return nodes
