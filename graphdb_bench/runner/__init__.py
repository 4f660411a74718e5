r"""
Benchmark timing helpers.

    from graphdb_bench.runner import Stopwatch

    with Stopwatch() as watch:
        load()
"""

from graphdb_bench.runner.timing import Stopwatch, Timed, timed

__all__ = [
    "Stopwatch",
    "Timed",
    "timed",
]
