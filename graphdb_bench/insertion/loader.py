r"""
Streaming a dataset into a massive insertion driver.

    from graphdb_bench.datasets import EdgeListDataset
    from graphdb_bench.insertion import InsertionRegistry, run_massive_insertion

    driver = InsertionRegistry.create(GraphDatabaseType.ORIENT_DB, url)
    result = run_massive_insertion(driver, EdgeListDataset(config.dataset))
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from graphdb_bench.configuration import BenchmarkConfiguration
from graphdb_bench.protocols import MassiveInsertion
from graphdb_bench.runner.timing import Stopwatch
from graphdb_bench.types import BenchmarkType, GraphDatabaseType, InsertionResult

__all__ = ["results_file", "run_massive_insertion", "write_times"]

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 1000


def run_massive_insertion(
    driver: MassiveInsertion,
    edges: Iterable[tuple[str, str]],
    *,
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> InsertionResult:
    """Load every edge through ``driver`` and finalize it.

    Args:
        driver: Open insertion driver; it is finalized on success.
        edges: (source, destination) token pairs.
        block_size: Edges per timed block.

    Returns:
        InsertionResult with one time per full block and the total.
    """
    if block_size <= 0:
        msg = f"block_size must be positive, got {block_size}"
        raise ValueError(msg)

    logger.info("Loading data in massive mode into %s", driver.database.api)
    count = 0
    with Stopwatch() as watch:
        for source, destination in edges:
            src = driver.get_or_create(source)
            dst = driver.get_or_create(destination)
            driver.relate_nodes(src, dst)
            count += 1
            if count % block_size == 0:
                logger.debug("Block of %d edges took %.1f ms", block_size, watch.lap())
        driver.post()

    result = InsertionResult(
        database=driver.database,
        edges=count,
        block_times_ms=tuple(watch.laps_ms),
        total_ms=watch.elapsed_ms,
    )
    logger.info("Inserted %d edges into %s in %.1f ms", count, driver.database.api, result.total_ms)
    return result


def results_file(
    config: BenchmarkConfiguration,
    benchmark: BenchmarkType,
    database: GraphDatabaseType,
    scenario: int,
) -> Path:
    """Result file for one benchmark run, e.g. ``results/MassiveInsertion.orient.1``."""
    return config.results_path / f"{benchmark.results_name}.{database.short_name}.{scenario}"


def write_times(times: Sequence[float], path: str | Path) -> None:
    """Write one time per line."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{t}\n" for t in times))
