r"""
Cache sizes for the clustering benchmark.

    from graphdb_bench.clustering import resolve_cache_values

    for cache_size in resolve_cache_values(config):
        ...
"""

from graphdb_bench.configuration import BenchmarkConfiguration
from graphdb_bench.errors import ConfigurationError
from graphdb_bench.types import BenchmarkType

__all__ = ["generate_cache_values", "resolve_cache_values"]


def generate_cache_values(count: int, increment_factor: float, nodes_count: int) -> list[int]:
    """Generate ``count`` cache sizes growing linearly with the graph size.

    The i-th size (1-based) is ``int(i * increment_factor * nodes_count)``.

        >>> generate_cache_values(3, 0.1, 1000)
        [100, 200, 300]
    """
    if count <= 0:
        msg = f"cache values count must be positive, got {count}"
        raise ValueError(msg)
    if increment_factor <= 0:
        msg = f"cache increment factor must be positive, got {increment_factor}"
        raise ValueError(msg)
    return [int(i * increment_factor * nodes_count) for i in range(1, count + 1)]


def resolve_cache_values(config: BenchmarkConfiguration) -> list[int]:
    """Cache sizes to run the clustering benchmark with."""
    if BenchmarkType.CLUSTERING not in config.benchmark_types:
        msg = f"{BenchmarkType.CLUSTERING.name} benchmark is not configured"
        raise ConfigurationError(msg, field="benchmarks")
    if config.cache_values is not None:
        return list(config.cache_values)
    return generate_cache_values(
        config.cache_values_count,  # type: ignore[arg-type]
        config.cache_increment_factor,  # type: ignore[arg-type]
        config.nodes_count,  # type: ignore[arg-type]
    )
