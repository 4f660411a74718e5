r"""
Database and benchmark selection.

    from graphdb_bench.selection import count_scenarios, select_databases

    databases = select_databases(["orient", "tbdb"])
    scenarios = count_scenarios(len(databases), permute=True)  # 2
"""

import math
from collections.abc import Iterable

from graphdb_bench.errors import ConfigurationError
from graphdb_bench.types import DATABASE_BY_NAME, BenchmarkType, GraphDatabaseType

__all__ = ["MAX_SCENARIOS", "count_scenarios", "parse_benchmark_types", "select_databases"]

# Scenario counts are reported as signed 32-bit integers
MAX_SCENARIOS = 2**31 - 1


def select_databases(names: Iterable[object]) -> tuple[GraphDatabaseType, ...]:
    """Validate database names and return them in canonical order.

    Args:
        names: Short names as written in configuration (e.g. "orient", "tbdb").

    Returns:
        Duplicate-free tuple ordered by the registry, not by input.

    Raises:
        ConfigurationError: On the first name that is not supported.
    """
    selected: set[GraphDatabaseType] = set()
    for name in names:
        database = DATABASE_BY_NAME.get(str(name))
        if database is None:
            msg = f"selected database {name} not supported"
            raise ConfigurationError(msg, field="databases")
        selected.add(database)
    return tuple(sorted(selected))


def parse_benchmark_types(names: Iterable[object]) -> list[BenchmarkType]:
    """Map configured benchmark names to BenchmarkType members."""
    types: list[BenchmarkType] = []
    for name in names:
        try:
            types.append(BenchmarkType[str(name)])
        except KeyError as e:
            valid = ", ".join(b.name for b in BenchmarkType)
            msg = f"selected benchmark {name} not supported. Valid benchmarks: {valid}"
            raise ConfigurationError(msg, field="benchmarks") from e
    return types


def count_scenarios(database_count: int, *, permute: bool) -> int:
    """Number of benchmark scenarios to run.

    With permutation every execution order of the selected databases
    is a scenario, so the count is ``database_count!``.

    Raises:
        OverflowError: If the count does not fit a signed 32-bit integer.
    """
    if not permute:
        return 1
    scenarios = math.factorial(database_count)
    if scenarios > MAX_SCENARIOS:
        msg = f"{database_count}! scenarios exceeds {MAX_SCENARIOS}"
        raise OverflowError(msg)
    return scenarios
