r"""
Validated benchmark configuration.

All keys live under the ``eu.socialsensor`` namespace:

    eu.socialsensor.dataset = data/network.txt
    eu.socialsensor.database-storage-directory = storage
    eu.socialsensor.results-path = results
    eu.socialsensor.permute-benchmarks = false
    eu.socialsensor.benchmarks = MASSIVE_INSERTION, FIND_SHORTEST_PATH
    eu.socialsensor.databases = orient, neo4j
    eu.socialsensor.repetitions = 3

Optional sections: ``metrics.csv.*``, ``metrics.graphite.*``,
``orient.*``, ``sparksee.*`` and ``titan.*``.

    from graphdb_bench.configuration import BenchmarkConfiguration

    config = BenchmarkConfiguration.load("conf/bench.properties")
    for database in config.selected_databases:
        ...
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from graphdb_bench.config import DEFAULT_CONFIG_ROOT, ConfigSource, load_configuration
from graphdb_bench.datasets.stream import FileStreamFactory, validate_readable_file_stream
from graphdb_bench.errors import ConfigurationError
from graphdb_bench.selection import count_scenarios, parse_benchmark_types, select_databases
from graphdb_bench.types import BenchmarkType, GraphDatabaseType

__all__ = [
    "BenchmarkConfiguration",
    "REQUIRED_FIELDS",
    "TITAN_DEFAULTS",
]

logger = logging.getLogger(__name__)

# benchmark keys
DATASET = "dataset"
DATABASE_STORAGE_DIRECTORY = "database-storage-directory"
ACTUAL_COMMUNITIES = "actual-communities"
NODES_COUNT = "nodes-count"
REPETITIONS = "repetitions"
RANDOMIZE_CLUSTERING = "randomize-clustering"
CACHE_VALUES = "cache-values"
CACHE_INCREMENT_FACTOR = "cache-increment-factor"
CACHE_VALUES_COUNT = "cache-values-count"
PERMUTE_BENCHMARKS = "permute-benchmarks"
RANDOM_NODES = "shortest-path-random-nodes"
RESULTS_PATH = "results-path"
BENCHMARKS = "benchmarks"
DATABASES = "databases"

# backend keys
LIGHTWEIGHT_EDGES = "lightweight-edges"
LICENSE_KEY = "license-key"
BUFFER_SIZE = "buffer-size"
IDS_BLOCKSIZE = "block-size"
PAGE_SIZE = "page-size"

# metrics keys
CSV_DIR = "directory"
GRAPHITE_HOSTNAME = "hostname"
REPORTING_INTERVAL = "interval"

DEFAULT_REPORTING_INTERVAL_MS = 1000
DEFAULT_RANDOM_NODES = 100

# Titan storage defaults
TITAN_DEFAULTS: Mapping[str, int] = MappingProxyType({
    BUFFER_SIZE: 1024,
    IDS_BLOCKSIZE: 10_000,
    PAGE_SIZE: 100,
})

# Keys each benchmark type needs beyond the always-required ones
REQUIRED_FIELDS: Mapping[BenchmarkType, frozenset[str]] = MappingProxyType({
    BenchmarkType.FIND_NEIGHBOURS_OF_NEIGHBOURS: frozenset({NODES_COUNT}),
    BenchmarkType.CLUSTERING: frozenset({NODES_COUNT, RANDOMIZE_CLUSTERING, ACTUAL_COMMUNITIES}),
})


def _non_empty_list(source: ConfigSource, key: str) -> list[object]:
    values = source.get_list(key)
    if not values:
        msg = f"{key} must list at least one value"
        raise ConfigurationError(msg, field=source.qualified(key))
    return values


def _require_conditional_fields(source: ConfigSource, benchmark_types: list[BenchmarkType]) -> None:
    for benchmark in benchmark_types:
        for key in sorted(REQUIRED_FIELDS.get(benchmark, ())):
            if not source.contains(key):
                msg = f"the {benchmark.name} benchmark requires {key} in config"
                raise ConfigurationError(msg, field=source.qualified(key))


def _cache_values(source: ConfigSource) -> tuple[tuple[int, ...] | None, int | None, float | None]:
    if source.contains(CACHE_VALUES):
        values: list[int] = []
        for item in _non_empty_list(source, CACHE_VALUES):
            try:
                values.append(int(str(item).strip()))
            except ValueError as e:
                msg = f"{CACHE_VALUES} must be a list of integers, got {item!r}"
                raise ConfigurationError(msg, field=source.qualified(CACHE_VALUES)) from e
        return tuple(values), None, None

    if source.contains(CACHE_VALUES_COUNT) and source.contains(CACHE_INCREMENT_FACTOR):
        count = source.get_int(CACHE_VALUES_COUNT)
        factor = source.get_float(CACHE_INCREMENT_FACTOR)
        for key, value in ((CACHE_VALUES_COUNT, count), (CACHE_INCREMENT_FACTOR, factor)):
            if value <= 0:
                msg = f"{key} must be positive, got {value}"
                raise ConfigurationError(msg, field=source.qualified(key))
        return None, count, factor

    msg = (
        f"the {BenchmarkType.CLUSTERING.name} benchmark requires {CACHE_VALUES}, "
        f"or {CACHE_VALUES_COUNT} and {CACHE_INCREMENT_FACTOR} to generate them"
    )
    raise ConfigurationError(msg, field=source.qualified(CACHE_VALUES))


def _results_directory(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"unable to create results directory {path}"
        raise ConfigurationError(msg, field=RESULTS_PATH) from e
    if not os.access(path, os.W_OK):
        msg = f"unable to write to results directory {path}"
        raise ConfigurationError(msg, field=RESULTS_PATH)
    return path


@dataclass(frozen=True, slots=True)
class BenchmarkConfiguration:
    """Benchmark parameters, validated and resolved.

    Build with :meth:`from_source` or :meth:`load`; both either return a
    complete configuration or raise ConfigurationError.

    Attributes:
        dataset: Factory opening the dataset for reading.
        benchmark_types: Benchmarks to run, in configured order.
        selected_databases: Databases to benchmark, in canonical order.
        results_path: Existing, writable results directory.
        db_storage_directory: Where backends keep their files (not checked).
        repetitions: Times each benchmark is repeated.
        permute_benchmarks: Whether every database order is benchmarked.
        scenarios: Number of database orderings (1 without permutation).
        random_nodes: Random node sample size for shortest path.
        nodes_count: Node count, set for neighbours-of-neighbours and clustering.
        randomized_clustering: Clustering randomization flag.
        actual_communities: Factory opening the reference communities file.
        cache_values: Explicit clustering cache sizes.
        cache_values_count: Number of cache sizes to generate.
        cache_increment_factor: Growth factor for generated cache sizes.
        csv_dir: CSV metrics directory, None disables CSV reporting.
        csv_reporting_interval: CSV reporting interval in milliseconds.
        graphite_hostname: Graphite host, None or empty disables Graphite.
        graphite_reporting_interval: Graphite reporting interval in milliseconds.
        orient_lightweight_edges: OrientDB lightweight edge setting.
        sparksee_license_key: Sparksee license key.
        titan_buffer_size: Titan storage buffer size.
        titan_ids_blocksize: Titan id block size.
        titan_page_size: Titan storage page size.
    """

    dataset: FileStreamFactory
    benchmark_types: tuple[BenchmarkType, ...]
    selected_databases: tuple[GraphDatabaseType, ...]
    results_path: Path
    db_storage_directory: Path
    repetitions: int
    permute_benchmarks: bool
    scenarios: int
    random_nodes: int = DEFAULT_RANDOM_NODES
    nodes_count: int | None = None
    randomized_clustering: bool | None = None
    actual_communities: FileStreamFactory | None = None
    cache_values: tuple[int, ...] | None = None
    cache_values_count: int | None = None
    cache_increment_factor: float | None = None
    csv_dir: Path | None = None
    csv_reporting_interval: int = DEFAULT_REPORTING_INTERVAL_MS
    graphite_hostname: str | None = None
    graphite_reporting_interval: int = DEFAULT_REPORTING_INTERVAL_MS
    orient_lightweight_edges: bool | None = None
    sparksee_license_key: str | None = None
    titan_buffer_size: int = TITAN_DEFAULTS[BUFFER_SIZE]
    titan_ids_blocksize: int = TITAN_DEFAULTS[IDS_BLOCKSIZE]
    titan_page_size: int = TITAN_DEFAULTS[PAGE_SIZE]

    @classmethod
    def load(cls, path: str | Path, *, working_dir: str | Path | None = None) -> "BenchmarkConfiguration":
        """Load and validate a configuration file."""
        return cls.from_source(load_configuration(path), working_dir=working_dir)

    @classmethod
    def from_source(
        cls,
        appconfig: ConfigSource | Mapping[str, object] | None,
        *,
        working_dir: str | Path | None = None,
    ) -> "BenchmarkConfiguration":
        """Validate a configuration source.

        Args:
            appconfig: Root configuration; a plain mapping of dotted keys
                is accepted as well.
            working_dir: Base for a relative results path. Defaults to the
                process working directory.

        Raises:
            ValueError: If ``appconfig`` is None.
            ConfigurationError: If any field is missing or invalid.
        """
        if appconfig is None:
            msg = "appconfig may not be None"
            raise ValueError(msg)
        if not isinstance(appconfig, ConfigSource):
            appconfig = ConfigSource(appconfig)

        socialsensor = appconfig.subset(DEFAULT_CONFIG_ROOT)

        metrics = socialsensor.subset("metrics")
        graphite = metrics.subset("graphite")
        csv = metrics.subset("csv")
        csv_dir = csv.get_string(CSV_DIR) if csv.contains(CSV_DIR) else None

        orient = socialsensor.subset("orient")
        sparksee = socialsensor.subset("sparksee")
        titan = socialsensor.subset("titan")

        if not socialsensor.contains(DATABASE_STORAGE_DIRECTORY):
            msg = f"configuration must specify {DATABASE_STORAGE_DIRECTORY}"
            raise ConfigurationError(msg, field=socialsensor.qualified(DATABASE_STORAGE_DIRECTORY))
        db_storage_directory = Path(socialsensor.get_string(DATABASE_STORAGE_DIRECTORY))

        dataset = validate_readable_file_stream(
            socialsensor.get_string(DATASET),
            DATASET,
            key=socialsensor.qualified(DATASET),
        )

        if not socialsensor.contains(PERMUTE_BENCHMARKS):
            msg = f"configuration must set {PERMUTE_BENCHMARKS} to true or false"
            raise ConfigurationError(msg, field=socialsensor.qualified(PERMUTE_BENCHMARKS))
        permute_benchmarks = bool(socialsensor.get_bool(PERMUTE_BENCHMARKS))

        benchmark_types = parse_benchmark_types(_non_empty_list(socialsensor, BENCHMARKS))
        selected_databases = select_databases(_non_empty_list(socialsensor, DATABASES))
        scenarios = count_scenarios(len(selected_databases), permute=permute_benchmarks)

        results_path = Path(working_dir or Path.cwd()) / socialsensor.get_string(RESULTS_PATH)
        repetitions = socialsensor.get_int(REPETITIONS)
        random_nodes = socialsensor.get_int(RANDOM_NODES, DEFAULT_RANDOM_NODES)

        _require_conditional_fields(socialsensor, benchmark_types)
        nodes_count = socialsensor.get_int(NODES_COUNT) if NODES_COUNT in _required_for(benchmark_types) else None

        randomized_clustering = None
        actual_communities = None
        cache_values = None
        cache_values_count = None
        cache_increment_factor = None
        if BenchmarkType.CLUSTERING in benchmark_types:
            randomized_clustering = socialsensor.get_bool(RANDOMIZE_CLUSTERING)
            actual_communities = validate_readable_file_stream(
                socialsensor.get_string(ACTUAL_COMMUNITIES),
                ACTUAL_COMMUNITIES,
                key=socialsensor.qualified(ACTUAL_COMMUNITIES),
            )
            cache_values, cache_values_count, cache_increment_factor = _cache_values(socialsensor)

        config = cls(
            dataset=dataset,
            benchmark_types=tuple(benchmark_types),
            selected_databases=selected_databases,
            results_path=_results_directory(results_path),
            db_storage_directory=db_storage_directory,
            repetitions=repetitions,
            permute_benchmarks=permute_benchmarks,
            scenarios=scenarios,
            random_nodes=random_nodes,
            nodes_count=nodes_count,
            randomized_clustering=randomized_clustering,
            actual_communities=actual_communities,
            cache_values=cache_values,
            cache_values_count=cache_values_count,
            cache_increment_factor=cache_increment_factor,
            csv_dir=Path(csv_dir) if csv_dir is not None else None,
            csv_reporting_interval=csv.get_int(REPORTING_INTERVAL, DEFAULT_REPORTING_INTERVAL_MS),
            graphite_hostname=graphite.get_string(GRAPHITE_HOSTNAME, None),
            graphite_reporting_interval=graphite.get_int(REPORTING_INTERVAL, DEFAULT_REPORTING_INTERVAL_MS),
            orient_lightweight_edges=orient.get_bool(LIGHTWEIGHT_EDGES, None),
            sparksee_license_key=sparksee.get_string(LICENSE_KEY, None),
            titan_buffer_size=titan.get_int(BUFFER_SIZE, TITAN_DEFAULTS[BUFFER_SIZE]),
            titan_ids_blocksize=titan.get_int(IDS_BLOCKSIZE, TITAN_DEFAULTS[IDS_BLOCKSIZE]),
            titan_page_size=titan.get_int(PAGE_SIZE, TITAN_DEFAULTS[PAGE_SIZE]),
        )
        logger.info(
            "Benchmarks %s on %s, %d scenario(s), %d repetition(s), results in %s",
            ", ".join(b.name for b in config.benchmark_types),
            ", ".join(d.short_name for d in config.selected_databases),
            config.scenarios,
            config.repetitions,
            config.results_path,
        )
        return config

    def publish_csv_metrics(self) -> bool:
        """True if CSV metrics reporting is configured."""
        return self.csv_dir is not None

    def publish_graphite_metrics(self) -> bool:
        """True if Graphite metrics reporting is configured."""
        return bool(self.graphite_hostname)


def _required_for(benchmark_types: list[BenchmarkType]) -> frozenset[str]:
    required: frozenset[str] = frozenset()
    for benchmark in benchmark_types:
        required |= REQUIRED_FIELDS.get(benchmark, frozenset())
    return required
