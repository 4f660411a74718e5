r"""
Command-line interface for graphdb-bench.

    graphdb-bench validate conf/bench.properties
    graphdb-bench insert conf/bench.properties -d orient --url remote:localhost/bench
    graphdb-bench databases
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from graphdb_bench.configuration import BenchmarkConfiguration
from graphdb_bench.errors import ConfigurationError
from graphdb_bench.types import BenchmarkType

__all__ = ["app", "main"]

app = typer.Typer(
    name="graphdb-bench",
    help="Benchmark harness for graph databases.",
    no_args_is_help=True,
)


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(config_path: Path) -> BenchmarkConfiguration:
    try:
        return BenchmarkConfiguration.load(config_path)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Configuration file (.properties or .toml)")],
) -> None:
    """Validate a benchmark configuration and show what it selects."""
    config = _load(config_path)

    typer.echo(f"Dataset: {config.dataset!r}")
    typer.echo(f"Benchmarks: {', '.join(b.name for b in config.benchmark_types)}")
    typer.echo(f"Databases: {', '.join(d.short_name for d in config.selected_databases)}")
    typer.echo(f"Scenarios: {config.scenarios}")
    typer.echo(f"Repetitions: {config.repetitions}")
    typer.echo(f"Results: {config.results_path}")
    if config.nodes_count is not None:
        typer.echo(f"Nodes: {config.nodes_count}")
    if BenchmarkType.CLUSTERING in config.benchmark_types:
        from graphdb_bench.clustering import resolve_cache_values

        typer.echo(f"Cache values: {', '.join(str(v) for v in resolve_cache_values(config))}")
    if config.publish_csv_metrics():
        typer.echo(f"CSV metrics: {config.csv_dir} every {config.csv_reporting_interval}ms")
    if config.publish_graphite_metrics():
        typer.echo(f"Graphite metrics: {config.graphite_hostname} every {config.graphite_reporting_interval}ms")


@app.command()
def insert(
    config_path: Annotated[Path, typer.Argument(help="Configuration file (.properties or .toml)")],
    database: Annotated[str, typer.Option("-d", "--database", help="Database short name, e.g. orient")],
    url: Annotated[str, typer.Option("--url", help="Bulk-load target URL")],
    block_size: Annotated[int, typer.Option("--block-size", help="Edges per timed block")] = 1000,
    scenario: Annotated[int, typer.Option("--scenario", help="Scenario number for the results file")] = 1,
) -> None:
    """Run a massive insertion of the configured dataset into one database."""
    from graphdb_bench.datasets import EdgeListDataset
    from graphdb_bench.insertion import InsertionRegistry, results_file, run_massive_insertion, write_times
    from graphdb_bench.runner import timed
    from graphdb_bench.types import DATABASE_BY_NAME

    config = _load(config_path)

    db_type = DATABASE_BY_NAME.get(database)
    if db_type is None or db_type not in config.selected_databases:
        selected = ", ".join(d.short_name for d in config.selected_databases)
        typer.echo(f"Error: database {database} is not selected. Selected: {selected}", err=True)
        raise typer.Exit(1)

    try:
        opened = timed(InsertionRegistry.create, db_type, url)
    except (ValueError, ImportError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    typer.echo(f"Opened {db_type.api} at {url} in {opened.elapsed_ms:.1f}ms")

    result = run_massive_insertion(opened.value, EdgeListDataset(config.dataset), block_size=block_size)

    path = results_file(config, BenchmarkType.MASSIVE_INSERTION, db_type, scenario)
    write_times(result.times(), path)
    typer.echo(f"Inserted {result.edges:,} edges in {result.total_ms:.1f}ms ({result.edges_per_second:,.0f} edges/s)")
    typer.echo(f"Times written to {path}")


@app.command()
def databases() -> None:
    """List supported databases and their insertion drivers."""
    from graphdb_bench.insertion import InsertionRegistry
    from graphdb_bench.types import GraphDatabaseType

    typer.echo("Supported databases:")
    for db in GraphDatabaseType:
        driver = "massive insertion" if InsertionRegistry.get(db) else "no driver"
        typer.echo(f"  - {db.short_name}: {db.api} ({driver})")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
