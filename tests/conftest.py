r"""
Shared pytest fixtures for graphdb-bench tests.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from graphdb_bench.configuration import BenchmarkConfiguration

ROOT = "eu.socialsensor"


@pytest.fixture
def dataset_file(tmp_path: Path) -> Path:
    """Small SNAP-style edge list."""
    path = tmp_path / "network.txt"
    path.write_text("# Directed graph\n# FromNodeId\tToNodeId\n1\t2\n1\t3\n2\t3\n3\t4\n")
    return path


@pytest.fixture
def communities_file(tmp_path: Path) -> Path:
    path = tmp_path / "communities.txt"
    path.write_text("1\t0\n2\t0\n3\t1\n4\t1\n")
    return path


@pytest.fixture
def minimal_values(tmp_path: Path, dataset_file: Path) -> dict[str, Any]:
    """Smallest valid configuration, as flat dotted keys."""
    return {
        f"{ROOT}.dataset": str(dataset_file),
        f"{ROOT}.database-storage-directory": str(tmp_path / "storage"),
        f"{ROOT}.permute-benchmarks": "false",
        f"{ROOT}.results-path": "results",
        f"{ROOT}.benchmarks": "MASSIVE_INSERTION",
        f"{ROOT}.databases": "orient",
        f"{ROOT}.repetitions": "1",
    }


@pytest.fixture
def clustering_values(minimal_values: dict[str, Any], communities_file: Path) -> dict[str, Any]:
    """Valid configuration selecting the clustering benchmark with explicit cache values."""
    return minimal_values | {
        f"{ROOT}.benchmarks": "CLUSTERING",
        f"{ROOT}.nodes-count": "4",
        f"{ROOT}.randomize-clustering": "false",
        f"{ROOT}.actual-communities": str(communities_file),
        f"{ROOT}.cache-values": "10, 20, 30",
    }


@pytest.fixture
def build(tmp_path: Path) -> Callable[[dict[str, Any]], BenchmarkConfiguration]:
    """Build a configuration with tmp_path as working directory."""

    def _build(values: dict[str, Any]) -> BenchmarkConfiguration:
        return BenchmarkConfiguration.from_source(values, working_dir=tmp_path)

    return _build


class FakeOrientClient:
    """Records the pyorient calls made by a driver.

    Server settings live in a dict shared by every client of one server.
    """

    def __init__(self, host: str, port: int, settings: dict[str, str]) -> None:
        self.host = host
        self.port = port
        self.settings = settings
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def connect(self, user: str, password: str) -> int:
        self._record("connect", user, password)
        return 1

    def config_get(self, key: str) -> str:
        self._record("config_get", key)
        return self.settings[key]

    def config_set(self, key: str, value: str) -> bool:
        self._record("config_set", key, value)
        self.settings[key] = value
        return True

    def close(self) -> None:
        self._record("close")

    def db_open(self, database: str, user: str, password: str) -> list[Any]:
        self._record("db_open", database, user, password)
        return []

    def db_close(self) -> None:
        self._record("db_close")

    def command(self, sql: str) -> list[Any]:
        self._record("command", sql)
        return []

    def batch(self, script: str) -> list[Any]:
        self._record("batch", script)
        return []

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def commands(self) -> list[str]:
        return [args[0] for name, args in self.calls if name == "command"]

    def scripts(self) -> list[str]:
        return [args[0] for name, args in self.calls if name == "batch"]


@pytest.fixture
def orient_clients() -> list[FakeOrientClient]:
    """Every fake client handed out by ``orient_factory``, in creation order."""
    return []


@pytest.fixture
def orient_settings() -> dict[str, str]:
    """Server-wide settings seen by every fake client."""
    return {"environment.concurrent": "true"}


@pytest.fixture
def orient_factory(
    orient_clients: list[FakeOrientClient],
    orient_settings: dict[str, str],
) -> Callable[[str, int], FakeOrientClient]:
    def factory(host: str, port: int) -> FakeOrientClient:
        client = FakeOrientClient(host, port, orient_settings)
        orient_clients.append(client)
        return client

    return factory
