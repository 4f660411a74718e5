r"""
Tests for graphdb_bench.cli module.
"""

import pytest
from typer.testing import CliRunner

from graphdb_bench.cli import app
from graphdb_bench.insertion import orient

ROOT = "eu.socialsensor"

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path, dataset_file):
    path = tmp_path / "bench.properties"
    path.write_text(
        f"{ROOT}.dataset = {dataset_file}\n"
        f"{ROOT}.database-storage-directory = storage\n"
        f"{ROOT}.permute-benchmarks = true\n"
        f"{ROOT}.results-path = {tmp_path / 'results'}\n"
        f"{ROOT}.benchmarks = MASSIVE_INSERTION\n"
        f"{ROOT}.databases = orient, sparksee, tbdb\n"
        f"{ROOT}.repetitions = 1\n"
        f"{ROOT}.metrics.graphite.hostname = graphite.local\n"
    )
    return path


class TestValidate:
    def test_valid(self, config_file):
        result = runner.invoke(app, ["validate", str(config_file)])

        assert result.exit_code == 0
        assert "Databases: tbdb, orient, sparksee" in result.output
        assert "Scenarios: 6" in result.output
        assert "Graphite metrics: graphite.local every 1000ms" in result.output
        assert "CSV metrics" not in result.output

    def test_invalid(self, config_file):
        config_file.write_text(config_file.read_text().replace("orient, sparksee", "orient, nosuchdb"))

        result = runner.invoke(app, ["validate", str(config_file)])

        assert result.exit_code == 1
        assert "selected database nosuchdb not supported" in result.output

    def test_clustering_cache_values(self, config_file, communities_file):
        config_file.write_text(
            config_file.read_text().replace("MASSIVE_INSERTION", "CLUSTERING")
            + f"{ROOT}.nodes-count = 1000\n"
            f"{ROOT}.randomize-clustering = false\n"
            f"{ROOT}.actual-communities = {communities_file}\n"
            f"{ROOT}.cache-values-count = 3\n"
            f"{ROOT}.cache-increment-factor = 0.25\n"
        )

        result = runner.invoke(app, ["validate", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Nodes: 1000" in result.output
        assert "Cache values: 250, 500, 750" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "absent.properties")])
        assert result.exit_code == 1


class TestInsert:
    def test_orient(self, config_file, tmp_path, monkeypatch, orient_factory, orient_clients, orient_settings):
        monkeypatch.setattr(orient, "_pyorient_client", orient_factory)

        result = runner.invoke(
            app,
            ["insert", str(config_file), "-d", "orient", "--url", "remote:localhost/bench", "--block-size", "2"],
        )

        assert result.exit_code == 0, result.output
        assert "Inserted 4 edges" in result.output
        times = (tmp_path / "results" / "MassiveInsertion.orient.1").read_text().splitlines()
        assert len(times) == 3
        assert len(orient_clients) == 4
        assert orient_settings["environment.concurrent"] == "true"

    def test_database_not_selected(self, config_file):
        result = runner.invoke(app, ["insert", str(config_file), "-d", "neo4j", "--url", "bolt://localhost"])
        assert result.exit_code == 1
        assert "not selected" in result.output

    def test_database_without_driver(self, config_file):
        result = runner.invoke(app, ["insert", str(config_file), "-d", "sparksee", "--url", "sparksee://local"])
        assert result.exit_code == 1
        assert "No massive insertion driver" in result.output


class TestDatabases:
    def test_lists_all(self):
        result = runner.invoke(app, ["databases"])

        assert result.exit_code == 0
        assert "orient: OrientDB (massive insertion)" in result.output
        assert "sparksee: Sparksee (no driver)" in result.output
