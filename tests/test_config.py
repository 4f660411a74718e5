r"""
Tests for graphdb_bench.config module.
"""

import pytest

from graphdb_bench.config import ENV_PREFIX, ConfigSource, get_env, load_configuration
from graphdb_bench.errors import ConfigurationError


class TestGetEnv:
    def test_get_env_not_set(self):
        assert get_env("TEST_NOT_SET") is None

    def test_get_env_with_default(self):
        assert get_env("TEST_NOT_SET", default="default_value") == "default_value"

    def test_get_env_set(self, monkeypatch):
        monkeypatch.setenv(f"{ENV_PREFIX}TEST_VAR", "test_value")
        assert get_env("TEST_VAR") == "test_value"

    def test_env_prefix(self):
        assert ENV_PREFIX == "GRAPHDB_BENCH_"


class TestConfigSource:
    @pytest.fixture
    def source(self):
        return ConfigSource(
            {
                "eu.socialsensor.dataset": "data.txt",
                "eu.socialsensor.repetitions": "3",
                "eu.socialsensor.metrics.csv.interval": 500,
                "eu.socialsensor.databases": "orient, tbdb,neo4j",
                "eu.socialsensor.flag": "TRUE",
                "other.key": "x",
            }
        )

    def test_subset_strips_prefix(self, source):
        socialsensor = source.subset("eu").subset("socialsensor")
        assert socialsensor.get_string("dataset") == "data.txt"
        assert not socialsensor.contains("other.key")
        assert socialsensor.prefix == "eu.socialsensor"

    def test_nested_subset(self, source):
        csv = source.subset("eu.socialsensor").subset("metrics").subset("csv")
        assert csv.get_int("interval") == 500
        assert csv.qualified("interval") == "eu.socialsensor.metrics.csv.interval"

    def test_get_list_splits_strings(self, source):
        assert source.subset("eu.socialsensor").get_list("databases") == ["orient", "tbdb", "neo4j"]

    def test_get_list_native(self):
        assert ConfigSource({"values": [1, 2]}).get_list("values") == [1, 2]

    def test_get_bool(self, source):
        assert source.subset("eu.socialsensor").get_bool("flag") is True

    def test_get_bool_invalid(self):
        with pytest.raises(ConfigurationError, match="must be a boolean"):
            ConfigSource({"flag": "maybe"}).get_bool("flag")

    def test_get_int_invalid_names_key(self):
        source = ConfigSource({"eu.repetitions": "many"}).subset("eu")
        with pytest.raises(ConfigurationError, match="eu.repetitions must be an integer") as exc:
            source.get_int("repetitions")
        assert exc.value.field == "eu.repetitions"

    def test_missing_without_default(self, source):
        with pytest.raises(ConfigurationError, match="configuration must specify nodes-count") as exc:
            source.subset("eu.socialsensor").get_int("nodes-count")
        assert exc.value.field == "eu.socialsensor.nodes-count"

    def test_missing_with_default(self, source):
        assert source.get_int("absent", 100) == 100
        assert source.get_string("absent", None) is None

    def test_get_float(self):
        assert ConfigSource({"factor": "0.5"}).get_float("factor") == 0.5

    def test_is_read_only_mapping(self, source):
        assert source["other.key"] == "x"
        with pytest.raises(TypeError):
            source["other.key"] = "y"  # type: ignore[index]


class TestLoadConfiguration:
    def test_properties_file(self, tmp_path):
        path = tmp_path / "bench.properties"
        path.write_text(
            "# benchmark settings\n"
            "! also a comment\n"
            "eu.socialsensor.dataset = data/Email-Enron.txt\n"
            "eu.socialsensor.databases: orient, neo4j\n"
            "eu.socialsensor.Mixed-Case = kept\n"
        )
        source = load_configuration(path)
        socialsensor = source.subset("eu.socialsensor")
        assert socialsensor.get_string("dataset") == "data/Email-Enron.txt"
        assert socialsensor.get_list("databases") == ["orient", "neo4j"]
        assert socialsensor.get_string("Mixed-Case") == "kept"

    def test_properties_indented_keys(self, tmp_path):
        path = tmp_path / "bench.properties"
        path.write_text(
            "eu.socialsensor.databases = orient\n"
            "    eu.socialsensor.repetitions = 3\n"
        )
        source = load_configuration(path)
        assert source.get_list("eu.socialsensor.databases") == ["orient"]
        assert source.get_int("eu.socialsensor.repetitions") == 3

    def test_properties_line_continuation(self, tmp_path):
        path = tmp_path / "bench.properties"
        path.write_text(
            "eu.socialsensor.databases = orient, \\\n"
            "    neo4j, \\\n"
            "    tbdb\n"
            "eu.socialsensor.repetitions = 1\n"
        )
        source = load_configuration(path)
        assert source.get_list("eu.socialsensor.databases") == ["orient", "neo4j", "tbdb"]
        assert source.get_int("eu.socialsensor.repetitions") == 1

    def test_properties_whitespace_separator(self, tmp_path):
        path = tmp_path / "bench.properties"
        path.write_text("eu.socialsensor.repetitions 4\n")
        assert load_configuration(path).get_int("eu.socialsensor.repetitions") == 4

    def test_invalid_properties(self, tmp_path):
        path = tmp_path / "broken.properties"
        path.write_text("eu.socialsensor.dataset = \\uZZZZ\n")
        with pytest.raises(ConfigurationError, match="unable to parse"):
            load_configuration(path)

    def test_toml_file(self, tmp_path):
        path = tmp_path / "bench.toml"
        path.write_text(
            "[eu.socialsensor]\n"
            'databases = ["orient", "tbdb"]\n'
            "repetitions = 2\n"
            "[eu.socialsensor.metrics.graphite]\n"
            'hostname = "graphite.local"\n'
        )
        source = load_configuration(path)
        assert source.get_list("eu.socialsensor.databases") == ["orient", "tbdb"]
        assert source.get_int("eu.socialsensor.repetitions") == 2
        assert source.get_string("eu.socialsensor.metrics.graphite.hostname") == "graphite.local"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            load_configuration(tmp_path / "absent.properties")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[eu\n")
        with pytest.raises(ConfigurationError, match="unable to parse"):
            load_configuration(path)
