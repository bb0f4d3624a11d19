"""Tests for configuration loading."""
import pytest
import yaml
from pydantic import ValidationError

from fetch_conditional import (
    CACHE_PATH_ENV_VAR,
    ConditionalFetchConfig,
    ConfigLoadError,
    apply_env_overrides,
    load_config,
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv(CACHE_PATH_ENV_VAR, raising=False)


@pytest.fixture
def sample_config():
    return {
        "persistence_path": "cache.json",
        "timeout_seconds": 10,
        "default_expiry_rules": {"/latest/status/": 30000},
        "headers": {"user-agent": "tests"},
    }


class TestConditionalFetchConfig:
    def test_defaults(self):
        config = ConditionalFetchConfig()

        assert config.persistence_path is None
        assert config.default_expiry_rules == {}
        assert config.cache_enabled is True
        assert config.timeout_seconds == 30.0
        assert config.headers == {}

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            ConditionalFetchConfig(default_expiry_rules={"/a/": -1})


class TestLoadConfig:
    def test_load_yaml(self, tmp_path, sample_config):
        path = tmp_path / "fetch.yaml"
        path.write_text(yaml.safe_dump(sample_config))

        config = load_config(path)

        assert config.persistence_path == "cache.json"
        assert config.timeout_seconds == 10.0
        assert config.default_expiry_rules == {"/latest/status/": 30000}
        assert config.headers == {"user-agent": "tests"}

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "fetch.yaml"
        path.write_text("")

        assert load_config(path) == ConditionalFetchConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "fetch.yaml"
        path.write_text("key: [unclosed")

        with pytest.raises(ConfigLoadError):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "fetch.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigLoadError):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "fetch.yaml"
        path.write_text("timeout_seconds: soon\n")

        with pytest.raises(ValidationError):
            load_config(path)

    def test_env_override(self, tmp_path, sample_config, monkeypatch):
        path = tmp_path / "fetch.yaml"
        path.write_text(yaml.safe_dump(sample_config))
        monkeypatch.setenv(CACHE_PATH_ENV_VAR, "/var/cache/esi.json")

        assert load_config(path).persistence_path == "/var/cache/esi.json"


class TestApplyEnvOverrides:
    def test_no_env_returns_same(self):
        config = ConditionalFetchConfig(persistence_path="a.json")
        assert apply_env_overrides(config) is config

    def test_does_not_mutate_original(self, monkeypatch):
        monkeypatch.setenv(CACHE_PATH_ENV_VAR, "b.json")
        config = ConditionalFetchConfig(persistence_path="a.json")

        assert apply_env_overrides(config).persistence_path == "b.json"
        assert config.persistence_path == "a.json"
