"""Tests for configuration management."""

from omegaconf import OmegaConf

from datastone.models import DEFAULT_DATABASE_PATH, StoreBackend
from datastone.utils.config import (
    ConfigManager,
    config_manager,
    get_database_path,
    get_database_timeout,
    get_journal_mode,
    get_logging_config,
)


class TestDefaults:

    def test_default_values(self, monkeypatch):
        monkeypatch.delenv("DATASTONE_DATABASE_PATH", raising=False)
        config_manager.reset()
        assert get_database_path() == DEFAULT_DATABASE_PATH
        assert get_database_timeout() == 5.0
        assert get_journal_mode() == "WAL"
        assert config_manager.get_store_backend() == StoreBackend.SQLITE
        assert get_logging_config()["level"] == "INFO"

    def test_env_interpolation(self, monkeypatch):
        monkeypatch.setenv("DATASTONE_DATABASE_PATH", "/tmp/elsewhere.db")
        config_manager.reset()
        assert get_database_path() == "/tmp/elsewhere.db"

    def test_singleton(self):
        assert ConfigManager() is config_manager


class TestSetConfig:

    def test_dict_merges_over_defaults(self):
        config_manager.set_config({"database": {"timeout": 1.5}})
        assert get_database_timeout() == 1.5
        assert get_journal_mode() == "WAL"

    def test_dictconfig(self):
        config_manager.set_config(OmegaConf.create({"database": {"journal_mode": "DELETE"}}))
        assert get_journal_mode() == "DELETE"
        assert isinstance(config_manager.to_dict(), dict)

    def test_unknown_backend_falls_back(self):
        config_manager.set_config({"database": {"backend": "cassandra"}})
        assert config_manager.get_store_backend() == StoreBackend.SQLITE
