"""Configuration management for datastone.

This module provides a simple configuration system for datastone.
It uses OmegaConf to merge user configuration over the defaults and
resolve interpolations, then keeps the result as a plain dictionary.

It also includes utilities for accessing configuration values.
"""

from loguru import logger
from typing import Any, Dict
from omegaconf import OmegaConf
import dotenv

from ..models.config import (
    DEFAULT_CONFIG,
    DEFAULT_DATABASE_PATH,
    DEFAULT_DATABASE_TIMEOUT,
    DEFAULT_JOURNAL_MODE,
)
from ..models.core import StoreBackend

dotenv.load_dotenv()


def _get_config() -> Dict[str, Any]:
    """Get the configuration from the manager.

    Returns:
        Configuration dictionary
    """
    return config_manager.get_config()


class ConfigManager:
    """Configuration manager for datastone.

    This class provides a singleton instance for accessing the configuration.
    Until ``set_config`` is called it serves the defaults.
    """

    _instance = None
    _cfg = None

    def __new__(cls):
        """Create a singleton instance."""
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize the configuration manager."""
        # Only initialize once
        if ConfigManager._cfg is None:
            ConfigManager._cfg = self._build({})

    @staticmethod
    def _build(cfg: Any) -> Dict[str, Any]:
        """Merge a configuration over the defaults and resolve it.

        Args:
            cfg: Configuration object (DictConfig or dict)

        Returns:
            Resolved configuration dictionary
        """
        merged = OmegaConf.merge(OmegaConf.create(DEFAULT_CONFIG), cfg or {})
        return OmegaConf.to_container(merged, resolve=True)

    def set_config(self, cfg: Any):
        """Set the configuration.

        Args:
            cfg: Configuration object (DictConfig or dict)
        """
        ConfigManager._cfg = self._build(cfg)
        logger.info("Configuration set successfully")

    def reset(self):
        """Drop any configuration set so far and go back to the defaults."""
        ConfigManager._cfg = self._build({})

    def get_config(self) -> Dict[str, Any]:
        """Get the configuration.

        Returns:
            Configuration dictionary
        """
        return ConfigManager._cfg

    def get_store_backend(self) -> StoreBackend:
        """Get the store backend from configuration.

        Returns:
            Store backend
        """
        config = self.get_config()
        backend_str = config.get("database", {}).get("backend", StoreBackend.SQLITE.value)
        try:
            return StoreBackend(backend_str)
        except ValueError:
            logger.warning(f"Unknown store backend: {backend_str}")
            logger.warning(
                f"Using default store backend: {StoreBackend.SQLITE.value}")
            return StoreBackend.SQLITE

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Configuration dictionary
        """
        return self.get_config()


# Helper functions for accessing configuration values

def get_database_path() -> str:
    """Get the database file path from configuration.

    Returns:
        The database file path
    """
    config = _get_config()
    return str(config.get("database", {}).get("path") or DEFAULT_DATABASE_PATH)


def get_database_timeout() -> float:
    """Get the database lock timeout from configuration.

    Returns:
        Timeout in seconds
    """
    config = _get_config()
    return float(config.get("database", {}).get("timeout", DEFAULT_DATABASE_TIMEOUT))


def get_journal_mode() -> str:
    """Get the SQLite journal mode from configuration.

    Returns:
        The journal mode
    """
    config = _get_config()
    return str(config.get("database", {}).get("journal_mode", DEFAULT_JOURNAL_MODE))


def get_logging_config() -> Dict[str, Any]:
    """Get the logging section of the configuration.

    Returns:
        Logging configuration dictionary
    """
    config = _get_config()
    return dict(config.get("logging", {}))


# Create a singleton instance of the configuration manager
config_manager = ConfigManager()
