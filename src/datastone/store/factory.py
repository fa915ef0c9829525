"""Backend factory for datastone."""

from typing import Any, Dict, Optional

from loguru import logger

from ..backend.base import BackendStore
from ..backend.sqlite import SQLiteBackend
from ..models.core import StoreBackend
from ..utils.config import (
    config_manager,
    get_database_path,
    get_database_timeout,
    get_journal_mode,
)
from .connection import Connection


class BackendFactory:
    """Factory for creating backend store instances."""

    # Class variable to store singleton instances
    _backend_instances: Dict[str, BackendStore] = {}

    @classmethod
    def _generate_stable_key(cls, **kwargs) -> str:
        """Generate a stable cache key from backend parameters.

        Args:
            **kwargs: Parameters to include in the key

        Returns:
            A stable string key for caching
        """
        key_parts = []

        for param_name in sorted(kwargs.keys()):
            value = kwargs.get(param_name)
            if value is not None:
                key_parts.append(f"{param_name}={value}")

        # Join all parts with a separator that's unlikely to appear in the values
        return "|||".join(key_parts)

    @classmethod
    def create_backend(
        cls,
        db_path: Optional[str] = None,
        timeout: Optional[float] = None,
        journal_mode: Optional[str] = None,
    ) -> BackendStore:
        """Create a backend store instance.

        Missing arguments come from the configuration. Backends are cached
        per configuration; ":memory:" databases are never shared.

        Args:
            db_path: Database file path
            timeout: Lock timeout in seconds
            journal_mode: SQLite journal mode

        Returns:
            A backend store instance
        """
        backend = config_manager.get_store_backend()
        db_path = db_path or get_database_path()
        timeout = timeout if timeout is not None else get_database_timeout()
        journal_mode = journal_mode or get_journal_mode()

        stable_key = cls._generate_stable_key(
            backend=backend.value,
            db_path=db_path,
            timeout=timeout,
            journal_mode=journal_mode,
        )

        if stable_key in cls._backend_instances:
            logger.debug(f"Reusing existing {backend.value} backend for {db_path}")
            return cls._backend_instances[stable_key]

        if backend == StoreBackend.SQLITE:
            instance = SQLiteBackend(db_path, timeout=timeout, journal_mode=journal_mode)
        else:  # pragma: no cover - every StoreBackend member is handled above
            raise ValueError(f"Unsupported store backend: {backend}")

        if db_path != ":memory:":
            cls._backend_instances[stable_key] = instance
        return instance

    @classmethod
    def reset(cls):
        """Close and forget every cached backend."""
        for instance in cls._backend_instances.values():
            instance.close()
        cls._backend_instances.clear()


def connect(cfg: Optional[Any] = None) -> Connection:
    """Open a connection to the configured backend.

    Args:
        cfg: Configuration (DictConfig or dict) to apply first (optional)

    Returns:
        Connection wrapping the backend
    """
    if cfg is not None:
        config_manager.set_config(cfg)
    return Connection(BackendFactory.create_backend())
