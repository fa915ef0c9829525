"""Models package for datastone.

It re-exports the shared enumerations and configuration constants.
"""

# Type definitions
from .core import StoreBackend, Operator

# Configuration constants
from .config import (
    DEFAULT_CONFIG,
    DEFAULT_STORE_BACKEND,
    DEFAULT_DATABASE_PATH,
    DEFAULT_DATABASE_TIMEOUT,
    DEFAULT_JOURNAL_MODE,
    DELETE_BATCH_SIZE,
)

__all__ = [
    # Type definitions
    "StoreBackend", "Operator",

    # Configuration constants
    "DEFAULT_CONFIG", "DEFAULT_STORE_BACKEND", "DEFAULT_DATABASE_PATH",
    "DEFAULT_DATABASE_TIMEOUT", "DEFAULT_JOURNAL_MODE", "DELETE_BATCH_SIZE",
]
