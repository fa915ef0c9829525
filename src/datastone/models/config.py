"""Configuration constants for datastone.

This module contains constants and default configuration values used throughout
datastone. These constants define default behavior when not overridden
by user configuration.
"""

from typing import Any, Dict

# Database configuration
DEFAULT_STORE_BACKEND = "sqlite"
DEFAULT_DATABASE_PATH = "data/datastone.db"
DEFAULT_DATABASE_TIMEOUT = 5.0
DEFAULT_JOURNAL_MODE = "WAL"

# SQLite limits the number of bound parameters per statement
DELETE_BATCH_SIZE = 500

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_ROTATION = "10 MB"
DEFAULT_LOG_RETENTION = "1 week"

# Environment variable consulted by the default database path
DATABASE_PATH_ENV = "DATASTONE_DATABASE_PATH"

DEFAULT_CONFIG: Dict[str, Any] = {
    "database": {
        "backend": DEFAULT_STORE_BACKEND,
        "path": f"${{oc.env:{DATABASE_PATH_ENV},'{DEFAULT_DATABASE_PATH}'}}",
        "timeout": DEFAULT_DATABASE_TIMEOUT,
        "journal_mode": DEFAULT_JOURNAL_MODE,
    },
    "logging": {
        "level": DEFAULT_LOG_LEVEL,
        "file": None,
        "rotation": DEFAULT_LOG_ROTATION,
        "retention": DEFAULT_LOG_RETENTION,
    },
}
