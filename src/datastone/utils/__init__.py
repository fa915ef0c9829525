"""Utility functions for datastone."""

from .path_manager import PathManager
from .serialization import convert_numpy_types, encode_record, encode_value, decode_record

# Configuration utilities
from .config import (
    config_manager,
    ConfigManager,
    get_database_path,
    get_database_timeout,
    get_journal_mode,
    get_logging_config,
)

from .error_handling import translate_backend_errors

__all__ = [
    # From path_manager
    "PathManager",
    # From serialization
    "convert_numpy_types",
    "encode_record",
    "encode_value",
    "decode_record",
    # From config
    "config_manager",
    "ConfigManager",
    "get_database_path",
    "get_database_timeout",
    "get_journal_mode",
    "get_logging_config",
    # From error_handling
    "translate_backend_errors",
]
