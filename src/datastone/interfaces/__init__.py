"""Interfaces module for datastone.

Application code depends only on these abstractions; concrete
implementations live in ``datastone.store`` and ``datastone.backend``.
"""

# Identifier interface
from .identifier import Identifier

# Storage abstraction interfaces
from .connection_interface import ConnectionInterface
from .storage_interface import StorageInterface
from .query_interface import QueryInterface
from .iterator_interface import IteratorInterface

__all__ = [
    "Identifier",
    "ConnectionInterface",
    "StorageInterface",
    "QueryInterface",
    "IteratorInterface",
]
