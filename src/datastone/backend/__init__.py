"""Backend store layer for datastone."""

from .base import BackendStore, BackendCursor, BackendStoreError, NoSuchEntity, Done, BadKey
from .key import Key
from .query import BackendQuery, FilterSpec, OrderSpec
from .sqlite import SQLiteBackend, SQLiteCursor

__all__ = [
    "BackendStore",
    "BackendCursor",
    "BackendStoreError",
    "NoSuchEntity",
    "Done",
    "BadKey",
    "Key",
    "BackendQuery",
    "FilterSpec",
    "OrderSpec",
    "SQLiteBackend",
    "SQLiteCursor",
]
