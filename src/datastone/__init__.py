"""datastone: a storage abstraction over document backends.

Application code works with connections, storages, queries and iterators;
the backend that actually stores records sits behind ``BackendStore``.

    conn = datastone.connect()
    users = conn.storage("users")
    key = users.put({"name": "a"})
    key, record = users.new_query().filter("name", Operator.EQ, "a").get_first()
"""

__version__ = "0.1.0"

from .errors import (
    DatastoneError,
    NotFoundError,
    KeyDecodeError,
    BackendError,
    EndOfSequence,
)
from .models import Operator, StoreBackend
from .interfaces import (
    Identifier,
    ConnectionInterface,
    StorageInterface,
    QueryInterface,
    IteratorInterface,
)
from .backend import BackendStore, SQLiteBackend, Key
from .store import Connection, Storage, Query, Iterator, BackendFactory, connect
from .services import LoggingService, get_logging_service

__all__ = [
    # Errors
    "DatastoneError", "NotFoundError", "KeyDecodeError", "BackendError", "EndOfSequence",

    # Types
    "Operator", "StoreBackend",

    # Interfaces
    "Identifier", "ConnectionInterface", "StorageInterface", "QueryInterface",
    "IteratorInterface",

    # Backend
    "BackendStore", "SQLiteBackend", "Key",

    # Implementation
    "Connection", "Storage", "Query", "Iterator", "BackendFactory", "connect",

    # Services
    "LoggingService", "get_logging_service",
]
