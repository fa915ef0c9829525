"""Storage abstraction implementation for datastone."""

from .connection import Connection
from .storage import Storage
from .query import Query, native_operator
from .iterator import Iterator
from .factory import BackendFactory, connect

__all__ = [
    "Connection",
    "Storage",
    "Query",
    "Iterator",
    "native_operator",
    "BackendFactory",
    "connect",
]
