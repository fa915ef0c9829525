"""Core model types for datastone.

This module contains the enumerations shared by the storage abstraction and
the backend implementations.
"""

from enum import Enum


# Type definitions
class StoreBackend(str, Enum):
    """Backend store types."""

    SQLITE = "sqlite"


class Operator(str, Enum):
    """Comparison operators accepted by Query.filter.

    Values double as the native operator tokens understood by backend
    queries. Anything outside this set is treated as EQ.
    """

    EQ = "="
    GE = ">="
    GT = ">"
    LE = "<="
    LT = "<"
