"""Error types raised by the datastone storage API.

Backend stores raise their own exceptions (see ``datastone.backend.base``);
the storage layer classifies them into the types below before they reach
application code.
"""


class DatastoneError(Exception):
    """Base class for all datastone errors."""


class NotFoundError(DatastoneError):
    """Raised when a lookup or a query for results finds nothing."""


class KeyDecodeError(DatastoneError, ValueError):
    """Raised when an encoded identifier cannot be parsed."""


class BackendError(DatastoneError):
    """Raised for backend failures that are not otherwise classified."""


class EndOfSequence(DatastoneError):
    """Raised by an iterator once its results are exhausted.

    This is a terminal condition of iteration and is deliberately not a
    NotFoundError.
    """
