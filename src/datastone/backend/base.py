"""Abstract backend store interface for datastone.

A backend store persists JSON-object payloads under keys it allocates and
executes native queries. It reports failures with the exceptions defined
here; the storage layer is responsible for translating them.
"""

import abc
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .key import Key
    from .query import BackendQuery


class BackendStoreError(Exception):
    """Generic backend failure."""


class NoSuchEntity(BackendStoreError):
    """No entity is stored under the requested key."""


class Done(BackendStoreError):
    """End-of-results sentinel raised by cursors."""


class BadKey(BackendStoreError):
    """A key is malformed or cannot be used for the operation."""


class BackendCursor(abc.ABC):
    """Cursor over the results of one native query."""

    @abc.abstractmethod
    def next(self) -> Tuple["Key", Optional[Dict[str, Any]]]:
        """Return the next result.

        Returns:
            Key and payload of the entity; payload is None for key-only queries

        Raises:
            Done: If the results are exhausted
        """
        pass

    @abc.abstractmethod
    def close(self):
        """Release the cursor."""
        pass


class BackendStore(abc.ABC):
    """Abstract base class for backend stores."""

    @abc.abstractmethod
    def new_key(self, kind: str) -> "Key":
        """Create an incomplete key.

        Args:
            kind: Entity kind

        Returns:
            Incomplete key of the kind
        """
        pass

    @abc.abstractmethod
    def decode_key(self, encoded: str) -> "Key":
        """Parse an encoded key.

        Args:
            encoded: Encoded key

        Returns:
            Decoded key
        """
        pass

    @abc.abstractmethod
    def get(self, key: "Key") -> Dict[str, Any]:
        """Load the payload stored under a key.

        Args:
            key: Complete key

        Returns:
            Stored payload
        """
        pass

    @abc.abstractmethod
    def put(self, key: "Key", payload: Dict[str, Any]) -> "Key":
        """Store a payload.

        An incomplete key gets a newly allocated id; a complete key is
        overwritten or created.

        Args:
            key: Key to store under
            payload: JSON object payload

        Returns:
            Complete key the payload was stored under
        """
        pass

    @abc.abstractmethod
    def delete(self, key: "Key"):
        """Delete the entity stored under a key, if any.

        Args:
            key: Complete key
        """
        pass

    @abc.abstractmethod
    def delete_multi(self, keys: List["Key"]):
        """Delete several entities in one operation.

        Args:
            keys: Complete keys
        """
        pass

    @abc.abstractmethod
    def run(self, query: "BackendQuery") -> BackendCursor:
        """Start executing a query.

        Args:
            query: Native query

        Returns:
            Cursor over the results
        """
        pass

    @abc.abstractmethod
    def get_all(self, query: "BackendQuery") -> List[Tuple["Key", Optional[Dict[str, Any]]]]:
        """Execute a query and materialize its results.

        Args:
            query: Native query

        Returns:
            List of key and payload pairs
        """
        pass

    @abc.abstractmethod
    def count(self, query: "BackendQuery") -> int:
        """Count the results of a query.

        Args:
            query: Native query

        Returns:
            Number of results
        """
        pass

    @abc.abstractmethod
    def close(self):
        """Close the backend."""
        pass
