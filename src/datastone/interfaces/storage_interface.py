"""Storage interface for datastone collections."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Type, TYPE_CHECKING

from .identifier import Identifier

if TYPE_CHECKING:
    from .connection_interface import ConnectionInterface
    from .query_interface import QueryInterface


class StorageInterface(ABC):
    """CRUD access to one named collection.

    Records may be mappings, dataclass instances or pydantic models. Read
    operations return a dict unless a ``record_type`` is given.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the collection this storage is bound to."""
        pass

    @abstractmethod
    def conn(self) -> "ConnectionInterface":
        """Return the owning connection."""
        pass

    @abstractmethod
    def new_key(self) -> Identifier:
        """Create an incomplete identifier for this collection.

        Returns:
            Identifier that becomes concrete once a record is stored under it

        Raises:
            BackendError: If the backend rejects the key
        """
        pass

    @abstractmethod
    def decode_key(self, encoded: str) -> Identifier:
        """Parse the canonical string form of an identifier.

        Args:
            encoded: Previously encoded identifier

        Returns:
            Decoded identifier

        Raises:
            KeyDecodeError: If the string is malformed
        """
        pass

    @abstractmethod
    def new_query(self) -> "QueryInterface":
        """Return a query over this collection with no criteria."""
        pass

    @abstractmethod
    def put(self, record: Any) -> Identifier:
        """Store a record under a freshly allocated identifier.

        Args:
            record: Record to store

        Returns:
            Identifier assigned to the record

        Raises:
            BackendError: If the record or the write is rejected
        """
        pass

    @abstractmethod
    def get(self, key: Identifier, record_type: Optional[Type] = None) -> Any:
        """Load the record stored under an identifier.

        Args:
            key: Identifier of the record
            record_type: Type to decode the record into (optional)

        Returns:
            The stored record

        Raises:
            NotFoundError: If no record exists for the key
            BackendError: For any other backend failure
        """
        pass

    @abstractmethod
    def update(self, key: Identifier, record: Any) -> None:
        """Overwrite the record stored under an identifier.

        The key is not checked for existence before writing.

        Args:
            key: Identifier of the record
            record: Replacement record

        Raises:
            NotFoundError: If the backend reports end of results during the write
            BackendError: For any other backend failure
        """
        pass

    @abstractmethod
    def delete(self, key: Identifier) -> None:
        """Delete the record stored under an identifier.

        Deleting a missing key is not an error.

        Args:
            key: Identifier of the record
        """
        pass
