"""Connection interface for datastone."""

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .storage_interface import StorageInterface


class ConnectionInterface(ABC):
    """Handle on a backend execution context and factory for storages."""

    @abstractmethod
    def set_context(self, context: Any) -> None:
        """Replace the wrapped backend context.

        Args:
            context: New backend context
        """
        pass

    @abstractmethod
    def context(self) -> Any:
        """Return the wrapped backend context."""
        pass

    @abstractmethod
    def storage(self, name: str) -> "StorageInterface":
        """Return a storage bound to a named collection.

        Args:
            name: Collection (kind) name

        Returns:
            Storage for the collection
        """
        pass
