"""Query interface for datastone collections."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple, Type, TYPE_CHECKING

from .identifier import Identifier

if TYPE_CHECKING:
    from ..models.core import Operator
    from .iterator_interface import IteratorInterface
    from .storage_interface import StorageInterface


class QueryInterface(ABC):
    """Chainable query builder bound to one storage.

    Refinement methods mutate the query and return it; only the execution
    methods talk to the backend.
    """

    @abstractmethod
    def storage(self) -> "StorageInterface":
        """Return the storage this query runs against."""
        pass

    @abstractmethod
    def filter(self, field: str, operator: "Operator", value: Any) -> "QueryInterface":
        """Add a predicate. Predicates are combined with AND.

        Args:
            field: Record field to compare
            operator: Comparison operator; unknown operators mean EQ
            value: Value to compare against

        Returns:
            This query
        """
        pass

    @abstractmethod
    def keys_only(self) -> "QueryInterface":
        """Fetch identifiers without record payloads."""
        pass

    @abstractmethod
    def limit(self, limit: int) -> "QueryInterface":
        """Cap the number of results."""
        pass

    @abstractmethod
    def offset(self, offset: int) -> "QueryInterface":
        """Skip the first results."""
        pass

    @abstractmethod
    def order(self, field: str) -> "QueryInterface":
        """Sort ascending by a field, replacing any previous ordering."""
        pass

    @abstractmethod
    def order_descending(self, field: str) -> "QueryInterface":
        """Sort descending by a field, replacing any previous ordering."""
        pass

    @abstractmethod
    def get_first(self, record_type: Optional[Type] = None) -> Tuple[Identifier, Any]:
        """Run the query and return its first result.

        Args:
            record_type: Type to decode the record into (optional)

        Returns:
            Identifier and record of the first result

        Raises:
            NotFoundError: If nothing matches
        """
        pass

    @abstractmethod
    def get_all(self, record_type: Optional[Type] = None) -> Tuple[List[Identifier], List[Any]]:
        """Run the query and materialize every result.

        Args:
            record_type: Type to decode the records into (optional)

        Returns:
            Parallel lists of identifiers and records

        Raises:
            NotFoundError: If nothing matches
        """
        pass

    @abstractmethod
    def delete_first(self) -> Identifier:
        """Delete the first matching record.

        Returns:
            Identifier of the deleted record

        Raises:
            NotFoundError: If nothing matches
        """
        pass

    @abstractmethod
    def delete_all(self) -> List[Identifier]:
        """Delete every matching record in one bulk operation.

        Returns:
            Identifiers of the deleted records

        Raises:
            NotFoundError: If nothing matches
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Count matching records. Zero matches is a valid result."""
        pass

    @abstractmethod
    def iter(self, record_type: Optional[Type] = None) -> "IteratorInterface":
        """Start the query and return a lazy iterator over its results."""
        pass
