"""Query implementation for datastone collections.

A Query accumulates criteria and translates them into the backend's native
query. Refinements mutate the query in place and return it for chaining;
nothing reaches the backend until one of the execution methods runs.
"""

from typing import Any, List, Optional, Tuple, Type, TYPE_CHECKING

from loguru import logger

from ..backend.base import BackendStore
from ..backend.query import BackendQuery
from ..errors import BackendError, NotFoundError
from ..interfaces.identifier import Identifier
from ..interfaces.query_interface import QueryInterface
from ..models.core import Operator
from ..utils.error_handling import translate_backend_errors
from ..utils.serialization import encode_value
from .iterator import Iterator
from .records import decode_payload

if TYPE_CHECKING:
    from .storage import Storage


def native_operator(operator: Any) -> str:
    """Map an operator onto its native token. Unknown operators mean EQ.

    Args:
        operator: Operator member or raw operator value

    Returns:
        Native operator token
    """
    try:
        return Operator(operator).value
    except ValueError:
        logger.debug(f"Unknown filter operator {operator!r}, using {Operator.EQ.value!r}")
        return Operator.EQ.value


class Query(QueryInterface):
    """Query over the collection of one storage."""

    def __init__(self, storage: "Storage"):
        """Initialize the query.

        Args:
            storage: Storage the query runs against
        """
        self._storage = storage
        self._query = BackendQuery(kind=storage.name)
        # Single sort field in native form; a leading "-" means descending
        self._order: Optional[str] = None

    def storage(self) -> "Storage":
        return self._storage

    def _backend(self) -> BackendStore:
        return self._storage.conn().context()

    def _native(self) -> BackendQuery:
        """Return the native query for the criteria collected so far."""
        if self._order is None:
            return self._query
        return self._query.order(self._order)

    # Refinements

    @translate_backend_errors("add query filter")
    def filter(self, field: str, operator: Operator, value: Any) -> "Query":
        try:
            operand = encode_value(value)
        except ValueError as e:
            raise BackendError(f"Invalid filter value for {field}: {e}") from e
        self._query = self._query.filter(f"{field} {native_operator(operator)}", operand)
        return self

    def keys_only(self) -> "Query":
        self._query = self._query.with_keys_only()
        return self

    def limit(self, limit: int) -> "Query":
        self._query = self._query.with_limit(limit)
        return self

    def offset(self, offset: int) -> "Query":
        self._query = self._query.with_offset(offset)
        return self

    def order(self, field: str) -> "Query":
        self._order = field
        return self

    def order_descending(self, field: str) -> "Query":
        self._order = "-" + field
        return self

    # Execution

    def _first(self, native: BackendQuery) -> Tuple[Identifier, Optional[dict]]:
        cursor = self._backend().run(native)
        try:
            return cursor.next()
        finally:
            cursor.close()

    @translate_backend_errors("get first result")
    def get_first(self, record_type: Optional[Type] = None) -> Tuple[Identifier, Any]:
        key, payload = self._first(self._native())
        return key, decode_payload(payload, record_type)

    @translate_backend_errors("get all results")
    def get_all(self, record_type: Optional[Type] = None) -> Tuple[List[Identifier], List[Any]]:
        results = self._backend().get_all(self._native())
        if not results:
            raise NotFoundError(f"No results in {self._storage.name}")

        keys = [key for key, _ in results]
        records = [decode_payload(payload, record_type) for _, payload in results]
        return keys, records

    @translate_backend_errors("delete first result")
    def delete_first(self) -> Identifier:
        key, _ = self._first(self._native().with_keys_only())
        # Not atomic: the record may vanish between lookup and delete
        self._storage.delete(key)
        return key

    @translate_backend_errors("delete all results")
    def delete_all(self) -> List[Identifier]:
        results = self._backend().get_all(self._native().with_keys_only())
        if not results:
            raise NotFoundError(f"No results in {self._storage.name}")

        keys = [key for key, _ in results]
        self._backend().delete_multi(keys)
        logger.debug(f"Deleted {len(keys)} records from {self._storage.name}")
        return keys

    @translate_backend_errors("count results")
    def count(self) -> int:
        return self._backend().count(self._native())

    @translate_backend_errors("start query")
    def iter(self, record_type: Optional[Type] = None) -> Iterator:
        return Iterator(self._backend().run(self._native()), record_type)
