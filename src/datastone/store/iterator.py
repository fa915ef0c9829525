"""Iterator over datastone query results."""

from typing import Any, Optional, Tuple, Type

from ..backend.base import BackendCursor, BackendStoreError, Done
from ..errors import BackendError, EndOfSequence
from ..interfaces.identifier import Identifier
from ..interfaces.iterator_interface import IteratorInterface
from .records import decode_payload


class Iterator(IteratorInterface):
    """Pull-based iterator over one running query.

    Each call to ``next`` consumes one result from the backend cursor. Once
    exhausted it keeps raising EndOfSequence; it cannot be restarted.

        for key, record in query.iter():
            ...
    """

    def __init__(self, cursor: BackendCursor, record_type: Optional[Type] = None):
        self._cursor = cursor
        self._record_type = record_type

    def next(self) -> Tuple[Identifier, Any]:
        try:
            key, payload = self._cursor.next()
        except Done as e:
            raise EndOfSequence("Query results exhausted") from e
        except BackendStoreError as e:
            raise BackendError(f"Failed to advance query results: {e}") from e
        return key, decode_payload(payload, self._record_type)

    def close(self) -> None:
        self._cursor.close()

    def __next__(self) -> Tuple[Identifier, Any]:
        try:
            return self.next()
        except EndOfSequence:
            raise StopIteration from None
