"""Storage implementation for datastone collections."""

from typing import Any, Optional, Type, TYPE_CHECKING

from loguru import logger

from ..backend.base import BackendStore, Done
from ..errors import BackendError, NotFoundError
from ..interfaces.identifier import Identifier
from ..interfaces.storage_interface import StorageInterface
from ..utils.error_handling import translate_backend_errors
from .records import decode_payload, encode_payload
from .query import Query

if TYPE_CHECKING:
    from .connection import Connection


class Storage(StorageInterface):
    """Storage bound to one collection (kind) of a connection."""

    def __init__(self, name: str, conn: "Connection"):
        """Initialize the storage.

        Args:
            name: Collection name
            conn: Owning connection
        """
        self._name = name
        self._conn = conn

    @property
    def name(self) -> str:
        return self._name

    def conn(self) -> "Connection":
        return self._conn

    def _backend(self) -> BackendStore:
        return self._conn.context()

    @translate_backend_errors("create key")
    def new_key(self) -> Identifier:
        return self._backend().new_key(self._name)

    @translate_backend_errors("decode key")
    def decode_key(self, encoded: str) -> Identifier:
        return self._backend().decode_key(encoded)

    def new_query(self) -> Query:
        return Query(self)

    @translate_backend_errors("put record")
    def put(self, record: Any) -> Identifier:
        payload = encode_payload(record)
        # Always a fresh key; identifiers embedded in the record are ignored
        key = self._backend().put(self._backend().new_key(self._name), payload)
        logger.debug(f"Put record into {self._name}")
        return key

    @translate_backend_errors("get record")
    def get(self, key: Identifier, record_type: Optional[Type] = None) -> Any:
        payload = self._backend().get(key)
        return decode_payload(payload, record_type)

    @translate_backend_errors("update record")
    def update(self, key: Identifier, record: Any) -> None:
        if key.incomplete:
            raise BackendError(f"Failed to update record in {self._name}: key is incomplete")
        payload = encode_payload(record)
        try:
            self._backend().put(key, payload)
        except Done as e:
            # End-of-results during a write is reported as a missing record
            raise NotFoundError(f"Failed to update record in {self._name}: not found") from e

    @translate_backend_errors("delete record")
    def delete(self, key: Identifier) -> None:
        self._backend().delete(key)
