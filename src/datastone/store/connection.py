"""Connection implementation for datastone."""

from loguru import logger

from ..backend.base import BackendStore
from ..interfaces.connection_interface import ConnectionInterface
from .storage import Storage


class Connection(ConnectionInterface):
    """Connection wrapping one backend store.

    The wrapped backend is the execution context every storage, query and
    iterator created from this connection runs against.
    """

    def __init__(self, context: BackendStore):
        """Initialize the connection.

        Args:
            context: Backend store to wrap
        """
        self._context = context

    def set_context(self, context: BackendStore) -> None:
        self._context = context
        logger.debug(f"Connection context replaced with {type(context).__name__}")

    def context(self) -> BackendStore:
        return self._context

    def storage(self, name: str) -> Storage:
        return Storage(name, self)
