"""Identifier interface for datastone records."""

from abc import ABC, abstractmethod


class Identifier(ABC):
    """Opaque key naming one stored record.

    Identifiers are produced by a backend store. Application code may compare
    them, hash them and turn them into strings; a string can only be turned
    back into an Identifier through ``StorageInterface.decode_key``.
    """

    @abstractmethod
    def encode(self) -> str:
        """Return the canonical string form of this identifier.

        Returns:
            Encoded identifier
        """
        pass

    @property
    @abstractmethod
    def incomplete(self) -> bool:
        """Whether this is a placeholder not yet bound to a stored record."""
        pass

    def __str__(self) -> str:
        return self.encode()
