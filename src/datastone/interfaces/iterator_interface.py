"""Iterator interface for datastone query results."""

from abc import ABC, abstractmethod
from typing import Any, Tuple

from .identifier import Identifier


class IteratorInterface(ABC):
    """Lazy, non-restartable cursor over query results."""

    @abstractmethod
    def next(self) -> Tuple[Identifier, Any]:
        """Advance to the next result.

        Returns:
            Identifier and record of the result

        Raises:
            EndOfSequence: If the results are exhausted
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying cursor."""
        pass

    def __iter__(self) -> "IteratorInterface":
        return self
