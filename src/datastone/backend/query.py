"""Native query type of the SQLite backend.

A BackendQuery is immutable: every refinement returns a new query, so a
caller holding an older value is never affected by later refinements.
"""

import re
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from .base import BackendStoreError

# Native comparison tokens
FILTER_OPERATORS = ("=", ">=", ">", "<=", "<")

# Field name, then a trailing run of operator characters
_FILTER_RE = re.compile(r"^\s*([^<>=!\s].*?)\s*([<>=!]+)\s*$")


@dataclass(frozen=True)
class FilterSpec:
    """One native predicate: ``field op value``."""
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class OrderSpec:
    """One native sort key."""
    field: str
    descending: bool = False


@dataclass(frozen=True)
class BackendQuery:
    """Query over the entities of one kind."""

    kind: str
    filters: Tuple[FilterSpec, ...] = ()
    orders: Tuple[OrderSpec, ...] = ()
    limit: Optional[int] = None
    offset: Optional[int] = None
    keys_only: bool = False

    def filter(self, filter_str: str, value: Any) -> "BackendQuery":
        """Add a predicate written as ``"<field> <op>"``, e.g. ``"age >="``.

        Args:
            filter_str: Field name followed by an operator token
            value: Value to compare against

        Returns:
            Refined query

        Raises:
            BackendStoreError: If the filter string cannot be parsed
        """
        field, op = _parse_filter(filter_str)
        return replace(self, filters=self.filters + (FilterSpec(field, op, value),))

    def order(self, field_name: str) -> "BackendQuery":
        """Add a sort key; a leading ``-`` sorts descending.

        Sort keys accumulate; earlier keys take precedence.
        """
        name = field_name.strip()
        descending = name.startswith("-")
        field = name[1:].strip() if descending else name
        if not field:
            raise BackendStoreError(f"Invalid order field: {field_name!r}")
        return replace(self, orders=self.orders + (OrderSpec(field, descending),))

    def with_limit(self, limit: int) -> "BackendQuery":
        return replace(self, limit=limit)

    def with_offset(self, offset: int) -> "BackendQuery":
        return replace(self, offset=offset)

    def with_keys_only(self) -> "BackendQuery":
        return replace(self, keys_only=True)


def _parse_filter(filter_str: str) -> Tuple[str, str]:
    """Split a filter string into its field and operator token."""
    match = _FILTER_RE.match(filter_str)
    if match is None or match.group(2) not in FILTER_OPERATORS:
        raise BackendStoreError(f"Invalid filter: {filter_str!r}")
    return match.group(1), match.group(2)
