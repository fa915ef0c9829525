"""Native key type of the SQLite backend."""

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Optional

from ..interfaces.identifier import Identifier
from .base import BadKey


@dataclass(frozen=True)
class Key(Identifier):
    """Key of one entity: its kind plus a backend-allocated integer id.

    A key whose id is None is incomplete; the backend allocates the id when
    an entity is first stored under it.
    """

    kind: str
    id: Optional[int] = None

    @property
    def incomplete(self) -> bool:
        return self.id is None

    def encode(self) -> str:
        """Return the URL-safe string form of this key.

        The form is base64 (urlsafe alphabet, padding stripped) of the compact
        JSON array ``[kind, id]``.

        Returns:
            Encoded key
        """
        raw = json.dumps([self.kind, self.id], separators=(",", ":"))
        return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")

    @classmethod
    def decode(cls, encoded: str) -> "Key":
        """Parse a string produced by ``encode``.

        Args:
            encoded: Encoded key

        Returns:
            Decoded key

        Raises:
            BadKey: If the string is not a valid encoded key
        """
        if not isinstance(encoded, str) or not encoded:
            raise BadKey(f"Invalid encoded key: {encoded!r}")

        padded = encoded + "=" * (-len(encoded) % 4)
        try:
            raw = base64.b64decode(padded, altchars=b"-_", validate=True)
            parts = json.loads(raw.decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            raise BadKey(f"Invalid encoded key {encoded!r}: {e}") from e

        if not isinstance(parts, list) or len(parts) != 2:
            raise BadKey(f"Invalid encoded key {encoded!r}: expected [kind, id]")

        kind, entity_id = parts
        if not isinstance(kind, str) or not kind:
            raise BadKey(f"Invalid encoded key {encoded!r}: kind must be a non-empty string")
        # bool is an int subclass; reject it explicitly
        if entity_id is not None and (isinstance(entity_id, bool) or not isinstance(entity_id, int)):
            raise BadKey(f"Invalid encoded key {encoded!r}: id must be an integer")

        return cls(kind=kind, id=entity_id)
