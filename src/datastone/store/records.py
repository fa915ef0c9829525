"""Record encoding at the storage boundary.

Encoding and decoding failures are reported as BackendError, the same way a
backend rejecting a record would be.
"""

from typing import Any, Dict, Optional, Type

from pydantic import ValidationError

from ..errors import BackendError
from ..utils.serialization import decode_record, encode_record


def encode_payload(record: Any) -> Dict[str, Any]:
    """Encode a record for the backend.

    Args:
        record: Record to encode

    Returns:
        JSON object payload

    Raises:
        BackendError: If the record cannot be encoded
    """
    try:
        return encode_record(record)
    except (TypeError, ValueError) as e:
        raise BackendError(f"Invalid record: {e}") from e


def decode_payload(payload: Optional[Dict[str, Any]], record_type: Optional[Type]) -> Any:
    """Decode a stored payload.

    Args:
        payload: Stored payload, None for key-only results
        record_type: Requested record type (optional)

    Returns:
        Decoded record

    Raises:
        BackendError: If the payload does not fit the record type
    """
    try:
        return decode_record(payload, record_type)
    except (TypeError, ValidationError) as e:
        raise BackendError(f"Stored record does not fit {record_type!r}: {e}") from e
