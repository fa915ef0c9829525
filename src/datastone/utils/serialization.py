"""Serialization utilities for datastone records."""

import dataclasses
from collections.abc import Mapping
from typing import Any, Dict, Optional, Type

import numpy as np
from pydantic import BaseModel
from pydantic_core import to_jsonable_python


def convert_numpy_types(obj: Any) -> Any:
    """Convert NumPy types to Python native types.

    Args:
        obj: Object to convert

    Returns:
        Converted object
    """
    if isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {k: convert_numpy_types(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [convert_numpy_types(item) for item in obj]
    elif isinstance(obj, tuple):
        return tuple(convert_numpy_types(item) for item in obj)
    else:
        return obj


def encode_value(value: Any) -> Any:
    """Convert a value into its JSON-compatible form.

    Datetimes become ISO strings, enums their values, NumPy values native
    numbers, so a filter operand compares like the stored field does.

    Args:
        value: Value to convert

    Returns:
        JSON-compatible value

    Raises:
        ValueError: If the value cannot be represented as JSON
    """
    return to_jsonable_python(convert_numpy_types(value))


def encode_record(record: Any) -> Dict[str, Any]:
    """Convert a record into a JSON-compatible dictionary.

    Args:
        record: Mapping, dataclass instance or pydantic model

    Returns:
        JSON-compatible dictionary

    Raises:
        TypeError: If the record type is not supported
        ValueError: If a field value cannot be represented as JSON
    """
    if isinstance(record, BaseModel):
        payload = record.model_dump(mode="json")
    elif dataclasses.is_dataclass(record) and not isinstance(record, type):
        payload = dataclasses.asdict(record)
    elif isinstance(record, Mapping):
        payload = dict(record)
    else:
        raise TypeError(f"Unsupported record type: {type(record).__name__}")

    non_string_keys = [k for k in payload if not isinstance(k, str)]
    if non_string_keys:
        raise TypeError(f"Record field names must be strings, got {non_string_keys!r}")

    return encode_value(payload)


def decode_record(payload: Optional[Dict[str, Any]], record_type: Optional[Type] = None) -> Any:
    """Build a record from a stored payload.

    Args:
        payload: Stored payload, None for key-only results
        record_type: pydantic model or dataclass type (optional, default dict)

    Returns:
        Decoded record, or None when there is no payload

    Raises:
        TypeError: If the payload does not fit the record type
        pydantic.ValidationError: If a pydantic model rejects the payload
    """
    if payload is None:
        return None
    if record_type is None or record_type is dict:
        return dict(payload)
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return record_type.model_validate(payload)
    if dataclasses.is_dataclass(record_type):
        names = {f.name for f in dataclasses.fields(record_type) if f.init}
        return record_type(**{k: v for k, v in payload.items() if k in names})
    raise TypeError(f"Unsupported record type: {record_type!r}")
