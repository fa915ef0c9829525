"""Tests for record serialization helpers."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List

import numpy as np
import pytest
from pydantic import BaseModel, ValidationError

from datastone.utils.serialization import (
    convert_numpy_types,
    decode_record,
    encode_record,
    encode_value,
)


class Color(str, Enum):
    RED = "red"


class Item(BaseModel):
    name: str
    created: date


@dataclass
class Tagged:
    name: str
    tags: List[str] = field(default_factory=list)


class TestConvertNumpyTypes:

    def test_nested(self):
        value = {"a": np.int32(1), "b": [np.float64(2.5), (np.bool_(True),)], "c": np.zeros(2)}
        assert convert_numpy_types(value) == {"a": 1, "b": [2.5, (True,)], "c": [0.0, 0.0]}

    def test_plain_values_untouched(self):
        assert convert_numpy_types("x") == "x"


class TestEncode:

    def test_mapping(self):
        assert encode_record({"when": datetime(2024, 1, 2, 3, 4, 5), "color": Color.RED}) == {
            "when": "2024-01-02T03:04:05",
            "color": "red",
        }

    def test_pydantic(self):
        assert encode_record(Item(name="x", created=date(2024, 1, 2))) == {
            "name": "x",
            "created": "2024-01-02",
        }

    def test_dataclass(self):
        assert encode_record(Tagged("x", ["a"])) == {"name": "x", "tags": ["a"]}

    @pytest.mark.parametrize("record", [42, "text", ["a"], Tagged])
    def test_unsupported(self, record):
        with pytest.raises(TypeError):
            encode_record(record)

    def test_non_string_field_names(self):
        with pytest.raises(TypeError):
            encode_record({1: "a"})

    def test_encode_value(self):
        assert encode_value(np.int64(3)) == 3
        assert encode_value(datetime(2024, 1, 1)) == "2024-01-01T00:00:00"


class TestDecode:

    def test_none_payload(self):
        assert decode_record(None, Item) is None

    def test_default_is_copy(self):
        payload = {"name": "x"}
        decoded = decode_record(payload)
        assert decoded == payload
        assert decoded is not payload

    def test_pydantic(self):
        assert decode_record({"name": "x", "created": "2024-01-02"}, Item) == Item(
            name="x", created=date(2024, 1, 2))

    def test_pydantic_invalid(self):
        with pytest.raises(ValidationError):
            decode_record({"name": "x"}, Item)

    def test_dataclass_ignores_unknown_fields(self):
        assert decode_record({"name": "x", "extra": 1}, Tagged) == Tagged("x")

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            decode_record({"name": "x"}, int)
