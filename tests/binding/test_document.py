# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for writing decoded documents onto destinations."""

import math
import struct
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Annotated, Any

import pytest

from flybind.binding.convert import Float32, Uint8
from flybind.binding.document import DocumentError, assign_document
from flybind.binding.schema import Tags
from flybind.kernel.exceptions import ConversionException


@dataclass
class Address:
    street: str = ""
    zip_code: Annotated[str, Tags(json="zip", xml="zip")] = ""


@dataclass
class Person:
    name: Annotated[str, Tags(json="full_name")] = ""
    age: Uint8 = 0
    score: float = 0.0
    active: bool = False
    address: Address = field(default_factory=Address)
    previous: Address | None = None
    nicknames: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    password: Annotated[str, Tags(json="-")] = ""


@dataclass
class Gauge:
    ratio: Float32 = 0.0


class IntMap(dict[str, int]):
    pass


class TestStrictDocuments:
    def test_scalars_and_renamed_keys(self):
        obj = Person()
        assign_document(obj, {"full_name": "Ada", "age": 36, "score": 9, "active": True}, "json")
        assert obj.name == "Ada"
        assert obj.age == 36
        assert obj.score == 9.0
        assert obj.active is True

    def test_nested_records(self):
        obj = Person()
        assign_document(obj, {"address": {"street": "Main", "zip": "123"}, "previous": {"street": "Old"}}, "json")
        assert obj.address == Address("Main", "123")
        assert obj.previous == Address("Old", "")

    def test_sequences_and_mappings(self):
        obj = Person()
        assign_document(obj, {"nicknames": ["a", "b"], "extra": {"k": [1, 2]}}, "json")
        assert obj.nicknames == ["a", "b"]
        assert obj.extra == {"k": [1, 2]}

    def test_excluded_key_is_ignored(self):
        obj = Person()
        assign_document(obj, {"password": "hunter2"}, "json")
        assert obj.password == ""

    def test_null_clears_optional_and_keeps_others(self):
        obj = Person(name="Ada", previous=Address("Old"))
        assign_document(obj, {"full_name": None, "previous": None}, "json")
        assert obj.name == "Ada"
        assert obj.previous is None

    def test_null_document_is_noop(self):
        obj = Person(name="Ada")
        assign_document(obj, None, "json")
        assert obj.name == "Ada"

    def test_string_for_int_rejected(self):
        with pytest.raises(DocumentError, match="cannot unmarshal string"):
            assign_document(Person(), {"age": "36"}, "json")

    def test_number_for_str_rejected(self):
        with pytest.raises(DocumentError):
            assign_document(Person(), {"full_name": 5}, "json")

    def test_array_into_record_rejected(self):
        with pytest.raises(DocumentError, match="cannot unmarshal array"):
            assign_document(Person(), [1, 2], "json")

    def test_width_checked(self):
        with pytest.raises(ConversionException):
            assign_document(Person(), {"age": 300}, "json")

    def test_decimal_numbers(self):
        obj = Person()
        assign_document(obj, {"age": Decimal("7"), "score": Decimal("1.5")}, "json")
        assert obj.age == 7
        assert obj.score == 1.5

    @pytest.mark.parametrize("value", [10**400, Decimal("1e400"), -(10**400)])
    def test_float_overflow_rejected(self, value):
        with pytest.raises(ConversionException, match="out of range"):
            assign_document(Person(), {"score": value}, "json")

    def test_infinite_float_kept(self):
        obj = Person()
        assign_document(obj, {"score": math.inf}, "yaml")
        assert obj.score == math.inf

    def test_float32_rounded_and_checked(self):
        obj = Gauge()
        assign_document(obj, {"ratio": 0.1}, "json")
        assert obj.ratio == struct.unpack("f", struct.pack("f", 0.1))[0]
        with pytest.raises(ConversionException, match="out of range"):
            assign_document(Gauge(), {"ratio": 1e39}, "json")

    def test_reject_unknown(self):
        with pytest.raises(DocumentError, match='unknown field "what"'):
            assign_document(Person(), {"full_name": "Ada", "what": 1}, "json", reject_unknown=True)

    def test_reject_unknown_in_nested_record(self):
        with pytest.raises(DocumentError, match='unknown field "city"'):
            assign_document(Person(), {"address": {"city": "x"}}, "json", reject_unknown=True)


class TestLenientDocuments:
    def test_strings_are_converted(self):
        obj = Person()
        assign_document(obj, {"name": "Ada", "age": "36", "active": "true", "score": "2.5"}, "xml", lenient=True)
        assert obj.name == "Ada"
        assert obj.age == 36
        assert obj.active is True
        assert obj.score == 2.5

    def test_scalar_promoted_to_list(self):
        obj = Person()
        assign_document(obj, {"nicknames": "solo"}, "xml", lenient=True)
        assert obj.nicknames == ["solo"]

    def test_number_into_str(self):
        obj = Person()
        assign_document(obj, {"name": 12}, "yaml", lenient=True)
        assert obj.name == "12"

    def test_bad_string_raises_conversion(self):
        with pytest.raises(ConversionException):
            assign_document(Person(), {"active": "maybe"}, "yaml", lenient=True)


class TestMappingDestination:
    def test_plain_dict_keeps_any_value(self):
        obj: dict[str, Any] = {}
        assign_document(obj, {"a": "x", "n": [1, 2]}, "json")
        assert obj == {"a": "x", "n": [1, 2]}

    def test_parameterised_dict_converts_values(self):
        obj = IntMap()
        assign_document(obj, {"a": "7"}, "yaml", lenient=True)
        assert obj == {"a": 7}

    def test_non_object_into_dict(self):
        with pytest.raises(DocumentError):
            assign_document({}, ["a"], "json")
