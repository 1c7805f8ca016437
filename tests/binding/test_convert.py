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
"""Tests for string-to-type conversion of wire values."""

import datetime
import enum
import math
import struct
import uuid
from decimal import Decimal
from typing import Any

import pytest

from flybind.binding.convert import (
    Float32,
    Int8,
    Int64,
    Uint8,
    Uint64,
    convert_value,
    parse_bool,
)
from flybind.binding.uploads import UploadedFile
from flybind.kernel.exceptions import ConversionException, UnsupportedTypeException


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


class Level(enum.IntEnum):
    LOW = 1
    HIGH = 2


class TestParseBool:
    @pytest.mark.parametrize("raw", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_literals(self, raw: str):
        assert parse_bool(raw, "flag") is True

    @pytest.mark.parametrize("raw", ["0", "f", "F", "FALSE", "false", "False", ""])
    def test_false_literals(self, raw: str):
        assert parse_bool(raw, "flag") is False

    @pytest.mark.parametrize("raw", ["fasl", "yes", "on", "tRUE"])
    def test_invalid_literals(self, raw: str):
        with pytest.raises(ConversionException) as exc_info:
            parse_bool(raw, "flag")
        assert exc_info.value.field_path == "flag"
        assert exc_info.value.source_value == raw


class TestIntegers:
    def test_plain_int(self):
        assert convert_value("-42", int, "n") == -42

    def test_leading_plus(self):
        assert convert_value("+7", int, "n") == 7

    def test_empty_is_zero(self):
        assert convert_value("", int, "n") == 0

    @pytest.mark.parametrize("raw", ["1.5", "0x10", "1_000", " 1", "abc"])
    def test_invalid_syntax(self, raw: str):
        with pytest.raises(ConversionException, match="invalid syntax"):
            convert_value(raw, int, "n")

    def test_int8_range(self):
        assert convert_value("127", Int8, "n") == 127
        with pytest.raises(ConversionException, match="out of range"):
            convert_value("128", Int8, "n")

    def test_uint8_rejects_negative(self):
        with pytest.raises(ConversionException) as exc_info:
            convert_value("-1", Uint8, "n")
        assert exc_info.value.target_kind == "uint8"

    def test_64_bit_bounds(self):
        assert convert_value(str(2**63 - 1), Int64, "n") == 2**63 - 1
        assert convert_value(str(2**64 - 1), Uint64, "n") == 2**64 - 1
        with pytest.raises(ConversionException):
            convert_value(str(2**64), Uint64, "n")


class TestFloats:
    def test_plain_float(self):
        assert convert_value("3.25", float, "x") == 3.25

    def test_exponent(self):
        assert convert_value("1e3", float, "x") == 1000.0

    def test_empty_is_zero(self):
        assert convert_value("", float, "x") == 0.0

    def test_underscore_rejected(self):
        with pytest.raises(ConversionException):
            convert_value("1_0.5", float, "x")

    def test_float32_range(self):
        with pytest.raises(ConversionException, match="out of range"):
            convert_value("1e39", Float32, "x")

    def test_garbage(self):
        with pytest.raises(ConversionException):
            convert_value("one", float, "x")

    @pytest.mark.parametrize("raw", ["1e400", "-1e400"])
    def test_overflow_rejected(self, raw: str):
        with pytest.raises(ConversionException, match="out of range"):
            convert_value(raw, float, "x")

    def test_float32_overflow_rejected(self):
        with pytest.raises(ConversionException, match="out of range"):
            convert_value("1e400", Float32, "x")

    @pytest.mark.parametrize("raw", ["inf", "-Inf", "+infinity"])
    def test_infinity_literals(self, raw: str):
        assert math.isinf(convert_value(raw, float, "x"))

    @pytest.mark.parametrize("raw", [" 1.5", "1.5 ", "\t1.5", "1.5\n"])
    def test_surrounding_whitespace_rejected(self, raw: str):
        with pytest.raises(ConversionException, match="invalid syntax"):
            convert_value(raw, float, "x")

    def test_float32_rounded_to_single_precision(self):
        value = convert_value("0.1", Float32, "x")
        assert value == struct.unpack("f", struct.pack("f", 0.1))[0]
        assert value != 0.1

    def test_float64_not_rounded(self):
        assert convert_value("0.1", float, "x") == 0.1


class TestOtherTypes:
    def test_str_passthrough(self):
        assert convert_value("hello", str, "s") == "hello"

    def test_optional_unwrapped(self):
        assert convert_value("5", int | None, "n") == 5

    def test_any_passthrough(self):
        assert convert_value("raw", Any, "a") == "raw"

    def test_decimal(self):
        assert convert_value("10.50", Decimal, "d") == Decimal("10.50")

    @pytest.mark.parametrize("raw", [" 1", "1 ", "\n1"])
    def test_decimal_surrounding_whitespace_rejected(self, raw: str):
        with pytest.raises(ConversionException, match="invalid syntax"):
            convert_value(raw, Decimal, "d")

    def test_uuid(self):
        value = "12345678-1234-5678-1234-567812345678"
        assert convert_value(value, uuid.UUID, "u") == uuid.UUID(value)

    def test_datetime_and_date(self):
        assert convert_value("2024-05-01T10:00:00", datetime.datetime, "t") == datetime.datetime(2024, 5, 1, 10)
        assert convert_value("2024-05-01", datetime.date, "d") == datetime.date(2024, 5, 1)

    def test_bad_date(self):
        with pytest.raises(ConversionException):
            convert_value("yesterday", datetime.date, "d")

    def test_enum_by_value(self):
        assert convert_value("blue", Color, "c") is Color.BLUE

    def test_int_enum_from_digits(self):
        assert convert_value("2", Level, "l") is Level.HIGH

    def test_bad_enum(self):
        with pytest.raises(ConversionException, match="not a valid member"):
            convert_value("green", Color, "c")

    def test_uploaded_file(self):
        upload = UploadedFile("a.txt", "text/plain", b"hi")
        assert convert_value(upload, UploadedFile, "f") is upload

    def test_text_into_file_field(self):
        with pytest.raises(ConversionException):
            convert_value("a.txt", UploadedFile, "f")

    def test_file_into_text_field(self):
        with pytest.raises(ConversionException):
            convert_value(UploadedFile("a.txt", "text/plain", b""), str, "f")

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedTypeException) as exc_info:
            convert_value("1+2j", complex, "z")
        assert exc_info.value.field_path == "z"
