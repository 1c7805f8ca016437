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
"""String-to-type conversion for wire values.

Query strings, headers, path segments and form fields all arrive as
strings. ``convert_value`` turns one such string into the declared type of
a destination field, raising ConversionException with the field path and
offending value when it cannot.

Sized numeric aliases carry a :class:`Width` marker and are range checked::

    retries: Uint8 = 0      # 0..255
    offset: Int32 = 0       # -2**31..2**31-1
    ratio: Float32 = 0.0    # |x| <= 3.4028234663852886e38, rounded to float32
"""

from __future__ import annotations

import datetime
import enum
import math
import re
import struct
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from flybind.binding.schema import kind_name, split_annotated, unwrap_optional
from flybind.binding.uploads import UploadedFile
from flybind.kernel.exceptions import ConversionException, UnsupportedTypeException

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INF_RE = re.compile(r"[+-]?(inf|infinity)", re.IGNORECASE)

_FLOAT32_MAX = 3.4028234663852886e38


@dataclass(frozen=True)
class Width:
    """Bit width of a numeric field, used for range checking."""

    bits: int
    signed: bool = True
    floating: bool = False

    @property
    def kind(self) -> str:
        if self.floating:
            return f"float{self.bits}"
        return f"{'int' if self.signed else 'uint'}{self.bits}"

    def fit(self, value: int | float, field_path: str, raw: Any) -> int | float:
        """Range check *value* and round ``float32`` values to single precision."""
        self.check(value, field_path, raw)
        if self.floating and self.bits == 32 and math.isfinite(value):
            return struct.unpack("f", struct.pack("f", value))[0]
        return value

    def check(self, value: int | float, field_path: str, raw: Any) -> None:
        """Raise ConversionException if *value* does not fit this width."""
        if self.floating:
            if self.bits == 32 and math.isfinite(value) and abs(value) > _FLOAT32_MAX:
                raise ConversionException(field_path, raw, self.kind, "value out of range")
            return
        if self.signed:
            low, high = -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
        else:
            low, high = 0, (1 << self.bits) - 1
        if not low <= value <= high:
            raise ConversionException(field_path, raw, self.kind, "value out of range")


Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]
Uint8 = Annotated[int, Width(8, signed=False)]
Uint16 = Annotated[int, Width(16, signed=False)]
Uint32 = Annotated[int, Width(32, signed=False)]
Uint64 = Annotated[int, Width(64, signed=False)]
Float32 = Annotated[float, Width(32, floating=True)]
Float64 = Annotated[float, Width(64, floating=True)]


def width_of(extras: tuple[Any, ...]) -> Width | None:
    for extra in extras:
        if isinstance(extra, Width):
            return extra
    return None


def parse_bool(raw: str, field_path: str) -> bool:
    if raw == "":
        return False
    if raw in _TRUE_LITERALS:
        return True
    if raw in _FALSE_LITERALS:
        return False
    raise ConversionException(field_path, raw, "bool", "invalid syntax")


def parse_int(raw: str, field_path: str, width: Width | None = None) -> int:
    if raw == "":
        return 0
    if not _INT_RE.fullmatch(raw):
        raise ConversionException(field_path, raw, width.kind if width else "int", "invalid syntax")
    value = int(raw)
    if width is not None:
        width.check(value, field_path, raw)
    return value


def parse_float(raw: str, field_path: str, width: Width | None = None) -> float:
    if raw == "":
        return 0.0
    kind = width.kind if width else "float"
    if "_" in raw or raw != raw.strip():
        raise ConversionException(field_path, raw, kind, "invalid syntax")
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConversionException(field_path, raw, kind, "invalid syntax") from exc
    if math.isinf(value) and not _INF_RE.fullmatch(raw):
        raise ConversionException(field_path, raw, kind, "value out of range")
    if width is not None:
        return width.fit(value, field_path, raw)
    return value


def convert_value(raw: Any, hint: Any, field_path: str, extras: tuple[Any, ...] = ()) -> Any:
    """Convert a single wire value to *hint*.

    *raw* is normally a string; multipart sources also yield UploadedFile
    instances, which only bind to UploadedFile fields.

    Raises:
        ConversionException: The value cannot be parsed as the target type.
        UnsupportedTypeException: No conversion rule exists for the target type.
    """
    base, more = split_annotated(hint)
    extras = extras + more
    base, _ = unwrap_optional(base)

    if base is Any or base is object:
        return raw
    if base is UploadedFile or isinstance(raw, UploadedFile):
        if isinstance(raw, UploadedFile) and base is UploadedFile:
            return raw
        raise ConversionException(field_path, raw, kind_name(base), "file and non-file values do not mix")
    if base is str:
        return raw
    if base is bool:
        return parse_bool(raw, field_path)
    if base is int:
        return parse_int(raw, field_path, width_of(extras))
    if base is float:
        return parse_float(raw, field_path, width_of(extras))
    if base is Decimal:
        if raw != raw.strip():
            raise ConversionException(field_path, raw, "Decimal", "invalid syntax")
        try:
            return Decimal(raw or "0")
        except InvalidOperation as exc:
            raise ConversionException(field_path, raw, "Decimal", "invalid syntax") from exc
    if base is uuid.UUID:
        try:
            return uuid.UUID(raw)
        except ValueError as exc:
            raise ConversionException(field_path, raw, "UUID", str(exc)) from exc
    if base is datetime.datetime or base is datetime.date:
        try:
            return base.fromisoformat(raw)
        except ValueError as exc:
            raise ConversionException(field_path, raw, base.__name__, str(exc)) from exc
    if isinstance(base, type) and issubclass(base, enum.Enum):
        return _convert_enum(raw, base, field_path)

    raise UnsupportedTypeException(field_path, kind_name(base))


def _convert_enum(raw: str, enum_cls: type[enum.Enum], field_path: str) -> enum.Enum:
    try:
        return enum_cls(raw)
    except ValueError:
        pass
    if _INT_RE.fullmatch(raw):
        try:
            return enum_cls(int(raw))
        except ValueError:
            pass
    raise ConversionException(field_path, raw, enum_cls.__name__, "not a valid member")
