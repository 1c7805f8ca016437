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
"""Exception hierarchy for flybind.

Every binding failure raised to callers inherits from BindingException,
so a single ``except BindingException`` handles any stage of a bind call.

Categories:
- NotAPointerException: the destination cannot be mutated in place
- DecodeException: a body payload could not be read or decoded
- ConversionException: a source value cannot be coerced to a field's type
- UnsupportedTypeException: a field or mapping type has no conversion rule
"""

from __future__ import annotations

from typing import Any


class BindingException(Exception):
    """Base exception for all binding errors.

    Carries an optional error code and context dict for structured error data,
    enough for a caller to build a client-facing diagnostic.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONVERSION_ERROR").
        context: Arbitrary key-value pairs describing the failure.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class NotAPointerException(BindingException):
    """The destination is a value, not a mutable object that can be bound in place."""

    def __init__(self, obj: Any) -> None:
        super().__init__(
            "can only bind pointer",
            code="NOT_A_POINTER",
            context={"type": type(obj).__name__},
        )


class DecodeException(BindingException):
    """A request body could not be read or decoded.

    Attributes:
        format: Name of the body format being decoded ("json", "xml", ...).
        cause: The underlying exception, if any.
    """

    def __init__(self, format: str, cause: BaseException | str) -> None:
        message = str(cause)
        super().__init__(message, code="DECODE_ERROR", context={"format": format})
        self.format = format
        self.cause = cause if isinstance(cause, BaseException) else None


class ConversionException(BindingException):
    """A matched source value cannot be coerced to the field's declared type."""

    def __init__(self, field_path: str, source_value: Any, target_kind: str, reason: str = "") -> None:
        message = f"cannot convert {source_value!r} to {target_kind} for field '{field_path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            code="CONVERSION_ERROR",
            context={
                "field": field_path,
                "value": source_value,
                "kind": target_kind,
            },
        )
        self.field_path = field_path
        self.source_value = source_value
        self.target_kind = target_kind


class UnsupportedTypeException(BindingException):
    """The destination (or one of its fields) has a type that cannot be bound from strings."""

    def __init__(self, field_path: str, target_kind: str) -> None:
        where = f"field '{field_path}'" if field_path else "destination"
        super().__init__(
            f"unsupported type {target_kind} for {where}",
            code="UNSUPPORTED_TYPE",
            context={"field": field_path, "kind": target_kind},
        )
        self.field_path = field_path
        self.target_kind = target_kind
