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
"""Document mapper: writes a decoded body tree onto a destination.

Body decoders turn a payload into plain Python data (dicts, lists, scalars)
and hand it to ``assign_document`` together with their annotation key
(``json``, ``xml``, ``yaml``, ``toml``). Keys are matched against each
field's annotation for that key, defaulting to the field name.

Structural mismatches raise DocumentError. Strict documents (JSON, TOML)
must carry natively typed scalars; lenient ones (XML, YAML) may deliver
strings that are converted like query values.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, get_args, get_origin

from flybind.binding.convert import convert_value, width_of
from flybind.binding.schema import (
    allocate,
    describe,
    is_mapping_type,
    is_record,
    kind_name,
    mapping_value_type,
    split_annotated,
    unwrap_optional,
)
from flybind.kernel.exceptions import ConversionException

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class DocumentError(ValueError):
    """A decoded document does not fit the destination's shape."""


@dataclass(frozen=True)
class _Context:
    tag: str
    lenient: bool
    reject_unknown: bool


def assign_document(
    obj: Any,
    data: Any,
    tag: str,
    *,
    lenient: bool = False,
    reject_unknown: bool = False,
    path: str = "",
) -> None:
    """Write decoded *data* onto destination *obj*.

    Args:
        obj: A record instance or a mutable mapping.
        data: The decoded document.
        tag: Annotation key used to match document keys to fields.
        lenient: Accept string scalars for typed fields (and scalars for strings).
        reject_unknown: Fail on document keys no field is bound to.
        path: Field path prefix used in error messages.

    Raises:
        DocumentError: The document does not fit the destination. A null
            document leaves *obj* untouched.
    """
    ctx = _Context(tag, lenient, reject_unknown)

    if data is None:
        return
    if isinstance(obj, MutableMapping):
        if not isinstance(data, Mapping):
            raise DocumentError(f"cannot unmarshal {_kind(data)} into {type(obj).__name__}")
        value_type = mapping_value_type(obj, default=Any)
        for key, value in data.items():
            obj[str(key)] = _coerce(value, value_type, ctx, _join(path, str(key)), None)
        return

    if not is_record(type(obj)):
        raise DocumentError(f"cannot unmarshal into {type(obj).__name__}")
    _assign_record(obj, data, ctx, path)


def _assign_record(obj: Any, data: Any, ctx: _Context, path: str) -> None:
    if not isinstance(data, Mapping):
        raise DocumentError(f"cannot unmarshal {_kind(data)} into {path or type(obj).__name__} of type {type(obj).__name__}")

    known: set[str] = set()
    for desc in describe(type(obj)):
        key = desc.key_for(ctx.tag)
        if key is None:
            continue
        known.add(key)
        if key not in data:
            continue
        current = getattr(obj, desc.name, None)
        setattr(obj, desc.name, _coerce(data[key], desc.hint, ctx, _join(path, desc.name), current, desc.extras))

    if ctx.reject_unknown:
        for key in data:
            if key not in known:
                raise DocumentError(f'unknown field "{key}"')


def _coerce(value: Any, hint: Any, ctx: _Context, path: str, current: Any, extras: tuple[Any, ...] = ()) -> Any:
    base, more = split_annotated(hint)
    extras = extras + more
    inner, optional = unwrap_optional(base)

    if value is None:
        return None if optional or inner is Any or inner is object else current
    if inner is Any or inner is object:
        return value

    if is_record(inner):
        target = current if isinstance(current, inner) else allocate(inner)
        _assign_record(target, value, ctx, path)
        return target

    if is_mapping_type(inner):
        if not isinstance(value, Mapping):
            raise DocumentError(f"cannot unmarshal {_kind(value)} into {path} of type {kind_name(inner)}")
        args = get_args(inner)
        value_type = args[1] if len(args) == 2 else Any
        return {str(k): _coerce(v, value_type, ctx, _join(path, str(k)), None) for k, v in value.items()}

    origin = get_origin(inner) or inner
    if origin in _SEQUENCE_TYPES:
        return _coerce_sequence(value, inner, origin, ctx, path)

    return _coerce_scalar(value, inner, extras, ctx, path)


def _coerce_sequence(value: Any, hint: Any, origin: type, ctx: _Context, path: str) -> Any:
    if not isinstance(value, list):
        if not ctx.lenient:
            raise DocumentError(f"cannot unmarshal {_kind(value)} into {path} of type {kind_name(hint)}")
        value = [value]

    args = get_args(hint)
    if origin is tuple and args and args[-1] is not Ellipsis:
        if len(value) != len(args):
            raise DocumentError(f"expected {len(args)} items for {path}, got {len(value)}")
        return tuple(_coerce(v, t, ctx, f"{path}[{i}]", None) for i, (v, t) in enumerate(zip(value, args, strict=True)))

    elem = args[0] if args else Any
    items = [_coerce(v, elem, ctx, f"{path}[{i}]", None) for i, v in enumerate(value)]
    return items if origin is list else origin(items)


def _coerce_scalar(value: Any, hint: Any, extras: tuple[Any, ...], ctx: _Context, path: str) -> Any:
    if isinstance(value, str):
        if hint is str:
            return value
        if ctx.lenient or hint not in (bool, int, float):
            return convert_value(value, hint, path, extras)
        raise DocumentError(f"cannot unmarshal string into {path} of type {kind_name(hint)}")

    if hint is str:
        if ctx.lenient and isinstance(value, (int, float, Decimal)):
            return _scalar_text(value)
        raise DocumentError(f"cannot unmarshal {_kind(value)} into {path} of type str")

    if hint is bool:
        if isinstance(value, bool):
            return value
    elif hint is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return _checked(value, extras, path)
        if isinstance(value, Decimal) and value == value.to_integral_value():
            return _checked(int(value), extras, path)
    elif hint is float:
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return _checked(_to_float(value, path), extras, path)
    elif hint is Decimal:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return Decimal(str(value))
        if isinstance(value, Decimal):
            return value
    elif isinstance(hint, type) and issubclass(hint, enum.Enum):
        try:
            return hint(value)
        except ValueError as exc:
            raise DocumentError(f"{value!r} is not a valid {hint.__name__} for {path}") from exc
    elif isinstance(hint, type) and isinstance(value, hint):
        return value

    raise DocumentError(f"cannot unmarshal {_kind(value)} into {path} of type {kind_name(hint)}")


def _checked(value: int | float, extras: tuple[Any, ...], path: str) -> int | float:
    width = width_of(extras)
    if width is not None:
        return width.fit(value, path, value)
    return value


def _to_float(value: int | float | Decimal, path: str) -> float:
    try:
        result = float(value)
    except OverflowError as exc:
        raise ConversionException(path, value, "float", "value out of range") from exc
    finite = value.is_finite() if isinstance(value, Decimal) else math.isfinite(value)
    if finite and math.isinf(result):
        raise ConversionException(path, value, "float", "value out of range")
    return result


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _kind(value: Any) -> str:
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name
