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
"""Field mapper: binds a multi-valued string source onto a destination.

``map_by_tag(obj, source, tag)`` walks the destination depth-first, fields
in declaration order:

- a field excluded with ``"-"`` for *tag* is skipped; a field without an
  annotation for *tag* is looked up by its own name
- a record field (nested dataclass/model, or ``Record | None``) whose key is
  absent from the source is recursed into with the same flat source; an
  unset ``None`` reference is only allocated if something binds into it
- a record field whose key is present has its first value decoded as JSON
- sequence fields convert every value; scalar fields use the first value
- mapping fields cannot be populated from strings and raise
  UnsupportedTypeException
- a key absent from the source leaves the field untouched

When the destination itself is a mapping, every source key is copied into it
instead, keeping the last value of a repeated key.

The first error aborts the pass; fields already written keep their values.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, MutableMapping
from typing import Any, get_args, get_origin

from flybind.binding.convert import convert_value
from flybind.binding.document import assign_document
from flybind.binding.schema import (
    FieldDescriptor,
    allocate,
    describe,
    is_mapping_type,
    is_record,
    kind_name,
    mapping_value_type,
    split_annotated,
    unwrap_optional,
)
from flybind.binding.sources import MappingSource, ValueSource
from flybind.kernel.exceptions import ConversionException, UnsupportedTypeException

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def map_by_tag(obj: Any, source: ValueSource, tag: str) -> bool:
    """Bind *source* onto *obj* using annotation key *tag*.

    Returns:
        True if at least one field (or mapping entry) was written.
    """
    if isinstance(obj, MutableMapping):
        return _set_form_map(obj, source)
    return _map_record(obj, source, tag, "")


def map_form(obj: Any, values: Mapping[str, Any], tag: str = "form") -> bool:
    """Bind a plain ``{key: values}`` mapping (e.g. path parameters) onto *obj*."""
    return map_by_tag(obj, MappingSource(values), tag)


def _map_record(obj: Any, source: ValueSource, tag: str, prefix: str) -> bool:
    if not is_record(type(obj)):
        return False

    is_set = False
    for desc in describe(type(obj)):
        key = desc.key_for(tag)
        if key is None:
            continue
        path = f"{prefix}.{desc.name}" if prefix else desc.name
        if _map_field(obj, desc, source, tag, key, path):
            is_set = True
    return is_set


def _map_field(obj: Any, desc: FieldDescriptor, source: ValueSource, tag: str, key: str, path: str) -> bool:
    base, _ = unwrap_optional(desc.hint)
    values = source.get_list(source.normalize_key(key))

    if is_record(base):
        if values:
            _decode_record_value(obj, desc, base, values[0], path)
            return True
        return _descend(obj, desc, base, source, tag, path)

    if not values:
        return False

    if is_mapping_type(split_annotated(base)[0]):
        raise UnsupportedTypeException(path, kind_name(base))

    setattr(obj, desc.name, _convert_values(values, desc.hint, desc.extras, path))
    return True


def _descend(obj: Any, desc: FieldDescriptor, record_type: type, source: ValueSource, tag: str, path: str) -> bool:
    child = getattr(obj, desc.name, None)
    if isinstance(child, record_type):
        return _map_record(child, source, tag, path)

    child = allocate(record_type)
    if _map_record(child, source, tag, path):
        setattr(obj, desc.name, child)
        return True
    return False


def _decode_record_value(obj: Any, desc: FieldDescriptor, record_type: type, raw: Any, path: str) -> None:
    if not isinstance(raw, str):
        raise ConversionException(path, raw, record_type.__name__, "expected a JSON object")

    target = getattr(obj, desc.name, None)
    if not isinstance(target, record_type):
        target = allocate(record_type)
    try:
        assign_document(target, json.loads(raw), "json", path=path)
    except ValueError as exc:
        raise ConversionException(path, raw, record_type.__name__, str(exc)) from exc
    setattr(obj, desc.name, target)


def _convert_values(values: list[Any], hint: Any, extras: tuple[Any, ...], path: str) -> Any:
    base, more = split_annotated(hint)
    base, _ = unwrap_optional(base)
    extras = extras + more
    origin = get_origin(base) or base

    if origin not in _SEQUENCE_TYPES:
        return convert_value(values[0], base, path, extras)

    args = get_args(base)
    if origin is tuple and args and args[-1] is not Ellipsis:
        if len(values) != len(args):
            raise ConversionException(path, values, kind_name(base), f"expected {len(args)} values, got {len(values)}")
        return tuple(convert_value(v, t, f"{path}[{i}]") for i, (v, t) in enumerate(zip(values, args, strict=True)))

    elem = args[0] if args else str
    converted = [convert_value(v, elem, f"{path}[{i}]") for i, v in enumerate(values)]
    return converted if origin is list else origin(converted)


def _set_form_map(obj: MutableMapping[Any, Any], source: ValueSource) -> bool:
    value_type, _ = split_annotated(mapping_value_type(obj))

    if value_type is str:
        is_set = False
        for key in source.keys():
            texts = [v for v in source.get_list(key) if isinstance(v, str)]
            if texts:
                obj[key] = texts[-1]
                is_set = True
        return is_set

    if get_origin(value_type) is list and get_args(value_type) == (str,):
        is_set = False
        for key in source.keys():
            texts = [v for v in source.get_list(key) if isinstance(v, str)]
            if texts:
                obj[key] = texts
                is_set = True
        return is_set

    raise UnsupportedTypeException("", f"mapping of {kind_name(value_type)}")
