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
"""Field descriptors for destination records.

A destination record is a dataclass or Pydantic model instance. Each of its
fields is described once per bind pass by a FieldDescriptor: the attribute
name, the declared type, any ``Annotated`` extras and the per-source
annotation keys (``Tags``). Inherited fields come first, so subclassing
plays the role of an embedded record.

Declaring annotations::

    @dataclass
    class Search:
        term: str = tagged("", query="q", json="term")
        limit: Annotated[int, Tags(query="limit", header="x-limit")] = 20
        _cursor: str = ""  # underscore fields are never bound
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from flybind.kernel.exceptions import NotAPointerException

_METADATA_KEY = "flybind"

EXCLUDED = "-"

_IMMUTABLE_TYPES = (str, bytes, int, float, complex, bool, tuple, frozenset, types.NoneType)


class Tags:
    """Per-source annotation keys for one field.

    Keys are source names (``json``, ``xml``, ``yaml``, ``toml``, ``form``,
    ``query``, ``header``, ``uri``); values are the key looked up in that
    source, or ``"-"`` to exclude the field from it.
    """

    __slots__ = ("_tags",)

    def __init__(self, **tags: str) -> None:
        self._tags = dict(tags)

    def get(self, source: str) -> str | None:
        return self._tags.get(source)

    def merged(self, other: Tags) -> Tags:
        return Tags(**{**self._tags, **other._tags})

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Tags) and self._tags == other._tags

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._tags.items())))

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in self._tags.items())
        return f"Tags({items})"


def tagged(
    default: Any = dataclasses.MISSING,
    *,
    default_factory: Any = dataclasses.MISSING,
    **tags: str,
) -> Any:
    """Declare a dataclass field carrying source annotations.

    Thin wrapper over :func:`dataclasses.field` storing a :class:`Tags` in the
    field metadata.
    """
    kwargs: dict[str, Any] = {"metadata": {_METADATA_KEY: Tags(**tags)}}
    if default is not dataclasses.MISSING:
        kwargs["default"] = default
    if default_factory is not dataclasses.MISSING:
        kwargs["default_factory"] = default_factory
    return dataclasses.field(**kwargs)


@dataclass(frozen=True)
class FieldDescriptor:
    """Metadata for one bindable field of a record type."""

    name: str
    hint: Any
    extras: tuple[Any, ...] = ()
    tags: Tags = dataclasses.field(default_factory=Tags)

    def key_for(self, source: str) -> str | None:
        """Resolve the source key for this field, or None when excluded."""
        value = self.tags.get(source)
        if value == EXCLUDED:
            return None
        return value or self.name

    def has_tag(self, source: str) -> bool:
        value = self.tags.get(source)
        return bool(value) and value != EXCLUDED


# ---------------------------------------------------------------------------
# Type inspection
# ---------------------------------------------------------------------------


def is_model(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseModel)


def is_record(tp: Any) -> bool:
    """True if *tp* is a dataclass or Pydantic model class."""
    return isinstance(tp, type) and (dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel))


def split_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, *extras]`` into ``(T, extras)``."""
    if get_origin(hint) is typing.Annotated:
        base, *extras = get_args(hint)
        inner, more = split_annotated(base)
        return inner, tuple(extras) + more
    return hint, ()


def unwrap_optional(hint: Any) -> tuple[Any, bool]:
    """Return ``(T, True)`` for ``T | None``; ``(hint, False)`` otherwise."""
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(hint) if a is not types.NoneType]
        if len(args) == 1 and len(get_args(hint)) == 2:
            return args[0], True
    return hint, False


def is_mapping_type(hint: Any) -> bool:
    origin = get_origin(hint) or hint
    return isinstance(origin, type) and issubclass(origin, Mapping)


def kind_name(hint: Any) -> str:
    """Human-readable name of a type hint for error messages."""
    if isinstance(hint, type) and get_origin(hint) is None:
        return hint.__name__
    return repr(hint).replace("typing.", "")


def describe(cls: type) -> list[FieldDescriptor]:
    """List the bindable fields of record type *cls* in declaration order.

    Fields whose name starts with an underscore are skipped.
    """
    descriptors: list[FieldDescriptor] = []

    if is_model(cls):
        for name, info in cls.model_fields.items():  # type: ignore[attr-defined]
            if name.startswith("_"):
                continue
            base, extras = split_annotated(info.annotation)
            extras = tuple(info.metadata) + extras
            descriptors.append(FieldDescriptor(name, base, extras, _collect_tags(extras)))
        return descriptors

    hints = get_type_hints(cls, include_extras=True)
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        base, extras = split_annotated(hints.get(f.name, Any))
        tags = _collect_tags(extras)
        declared = f.metadata.get(_METADATA_KEY)
        if isinstance(declared, Tags):
            tags = tags.merged(declared)
        descriptors.append(FieldDescriptor(f.name, base, extras, tags))
    return descriptors


def _collect_tags(extras: tuple[Any, ...]) -> Tags:
    tags = Tags()
    for extra in extras:
        if isinstance(extra, Tags):
            tags = tags.merged(extra)
    return tags


def has_source_tag(cls: type, source: str) -> bool:
    """True if any field of *cls* carries a non-empty, non-excluded *source* key."""
    return any(desc.has_tag(source) for desc in describe(cls))


# ---------------------------------------------------------------------------
# Destinations
# ---------------------------------------------------------------------------


def is_frozen(cls: type) -> bool:
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    if is_model(cls):
        return bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    return False


def ensure_pointer(obj: Any) -> None:
    """Reject destinations that cannot be mutated in place.

    Raises:
        NotAPointerException: For ``None``, classes, immutable builtins,
            read-only mappings and frozen records.
    """
    if isinstance(obj, type) or isinstance(obj, _IMMUTABLE_TYPES):
        raise NotAPointerException(obj)
    if isinstance(obj, Mapping) and not isinstance(obj, MutableMapping):
        raise NotAPointerException(obj)
    if is_record(type(obj)) and is_frozen(type(obj)):
        raise NotAPointerException(obj)


def mapping_value_type(obj: MutableMapping[Any, Any], default: Any = str) -> Any:
    """Declared value type of a mapping destination.

    Read from a parameterised base such as ``class Counts(dict[str, int])``;
    an unparameterised ``dict`` yields *default* (``str`` for wire values).
    """
    for klass in type(obj).__mro__:
        for base in klass.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if isinstance(origin, type) and issubclass(origin, Mapping):
                args = get_args(base)
                if len(args) == 2:
                    return args[1]
    return default


def zero_value(hint: Any) -> Any:
    """The value a freshly allocated field of type *hint* starts with."""
    base, _ = split_annotated(hint)
    base, optional = unwrap_optional(base)
    if optional:
        return None
    if is_record(base):
        return allocate(base)
    origin = get_origin(base) or base
    if origin in (str, bool, int, float, Decimal):
        return origin()
    if origin in (list, tuple, set, frozenset):
        return origin()
    if is_mapping_type(base):
        return {}
    return None


def allocate(cls: type) -> Any:
    """Create a zero-valued instance of record type *cls*.

    Fields with defaults keep them; required fields get their type's zero value.
    """
    if is_model(cls):
        kwargs = {
            name: zero_value(info.annotation)
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
            if info.is_required()
        }
        return cls.model_construct(**kwargs)  # type: ignore[attr-defined]

    hints = get_type_hints(cls, include_extras=True)
    kwargs = {
        f.name: zero_value(hints.get(f.name, Any))
        for f in dataclasses.fields(cls)
        if f.init and f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
    }
    return cls(**kwargs)
