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
"""Value sources: multi-valued string views over one part of a request.

The field mapper is written against the ValueSource protocol only, so query
parameters, header fields, path parameters and form fields all bind through
the same code. A source may rewrite keys before lookup via
``normalize_key``; the header source lower-cases them because header names
are case-insensitive, and lists them in canonical form (``Content-Type``).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from starlette.datastructures import Headers, ImmutableMultiDict


@runtime_checkable
class ValueSource(Protocol):
    """A mapping from string key to an ordered list of values."""

    def normalize_key(self, key: str) -> str: ...
    def get_list(self, key: str) -> list[Any]: ...
    def keys(self) -> Iterable[str]: ...


class MultiDictSource:
    """Source over a Starlette multi-dict (``QueryParams``, form fields)."""

    __slots__ = ("_params",)

    def __init__(self, params: ImmutableMultiDict) -> None:
        self._params = params

    def normalize_key(self, key: str) -> str:
        return key

    def get_list(self, key: str) -> list[Any]:
        return self._params.getlist(key)

    def keys(self) -> Iterable[str]:
        return self._params.keys()

    def __repr__(self) -> str:
        return f"MultiDictSource({self._params!r})"


class HeaderSource:
    """Source over request headers, looked up case-insensitively.

    ``keys()`` yields canonical names such as ``X-Request-Id``, so root maps
    filled from headers read the same whatever case the client sent.
    """

    __slots__ = ("_headers",)

    def __init__(self, headers: Headers) -> None:
        self._headers = headers

    def normalize_key(self, key: str) -> str:
        return key.lower()

    def get_list(self, key: str) -> list[Any]:
        return self._headers.getlist(key)

    def keys(self) -> Iterable[str]:
        return dict.fromkeys(canonical_header_key(k) for k in self._headers.keys())

    def __repr__(self) -> str:
        return f"HeaderSource({self._headers!r})"


class MappingSource:
    """Source over a plain mapping, e.g. router-supplied path parameters.

    Values may be single strings or sequences of strings; non-string scalars
    (path converters can yield ints) are rendered with ``str``.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    def normalize_key(self, key: str) -> str:
        return key

    def get_list(self, key: str) -> list[Any]:
        value = self._data.get(key)
        if value is None:
            return []
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return [_as_text(value)]
        return [_as_text(v) for v in value]

    def keys(self) -> Iterable[str]:
        return self._data.keys()

    def __repr__(self) -> str:
        return f"MappingSource({self._data!r})"


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value if isinstance(value, str) else str(value)


def canonical_header_key(key: str) -> str:
    """Capitalize each dash-separated word: ``x-request-id`` -> ``X-Request-Id``."""
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))
