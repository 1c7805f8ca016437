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
"""Standalone binders for the query string, headers and path parameters.

Each binds one value source onto a destination, independent of the body::

    QUERY.bind(request, filters)
    HEADER.bind(request, auth)
    URI.bind_uri({"id": "42"}, params)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flybind.binding.mapper import map_by_tag, map_form
from flybind.binding.request import BindingRequest
from flybind.binding.schema import ensure_pointer
from flybind.binding.sources import HeaderSource, MultiDictSource

QUERY_TAG = "query"
HEADER_TAG = "header"
URI_TAG = "uri"


class QueryBinding:
    """Binds URL query parameters using the ``query`` annotation."""

    name = "query"

    def bind(self, request: BindingRequest, obj: Any) -> None:
        ensure_pointer(obj)
        map_by_tag(obj, MultiDictSource(request.query), QUERY_TAG)


class HeaderBinding:
    """Binds request headers using the ``header`` annotation."""

    name = "header"

    def bind(self, request: BindingRequest, obj: Any) -> None:
        ensure_pointer(obj)
        map_by_tag(obj, HeaderSource(request.headers), HEADER_TAG)


class URIBinding:
    """Binds router-supplied path parameters using the ``uri`` annotation."""

    name = "uri"

    def bind_uri(self, params: Mapping[str, Any], obj: Any) -> None:
        ensure_pointer(obj)
        map_form(obj, params, URI_TAG)


QUERY = QueryBinding()
HEADER = HeaderBinding()
URI = URIBinding()
