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
"""BindingRequest: the request data a bind call reads from."""

from __future__ import annotations

import io
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO
from urllib.parse import urlsplit

from starlette.datastructures import Headers, QueryParams

if TYPE_CHECKING:
    from starlette.requests import Request


@dataclass(frozen=True, slots=True)
class BindingRequest:
    """An HTTP request as seen by the binders.

    Query parameters and headers use Starlette's multi-valued datastructures.
    The body is a binary stream consumed at most once per bind call.
    """

    method: str
    path: str
    query: QueryParams
    headers: Headers
    body: BinaryIO | None = None

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    @property
    def content_length(self) -> int | None:
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @classmethod
    def build(
        cls,
        method: str = "GET",
        url: str = "/",
        headers: Mapping[str, str] | Sequence[tuple[str, str]] | None = None,
        body: bytes | str | BinaryIO | None = None,
    ) -> BindingRequest:
        """Build a request from plain values.

        *headers* may repeat a name when given as a sequence of pairs.
        *url* may carry a query string.
        """
        pairs = headers.items() if isinstance(headers, Mapping) else (headers or ())
        raw = [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in pairs]

        if isinstance(body, str):
            body = body.encode("utf-8")
        if isinstance(body, bytes):
            body = io.BytesIO(body)

        split = urlsplit(url)
        return cls(
            method=method.upper(),
            path=split.path or "/",
            query=QueryParams(split.query),
            headers=Headers(raw=raw),
            body=body,
        )

    @classmethod
    async def from_starlette(cls, request: Request) -> BindingRequest:
        """Snapshot a Starlette request, reading its body once."""
        content = await request.body()
        return cls(
            method=request.method,
            path=request.url.path,
            query=request.query_params,
            headers=request.headers,
            body=io.BytesIO(content),
        )
