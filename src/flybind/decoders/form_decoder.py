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
"""Form body decoders: URL-encoded and multipart.

Both decoders extract raw key/value pairs and hand them to the field mapper
with annotation key ``form``. URL-encoded forms see the body fields followed
by the URL query fields; multipart forms see only the body, including file
parts, which bind to ``UploadedFile`` fields. Field names, file names and
text values must be valid UTF-8.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header
from starlette.datastructures import ImmutableMultiDict

from flybind.binding.mapper import map_by_tag
from flybind.binding.request import BindingRequest
from flybind.binding.sources import MultiDictSource
from flybind.binding.uploads import UploadedFile
from flybind.decoders.base import DEFAULT_DECODER_CONFIG, DecoderConfig, read_body
from flybind.kernel.exceptions import DecodeException

FORM_TAG = "form"

# Methods whose body carries form fields; other methods only see the query.
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class FormDecoder:
    """Decodes ``application/x-www-form-urlencoded`` bodies."""

    format = "form"

    def bind(self, request: BindingRequest, obj: Any, config: DecoderConfig = DEFAULT_DECODER_CONFIG) -> None:
        pairs: list[tuple[str, Any]] = []
        if request.method in _BODY_METHODS:
            pairs.extend(self._parse(read_body(request.body, self.format)))
        pairs.extend(request.query.multi_items())
        map_by_tag(obj, MultiDictSource(ImmutableMultiDict(pairs)), FORM_TAG)

    def bind_body(self, body: bytes, obj: Any, config: DecoderConfig = DEFAULT_DECODER_CONFIG) -> None:
        map_by_tag(obj, MultiDictSource(ImmutableMultiDict(self._parse(body))), FORM_TAG)

    def _parse(self, body: bytes) -> list[tuple[str, str]]:
        try:
            return parse_qsl(body.decode("utf-8"), keep_blank_values=True)
        except UnicodeDecodeError as exc:
            raise DecodeException(self.format, exc) from exc

    def __repr__(self) -> str:
        return "FormDecoder()"


class MultipartFormDecoder:
    """Decodes ``multipart/form-data`` bodies, held entirely in memory.

    Bodies larger than ``DecoderConfig.max_multipart_memory`` are rejected.
    """

    format = "multipart"

    def bind(self, request: BindingRequest, obj: Any, config: DecoderConfig = DEFAULT_DECODER_CONFIG) -> None:
        body = read_body(request.body, self.format)
        self.bind_body(body, obj, config, content_type=request.content_type)

    def bind_body(
        self,
        body: bytes,
        obj: Any,
        config: DecoderConfig = DEFAULT_DECODER_CONFIG,
        content_type: str | None = None,
    ) -> None:
        """Decode an in-memory multipart body.

        Without *content_type* the boundary is taken from the body's first line.
        """
        if len(body) > config.max_multipart_memory:
            raise DecodeException(self.format, f"multipart body exceeds {config.max_multipart_memory} bytes")
        boundary = self._boundary(body, content_type)
        pairs = self._parse(body, boundary)
        map_by_tag(obj, MultiDictSource(ImmutableMultiDict(pairs)), FORM_TAG)

    def _boundary(self, body: bytes, content_type: str | None) -> bytes:
        if content_type:
            _, options = parse_options_header(content_type)
            boundary = options.get(b"boundary")
        else:
            first_line = body.split(b"\r\n", 1)[0]
            boundary = first_line[2:] if first_line.startswith(b"--") else None
        if not boundary:
            raise DecodeException(self.format, "missing multipart boundary")
        return boundary

    def _parse(self, body: bytes, boundary: bytes) -> list[tuple[str, Any]]:
        pairs: list[tuple[str, Any]] = []
        headers: dict[bytes, bytes] = {}
        header_field = bytearray()
        header_value = bytearray()
        data = bytearray()

        def on_part_begin() -> None:
            headers.clear()
            data.clear()

        def on_header_field(chunk: bytes, start: int, end: int) -> None:
            header_field.extend(chunk[start:end])

        def on_header_value(chunk: bytes, start: int, end: int) -> None:
            header_value.extend(chunk[start:end])

        def on_header_end() -> None:
            headers[bytes(header_field).lower()] = bytes(header_value)
            header_field.clear()
            header_value.clear()

        def on_part_data(chunk: bytes, start: int, end: int) -> None:
            data.extend(chunk[start:end])

        def on_part_end() -> None:
            _, params = parse_options_header(headers.get(b"content-disposition", b""))
            name = params.get(b"name")
            if name is None:
                return
            key = name.decode("utf-8")
            filename = params.get(b"filename")
            if filename is not None:
                content_type = headers.get(b"content-type", b"application/octet-stream").decode("latin-1")
                pairs.append((key, UploadedFile(filename.decode("utf-8"), content_type, bytes(data))))
            else:
                pairs.append((key, data.decode("utf-8")))

        callbacks: dict[str, Any] = {
            "on_part_begin": on_part_begin,
            "on_header_field": on_header_field,
            "on_header_value": on_header_value,
            "on_header_end": on_header_end,
            "on_part_data": on_part_data,
            "on_part_end": on_part_end,
        }

        try:
            parser = MultipartParser(boundary, callbacks)
            parser.write(body)
            parser.finalize()
        except (MultipartParseError, UnicodeDecodeError) as exc:
            raise DecodeException(self.format, exc) from exc
        return pairs

    def __repr__(self) -> str:
        return "MultipartFormDecoder()"
