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
"""DecoderRegistry: maps a bare MIME type to the body decoder for it."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from flybind.binding.mime import (
    MIME_JSON,
    MIME_MULTIPART_POST_FORM,
    MIME_POST_FORM,
    MIME_PROTOBUF,
    MIME_TOML,
    MIME_XML,
    MIME_XML2,
    MIME_YAML,
)
from flybind.decoders.base import BodyDecoder
from flybind.decoders.form_decoder import FormDecoder, MultipartFormDecoder
from flybind.decoders.json_decoder import JSONDecoder
from flybind.decoders.protobuf_decoder import ProtobufDecoder
from flybind.decoders.toml_decoder import TOMLDecoder
from flybind.decoders.xml_decoder import XMLDecoder
from flybind.decoders.yaml_decoder import YAMLDecoder

JSON = JSONDecoder()
XML = XMLDecoder()
YAML = YAMLDecoder()
TOML = TOMLDecoder()
PROTOBUF = ProtobufDecoder()
FORM = FormDecoder()
FORM_MULTIPART = MultipartFormDecoder()


class DecoderRegistry:
    """Exact-match lookup of body decoders by MIME type (parameters stripped)."""

    def __init__(self, decoders: Mapping[str, BodyDecoder] | None = None) -> None:
        self._decoders: dict[str, BodyDecoder] = dict(decoders or {})

    def register(self, mime_type: str, decoder: BodyDecoder) -> None:
        self._decoders[mime_type] = decoder

    def get(self, mime_type: str) -> BodyDecoder | None:
        return self._decoders.get(mime_type)

    def copy(self) -> DecoderRegistry:
        return DecoderRegistry(self._decoders)

    def __contains__(self, mime_type: object) -> bool:
        return mime_type in self._decoders

    def __iter__(self) -> Iterator[str]:
        return iter(self._decoders)

    def __len__(self) -> int:
        return len(self._decoders)

    def __repr__(self) -> str:
        return f"DecoderRegistry({sorted(self._decoders)!r})"


def default_registry() -> DecoderRegistry:
    """A registry with every built-in decoder under its MIME type(s)."""
    return DecoderRegistry(
        {
            MIME_JSON: JSON,
            MIME_XML: XML,
            MIME_XML2: XML,
            MIME_YAML: YAML,
            MIME_TOML: TOML,
            MIME_PROTOBUF: PROTOBUF,
            MIME_POST_FORM: FORM,
            MIME_MULTIPART_POST_FORM: FORM_MULTIPART,
        }
    )
