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
"""Protocol Buffers body decoder."""

from __future__ import annotations

from typing import Any

from google.protobuf.message import DecodeError, Message

from flybind.decoders.base import DEFAULT_DECODER_CONFIG, DecoderConfig, StreamDecoder
from flybind.kernel.exceptions import DecodeException


class ProtobufDecoder(StreamDecoder):
    """Decodes ``application/x-protobuf`` bodies into a protobuf ``Message``.

    The destination must be a generated message instance; its fields are
    replaced by the parsed payload. An empty body parses as an empty message.
    """

    format = "protobuf"
    errors = (DecodeError,)

    def bind_body(self, body: bytes, obj: Any, config: DecoderConfig = DEFAULT_DECODER_CONFIG) -> None:
        if not isinstance(obj, Message):
            raise DecodeException(self.format, "obj is not ProtoMessage")
        try:
            self._decode(body, obj, config)
        except DecodeError as exc:
            raise DecodeException(self.format, exc) from exc

    def _decode(self, body: bytes, obj: Any, config: DecoderConfig) -> None:
        obj.ParseFromString(body)
