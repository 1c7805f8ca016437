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
"""Body decoder contract and the per-call decoder configuration.

Every decoder exposes ``bind(request, obj, config)`` for a live request and
``bind_body(body, obj, config)`` for a payload that is already in memory.
``DecoderConfig`` is a frozen snapshot passed by value into each call, so
decoder behaviour never depends on ambient mutable state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, BinaryIO, ClassVar, Protocol, runtime_checkable

from flybind.binding.request import BindingRequest
from flybind.config.properties.binding import BindingProperties
from flybind.kernel.exceptions import (
    ConversionException,
    DecodeException,
    UnsupportedTypeException,
)


@dataclass(frozen=True)
class DecoderConfig:
    """Decoder feature switches.

    Attributes:
        use_number: Decode JSON numbers as ``decimal.Decimal`` literals.
        disallow_unknown_fields: Fail JSON decoding on keys no field binds to.
        max_multipart_memory: Largest multipart body accepted, in bytes.
    """

    use_number: bool = False
    disallow_unknown_fields: bool = False
    max_multipart_memory: int = 32 << 20

    @classmethod
    def from_properties(cls, properties: BindingProperties) -> DecoderConfig:
        return cls(
            use_number=properties.use_number,
            disallow_unknown_fields=properties.disallow_unknown_fields,
            max_multipart_memory=properties.max_multipart_memory,
        )


DEFAULT_DECODER_CONFIG = DecoderConfig()


@runtime_checkable
class BodyDecoder(Protocol):
    """Decodes a request body onto a destination."""

    format: str

    def bind(self, request: BindingRequest, obj: Any, config: DecoderConfig = ...) -> None: ...
    def bind_body(self, body: bytes, obj: Any, config: DecoderConfig = ...) -> None: ...


def read_body(stream: BinaryIO | None, format: str) -> bytes:
    """Read a whole body stream, reporting I/O failures as DecodeException."""
    if stream is None:
        return b""
    try:
        return stream.read()
    except OSError as exc:
        raise DecodeException(format, exc) from exc


class StreamDecoder(ABC):
    """Base for decoders that read the body stream and decode it in one go.

    Subclasses implement ``_decode`` and list the parse errors of their codec
    library in ``errors``; those, ``ValueError`` and conversion failures are
    reported as DecodeException. An empty body decodes to nothing.
    """

    format: ClassVar[str] = ""
    errors: ClassVar[tuple[type[BaseException], ...]] = ()

    def bind(self, request: BindingRequest, obj: Any, config: DecoderConfig = DEFAULT_DECODER_CONFIG) -> None:
        self.decode(request.body, obj, config)

    def decode(self, stream: BinaryIO | None, obj: Any, config: DecoderConfig = DEFAULT_DECODER_CONFIG) -> None:
        self.bind_body(read_body(stream, self.format), obj, config)

    def bind_body(self, body: bytes, obj: Any, config: DecoderConfig = DEFAULT_DECODER_CONFIG) -> None:
        if not body.strip():
            return
        try:
            self._decode(body, obj, config)
        except DecodeException:
            raise
        except (ValueError, ConversionException, UnsupportedTypeException, *self.errors) as exc:
            raise DecodeException(self.format, exc) from exc

    @abstractmethod
    def _decode(self, body: bytes, obj: Any, config: DecoderConfig) -> None: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
