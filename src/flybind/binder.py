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
"""Binder: the request binding dispatcher.

A single ``bind`` call fills one destination from every part of a request:

1. the body, through the decoder registered for the bare Content-Type
   (or the configured default decoder; otherwise the body is skipped)
2. the query string, if any top-level field has a ``query`` annotation
3. the path parameters, if supplied and any field has a ``uri`` annotation
4. the headers, if any field has a ``header`` annotation

Passes share the destination, so a later pass overwrites what an earlier
one wrote to the same field. The first error aborts the whole bind.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from flybind.binding.binders import HEADER, QUERY, URI
from flybind.binding.mime import filter_flags
from flybind.binding.request import BindingRequest
from flybind.binding.schema import ensure_pointer, has_source_tag, is_record
from flybind.config.properties.binding import BindingProperties
from flybind.config.properties.logging import LoggingProperties
from flybind.core.config import Config
from flybind.decoders.base import DEFAULT_DECODER_CONFIG, BodyDecoder, DecoderConfig
from flybind.decoders.registry import DecoderRegistry, default_registry
from flybind.logging.structlog_adapter import StructlogAdapter

logger = structlog.get_logger("flybind.binding")


class Binder:
    """Dispatches a request to its body decoder and the source binders.

    Args:
        registry: MIME type to decoder lookup. Defaults to every built-in decoder.
        config: Decoder switches, passed by value into each decoder call.
        default_decoder: Decoder (or registered MIME type naming one) used when
            the Content-Type matches nothing in *registry*.
    """

    def __init__(
        self,
        registry: DecoderRegistry | None = None,
        config: DecoderConfig = DEFAULT_DECODER_CONFIG,
        default_decoder: BodyDecoder | str | None = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry()
        self._config = config
        if isinstance(default_decoder, str):
            resolved = self._registry.get(default_decoder) if default_decoder else None
            if default_decoder and resolved is None:
                raise ValueError(f"No decoder registered for default decoder '{default_decoder}'")
            default_decoder = resolved
        self._default_decoder: BodyDecoder | None = default_decoder

    @classmethod
    def from_properties(cls, properties: BindingProperties, registry: DecoderRegistry | None = None) -> Binder:
        return cls(
            registry=registry,
            config=DecoderConfig.from_properties(properties),
            default_decoder=properties.default_decoder or None,
        )

    @property
    def registry(self) -> DecoderRegistry:
        return self._registry

    @property
    def config(self) -> DecoderConfig:
        return self._config

    @property
    def default_decoder(self) -> BodyDecoder | None:
        return self._default_decoder

    def bind(self, request: BindingRequest, obj: Any, path_params: Mapping[str, Any] | None = None) -> None:
        """Bind every applicable part of *request* onto *obj*.

        Raises:
            NotAPointerException: *obj* cannot be written to.
            DecodeException: The body could not be decoded.
            ConversionException: A query, path or header value did not convert.
            UnsupportedTypeException: A field type cannot be bound from strings.
        """
        ensure_pointer(obj)

        mime_type = filter_flags(request.content_type)
        decoder = self._registry.get(mime_type)
        if decoder is None:
            decoder = self._default_decoder
        if decoder is not None:
            logger.debug("binding_body", mime_type=mime_type, decoder=decoder.format)
            decoder.bind(request, obj, self._config)
        else:
            logger.debug("binding_body_skipped", mime_type=mime_type)

        cls = type(obj)
        if not is_record(cls):
            return

        if has_source_tag(cls, "query"):
            logger.debug("binding_query", destination=cls.__name__)
            QUERY.bind(request, obj)

        if path_params is not None and has_source_tag(cls, "uri"):
            logger.debug("binding_uri", destination=cls.__name__)
            URI.bind_uri(path_params, obj)

        if has_source_tag(cls, "header"):
            logger.debug("binding_header", destination=cls.__name__)
            HEADER.bind(request, obj)

    def __repr__(self) -> str:
        return f"Binder(registry={self._registry!r}, config={self._config!r})"


_default_binder = Binder()


def get_default_binder() -> Binder:
    return _default_binder


def set_default_binder(binder: Binder) -> None:
    """Replace the process default binder. Call once, before serving requests."""
    global _default_binder
    _default_binder = binder


def configure(config: Config, *, configure_logging: bool = True) -> Binder:
    """Build the default binder (and optionally logging) from *config*.

    Reads ``flybind.binding.*`` into :class:`BindingProperties` and, when
    *configure_logging* is true, ``flybind.logging.*`` into :class:`LoggingProperties`.
    """
    if configure_logging:
        StructlogAdapter().configure(config.bind(LoggingProperties))
    binder = Binder.from_properties(config.bind(BindingProperties))
    set_default_binder(binder)
    return binder


def bind(request: BindingRequest, obj: Any, path_params: Mapping[str, Any] | None = None) -> None:
    """Bind *request* onto *obj* with the default binder."""
    _default_binder.bind(request, obj, path_params)
