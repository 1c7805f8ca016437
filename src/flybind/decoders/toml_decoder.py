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
"""TOML body decoder (stdlib ``tomllib``)."""

from __future__ import annotations

import tomllib
from typing import Any

from flybind.binding.document import assign_document
from flybind.decoders.base import DecoderConfig, StreamDecoder


class TOMLDecoder(StreamDecoder):
    """Decodes ``application/toml`` bodies.

    TOML dates and times arrive as ``datetime`` objects and bind to fields of
    those types directly.
    """

    format = "toml"

    def _decode(self, body: bytes, obj: Any, config: DecoderConfig) -> None:
        assign_document(obj, tomllib.loads(body.decode("utf-8")), self.format)
