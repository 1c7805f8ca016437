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
"""YAML body decoder (PyYAML)."""

from __future__ import annotations

from typing import Any

import yaml  # type: ignore[import-untyped]

from flybind.binding.document import assign_document
from flybind.decoders.base import DecoderConfig, StreamDecoder


class YAMLDecoder(StreamDecoder):
    """Decodes ``application/x-yaml`` bodies with ``yaml.safe_load``."""

    format = "yaml"
    errors = (yaml.YAMLError,)

    def _decode(self, body: bytes, obj: Any, config: DecoderConfig) -> None:
        data = yaml.safe_load(body)
        if data is None:
            return
        assign_document(obj, data, self.format, lenient=True)
