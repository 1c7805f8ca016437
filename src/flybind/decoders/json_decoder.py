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
"""JSON body decoder."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from flybind.binding.document import assign_document
from flybind.decoders.base import DecoderConfig, StreamDecoder


class JSONDecoder(StreamDecoder):
    """Decodes ``application/json`` bodies.

    With ``use_number`` every JSON number becomes a ``decimal.Decimal``
    holding the literal exactly, instead of ``int``/``float``. With
    ``disallow_unknown_fields`` a key that no field binds to fails the decode.
    """

    format = "json"

    def _decode(self, body: bytes, obj: Any, config: DecoderConfig) -> None:
        if config.use_number:
            data = json.loads(body, parse_float=Decimal, parse_int=Decimal)
        else:
            data = json.loads(body)
        assign_document(obj, data, self.format, reject_unknown=config.disallow_unknown_fields)
