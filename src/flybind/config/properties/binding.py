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
"""Binding subsystem configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from flybind.core.config import config_properties


@config_properties(prefix="flybind.binding")
@dataclass
class BindingProperties:
    """Configuration for request binding (flybind.binding.*).

    ``default_decoder`` names a registered MIME type (e.g. ``application/json``)
    used when a request's Content-Type matches no decoder; empty disables it.
    """

    use_number: bool = False
    disallow_unknown_fields: bool = False
    default_decoder: str = ""
    max_multipart_memory: int = 32 << 20
