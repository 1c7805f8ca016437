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
"""Content-Type MIME types of the common request body formats."""

from __future__ import annotations

MIME_JSON = "application/json"
MIME_XML = "application/xml"
MIME_XML2 = "text/xml"
MIME_YAML = "application/x-yaml"
MIME_TOML = "application/toml"
MIME_PROTOBUF = "application/x-protobuf"
MIME_POST_FORM = "application/x-www-form-urlencoded"
MIME_MULTIPART_POST_FORM = "multipart/form-data"
MIME_HTML = "text/html"
MIME_PLAIN = "text/plain"


def filter_flags(content_type: str) -> str:
    """Strip parameters from a Content-Type value.

    ``"application/json; charset=utf-8"`` becomes ``"application/json"``.
    Everything from the first space or semicolon on is dropped.
    """
    for i, char in enumerate(content_type):
        if char in " ;":
            return content_type[:i]
    return content_type
