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
"""XML body decoder (stdlib ``xml.etree.ElementTree``)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from flybind.binding.document import assign_document
from flybind.decoders.base import DecoderConfig, StreamDecoder


def _local_name(tag: str) -> str:
    """Drop a ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _element_to_value(element: ET.Element) -> dict[str, Any] | str:
    """Recursively convert an element to a dict (has children) or its text.

    Repeated sibling elements with the same tag are collected into a list.
    """
    children = list(element)
    if not children:
        return element.text or ""

    result: dict[str, Any] = {}
    for child in children:
        child_value = _element_to_value(child)
        tag = _local_name(child.tag)
        if tag in result:
            existing = result[tag]
            if isinstance(existing, list):
                existing.append(child_value)
            else:
                result[tag] = [existing, child_value]
        else:
            result[tag] = child_value
    return result


def xml_to_dict(body: bytes | str) -> dict[str, Any] | str:
    """Parse an XML document; the root element's children become the keys."""
    return _element_to_value(ET.fromstring(body))


class XMLDecoder(StreamDecoder):
    """Decodes ``application/xml`` and ``text/xml`` bodies.

    The root element's name is ignored. Element text is converted to the
    field's type like a query value.
    """

    format = "xml"
    errors = (ET.ParseError,)

    def _decode(self, body: bytes, obj: Any, config: DecoderConfig) -> None:
        assign_document(obj, xml_to_dict(body), self.format, lenient=True)
