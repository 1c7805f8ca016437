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
"""flybind binding: field mapping engine, value sources and source binders."""

from flybind.binding.binders import HEADER, QUERY, URI, HeaderBinding, QueryBinding, URIBinding
from flybind.binding.convert import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    Width,
)
from flybind.binding.mapper import map_by_tag, map_form
from flybind.binding.request import BindingRequest
from flybind.binding.schema import Tags, tagged
from flybind.binding.sources import HeaderSource, MappingSource, MultiDictSource, ValueSource
from flybind.binding.uploads import UploadedFile

__all__ = [
    "HEADER",
    "QUERY",
    "URI",
    "BindingRequest",
    "Float32",
    "Float64",
    "HeaderBinding",
    "HeaderSource",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "MappingSource",
    "MultiDictSource",
    "QueryBinding",
    "Tags",
    "URIBinding",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "UploadedFile",
    "ValueSource",
    "Width",
    "map_by_tag",
    "map_form",
    "tagged",
]
