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
"""flybind: bind HTTP request data onto typed Python objects.

Quick start::

    from dataclasses import dataclass
    from typing import Annotated

    from flybind import BindingRequest, Tags, bind

    @dataclass
    class Search:
        term: Annotated[str, Tags(query="q", json="term")] = ""
        page: Annotated[int, Tags(query="page")] = 1
        token: Annotated[str, Tags(header="X-Token")] = ""

    search = Search()
    bind(BindingRequest.build("GET", "/search?q=shoes&page=2"), search)
"""

from flybind.binder import Binder, bind, configure, get_default_binder, set_default_binder
from flybind.binding import (
    HEADER,
    QUERY,
    URI,
    BindingRequest,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Tags,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    UploadedFile,
    tagged,
)
from flybind.decoders import (
    FORM,
    FORM_MULTIPART,
    JSON,
    PROTOBUF,
    TOML,
    XML,
    YAML,
    DecoderConfig,
    DecoderRegistry,
)
from flybind.kernel.exceptions import (
    BindingException,
    ConversionException,
    DecodeException,
    NotAPointerException,
    UnsupportedTypeException,
)

__version__ = "0.1.0"

__all__ = [
    "FORM",
    "FORM_MULTIPART",
    "HEADER",
    "JSON",
    "PROTOBUF",
    "QUERY",
    "TOML",
    "URI",
    "XML",
    "YAML",
    "Binder",
    "BindingException",
    "BindingRequest",
    "ConversionException",
    "DecodeException",
    "DecoderConfig",
    "DecoderRegistry",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "NotAPointerException",
    "Tags",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "UnsupportedTypeException",
    "UploadedFile",
    "bind",
    "configure",
    "get_default_binder",
    "set_default_binder",
    "tagged",
]
