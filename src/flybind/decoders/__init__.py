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
"""flybind decoders: body decoders and their MIME-type registry."""

from flybind.decoders.base import (
    DEFAULT_DECODER_CONFIG,
    BodyDecoder,
    DecoderConfig,
    StreamDecoder,
)
from flybind.decoders.form_decoder import FormDecoder, MultipartFormDecoder
from flybind.decoders.json_decoder import JSONDecoder
from flybind.decoders.protobuf_decoder import ProtobufDecoder
from flybind.decoders.registry import (
    FORM,
    FORM_MULTIPART,
    JSON,
    PROTOBUF,
    TOML,
    XML,
    YAML,
    DecoderRegistry,
    default_registry,
)
from flybind.decoders.toml_decoder import TOMLDecoder
from flybind.decoders.xml_decoder import XMLDecoder
from flybind.decoders.yaml_decoder import YAMLDecoder

__all__ = [
    "DEFAULT_DECODER_CONFIG",
    "FORM",
    "FORM_MULTIPART",
    "JSON",
    "PROTOBUF",
    "TOML",
    "XML",
    "YAML",
    "BodyDecoder",
    "DecoderConfig",
    "DecoderRegistry",
    "FormDecoder",
    "JSONDecoder",
    "MultipartFormDecoder",
    "ProtobufDecoder",
    "StreamDecoder",
    "TOMLDecoder",
    "XMLDecoder",
    "YAMLDecoder",
    "default_registry",
]
