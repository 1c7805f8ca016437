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
"""Tests for the MIME-type decoder registry."""

import pytest

from flybind.binding.mime import filter_flags
from flybind.decoders.base import BodyDecoder
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


class TestFilterFlags:
    @pytest.mark.parametrize(
        ("content_type", "expected"),
        [
            ("application/json", "application/json"),
            ("application/json; charset=utf-8", "application/json"),
            ("text/xml;charset=utf-8", "text/xml"),
            ("multipart/form-data boundary=x", "multipart/form-data"),
            ("", ""),
        ],
    )
    def test_strips_parameters(self, content_type: str, expected: str):
        assert filter_flags(content_type) == expected


class TestDefaultRegistry:
    @pytest.mark.parametrize(
        ("mime_type", "decoder"),
        [
            ("application/json", JSON),
            ("application/xml", XML),
            ("text/xml", XML),
            ("application/x-yaml", YAML),
            ("application/toml", TOML),
            ("application/x-protobuf", PROTOBUF),
            ("application/x-www-form-urlencoded", FORM),
            ("multipart/form-data", FORM_MULTIPART),
        ],
    )
    def test_builtin_decoders(self, mime_type: str, decoder: BodyDecoder):
        assert default_registry().get(mime_type) is decoder

    def test_decoders_implement_protocol(self):
        for decoder in (JSON, XML, YAML, TOML, PROTOBUF, FORM, FORM_MULTIPART):
            assert isinstance(decoder, BodyDecoder)

    def test_unknown_type(self):
        registry = default_registry()
        assert registry.get("text/plain") is None
        assert "text/plain" not in registry

    def test_match_is_exact(self):
        assert default_registry().get("application/JSON") is None


class TestDecoderRegistry:
    def test_register(self):
        registry = DecoderRegistry()
        registry.register("application/vnd.api+json", JSON)
        assert registry.get("application/vnd.api+json") is JSON
        assert len(registry) == 1
        assert list(registry) == ["application/vnd.api+json"]

    def test_copy_is_independent(self):
        registry = default_registry()
        copy = registry.copy()
        copy.register("text/plain", JSON)
        assert "text/plain" in copy
        assert "text/plain" not in registry
