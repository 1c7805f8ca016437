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
"""Tests for the XML, YAML and TOML body decoders."""

import datetime
from dataclasses import dataclass, field
from typing import Annotated

import pytest

from flybind.binding.request import BindingRequest
from flybind.binding.schema import Tags
from flybind.decoders.toml_decoder import TOMLDecoder
from flybind.decoders.xml_decoder import XMLDecoder, xml_to_dict
from flybind.decoders.yaml_decoder import YAMLDecoder
from flybind.kernel.exceptions import DecodeException


@dataclass
class Item:
    sku: str = ""
    qty: int = 0


@dataclass
class Order:
    foo: Annotated[str, Tags(xml="foo", yaml="foo", toml="foo")] = ""
    count: int = 0
    paid: bool = False
    items: list[Item] = field(default_factory=list)
    placed: datetime.date | None = None


class TestXMLDecoder:
    def test_bind(self):
        body = b"""<?xml version="1.0" encoding="UTF-8"?>
<root>
    <foo>FOO</foo>
    <count>3</count>
    <paid>true</paid>
</root>"""
        obj = Order()
        XMLDecoder().bind(BindingRequest.build("POST", body=body), obj)
        assert obj.foo == "FOO"
        assert obj.count == 3
        assert obj.paid is True

    def test_repeated_elements_become_list(self):
        body = b"<order><items><sku>a</sku><qty>1</qty></items><items><sku>b</sku><qty>2</qty></items></order>"
        obj = Order()
        XMLDecoder().bind_body(body, obj)
        assert obj.items == [Item("a", 1), Item("b", 2)]

    def test_single_element_for_list(self):
        obj = Order()
        XMLDecoder().bind_body(b"<order><items><sku>a</sku></items></order>", obj)
        assert obj.items == [Item("a", 0)]

    def test_namespaces_are_dropped(self):
        assert xml_to_dict(b'<r xmlns="urn:x"><foo>1</foo></r>') == {"foo": "1"}

    def test_malformed(self):
        with pytest.raises(DecodeException) as exc_info:
            XMLDecoder().bind_body(b"<root><foo>FOO</root>", Order())
        assert exc_info.value.format == "xml"

    def test_bad_value(self):
        with pytest.raises(DecodeException):
            XMLDecoder().bind_body(b"<root><count>many</count></root>", Order())

    def test_empty_body_is_noop(self):
        obj = Order(foo="keep")
        XMLDecoder().bind_body(b"", obj)
        assert obj.foo == "keep"


class TestYAMLDecoder:
    def test_bind(self):
        obj = Order()
        YAMLDecoder().bind_body(b"foo: bar\ncount: 2\npaid: yes\nitems:\n  - sku: a\n    qty: 1\n", obj)
        assert obj.foo == "bar"
        assert obj.count == 2
        assert obj.paid is True
        assert obj.items == [Item("a", 1)]

    def test_date_value(self):
        obj = Order()
        YAMLDecoder().bind_body(b"placed: 2024-05-01\n", obj)
        assert obj.placed == datetime.date(2024, 5, 1)

    def test_malformed(self):
        with pytest.raises(DecodeException) as exc_info:
            YAMLDecoder().bind_body(b"foo: [unclosed\n", Order())
        assert exc_info.value.format == "yaml"

    def test_wrong_shape(self):
        with pytest.raises(DecodeException):
            YAMLDecoder().bind_body(b"- just\n- a list\n", Order())

    def test_empty_document_is_noop(self):
        obj = Order(foo="keep")
        YAMLDecoder().bind_body(b"# nothing here\n", obj)
        assert obj.foo == "keep"


class TestTOMLDecoder:
    def test_bind(self):
        body = b'foo = "FOO"\ncount = 4\npaid = true\nplaced = 2024-05-01\n\n[[items]]\nsku = "a"\nqty = 1\n'
        obj = Order()
        TOMLDecoder().bind_body(body, obj)
        assert obj.foo == "FOO"
        assert obj.count == 4
        assert obj.paid is True
        assert obj.placed == datetime.date(2024, 5, 1)
        assert obj.items == [Item("a", 1)]

    def test_malformed(self):
        with pytest.raises(DecodeException) as exc_info:
            TOMLDecoder().bind_body(b'foo = "unterminated\n', Order())
        assert exc_info.value.format == "toml"

    def test_string_for_int_rejected(self):
        with pytest.raises(DecodeException):
            TOMLDecoder().bind_body(b'count = "4"\n', Order())

    def test_empty_body_is_noop(self):
        obj = Order(foo="keep")
        TOMLDecoder().bind_body(b"", obj)
        assert obj.foo == "keep"
