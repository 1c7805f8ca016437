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
"""Tests for Config loading, lookup and dataclass binding."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from flybind.core.config import Config, config_properties


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"flybind": {"binding": {"use-number": True}}})
        assert config.get("flybind.binding.use-number") is True

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "flybind.yaml"
        config_file.write_text("flybind:\n  binding:\n    default-decoder: application/json\n")
        config = Config.from_file(config_file)
        assert config.get("flybind.binding.default-decoder") == "application/json"
        assert config.loaded_sources == [str(config_file)]

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "flybind.toml"
        config_file.write_text("[flybind.binding]\nuse-number = true\n")
        config = Config.from_file(config_file)
        assert config.get("flybind.binding.use-number") is True

    def test_missing_file_yields_empty_config(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.to_dict() == {}
        assert config.loaded_sources == []

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FLYBIND_BINDING_DEFAULT_DECODER", "application/xml")
        config = Config({"flybind": {"binding": {"default-decoder": "application/json"}}})
        assert config.get("flybind.binding.default-decoder") == "application/xml"

    def test_placeholder_resolution(self):
        config = Config({"limits": {"memory": "1024"}, "flybind": {"size": "${limits.memory}"}})
        assert config.get("flybind.size") == "1024"

    def test_placeholder_default(self):
        config = Config({"flybind": {"size": "${not.there:64}"}})
        assert config.get("flybind.size") == "64"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"flybind": {"size": "${not.there}"}})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("flybind.size")


class TestProfileConfigMerging:
    def test_profile_overlay_wins(self, tmp_path: Path):
        (tmp_path / "flybind.yaml").write_text("flybind:\n  binding:\n    use-number: false\n    max-multipart-memory: 10\n")
        (tmp_path / "flybind-dev.yaml").write_text("flybind:\n  binding:\n    use-number: true\n")
        config = Config.from_file(tmp_path / "flybind.yaml", active_profiles=["dev"])
        assert config.get("flybind.binding.use-number") is True
        assert config.get("flybind.binding.max-multipart-memory") == 10
        assert len(config.loaded_sources) == 2

    def test_absent_profile_is_ignored(self, tmp_path: Path):
        (tmp_path / "flybind.yaml").write_text("flybind:\n  binding:\n    use-number: false\n")
        config = Config.from_file(tmp_path / "flybind.yaml", active_profiles=["prod"])
        assert config.get("flybind.binding.use-number") is False


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="service")
        @dataclass
        class ServiceConfig:
            name: str = "default"
            workers: int = 1

        config = Config({"service": {"name": "orders", "workers": 4}})
        bound = config.bind(ServiceConfig)
        assert bound.name == "orders"
        assert bound.workers == 4

    def test_bind_uses_defaults(self):
        @config_properties(prefix="service")
        @dataclass
        class ServiceConfig:
            name: str = "default"

        assert Config({}).bind(ServiceConfig).name == "default"

    def test_bind_undecorated_class_raises(self):
        @dataclass
        class Plain:
            name: str = ""

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)
