# Copyright 2025 Courier authors
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

"""Tests for explicit extension loading."""

from __future__ import annotations

import textwrap

import pytest

from courier.exceptions import CourierConfigurationError
from courier.registry import MessageValidatorRegistry, load_extensions, plugin_registry
from courier.validation.text import PlainTextMessageValidator

EXTENSION_SOURCE = textwrap.dedent(
    """
    from courier.validation.text import PlainTextMessageValidator


    def register(registry):
        registry.add_message_validator("{name}", PlainTextMessageValidator())
    """
)


def _write_extension(tmp_path, monkeypatch, module: str, validator_name: str) -> None:
    (tmp_path / f"{module}.py").write_text(EXTENSION_SOURCE.replace("{name}", validator_name))
    monkeypatch.syspath_prepend(str(tmp_path))


class _FakeEntryPoint:
    def __init__(self, target) -> None:
        self._target = target

    def load(self):
        return self._target


def test_module_extension_registers_into_default_registry(
    tmp_path, monkeypatch, isolated_validator_registry
) -> None:
    _write_extension(tmp_path, monkeypatch, "courier_ext_alpha", "alpha")

    load_extensions("courier_ext_alpha")

    assert isinstance(
        isolated_validator_registry.find_message_validator("alpha"),
        PlainTextMessageValidator,
    )


def test_loaded_extensions_are_not_loaded_twice(
    tmp_path, monkeypatch, isolated_validator_registry
) -> None:
    _write_extension(tmp_path, monkeypatch, "courier_ext_beta", "beta")
    first, second = MessageValidatorRegistry(), MessageValidatorRegistry()

    load_extensions(["courier_ext_beta"], first)
    load_extensions(["courier_ext_beta"], second)

    assert first.find_message_validator("beta") is not None
    assert second.find_message_validator("beta") is None


def test_entry_point_resolving_to_a_callable(monkeypatch, isolated_validator_registry) -> None:
    def register(registry) -> None:
        registry.add_message_validator("gamma", PlainTextMessageValidator())

    monkeypatch.setattr(
        plugin_registry,
        "_entry_point",
        lambda name: _FakeEntryPoint(register) if name == "gamma-ext" else None,
    )
    registry = MessageValidatorRegistry()

    load_extensions("gamma-ext", registry)

    assert registry.find_message_validator("gamma") is not None


def test_unknown_extension(isolated_validator_registry) -> None:
    with pytest.raises(CourierConfigurationError, match="Unknown extension 'courier_ext_nope'"):
        load_extensions("courier_ext_nope", MessageValidatorRegistry())


def test_extension_without_register(tmp_path, monkeypatch, isolated_validator_registry) -> None:
    (tmp_path / "courier_ext_empty.py").write_text("VALUE = 1\n")
    monkeypatch.syspath_prepend(str(tmp_path))

    with pytest.raises(CourierConfigurationError, match="does not expose"):
        load_extensions("courier_ext_empty", MessageValidatorRegistry())
    assert "courier_ext_empty" not in plugin_registry._LOADED_EXTENSIONS
