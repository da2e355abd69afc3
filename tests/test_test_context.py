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

"""Tests for test-scoped variables and dynamic content replacement."""

from __future__ import annotations

import pytest

from courier.context import TestContext
from courier.exceptions import CourierConfigurationError
from courier.settings import CourierSettings


def test_variables() -> None:
    context = TestContext({"a": 1})
    context.set_variable("b", "two")

    assert context.get_variable("a") == 1
    assert context.has_variable("b")
    assert not context.has_variable("c")
    with pytest.raises(CourierConfigurationError, match="Unknown variable 'c'"):
        context.get_variable("c")
    with pytest.raises(CourierConfigurationError):
        context.set_variable("", "x")


def test_replace_dynamic_content() -> None:
    context = TestContext({"name": "Penny", "count": 3})

    assert context.replace_dynamic_content("Hello ${name}, ${count}!") == "Hello Penny, 3!"
    assert context.replace_dynamic_content("no placeholders") == "no placeholders"
    assert context.replace_dynamic_content("") == ""
    assert context.replace_dynamic_content(None) is None
    with pytest.raises(CourierConfigurationError):
        context.replace_dynamic_content("${missing}")


def test_resolve_dynamic_value_keeps_types() -> None:
    context = TestContext({"count": 3})

    assert context.resolve_dynamic_value("${count}") == 3
    assert context.resolve_dynamic_value("n=${count}") == "n=3"
    assert context.resolve_dynamic_value(7) == 7


def test_custom_variable_delimiters() -> None:
    context = TestContext(
        {"name": "Penny"},
        settings=CourierSettings(variable_prefix="{{", variable_suffix="}}"),
    )

    assert context.replace_dynamic_content("Hi {{name}} ${name}") == "Hi Penny ${name}"


def test_settings_default_to_process_settings() -> None:
    assert TestContext().settings == CourierSettings()
