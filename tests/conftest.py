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

from __future__ import annotations

import pytest

from courier.context import TestContext
from courier.registry import default_registry, plugin_registry
from courier.settings import CourierSettings, set_settings


@pytest.fixture(autouse=True)
def _default_settings():
    """Keep COURIER_* variables of the developer environment out of the tests."""

    set_settings(CourierSettings())
    try:
        yield
    finally:
        set_settings(None)


@pytest.fixture()
def context() -> TestContext:
    return TestContext(settings=CourierSettings())


@pytest.fixture()
def isolated_validator_registry():
    """Ensure default registry mutations do not leak across tests."""

    registry = default_registry()
    snap = registry._snapshot_state_for_tests()
    loaded = set(plugin_registry._LOADED_EXTENSIONS)
    try:
        yield registry
    finally:
        registry._restore_state_for_tests(snap)
        plugin_registry._LOADED_EXTENSIONS.clear()
        plugin_registry._LOADED_EXTENSIONS.update(loaded)
