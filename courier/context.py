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

"""Per-test state consumed by validators and matchers."""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from courier.exceptions import CourierConfigurationError
from courier.settings import CourierSettings, get_settings
from courier.validation.matcher.library import (
    ValidationMatcherRegistry,
    default_matcher_registry,
)


class TestContext:
    """Variables, settings and the matcher registry of one test execution.

    Each test execution owns its context; validators never share one across
    concurrent runs.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        variables: Optional[Dict[str, Any]] = None,
        *,
        settings: Optional[CourierSettings] = None,
        matcher_registry: Optional[ValidationMatcherRegistry] = None,
    ):
        self.variables: Dict[str, Any] = dict(variables or {})
        self.settings = settings or get_settings()
        self.validation_matcher_registry = (
            matcher_registry or default_matcher_registry()
        )
        self._variable_pattern = re.compile(
            re.escape(self.settings.variable_prefix)
            + r"(.+?)"
            + re.escape(self.settings.variable_suffix)
        )

    def set_variable(self, name: str, value: Any) -> None:
        if not name:
            raise CourierConfigurationError("Variable name must be a non-empty string")
        self.variables[name] = value

    def get_variable(self, name: str) -> Any:
        try:
            return self.variables[name]
        except KeyError as exc:
            raise CourierConfigurationError(
                f"Unknown variable '{name}'"
            ) from exc

    def has_variable(self, name: str) -> bool:
        return name in self.variables

    def replace_dynamic_content(self, text: Optional[str]) -> Optional[str]:
        """Replace ``${name}`` placeholders with variable values."""

        if not text:
            return text
        return self._variable_pattern.sub(
            lambda m: str(self.get_variable(m.group(1))), text
        )

    def resolve_dynamic_value(self, value: Any) -> Any:
        """Resolve a value that may be a single variable reference."""

        if not isinstance(value, str):
            return value
        match = self._variable_pattern.fullmatch(value)
        if match:
            return self.get_variable(match.group(1))
        return self.replace_dynamic_content(value)
