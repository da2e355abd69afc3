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

"""Detection and resolution of ``@Name(args)@`` matcher directives."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from courier.exceptions import CourierConfigurationError
from courier.settings import CourierSettings, get_settings
from courier.validation.matcher.control_expression import extract_control_values

if TYPE_CHECKING:
    from courier.context import TestContext


def is_validation_matcher_expression(
    expression: Any, settings: Optional[CourierSettings] = None
) -> bool:
    """Return ``True`` if ``expression`` is a directive string such as ``@Ignore@``."""

    if not isinstance(expression, str):
        return False
    settings = settings or get_settings()
    prefix, suffix = settings.matcher_prefix, settings.matcher_suffix
    return (
        len(expression) > len(prefix) + len(suffix)
        and expression.startswith(prefix)
        and expression.endswith(suffix)
    )


def resolve_validation_matcher(
    field_name: str,
    field_value: Optional[str],
    validation_matcher_expression: str,
    context: "TestContext",
) -> None:
    """Run the matcher named by a directive against ``field_value``.

    Raises :class:`~courier.exceptions.ValidationError` when the matcher
    rejects the value and :class:`~courier.exceptions.CourierConfigurationError`
    when the directive is malformed or names an unknown matcher.
    """

    settings = context.settings
    expression = validation_matcher_expression[
        len(settings.matcher_prefix) : len(validation_matcher_expression)
        - len(settings.matcher_suffix)
    ].strip()

    if expression.lower() == "ignore":
        expression += "()"

    body_start = expression.find("(")
    body_end = expression.rfind(")")
    if body_start < 0 or body_end < body_start:
        raise CourierConfigurationError(
            f"Illegal syntax for validation matcher expression "
            f"'{validation_matcher_expression}': missing '(...)'"
        )

    prefix = ""
    colon = expression.find(":")
    if 0 < colon < body_start:
        prefix = expression[: colon + 1]

    matcher_name = expression[len(prefix) : body_start].strip()
    matcher_value = expression[body_start + 1 : body_end]

    library = context.validation_matcher_registry.get_library_for_prefix(prefix)
    matcher = library.get_validation_matcher(matcher_name)

    params = [
        context.replace_dynamic_content(param)
        for param in extract_control_values(matcher_value)
    ]
    matcher.validate(field_name, field_value, params, context)
