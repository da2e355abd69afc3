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

"""Message header validation.

Every control header (except internal ``courier_*`` ones) must be present on
the received message. Values are checked by the first
:class:`HeaderValidator` that supports the header, falling back to
:class:`DefaultHeaderValidator`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from courier.exceptions import ValidationError
from courier.logger import Logger
from courier.message import Message
from courier.validation.base import MessageValidator
from courier.validation.context import HeaderValidationContext, ValidationContext
from courier.validation.matcher.matcher_utils import (
    is_validation_matcher_expression,
    resolve_validation_matcher,
)

if TYPE_CHECKING:
    from courier.context import TestContext

_logger = Logger("validation")


class HeaderValidator(ABC):
    @abstractmethod
    def supports(self, header_name: str, control_type: Optional[type]) -> bool:
        """Return ``True`` if this validator handles the header."""

    @abstractmethod
    def validate_header(
        self,
        header_name: str,
        received_value: Any,
        control_value: Any,
        context: "TestContext",
        validation_context: HeaderValidationContext,
    ) -> None:
        """Raise :class:`ValidationError` on mismatch."""


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DefaultHeaderValidator(HeaderValidator):
    """String equality with matcher support; list values compare order-insensitively."""

    def supports(self, header_name: str, control_type: Optional[type]) -> bool:
        return control_type is None or issubclass(
            control_type, (str, int, float, bool, list, tuple)
        )

    def validate_header(
        self,
        header_name: str,
        received_value: Any,
        control_value: Any,
        context: "TestContext",
        validation_context: HeaderValidationContext,
    ) -> None:
        if isinstance(control_value, (list, tuple)):
            self._validate_header_values(header_name, received_value, list(control_value), context)
            return

        expected = (
            context.replace_dynamic_content(_to_text(control_value))
            if control_value is not None
            else ""
        )

        if received_value is None:
            if expected.strip():
                raise ValidationError(
                    f"Values not equal for header element '{header_name}', "
                    f"expected '{expected}' but was 'null'",
                    path=header_name,
                    expected=expected,
                )
            return

        received = _to_text(received_value)
        if is_validation_matcher_expression(expected, context.settings):
            resolve_validation_matcher(header_name, received, expected, context)
            return

        if received != expected:
            raise ValidationError(
                f"Values not equal for header element '{header_name}', "
                f"expected '{expected}' but was '{received}'",
                path=header_name,
                expected=expected,
                actual=received,
            )
        _logger.debug("Validating header element: %s='%s' : OK", header_name, expected)

    def _validate_header_values(
        self,
        header_name: str,
        received_value: Any,
        control_values: List[Any],
        context: "TestContext",
    ) -> None:
        expected_values = [
            context.replace_dynamic_content(_to_text(value)) for value in control_values
        ]
        joined_expected = ", ".join(expected_values)

        if received_value is None:
            if expected_values:
                raise ValidationError(
                    f"Values not equal for header element '{header_name}', "
                    f"expected '{joined_expected}' but was 'null'",
                    path=header_name,
                    expected=expected_values,
                )
            return

        received_values = (
            [_to_text(v) for v in received_value]
            if isinstance(received_value, (list, tuple))
            else [_to_text(received_value)]
        )

        remaining = list(expected_values)
        for received in received_values:
            index = self._find_expected(header_name, received, remaining, context)
            if index is None:
                raise ValidationError(
                    f"Values not equal for header element '{header_name}', "
                    f"expected '{joined_expected}' but was '{received}'",
                    path=header_name,
                    expected=expected_values,
                    actual=received_values,
                )
            del remaining[index]

        if remaining:
            raise ValidationError(
                f"Values not equal for header element '{header_name}', "
                f"expected '{joined_expected}' but was '{', '.join(received_values)}'",
                path=header_name,
                expected=expected_values,
                actual=received_values,
            )

    @staticmethod
    def _find_expected(
        header_name: str, received: str, expected_values: List[str], context: "TestContext"
    ) -> Optional[int]:
        for index, expected in enumerate(expected_values):
            if is_validation_matcher_expression(expected, context.settings):
                try:
                    resolve_validation_matcher(header_name, received, expected, context)
                except ValidationError:
                    continue
                return index
            if received == expected:
                return index
        return None


class DefaultMessageHeaderValidator(MessageValidator):
    validation_context_type = HeaderValidationContext
    is_body_validator = False

    def __init__(self, validators: Optional[List[HeaderValidator]] = None):
        super().__init__()
        self.validators: List[HeaderValidator] = list(validators or [])
        self._default_validator = DefaultHeaderValidator()

    def add_header_validator(self, validator: HeaderValidator) -> None:
        self.validators.append(validator)

    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        return True

    def default_validation_context(self) -> Optional[ValidationContext]:
        return HeaderValidationContext()

    def _validate(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_context: HeaderValidationContext,
    ) -> None:
        control_headers = control_message.headers if control_message is not None else {}
        if not control_headers:
            return

        received_headers = received_message.headers
        internal_prefix = context.settings.internal_header_prefix
        self.logger.debug("Start message header validation ...")

        for key, control_value in control_headers.items():
            if key.startswith(internal_prefix):
                continue

            header_name = self._header_name(key, received_headers, context, validation_context)
            if header_name not in received_headers:
                raise ValidationError(
                    f"Validation failed: Header element '{header_name}' is missing",
                    path=header_name,
                    expected=control_value,
                )

            validator = self._select_validator(header_name, control_value, validation_context)
            validator.validate_header(
                header_name,
                received_headers[header_name],
                control_value,
                context,
                validation_context,
            )

        self.logger.debug("Message header validation successful: All values OK")

    def _select_validator(
        self,
        header_name: str,
        control_value: Any,
        validation_context: HeaderValidationContext,
    ) -> HeaderValidator:
        control_type = type(control_value) if control_value is not None else None
        for validator in list(validation_context.validators) + self.validators:
            if validator.supports(header_name, control_type):
                return validator
        return self._default_validator

    def _header_name(
        self,
        name: str,
        received_headers: Dict[str, Any],
        context: "TestContext",
        validation_context: HeaderValidationContext,
    ) -> str:
        header_name = str(context.resolve_dynamic_value(name))
        if header_name in received_headers or not validation_context.header_name_ignore_case:
            return header_name

        self.logger.debug("Finding case insensitive header for key '%s'", header_name)
        for candidate in received_headers:
            if candidate.lower() == header_name.lower():
                self.logger.debug("Found matching case insensitive header name: %s", candidate)
                return candidate
        raise ValidationError(
            f"Validation failed: No matching header for key '{header_name}'",
            path=header_name,
        )
