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

"""Validator contracts.

:class:`MessageValidator` implements the validation template once:

1. pick the first validation context of the validator's kind (skipping the
   reserved header context for body validators);
2. run the concrete :meth:`MessageValidator._validate`;
3. record ``PASSED`` on success or ``FAILED`` on :class:`ValidationError`
   before re-raising.

Configuration errors propagate unchanged and leave the status untouched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional, Sequence

from courier.exceptions import CourierConfigurationError, ValidationError
from courier.logger import Logger
from courier.message import Message
from courier.validation.context import (
    HeaderValidationContext,
    ValidationContext,
    ValidationStatus,
)
from courier.validation.outcome import ValidationOutcome, ValidationResult

if TYPE_CHECKING:
    from courier.context import TestContext


class MessageValidator(ABC):
    """Base class of every message validator.

    Subclasses declare ``validation_context_type`` and implement
    :meth:`supports_message_type` and :meth:`_validate`.
    """

    validation_context_type: type = ValidationContext
    is_body_validator: bool = True
    requires_validation_context: bool = False

    def __init__(self) -> None:
        self.logger = Logger("validation")

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        """Return ``True`` if this validator handles ``message_type``; never raises."""

    @abstractmethod
    def _validate(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_context: Any,
    ) -> None:
        """Compare ``received_message`` with ``control_message``."""

    def find_validation_context(
        self, validation_contexts: Sequence[ValidationContext]
    ) -> Optional[ValidationContext]:
        for candidate in validation_contexts:
            if self.is_body_validator and isinstance(candidate, HeaderValidationContext):
                continue
            if isinstance(candidate, self.validation_context_type):
                return candidate
        return None

    def default_validation_context(self) -> Optional[ValidationContext]:
        """Context used when none of the given ones fits; ``None`` means skip."""

        return None

    def validate_message(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_contexts: Sequence[ValidationContext],
    ) -> ValidationResult:
        """Run the validation template.

        Returns a ``SKIPPED`` or ``PASSED`` result; raises
        :class:`ValidationError` on mismatch and
        :class:`CourierConfigurationError` when the validation cannot run.
        """

        validation_context = self.find_validation_context(validation_contexts)
        if validation_context is None:
            validation_context = self.default_validation_context()
        if validation_context is None:
            if self.requires_validation_context:
                raise CourierConfigurationError(
                    f"Unable to find proper validation context for {self.name}: "
                    f"expected {self.validation_context_type.__name__}"
                )
            self.logger.debug(
                "Skipping %s: no %s given",
                self.name,
                self.validation_context_type.__name__,
            )
            return ValidationResult.skipped(self.name)

        try:
            self._validate(received_message, control_message, context, validation_context)
        except ValidationError:
            validation_context.update_status(ValidationStatus.FAILED)
            raise
        validation_context.update_status(ValidationStatus.PASSED)
        return ValidationResult.passed(self.name)

    def try_validate_message(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_contexts: Sequence[ValidationContext],
    ) -> ValidationResult:
        """Like :meth:`validate_message` but reports failures as results."""

        try:
            return self.validate_message(
                received_message, control_message, context, validation_contexts
            )
        except ValidationError as exc:
            return ValidationResult(ValidationOutcome.FAILED, self.name, exc)
        except CourierConfigurationError as exc:
            return ValidationResult(ValidationOutcome.MISCONFIGURED, self.name, exc)

    def __repr__(self) -> str:
        return f"{self.name}()"


class SchemaValidator(ABC):
    """Validates a message against a schema held by the validation context."""

    def __init__(self) -> None:
        self.logger = Logger("validation")

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        """Return ``True`` if this validator handles ``message_type``; never raises."""

    def can_validate(self, message: Message, schema_validation_enabled: bool) -> bool:
        return schema_validation_enabled

    @abstractmethod
    def validate(
        self,
        message: Message,
        context: "TestContext",
        validation_context: Any,
    ) -> None:
        """Raise :class:`ValidationError` if ``message`` violates the schema."""
