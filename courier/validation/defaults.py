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

"""Fallback validators used by the registry when no named validator fits."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from courier.exceptions import ValidationError
from courier.message import Message
from courier.validation.base import MessageValidator
from courier.validation.context import (
    DefaultMessageValidationContext,
    HeaderValidationContext,
    ValidationContext,
)

if TYPE_CHECKING:
    from courier.context import TestContext

DIFF_WINDOW = 25


class _FallbackValidator(MessageValidator):
    """Fallbacks run for any kind and accept whatever body context is given."""

    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        return True

    def find_validation_context(
        self, validation_contexts: Sequence[ValidationContext]
    ) -> Optional[ValidationContext]:
        for candidate in validation_contexts:
            if not isinstance(candidate, HeaderValidationContext):
                return candidate
        return None

    def default_validation_context(self) -> Optional[ValidationContext]:
        return DefaultMessageValidationContext()


class DefaultEmptyMessageValidator(_FallbackValidator):
    """Selected when the received payload is blank; the control must be blank too."""

    def _validate(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_context: ValidationContext,
    ) -> None:
        control = control_message.get_payload_as_str() if control_message is not None else ""
        received = received_message.get_payload_as_str()

        if control.strip():
            raise ValidationError(
                "Empty message validation failed - control message is not empty!",
                expected=control,
                actual=received,
            )
        if received.strip():
            raise ValidationError(
                "Validation failed - expected empty message, but received message "
                f"contents: '{received}'",
                expected="",
                actual=received,
            )
        self.logger.debug("Message payload is empty as expected: All values OK")


class DefaultTextEqualsMessageValidator(_FallbackValidator):
    """Plain text equality with optional trimming and line-ending normalization."""

    def __init__(self, trim: bool = True, normalize_line_endings: bool = True):
        super().__init__()
        self.trim = trim
        self.normalize_line_endings = normalize_line_endings

    def _validate(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_context: ValidationContext,
    ) -> None:
        if control_message is None or control_message.payload is None:
            self.logger.debug("Skip message payload validation as no control message was defined")
            return

        self.logger.debug("Start to verify message payload ...")
        control = control_message.get_payload_as_str()
        received = received_message.get_payload_as_str()

        if self.trim:
            control = control.strip()
            received = received.strip()
        if self.normalize_line_endings:
            control = normalize_line_endings(control)
            received = normalize_line_endings(received)

        if received != control:
            raise ValidationError(
                "Validation failed - message payload not equal "
                + get_first_diff(received, control),
                expected=control,
                actual=received,
            )


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("&#13;", "")


def get_first_diff(received: str, control: str) -> str:
    """Describe the first differing position (1-based) with a short window."""

    position = 0
    limit = min(len(received), len(control))
    while position < limit and received[position] == control[position]:
        position += 1

    if position >= len(control) and position >= len(received):
        return ""
    expected_part = control[position : position + DIFF_WINDOW]
    actual_part = received[position : position + DIFF_WINDOW]
    return f"at position {position + 1} expected '{expected_part}', but was '{actual_part}'"
