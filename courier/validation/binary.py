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

from typing import TYPE_CHECKING, Optional

from courier.exceptions import ValidationError
from courier.message import Message, MessageType
from courier.validation.base import MessageValidator
from courier.validation.context import DefaultMessageValidationContext, ValidationContext

if TYPE_CHECKING:
    from courier.context import TestContext

WINDOW = 25


class BinaryMessageValidator(MessageValidator):
    """Byte-for-byte payload comparison."""

    validation_context_type = DefaultMessageValidationContext

    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        return MessageType.BINARY.matches(message_type)

    def default_validation_context(self) -> Optional[ValidationContext]:
        return DefaultMessageValidationContext()

    def _validate(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_context: DefaultMessageValidationContext,
    ) -> None:
        if control_message is None or control_message.payload is None:
            self.logger.debug("Skip message payload validation as no control message was defined")
            return

        self.logger.debug("Start binary message validation")
        received = received_message.get_payload_as_bytes()
        control = control_message.get_payload_as_bytes()

        offset = first_difference(received, control)
        if offset is None:
            self.logger.debug("Binary message validation successful: All values OK")
            return

        if offset >= len(received):
            message = (
                f"Received input stream reached end-of-stream at offset {offset} - "
                "control input stream is not finished yet"
            )
        elif offset >= len(control):
            message = (
                f"Control input stream reached end-of-stream at offset {offset} - "
                "received input stream is not finished yet"
            )
        else:
            expected_part = control[max(0, offset + 1 - WINDOW) : offset + 1]
            actual_part = received[max(0, offset + 1 - WINDOW) : offset + 1]
            message = (
                f"Received input stream is not equal to given control at offset {offset}, "
                f"expected '{expected_part.decode('utf-8', errors='replace')}', "
                f"but was '{actual_part.decode('utf-8', errors='replace')}'"
            )
        raise ValidationError(message, path=str(offset), expected=control, actual=received)


def first_difference(received: bytes, control: bytes) -> Optional[int]:
    """Offset of the first differing byte, ``None`` if both are equal."""

    for offset, (left, right) in enumerate(zip(received, control)):
        if left != right:
            return offset
    if len(received) != len(control):
        return min(len(received), len(control))
    return None
