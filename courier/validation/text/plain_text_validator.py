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

"""Plain-text payload validation.

The control text may embed placeholders that are resolved against the
received text at the same position:

- ``@Ignore@`` skips the received word at that position, ``@Ignore(5)@``
  skips exactly five characters;
- ``@Variable('name')@`` skips the received word and stores it as test
  variable ``name``.

A control text that is a single matcher directive is applied to the whole
received payload.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from courier.exceptions import ValidationError
from courier.message import Message, MessageType
from courier.validation.base import MessageValidator
from courier.validation.context import DefaultMessageValidationContext, ValidationContext
from courier.validation.matcher.matcher_utils import (
    is_validation_matcher_expression,
    resolve_validation_matcher,
)

if TYPE_CHECKING:
    from courier.context import TestContext

_IGNORE_PATTERN = re.compile(r"@Ignore\(?(\d*)\)?@")
_IGNORE_WORD_END = re.compile(r"\W")
_VARIABLE_PATTERN = re.compile(r"@Variable\(?'?([a-zA-Z_0-9\-.]*)'?\)?@")
_VARIABLE_WORD_END = re.compile(r"[^a-zA-Z_0-9\-.]")
_NEWLINE_TYPES = re.compile(r"\r\n?")
_WHITESPACE = re.compile(r"\s")


class PlainTextMessageValidator(MessageValidator):
    validation_context_type = DefaultMessageValidationContext

    def __init__(
        self,
        ignore_whitespace: Optional[bool] = None,
        ignore_newline_type: Optional[bool] = None,
    ):
        super().__init__()
        self.ignore_whitespace = ignore_whitespace
        self.ignore_newline_type = ignore_newline_type

    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        return MessageType.PLAINTEXT.matches(message_type)

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

        self.logger.debug("Start text message validation")

        result_value = self.normalize_whitespace(
            received_message.get_payload_as_str().strip(), context
        )
        control_value = self.normalize_whitespace(
            context.replace_dynamic_content(control_message.get_payload_as_str().strip()) or "",
            context,
        )

        ignore_placeholder = context.settings.ignore_placeholder
        if control_value != ignore_placeholder:
            control_value = _process_ignore_statements(control_value, result_value)
            control_value = _process_variable_statements(control_value, result_value, context)

        if is_validation_matcher_expression(control_value, context.settings):
            resolve_validation_matcher("payload", result_value, control_value, context)
            return

        self.validate_text(result_value, control_value)
        self.logger.debug("Text validation successful: All values OK")

    def validate_text(self, received: str, control: str) -> None:
        if not control.strip():
            self.logger.debug("Skip message payload validation as no control message was defined")
            return

        if not received.strip():
            raise ValidationError(
                "Validation failed - expected message contents, but received empty message!"
            )

        if received != control:
            if _WHITESPACE.sub("", received) == _WHITESPACE.sub("", control):
                raise ValidationError(
                    f"Text values not equal (only whitespaces!), expected '{control}' "
                    f"but was '{received}'",
                    expected=control,
                    actual=received,
                )
            raise ValidationError(
                f"Text values not equal, expected '{control}' but was '{received}'",
                expected=control,
                actual=received,
            )

    def normalize_whitespace(self, payload: str, context: "TestContext") -> str:
        ignore_whitespace = (
            self.ignore_whitespace
            if self.ignore_whitespace is not None
            else context.settings.plaintext_ignore_whitespace
        )
        if ignore_whitespace:
            return " ".join(payload.split())

        ignore_newline_type = (
            self.ignore_newline_type
            if self.ignore_newline_type is not None
            else context.settings.plaintext_ignore_newline_type
        )
        if ignore_newline_type:
            return _NEWLINE_TYPES.sub("\n", payload)
        return payload


def _process_ignore_statements(control: str, result: str) -> str:
    match = _IGNORE_PATTERN.search(control)
    while match:
        start = match.start()
        if match.group(1):
            end = min(start + int(match.group(1)), len(result))
            actual_value = "" if start > len(result) else result[start:end]
        else:
            actual_value = result[start:]
            word_end = _IGNORE_WORD_END.search(actual_value)
            if word_end:
                actual_value = actual_value[: word_end.start()]

        control = control[:start] + actual_value + control[match.end() :]
        match = _IGNORE_PATTERN.search(control)
    return control


def _process_variable_statements(control: str, result: str, context: "TestContext") -> str:
    match = _VARIABLE_PATTERN.search(control)
    while match:
        start = match.start()
        actual_value = result[start:]
        word_end = _VARIABLE_WORD_END.search(actual_value)
        if word_end:
            actual_value = actual_value[: word_end.start()]

        control = control[:start] + actual_value + control[match.end() :]
        context.set_variable(match.group(1), actual_value)
        match = _VARIABLE_PATTERN.search(control)
    return control
