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

from typing import TYPE_CHECKING, Any, Optional, Sequence

from courier.exceptions import ValidationError
from courier.message import Message, MessageType, has_json_payload
from courier.validation.base import MessageValidator
from courier.validation.context import (
    DefaultMessageValidationContext,
    JsonMessageValidationContext,
    ValidationContext,
)
from courier.validation.json.element_comparator import ElementPathComparator
from courier.validation.json.element_item import ElementPathItem
from courier.validation.json.schema_validator import JsonSchemaValidator

if TYPE_CHECKING:
    from courier.context import TestContext


class JsonTextMessageValidator(MessageValidator):
    """Structural comparison of a received JSON payload with the control payload.

    Strictness comes from the validation context when it sets one, then
    from the validator, then from ``CourierSettings.json_strict``.
    """

    validation_context_type = JsonMessageValidationContext

    def __init__(
        self,
        strict: Optional[bool] = None,
        schema_validator: Optional[JsonSchemaValidator] = None,
    ):
        super().__init__()
        self.strict = strict
        self.schema_validator = schema_validator or JsonSchemaValidator()

    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        return MessageType.JSON.matches(message_type) and has_json_payload(message)

    def find_validation_context(
        self, validation_contexts: Sequence[ValidationContext]
    ) -> Optional[ValidationContext]:
        for candidate in validation_contexts:
            if isinstance(candidate, JsonMessageValidationContext):
                return candidate
        for candidate in validation_contexts:
            if type(candidate) is DefaultMessageValidationContext:
                return candidate
        return None

    def default_validation_context(self) -> Optional[ValidationContext]:
        return JsonMessageValidationContext()

    def is_strict(self, context: "TestContext", validation_context: Any) -> bool:
        strict = getattr(validation_context, "strict", None)
        if strict is not None:
            return strict
        if self.strict is not None:
            return self.strict
        return context.settings.json_strict

    def _validate(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_context: DefaultMessageValidationContext,
    ) -> None:
        self.logger.debug("Start JSON message validation ...")

        if validation_context.is_schema_validation_enabled():
            self.schema_validator.validate(received_message, context, validation_context)

        received_text = received_message.get_payload_as_str()
        control_text = context.replace_dynamic_content(control_message.get_payload_as_str())

        if not control_text or not control_text.strip():
            self.logger.debug("Skip message payload validation as no control message was defined")
            return

        if not received_text.strip():
            raise ValidationError(
                "Validation failed - expected message contents, but received empty message!"
            )

        comparator = ElementPathComparator(
            self.is_strict(context, validation_context),
            context,
            validation_context.ignore_expressions,
        )
        comparator.validate(ElementPathItem.parse_json(received_text, control_text))

        self.logger.debug("JSON message validation successful: All values OK")
