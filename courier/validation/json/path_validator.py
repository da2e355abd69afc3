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

from typing import TYPE_CHECKING, Any, Optional

from courier.exceptions import ValidationError
from courier.message import Message, MessageType, has_json_payload
from courier.validation.base import MessageValidator
from courier.validation.context import JsonPathMessageValidationContext
from courier.validation.json.path_engine import PathExpressionEngine
from courier.validation.matcher.matcher_utils import is_validation_matcher_expression
from courier.validation.value_validation import validate_values

if TYPE_CHECKING:
    from courier.context import TestContext


class JsonPathMessageValidator(MessageValidator):
    """Check JSONPath ``expression -> expected`` pairs against a JSON payload.

    Pairs run in declaration order and the first mismatch aborts. A path
    that resolves to nothing raises
    :class:`~courier.exceptions.PathNotFoundError`.
    """

    validation_context_type = JsonPathMessageValidationContext

    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        return MessageType.JSON.matches(message_type) and has_json_payload(message)

    def _validate(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_context: JsonPathMessageValidationContext,
    ) -> None:
        if not validation_context.expressions:
            return

        payload = received_message.get_payload_as_str()
        if not payload.strip():
            raise ValidationError(
                "Unable to validate message elements - receive message payload was empty"
            )

        self.logger.debug("Start JSONPath element validation ...")
        document = PathExpressionEngine.load(
            received_message.payload
            if isinstance(received_message.payload, (dict, list))
            else payload
        )

        for raw_expression, raw_expected in validation_context.expressions.items():
            expected = raw_expected
            if isinstance(expected, str):
                expected = context.replace_dynamic_content(expected)
            expression = context.replace_dynamic_content(raw_expression)

            actual = self._extract(document, expression, expected, context)
            validate_values(actual, expected, expression, context)
            self.logger.debug("Validating element: %s='%s': OK", expression, expected)

        self.logger.debug("JSONPath element validation successful: All values OK")

    @staticmethod
    def _extract(document: Any, expression: str, expected: Any, context: "TestContext") -> Any:
        results = PathExpressionEngine.evaluate_all(document, expression)
        if len(results) == 1:
            return results[0]
        if is_validation_matcher_expression(expected, context.settings):
            return PathExpressionEngine.render(results)
        return results
