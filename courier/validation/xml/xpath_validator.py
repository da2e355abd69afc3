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

"""XPath element validation for markup payloads.

Expressions may carry a result-type prefix (``string:``, ``number:``,
``boolean:``, ``node:``, ``node-set:``). An expression without ``/`` or
``(`` is taken as an element name and looked up anywhere in the document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from lxml import etree

from courier.exceptions import PathExpressionError, PathNotFoundError, ValidationError
from courier.message import Message, MessageType, has_xml_payload
from courier.validation.base import MessageValidator
from courier.validation.context import XpathMessageValidationContext
from courier.validation.value_validation import validate_values
from courier.validation.xml.xml_utils import collect_namespaces, node_value, parse_xml_text

if TYPE_CHECKING:
    from courier.context import TestContext

RESULT_TYPES = ("node-set", "node", "string", "number", "boolean")

# Conversions of an empty node-set that yield a value instead of a lookup failure.
EMPTY_NODE_SET_RESULTS = {"boolean": False, "string": ""}


def split_result_type(expression: str) -> Tuple[Optional[str], str]:
    for result_type in RESULT_TYPES:
        prefix = f"{result_type}:"
        if expression.startswith(prefix):
            return result_type, expression[len(prefix) :]
    return None, expression


def is_xpath_expression(expression: str) -> bool:
    return "/" in expression or "(" in expression


def render_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return str(value)


class XpathMessageValidator(MessageValidator):
    validation_context_type = XpathMessageValidationContext

    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        return (
            MessageType.XML.matches(message_type) or MessageType.XHTML.matches(message_type)
        ) and has_xml_payload(message)

    def _validate(
        self,
        received_message: Message,
        control_message: Message,
        context: "TestContext",
        validation_context: XpathMessageValidationContext,
    ) -> None:
        if not validation_context.expressions:
            return

        payload = received_message.get_payload_as_str()
        if not payload.strip():
            raise ValidationError(
                "Unable to validate message elements - receive message payload was empty"
            )

        self.logger.debug("Start XPath element validation ...")
        root = parse_xml_text(payload)
        namespaces = collect_namespaces(root)
        namespaces.update(validation_context.namespaces)

        for raw_expression, raw_expected in validation_context.expressions.items():
            expression = context.replace_dynamic_content(raw_expression)
            expected = raw_expected
            if isinstance(expected, str):
                expected = context.replace_dynamic_content(expected)

            actual = self.evaluate(root, expression, namespaces)
            validate_values(actual, expected, expression, context)
            self.logger.debug("Validating element: %s='%s': OK", expression, expected)

        self.logger.debug("XPath element validation successful: All elements OK")

    def evaluate(self, root: etree._Element, expression: str, namespaces: Dict[str, str]) -> Any:
        """Evaluate ``expression`` and convert the result for value comparison."""

        result_type, path = split_result_type(expression)

        if not is_xpath_expression(path):
            nodes = [
                el
                for el in root.iter()
                if isinstance(el.tag, str) and etree.QName(el).localname == path
            ]
            if not nodes:
                if result_type in EMPTY_NODE_SET_RESULTS:
                    return EMPTY_NODE_SET_RESULTS[result_type]
                raise PathNotFoundError(
                    expression, f"Element '{path}' could not be found in DOM tree"
                )
            return node_value(nodes[0])

        try:
            result = root.xpath(path, namespaces=namespaces)
        except (etree.XPathError, TypeError) as exc:
            raise PathExpressionError(
                f"Invalid XPath expression '{path}': {exc}", expression
            ) from exc

        if isinstance(result, list):
            if not result:
                if result_type in EMPTY_NODE_SET_RESULTS:
                    return EMPTY_NODE_SET_RESULTS[result_type]
                raise PathNotFoundError(
                    expression, f"No result for XPath expression: '{expression}'"
                )
            values: List[str] = [node_value(node) for node in result]
            if result_type == "node-set":
                return values
            if result_type == "number":
                return _to_number(values[0], expression)
            if result_type == "boolean":
                return bool(values)
            return values[0] if len(values) == 1 else values

        if isinstance(result, bool):
            return "true" if result else "false"
        if isinstance(result, float):
            return render_number(result)
        return str(result)


def _to_number(text: str, expression: str) -> str:
    try:
        return render_number(float(text))
    except ValueError as exc:
        raise ValidationError(
            f"Value of '{expression}' is not a number: '{text}'",
            path=expression,
            actual=text,
        ) from exc
