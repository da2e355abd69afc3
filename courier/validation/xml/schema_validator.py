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

from lxml import etree

from courier.exceptions import CourierConfigurationError, CourierSystemError, ValidationError
from courier.message import Message, MessageType, has_xml_payload
from courier.validation.base import SchemaValidator
from courier.validation.xml.xml_utils import parse_xml_text

if TYPE_CHECKING:
    from courier.context import TestContext


def load_xml_schema(schema: Any) -> etree.XMLSchema:
    """Build an :class:`lxml.etree.XMLSchema` from XSD text, bytes or a parsed tree."""

    if schema is None:
        raise CourierConfigurationError(
            "XML schema validation is enabled but no schema was given"
        )
    if isinstance(schema, etree.XMLSchema):
        return schema
    try:
        if isinstance(schema, (str, bytes, bytearray)):
            schema = parse_xml_text(schema)
        return etree.XMLSchema(schema)
    except (CourierSystemError, etree.XMLSchemaParseError) as exc:
        raise CourierConfigurationError(f"Invalid XML schema: {exc}") from exc


class XmlSchemaValidator(SchemaValidator):
    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        return (
            MessageType.XML.matches(message_type) or MessageType.XHTML.matches(message_type)
        ) and has_xml_payload(message)

    def validate(
        self,
        message: Message,
        context: "TestContext",
        validation_context: Any,
    ) -> None:
        schema = load_xml_schema(getattr(validation_context, "schema", None))
        document = parse_xml_text(message.get_payload_as_str())

        if not schema.validate(document):
            errors = [
                f"line {entry.line}: {entry.message}" for entry in schema.error_log
            ]
            raise ValidationError(
                "XML schema validation failed: \n\t" + "\n\t".join(errors),
                path="/",
            )
        self.logger.debug("XML schema validation successful")
