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

"""JSON Schema (Draft 2020-12) validation of JSON payloads.

Schemas are supplied in memory by the validation context, either as an
already-parsed mapping or as JSON text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

import jsonschema

from courier.exceptions import CourierConfigurationError, ValidationError
from courier.message import Message, MessageType, has_json_payload
from courier.message.json_utils import parse_json_text
from courier.validation.base import SchemaValidator

if TYPE_CHECKING:
    from courier.context import TestContext


def load_schema(schema: Any) -> Any:
    if schema is None:
        raise CourierConfigurationError(
            "JSON schema validation is enabled but no schema was given"
        )
    if isinstance(schema, (bytes, bytearray)):
        schema = bytes(schema).decode("utf-8")
    if isinstance(schema, str):
        schema = parse_json_text(schema)
    try:
        jsonschema.Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as exc:
        raise CourierConfigurationError(f"Invalid JSON schema: {exc.message}") from exc
    return schema


def schema_errors(document: Any, schema: Any) -> List[str]:
    """Return every violation of ``schema`` as ``"<path>: <message>"``."""

    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda e: e.json_path)
    return [f"{error.json_path}: {error.message}" for error in errors]


class JsonSchemaValidator(SchemaValidator):
    def supports_message_type(self, message_type: Optional[str], message: Message) -> bool:
        return MessageType.JSON.matches(message_type) and has_json_payload(message)

    def validate(
        self,
        message: Message,
        context: "TestContext",
        validation_context: Any,
    ) -> None:
        schema = load_schema(getattr(validation_context, "schema", None))
        payload = message.payload
        document = payload if isinstance(payload, (dict, list)) else parse_json_text(
            message.get_payload_as_str()
        )

        errors = schema_errors(document, schema)
        if errors:
            raise ValidationError(
                "Json validation failed: \n\t" + "\n\t".join(errors),
                path="$",
                expected=schema,
                actual=document,
            )
        self.logger.debug("JSON schema validation successful")
