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

"""Tests for validator registration and selection."""

from __future__ import annotations

import pytest

from courier.exceptions import (
    CourierConfigurationError,
    NoSuchMessageValidatorError,
    ValidationError,
)
from courier.message import Message
from courier.registry import (
    MessageValidatorRegistry,
    create_default_registry,
    default_registry,
    reset_default_registry,
)
from courier.validation import (
    JsonMessageValidationContext,
    JsonPathMessageValidationContext,
    ValidationOutcome,
)
from courier.validation.base import MessageValidator, SchemaValidator
from courier.validation.defaults import (
    DefaultEmptyMessageValidator,
    DefaultTextEqualsMessageValidator,
)
from courier.validation.header import DefaultMessageHeaderValidator
from courier.validation.json import (
    JsonPathMessageValidator,
    JsonSchemaValidator,
    JsonTextMessageValidator,
)
from courier.validation.text import PlainTextMessageValidator
from courier.validation.xml import XmlSchemaValidator, XpathMessageValidator

JSON_PAYLOAD = '{"id": "42", "name": "Penny"}'
XML_PAYLOAD = "<root><id>42</id></root>"


class _KindValidator(MessageValidator):
    def __init__(self, kind: str) -> None:
        super().__init__()
        self.kind = kind

    def supports_message_type(self, message_type, message) -> bool:
        return message_type == self.kind

    def _validate(self, received_message, control_message, context, validation_context) -> None:
        pass


class _KindSchemaValidator(SchemaValidator):
    def __init__(self, kind: str) -> None:
        super().__init__()
        self.kind = kind

    def supports_message_type(self, message_type, message) -> bool:
        return message_type == self.kind

    def validate(self, message, context, validation_context) -> None:
        pass


def _types(validators):
    return [type(validator) for validator in validators]


def test_last_registration_wins() -> None:
    registry = MessageValidatorRegistry()
    first, second = _KindValidator("a"), _KindValidator("a")

    registry.add_message_validator("custom", first)
    registry.add_message_validator("custom", second)

    assert registry.get_message_validator("custom") is second
    assert list(registry.message_validators) == ["custom"]


def test_unknown_names() -> None:
    registry = MessageValidatorRegistry()

    with pytest.raises(NoSuchMessageValidatorError, match="'missing'"):
        registry.get_message_validator("missing")
    with pytest.raises(LookupError):
        registry.get_schema_validator("missing")
    assert registry.find_message_validator("missing") is None
    assert registry.find_schema_validator("missing") is None


def test_registration_checks_arguments() -> None:
    registry = MessageValidatorRegistry()

    with pytest.raises(ValueError):
        registry.add_message_validator("", _KindValidator("a"))
    with pytest.raises(TypeError):
        registry.add_message_validator("x", object())
    with pytest.raises(TypeError):
        registry.add_schema_validator("x", _KindValidator("a"))


def test_register_all_splits_message_and_schema_validators() -> None:
    registry = MessageValidatorRegistry()
    registry.register_all({"kind": _KindValidator("a"), "schema": JsonSchemaValidator()})

    assert list(registry.message_validators) == ["kind"]
    assert list(registry.schema_validators) == ["schema"]


def test_default_registry_contents() -> None:
    registry = create_default_registry()

    assert set(registry.message_validators) == {
        "header",
        "json",
        "json-path",
        "plaintext",
        "xpath",
        "binary",
    }
    assert set(registry.schema_validators) == {"json-schema", "xml-schema"}


def test_declared_type_selects_validators() -> None:
    registry = create_default_registry()

    found = registry.find_message_validators("json", Message(JSON_PAYLOAD))

    assert _types(found) == [
        DefaultMessageHeaderValidator,
        JsonTextMessageValidator,
        JsonPathMessageValidator,
    ]


def test_markup_payload_is_sniffed() -> None:
    registry = create_default_registry()

    found = registry.find_message_validators("json", Message(XML_PAYLOAD))

    assert XpathMessageValidator in _types(found)
    assert PlainTextMessageValidator not in _types(found)


def test_json_payload_is_sniffed() -> None:
    registry = create_default_registry()

    found = registry.find_message_validators("xml", Message(JSON_PAYLOAD))

    assert JsonTextMessageValidator in _types(found)


def test_text_payload_is_sniffed() -> None:
    registry = create_default_registry()

    found = registry.find_message_validators("json", Message("just some words"))

    assert PlainTextMessageValidator in _types(found)


@pytest.mark.parametrize(
    "message_type, payload",
    [("xml", "<a>1</a>"), ("json", "{not json"), ("json", "[1, 2")],
)
def test_payload_matching_declared_type_retries_as_plain_text(message_type, payload) -> None:
    registry = MessageValidatorRegistry()
    registry.add_message_validator("header", DefaultMessageHeaderValidator())
    registry.add_message_validator("plaintext", PlainTextMessageValidator())

    found = registry.find_message_validators(
        message_type, Message(payload), must_find_validator=True
    )

    assert _types(found) == [DefaultMessageHeaderValidator, PlainTextMessageValidator]


def test_missing_markup_validator_falls_back_to_text_equals() -> None:
    registry = MessageValidatorRegistry()
    registry.add_message_validator("header", DefaultMessageHeaderValidator())

    found = registry.find_message_validators("xml", Message(XML_PAYLOAD))

    assert _types(found) == [DefaultMessageHeaderValidator, DefaultTextEqualsMessageValidator]


def test_blank_payload_selects_empty_validator() -> None:
    registry = create_default_registry()

    found = registry.find_message_validators("json", Message("  "))

    assert DefaultEmptyMessageValidator in _types(found)


def test_must_find_validator() -> None:
    registry = MessageValidatorRegistry()

    with pytest.raises(CourierConfigurationError, match="Failed to find proper message validator"):
        registry.find_message_validators("custom", Message("payload"), must_find_validator=True)

    assert _types(registry.find_message_validators("custom", Message("payload"))) == [
        DefaultTextEqualsMessageValidator
    ]


def test_schema_validator_selection() -> None:
    registry = create_default_registry()

    assert _types(registry.find_schema_validators("json", Message(JSON_PAYLOAD))) == [
        JsonSchemaValidator
    ]
    assert _types(registry.find_schema_validators("xml", Message(XML_PAYLOAD))) == [
        XmlSchemaValidator
    ]
    assert _types(registry.find_schema_validators("json", Message(XML_PAYLOAD))) == [
        XmlSchemaValidator
    ]
    assert registry.find_schema_validators("plaintext", Message("text")) == []


def test_schema_lookup_never_retries_as_plain_text() -> None:
    registry = MessageValidatorRegistry()
    registry.add_schema_validator("text-schema", _KindSchemaValidator("plaintext"))
    registry.add_schema_validator("xml-schema", _KindSchemaValidator("xml"))

    assert registry.find_schema_validators("json", Message("just some words")) == []
    assert registry.find_schema_validators("xml", Message("<a>1</a>")) == [
        registry.get_schema_validator("xml-schema")
    ]
    assert registry.find_schema_validators("json", Message("<a>1</a>")) == [
        registry.get_schema_validator("xml-schema")
    ]


def test_header_validator_is_memoized() -> None:
    registry = MessageValidatorRegistry()
    header = registry.default_message_header_validator()

    assert isinstance(header, DefaultMessageHeaderValidator)
    assert registry.default_message_header_validator() is header

    custom = DefaultMessageHeaderValidator()
    configured = MessageValidatorRegistry()
    configured.add_message_validator("header", custom)
    assert configured.default_message_header_validator() is custom


def test_validate_runs_header_and_body_validators(context) -> None:
    registry = create_default_registry()
    received = Message(JSON_PAYLOAD, headers={"operation": "greet"})
    control = Message('{"id": "@IsNumber()@", "name": "Penny"}', headers={"operation": "greet"})

    results = registry.validate(
        received,
        control,
        "json",
        context,
        [JsonMessageValidationContext(), JsonPathMessageValidationContext({"$.name": "Penny"})],
    )

    assert [result.validator for result in results] == [
        "DefaultMessageHeaderValidator",
        "JsonTextMessageValidator",
        "JsonPathMessageValidator",
    ]
    assert all(result.outcome is ValidationOutcome.PASSED for result in results)


def test_validate_propagates_first_failure(context) -> None:
    registry = create_default_registry()
    received = Message(JSON_PAYLOAD, headers={"operation": "bye"})
    control = Message(JSON_PAYLOAD, headers={"operation": "greet"})

    with pytest.raises(ValidationError, match="header element 'operation'"):
        registry.validate(received, control, "json", context)


def test_default_registry_is_shared() -> None:
    assert default_registry() is default_registry()

    previous = default_registry()
    reset_default_registry()
    assert default_registry() is not previous


def test_isolated_registry_mutation(isolated_validator_registry) -> None:
    isolated_validator_registry.add_message_validator("custom", _KindValidator("custom"))

    found = isolated_validator_registry.find_message_validators("custom", Message("x"))

    assert _KindValidator in _types(found)
