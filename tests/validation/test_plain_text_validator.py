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

"""Tests for plain-text payload validation."""

from __future__ import annotations

import pytest

from courier.context import TestContext
from courier.exceptions import ValidationError
from courier.message import Message
from courier.settings import CourierSettings
from courier.validation import ValidationOutcome
from courier.validation.text import PlainTextMessageValidator


def _validate(context, received, control, validator=None):
    validator = validator or PlainTextMessageValidator()
    return validator.validate_message(Message(received), Message(control), context, [])


def test_equal_text_passes(context) -> None:
    result = _validate(context, "Hello World\n", "Hello World")
    assert result.outcome is ValidationOutcome.PASSED


def test_different_text_fails(context) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _validate(context, "Hello Penny", "Hello World")

    assert str(exc_info.value) == (
        "Text values not equal, expected 'Hello World' but was 'Hello Penny'"
    )
    assert exc_info.value.expected == "Hello World"
    assert exc_info.value.actual == "Hello Penny"


def test_whitespace_only_difference_is_flagged(context) -> None:
    with pytest.raises(ValidationError, match=r"only whitespaces!"):
        _validate(context, "Hello  World", "Hello World")


def test_ignore_whitespace(context) -> None:
    _validate(
        context,
        "Hello \n  World",
        "Hello World",
        PlainTextMessageValidator(ignore_whitespace=True),
    )


def test_ignore_whitespace_from_settings() -> None:
    context = TestContext(settings=CourierSettings(plaintext_ignore_whitespace=True))
    _validate(context, "Hello\t\tWorld", "Hello World")


def test_ignore_newline_type(context) -> None:
    with pytest.raises(ValidationError):
        _validate(context, "line one\r\nline two", "line one\nline two")

    _validate(
        context,
        "line one\r\nline two",
        "line one\nline two",
        PlainTextMessageValidator(ignore_newline_type=True),
    )


def test_ignore_word_placeholder(context) -> None:
    _validate(context, "Hello Bob, how are you?", "Hello @Ignore@, how are you?")


def test_ignore_fixed_length_placeholder(context) -> None:
    _validate(context, "Id: abc-x", "Id: @Ignore(3)@-x")

    with pytest.raises(ValidationError):
        _validate(context, "Id: abcd-x", "Id: @Ignore(3)@-x")


def test_whole_payload_ignored(context) -> None:
    _validate(context, "anything at all", "@Ignore@")


def test_variable_placeholder_stores_received_word(context) -> None:
    _validate(context, "Hello Bob!", "Hello @Variable('name')@!")

    assert context.get_variable("name") == "Bob"


def test_whole_payload_matcher(context) -> None:
    _validate(context, "Hello World", "@StartsWith('Hello')@")

    with pytest.raises(ValidationError, match="field 'payload'"):
        _validate(context, "Bye World", "@StartsWith('Hello')@")


def test_variables_in_control(context) -> None:
    context.set_variable("greeting", "Hello")
    _validate(context, "Hello World", "${greeting} World")


def test_blank_control_skips(context) -> None:
    assert _validate(context, "whatever", "").outcome is ValidationOutcome.PASSED
    assert _validate(context, "whatever", None).outcome is ValidationOutcome.PASSED


def test_blank_received_fails(context) -> None:
    with pytest.raises(ValidationError, match="received empty message"):
        _validate(context, "  ", "Hello")


def test_supports_plaintext_only() -> None:
    validator = PlainTextMessageValidator()
    assert validator.supports_message_type("PLAINTEXT", Message("x"))
    assert not validator.supports_message_type("json", Message("x"))
