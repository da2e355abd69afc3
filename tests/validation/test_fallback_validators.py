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

"""Tests for the empty-payload and text-equals fallback validators."""

from __future__ import annotations

import pytest

from courier.exceptions import ValidationError
from courier.message import Message
from courier.validation import (
    HeaderValidationContext,
    ValidationOutcome,
    XpathMessageValidationContext,
)
from courier.validation.defaults import (
    DefaultEmptyMessageValidator,
    DefaultTextEqualsMessageValidator,
    get_first_diff,
    normalize_line_endings,
)


def test_empty_validator_accepts_blank_payloads(context) -> None:
    result = DefaultEmptyMessageValidator().validate_message(
        Message("  "), Message(""), context, []
    )
    assert result.outcome is ValidationOutcome.PASSED


def test_empty_validator_rejects_non_blank_control(context) -> None:
    with pytest.raises(ValidationError) as exc_info:
        DefaultEmptyMessageValidator().validate_message(
            Message(""), Message("expected"), context, []
        )
    assert str(exc_info.value) == (
        "Empty message validation failed - control message is not empty!"
    )


def test_empty_validator_rejects_received_contents(context) -> None:
    with pytest.raises(ValidationError) as exc_info:
        DefaultEmptyMessageValidator().validate_message(
            Message("surprise"), Message(), context, []
        )
    assert str(exc_info.value) == (
        "Validation failed - expected empty message, but received message contents: 'surprise'"
    )


def test_fallbacks_use_any_body_context(context) -> None:
    header_context = HeaderValidationContext()
    body_context = XpathMessageValidationContext()

    DefaultEmptyMessageValidator().validate_message(
        Message(""), Message(""), context, [header_context, body_context]
    )

    assert body_context.status.value == "passed"
    assert header_context.status.value == "unknown"


def test_text_equals_trims_and_normalizes_line_endings(context) -> None:
    DefaultTextEqualsMessageValidator().validate_message(
        Message("  line one\r\nline two\n"), Message("line one\nline two"), context, []
    )


def test_text_equals_without_trimming(context) -> None:
    validator = DefaultTextEqualsMessageValidator(trim=False)
    with pytest.raises(ValidationError):
        validator.validate_message(Message(" text"), Message("text"), context, [])


def test_text_equals_reports_first_difference(context) -> None:
    with pytest.raises(ValidationError) as exc_info:
        DefaultTextEqualsMessageValidator().validate_message(
            Message("Hello Penny"), Message("Hello Leonard"), context, []
        )
    assert str(exc_info.value) == (
        "Validation failed - message payload not equal "
        "at position 7 expected 'Leonard', but was 'Penny'"
    )


def test_text_equals_without_control_payload_passes(context) -> None:
    result = DefaultTextEqualsMessageValidator().validate_message(
        Message("anything"), Message(), context, []
    )
    assert result.outcome is ValidationOutcome.PASSED


def test_get_first_diff() -> None:
    assert get_first_diff("same", "same") == ""
    assert get_first_diff("abc", "abcdef") == "at position 4 expected 'def', but was ''"
    assert get_first_diff("x" * 40 + "A", "x" * 40 + "B") == (
        "at position 41 expected 'B', but was 'A'"
    )


def test_normalize_line_endings() -> None:
    assert normalize_line_endings("a\r\nb&#13;") == "a\nb"
