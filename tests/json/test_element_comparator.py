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

"""Tests for the structural JSON comparison."""

from __future__ import annotations

import pytest

from courier.exceptions import ExtraElementsError, ValidationError
from courier.validation.json import ElementPathComparator, ElementPathItem


def _compare(context, actual: str, expected: str, strict: bool = True, ignore=()) -> None:
    comparator = ElementPathComparator(strict, context, ignore)
    comparator.validate(ElementPathItem.parse_json(actual, expected))


def test_json_path_rendering() -> None:
    root = ElementPathItem({"propertyA": [1, 2]}, {"propertyA": [1, 2]})
    entry = root.entry("propertyA", [1, 2], [1, 2])
    element = entry.child(1, 2)

    assert root.get_json_path() == "$"
    assert entry.get_json_path() == "$['propertyA']"
    assert element.get_json_path() == "$['propertyA'][1]"
    assert element.get_name() == "[1]"
    assert entry.get_name() == "propertyA"
    assert root.get_name() == "$"
    assert element.get_root() is root


def test_array_root_path() -> None:
    root = ElementPathItem([1, 2], [1, 2])
    assert root.child(1, 2).get_json_path() == "$[1]"


def test_equal_documents_pass(context) -> None:
    payload = '{"a": 1, "b": {"c": [true, null, "x"]}}'
    _compare(context, payload, payload)


def test_strict_mode_rejects_extra_entries(context) -> None:
    with pytest.raises(ExtraElementsError) as exc_info:
        _compare(context, '{"a": 1, "b": 2}', '{"a": 1}')

    error = exc_info.value
    assert error.path == "$"
    assert error.actual == ["b"]
    assert str(error) == (
        "Number of entries is not equal in element: '$', expected 'a' but was 'a, b'"
        "; unexpected entries: b"
    )


def test_lenient_mode_accepts_extra_entries(context) -> None:
    _compare(context, '{"a": 1, "b": 2}', '{"a": 1}', strict=False)


def test_missing_entry_is_reported(context) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _compare(context, '{"a": 1}', '{"a": 1, "c": 3}', strict=False)

    assert exc_info.value.path == "$['c']"
    assert str(exc_info.value) == "Missing JSON entry, expected 'c' to be in '[a]'"


def test_value_mismatch_reports_path_and_values(context) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _compare(context, '{"a": {"b": "Y"}}', '{"a": {"b": "X"}}')

    error = exc_info.value
    assert error.path == "$['a']['b']"
    assert error.expected == "X"
    assert error.actual == "Y"
    assert str(error) == "Values not equal for entry: '$['a']['b']', expected 'X' but was 'Y'"


def test_lenient_array_is_a_subsequence_match(context) -> None:
    _compare(context, '{"a": [1, 2, 3, 4]}', '{"a": [2, 4]}', strict=False)


def test_lenient_array_respects_order(context) -> None:
    with pytest.raises(ValidationError, match=r"An item in '\$\['a'\]' is missing"):
        _compare(context, '{"a": [1, 2, 3]}', '{"a": [3, 1]}', strict=False)


def test_strict_array_size_mismatch(context) -> None:
    with pytest.raises(ExtraElementsError):
        _compare(context, '{"a": [1, 2, 3]}', '{"a": [1, 2]}')

    with pytest.raises(ValidationError) as exc_info:
        _compare(context, '{"a": [1]}', '{"a": [1, 2]}')
    assert not isinstance(exc_info.value, ExtraElementsError)
    assert exc_info.value.path == "$['a']"


def test_array_of_objects(context) -> None:
    _compare(
        context,
        '[{"name": "Leonard", "age": 30}, {"name": "Sheldon", "age": 31}]',
        '[{"name": "Sheldon"}]',
        strict=False,
    )


def test_ignore_placeholder_skips_value(context) -> None:
    _compare(context, '{"id": "1234", "name": "Penny"}', '{"id": "@Ignore@", "name": "Penny"}')


def test_ignore_placeholder_skips_subtree(context) -> None:
    _compare(context, '{"meta": {"x": [1, 2]}, "v": 1}', '{"meta": "@Ignore@", "v": 1}')


def test_ignore_expression_skips_entry(context) -> None:
    _compare(
        context,
        '{"id": "1234", "name": "Penny"}',
        '{"id": "9999", "name": "Penny"}',
        ignore=["$.id"],
    )


def test_ignore_expression_covers_extra_entries_in_strict_mode(context) -> None:
    _compare(
        context,
        '{"timestamp": 1700000000, "name": "Penny"}',
        '{"name": "Penny"}',
        ignore=["$.timestamp"],
    )


def test_ignore_expression_covers_missing_entries(context) -> None:
    _compare(
        context,
        '{"name": "Penny"}',
        '{"name": "Penny", "optional": true}',
        ignore=["$.optional"],
    )


def test_ignore_expressions_follow_each_compared_document(context) -> None:
    comparator = ElementPathComparator(True, context, ["$.meta.id"])

    comparator.validate(ElementPathItem.parse_json('{"name": "Penny"}', '{"name": "Penny"}'))
    comparator.validate(
        ElementPathItem.parse_json(
            '{"meta": {"id": 1}, "name": "Penny"}', '{"meta": {"id": 2}, "name": "Penny"}'
        )
    )

    with pytest.raises(ValidationError, match="expected 'Leonard' but was 'Penny'"):
        comparator.validate(
            ElementPathItem.parse_json(
                '{"meta": {"id": 3}, "name": "Penny"}', '{"meta": {"id": 4}, "name": "Leonard"}'
            )
        )


def test_matcher_directive_in_control(context) -> None:
    _compare(context, '{"id": "abc-123"}', '{"id": "@StartsWith(\'abc\')@"}')

    with pytest.raises(ValidationError, match="StartsWithValidationMatcher failed"):
        _compare(context, '{"id": "xyz-123"}', '{"id": "@StartsWith(\'abc\')@"}')


def test_matcher_directive_receives_compact_json_for_objects(context) -> None:
    _compare(context, '{"o": {"a": 1}}', '{"o": "@Contains(\'\\"a\\":1\')@"}')


def test_type_mismatch(context) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _compare(context, '{"a": [1]}', '{"a": {"b": 1}}')

    assert str(exc_info.value) == (
        "Type mismatch for JSON entry 'a', expected 'object' but was 'array'"
    )


def test_booleans_do_not_equal_numbers(context) -> None:
    with pytest.raises(ValidationError):
        _compare(context, '{"a": 1}', '{"a": true}')
    _compare(context, '{"a": 1.0}', '{"a": 1}')
