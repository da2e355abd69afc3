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

"""Comparison of an extracted value against an expected value.

Three strategies, tried in order:

1. matcher: the expected value is a value-matcher object or a matcher
   directive string (``@StartsWith('a')@``);
2. collection: the expected value is a list, tuple or set;
3. canonical string equality, with numeric, boolean, ``None``, list and
   JSON-object adjustments.
"""

from __future__ import annotations

import json
import re
from collections import Counter
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, List, Optional

from courier.exceptions import ValidationError
from courier.message.json_utils import compact_json_dumps
from courier.validation.matcher.matcher_utils import (
    is_validation_matcher_expression,
    resolve_validation_matcher,
)
from courier.validation.matcher.value_matcher import describe_matcher, is_value_matcher

if TYPE_CHECKING:
    from courier.context import TestContext

COLLECTION_TYPES = (list, tuple, set, frozenset)


def build_value_mismatch_error_message(base: str, expected: Any, actual: Any) -> str:
    return f"{base}, expected '{expected}' but was '{actual}'"


def build_value_to_be_in_collection_error_message(
    base: str, expected: Any, collection: Any
) -> str:
    return f"{base}, expected '{expected}' to be in '{collection}'"


def to_canonical_string(value: Any) -> str:
    """Render a value the way it appears in a JSON document's text."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return compact_json_dumps(value)
    return str(value)


def is_matcher(expected: Any, context: Optional["TestContext"] = None) -> bool:
    settings = context.settings if context is not None else None
    return is_value_matcher(expected) or is_validation_matcher_expression(
        expected, settings
    )


def validate_values(
    actual: Any, expected: Any, path: str, context: "TestContext"
) -> None:
    """Raise :class:`ValidationError` unless ``actual`` satisfies ``expected``."""

    if is_value_matcher(expected):
        _validate_with_value_matcher(actual, expected, path)
        return

    if is_validation_matcher_expression(expected, context.settings):
        resolve_validation_matcher(
            path, _matcher_input(actual), expected, context
        )
        return

    if isinstance(expected, COLLECTION_TYPES):
        _validate_collection(actual, expected, path, context)
        return

    if not values_equal(actual, expected):
        raise ValidationError(
            build_value_mismatch_error_message(
                f"Values not equal for element '{path}'",
                to_canonical_string(expected),
                to_canonical_string(actual),
            ),
            path=path,
            expected=expected,
            actual=actual,
        )


def _matcher_input(actual: Any) -> Optional[str]:
    if actual is None:
        return None
    return to_canonical_string(actual)


def _validate_with_value_matcher(actual: Any, matcher: Any, path: str) -> None:
    if not matcher.matches(actual):
        raise ValidationError(
            build_value_mismatch_error_message(
                f"Value matcher rejected element '{path}'",
                describe_matcher(matcher),
                to_canonical_string(actual),
            ),
            path=path,
            expected=matcher,
            actual=actual,
        )


def _validate_collection(
    actual: Any, expected: Any, path: str, context: "TestContext"
) -> None:
    actual_items = _as_list(actual)
    expected_items = list(expected)

    if any(is_matcher(item, context) for item in expected_items):
        _validate_collection_with_matchers(actual_items, expected_items, path, context)
        return

    actual_counts = Counter(to_canonical_string(item) for item in actual_items)
    expected_counts = Counter(to_canonical_string(item) for item in expected_items)
    if actual_counts != expected_counts:
        raise ValidationError(
            build_value_mismatch_error_message(
                f"Values not equal for element '{path}'",
                _render_items(expected_items),
                _render_items(actual_items),
            ),
            path=path,
            expected=expected,
            actual=actual,
        )


def _validate_collection_with_matchers(
    actual_items: List[Any],
    expected_items: List[Any],
    path: str,
    context: "TestContext",
) -> None:
    if len(actual_items) != len(expected_items):
        raise ValidationError(
            build_value_mismatch_error_message(
                f"Number of values not equal for element '{path}'",
                len(expected_items),
                len(actual_items),
            ),
            path=path,
            expected=expected_items,
            actual=actual_items,
        )

    remaining = list(actual_items)
    for expected_item in expected_items:
        index = _find_satisfying(remaining, expected_item, path, context)
        if index is None:
            raise ValidationError(
                build_value_to_be_in_collection_error_message(
                    f"Values not matching for element '{path}'",
                    describe_matcher(expected_item)
                    if is_value_matcher(expected_item)
                    else to_canonical_string(expected_item),
                    _render_items(actual_items),
                ),
                path=path,
                expected=expected_items,
                actual=actual_items,
            )
        del remaining[index]


def _find_satisfying(
    candidates: List[Any], expected_item: Any, path: str, context: "TestContext"
) -> Optional[int]:
    for index, candidate in enumerate(candidates):
        try:
            validate_values(candidate, expected_item, path, context)
        except ValidationError:
            continue
        return index
    return None


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, COLLECTION_TYPES):
        return list(value)
    return [value]


def _render_items(items: List[Any]) -> str:
    return "[" + ", ".join(to_canonical_string(item) for item in items) + "]"


def values_equal(actual: Any, expected: Any) -> bool:
    if isinstance(actual, bool) or isinstance(expected, bool):
        return to_canonical_string(actual).lower() == to_canonical_string(expected).lower()

    actual_number = _as_decimal(actual)
    expected_number = _as_decimal(expected)
    if actual_number is not None and expected_number is not None and (
        _is_number(actual) or _is_number(expected)
    ):
        return actual_number == expected_number

    if isinstance(actual, list) and isinstance(expected, str):
        return _strip_list_text(to_canonical_string(actual)) == _strip_list_text(expected)

    if isinstance(actual, dict) and isinstance(expected, str):
        try:
            return actual == json.loads(expected)
        except ValueError:
            return False

    return to_canonical_string(actual) == to_canonical_string(expected)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _as_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, Decimal)):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


_LIST_NOISE = re.compile(r"[\[\]\s\"]")


def _strip_list_text(text: str) -> str:
    return _LIST_NOISE.sub("", text)
