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

"""Recursive comparison of a received JSON document with a control document.

In strict mode the received side may not carry entries the control side
does not declare, and arrays must have the same length. In lenient mode
only the control entries are checked. Control array elements are matched
in order against the remaining received elements, so the control array
only needs to be a subsequence of the received one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, FrozenSet, Iterable, List, Optional, Tuple

from courier.exceptions import ExtraElementsError, ValidationError
from courier.validation.json.element_item import ElementPathItem
from courier.validation.json.path_engine import PathExpressionEngine
from courier.validation.matcher.matcher_utils import (
    is_validation_matcher_expression,
    resolve_validation_matcher,
)
from courier.validation.value_validation import (
    build_value_mismatch_error_message,
    build_value_to_be_in_collection_error_message,
    to_canonical_string,
)

if TYPE_CHECKING:
    from courier.context import TestContext


class ElementPathComparator:
    def __init__(
        self,
        strict: bool,
        context: "TestContext",
        ignore_expressions: Iterable[str] = (),
    ):
        self.strict = strict
        self.context = context
        self.ignore_expressions: Tuple[str, ...] = tuple(ignore_expressions)
        self._ignored_root: Optional[ElementPathItem] = None
        self._ignored_paths: FrozenSet[str] = frozenset()

    def validate(self, item: ElementPathItem) -> None:
        """Raise :class:`ValidationError` where ``item.actual`` departs from ``item.expected``."""

        if self.is_ignored(item):
            return

        expected_text = item.expected_as_string_or_none()
        if is_validation_matcher_expression(expected_text, self.context.settings):
            resolve_validation_matcher(
                item.get_json_path(),
                item.actual_as_string_or_none(),
                expected_text,
                self.context,
            )
        elif isinstance(item.expected, dict):
            self._validate_object(item.ensure_type(dict))
        elif isinstance(item.expected, list):
            self._validate_array(item.ensure_type(list))
        else:
            self._validate_native(item)

    def is_ignored(self, item: ElementPathItem) -> bool:
        """Ignored by the placeholder or by one of the ignore expressions."""

        expected_text = (item.expected_as_string_or_none() or "").strip()
        if expected_text == self.context.settings.ignore_placeholder:
            return True
        if not self.ignore_expressions:
            return False
        return item.get_json_path() in self._ignored_paths_for(item.get_root())

    def _ignored_paths_for(self, root: ElementPathItem) -> FrozenSet[str]:
        # Holding the root keeps the identity check valid.
        if root is not self._ignored_root:
            paths = set()
            for expression in self.ignore_expressions:
                for document in (root.actual, root.expected):
                    paths.update(PathExpressionEngine.matched_paths(document, expression))
            self._ignored_root = root
            self._ignored_paths = frozenset(paths)
        return self._ignored_paths

    def _validate_object(self, item: ElementPathItem) -> None:
        actual_keys = list(item.actual.keys())

        if self.strict:
            extra = [
                key
                for key in actual_keys
                if key not in item.expected
                and not self.is_ignored(item.entry(key, item.actual[key], None))
            ]
            if extra:
                raise ExtraElementsError(
                    build_value_mismatch_error_message(
                        f"Number of entries is not equal in element: '{item.get_json_path()}'",
                        ", ".join(item.expected.keys()),
                        ", ".join(actual_keys),
                    )
                    + f"; unexpected entries: {', '.join(extra)}",
                    path=item.get_json_path(),
                    expected=list(item.expected.keys()),
                    actual=extra,
                )

        for name, expected in item.expected.items():
            entry = item.entry(name, item.actual.get(name), expected)
            if name not in item.actual:
                if self.is_ignored(entry):
                    continue
                raise ValidationError(
                    build_value_to_be_in_collection_error_message(
                        "Missing JSON entry", name, "[" + ", ".join(actual_keys) + "]"
                    ),
                    path=entry.get_json_path(),
                    expected=expected,
                )
            self.validate(entry)

    def _validate_array(self, item: ElementPathItem) -> None:
        expected_items: List = item.expected
        actual_items: List = item.actual

        if self.strict and len(expected_items) != len(actual_items):
            error_type = (
                ExtraElementsError
                if len(actual_items) > len(expected_items)
                else ValidationError
            )
            raise error_type(
                build_value_mismatch_error_message(
                    f"Number of entries is not equal in element: '{item.get_json_path()}'",
                    len(expected_items),
                    len(actual_items),
                ),
                path=item.get_json_path(),
                expected=expected_items,
                actual=actual_items,
            )

        actual_index = 0
        for expected_index in range(len(expected_items)):
            if self.is_ignored(item.child(expected_index, None)):
                continue

            matched = False
            while not matched and actual_index < len(actual_items):
                candidate = item.child(expected_index, actual_items[actual_index])
                matched = self._is_valid(candidate)
                actual_index += 1

            if not matched:
                raise ValidationError(
                    build_value_to_be_in_collection_error_message(
                        f"An item in '{item.get_json_path()}' is missing",
                        to_canonical_string(expected_items[expected_index]),
                        to_canonical_string(actual_items),
                    ),
                    path=item.get_json_path(),
                    expected=expected_items[expected_index],
                    actual=actual_items,
                )

    def _is_valid(self, item: ElementPathItem) -> bool:
        try:
            self.validate(item)
        except ValidationError:
            return False
        return True

    def _validate_native(self, item: ElementPathItem) -> None:
        if not _native_equal(item.expected, item.actual):
            raise ValidationError(
                build_value_mismatch_error_message(
                    f"Values not equal for entry: '{item.get_json_path()}'",
                    to_canonical_string(item.expected),
                    to_canonical_string(item.actual),
                ),
                path=item.get_json_path(),
                expected=item.expected,
                actual=item.actual,
            )


def _native_equal(expected, actual) -> bool:
    if isinstance(expected, bool) or isinstance(actual, bool):
        return type(expected) is type(actual) and expected == actual
    return expected == actual
