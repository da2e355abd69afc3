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

"""A node of the received/control document pair being compared."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from courier.exceptions import ValidationError
from courier.message.json_utils import compact_json_dumps, parse_json_text
from courier.validation.value_validation import build_value_mismatch_error_message


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


@dataclass
class ElementPathItem:
    """Received and control value at one position of the document.

    A child is addressed either by ``name`` (object entry) or by ``index``
    (array element, numbered by its position in the control array). The
    parent link is only used to render paths.
    """

    actual: Any
    expected: Any
    name: Optional[str] = None
    index: Optional[int] = None
    parent: Optional["ElementPathItem"] = None

    @classmethod
    def parse_json(cls, actual_json: str, expected_json: str) -> "ElementPathItem":
        return cls(parse_json_text(actual_json), parse_json_text(expected_json))

    def entry(self, name: str, actual: Any, expected: Any) -> "ElementPathItem":
        return ElementPathItem(actual, expected, name=name, parent=self)

    def child(self, expected_index: int, actual: Any) -> "ElementPathItem":
        return ElementPathItem(
            actual, self.expected[expected_index], index=expected_index, parent=self
        )

    def ensure_type(self, expected_type: type) -> "ElementPathItem":
        """Raise unless both sides hold a value of ``expected_type``."""

        if isinstance(self.expected, expected_type) and isinstance(
            self.actual, expected_type
        ):
            return self
        raise ValidationError(
            build_value_mismatch_error_message(
                f"Type mismatch for JSON entry '{self.get_name()}'",
                json_type_name(expected_type()),
                json_type_name(self.actual),
            ),
            path=self.get_json_path(),
            expected=self.expected,
            actual=self.actual,
        )

    def get_root(self) -> "ElementPathItem":
        item = self
        while item.parent is not None:
            item = item.parent
        return item

    def get_name(self) -> str:
        if self.index is not None:
            return f"[{self.index}]"
        return self.name if self.name is not None else "$"

    def get_json_path(self) -> str:
        parent_path = self.parent.get_json_path() if self.parent is not None else "$"
        if self.index is not None:
            return f"{parent_path}[{self.index}]"
        if self.name is not None:
            return f"{parent_path}['{self.name}']"
        return parent_path

    def actual_as_string_or_none(self) -> Optional[str]:
        return _as_string_or_none(self.actual)

    def expected_as_string_or_none(self) -> Optional[str]:
        return _as_string_or_none(self.expected)


def _as_string_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return compact_json_dumps(value)
    return str(value)
