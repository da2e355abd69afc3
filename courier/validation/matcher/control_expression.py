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

"""Argument extraction for matcher directives (``StartsWith('a', 'b')``)."""

from __future__ import annotations

from typing import List, Optional

from courier.exceptions import CourierConfigurationError

DEFAULT_DELIMITER = "'"


def extract_control_values(
    control_expression: Optional[str], delimiter: Optional[str] = None
) -> List[str]:
    """Split a matcher body into its quoted parameters.

    ``'a', 'b'`` yields ``["a", "b"]``. A delimiter counts as closing only
    when followed by a comma, whitespace or the end of the body, so quotes
    inside a parameter survive (``'it's'`` yields ``["it's"]``). A body
    without quoted parameters is returned as a single parameter.
    """

    use_delimiter = delimiter or DEFAULT_DELIMITER
    extracted: List[str] = []
    if not control_expression:
        return extracted

    _extract_parameters(control_expression, use_delimiter, extracted)

    if not extracted:
        extracted.append(control_expression)
    return extracted


def _extract_parameters(expression: str, delimiter: str, out: List[str]) -> None:
    search_from = 0
    while True:
        start = expression.find(delimiter, search_from)
        if start == -1:
            return

        end = _find_matching_delimiter(expression, delimiter, start)
        if end == -1:
            raise CourierConfigurationError(
                f"No matching delimiter ({delimiter}) found after position "
                f"'{start}' in control expression: {expression}"
            )

        out.append(expression[start + 1 : end])

        search_from = end + 1
        while search_from < len(expression) and (
            expression[search_from] == "," or expression[search_from].isspace()
        ):
            search_from += 1

        if (
            search_from >= len(expression)
            or expression.find(delimiter, search_from) == -1
        ):
            return


def _find_matching_delimiter(expression: str, delimiter: str, start: int) -> int:
    search_from = start + 1
    while search_from < len(expression):
        candidate = expression.find(delimiter, search_from)
        if candidate == -1:
            return -1
        following = candidate + 1
        if (
            following >= len(expression)
            or expression[following] == ","
            or expression[following].isspace()
        ):
            return candidate
        search_from = candidate + 1
    return -1
