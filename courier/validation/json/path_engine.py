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

"""JSONPath evaluation over parsed JSON documents.

Parsing and matching use :mod:`jsonpath_ng`. On top of it the engine adds
the trailing function library from :mod:`.path_functions`, a stable result
shape (one match is returned as the value itself, several as a list) and
canonical ``$['a'][1]`` addresses for every match.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, List, Optional

from jsonpath_ng import parse
from jsonpath_ng.jsonpath import DatumInContext, Fields, Index, JSONPath
from jsonpath_ng.exceptions import JSONPathError

from courier.exceptions import PathExpressionError, PathNotFoundError
from courier.message.json_utils import compact_json_dumps, parse_json_text
from courier.validation.json.path_functions import EXISTS, apply_function, split_function


@lru_cache(maxsize=512)
def compile_expression(expression: str) -> JSONPath:
    """Parse ``expression`` once; parsed expressions are cached."""

    try:
        return parse(expression)
    except (JSONPathError, ValueError, TypeError, AttributeError) as exc:
        raise PathExpressionError(
            f"Invalid JSON path expression '{expression}': {exc}", expression
        ) from exc


def canonical_path(datum: DatumInContext) -> str:
    """Render the address of a match as ``$['name'][index]``."""

    segments: List[str] = []
    current: Optional[DatumInContext] = datum
    while current is not None:
        path = current.path
        if isinstance(path, Fields) and len(path.fields) == 1:
            segments.append(f"['{path.fields[0]}']")
        elif isinstance(path, Index):
            indices = getattr(path, "indices", None)
            index = indices[0] if indices else path.index
            segments.append(f"[{index}]")
        current = current.context
    return "$" + "".join(reversed(segments))


class PathExpressionEngine:
    """Evaluate JSONPath expressions with optional trailing functions."""

    @classmethod
    def load(cls, document: Any) -> Any:
        """Return the parsed form of ``document`` (text or bytes are parsed)."""

        if isinstance(document, (bytes, bytearray)):
            document = bytes(document).decode("utf-8")
        if isinstance(document, str):
            return parse_json_text(document)
        return document

    @classmethod
    def find(cls, document: Any, expression: str) -> List[DatumInContext]:
        """Return raw matches for ``expression`` (no trailing function)."""

        compiled = compile_expression(expression)
        try:
            return compiled.find(cls.load(document))
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise PathExpressionError(
                f"Failed to evaluate JSON path expression: {expression}", expression
            ) from exc

    @classmethod
    def evaluate_all(
        cls,
        document: Any,
        expression: str,
        ignore_not_found: bool = False,
    ) -> List[Any]:
        """Return the (function-applied) value of every match."""

        path, function = split_function(expression)
        matches = cls.find(document, path)

        if function == EXISTS:
            return [bool(matches)]
        if not matches:
            if ignore_not_found:
                return []
            raise PathNotFoundError(expression)
        if function:
            return [apply_function(function, match.value) for match in matches]
        return [match.value for match in matches]

    @classmethod
    def evaluate(
        cls,
        document: Any,
        expression: str,
        ignore_not_found: bool = False,
    ) -> Any:
        """Evaluate ``expression`` against ``document``.

        A single match yields its value, several matches yield a list in
        document order. With no match, ``Exists()`` yields ``False``,
        ``ignore_not_found`` yields ``None`` and anything else raises
        :class:`PathNotFoundError`.
        """

        results = cls.evaluate_all(document, expression, ignore_not_found)
        if not results:
            return None
        if len(results) == 1:
            return results[0]
        return results

    @classmethod
    def evaluate_as_string(
        cls,
        document: Any,
        expression: str,
        ignore_not_found: bool = False,
    ) -> str:
        return cls.render(cls.evaluate_all(document, expression, ignore_not_found))

    @classmethod
    def render(cls, results: List[Any]) -> str:
        """Join rendered results with ', ' (objects and arrays as compact JSON)."""

        return ", ".join(_render(item) for item in results)

    @classmethod
    def matched_paths(cls, document: Any, expression: str) -> List[str]:
        """Return the canonical addresses of every match, in document order."""

        path, _ = split_function(expression)
        return [canonical_path(match) for match in cls.find(document, path)]


def _render(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return compact_json_dumps(value)
    return str(value)
