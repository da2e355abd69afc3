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

"""Functions that may trail a JSONPath expression (``$.items.Size()``)."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from courier.message.json_utils import compact_json_dumps

EXISTS = "Exists"


def key_set(value: Any) -> str:
    if isinstance(value, dict):
        return ", ".join(str(key) for key in value.keys())
    return ""


def size(value: Any) -> int:
    if isinstance(value, (dict, list)):
        return len(value)
    return 1


def to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    return compact_json_dumps(value)


def values(value: Any) -> str:
    return ", ".join(_render_scalar(item) for item in _flatten(value))


def _flatten(value: Any) -> Iterator[Any]:
    if isinstance(value, dict):
        for item in value.values():
            yield from _flatten(item)
    elif isinstance(value, list):
        for item in value:
            yield from _flatten(item)
    else:
        yield value


def _render_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


FUNCTIONS: Dict[str, Callable[[Any], Any]] = {
    "KeySet": key_set,
    "Size": size,
    "ToString": to_string,
    "Values": values,
    EXISTS: lambda value: True,
}


def supported_functions() -> Tuple[str, ...]:
    return tuple(FUNCTIONS)


def split_function(expression: str) -> Tuple[str, Optional[str]]:
    """Strip a trailing ``.Name()`` call, returning ``(path, name)``."""

    for name in FUNCTIONS:
        suffix = f".{name}()"
        if expression.endswith(suffix):
            return expression[: -len(suffix)], name
    return expression, None


def apply_function(name: str, value: Any) -> Any:
    return FUNCTIONS[name](value)
