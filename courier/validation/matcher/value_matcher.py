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

"""Value-matcher objects usable as expected values.

Any object with a callable ``matches(actual)`` method qualifies, so
hamcrest-style matchers can be passed directly. :class:`ValueMatcher` is a
small base for matchers defined in tests or extensions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable


class ValueMatcher(ABC):
    @abstractmethod
    def matches(self, actual: Any) -> bool:
        """Return ``True`` if ``actual`` is accepted."""

    def describe(self) -> str:
        return type(self).__name__


class PredicateMatcher(ValueMatcher):
    """Wrap a plain predicate as a value matcher."""

    def __init__(self, predicate: Callable[[Any], bool], description: str = ""):
        self._predicate = predicate
        self._description = description or getattr(predicate, "__name__", "predicate")

    def matches(self, actual: Any) -> bool:
        return bool(self._predicate(actual))

    def describe(self) -> str:
        return self._description


def is_value_matcher(candidate: Any) -> bool:
    return not isinstance(candidate, (str, bytes)) and callable(
        getattr(candidate, "matches", None)
    )


def describe_matcher(matcher: Any) -> str:
    describe = getattr(matcher, "describe", None)
    if callable(describe):
        return str(describe())
    return str(matcher)
