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

"""Named pattern matchers addressed by ``@Name(args)@`` directives.

Matchers are grouped in libraries; a library is selected by the optional
``prefix:`` in front of the matcher name. The default library has an empty
prefix and ships the matchers listed in :data:`DEFAULT_MATCHERS`.
"""

from __future__ import annotations

import re
import uuid
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional

from courier.exceptions import CourierConfigurationError, ValidationError
from courier.logger import Logger

if TYPE_CHECKING:
    from courier.context import TestContext

_logger = Logger("matcher")


class ValidationMatcher(ABC):
    """A named check applied to a received field value."""

    name: str = ""

    @abstractmethod
    def validate(
        self,
        field_name: str,
        value: Optional[str],
        control_parameters: List[str],
        context: "TestContext",
    ) -> None:
        """Raise :class:`ValidationError` if ``value`` does not satisfy the matcher."""

    def fail(self, field_name: str, value: Optional[str], control: str) -> None:
        raise ValidationError(
            f"{self.name}ValidationMatcher failed for field '{field_name}'. "
            f"Received value is '{value}', control value is '{control}'.",
            path=field_name,
            expected=control,
            actual=value,
        )


class IgnoreValidationMatcher(ValidationMatcher):
    name = "Ignore"

    def validate(self, field_name, value, control_parameters, context) -> None:
        _logger.debug("Ignoring value for field '%s'", field_name)


class PredicateValidationMatcher(ValidationMatcher):
    """Matcher backed by a predicate ``(value, *parameters) -> bool``.

    ``arity`` is the number of control parameters the predicate consumes.
    """

    def __init__(
        self,
        name: str,
        predicate: Callable[..., bool],
        arity: int = 1,
    ):
        self.name = name
        self._predicate = predicate
        self._arity = arity

    def validate(self, field_name, value, control_parameters, context) -> None:
        if len(control_parameters) < self._arity:
            raise CourierConfigurationError(
                f"{self.name}ValidationMatcher expects {self._arity} control "
                f"parameter(s), got {len(control_parameters)}"
            )
        params = control_parameters[: self._arity]
        control = params[0] if params else ""
        if not self._predicate(value, *params):
            self.fail(field_name, value, control)


def _text(value: Optional[str]) -> str:
    return "" if value is None else str(value)


def _to_decimal(text: Optional[str]) -> Optional[Decimal]:
    if text is None:
        return None
    try:
        number = Decimal(str(text).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _control_decimal(name: str, control: str) -> Decimal:
    number = _to_decimal(control)
    if number is None:
        raise CourierConfigurationError(
            f"{name}ValidationMatcher expects a numeric control value, got '{control}'"
        )
    return number


def _matches_regex(value: Optional[str], pattern: str) -> bool:
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise CourierConfigurationError(
            f"Invalid regular expression '{pattern}' for MatchesValidationMatcher"
        ) from exc
    return compiled.fullmatch(_text(value)) is not None


def _greater_than(value: Optional[str], control: str) -> bool:
    limit = _control_decimal("GreaterThan", control)
    number = _to_decimal(value)
    return number is not None and number > limit


def _lower_than(value: Optional[str], control: str) -> bool:
    limit = _control_decimal("LowerThan", control)
    number = _to_decimal(value)
    return number is not None and number < limit


def _string_length(value: Optional[str], control: str) -> bool:
    try:
        expected = int(control.strip())
    except ValueError as exc:
        raise CourierConfigurationError(
            f"StringLengthValidationMatcher expects an integer, got '{control}'"
        ) from exc
    return len(_text(value)) == expected


def _is_uuid(value: Optional[str]) -> bool:
    try:
        uuid.UUID(_text(value).strip())
    except ValueError:
        return False
    return True


def _is_null(value: Optional[str]) -> bool:
    return value is None or value == "null"


_WHITESPACE = re.compile(r"\s+")
_NEWLINES = re.compile(r"\r\n|\r|\n")


def _default_matchers() -> List[ValidationMatcher]:
    return [
        IgnoreValidationMatcher(),
        PredicateValidationMatcher(
            "EqualsIgnoreCase",
            lambda v, c: v is not None and _text(v).casefold() == c.casefold(),
        ),
        PredicateValidationMatcher("Contains", lambda v, c: c in _text(v)),
        PredicateValidationMatcher(
            "ContainsIgnoreCase",
            lambda v, c: c.casefold() in _text(v).casefold(),
        ),
        PredicateValidationMatcher("StartsWith", lambda v, c: _text(v).startswith(c)),
        PredicateValidationMatcher("EndsWith", lambda v, c: _text(v).endswith(c)),
        PredicateValidationMatcher("Matches", _matches_regex),
        PredicateValidationMatcher(
            "IsNumber", lambda v: _to_decimal(v) is not None, arity=0
        ),
        PredicateValidationMatcher("GreaterThan", _greater_than),
        PredicateValidationMatcher("LowerThan", _lower_than),
        PredicateValidationMatcher("StringLength", _string_length),
        PredicateValidationMatcher("Empty", lambda v: _text(v) == "", arity=0),
        PredicateValidationMatcher("NotEmpty", lambda v: _text(v) != "", arity=0),
        PredicateValidationMatcher("Null", _is_null, arity=0),
        PredicateValidationMatcher("NotNull", lambda v: not _is_null(v), arity=0),
        PredicateValidationMatcher(
            "Trim", lambda v, c: _text(v).strip() == c.strip()
        ),
        PredicateValidationMatcher(
            "TrimAllWhitespaces",
            lambda v, c: _WHITESPACE.sub("", _text(v)) == _WHITESPACE.sub("", c),
        ),
        PredicateValidationMatcher(
            "IgnoreNewLine",
            lambda v, c: _NEWLINES.sub("", _text(v)) == _NEWLINES.sub("", c),
        ),
        PredicateValidationMatcher(
            "LowerCase", lambda v: _text(v) == _text(v).lower(), arity=0
        ),
        PredicateValidationMatcher(
            "UpperCase", lambda v: _text(v) == _text(v).upper(), arity=0
        ),
        PredicateValidationMatcher("IsUUID", _is_uuid, arity=0),
    ]


DEFAULT_MATCHERS = tuple(m.name for m in _default_matchers())


class ValidationMatcherLibrary:
    """A named set of matchers sharing a directive prefix (``""`` for default)."""

    def __init__(
        self,
        name: str,
        prefix: str = "",
        matchers: Optional[Iterable[ValidationMatcher]] = None,
    ):
        self.name = name
        self.prefix = prefix
        self._matchers: Dict[str, ValidationMatcher] = {}
        for matcher in matchers or ():
            self.add_matcher(matcher)

    def add_matcher(self, matcher: ValidationMatcher, name: Optional[str] = None) -> None:
        key = name or matcher.name
        if not key:
            raise CourierConfigurationError("Validation matcher must have a name")
        if key in self._matchers:
            _logger.debug(
                "Overwriting validation matcher '%s' in library '%s'", key, self.name
            )
        self._matchers[key] = matcher

    def get_validation_matcher(self, name: str) -> ValidationMatcher:
        try:
            return self._matchers[name]
        except KeyError as exc:
            raise CourierConfigurationError(
                f"Unknown validation matcher '{name}' in library '{self.name}'"
            ) from exc

    def knows_validation_matcher(self, name: str) -> bool:
        return name in self._matchers

    def matcher_names(self) -> List[str]:
        return list(self._matchers)


class ValidationMatcherRegistry:
    """Libraries of validation matchers, keyed by directive prefix."""

    def __init__(self, libraries: Optional[Iterable[ValidationMatcherLibrary]] = None):
        self._libraries: Dict[str, ValidationMatcherLibrary] = {}
        for library in libraries or ():
            self.add_library(library)

    def add_library(self, library: ValidationMatcherLibrary) -> None:
        self._libraries[library.prefix] = library

    def get_library_for_prefix(self, prefix: str) -> ValidationMatcherLibrary:
        try:
            return self._libraries[prefix]
        except KeyError as exc:
            raise CourierConfigurationError(
                f"Unknown validation matcher library prefix '{prefix}'"
            ) from exc

    def libraries(self) -> List[ValidationMatcherLibrary]:
        return list(self._libraries.values())


_DEFAULT_LIBRARY: Optional[ValidationMatcherLibrary] = None


def default_matcher_library() -> ValidationMatcherLibrary:
    """Return the shared default library; its matchers are stateless."""

    global _DEFAULT_LIBRARY
    if _DEFAULT_LIBRARY is None:
        _DEFAULT_LIBRARY = ValidationMatcherLibrary(
            "courier-validation-matchers", "", _default_matchers()
        )
    return _DEFAULT_LIBRARY


def default_matcher_registry() -> ValidationMatcherRegistry:
    return ValidationMatcherRegistry([default_matcher_library()])
