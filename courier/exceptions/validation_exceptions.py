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

"""Exception taxonomy surfaced by the validation engine.

Test-execution layers branch on these classes:

- :class:`CourierConfigurationError` (and subclasses) means the test itself is
  wrong (no validator, unknown matcher, bad path expression, path that does
  not resolve). It is never status-tracked and never retried.
- :class:`ValidationError` means the received content does not match the
  expectation.
"""

from __future__ import annotations

from typing import Any, Optional


class CourierSystemError(RuntimeError):
    """Base class for all framework errors."""


class CourierConfigurationError(CourierSystemError):
    """Raised when a validation cannot run because of missing or bad setup."""


class NoSuchMessageValidatorError(CourierConfigurationError, LookupError):
    """Raised when a message validator name is not registered."""


class PathExpressionError(CourierConfigurationError):
    """Raised when a path expression cannot be parsed or evaluated."""

    def __init__(self, message: str, expression: Optional[str] = None):
        super().__init__(message)
        self.expression = expression


class PathNotFoundError(CourierConfigurationError):
    """Raised when a path expression resolves to no element."""

    def __init__(self, expression: str, message: Optional[str] = None):
        super().__init__(
            message or f"No result for path expression: '{expression}'"
        )
        self.expression = expression


class ValidationError(CourierSystemError):
    """Raised when received content does not match the control content.

    ``path``, ``expected`` and ``actual`` are populated whenever the failing
    element is known, so reports can point at the exact location.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        expected: Any = None,
        actual: Any = None,
    ):
        super().__init__(message)
        self.path = path
        self.expected = expected
        self.actual = actual


class ExtraElementsError(ValidationError):
    """Raised in strict mode when the received document has unexpected elements."""
