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

"""Validation contexts: typed configuration handed to message validators.

A test declares what to check by passing context objects next to the
control message. Each validator picks the first context of the kind it
understands and records the verdict on it through :meth:`update_status`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from courier.logger import Logger

_logger = Logger("validation")


class ValidationStatus(Enum):
    UNKNOWN = "unknown"
    PASSED = "passed"
    FAILED = "failed"


class ValidationContext:
    """Base class for all validation contexts."""

    def __init__(self) -> None:
        self._status = ValidationStatus.UNKNOWN

    @property
    def status(self) -> ValidationStatus:
        return self._status

    def update_status(self, status: ValidationStatus) -> None:
        """Record a terminal verdict.

        The first terminal status wins; later updates are ignored.
        """

        if status is ValidationStatus.UNKNOWN:
            return
        if self._status is not ValidationStatus.UNKNOWN:
            _logger.debug(
                "Ignoring status update %s on %s: already %s",
                status.value,
                type(self).__name__,
                self._status.value,
            )
            return
        self._status = status

    def requires_validator(self) -> bool:
        return False


class HeaderValidationContext(ValidationContext):
    """Header checks; body validators never pick this context."""

    def __init__(
        self,
        header_name_ignore_case: bool = False,
        validators: Optional[Iterable[Any]] = None,
    ):
        super().__init__()
        self.header_name_ignore_case = header_name_ignore_case
        self.validators: List[Any] = list(validators or [])

    def add_header_validator(self, validator: Any) -> "HeaderValidationContext":
        self.validators.append(validator)
        return self

    class Builder:
        def __init__(self) -> None:
            self._ignore_case = False
            self._validators: List[Any] = []

        def ignore_case(self, ignore_case: bool = True) -> "HeaderValidationContext.Builder":
            self._ignore_case = ignore_case
            return self

        def validator(self, validator: Any) -> "HeaderValidationContext.Builder":
            self._validators.append(validator)
            return self

        def build(self) -> "HeaderValidationContext":
            return HeaderValidationContext(self._ignore_case, self._validators)


class DefaultMessageValidationContext(ValidationContext):
    """Generic body validation: ignore expressions and optional schema check."""

    def __init__(
        self,
        ignore_expressions: Iterable[str] = (),
        schema_validation: bool = False,
        schema: Any = None,
    ):
        super().__init__()
        self.ignore_expressions: Tuple[str, ...] = tuple(ignore_expressions)
        self.schema_validation = schema_validation
        self.schema = schema

    def is_schema_validation_enabled(self) -> bool:
        return self.schema_validation

    class Builder:
        def __init__(self) -> None:
            self._ignore: List[str] = []
            self._schema_validation = False
            self._schema: Any = None

        def ignore(self, expression: str) -> Any:
            self._ignore.append(expression)
            return self

        def schema_validation(self, enabled: bool = True) -> Any:
            self._schema_validation = enabled
            return self

        def schema(self, schema: Any) -> Any:
            self._schema = schema
            self._schema_validation = True
            return self

        def build(self) -> Any:
            return DefaultMessageValidationContext(
                self._ignore, self._schema_validation, self._schema
            )


class JsonMessageValidationContext(DefaultMessageValidationContext):
    """Structural JSON comparison. ``strict=None`` defers to settings."""

    def __init__(
        self,
        ignore_expressions: Iterable[str] = (),
        schema_validation: bool = False,
        schema: Any = None,
        strict: Optional[bool] = None,
    ):
        super().__init__(ignore_expressions, schema_validation, schema)
        self.strict = strict

    class Builder(DefaultMessageValidationContext.Builder):
        def __init__(self) -> None:
            super().__init__()
            self._strict: Optional[bool] = None

        def strict(self, strict: bool = True) -> "JsonMessageValidationContext.Builder":
            self._strict = strict
            return self

        def build(self) -> "JsonMessageValidationContext":
            return JsonMessageValidationContext(
                self._ignore, self._schema_validation, self._schema, self._strict
            )


class XmlMessageValidationContext(DefaultMessageValidationContext):
    """Markup body validation (schema checks)."""

    class Builder(DefaultMessageValidationContext.Builder):
        def build(self) -> "XmlMessageValidationContext":
            return XmlMessageValidationContext(
                self._ignore, self._schema_validation, self._schema
            )


class JsonPathMessageValidationContext(ValidationContext):
    """Ordered ``expression -> expected`` pairs evaluated as JSONPath."""

    def __init__(self, expressions: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.expressions: Dict[str, Any] = dict(expressions or {})

    def requires_validator(self) -> bool:
        return True

    class Builder:
        def __init__(self) -> None:
            self._expressions: Dict[str, Any] = {}

        def expression(self, path: str, expected: Any) -> "JsonPathMessageValidationContext.Builder":
            self._expressions[path] = expected
            return self

        def expressions(self, expressions: Dict[str, Any]) -> "JsonPathMessageValidationContext.Builder":
            self._expressions.update(expressions)
            return self

        def build(self) -> "JsonPathMessageValidationContext":
            return JsonPathMessageValidationContext(self._expressions)


class XpathMessageValidationContext(ValidationContext):
    """Ordered XPath ``expression -> expected`` pairs with namespace bindings."""

    def __init__(
        self,
        expressions: Optional[Dict[str, Any]] = None,
        namespaces: Optional[Dict[str, str]] = None,
    ):
        super().__init__()
        self.expressions: Dict[str, Any] = dict(expressions or {})
        self.namespaces: Dict[str, str] = dict(namespaces or {})

    def requires_validator(self) -> bool:
        return True

    class Builder:
        def __init__(self) -> None:
            self._expressions: Dict[str, Any] = {}
            self._namespaces: Dict[str, str] = {}

        def expression(self, path: str, expected: Any) -> "XpathMessageValidationContext.Builder":
            self._expressions[path] = expected
            return self

        def namespace(self, prefix: str, uri: str) -> "XpathMessageValidationContext.Builder":
            self._namespaces[prefix] = uri
            return self

        def build(self) -> "XpathMessageValidationContext":
            return XpathMessageValidationContext(self._expressions, self._namespaces)
