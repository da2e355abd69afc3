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

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ValidationOutcome(Enum):
    SKIPPED = "skipped"
    PASSED = "passed"
    FAILED = "failed"
    MISCONFIGURED = "misconfigured"


@dataclass(frozen=True)
class ValidationResult:
    """Tagged result of running one validator.

    ``error`` is set for ``FAILED`` (a :class:`ValidationError`) and
    ``MISCONFIGURED`` (a :class:`CourierConfigurationError`).
    """

    outcome: ValidationOutcome
    validator: str
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.outcome in (ValidationOutcome.SKIPPED, ValidationOutcome.PASSED)

    @classmethod
    def skipped(cls, validator: str) -> "ValidationResult":
        return cls(ValidationOutcome.SKIPPED, validator)

    @classmethod
    def passed(cls, validator: str) -> "ValidationResult":
        return cls(ValidationOutcome.PASSED, validator)
