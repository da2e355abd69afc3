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

from .control_expression import extract_control_values  # noqa: F401
from .library import (  # noqa: F401
    DEFAULT_MATCHERS,
    IgnoreValidationMatcher,
    PredicateValidationMatcher,
    ValidationMatcher,
    ValidationMatcherLibrary,
    ValidationMatcherRegistry,
    default_matcher_library,
    default_matcher_registry,
)
from .matcher_utils import (  # noqa: F401
    is_validation_matcher_expression,
    resolve_validation_matcher,
)
from .value_matcher import (  # noqa: F401
    PredicateMatcher,
    ValueMatcher,
    describe_matcher,
    is_value_matcher,
)
