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

from .element_comparator import ElementPathComparator  # noqa: F401
from .element_item import ElementPathItem  # noqa: F401
from .path_engine import PathExpressionEngine, canonical_path  # noqa: F401
from .path_validator import JsonPathMessageValidator  # noqa: F401
from .schema_validator import JsonSchemaValidator  # noqa: F401
from .text_validator import JsonTextMessageValidator  # noqa: F401
