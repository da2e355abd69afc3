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

from .bootstrap import (  # noqa: F401
    DEFAULT_MESSAGE_VALIDATORS,
    DEFAULT_SCHEMA_VALIDATORS,
    create_default_registry,
    default_registry,
    reset_default_registry,
)
from .message_validator_registry import MessageValidatorRegistry  # noqa: F401
from .plugin_registry import load_extensions  # noqa: F401
