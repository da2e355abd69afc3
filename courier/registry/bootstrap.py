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

"""Default validator catalogue and the process-wide default registry."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Optional

from courier.registry.message_validator_registry import MessageValidatorRegistry
from courier.validation.base import MessageValidator, SchemaValidator
from courier.validation.binary import BinaryMessageValidator
from courier.validation.header import DefaultMessageHeaderValidator
from courier.validation.json import (
    JsonPathMessageValidator,
    JsonSchemaValidator,
    JsonTextMessageValidator,
)
from courier.validation.text import PlainTextMessageValidator
from courier.validation.xml import XmlSchemaValidator, XpathMessageValidator

DEFAULT_MESSAGE_VALIDATORS: Dict[str, Callable[[], MessageValidator]] = {
    "header": DefaultMessageHeaderValidator,
    "json": JsonTextMessageValidator,
    "json-path": JsonPathMessageValidator,
    "plaintext": PlainTextMessageValidator,
    "xpath": XpathMessageValidator,
    "binary": BinaryMessageValidator,
}

DEFAULT_SCHEMA_VALIDATORS: Dict[str, Callable[[], SchemaValidator]] = {
    "json-schema": JsonSchemaValidator,
    "xml-schema": XmlSchemaValidator,
}

_default_registry: Optional[MessageValidatorRegistry] = None
_default_registry_lock = threading.Lock()


def create_default_registry() -> MessageValidatorRegistry:
    """Build a new registry populated with the default validators."""

    registry = MessageValidatorRegistry()
    for name, factory in DEFAULT_MESSAGE_VALIDATORS.items():
        registry.add_message_validator(name, factory())
    for name, factory in DEFAULT_SCHEMA_VALIDATORS.items():
        registry.add_schema_validator(name, factory())
    return registry


def default_registry() -> MessageValidatorRegistry:
    """Return the process-wide registry, building it on first use."""

    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = create_default_registry()
    return _default_registry


def reset_default_registry() -> None:
    """Drop the process-wide registry; the next call rebuilds it."""

    global _default_registry
    with _default_registry_lock:
        _default_registry = None
