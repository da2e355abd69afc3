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

"""Registry of message and schema validators.

The registry is populated once at start-up (by
:mod:`courier.registry.bootstrap` and extensions) and read afterwards.
Registration must be finished before validators are looked up from several
threads; lookups never mutate the named maps.
"""

from __future__ import annotations

import copy
import threading
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence

from courier.exceptions import CourierConfigurationError, NoSuchMessageValidatorError
from courier.logger import Logger
from courier.message import Message, MessageType
from courier.validation.base import MessageValidator, SchemaValidator
from courier.validation.context import ValidationContext
from courier.validation.defaults import (
    DefaultEmptyMessageValidator,
    DefaultTextEqualsMessageValidator,
)
from courier.validation.header import DefaultMessageHeaderValidator
from courier.validation.outcome import ValidationResult

if TYPE_CHECKING:
    from courier.context import TestContext

DEFAULT_HEADER_VALIDATOR_NAME = "header"


class MessageValidatorRegistry:
    """Named message validators, named schema validators and built-in fallbacks."""

    def __init__(self) -> None:
        self._message_validators: Dict[str, MessageValidator] = {}
        self._schema_validators: Dict[str, SchemaValidator] = {}
        self._default_empty_message_validator = DefaultEmptyMessageValidator()
        self._default_text_equals_message_validator = DefaultTextEqualsMessageValidator()
        self._default_message_header_validator: Optional[MessageValidator] = None
        self._header_lock = threading.Lock()
        self._logger = Logger("registry")

    def _snapshot_state_for_tests(self) -> Mapping[str, Any]:
        """TEST-ONLY: Snapshot registry state for isolation."""

        return {
            "_message_validators": dict(self._message_validators),
            "_schema_validators": dict(self._schema_validators),
            "_default_message_header_validator": self._default_message_header_validator,
        }

    def _restore_state_for_tests(self, state: Mapping[str, Any]) -> None:
        """TEST-ONLY: Restore registry state from snapshot."""

        self._message_validators = copy.copy(state.get("_message_validators", {}))
        self._schema_validators = copy.copy(state.get("_schema_validators", {}))
        self._default_message_header_validator = state.get(
            "_default_message_header_validator"
        )

    # -- registration -------------------------------------------------

    def add_message_validator(self, name: str, validator: MessageValidator) -> None:
        """Register ``validator`` under ``name``; an existing entry is replaced."""

        if not isinstance(name, str) or not name:
            raise ValueError("Message validator name must be a non-empty string")
        if not isinstance(validator, MessageValidator):
            raise TypeError("validator must be a MessageValidator instance")
        if name in self._message_validators:
            self._logger.debug(
                "Overwriting message validator '%s' (%s) with %s",
                name,
                self._message_validators[name].name,
                validator.name,
            )
        self._message_validators[name] = validator

    def add_schema_validator(self, name: str, validator: SchemaValidator) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("Schema validator name must be a non-empty string")
        if not isinstance(validator, SchemaValidator):
            raise TypeError("validator must be a SchemaValidator instance")
        if name in self._schema_validators:
            self._logger.debug("Overwriting schema validator '%s'", name)
        self._schema_validators[name] = validator

    def register_all(self, validators: Mapping[str, Any]) -> None:
        """Register a ``name -> validator`` mapping of message and schema validators."""

        for name, validator in validators.items():
            if isinstance(validator, SchemaValidator):
                self.add_schema_validator(name, validator)
            else:
                self.add_message_validator(name, validator)

    # -- lookup by name -----------------------------------------------

    def get_message_validator(self, name: str) -> MessageValidator:
        try:
            return self._message_validators[name]
        except KeyError as exc:
            raise NoSuchMessageValidatorError(
                f"Unable to find message validator with name '{name}'"
            ) from exc

    def find_message_validator(self, name: str) -> Optional[MessageValidator]:
        return self._message_validators.get(name)

    def get_schema_validator(self, name: str) -> SchemaValidator:
        try:
            return self._schema_validators[name]
        except KeyError as exc:
            raise NoSuchMessageValidatorError(
                f"Unable to find schema validator with name '{name}'"
            ) from exc

    def find_schema_validator(self, name: str) -> Optional[SchemaValidator]:
        return self._schema_validators.get(name)

    @property
    def message_validators(self) -> Dict[str, MessageValidator]:
        return dict(self._message_validators)

    @property
    def schema_validators(self) -> Dict[str, SchemaValidator]:
        return dict(self._schema_validators)

    # -- lookup by message --------------------------------------------

    def default_message_header_validator(self) -> MessageValidator:
        """Return the header validator used for every message (memoized once)."""

        with self._header_lock:
            if self._default_message_header_validator is None:
                self._default_message_header_validator = self._message_validators.get(
                    DEFAULT_HEADER_VALIDATOR_NAME
                ) or DefaultMessageHeaderValidator()
            return self._default_message_header_validator

    def find_message_validators(
        self,
        message_type: Optional[str],
        message: Message,
        must_find_validator: bool = False,
    ) -> List[MessageValidator]:
        """Select the validators for ``message`` declared as ``message_type``.

        Falls back, in order, to content sniffing, the empty-payload
        validator and the text-equals validator. With
        ``must_find_validator`` the last fallback is replaced by a
        :class:`CourierConfigurationError`.
        """

        matching = self._supporting(self._message_validators, message_type, message)

        if self._is_empty_or_default(matching):
            sniffed = self._sniffed_message_type(message_type, message)
            if sniffed is not None:
                self._logger.debug(
                    "Retrying validator lookup with sniffed message type '%s'", sniffed
                )
                matching = self._supporting(self._message_validators, sniffed, message)

        if self._is_empty_or_default(matching) and _is_blank(message):
            matching.append(self._default_empty_message_validator)

        if self._is_empty_or_default(matching):
            if must_find_validator:
                self._logger.warning(
                    "Unable to find proper message validator. Message type is '%s' "
                    "and message payload is '%s'",
                    message_type,
                    _payload_preview(message),
                )
                raise CourierConfigurationError(
                    "Failed to find proper message validator for message"
                )
            self._logger.warning(
                "Unable to find proper message validator - fallback to default text "
                "equals validation."
            )
            matching.append(self._default_text_equals_message_validator)

        self._logger.debug("Found %d message validators for message", len(matching))
        return matching

    def find_schema_validators(
        self, message_type: Optional[str], message: Message
    ) -> List[SchemaValidator]:
        matching = self._supporting(self._schema_validators, message_type, message)
        if not matching:
            sniffed = self._sniffed_message_type(message_type, message, plaintext=False)
            if sniffed is not None:
                matching = self._supporting(self._schema_validators, sniffed, message)
        return matching

    def validate(
        self,
        received_message: Message,
        control_message: Message,
        message_type: Optional[str],
        context: "TestContext",
        validation_contexts: Sequence[ValidationContext] = (),
        must_find_validator: bool = False,
    ) -> List[ValidationResult]:
        """Run the header validator and every body validator selected for the message.

        The first failure propagates; the results of validators that ran
        are returned otherwise.
        """

        validators: List[MessageValidator] = [self.default_message_header_validator()]
        for validator in self.find_message_validators(
            message_type, received_message, must_find_validator
        ):
            if validator not in validators:
                validators.append(validator)

        return [
            validator.validate_message(
                received_message, control_message, context, validation_contexts
            )
            for validator in validators
        ]

    # -- internals ----------------------------------------------------

    @staticmethod
    def _supporting(
        validators: Mapping[str, Any], message_type: Optional[str], message: Message
    ) -> List[Any]:
        return [
            validator
            for validator in validators.values()
            if validator.supports_message_type(message_type, message)
        ]

    def _is_empty_or_default(self, validators: List[MessageValidator]) -> bool:
        if not validators:
            return True
        header = self.default_message_header_validator()
        return all(
            validator is header or isinstance(validator, DefaultMessageHeaderValidator)
            for validator in validators
        )

    @staticmethod
    def _sniffed_message_type(
        message_type: Optional[str], message: Message, plaintext: bool = True
    ) -> Optional[str]:
        text = _payload_text(message)
        if text is None:
            return None
        text = text.strip()
        if not text:
            return None

        if text.startswith("<") and not MessageType.XML.matches(message_type):
            return MessageType.XML.value
        if (text.startswith("{") or text.startswith("[")) and not MessageType.JSON.matches(
            message_type
        ):
            return MessageType.JSON.value
        if plaintext and not MessageType.PLAINTEXT.matches(message_type):
            return MessageType.PLAINTEXT.value
        return None


def _payload_text(message: Message) -> Optional[str]:
    payload = message.payload
    if payload is None:
        return None
    try:
        return message.get_payload_as_str()
    except UnicodeDecodeError:
        return None


def _is_blank(message: Message) -> bool:
    text = _payload_text(message)
    if text is None:
        return message.payload is None
    return not text.strip()


def _payload_preview(message: Message, limit: int = 200) -> str:
    text = _payload_text(message) or ""
    return text if len(text) <= limit else text[:limit] + "..."
