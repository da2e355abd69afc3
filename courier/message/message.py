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

"""Message data model handed to the validation engine."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from courier.message.json_utils import compact_json_dumps


class MessageType(Enum):
    """Content kinds known to the engine. Names match case-insensitively."""

    XML = "xml"
    XHTML = "xhtml"
    JSON = "json"
    PLAINTEXT = "plaintext"
    BINARY = "binary"
    GZIP = "gzip"
    MSCONS = "mscons"

    def matches(self, message_type: Optional[str]) -> bool:
        return message_type is not None and message_type.lower() == self.value

    @classmethod
    def is_binary(cls, message_type: Optional[str]) -> bool:
        return cls.BINARY.matches(message_type) or cls.GZIP.matches(message_type)


@dataclass
class Message:
    """A received or control message.

    ``payload`` may be text, bytes or an already structured object (dict or
    list). Producers may mutate headers and payload until the message is
    handed to validation; validators only read it.
    """

    payload: Any = None
    headers: Dict[str, Any] = field(default_factory=dict)
    header_data: List[str] = field(default_factory=list)
    message_type: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def get_header(self, name: str) -> Any:
        return self.headers.get(name)

    def set_header(self, name: str, value: Any) -> "Message":
        self.headers[name] = value
        return self

    def add_header_data(self, data: str) -> "Message":
        self.header_data.append(data)
        return self

    def get_payload_as_str(self) -> str:
        """Render the payload as text (bytes are decoded as UTF-8)."""

        payload = self.payload
        if payload is None:
            return ""
        if isinstance(payload, str):
            return payload
        if isinstance(payload, (bytes, bytearray)):
            return bytes(payload).decode("utf-8")
        if isinstance(payload, (dict, list)):
            return compact_json_dumps(payload)
        return str(payload)

    def get_payload_as_bytes(self) -> bytes:
        payload = self.payload
        if isinstance(payload, (bytes, bytearray)):
            return bytes(payload)
        return self.get_payload_as_str().encode("utf-8")
