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

from .json_utils import compact_json_dumps, looks_like_json, looks_like_xml  # noqa: F401
from .message import Message, MessageType  # noqa: F401


def has_json_payload(message: Message) -> bool:
    """Return ``True`` if the payload is structured data or JSON-looking text."""

    if isinstance(message.payload, (dict, list)):
        return True
    try:
        return looks_like_json(message.get_payload_as_str())
    except UnicodeDecodeError:
        return False


def has_xml_payload(message: Message) -> bool:
    if not isinstance(message.payload, (str, bytes, bytearray)):
        return False
    try:
        return looks_like_xml(message.get_payload_as_str())
    except UnicodeDecodeError:
        return False
