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

import json
from typing import Any

from courier.exceptions import CourierSystemError


def compact_json_dumps(obj: Any) -> str:
    """Return the canonical compact JSON text of ``obj``.

    Contract:
      - Insertion key ordering is preserved (documents render as received)
      - Compact separators (",", ":")
      - UTF-8 friendly (ensure_ascii=False)
      - No fallback-to-repr: unserializable values raise
    """
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def parse_json_text(text: str) -> Any:
    """Parse JSON text, wrapping decoder errors in a framework error."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as exc:
        raise CourierSystemError("Failed to parse JSON text") from exc


def looks_like_json(text: str) -> bool:
    stripped = text.strip()
    return stripped.startswith("{") or stripped.startswith("[")


def looks_like_xml(text: str) -> bool:
    return text.strip().startswith("<")
