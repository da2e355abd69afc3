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

from typing import Any, Dict, Union

from lxml import etree

from courier.exceptions import CourierSystemError


def _parser() -> etree.XMLParser:
    # no DTD loading, entity expansion or network access
    return etree.XMLParser(
        remove_blank_text=False,
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
    )


def parse_xml_text(text: Union[str, bytes]) -> etree._Element:
    """Parse markup into an element tree root."""

    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    try:
        return etree.fromstring(data.strip(), _parser())
    except etree.XMLSyntaxError as exc:
        raise CourierSystemError(f"Failed to parse XML text: {exc}") from exc


def collect_namespaces(root: etree._Element) -> Dict[str, str]:
    """Return every prefixed namespace declared in the document."""

    namespaces: Dict[str, str] = {}
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        for prefix, uri in element.nsmap.items():
            if prefix:
                namespaces.setdefault(prefix, uri)
    return namespaces


def node_value(node: Any) -> str:
    """Text of an element, attribute or text node."""

    if isinstance(node, etree._Element):
        return node.text or ""
    return str(node)
