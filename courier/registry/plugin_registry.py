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

"""Explicit extension loading.

An extension is either an entry point in the ``courier.extensions`` group
or an importable module; in both cases it resolves to an object exposing
``register(registry)``, which adds validators to the given registry.
Extensions are never discovered by scanning: callers name them.
"""

from __future__ import annotations

import importlib
from importlib.metadata import entry_points
from typing import Any, Iterable, Optional, Set, Union

from courier.exceptions import CourierConfigurationError
from courier.logger import Logger
from courier.registry.message_validator_registry import MessageValidatorRegistry

ENTRY_POINT_GROUP = "courier.extensions"

_LOADED_EXTENSIONS: Set[str] = set()
_logger = Logger("registry")


def _entry_point(name: str) -> Optional[Any]:
    for candidate in entry_points(group=ENTRY_POINT_GROUP):
        if candidate.name == name:
            return candidate
    return None


def _resolve_extension(name: str) -> Any:
    entry = _entry_point(name)
    if entry is not None:
        return entry.load()
    try:
        return importlib.import_module(name)
    except ImportError as exc:
        raise CourierConfigurationError(
            f"Unknown extension '{name}': no '{ENTRY_POINT_GROUP}' entry point "
            "and no importable module with that name"
        ) from exc


def load_extensions(
    names: Union[str, Iterable[str]],
    registry: Optional[MessageValidatorRegistry] = None,
) -> None:
    """Load extensions by name and let each register its validators.

    Names already loaded are skipped. ``registry`` defaults to the
    process-wide registry.
    """

    if isinstance(names, str):
        names = [names]
    if registry is None:
        from courier.registry.bootstrap import default_registry

        registry = default_registry()

    for name in names:
        if name in _LOADED_EXTENSIONS:
            continue
        extension = _resolve_extension(name)
        register = getattr(extension, "register", None)
        if register is None and callable(extension):
            register = extension
        if not callable(register):
            raise CourierConfigurationError(
                f"Extension '{name}' does not expose a register(registry) function"
            )
        register(registry)
        _LOADED_EXTENSIONS.add(name)
        _logger.debug("Loaded extension '%s'", name)
