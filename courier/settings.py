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

"""Framework settings resolved from environment variables and YAML files."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from courier.exceptions import CourierConfigurationError

ENV_PREFIX = "COURIER_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class CourierSettings:
    """Validation settings.

    Environment variable names are the upper-cased field names prefixed with
    ``COURIER_`` (``COURIER_JSON_STRICT=false``). YAML files use the field
    names as keys, optionally nested under a top-level ``courier:`` mapping.
    """

    json_strict: bool = True
    plaintext_ignore_whitespace: bool = False
    plaintext_ignore_newline_type: bool = False
    ignore_placeholder: str = "@Ignore@"
    matcher_prefix: str = "@"
    matcher_suffix: str = "@"
    variable_prefix: str = "${"
    variable_suffix: str = "}"
    internal_header_prefix: str = "courier_"

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "CourierSettings":
        known = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, raw in values.items():
            if key not in known:
                raise CourierConfigurationError(f"Unknown setting '{key}'")
            kwargs[key] = _coerce(key, raw, known[key].default)
        return cls(**kwargs)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["CourierSettings"] = None,
    ) -> "CourierSettings":
        """Build settings from ``COURIER_*`` variables on top of ``base``."""

        env = os.environ if environ is None else environ
        settings = base or cls()
        overrides: Dict[str, Any] = {}
        for f in fields(cls):
            var = ENV_PREFIX + f.name.upper()
            if var in env:
                overrides[f.name] = _coerce(f.name, env[var], f.default)
        return replace(settings, **overrides) if overrides else settings

    @classmethod
    def from_yaml(
        cls,
        path: Union[str, Path],
        environ: Optional[Mapping[str, str]] = None,
    ) -> "CourierSettings":
        """Load settings from a YAML file; environment variables take precedence."""

        with open(path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
        if not isinstance(raw, Mapping):
            raise CourierConfigurationError(
                f"Settings file {str(path)!r} must contain a mapping"
            )
        if "courier" in raw:
            raw = raw["courier"] or {}
        return cls.from_env(environ, base=cls.from_mapping(raw))


def _coerce(name: str, raw: Any, default: Any) -> Any:
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise CourierConfigurationError(
            f"Setting '{name}' expects a boolean, got {raw!r}"
        )
    return str(raw)


_settings: Optional[CourierSettings] = None


def get_settings() -> CourierSettings:
    """Return the process-wide settings, resolving them from the environment once."""

    global _settings
    if _settings is None:
        _settings = CourierSettings.from_env()
    return _settings


def set_settings(settings: Optional[CourierSettings]) -> None:
    """Replace the process-wide settings (``None`` re-reads the environment lazily)."""

    global _settings
    _settings = settings
