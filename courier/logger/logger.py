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

"""Thin logging facade shared by validators, registries and matchers."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

_DEFAULT_NAME = "Courier"
_FORMAT = "%(asctime)s - %(levelname)-8s - %(message)s (%(module)s)"


class Logger:
    """Wrapper around :mod:`logging` with a framework-wide default logger.

    Instances created without arguments share the ``"Courier"`` logger, so a
    single ``set_verbose_level`` call configures the whole engine. A child
    name scopes records to a component (``Logger("registry")`` logs as
    ``Courier.registry``).
    """

    def __init__(
        self,
        name: Optional[str] = None,
        level: Union[int, str, None] = None,
    ):
        full_name = _DEFAULT_NAME if not name else f"{_DEFAULT_NAME}.{name}"
        self.logger = logging.getLogger(full_name)
        if level is not None:
            self.set_verbose_level(level)

    def set_verbose_level(self, level: Union[int, str]) -> None:
        """Set the level of the underlying logger and attach a console handler."""

        if isinstance(level, str):
            resolved = logging.getLevelName(level.upper())
            if not isinstance(resolved, int):
                raise ValueError(f"Unknown logging level: {level!r}")
            level = resolved
        self.logger.setLevel(level)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(_FORMAT))
            self.logger.addHandler(handler)

    def is_debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.exception(msg, *args, **kwargs)
