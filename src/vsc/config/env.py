"""Environment variable reader with dependency injection support."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class EnvReader:
    """Typed access to environment variables.

    Accepts an optional env mapping so tests can inject variables without
    touching os.environ.

    Example:
        reader = EnvReader(env={"VSC_LOG_LEVEL": "debug"})
        reader.get_str("VSC_LOG_LEVEL")  # "debug"
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        value = self._env.get(var)
        if value is None:
            return default
        return value

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer; logs a warning and returns default if unparsable."""
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean.

        "true", "1", "yes" and "on" (case-insensitive) are true; any other
        set value is false.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Get a path, with tilde expansion.

        Args:
            var: Environment variable name.
            must_exist: Return default (with a warning) when the path does
                not exist.
            default: Value when unset or missing.
        """
        value = self._env.get(var)
        if value is None:
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                value,
            )
            return default
        return path

    def get_enum(
        self, var: str, enum_type: type[E], default: E | None = None
    ) -> E | None:
        """Get an Enum member by its (case-insensitive) value.

        Logs a warning and returns default when the value names no member.
        """
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return enum_type(value.lower())
        except ValueError:
            logger.warning("Invalid value for %s: %s", var, value)
            return default
