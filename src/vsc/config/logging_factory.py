"""Build LoggingConfig instances with CLI overrides applied."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from vsc.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Merge CLI overrides into a base LoggingConfig.

    Overrides left as None keep the base value. The result is validated
    again, so an invalid override raises ValueError.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(
        base, **{key: value for key, value in overrides.items() if value is not None}
    )


def configure_logging_from_cli(
    *,
    config_path: Path | None = None,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
) -> None:
    """Configure the root logger from the config file plus global CLI options.

    Raises:
        ValueError: If the merged logging configuration is invalid.
    """
    from vsc.config import get_config
    from vsc.logging import configure_logging

    base = get_config(config_path=config_path).logging
    configure_logging(build_logging_config(base, level=level, file=file, format=format))
