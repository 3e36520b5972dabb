"""Config and standards loading for CLI commands, exiting on error."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from vsc.cli.exit_codes import ExitCode
from vsc.cli.output import error_exit
from vsc.config import VSCConfig, get_config
from vsc.exceptions import StandardsLoadError
from vsc.standards import StandardsCatalog, load_default_catalog, load_standards


def load_config_or_exit(
    ctx: click.Context, json_output: bool = False, **overrides: Any
) -> VSCConfig:
    """Load the merged configuration.

    Args:
        ctx: Click context; ``ctx.obj["config_path"]`` selects the file.
        json_output: Format errors as JSON.
        **overrides: CLI overrides passed through to get_config.

    Returns:
        The configuration. Exits with CONFIG_ERROR if it is invalid.
    """
    config_path = (ctx.obj or {}).get("config_path")
    try:
        return get_config(config_path=config_path, **overrides)
    except ValueError as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR, json_output)


def load_catalog_or_exit(
    standards_file: Path | None, json_output: bool = False
) -> StandardsCatalog:
    """Load a standards YAML, or the built-in catalog when none is given.

    Exits with STANDARDS_ERROR if the file cannot be loaded.
    """
    if standards_file is None:
        return load_default_catalog()
    try:
        return load_standards(standards_file)
    except StandardsLoadError as e:
        error_exit(str(e), ExitCode.STANDARDS_ERROR, json_output)
