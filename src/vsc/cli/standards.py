"""CLI commands for the delivery standards catalog."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
import yaml

from vsc.cli.exit_codes import ExitCode
from vsc.cli.loaders import load_catalog_or_exit, load_config_or_exit
from vsc.cli.output import CLIResult, error_exit, success_output
from vsc.exceptions import StandardsLoadError
from vsc.standards import dump_standards, load_standards


@click.group("standards")
def standards_group() -> None:
    """Show and validate delivery standards catalogs."""


@standards_group.command("show")
@click.option(
    "--standards",
    "standards_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Standards YAML file (default: configured or built-in catalog).",
)
@click.option(
    "--json",
    "-j",
    "json_output",
    is_flag=True,
    default=False,
    help="Output in JSON format.",
)
@click.pass_context
def show_command(
    ctx: click.Context, standards_path: Path | None, json_output: bool
) -> None:
    """Print the effective standards catalog.

    The output is YAML that can be edited and passed back with --standards.
    """
    config = load_config_or_exit(ctx, json_output, standards_path=standards_path)
    catalog = load_catalog_or_exit(config.standards_file, json_output)
    data: dict[str, Any] = dump_standards(catalog)

    if json_output:
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(yaml.safe_dump(data, sort_keys=False).rstrip())


@standards_group.command("validate")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--json",
    "-j",
    "json_output",
    is_flag=True,
    default=False,
    help="Output in JSON format.",
)
def validate_command(file: Path, json_output: bool) -> None:
    """Check that FILE is a valid standards YAML."""
    try:
        catalog = load_standards(file)
    except StandardsLoadError as e:
        error_exit(str(e), ExitCode.STANDARDS_ERROR, json_output)

    success_output(
        CLIResult(
            success=True,
            message=f"Valid standards file: {file}",
            data={"file": str(file), "primary_codec": catalog.primary_codec},
        ),
        json_output,
    )
