"""CLI inspect command: analyze a single video file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from vsc.cli.exit_codes import ExitCode
from vsc.cli.loaders import load_catalog_or_exit, load_config_or_exit
from vsc.cli.output import error_exit
from vsc.compliance import ComplianceEngine, ContentClassifier
from vsc.introspector import FFprobeIntrospector, MediaIntrospectionError
from vsc.remediation import RemediationPlanner, build_ffmpeg_command
from vsc.reports import (
    format_compliance_result,
    format_metadata,
    format_plan,
    metadata_to_dict,
    result_to_dict,
)

logger = logging.getLogger(__name__)


@click.command("inspect")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--standards",
    "standards_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Standards YAML file (default: built-in catalog).",
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
def inspect_command(
    ctx: click.Context, file: Path, standards_path: Path | None, json_output: bool
) -> None:
    """Probe FILE and report its compliance.

    Shows the technical metadata, the compliance score with every violation,
    the detected content type and, for a non-compliant file, the
    remediation plan with the ffmpeg command that would run.
    """
    if not file.is_file():
        error_exit(f"File not found: {file}", ExitCode.TARGET_NOT_FOUND, json_output)

    config = load_config_or_exit(ctx, json_output, standards_path=standards_path)
    catalog = load_catalog_or_exit(config.standards_file, json_output)

    introspector = FFprobeIntrospector(
        config.get_tool_path("ffprobe"), timeout=config.processing.probe_timeout
    )
    if not introspector.is_available():
        error_exit(
            "ffprobe is not installed or not in PATH. "
            "Install ffmpeg or set VSC_FFPROBE_PATH.",
            ExitCode.TOOL_NOT_AVAILABLE,
            json_output,
        )

    try:
        metadata = introspector.get_metadata(file)
    except MediaIntrospectionError as e:
        error_exit(f"Could not parse file: {e}", ExitCode.PARSE_ERROR, json_output)

    result = ComplianceEngine(catalog).analyze(metadata)
    content_type = ContentClassifier().classify(metadata, file.name)

    plan = None
    if not result.is_compliant:
        output_dir = file.parent / config.processing.output_dir_name
        planner = RemediationPlanner(catalog, naming=config.processing.output_naming)
        plan = planner.plan(result, content_type, metadata, file, output_dir)

    if json_output:
        data = {
            "file": str(file),
            "metadata": metadata_to_dict(metadata),
            "content_type": content_type.name,
            "compliance": result_to_dict(result),
        }
        if plan is not None:
            data["command"] = build_ffmpeg_command(plan, config.get_tool_path("ffmpeg"))
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(click.style(f"File: {file.name}", bold=True))
    for line in format_metadata(metadata, verbose=True):
        click.echo(line)
    click.echo(f"  Content Type: {content_type.name}")
    click.echo("")
    click.echo(format_compliance_result(result))
    if plan is not None:
        click.echo("")
        click.echo("Remediation Plan:")
        click.echo(format_plan(plan))
        command = build_ffmpeg_command(plan, config.get_tool_path("ffmpeg"))
        click.echo(f"Command:      {' '.join(command)}")
