"""CLI command for scanning, analyzing and converting a directory of videos."""

from __future__ import annotations

import functools
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from vsc.cli.exit_codes import ExitCode
from vsc.cli.loaders import load_catalog_or_exit, load_config_or_exit
from vsc.cli.output import error_exit
from vsc.compliance import ComplianceEngine, ContentClassifier
from vsc.domain.enums import OnErrorMode
from vsc.exceptions import (
    HardwareUnavailableError,
    InvalidPathError,
    IOFailureError,
    NoVideosFoundError,
    ToolInvocationError,
    VSCError,
)
from vsc.executor import FFmpegTranscoder
from vsc.introspector import FFprobeIntrospector, MediaIntrospectionError
from vsc.remediation import (
    BASIC_VIDEO_ENCODER,
    OutputNamingPolicy,
    RemediationPlanner,
)
from vsc.reports import (
    format_batch_report,
    format_compliance_result,
    format_compliance_summary,
    format_metadata,
    format_processing_summary,
    metadata_to_dict,
    result_to_dict,
)
from vsc.summary import FileStatus
from vsc.tools import check_hardware_support
from vsc.workflow import BatchRunResult, DirectoryProcessor, FileReport

logger = logging.getLogger(__name__)


class _ConsoleReporter:
    """Prints per-file progress as the directory is processed."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose
        self._progress_shown = False

    def file_analyzed(self, report: FileReport) -> None:
        click.echo("")
        click.echo(click.style(f"File: {report.path.name}", bold=True))
        if report.metadata is not None:
            for line in format_metadata(report.metadata, verbose=self.verbose):
                click.echo(line)
        if report.result is not None:
            click.echo(format_compliance_result(report.result))

    def progress(self, percent: float) -> None:
        click.echo(f"\r  Transcoding: {percent:5.1f}%", nl=False)
        self._progress_shown = True

    def file_done(self, report: FileReport) -> None:
        if self._progress_shown:
            click.echo("")
            self._progress_shown = False

        outcome = report.outcome
        if outcome is None:
            return
        if outcome.status is FileStatus.FIXED:
            click.echo(
                click.style("  Fixed file saved: ", fg="green")
                + str(outcome.output_path)
            )
        elif outcome.status is FileStatus.SKIPPED:
            click.echo(
                click.style(
                    "  File is already compliant, no fixing needed", fg="green"
                )
            )
        else:
            click.echo(click.style(f"  Failed: {outcome.error}", fg="red"), err=True)


def _run_to_dict(run: BatchRunResult) -> dict[str, Any]:
    tally = run.batch.tally()
    files = []
    for report in run.files:
        entry: dict[str, Any] = {"path": str(report.path), "file_id": report.file_id}
        if report.metadata is not None:
            entry["metadata"] = metadata_to_dict(report.metadata)
        if report.result is not None:
            entry["compliance"] = result_to_dict(report.result)
        if report.outcome is not None:
            entry["status"] = report.outcome.status.value
            if report.outcome.output_path is not None:
                entry["output_path"] = str(report.outcome.output_path)
        if report.error:
            entry["error"] = report.error
        files.append(entry)

    data: dict[str, Any] = {
        "directory": str(run.directory),
        "summary": {
            "total_videos": run.processing.total_videos,
            "total_duration": run.processing.total_duration,
            "total_size": run.processing.total_size,
            "fixed": tally.fixed,
            "skipped": tally.skipped,
            "failed": tally.failed,
        },
        "files": files,
    }
    if run.compliance is not None:
        data["compliance"] = {
            "total_files": run.compliance.total_files,
            "compliant_files": run.compliance.compliant_files,
            "non_compliant_files": run.compliance.non_compliant_files,
            "compliance_rate": run.compliance.compliance_rate,
            "average_score": run.compliance.average_score,
        }
    if run.report_path is not None:
        data["report_path"] = str(run.report_path)
    return data


def _exit_code_for(error: VSCError) -> ExitCode:
    if isinstance(error, InvalidPathError):
        return ExitCode.TARGET_NOT_FOUND
    if isinstance(error, NoVideosFoundError):
        return ExitCode.NO_VIDEOS_FOUND
    if isinstance(error, HardwareUnavailableError):
        return ExitCode.HARDWARE_UNAVAILABLE
    if isinstance(error, MediaIntrospectionError):
        return ExitCode.ANALYSIS_ERROR
    if isinstance(error, (ToolInvocationError, IOFailureError)):
        return ExitCode.OPERATION_FAILED
    return ExitCode.GENERAL_ERROR


@click.command("process")
@click.option(
    "--dir",
    "-d",
    "directory",
    required=True,
    type=click.Path(path_type=Path),
    help="Directory containing the videos to process.",
)
@click.option(
    "--convert",
    "-c",
    is_flag=True,
    default=False,
    help="Convert videos into the H264 output directory.",
)
@click.option(
    "--compliance",
    is_flag=True,
    default=False,
    help="Analyze compliance; with --convert, only fix non-compliant files.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Show full technical details for every file.",
)
@click.option(
    "--on-error",
    "on_error",
    type=click.Choice([m.value for m in OnErrorMode]),
    default=None,
    help="Error handling mode (default: continue).",
)
@click.option(
    "--naming",
    type=click.Choice([p.value for p in OutputNamingPolicy]),
    default=None,
    help="Output file naming (default: preserve).",
)
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
    help="Output a JSON summary instead of text.",
)
@click.pass_context
def process_command(
    ctx: click.Context,
    directory: Path,
    convert: bool,
    compliance: bool,
    verbose: bool,
    on_error: str | None,
    naming: str | None,
    standards_path: Path | None,
    json_output: bool,
) -> None:
    """Scan a directory of videos and report on them.

    Every .mp4 and .avi file directly inside DIR is probed and summarized.
    With --compliance each file is scored against the delivery standards.
    With --convert files are written to DIR/H264 together with
    conversion_report.txt.

    Examples:

        vsc process --dir /media/incoming --compliance

        vsc process --dir /media/incoming --compliance --convert
    """
    config = load_config_or_exit(
        ctx,
        json_output,
        standards_path=standards_path,
        on_error=OnErrorMode(on_error) if on_error else None,
        output_naming=OutputNamingPolicy(naming) if naming else None,
    )
    processing = config.processing

    engine = None
    planner = None
    encoder = BASIC_VIDEO_ENCODER
    if compliance:
        catalog = load_catalog_or_exit(config.standards_file, json_output)
        engine = ComplianceEngine(catalog)
        planner = RemediationPlanner(catalog, naming=processing.output_naming)
        encoder = catalog.remediation.video_encoder

    transcoder = None
    hardware_check = None
    if convert:
        transcoder = FFmpegTranscoder(
            config.get_tool_path("ffmpeg"), timeout=processing.transcode_timeout
        )
        if processing.hardware_check:
            hardware_check = functools.partial(
                check_hardware_support,
                ffmpeg_path=config.get_tool_path("ffmpeg"),
                nvidia_smi_path=config.get_tool_path("nvidia-smi"),
                encoder=encoder,
            )

    reporter = _ConsoleReporter(verbose)
    processor = DirectoryProcessor(
        FFprobeIntrospector(
            config.get_tool_path("ffprobe"), timeout=processing.probe_timeout
        ),
        transcoder=transcoder,
        engine=engine,
        classifier=ContentClassifier(),
        planner=planner,
        on_error=processing.on_error,
        output_dir_name=processing.output_dir_name,
        extensions=processing.video_extensions,
        hardware_check=hardware_check,
        on_file_analyzed=None if json_output else reporter.file_analyzed,
        on_file_done=None if json_output else reporter.file_done,
        progress_callback=None if json_output else reporter.progress,
    )

    if not json_output:
        click.echo(click.style("\nScanning directory:", fg="bright_blue"))
        click.echo(click.style(str(directory), fg="bright_blue", bold=True))
        click.echo(click.style("=" * 50, fg="bright_blue"))

    try:
        run = processor.run(directory)
    except KeyboardInterrupt:
        error_exit("Interrupted", ExitCode.INTERRUPTED, json_output)
    except VSCError as e:
        logger.debug("Processing aborted", exc_info=True)
        error_exit(str(e), _exit_code_for(e), json_output)

    if json_output:
        click.echo(json.dumps(_run_to_dict(run), indent=2))
    else:
        if run.compliance is not None:
            click.echo("")
            click.echo(format_compliance_summary(run.compliance))
        if run.output_dir is not None:
            click.echo("")
            click.echo(format_batch_report(run.batch))
        click.echo("")
        click.echo(format_processing_summary(run.processing))
        if run.report_path is not None:
            click.echo(f"Report written to {run.report_path}")

        tally = run.batch.tally()
        ok = tally.total_files - tally.failed
        click.echo("")
        click.echo(
            f"Processed {tally.total_files} file(s): {ok} ok, {tally.failed} failed"
        )

    if run.has_failures:
        sys.exit(ExitCode.OPERATION_FAILED)
    sys.exit(ExitCode.SUCCESS)
