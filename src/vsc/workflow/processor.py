"""Directory processing workflow.

For every video in a directory: probe it, fold its metadata into the
processing summary, optionally analyze compliance, and optionally convert it
into the output directory (a compliance-driven remediation when analysis is
enabled, a basic H.264/AAC conversion otherwise). The conversion report is
written to the output directory at the end of a converting run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from vsc.compliance.classifier import ContentClassifier
from vsc.compliance.engine import ComplianceEngine
from vsc.domain.enums import OnErrorMode
from vsc.domain.models import ComplianceResult, VideoMetadata
from vsc.exceptions import ToolInvocationError, VSCError
from vsc.executor.interface import ProgressCallback, Transcoder
from vsc.introspector.interface import MediaIntrospector
from vsc.logging.context import asset_context
from vsc.remediation.planner import RemediationPlanner, build_basic_conversion_plan
from vsc.remediation.types import RemediationPlan
from vsc.reports.conversion_report import write_conversion_report
from vsc.summary.aggregator import (
    BatchProcessor,
    ComplianceSummary,
    FileOutcome,
    ProcessingSummary,
)
from vsc.workflow.discovery import (
    DEFAULT_EXTENSIONS,
    DEFAULT_OUTPUT_DIR_NAME,
    create_output_dir,
    validate_directory,
)

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """What happened to one file, handed to the per-file callbacks.

    Attributes:
        path: Source file.
        file_id: Sequential identifier within the batch (e.g., "F001").
        metadata: Probed metadata (None if probing failed).
        result: Compliance result (None when analysis is disabled or failed).
        plan: Plan that was executed (None when nothing was transcoded).
        outcome: Batch outcome (None when not converting and no failure).
        error: Failure description, if the file failed.
    """

    path: Path
    file_id: str
    metadata: VideoMetadata | None = None
    result: ComplianceResult | None = None
    plan: RemediationPlan | None = None
    outcome: FileOutcome | None = None
    error: str | None = None


FileCallback = Callable[[FileReport], None]


@dataclass
class BatchRunResult:
    """Aggregated outcome of a directory run."""

    directory: Path
    processing: ProcessingSummary
    batch: BatchProcessor
    compliance: ComplianceSummary | None = None
    output_dir: Path | None = None
    report_path: Path | None = None
    files: list[FileReport] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return self.batch.has_failures


def process_single_file(
    path: Path,
    metadata: VideoMetadata,
    result: ComplianceResult | None,
    output_dir: Path,
    transcoder: Transcoder,
    classifier: ContentClassifier | None = None,
    planner: RemediationPlanner | None = None,
    progress_callback: ProgressCallback | None = None,
) -> tuple[FileOutcome, RemediationPlan | None]:
    """Convert or remediate one file.

    With no compliance result the file gets a basic conversion. A compliant
    result is skipped. A non-compliant result is classified and remediated
    with a content-aware plan.

    Args:
        path: Source file.
        metadata: Probed metadata of the file.
        result: Compliance result, or None when analysis is disabled.
        output_dir: Directory receiving the converted file.
        transcoder: Executes the plan.
        classifier: Content classifier (required when ``result`` is set).
        planner: Remediation planner (required when ``result`` is set).
        progress_callback: Receives the transcode completion percentage.

    Returns:
        Tuple of (FileOutcome, executed plan or None when skipped).

    Raises:
        ToolInvocationError: If the transcode fails.
    """
    if result is None:
        plan = build_basic_conversion_plan(path, output_dir)
    elif result.is_compliant:
        logger.info("File is already compliant, no fixing needed")
        return FileOutcome.skipped(path), None
    else:
        if classifier is None or planner is None:
            raise ValueError("classifier and planner are required for remediation")
        content_type = classifier.classify(metadata, path.name)
        plan = planner.plan(result, content_type, metadata, path, output_dir)

    transcode_result = transcoder.transcode(
        plan,
        duration_seconds=metadata.duration,
        progress_callback=progress_callback,
    )
    if not transcode_result.success:
        raise ToolInvocationError(
            transcode_result.error_message,
            exit_code=transcode_result.exit_code,
            stderr=transcode_result.stderr,
        )

    return FileOutcome.fixed(path, transcode_result.output_path), plan


class DirectoryProcessor:
    """Runs the probe, analyze and convert pipeline over a directory.

    Conversion is enabled by passing a ``transcoder``; compliance analysis by
    passing an ``engine``. Files are processed sequentially in sorted order.
    """

    def __init__(
        self,
        introspector: MediaIntrospector,
        transcoder: Transcoder | None = None,
        engine: ComplianceEngine | None = None,
        classifier: ContentClassifier | None = None,
        planner: RemediationPlanner | None = None,
        *,
        on_error: OnErrorMode = OnErrorMode.CONTINUE,
        output_dir_name: str = DEFAULT_OUTPUT_DIR_NAME,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        hardware_check: Callable[[], None] | None = None,
        on_file_analyzed: FileCallback | None = None,
        on_file_done: FileCallback | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            introspector: Probe collaborator.
            transcoder: Transcoder collaborator; None disables conversion.
            engine: Compliance engine; None disables analysis.
            classifier: Content classifier (defaults to ContentClassifier()).
            planner: Remediation planner (defaults to one built on the
                engine's standards).
            on_error: Continue past a failed file, or abort the batch.
            output_dir_name: Name of the output subdirectory.
            extensions: Video file extensions to pick up.
            hardware_check: Called once before converting; raises
                HardwareUnavailableError when encoding is unavailable.
            on_file_analyzed: Called after a file is probed and analyzed,
                before any transcode.
            on_file_done: Called once a file is finished (or failed).
            progress_callback: Receives transcode completion percentages.
        """
        self.introspector = introspector
        self.transcoder = transcoder
        self.engine = engine
        self.classifier = classifier or ContentClassifier()
        self.planner = planner
        if self.planner is None and engine is not None:
            self.planner = RemediationPlanner(engine.standards)
        self.on_error = on_error
        self.output_dir_name = output_dir_name
        self.extensions = tuple(extensions)
        self.hardware_check = hardware_check
        self.on_file_analyzed = on_file_analyzed
        self.on_file_done = on_file_done
        self.progress_callback = progress_callback

    @property
    def converting(self) -> bool:
        return self.transcoder is not None

    def run(self, directory: Path) -> BatchRunResult:
        """Process every video in ``directory``.

        Args:
            directory: Directory containing the videos.

        Returns:
            BatchRunResult with all summaries.

        Raises:
            InvalidPathError: If ``directory`` is not a directory.
            NoVideosFoundError: If it holds no videos.
            HardwareUnavailableError: If converting without GPU support.
            VSCError: The first per-file failure, when on_error is FAIL.
        """
        videos = validate_directory(directory, self.extensions)

        output_dir = None
        if self.converting:
            if self.hardware_check is not None:
                self.hardware_check()
            output_dir = create_output_dir(directory, self.output_dir_name)

        run = BatchRunResult(
            directory=directory,
            processing=ProcessingSummary(),
            batch=BatchProcessor(len(videos)),
            compliance=ComplianceSummary() if self.engine is not None else None,
            output_dir=output_dir,
        )

        logger.info("Processing %d file(s) in %s", len(videos), directory)
        for index, path in enumerate(videos, start=1):
            file_id = f"F{index:03d}"
            with asset_context(file_id, path):
                report = self._process_path(path, file_id, run)
            run.files.append(report)

        if output_dir is not None:
            run.report_path = write_conversion_report(output_dir, run.processing)

        tally = run.batch.tally()
        logger.info(
            "Finished %s: %d fixed, %d skipped, %d failed",
            directory,
            tally.fixed,
            tally.skipped,
            tally.failed,
        )
        return run

    def _process_path(
        self, path: Path, file_id: str, run: BatchRunResult
    ) -> FileReport:
        report = FileReport(path=path, file_id=file_id)
        try:
            report.metadata = self.introspector.get_metadata(path)
            run.processing.add_video(report.metadata)

            if self.engine is not None and run.compliance is not None:
                report.result = self.engine.analyze(report.metadata)
                run.compliance.add_result(report.result, path.name)
                logger.info(
                    "Compliance score %d/100 (%s)",
                    report.result.score,
                    "compliant" if report.result.is_compliant else "non-compliant",
                )

            if self.on_file_analyzed is not None:
                self.on_file_analyzed(report)

            if self.transcoder is not None and run.output_dir is not None:
                report.outcome, report.plan = process_single_file(
                    path,
                    report.metadata,
                    report.result,
                    run.output_dir,
                    self.transcoder,
                    classifier=self.classifier,
                    planner=self.planner,
                    progress_callback=self.progress_callback,
                )
                run.batch.process_file_result(report.outcome)
        except VSCError as e:
            logger.error("Failed to process %s: %s", path, e)
            report.error = str(e)
            report.outcome = FileOutcome.failed(path, str(e))
            run.batch.process_file_result(report.outcome)
            if self.on_file_done is not None:
                self.on_file_done(report)
            if self.on_error is OnErrorMode.FAIL:
                raise
            return report

        if self.on_file_done is not None:
            self.on_file_done(report)
        return report
