"""Text and JSON rendering of compliance results and batch summaries."""

from __future__ import annotations

from typing import Any

from vsc.core.formatting import format_bitrate, format_duration, format_file_size
from vsc.domain.models import ComplianceResult, VideoMetadata
from vsc.remediation.types import RemediationPlan
from vsc.summary.aggregator import (
    BatchProcessor,
    ComplianceSummary,
    ProcessingSummary,
)

# Fixed files listed by name in the batch report
FIXED_FILES_SHOWN = 5


def format_metadata(metadata: VideoMetadata, verbose: bool = False) -> list[str]:
    """Render probed metadata as indented lines.

    Args:
        metadata: Metadata to render.
        verbose: Include every field, not only the runtime.
    """
    lines = [f"  Runtime: {format_duration(metadata.duration)}"]
    if verbose:
        lines.extend(
            [
                f"  Codec: {metadata.codec}",
                f"  Resolution: {metadata.resolution}",
                f"  Bitrate: {format_bitrate(metadata.bitrate)}",
                f"  Size: {format_file_size(metadata.size)}",
                f"  Frame Rate: {metadata.fps:.1f} fps",
                f"  Audio: {metadata.audio_codec}",
                f"  Container: {metadata.container}",
                f"  Profile: {metadata.profile}",
                f"  Color Space: {metadata.color_space}",
            ]
        )
    return lines


def format_compliance_result(result: ComplianceResult) -> str:
    """Render one file's compliance analysis."""
    status = "COMPLIANT" if result.is_compliant else "NON-COMPLIANT"
    lines = [
        "Compliance Analysis",
        "=" * 60,
        f"Status: {status}",
        f"Compliance Score: {result.score}/100",
    ]

    if result.violations:
        lines.append("")
        lines.append("Violations Found:")
        for i, violation in enumerate(result.violations, start=1):
            lines.append(
                f"{i}. [{violation.severity.label}] {violation.description}"
            )
            lines.append(f"   Current: {violation.current_value}")
            lines.append(f"   Expected: {violation.expected_value}")

    if result.recommendations:
        lines.append("")
        lines.append("Recommendations:")
        for i, recommendation in enumerate(result.recommendations, start=1):
            lines.append(f"{i}. {recommendation}")

    lines.append("=" * 60)
    return "\n".join(lines)


def format_compliance_summary(summary: ComplianceSummary) -> str:
    """Render batch compliance statistics."""
    rate = summary.compliance_rate
    non_compliant_rate = 100.0 - rate if summary.total_files else 0.0
    lines = [
        "Compliance Summary",
        "=" * 60,
        f"Total Files Analyzed: {summary.total_files}",
        f"Compliant Files: {summary.compliant_files} ({rate:.1f}%)",
        f"Non-Compliant Files: {summary.non_compliant_files} "
        f"({non_compliant_rate:.1f}%)",
        f"Average Compliance Score: {summary.average_score:.1f}/100",
    ]

    if summary.total_violations:
        lines.append("")
        lines.append("Violation Breakdown:")
        if summary.critical_violations:
            lines.append(f"  Critical: {summary.critical_violations}")
        if summary.warning_violations:
            lines.append(f"  Warnings: {summary.warning_violations}")
        if summary.info_violations:
            lines.append(f"  Info: {summary.info_violations}")

    # A single file's score is already shown in its own analysis
    if summary.total_files > 1:
        attention = summary.needs_attention()
        if attention:
            lines.append("")
            lines.append("Files Needing Attention:")
            for name, score in attention:
                lines.append(f"  {name} - Score: {score}/100")

    lines.append("=" * 60)
    return "\n".join(lines)


def format_batch_report(batch: BatchProcessor) -> str:
    """Render the fixed/skipped/failed tally of a batch."""
    tally = batch.tally()
    lines = [
        "Batch Processing Report",
        "=" * 65,
        f"Total Files: {tally.total_files}",
        f"Files Fixed: {tally.fixed} ({tally.fixed_rate:.1f}%)",
        f"Files Skipped: {tally.skipped} ({tally.skipped_rate:.1f}%)",
    ]

    if batch.failed_files:
        lines.append(f"Files Failed: {tally.failed} ({tally.failed_rate:.1f}%)")
        lines.append("")
        lines.append("Failed Files:")
        for path, error in batch.failed_files:
            lines.append(f"  {path} - {error}")

    if batch.fixed_files:
        lines.append("")
        lines.append("Successfully Fixed Files:")
        for path in batch.fixed_files[:FIXED_FILES_SHOWN]:
            lines.append(f"  {path}")
        remaining = len(batch.fixed_files) - FIXED_FILES_SHOWN
        if remaining > 0:
            lines.append(f"  ... and {remaining} more")

    lines.append("=" * 65)
    return "\n".join(lines)


def format_processing_summary(summary: ProcessingSummary) -> str:
    """Render totals and distributions of the probed files.

    Distribution sections with no entries are omitted.
    """
    lines = [
        "Processing Summary",
        "=" * 50,
        f"Total Videos: {summary.total_videos}",
        f"Total Duration: {format_duration(summary.total_duration)}",
        f"Total Size: {format_file_size(summary.total_size)}",
    ]

    sections = (
        ("Video Codec Distribution:", summary.codecs, "using"),
        ("Audio Codec Distribution:", summary.audio_codecs, "using"),
        ("Resolution Distribution:", summary.resolutions, "at"),
    )
    for title, counts, verb in sections:
        if counts:
            lines.append("")
            lines.append(title)
            for value, count in counts.items():
                lines.append(f"  {count} videos {verb} {value}")

    lines.append("=" * 50)
    return "\n".join(lines)


def format_plan(plan: RemediationPlan) -> str:
    """Render a remediation plan summary."""
    lines = [
        f"Input:        {plan.input_path}",
        f"Output:       {plan.output_path}",
        f"Content Type: {plan.content_type.name}",
        f"Video:        {'re-encode' if plan.needs_video_transcode else 'copy'}",
        f"Audio:        {'re-encode' if plan.needs_audio_transcode else 'copy'}",
    ]
    if plan.uses_hw_decode:
        lines.append(f"HW Decode:    {plan.hwaccel}")
    if plan.bitrate_hint_kbps:
        lines.append(f"Bitrate Hint: {plan.bitrate_hint_kbps} kbps")
    return "\n".join(lines)


def metadata_to_dict(metadata: VideoMetadata) -> dict[str, Any]:
    return {
        "codec": metadata.codec,
        "resolution": metadata.resolution,
        "duration": metadata.duration,
        "bitrate": metadata.bitrate,
        "size": metadata.size,
        "fps": metadata.fps,
        "audio_codec": metadata.audio_codec,
        "audio_sample_rate": metadata.audio_sample_rate,
        "audio_bitrate": metadata.audio_bitrate,
        "container": metadata.container,
        "profile": metadata.profile,
        "color_space": metadata.color_space,
    }


def result_to_dict(result: ComplianceResult) -> dict[str, Any]:
    """Serialize a ComplianceResult for JSON output."""
    return {
        "is_compliant": result.is_compliant,
        "score": result.score,
        "violations": [
            {
                "severity": v.severity.value,
                "category": v.category.value,
                "description": v.description,
                "current_value": v.current_value,
                "expected_value": v.expected_value,
            }
            for v in result.violations
        ],
        "recommendations": list(result.recommendations),
    }
