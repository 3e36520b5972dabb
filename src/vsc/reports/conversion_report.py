"""Persisted plain-text conversion report."""

from __future__ import annotations

import logging
import os
import tempfile
from collections import Counter
from pathlib import Path

from vsc.core.formatting import format_duration, format_file_size
from vsc.exceptions import IOFailureError
from vsc.summary.aggregator import ProcessingSummary

logger = logging.getLogger(__name__)

REPORT_FILENAME = "conversion_report.txt"


def _distribution(counts: Counter[str], verb: str) -> str:
    return "\n".join(
        f"  {count} videos {verb} {value}" for value, count in counts.items()
    )


def render_conversion_report(summary: ProcessingSummary) -> str:
    """Render the conversion report text.

    Args:
        summary: Totals of the processed files.

    Returns:
        Report content, newline-terminated.
    """
    return (
        "Conversion Report\n"
        "================\n"
        f"Total Videos: {summary.total_videos}\n"
        f"Total Duration: {format_duration(summary.total_duration)}\n"
        f"Total Size: {format_file_size(summary.total_size)}\n"
        "\n"
        "Video Codec Distribution:\n"
        f"{_distribution(summary.codecs, 'using')}\n"
        "Audio Codec Distribution:\n"
        f"{_distribution(summary.audio_codecs, 'using')}\n"
        "Resolution Distribution:\n"
        f"{_distribution(summary.resolutions, 'at')}\n"
    )


def _atomic_write_text(path: Path, content: str) -> None:
    """Write content via a temp file in the same directory, then rename."""
    fd, temp_path_str = tempfile.mkstemp(
        suffix=path.suffix, dir=path.parent, text=True
    )
    temp_path = Path(temp_path_str)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        temp_path.replace(path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def write_conversion_report(directory: Path, summary: ProcessingSummary) -> Path:
    """Write ``conversion_report.txt`` into ``directory``.

    Args:
        directory: Output directory (created if missing).
        summary: Totals of the processed files.

    Returns:
        Path of the written report.

    Raises:
        IOFailureError: If the report cannot be written.
    """
    report_path = directory / REPORT_FILENAME
    try:
        directory.mkdir(parents=True, exist_ok=True)
        _atomic_write_text(report_path, render_conversion_report(summary))
    except OSError as e:
        raise IOFailureError(report_path, str(e)) from e

    logger.info("Wrote conversion report to %s", report_path)
    return report_path
