"""Batch statistics over per-file results.

Three accumulators are provided:

- ``ComplianceSummary`` folds ComplianceResults into rates, a running mean
  score, per-severity counts and a worst-N ranking.
- ``BatchProcessor`` records whether each file was fixed, skipped or failed.
- ``ProcessingSummary`` totals probed metadata (size, duration, codec and
  resolution distributions) for the conversion report.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from vsc.domain.enums import ViolationSeverity
from vsc.domain.models import ComplianceResult, VideoMetadata

PERFECT_SCORE = 100


def _percent(part: int, whole: int) -> float:
    return (part / whole) * 100.0 if whole > 0 else 0.0


@dataclass
class ComplianceSummary:
    """Running compliance statistics for a batch."""

    total_files: int = 0
    compliant_files: int = 0
    non_compliant_files: int = 0
    average_score: float = 0.0
    critical_violations: int = 0
    warning_violations: int = 0
    info_violations: int = 0
    files_by_score: list[tuple[str, int]] = field(default_factory=list)

    def add_result(self, result: ComplianceResult, name: str) -> None:
        """Fold one file's result into the summary.

        The mean is updated incrementally so the value matches
        ``(mean * (n - 1) + score) / n`` at every step.

        Args:
            result: Compliance result of the file.
            name: Display name of the file.
        """
        self.total_files += 1
        n = self.total_files
        self.average_score = (self.average_score * (n - 1) + result.score) / n
        self.files_by_score.append((name, result.score))

        if result.is_compliant:
            self.compliant_files += 1
        else:
            self.non_compliant_files += 1

        self.critical_violations += result.count_by_severity(
            ViolationSeverity.CRITICAL
        )
        self.warning_violations += result.count_by_severity(ViolationSeverity.WARNING)
        self.info_violations += result.count_by_severity(ViolationSeverity.INFO)

    @property
    def compliance_rate(self) -> float:
        """Percentage of compliant files (0.0 when empty)."""
        return _percent(self.compliant_files, self.total_files)

    @property
    def total_violations(self) -> int:
        return self.critical_violations + self.warning_violations + self.info_violations

    def worst(self, n: int = 3) -> list[tuple[str, int]]:
        """Lowest-scoring files, ascending; ties keep insertion order."""
        return sorted(self.files_by_score, key=lambda item: item[1])[:n]

    def needs_attention(self, n: int = 3) -> list[tuple[str, int]]:
        """The worst ``n`` files, minus any with a perfect score."""
        return [item for item in self.worst(n) if item[1] < PERFECT_SCORE]


class FileStatus(Enum):
    """Batch outcome for one file."""

    FIXED = "fixed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one file in a batch.

    Attributes:
        path: Source file.
        status: FIXED, SKIPPED or FAILED.
        output_path: Remediated file (FIXED only).
        error: Failure description (FAILED only).
    """

    path: Path
    status: FileStatus
    output_path: Path | None = None
    error: str | None = None

    @classmethod
    def fixed(cls, path: Path, output_path: Path) -> FileOutcome:
        return cls(path, FileStatus.FIXED, output_path=output_path)

    @classmethod
    def skipped(cls, path: Path) -> FileOutcome:
        return cls(path, FileStatus.SKIPPED)

    @classmethod
    def failed(cls, path: Path, error: str) -> FileOutcome:
        return cls(path, FileStatus.FAILED, error=error)


@dataclass(frozen=True)
class BatchTally:
    """Final counts and rates of a batch."""

    total_files: int
    processed_files: int
    fixed: int
    skipped: int
    failed: int

    @property
    def fixed_rate(self) -> float:
        return _percent(self.fixed, self.total_files)

    @property
    def skipped_rate(self) -> float:
        return _percent(self.skipped, self.total_files)

    @property
    def failed_rate(self) -> float:
        return _percent(self.failed, self.total_files)


class BatchProcessor:
    """Tracks fixed, skipped and failed files across a batch."""

    def __init__(self, total_files: int) -> None:
        self.total_files = total_files
        self.processed_files = 0
        self.fixed_files: list[Path] = []
        self.skipped_files: list[Path] = []
        self.failed_files: list[tuple[Path, str]] = []

    def record_fixed(self, path: Path, output_path: Path) -> None:
        """Record a file that was remediated into ``output_path``."""
        self.processed_files += 1
        self.fixed_files.append(output_path)

    def record_skipped(self, path: Path) -> None:
        """Record a file that needed no remediation."""
        self.processed_files += 1
        self.skipped_files.append(path)

    def record_failure(self, path: Path, error: str) -> None:
        """Record a file whose probe or transcode failed."""
        self.processed_files += 1
        self.failed_files.append((path, error))

    def process_file_result(self, outcome: FileOutcome) -> None:
        """Record a FileOutcome under its status."""
        if outcome.status is FileStatus.FIXED:
            self.record_fixed(outcome.path, outcome.output_path or outcome.path)
        elif outcome.status is FileStatus.SKIPPED:
            self.record_skipped(outcome.path)
        else:
            self.record_failure(outcome.path, outcome.error or "unknown error")

    @property
    def has_failures(self) -> bool:
        return bool(self.failed_files)

    def tally(self) -> BatchTally:
        return BatchTally(
            total_files=self.total_files,
            processed_files=self.processed_files,
            fixed=len(self.fixed_files),
            skipped=len(self.skipped_files),
            failed=len(self.failed_files),
        )


@dataclass
class ProcessingSummary:
    """Totals and distributions of probed metadata."""

    total_videos: int = 0
    total_duration: float = 0.0
    total_size: int = 0
    codecs: Counter[str] = field(default_factory=Counter)
    audio_codecs: Counter[str] = field(default_factory=Counter)
    resolutions: Counter[str] = field(default_factory=Counter)

    def add_video(self, metadata: VideoMetadata) -> None:
        """Fold one file's metadata into the totals."""
        self.total_videos += 1
        self.total_duration += metadata.duration
        self.total_size += metadata.size
        self.codecs[metadata.codec] += 1
        self.audio_codecs[metadata.audio_codec] += 1
        self.resolutions[metadata.resolution] += 1
