"""Batch aggregation of compliance and processing results."""

from vsc.summary.aggregator import (
    BatchProcessor,
    BatchTally,
    ComplianceSummary,
    FileOutcome,
    FileStatus,
    ProcessingSummary,
)

__all__ = [
    "BatchProcessor",
    "BatchTally",
    "ComplianceSummary",
    "FileOutcome",
    "FileStatus",
    "ProcessingSummary",
]
