"""Compliance analysis: scoring and content classification."""

from vsc.compliance.classifier import ContentClassifier, optimal_bitrate_kbps
from vsc.compliance.engine import ComplianceEngine

__all__ = [
    "ComplianceEngine",
    "ContentClassifier",
    "optimal_bitrate_kbps",
]
