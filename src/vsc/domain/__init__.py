"""Domain types for compliance analysis."""

from vsc.domain.enums import (
    ContentType,
    OnErrorMode,
    ViolationCategory,
    ViolationSeverity,
)
from vsc.domain.models import ComplianceResult, ComplianceViolation, VideoMetadata

__all__ = [
    "ComplianceResult",
    "ComplianceViolation",
    "ContentType",
    "OnErrorMode",
    "VideoMetadata",
    "ViolationCategory",
    "ViolationSeverity",
]
