"""Delivery standards catalog and loaders."""

from vsc.standards.loader import (
    dump_standards,
    load_default_catalog,
    load_standards,
    load_standards_from_dict,
)
from vsc.standards.models import (
    AudioStandards,
    BitrateRange,
    QualityStandards,
    RemediationTargets,
    StandardsCatalog,
    VideoStandards,
)

__all__ = [
    "AudioStandards",
    "BitrateRange",
    "QualityStandards",
    "RemediationTargets",
    "StandardsCatalog",
    "VideoStandards",
    "dump_standards",
    "load_default_catalog",
    "load_standards",
    "load_standards_from_dict",
]
