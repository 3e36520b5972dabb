"""Output file naming for remediated files."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from vsc.domain.enums import ViolationCategory
from vsc.domain.models import ComplianceResult

DEFAULT_EXTENSION = "mp4"

# Suffix appended for each group of violation categories, in this order
_CATEGORY_SUFFIXES: tuple[tuple[frozenset[ViolationCategory], str], ...] = (
    (frozenset({ViolationCategory.RESOLUTION}), ".scaled"),
    (frozenset({ViolationCategory.VIDEO_CODEC}), ".h264"),
    (frozenset({ViolationCategory.AUDIO, ViolationCategory.AUDIO_CODEC}), ".aac"),
    (frozenset({ViolationCategory.COLOR_SPACE, ViolationCategory.HDR}), ".rec709"),
)


class OutputNamingPolicy(Enum):
    """How remediated files are named in the output directory."""

    PRESERVE = "preserve"  # keep the input file name
    SUFFIXED = "suffixed"  # <stem>.compliant[.scaled][.h264][.aac][.rec709].<ext>


def output_filename(
    input_path: Path,
    result: ComplianceResult | None,
    policy: OutputNamingPolicy = OutputNamingPolicy.PRESERVE,
) -> str:
    """Compute the output file name for a remediated file.

    Args:
        input_path: Source file path.
        result: Compliance result driving the suffixes (SUFFIXED only).
        policy: Naming policy.

    Returns:
        File name (no directory component).
    """
    if policy is OutputNamingPolicy.PRESERVE or result is None:
        return input_path.name

    suffix = ".compliant"
    for categories, marker in _CATEGORY_SUFFIXES:
        if result.has_any(*categories):
            suffix += marker

    ext = input_path.suffix.lstrip(".") or DEFAULT_EXTENSION
    return f"{input_path.stem}{suffix}.{ext}"
