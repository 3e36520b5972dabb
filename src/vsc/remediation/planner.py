"""Remediation planning.

Turns a non-compliant ComplianceResult into a RemediationPlan: which
streams to re-encode, with which content-tuned encoder settings, and where
to write the result. Planning is pure and never fails.
"""

from __future__ import annotations

import logging
from pathlib import Path

from vsc.compliance.classifier import optimal_bitrate_kbps
from vsc.domain.enums import ContentType, ViolationCategory
from vsc.domain.models import ComplianceResult, VideoMetadata
from vsc.remediation.naming import OutputNamingPolicy, output_filename
from vsc.remediation.types import (
    AudioDirective,
    EncoderTuning,
    RemediationPlan,
    VideoDirective,
)
from vsc.standards.models import StandardsCatalog

logger = logging.getLogger(__name__)

VIDEO_FIX_CATEGORIES = frozenset(
    {
        ViolationCategory.VIDEO_CODEC,
        ViolationCategory.RESOLUTION,
        ViolationCategory.COLOR_SPACE,
        ViolationCategory.HDR,
    }
)
AUDIO_FIX_CATEGORIES = frozenset(
    {ViolationCategory.AUDIO, ViolationCategory.AUDIO_CODEC}
)
COLOR_FIX_CATEGORIES = frozenset({ViolationCategory.COLOR_SPACE, ViolationCategory.HDR})
HW_DECODE_CATEGORIES = frozenset(
    {
        ViolationCategory.RESOLUTION,
        ViolationCategory.COLOR_SPACE,
        ViolationCategory.HDR,
    }
)

# Decode on the GPU once this many violations need fixing
HW_DECODE_VIOLATION_THRESHOLD = 2

DEFAULT_TARGET_RESOLUTION = (1920, 1080)
_RESOLUTION_TARGETS: tuple[tuple[str, tuple[int, int]], ...] = (
    ("1920x1080", (1920, 1080)),
    ("1280x720", (1280, 720)),
)

FASTSTART_FLAGS = ("+faststart",)

_SCREEN_TUNING = EncoderTuning(
    preset="p7",
    cq=15,
    extra_args=("-temporal-aq", "1", "-rc-lookahead", "32"),
)

CONTENT_TUNING: dict[ContentType, EncoderTuning] = {
    ContentType.SCREEN_CAPTURE: _SCREEN_TUNING,
    ContentType.PRESENTATION: _SCREEN_TUNING,
    ContentType.LIVE_ACTION: EncoderTuning(
        preset="p5",
        cq=18,
        extra_args=("-spatial-aq", "1", "-temporal-aq", "1"),
    ),
    ContentType.ANIMATION: EncoderTuning(
        preset="p6",
        cq=16,
        extra_args=("-aq-mode", "3"),
    ),
    ContentType.UNKNOWN: EncoderTuning(preset="p6", cq=18),
}

# Settings for conversion without compliance analysis
BASIC_VIDEO_ENCODER = "h264_nvenc"
BASIC_TUNING = EncoderTuning(preset="p7")
BASIC_AUDIO_ENCODER = "aac"
BASIC_AUDIO_BITRATE_KBPS = 320


def target_resolution(result: ComplianceResult) -> tuple[int, int]:
    """Pick the scale target from the first matching resolution violation.

    Args:
        result: Compliance result containing a resolution violation.

    Returns:
        (width, height), 1920x1080 when nothing more specific is recorded.
    """
    for violation in result.violations:
        if violation.category is not ViolationCategory.RESOLUTION:
            continue
        for label, dimensions in _RESOLUTION_TARGETS:
            if label in violation.expected_value:
                return dimensions
    return DEFAULT_TARGET_RESOLUTION


def should_use_hw_decode(result: ComplianceResult) -> bool:
    """Whether decoding on the GPU is worthwhile for this remediation."""
    return (
        len(result.violations) > HW_DECODE_VIOLATION_THRESHOLD
        or result.has_any(*HW_DECODE_CATEGORIES)
    )


class RemediationPlanner:
    """Builds RemediationPlans from compliance results."""

    def __init__(
        self,
        standards: StandardsCatalog,
        naming: OutputNamingPolicy = OutputNamingPolicy.PRESERVE,
    ) -> None:
        self._standards = standards
        self._naming = naming

    @property
    def naming(self) -> OutputNamingPolicy:
        return self._naming

    def plan(
        self,
        result: ComplianceResult,
        content_type: ContentType,
        metadata: VideoMetadata,
        input_path: Path,
        output_dir: Path,
    ) -> RemediationPlan:
        """Build the transcode plan for a non-compliant file.

        Args:
            result: Compliance result of the file (expected non-compliant).
            content_type: Classified content type, used for encoder tuning.
            metadata: Probed metadata of the file.
            input_path: Source file.
            output_dir: Directory the remediated file is written to.

        Returns:
            RemediationPlan describing the transcode.
        """
        # An empty hwaccel in the catalog disables GPU decode
        hwaccel = self._standards.remediation.hwaccel or None

        plan = RemediationPlan(
            input_path=input_path,
            output_path=output_dir / output_filename(input_path, result, self._naming),
            content_type=content_type,
            video=self._video_directive(result, content_type),
            audio=self._audio_directive(result),
            hwaccel=hwaccel if should_use_hw_decode(result) else None,
            container_flags=FASTSTART_FLAGS,
            bitrate_hint_kbps=optimal_bitrate_kbps(content_type, metadata.resolution),
            reasons=tuple(dict.fromkeys(v.category for v in result.violations)),
        )

        logger.debug(
            "Planned remediation for %s: video=%s audio=%s hwaccel=%s",
            input_path.name,
            "encode" if plan.needs_video_transcode else "copy",
            "encode" if plan.needs_audio_transcode else "copy",
            plan.hwaccel if plan.uses_hw_decode else "none",
        )
        return plan

    def _video_directive(
        self, result: ComplianceResult, content_type: ContentType
    ) -> VideoDirective:
        if not result.has_any(*VIDEO_FIX_CATEGORIES):
            return VideoDirective.stream_copy()

        targets = self._standards.remediation
        scale = None
        if result.has_any(ViolationCategory.RESOLUTION):
            scale = target_resolution(result)

        color_space = None
        if result.has_any(*COLOR_FIX_CATEGORIES):
            color_space = targets.color_space

        return VideoDirective(
            copy=False,
            encoder=targets.video_encoder,
            profile=targets.video_profile,
            pixel_format=targets.pixel_format,
            tuning=CONTENT_TUNING[content_type],
            scale=scale,
            color_space=color_space,
        )

    def _audio_directive(self, result: ComplianceResult) -> AudioDirective:
        if not result.has_any(*AUDIO_FIX_CATEGORIES):
            return AudioDirective.stream_copy()

        targets = self._standards.remediation
        return AudioDirective(
            copy=False,
            encoder=targets.audio_encoder,
            sample_rate=targets.audio_sample_rate,
            channels=targets.audio_channels,
        )


def build_basic_conversion_plan(input_path: Path, output_dir: Path) -> RemediationPlan:
    """Plan a plain H.264/AAC conversion with no compliance analysis.

    Args:
        input_path: Source file.
        output_dir: Directory the converted file is written to.

    Returns:
        RemediationPlan that keeps the input file name.
    """
    return RemediationPlan(
        input_path=input_path,
        output_path=output_dir / input_path.name,
        content_type=ContentType.UNKNOWN,
        video=VideoDirective(
            copy=False,
            encoder=BASIC_VIDEO_ENCODER,
            tuning=BASIC_TUNING,
        ),
        audio=AudioDirective(
            copy=False,
            encoder=BASIC_AUDIO_ENCODER,
            bitrate_kbps=BASIC_AUDIO_BITRATE_KBPS,
        ),
    )
