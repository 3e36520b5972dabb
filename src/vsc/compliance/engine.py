"""Compliance scoring against a standards catalog.

``ComplianceEngine.analyze`` evaluates a fixed sequence of rules. Each rule
contributes at most one violation and a score deduction; the score starts
at 100 and never drops below 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vsc.domain.enums import ViolationCategory, ViolationSeverity
from vsc.domain.models import ComplianceResult, ComplianceViolation, VideoMetadata
from vsc.standards.models import StandardsCatalog

logger = logging.getLogger(__name__)

MAX_SCORE = 100

# Score deductions per rule outcome
CODEC_PENALTY = 20
RESOLUTION_UNSUPPORTED_PENALTY = 25
RESOLUTION_ACCEPTABLE_PENALTY = 10
CONTAINER_PENALTY = 15
AUDIO_UNSUPPORTED_PENALTY = 15
AUDIO_ACCEPTABLE_PENALTY = 5
HDR_PENALTY = 30
COLOR_SPACE_PENALTY = 25

SDR_EXPECTED = "Rec. 709 (SDR)"
SDR_RECOMMENDATION = "Convert to SDR (Rec. 709) color space"

DEFAULT_RESIZE_TARGET = "1920x1080"

# Display names for codec recommendations
_CODEC_NAMES: dict[str, str] = {
    "h264": "H.264",
    "libx264": "H.264",
    "h264_nvenc": "H.264",
    "hevc": "H.265",
    "libx265": "H.265",
    "hevc_nvenc": "H.265",
}


@dataclass(frozen=True)
class RuleOutcome:
    """A single rule's finding."""

    violation: ComplianceViolation
    deduction: int
    recommendation: str | None = None


class ComplianceEngine:
    """Scores video metadata against a StandardsCatalog.

    The engine holds no mutable state; one instance may analyze any number
    of files, from any number of threads.
    """

    def __init__(self, standards: StandardsCatalog) -> None:
        self._standards = standards

    @property
    def standards(self) -> StandardsCatalog:
        """The catalog this engine scores against."""
        return self._standards

    def analyze(self, metadata: VideoMetadata) -> ComplianceResult:
        """Analyze one file's metadata.

        Args:
            metadata: Probed metadata of the file.

        Returns:
            ComplianceResult with violations in rule order.
        """
        outcomes = [
            outcome
            for outcome in (
                self._check_video_codec(metadata),
                self._check_resolution(metadata),
                self._check_container(metadata),
                self._check_audio_codec(metadata),
                self._check_color_space(metadata),
            )
            if outcome is not None
        ]

        score = MAX_SCORE
        for outcome in outcomes:
            score = max(0, score - outcome.deduction)

        violations = tuple(o.violation for o in outcomes)
        recommendations = tuple(
            o.recommendation for o in outcomes if o.recommendation is not None
        )
        is_compliant = not any(v.severity.blocks_compliance for v in violations)

        logger.debug(
            "Compliance analysis: score=%d compliant=%s violations=%d",
            score,
            is_compliant,
            len(violations),
            extra={"score": score, "violation_count": len(violations)},
        )

        return ComplianceResult(
            is_compliant=is_compliant,
            score=score,
            violations=violations,
            recommendations=recommendations,
        )

    def _check_video_codec(self, metadata: VideoMetadata) -> RuleOutcome | None:
        preferred = self._standards.video.preferred_codecs
        if metadata.codec in preferred:
            return None
        return RuleOutcome(
            ComplianceViolation(
                severity=ViolationSeverity.CRITICAL,
                category=ViolationCategory.VIDEO_CODEC,
                description="Video codec not in preferred list",
                current_value=metadata.codec,
                expected_value=", ".join(preferred),
            ),
            CODEC_PENALTY,
            f"Convert to {_join_or(_codec_names(preferred))} codec"
            " for optimal compatibility",
        )

    def _check_resolution(self, metadata: VideoMetadata) -> RuleOutcome | None:
        video = self._standards.video
        if metadata.resolution in video.preferred_resolutions:
            return None

        expected = f"Preferred: {', '.join(video.preferred_resolutions)}"
        if metadata.resolution in video.acceptable_resolutions:
            return RuleOutcome(
                ComplianceViolation(
                    severity=ViolationSeverity.WARNING,
                    category=ViolationCategory.RESOLUTION,
                    description="Resolution acceptable but not preferred",
                    current_value=metadata.resolution,
                    expected_value=expected,
                ),
                RESOLUTION_ACCEPTABLE_PENALTY,
            )
        return RuleOutcome(
            ComplianceViolation(
                severity=ViolationSeverity.CRITICAL,
                category=ViolationCategory.RESOLUTION,
                description="Resolution not supported",
                current_value=metadata.resolution,
                expected_value=expected,
            ),
            RESOLUTION_UNSUPPORTED_PENALTY,
            f"Resize to {_join_or(_resize_targets(video.preferred_resolutions))}"
            " for standard content",
        )

    def _check_container(self, metadata: VideoMetadata) -> RuleOutcome | None:
        video = self._standards.video
        if metadata.container.lower() not in video.unsupported_containers:
            return None
        return RuleOutcome(
            ComplianceViolation(
                severity=ViolationSeverity.CRITICAL,
                category=ViolationCategory.CONTAINER,
                description="Container format not supported",
                current_value=metadata.container,
                expected_value=", ".join(video.containers),
            ),
            CONTAINER_PENALTY,
            f"Convert to {_join_or(_upper(video.containers))} container",
        )

    def _check_audio_codec(self, metadata: VideoMetadata) -> RuleOutcome | None:
        audio = self._standards.audio
        if metadata.audio_codec in audio.preferred_codecs:
            return None

        if metadata.audio_codec in audio.acceptable_codecs:
            return RuleOutcome(
                ComplianceViolation(
                    severity=ViolationSeverity.INFO,
                    category=ViolationCategory.AUDIO_CODEC,
                    description="Audio codec is acceptable but not preferred",
                    current_value=metadata.audio_codec,
                    expected_value=f"Preferred: {', '.join(audio.preferred_codecs)}",
                ),
                AUDIO_ACCEPTABLE_PENALTY,
            )
        return RuleOutcome(
            ComplianceViolation(
                severity=ViolationSeverity.WARNING,
                category=ViolationCategory.AUDIO_CODEC,
                description="Audio codec not in preferred or acceptable list",
                current_value=metadata.audio_codec,
                expected_value=(
                    f"Preferred: {', '.join(audio.preferred_codecs)} | "
                    f"Acceptable: {', '.join(audio.acceptable_codecs)}"
                ),
            ),
            AUDIO_UNSUPPORTED_PENALTY,
            f"Convert audio to {_join_or(_upper(audio.preferred_codecs))}"
            " for highest quality",
        )

    def _check_color_space(self, metadata: VideoMetadata) -> RuleOutcome | None:
        quality = self._standards.quality
        color_space = metadata.color_space.lower()

        # HDR transfer functions take precedence over the generic list
        if _matches_any(color_space, quality.hdr_restrictions):
            return RuleOutcome(
                ComplianceViolation(
                    severity=ViolationSeverity.CRITICAL,
                    category=ViolationCategory.HDR,
                    description="HDR content not supported by delivery pipeline",
                    current_value=metadata.color_space,
                    expected_value=SDR_EXPECTED,
                ),
                HDR_PENALTY,
                SDR_RECOMMENDATION,
            )

        if _matches_any(color_space, quality.unsupported_color_spaces):
            return RuleOutcome(
                ComplianceViolation(
                    severity=ViolationSeverity.CRITICAL,
                    category=ViolationCategory.HDR,
                    description="Color space not supported by delivery pipeline",
                    current_value=metadata.color_space,
                    expected_value=SDR_EXPECTED,
                ),
                COLOR_SPACE_PENALTY,
                SDR_RECOMMENDATION,
            )
        return None


def _matches_any(value: str, terms: tuple[str, ...]) -> bool:
    """Case-insensitive substring match of any term within ``value``."""
    return any(term.lower() in value for term in terms)


def _join_or(items: list[str]) -> str:
    """Join as "a", "a or b" or "a, b or c"."""
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} or {items[-1]}"


def _upper(values: tuple[str, ...]) -> list[str]:
    return [v.upper() for v in values]


def _codec_names(codecs: tuple[str, ...]) -> list[str]:
    """Distinct display names, so h264 and libx264 both read as H.264."""
    names: list[str] = []
    for codec in codecs:
        name = _CODEC_NAMES.get(codec.lower(), codec.upper())
        if name not in names:
            names.append(name)
    return names


def _resize_targets(resolutions: tuple[str, ...]) -> list[str]:
    """Landscape preferred resolutions, largest first.

    Falls back to every preferred resolution when none is landscape, and
    to 1920x1080 when the list is empty.
    """
    if not resolutions:
        return [DEFAULT_RESIZE_TARGET]
    sizes = []
    for label in resolutions:
        width, _, height = label.partition("x")
        sizes.append((int(width), int(height), label))
    landscape = [s for s in sizes if s[0] >= s[1]] or sizes
    landscape.sort(key=lambda s: s[0] * s[1], reverse=True)
    return [label for _, _, label in landscape]
