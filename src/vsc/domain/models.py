"""Immutable value types shared by the compliance pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from vsc.domain.enums import ViolationCategory, ViolationSeverity


@dataclass(frozen=True)
class VideoMetadata:
    """Probed technical facts about one media file.

    Missing string fields are ``"unknown"`` (``"none"`` for the audio codec
    of a file without audio); missing numbers are 0.
    """

    codec: str
    resolution: str  # "WxH"
    duration: float = 0.0  # seconds
    bitrate: int = 0  # bits per second
    size: int = 0  # bytes
    fps: float = 0.0
    audio_codec: str = "none"
    audio_sample_rate: int = 0
    audio_bitrate: int = 0
    container: str = "unknown"  # lower-cased file extension
    profile: str = "unknown"
    color_space: str = "unknown"

    @property
    def width(self) -> int:
        """Horizontal resolution parsed from ``resolution`` (0 if malformed)."""
        return _dimension(self.resolution, 0)

    @property
    def height(self) -> int:
        """Vertical resolution parsed from ``resolution`` (0 if malformed)."""
        return _dimension(self.resolution, 1)


def _dimension(resolution: str, index: int) -> int:
    parts = resolution.lower().split("x")
    if len(parts) != 2:
        return 0
    try:
        return int(parts[index])
    except ValueError:
        return 0


@dataclass(frozen=True)
class ComplianceViolation:
    """One detected deviation from the standards catalog."""

    severity: ViolationSeverity
    category: ViolationCategory
    description: str
    current_value: str
    expected_value: str


@dataclass(frozen=True)
class ComplianceResult:
    """Outcome of analyzing one file.

    Attributes:
        is_compliant: True iff no violation blocks compliance.
        score: Integer in [0, 100]; 100 means fully compliant.
        violations: Violations in rule evaluation order.
        recommendations: Human-readable remediation hints.
    """

    is_compliant: bool
    score: int
    violations: tuple[ComplianceViolation, ...] = ()
    recommendations: tuple[str, ...] = ()
    categories: frozenset[ViolationCategory] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise ValueError(f"score must be in [0, 100], got {self.score}")
        object.__setattr__(
            self, "categories", frozenset(v.category for v in self.violations)
        )

    def has_any(self, *categories: ViolationCategory) -> bool:
        """Return True if any violation belongs to one of ``categories``."""
        return not self.categories.isdisjoint(categories)

    def count_by_severity(self, severity: ViolationSeverity) -> int:
        """Number of violations with the given severity."""
        return sum(1 for v in self.violations if v.severity is severity)
