"""Standards catalog data model.

A ``StandardsCatalog`` is an immutable value: every collection is a tuple or
a read-only mapping, so one instance can be shared by any number of
analyses without copying.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def _frozen_mapping(value: Mapping) -> Mapping:
    return MappingProxyType(dict(value))


@dataclass(frozen=True)
class BitrateRange:
    """Target bitrate window for a class of content."""

    min_kbps: int
    max_kbps: int
    content_type: str

    def __post_init__(self) -> None:
        if self.min_kbps < 0 or self.max_kbps < self.min_kbps:
            raise ValueError(
                f"invalid bitrate range {self.min_kbps}-{self.max_kbps} kbps"
            )


@dataclass(frozen=True)
class VideoStandards:
    """Video stream and container requirements."""

    preferred_resolutions: tuple[str, ...]
    acceptable_resolutions: tuple[str, ...]
    preferred_codecs: tuple[str, ...]
    preferred_frame_rates: tuple[float, ...]
    bitrate_ranges: Mapping[str, BitrateRange]
    containers: tuple[str, ...]
    unsupported_containers: tuple[str, ...]
    profiles: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.preferred_codecs:
            raise ValueError("preferred_codecs must not be empty")
        object.__setattr__(
            self, "bitrate_ranges", _frozen_mapping(self.bitrate_ranges)
        )


@dataclass(frozen=True)
class AudioStandards:
    """Audio stream requirements."""

    preferred_codecs: tuple[str, ...]
    acceptable_codecs: tuple[str, ...]
    sample_rates: tuple[int, ...]
    bit_depths: tuple[int, ...]
    bitrate_ranges: Mapping[str, int]  # codec -> max kbps
    channels: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "bitrate_ranges", _frozen_mapping(self.bitrate_ranges)
        )


@dataclass(frozen=True)
class QualityStandards:
    """Color and encoding quality requirements."""

    color_spaces: tuple[str, ...]
    unsupported_color_spaces: tuple[str, ...]
    keyframe_interval_min: int
    chroma_subsampling: tuple[str, ...]
    hdr_restrictions: tuple[str, ...]


@dataclass(frozen=True)
class RemediationTargets:
    """Encoder settings used when a file must be re-encoded."""

    video_encoder: str = "h264_nvenc"
    pixel_format: str = "yuv420p"
    video_profile: str = "high"
    audio_encoder: str = "pcm_s24le"
    audio_sample_rate: int = 48000
    audio_channels: int = 2
    color_space: str = "bt709"
    hwaccel: str = "cuda"


@dataclass(frozen=True)
class StandardsCatalog:
    """Complete set of delivery standards."""

    video: VideoStandards
    audio: AudioStandards
    quality: QualityStandards
    remediation: RemediationTargets = field(default_factory=RemediationTargets)

    @property
    def primary_codec(self) -> str:
        """First preferred video codec."""
        return self.video.preferred_codecs[0]
