"""Remediation plan data types.

A ``RemediationPlan`` is an abstract description of one transcode. It is
turned into concrete ffmpeg arguments by ``vsc.remediation.command``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from vsc.domain.enums import ContentType, ViolationCategory


@dataclass(frozen=True)
class EncoderTuning:
    """Content-specific encoder quality parameters."""

    preset: str
    cq: int | None = None
    extra_args: tuple[str, ...] = ()


@dataclass(frozen=True)
class VideoDirective:
    """What to do with the video stream.

    When ``copy`` is True every other field is ignored.
    """

    copy: bool = True
    encoder: str | None = None
    profile: str | None = None
    pixel_format: str | None = None
    tuning: EncoderTuning | None = None
    scale: tuple[int, int] | None = None  # (width, height)
    color_space: str | None = None  # forced primaries/transfer/matrix

    @classmethod
    def stream_copy(cls) -> VideoDirective:
        return cls(copy=True)


@dataclass(frozen=True)
class AudioDirective:
    """What to do with the audio stream.

    When ``copy`` is True every other field is ignored.
    """

    copy: bool = True
    encoder: str | None = None
    sample_rate: int | None = None
    channels: int | None = None
    bitrate_kbps: int | None = None

    @classmethod
    def stream_copy(cls) -> AudioDirective:
        return cls(copy=True)


@dataclass(frozen=True)
class RemediationPlan:
    """Ordered transcode directives for one file.

    Attributes:
        input_path: Source file.
        output_path: Destination file.
        content_type: Content type the tuning was chosen for.
        video: Video stream directive.
        audio: Audio stream directive.
        hwaccel: Hardware decode method (e.g. "cuda"), or None.
        container_flags: Muxer flags (e.g. "+faststart"), or empty.
        bitrate_hint_kbps: Informational target bitrate for the content type.
        reasons: Violation categories the plan addresses.
    """

    input_path: Path
    output_path: Path
    content_type: ContentType
    video: VideoDirective
    audio: AudioDirective
    hwaccel: str | None = None
    container_flags: tuple[str, ...] = ()
    bitrate_hint_kbps: int | None = None
    reasons: tuple[ViolationCategory, ...] = ()

    @property
    def needs_video_transcode(self) -> bool:
        return not self.video.copy

    @property
    def needs_audio_transcode(self) -> bool:
        return not self.audio.copy

    @property
    def uses_hw_decode(self) -> bool:
        return self.hwaccel is not None
