"""Remediation planning and FFmpeg command building."""

from vsc.remediation.command import (
    build_audio_args,
    build_ffmpeg_args,
    build_ffmpeg_command,
    build_video_args,
)
from vsc.remediation.naming import OutputNamingPolicy, output_filename
from vsc.remediation.planner import (
    BASIC_VIDEO_ENCODER,
    CONTENT_TUNING,
    RemediationPlanner,
    build_basic_conversion_plan,
    should_use_hw_decode,
    target_resolution,
)
from vsc.remediation.types import (
    AudioDirective,
    EncoderTuning,
    RemediationPlan,
    VideoDirective,
)

__all__ = [
    "BASIC_VIDEO_ENCODER",
    "CONTENT_TUNING",
    "AudioDirective",
    "EncoderTuning",
    "OutputNamingPolicy",
    "RemediationPlan",
    "RemediationPlanner",
    "VideoDirective",
    "build_audio_args",
    "build_basic_conversion_plan",
    "build_ffmpeg_args",
    "build_ffmpeg_command",
    "build_video_args",
    "output_filename",
    "should_use_hw_decode",
    "target_resolution",
]
