"""FFmpeg command building for remediation plans."""

from __future__ import annotations

from pathlib import Path

from vsc.remediation.types import AudioDirective, RemediationPlan, VideoDirective


def build_video_args(video: VideoDirective) -> list[str]:
    """Build the video stream arguments of a plan.

    Args:
        video: Video directive.

    Returns:
        List of FFmpeg arguments.
    """
    if video.copy:
        return ["-c:v", "copy"]

    args = ["-c:v", video.encoder or "copy"]
    if video.profile:
        args.extend(["-profile:v", video.profile])
    if video.pixel_format:
        args.extend(["-pix_fmt", video.pixel_format])

    if video.tuning is not None:
        args.extend(["-preset", video.tuning.preset])
        if video.tuning.cq is not None:
            args.extend(["-cq", str(video.tuning.cq)])
        args.extend(video.tuning.extra_args)

    if video.scale is not None:
        width, height = video.scale
        args.extend(["-vf", f"scale={width}:{height}"])

    if video.color_space:
        args.extend(
            [
                "-colorspace",
                video.color_space,
                "-color_primaries",
                video.color_space,
                "-color_trc",
                video.color_space,
            ]
        )
    return args


def build_audio_args(audio: AudioDirective) -> list[str]:
    """Build the audio stream arguments of a plan.

    Args:
        audio: Audio directive.

    Returns:
        List of FFmpeg arguments.
    """
    if audio.copy:
        return ["-c:a", "copy"]

    args = ["-c:a", audio.encoder or "copy"]
    if audio.bitrate_kbps is not None:
        args.extend(["-b:a", f"{audio.bitrate_kbps}k"])
    if audio.sample_rate is not None:
        args.extend(["-ar", str(audio.sample_rate)])
    if audio.channels is not None:
        args.extend(["-ac", str(audio.channels)])
    return args


def build_ffmpeg_args(plan: RemediationPlan) -> list[str]:
    """Build the ordered FFmpeg argument list for a plan.

    Input options (hardware decode) precede ``-i``; ``-y`` and the output
    path come last.

    Args:
        plan: Remediation plan.

    Returns:
        List of arguments, without the ffmpeg executable.
    """
    args: list[str] = []
    if plan.uses_hw_decode:
        args.extend(["-hwaccel", plan.hwaccel])
    args.extend(["-i", str(plan.input_path)])

    args.extend(build_video_args(plan.video))
    args.extend(build_audio_args(plan.audio))

    for flag in plan.container_flags:
        args.extend(["-movflags", flag])

    args.extend(["-y", str(plan.output_path)])
    return args


def build_ffmpeg_command(
    plan: RemediationPlan, ffmpeg_path: Path | str = "ffmpeg"
) -> list[str]:
    """Build the full FFmpeg command line, executable first."""
    return [str(ffmpeg_path), "-hide_banner", *build_ffmpeg_args(plan)]
