"""Pure parsing functions for ffprobe JSON output.

Every numeric field arrives as a string (or is absent) and is parsed
defensively: anything unparseable becomes 0.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from vsc.domain.models import VideoMetadata
from vsc.introspector.interface import MediaIntrospectionError

UNKNOWN = "unknown"
NO_AUDIO = "none"


def parse_int(value: Any) -> int:
    """Parse an integer field, returning 0 if missing or invalid."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


def parse_float(value: Any) -> float:
    """Parse a float field, returning 0.0 if missing or invalid."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_frame_rate(value: Any) -> float:
    """Parse an ffprobe rational frame rate such as "30000/1001".

    Args:
        value: Frame rate string ("num/den") or None.

    Returns:
        Frames per second, 0.0 when missing, malformed or den is 0.
    """
    if not isinstance(value, str) or "/" not in value:
        return 0.0
    num_str, _, den_str = value.partition("/")
    try:
        num = float(num_str)
        den = float(den_str)
    except ValueError:
        return 0.0
    if den == 0:
        return 0.0
    return num / den


def _str_field(stream: dict[str, Any] | None, key: str, default: str) -> str:
    if stream is None:
        return default
    value = stream.get(key)
    return value if isinstance(value, str) else default


def _find_stream(streams: list[dict[str, Any]], codec_type: str) -> dict | None:
    for stream in streams:
        if stream.get("codec_type") == codec_type:
            return stream
    return None


def container_from_path(path: Path) -> str:
    """Container format derived from the lower-cased file extension."""
    return path.suffix.lstrip(".").lower() or UNKNOWN


def parse_ffprobe_output(path: Path, data: dict[str, Any]) -> VideoMetadata:
    """Convert ffprobe JSON into VideoMetadata.

    Args:
        path: Path of the probed file (used for the container).
        data: Parsed ffprobe JSON (``-show_format -show_streams``).

    Returns:
        VideoMetadata for the first video and first audio stream.

    Raises:
        MediaIntrospectionError: If there is no stream list or no video
            stream.
    """
    streams = data.get("streams")
    if not isinstance(streams, list):
        raise MediaIntrospectionError(f"No streams found in {path}")

    video = _find_stream(streams, "video")
    if video is None:
        raise MediaIntrospectionError(f"No video stream found in {path}")
    audio = _find_stream(streams, "audio")

    fmt = data.get("format") or {}

    return VideoMetadata(
        codec=_str_field(video, "codec_name", UNKNOWN),
        resolution=f"{parse_int(video.get('width'))}x{parse_int(video.get('height'))}",
        duration=parse_float(fmt.get("duration")),
        bitrate=parse_int(fmt.get("bit_rate")),
        size=parse_int(fmt.get("size")),
        fps=parse_frame_rate(video.get("r_frame_rate")),
        audio_codec=_str_field(audio, "codec_name", NO_AUDIO),
        audio_sample_rate=parse_int(audio.get("sample_rate")) if audio else 0,
        audio_bitrate=parse_int(audio.get("bit_rate")) if audio else 0,
        container=container_from_path(path),
        profile=_str_field(video, "profile", UNKNOWN).lower(),
        color_space=_str_field(video, "color_space", UNKNOWN).lower(),
    )
