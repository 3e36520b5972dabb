"""Media introspection (the probe side of the pipeline)."""

from vsc.introspector.ffprobe import FFprobeIntrospector
from vsc.introspector.interface import MediaIntrospectionError, MediaIntrospector
from vsc.introspector.parsers import parse_ffprobe_output, parse_frame_rate

__all__ = [
    "FFprobeIntrospector",
    "MediaIntrospectionError",
    "MediaIntrospector",
    "parse_ffprobe_output",
    "parse_frame_rate",
]
