"""Transcode execution (the ffmpeg side of the pipeline)."""

from vsc.executor.ffmpeg import FFmpegTranscoder
from vsc.executor.interface import ProgressCallback, TranscodeResult, Transcoder
from vsc.executor.progress import TranscodeProgress, parse_progress_time

__all__ = [
    "FFmpegTranscoder",
    "ProgressCallback",
    "TranscodeProgress",
    "TranscodeResult",
    "Transcoder",
    "parse_progress_time",
]
