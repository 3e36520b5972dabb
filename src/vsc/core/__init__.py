"""Shared low-level helpers."""

from vsc.core.formatting import format_bitrate, format_duration, format_file_size
from vsc.core.subprocess_utils import run_command

__all__ = [
    "format_bitrate",
    "format_duration",
    "format_file_size",
    "run_command",
]
