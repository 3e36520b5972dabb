"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, standards, input)
    20-29: Target/file errors
    30-39: Tool/dependency errors
    40-49: Operation errors
    50-59: Analysis errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for vsc CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Validation errors (10-19)
    CONFIG_ERROR = 11
    STANDARDS_ERROR = 12

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20
    NO_VIDEOS_FOUND = 22

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30  # ffprobe or ffmpeg missing
    HARDWARE_UNAVAILABLE = 33  # no NVIDIA GPU or h264_nvenc

    # Operation errors (40-49)
    OPERATION_FAILED = 40  # one or more files failed

    # Analysis errors (50-59)
    ANALYSIS_ERROR = 50  # batch aborted on a probe failure
    PARSE_ERROR = 51
