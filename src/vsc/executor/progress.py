"""FFmpeg progress parsing utilities.

FFmpeg reports progress on stderr with lines such as::

    frame=  240 fps= 60 q=21.0 size=    1024kB time=00:00:08.00 bitrate=...
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_TIME_PATTERN = re.compile(r"time=(\S+)")


def parse_progress_time(line: str) -> float | None:
    """Extract the output timestamp from an ffmpeg stderr line.

    Only the first ``time=`` occurrence is used.

    Args:
        line: One line of ffmpeg stderr.

    Returns:
        Seconds encoded so far, or None if the line has no parseable
        ``time=HH:MM:SS.ss`` field.
    """
    match = _TIME_PATTERN.search(line)
    if match is None:
        return None

    parts = match.group(1).split(":")
    if len(parts) < 3:
        return None
    try:
        hours = float(parts[0])
        minutes = float(parts[1])
        seconds = float(parts[2])
    except ValueError:
        return None
    return hours * 3600 + minutes * 60 + seconds


@dataclass
class TranscodeProgress:
    """Progress of a running transcode."""

    duration_seconds: float
    out_time_seconds: float = 0.0

    def update(self, line: str) -> bool:
        """Consume a stderr line; return True if the position advanced."""
        position = parse_progress_time(line)
        if position is None or position < self.out_time_seconds:
            return False
        self.out_time_seconds = position
        return True

    @property
    def percent(self) -> float:
        """Progress percentage (0.0 to 100.0), 0.0 if duration is unknown."""
        if self.duration_seconds <= 0:
            return 0.0
        return min(100.0, (self.out_time_seconds / self.duration_seconds) * 100)
