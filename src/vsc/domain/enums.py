"""Core enums for compliance analysis.

These have no dependencies on other VSC modules.
"""

from enum import Enum


class ViolationSeverity(Enum):
    """Severity of a single compliance violation.

    Whether a severity blocks compliance is explicit through
    ``blocks_compliance``; callers must not compare enum values directly.
    """

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def blocks_compliance(self) -> bool:
        """Whether a violation of this severity makes a file non-compliant."""
        return self is not ViolationSeverity.INFO

    @property
    def label(self) -> str:
        """Display label used in reports (e.g. "Critical")."""
        return self.value.capitalize()


class ViolationCategory(Enum):
    """Rule dimension a violation belongs to."""

    VIDEO_CODEC = "video_codec"
    AUDIO_CODEC = "audio_codec"
    RESOLUTION = "resolution"
    FRAME_RATE = "frame_rate"
    BITRATE = "bitrate"
    CONTAINER = "container"
    COLOR_SPACE = "color_space"
    HDR = "hdr"
    PROFILE = "profile"
    AUDIO = "audio"


class ContentType(Enum):
    """Heuristic content category used to tune encoder settings."""

    SCREEN_CAPTURE = "screen_capture"
    LIVE_ACTION = "live_action"
    ANIMATION = "animation"
    PRESENTATION = "presentation"
    UNKNOWN = "unknown"


class OnErrorMode(Enum):
    """How batch processing reacts to a per-file failure."""

    CONTINUE = "continue"  # Record the failure and move to the next file
    FAIL = "fail"  # Abort the batch on the first failure
