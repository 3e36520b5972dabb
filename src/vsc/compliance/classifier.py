"""Heuristic content classification.

The content type only tunes encoder parameters during remediation; it never
influences the compliance score.
"""

from __future__ import annotations

import logging

from vsc.domain.enums import ContentType
from vsc.domain.models import VideoMetadata

logger = logging.getLogger(__name__)

# Filename keywords, checked in order; first match wins
_NAME_RULES: tuple[tuple[tuple[str, ...], ContentType], ...] = (
    (("screen", "capture", "recording"), ContentType.SCREEN_CAPTURE),
    (("presentation", "slide", "demo"), ContentType.PRESENTATION),
    (("cartoon", "animated", "anime"), ContentType.ANIMATION),
)

HIGH_FPS_THRESHOLD = 50.0
LOW_FPS_THRESHOLD = 20.0
CINEMATIC_FPS_RANGE = (24.0, 30.0)
CINEMATIC_RESOLUTION = "1920x1080"


class ContentClassifier:
    """Classifies a file from its display name and metadata."""

    def classify(self, metadata: VideoMetadata, display_name: str) -> ContentType:
        """Determine the content type.

        Args:
            metadata: Probed metadata of the file.
            display_name: File name (or title) shown to users.

        Returns:
            The first matching ContentType of the rule cascade.
        """
        content_type = self._classify(metadata, display_name.lower())
        logger.debug(
            "Detected content type %s for %s", content_type.name, display_name
        )
        return content_type

    @staticmethod
    def _classify(metadata: VideoMetadata, name: str) -> ContentType:
        for keywords, content_type in _NAME_RULES:
            if any(keyword in name for keyword in keywords):
                return content_type

        if metadata.fps > HIGH_FPS_THRESHOLD:
            return ContentType.LIVE_ACTION
        if metadata.fps < LOW_FPS_THRESHOLD:
            return ContentType.SCREEN_CAPTURE

        low, high = CINEMATIC_FPS_RANGE
        if metadata.resolution == CINEMATIC_RESOLUTION and low <= metadata.fps <= high:
            return ContentType.LIVE_ACTION

        return ContentType.SCREEN_CAPTURE


# (1080p, 720p, other) target bitrates in kbps
_BITRATE_TABLE: dict[ContentType, tuple[int, int, int]] = {
    ContentType.SCREEN_CAPTURE: (6000, 4000, 3000),
    ContentType.PRESENTATION: (6000, 4000, 3000),
    ContentType.LIVE_ACTION: (12000, 8000, 5000),
    ContentType.ANIMATION: (8000, 6000, 4000),
    ContentType.UNKNOWN: (8000, 6000, 4000),
}


def optimal_bitrate_kbps(content_type: ContentType, resolution: str) -> int:
    """Suggested video bitrate for a content type at a resolution.

    Args:
        content_type: Classified content type.
        resolution: Resolution string such as "1920x1080".

    Returns:
        Bitrate in kbps.
    """
    full_hd, hd, other = _BITRATE_TABLE[content_type]
    if "1920x1080" in resolution:
        return full_hd
    if "1280x720" in resolution:
        return hd
    return other
