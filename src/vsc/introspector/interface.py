"""MediaIntrospector interface for video metadata extraction."""

from pathlib import Path
from typing import Protocol

from vsc.domain.models import VideoMetadata
from vsc.exceptions import ToolInvocationError


class MediaIntrospectionError(ToolInvocationError):
    """Raised when media introspection fails."""

    pass


class MediaIntrospector(Protocol):
    """Protocol for probe implementations.

    Implementations extract the technical facts the compliance engine
    needs from a media file.
    """

    def get_metadata(self, path: Path) -> VideoMetadata:
        """Extract metadata from a video file.

        Args:
            path: Path to the video file.

        Returns:
            VideoMetadata for the file.

        Raises:
            MediaIntrospectionError: If the file cannot be introspected.
        """
        ...
