"""Input directory scanning and output directory creation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from vsc.exceptions import InvalidPathError, IOFailureError, NoVideosFoundError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("mp4", "avi")
DEFAULT_OUTPUT_DIR_NAME = "H264"


def validate_directory(
    directory: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> list[Path]:
    """List the video files directly inside a directory.

    Only regular files whose extension (case-insensitive) is in
    ``extensions`` are returned. Subdirectories are not searched.

    Args:
        directory: Directory to scan.
        extensions: Accepted extensions, without the dot.

    Returns:
        Matching files, sorted by path.

    Raises:
        InvalidPathError: If ``directory`` is not a directory.
        NoVideosFoundError: If no matching file is found.
        IOFailureError: If the directory cannot be listed.
    """
    if not directory.is_dir():
        raise InvalidPathError(directory)

    accepted = {ext.lower().lstrip(".") for ext in extensions}
    try:
        videos = sorted(
            path
            for path in directory.iterdir()
            if path.is_file() and path.suffix.lower().lstrip(".") in accepted
        )
    except OSError as e:
        raise IOFailureError(directory, str(e)) from e

    if not videos:
        raise NoVideosFoundError(directory)

    logger.debug("Found %d video file(s) in %s", len(videos), directory)
    return videos


def create_output_dir(directory: Path, name: str = DEFAULT_OUTPUT_DIR_NAME) -> Path:
    """Create (if needed) the output subdirectory of ``directory``.

    Raises:
        IOFailureError: If the directory cannot be created.
    """
    output_dir = directory / name
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IOFailureError(output_dir, str(e)) from e
    return output_dir
