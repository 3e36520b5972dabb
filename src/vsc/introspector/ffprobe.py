"""FFprobe-based implementation of the MediaIntrospector protocol."""

import json
import logging
import shutil
import subprocess  # nosec B404 - TimeoutExpired only
from pathlib import Path

from vsc.core.subprocess_utils import run_command
from vsc.domain.models import VideoMetadata
from vsc.introspector.interface import MediaIntrospectionError
from vsc.introspector.parsers import parse_ffprobe_output

logger = logging.getLogger(__name__)


class FFprobeIntrospector:
    """Extracts VideoMetadata from files using ffprobe."""

    def __init__(self, ffprobe_path: Path | str = "ffprobe", timeout: int = 60) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: ffprobe executable (name on PATH or full path).
            timeout: Seconds to wait for ffprobe before giving up.
        """
        self._ffprobe_path = str(ffprobe_path)
        self._timeout = timeout

    def is_available(self) -> bool:
        """Check whether the configured ffprobe executable can be found."""
        return shutil.which(self._ffprobe_path) is not None

    def get_metadata(self, path: Path) -> VideoMetadata:
        """Extract metadata from a video file.

        Args:
            path: Path to the video file.

        Returns:
            VideoMetadata for the file.

        Raises:
            MediaIntrospectionError: If ffprobe is missing, times out, fails,
                or returns unusable output.
        """
        if not path.exists():
            raise MediaIntrospectionError(f"File not found: {path}")

        data = self._run_ffprobe(path)
        metadata = parse_ffprobe_output(path, data)
        logger.debug(
            "Probed %s: %s %s %.2ffps audio=%s",
            path.name,
            metadata.codec,
            metadata.resolution,
            metadata.fps,
            metadata.audio_codec,
        )
        return metadata

    def _run_ffprobe(self, path: Path) -> dict:
        """Run ffprobe and return its parsed JSON output."""
        args = [
            self._ffprobe_path,
            "-v",
            "quiet",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            str(path),
        ]
        try:
            stdout, stderr, returncode = run_command(args, timeout=self._timeout)
        except FileNotFoundError as e:
            raise MediaIntrospectionError(
                f"ffprobe not found ({self._ffprobe_path}). Install ffmpeg or "
                "set VSC_FFPROBE_PATH."
            ) from e
        except OSError as e:
            raise MediaIntrospectionError(
                f"Cannot run ffprobe ({self._ffprobe_path}): {e}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise MediaIntrospectionError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e

        if returncode != 0:
            raise MediaIntrospectionError(
                f"ffprobe failed for {path} (exit {returncode})",
                exit_code=returncode,
                stderr=stderr,
            )

        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise MediaIntrospectionError(
                f"Invalid ffprobe output for {path}: {e}", exit_code=returncode
            ) from e

        if not isinstance(data, dict):
            raise MediaIntrospectionError(f"Invalid ffprobe output for {path}")
        return data
