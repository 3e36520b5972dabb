"""FFmpeg-based Transcoder implementation."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
import threading
from collections import deque
from pathlib import Path

from vsc.exceptions import IOFailureError, ToolInvocationError
from vsc.executor.interface import ProgressCallback, TranscodeResult
from vsc.executor.progress import TranscodeProgress
from vsc.remediation.command import build_ffmpeg_command
from vsc.remediation.types import RemediationPlan

logger = logging.getLogger(__name__)

# Lines of stderr kept for diagnostics
STDERR_TAIL_LINES = 50


class FFmpegTranscoder:
    """Runs RemediationPlans through ffmpeg, streaming progress."""

    def __init__(
        self, ffmpeg_path: Path | str = "ffmpeg", timeout: float | None = None
    ) -> None:
        """Initialize the transcoder.

        Args:
            ffmpeg_path: ffmpeg executable (name on PATH or full path).
            timeout: Seconds before a transcode is killed (None = no limit).
        """
        self._ffmpeg_path = str(ffmpeg_path)
        self._timeout = timeout

    def transcode(
        self,
        plan: RemediationPlan,
        duration_seconds: float = 0.0,
        progress_callback: ProgressCallback | None = None,
    ) -> TranscodeResult:
        """Execute a plan.

        A non-zero ffmpeg exit is reported through the result, not raised.

        Args:
            plan: Remediation plan to execute.
            duration_seconds: Source duration, used for progress percentages.
            progress_callback: Receives the completion percentage.

        Returns:
            TranscodeResult with exit code and stderr tail.

        Raises:
            ToolInvocationError: If ffmpeg cannot be started or times out.
            IOFailureError: If the output directory cannot be created.
        """
        try:
            plan.output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailureError(plan.output_path.parent, str(e)) from e

        cmd = build_ffmpeg_command(plan, self._ffmpeg_path)
        logger.info("Transcoding %s -> %s", plan.input_path, plan.output_path)
        logger.debug("FFmpeg command: %s", " ".join(cmd))

        progress = TranscodeProgress(duration_seconds)
        stderr_tail: deque[str] = deque(maxlen=STDERR_TAIL_LINES)

        try:
            process = subprocess.Popen(  # nosec B603 - args built from plan
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            raise ToolInvocationError(
                f"ffmpeg not found ({self._ffmpeg_path}). Install ffmpeg or "
                "set VSC_FFMPEG_PATH."
            ) from e
        except OSError as e:
            raise ToolInvocationError(
                f"Cannot run ffmpeg ({self._ffmpeg_path}): {e}"
            ) from e

        # stderr is read until EOF, so the timeout is enforced by a watchdog
        timed_out = threading.Event()
        watchdog = None
        if self._timeout is not None:

            def _kill() -> None:
                timed_out.set()
                process.kill()

            watchdog = threading.Timer(self._timeout, _kill)
            watchdog.daemon = True
            watchdog.start()

        assert process.stderr is not None  # nosec B101 - stderr=PIPE above
        try:
            for line in process.stderr:
                stderr_tail.append(line.rstrip())
                if progress.update(line) and progress_callback is not None:
                    progress_callback(progress.percent)
            returncode = process.wait()
        finally:
            process.stderr.close()
            if watchdog is not None:
                watchdog.cancel()

        if timed_out.is_set():
            raise ToolInvocationError(
                f"ffmpeg timed out after {self._timeout}s for {plan.input_path}",
                exit_code=returncode,
                stderr="\n".join(stderr_tail),
            )

        result = TranscodeResult(
            success=returncode == 0,
            output_path=plan.output_path,
            exit_code=returncode,
            stderr="\n".join(stderr_tail),
        )
        if result.success:
            logger.info("Transcode completed: %s", plan.output_path)
        else:
            logger.error(
                "Transcode failed for %s: %s", plan.input_path, result.error_message
            )
        return result
