"""Transcoder interface."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from vsc.remediation.types import RemediationPlan

# Called with the completion percentage (0.0 to 100.0)
ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class TranscodeResult:
    """Outcome of one transcode.

    Attributes:
        success: True if ffmpeg exited with status 0.
        output_path: File written by the transcode.
        exit_code: ffmpeg exit status (None if it never started).
        stderr: Tail of ffmpeg's standard error (diagnostics on failure).
    """

    success: bool
    output_path: Path
    exit_code: int | None = None
    stderr: str = ""

    @property
    def error_message(self) -> str:
        """Short failure description for reports."""
        if self.success:
            return ""
        last_line = self.stderr.strip().splitlines()[-1] if self.stderr.strip() else ""
        message = f"ffmpeg exited with code {self.exit_code}"
        return f"{message}: {last_line}" if last_line else message


class Transcoder(Protocol):
    """Protocol for components that execute a RemediationPlan."""

    def transcode(
        self,
        plan: RemediationPlan,
        duration_seconds: float = 0.0,
        progress_callback: ProgressCallback | None = None,
    ) -> TranscodeResult:
        """Execute the plan and report the outcome."""
        ...
