"""Custom exceptions for VSC.

All failures originate at the I/O boundary (probing, transcoding, the
filesystem, hardware checks, standards loading). The compliance engine,
classifier and planner are total functions and never raise.
"""

from __future__ import annotations

from pathlib import Path


class VSCError(Exception):
    """Base class for all VSC errors."""

    pass


class IOFailureError(VSCError):
    """Raised when a filesystem operation fails."""

    def __init__(self, path: Path | str, reason: str) -> None:
        """Initialize the error.

        Args:
            path: Path that could not be read or written.
            reason: Underlying failure description.
        """
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"I/O error on {path}: {reason}")


class ToolInvocationError(VSCError):
    """Raised when an external tool exits non-zero or emits unusable output."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description of the failure.
            exit_code: Process exit code, if the process ran.
            stderr: Captured standard error text.
        """
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message)


class InvalidPathError(VSCError):
    """Raised when a path is not usable (missing, or not a directory)."""

    def __init__(self, path: Path | str, reason: str = "Not a directory") -> None:
        self.path = Path(path)
        super().__init__(f"{reason}: {path}")


class NoVideosFoundError(VSCError):
    """Raised when a directory contains no processable video files."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)
        super().__init__(f"No video files found in {directory}")


class HardwareUnavailableError(VSCError):
    """Raised when GPU encoding support is required but missing."""

    pass


class StandardsLoadError(VSCError):
    """Error loading or validating a standards catalog."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)
