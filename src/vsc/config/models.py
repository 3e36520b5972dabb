"""Configuration data models for vsc.

All models are dataclasses with defaults, so a missing config file yields a
working configuration. Invalid values raise ValueError from __post_init__.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from vsc.domain.enums import OnErrorMode
from vsc.remediation.naming import OutputNamingPolicy

VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
VALID_LOG_FORMATS = frozenset({"text", "json"})


@dataclass
class ToolPathsConfig:
    """Paths of external tools.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None
    nvidia_smi: Path | None = None


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        if self.level.lower() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(VALID_LOG_LEVELS)}, got {self.level}"
            )
        if self.format.lower() not in VALID_LOG_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(VALID_LOG_FORMATS)}, "
                f"got {self.format}"
            )
        if self.max_bytes < 0:
            raise ValueError(f"max_bytes must be >= 0, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(f"backup_count must be >= 0, got {self.backup_count}")


@dataclass
class ProcessingConfig:
    """Configuration for directory processing.

    Attributes:
        output_dir_name: Subdirectory of the input directory receiving
            remediated files and the conversion report.
        output_naming: Whether output files keep the source name or get
            descriptive suffixes.
        on_error: Continue past a failed file, or abort the batch.
        hardware_check: Verify NVIDIA encode support before converting.
        probe_timeout: Seconds allowed for one ffprobe call.
        transcode_timeout: Seconds allowed for one ffmpeg run (None = no limit).
        video_extensions: File extensions (without dot) picked up from the
            input directory.
    """

    output_dir_name: str = "H264"
    output_naming: OutputNamingPolicy = OutputNamingPolicy.PRESERVE
    on_error: OnErrorMode = OnErrorMode.CONTINUE
    hardware_check: bool = True
    probe_timeout: int = 60
    transcode_timeout: int | None = None
    video_extensions: tuple[str, ...] = ("mp4", "avi")

    def __post_init__(self) -> None:
        if not self.output_dir_name or "/" in self.output_dir_name:
            raise ValueError(
                f"output_dir_name must be a plain directory name, "
                f"got {self.output_dir_name!r}"
            )
        if self.probe_timeout <= 0:
            raise ValueError(
                f"probe_timeout must be positive, got {self.probe_timeout}"
            )
        if self.transcode_timeout is not None and self.transcode_timeout <= 0:
            raise ValueError(
                f"transcode_timeout must be positive, got {self.transcode_timeout}"
            )
        # A bare TOML string would otherwise split into single characters
        if isinstance(self.video_extensions, str) or not all(
            isinstance(ext, str) for ext in self.video_extensions
        ):
            raise ValueError(
                f"video_extensions must be a list of strings, "
                f"got {self.video_extensions!r}"
            )
        if not self.video_extensions:
            raise ValueError("video_extensions must not be empty")
        self.video_extensions = tuple(
            ext.lower().lstrip(".") for ext in self.video_extensions
        )


@dataclass
class VSCConfig:
    """Main configuration container.

    Aggregates all configuration sections.
    """

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)

    # Custom standards YAML (None = built-in catalog)
    standards_file: Path | None = None

    def get_tool_path(self, tool_name: str) -> str:
        """Configured path of a tool, or its bare name for PATH lookup.

        Args:
            tool_name: ffmpeg, ffprobe or nvidia-smi.
        """
        attr = tool_name.lower().replace("-", "_")
        configured = getattr(self.tools, attr, None)
        return str(configured) if configured else tool_name
