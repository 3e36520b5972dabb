"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (VSC_*)
3. Config file (~/.vsc/config.toml)
4. Default values

Environment variables:
- VSC_CONFIG_PATH: Path to config file (overrides default location)
- VSC_FFMPEG_PATH: Path to ffmpeg executable
- VSC_FFPROBE_PATH: Path to ffprobe executable
- VSC_NVIDIA_SMI_PATH: Path to nvidia-smi executable
- VSC_LOG_LEVEL: debug, info, warning or error
- VSC_LOG_FILE: Log file path
- VSC_LOG_FORMAT: text or json
- VSC_STANDARDS_PATH: Standards YAML file
- VSC_ON_ERROR: continue or fail
- VSC_OUTPUT_NAMING: preserve or suffixed
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from vsc.config.env import EnvReader
from vsc.config.models import (
    LoggingConfig,
    ProcessingConfig,
    ToolPathsConfig,
    VSCConfig,
)
from vsc.domain.enums import OnErrorMode
from vsc.remediation.naming import OutputNamingPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".vsc"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Default config file path; VSC_CONFIG_PATH overrides it."""
    env_path = EnvReader(env).get_str("VSC_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses default location.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist or
        cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        config = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def _file_path(section: Mapping[str, Any], key: str) -> Path | None:
    value = section.get(key)
    return Path(value).expanduser() if value else None


def _build_tools(
    reader: EnvReader,
    tools_file: Mapping[str, Any],
    ffmpeg_path: Path | None,
    ffprobe_path: Path | None,
) -> ToolPathsConfig:
    return ToolPathsConfig(
        ffmpeg=(
            ffmpeg_path
            or reader.get_path("VSC_FFMPEG_PATH")
            or _file_path(tools_file, "ffmpeg")
        ),
        ffprobe=(
            ffprobe_path
            or reader.get_path("VSC_FFPROBE_PATH")
            or _file_path(tools_file, "ffprobe")
        ),
        nvidia_smi=(
            reader.get_path("VSC_NVIDIA_SMI_PATH")
            or _file_path(tools_file, "nvidia_smi")
        ),
    )


def _build_logging(
    reader: EnvReader, logging_file: Mapping[str, Any]
) -> LoggingConfig:
    defaults = LoggingConfig()
    level = logging_file.get("level", defaults.level)
    log_format = logging_file.get("format", defaults.format)
    return LoggingConfig(
        level=reader.get_str("VSC_LOG_LEVEL") or level,
        file=(
            reader.get_path("VSC_LOG_FILE", must_exist=False)
            or _file_path(logging_file, "file")
        ),
        format=reader.get_str("VSC_LOG_FORMAT") or log_format,
        include_stderr=bool(
            logging_file.get("include_stderr", defaults.include_stderr)
        ),
        max_bytes=int(logging_file.get("max_bytes", defaults.max_bytes)),
        backup_count=int(logging_file.get("backup_count", defaults.backup_count)),
    )


def _build_processing(
    reader: EnvReader,
    processing_file: Mapping[str, Any],
    on_error: OnErrorMode | None,
    output_naming: OutputNamingPolicy | None,
) -> ProcessingConfig:
    defaults = ProcessingConfig()

    file_on_error = processing_file.get("on_error")
    file_naming = processing_file.get("output_naming")
    transcode_timeout = reader.get_int("VSC_TRANSCODE_TIMEOUT")
    if transcode_timeout is None:
        transcode_timeout = processing_file.get(
            "transcode_timeout", defaults.transcode_timeout
        )
    hardware_check = reader.get_bool("VSC_HARDWARE_CHECK")
    if hardware_check is None:
        hardware_check = bool(
            processing_file.get("hardware_check", defaults.hardware_check)
        )

    return ProcessingConfig(
        output_dir_name=processing_file.get(
            "output_dir_name", defaults.output_dir_name
        ),
        output_naming=(
            output_naming
            or reader.get_enum("VSC_OUTPUT_NAMING", OutputNamingPolicy)
            or (OutputNamingPolicy(file_naming) if file_naming else None)
            or defaults.output_naming
        ),
        on_error=(
            on_error
            or reader.get_enum("VSC_ON_ERROR", OnErrorMode)
            or (OnErrorMode(file_on_error) if file_on_error else None)
            or defaults.on_error
        ),
        hardware_check=hardware_check,
        probe_timeout=int(
            processing_file.get("probe_timeout", defaults.probe_timeout)
        ),
        transcode_timeout=(
            int(transcode_timeout) if transcode_timeout is not None else None
        ),
        video_extensions=processing_file.get(
            "video_extensions", defaults.video_extensions
        ),
    )


def get_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    standards_path: Path | None = None,
    on_error: OnErrorMode | None = None,
    output_naming: OutputNamingPolicy | None = None,
) -> VSCConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides VSC_CONFIG_PATH).
        env: Environment mapping (defaults to os.environ).
        ffmpeg_path: CLI override for ffmpeg path.
        ffprobe_path: CLI override for ffprobe path.
        standards_path: CLI override for the standards YAML.
        on_error: CLI override for batch error handling.
        output_naming: CLI override for output file naming.

    Returns:
        VSCConfig with merged configuration.

    Raises:
        ValueError: If a merged value is invalid.
    """
    reader = EnvReader(env)
    file_config = load_config_file(config_path or get_default_config_path(env))

    standards_file = (
        standards_path
        or reader.get_path("VSC_STANDARDS_PATH", must_exist=False)
        or _file_path(file_config.get("standards", {}), "file")
    )

    return VSCConfig(
        tools=_build_tools(
            reader, file_config.get("tools", {}), ffmpeg_path, ffprobe_path
        ),
        logging=_build_logging(reader, file_config.get("logging", {})),
        processing=_build_processing(
            reader, file_config.get("processing", {}), on_error, output_naming
        ),
        standards_file=standards_file,
    )
