"""Layered configuration: CLI > environment > config file > defaults."""

from vsc.config.env import EnvReader
from vsc.config.loader import (
    DEFAULT_CONFIG_FILE,
    get_config,
    get_default_config_path,
    load_config_file,
)
from vsc.config.logging_factory import build_logging_config, configure_logging_from_cli
from vsc.config.models import (
    LoggingConfig,
    ProcessingConfig,
    ToolPathsConfig,
    VSCConfig,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "EnvReader",
    "LoggingConfig",
    "ProcessingConfig",
    "ToolPathsConfig",
    "VSCConfig",
    "build_logging_config",
    "configure_logging_from_cli",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
