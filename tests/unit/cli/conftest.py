"""Fixtures for CLI tests."""

import logging

import pytest
from click.testing import CliRunner

from vsc.logging import clear_asset_context


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, temp_dir):
    """Keep the user's config file and VSC_* variables out of CLI runs."""
    for var in (
        "VSC_FFMPEG_PATH",
        "VSC_FFPROBE_PATH",
        "VSC_NVIDIA_SMI_PATH",
        "VSC_LOG_LEVEL",
        "VSC_LOG_FILE",
        "VSC_LOG_FORMAT",
        "VSC_STANDARDS_PATH",
        "VSC_ON_ERROR",
        "VSC_OUTPUT_NAMING",
        "VSC_HARDWARE_CHECK",
        "VSC_TRANSCODE_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("VSC_CONFIG_PATH", str(temp_dir / "no-config.toml"))

    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_asset_context()


@pytest.fixture
def runner():
    return CliRunner()
