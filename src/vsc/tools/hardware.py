"""Encoder and NVIDIA GPU support detection."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - TimeoutExpired only
from pathlib import Path

from vsc.core.subprocess_utils import run_command
from vsc.exceptions import HardwareUnavailableError

logger = logging.getLogger(__name__)

REQUIRED_ENCODER = "h264_nvenc"
DETECTION_TIMEOUT = 30


def is_nvenc_encoder(encoder: str) -> bool:
    """True for NVIDIA NVENC encoders such as h264_nvenc."""
    return encoder.endswith("_nvenc")


def _has_nvidia_gpu(nvidia_smi_path: str) -> bool:
    try:
        _, _, returncode = run_command([nvidia_smi_path], timeout=DETECTION_TIMEOUT)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("nvidia-smi check failed: %s", e)
        return False
    return returncode == 0


def check_hardware_support(
    ffmpeg_path: Path | str = "ffmpeg",
    nvidia_smi_path: Path | str = "nvidia-smi",
    encoder: str = REQUIRED_ENCODER,
) -> None:
    """Verify that the remediation encoder is available.

    An NVIDIA GPU is required only for NVENC encoders; a software encoder
    such as libx264 just has to be listed by ffmpeg.

    Args:
        ffmpeg_path: ffmpeg executable.
        nvidia_smi_path: nvidia-smi executable.
        encoder: Encoder that ffmpeg must provide.

    Raises:
        HardwareUnavailableError: If an NVENC encoder is requested without
            an NVIDIA GPU, or ffmpeg lacks the encoder (or cannot be run).
    """
    if is_nvenc_encoder(encoder):
        logger.debug("Checking nvidia-smi")
        if not _has_nvidia_gpu(str(nvidia_smi_path)):
            logger.error("NVIDIA GPU not detected")
            raise HardwareUnavailableError("NVIDIA GPU not detected")

    logger.debug("Checking ffmpeg encoders")
    try:
        stdout, _, _ = run_command(
            [ffmpeg_path, "-hide_banner", "-encoders"], timeout=DETECTION_TIMEOUT
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise HardwareUnavailableError(f"Cannot query ffmpeg encoders: {e}") from e

    if encoder not in stdout:
        raise HardwareUnavailableError(f"{encoder} not available")

    logger.info("Encoder support verified (%s)", encoder)
