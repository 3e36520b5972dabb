"""Shared test fixtures for vsc."""

import shutil
import tempfile
from pathlib import Path

import pytest

from vsc.domain import VideoMetadata
from vsc.standards import load_default_catalog


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def catalog():
    """The built-in standards catalog."""
    return load_default_catalog()


@pytest.fixture
def make_metadata():
    """Factory for VideoMetadata that is fully compliant unless overridden."""

    def _make(**overrides) -> VideoMetadata:
        values = {
            "codec": "h264",
            "resolution": "1920x1080",
            "duration": 120.0,
            "bitrate": 8_000_000,
            "size": 120_000_000,
            "fps": 30.0,
            "audio_codec": "pcm",
            "audio_sample_rate": 48000,
            "audio_bitrate": 1_536_000,
            "container": "mp4",
            "profile": "high",
            "color_space": "bt709",
        }
        values.update(overrides)
        return VideoMetadata(**values)

    return _make


@pytest.fixture
def compliant_metadata(make_metadata) -> VideoMetadata:
    return make_metadata()


@pytest.fixture
def ffprobe_data():
    """Factory for ffprobe -show_format -show_streams JSON output."""

    def _make(
        video: dict | None = None,
        audio: dict | None = None,
        fmt: dict | None = None,
        include_audio: bool = True,
    ) -> dict:
        video_stream = {
            "index": 0,
            "codec_type": "video",
            "codec_name": "h264",
            "profile": "High",
            "width": 1920,
            "height": 1080,
            "r_frame_rate": "30000/1001",
            "color_space": "bt709",
        }
        video_stream.update(video or {})
        streams = [video_stream]
        if include_audio:
            audio_stream = {
                "index": 1,
                "codec_type": "audio",
                "codec_name": "aac",
                "sample_rate": "48000",
                "bit_rate": "320000",
            }
            audio_stream.update(audio or {})
            streams.append(audio_stream)
        format_section = {
            "filename": "clip.mp4",
            "duration": "61.500000",
            "size": "25000000",
            "bit_rate": "3252032",
        }
        format_section.update(fmt or {})
        return {"streams": streams, "format": format_section}

    return _make
