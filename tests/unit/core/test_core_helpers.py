"""Unit tests for formatting and subprocess helpers."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from vsc.core import format_bitrate, format_duration, format_file_size, run_command


class TestFormatDuration:
    """Tests for format_duration."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "00:00:00.00"),
            (59.999, "00:00:59.99"),
            (61.5, "00:01:01.50"),
            (3600, "01:00:00.00"),
            (90061.25, "25:01:01.25"),
            (-5, "00:00:00.00"),
        ],
    )
    def test_values(self, seconds, expected):
        """Durations are truncated to centiseconds and hours are uncapped."""
        assert format_duration(seconds) == expected


class TestFormatFileSize:
    """Tests for format_file_size."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (999, "999 B"),
            (1000, "1.00 kB"),
            (1_500_000, "1.50 MB"),
            (2_000_000_000, "2.00 GB"),
            (5 * 10**18, "5000.00 PB"),
        ],
    )
    def test_values(self, size, expected):
        """Sizes use decimal prefixes."""
        assert format_file_size(size) == expected


class TestFormatBitrate:
    """Tests for format_bitrate."""

    def test_mbps(self):
        """Bitrates are shown in Mbps with one decimal."""
        assert format_bitrate(8_500_000) == "8.5 Mbps"


class TestRunCommand:
    """Tests for run_command."""

    def test_converts_paths_and_returns_output(self):
        """Path arguments are stringified and output is returned."""
        completed = MagicMock(stdout="out", stderr="err", returncode=0)

        with patch(
            "vsc.core.subprocess_utils.subprocess.run", return_value=completed
        ) as mock_run:
            result = run_command(["ffprobe", Path("/v/a.mp4")], timeout=10)

        assert result == ("out", "err", 0)
        assert mock_run.call_args.args[0] == ["ffprobe", "/v/a.mp4"]
        assert mock_run.call_args.kwargs["timeout"] == 10
        assert mock_run.call_args.kwargs["errors"] == "replace"

    def test_none_output_becomes_empty(self):
        """None stdout or stderr is normalized to an empty string."""
        completed = MagicMock(stdout=None, stderr=None, returncode=3)

        with patch(
            "vsc.core.subprocess_utils.subprocess.run", return_value=completed
        ):
            assert run_command(["tool"]) == ("", "", 3)

    def test_timeout_propagates(self):
        """TimeoutExpired is re-raised to the caller."""
        with patch(
            "vsc.core.subprocess_utils.subprocess.run",
            side_effect=subprocess.TimeoutExpired(["tool"], 1),
        ):
            with pytest.raises(subprocess.TimeoutExpired):
                run_command(["tool", "a", "b", "c"], timeout=1)
