"""Tests for the process CLI command."""

import json
from unittest.mock import patch

import pytest

from vsc.cli import main
from vsc.cli.exit_codes import ExitCode
from vsc.exceptions import HardwareUnavailableError
from vsc.executor import TranscodeResult
from vsc.introspector import MediaIntrospectionError


@pytest.fixture
def video_dir(temp_dir):
    videos = temp_dir / "videos"
    videos.mkdir()
    for name in ("good.mp4", "hevc.mp4", "small.avi"):
        (videos / name).write_bytes(b"\x00")
    return videos


@pytest.fixture
def introspector(make_metadata):
    """Patch the CLI's ffprobe introspector with canned metadata."""
    metadata = {
        "good.mp4": make_metadata(),
        "hevc.mp4": make_metadata(codec="hevc"),
        "small.avi": make_metadata(resolution="640x480", container="avi"),
    }

    def get_metadata(path):
        if path.name not in metadata:
            raise MediaIntrospectionError(f"ffprobe failed for {path} (exit 1)")
        return metadata[path.name]

    with patch("vsc.cli.process.FFprobeIntrospector") as mock_cls:
        mock_cls.return_value.get_metadata.side_effect = get_metadata
        yield metadata


@pytest.fixture
def transcoder():
    """Patch the CLI's ffmpeg transcoder; every transcode succeeds."""

    def transcode(plan, duration_seconds=0.0, progress_callback=None):
        if progress_callback is not None:
            progress_callback(100.0)
        return TranscodeResult(True, plan.output_path, exit_code=0)

    with patch("vsc.cli.process.FFmpegTranscoder") as mock_cls:
        mock_cls.return_value.transcode.side_effect = transcode
        yield mock_cls.return_value


@pytest.fixture
def hardware():
    with patch("vsc.cli.process.check_hardware_support") as mock_check:
        yield mock_check


class TestProcessAnalysis:
    """Tests for scanning and compliance analysis without conversion."""

    def test_compliance_report(self, runner, video_dir, introspector):
        """Each file is analyzed and a batch summary is printed."""
        result = runner.invoke(
            main, ["process", "--dir", str(video_dir), "--compliance"]
        )

        assert result.exit_code == ExitCode.SUCCESS
        assert "File: good.mp4" in result.stdout
        assert "Compliance Score: 80/100" in result.stdout
        assert "Compliance Summary" in result.stdout
        assert "Total Files Analyzed: 3" in result.stdout
        assert "Batch Processing Report" not in result.stdout
        assert "Processing Summary" in result.stdout
        assert "Processed 3 file(s): 3 ok, 0 failed" in result.stdout
        assert not (video_dir / "H264").exists()

    def test_scan_only(self, runner, video_dir, introspector):
        """Without --compliance only the processing summary is shown."""
        result = runner.invoke(main, ["process", "--dir", str(video_dir)])

        assert result.exit_code == ExitCode.SUCCESS
        assert "Runtime: 00:02:00.00" in result.stdout
        assert "Compliance Summary" not in result.stdout
        assert "  2 videos using h264" in result.stdout

    def test_verbose_metadata(self, runner, video_dir, introspector):
        """--verbose prints every metadata field."""
        result = runner.invoke(
            main, ["process", "--dir", str(video_dir), "--verbose"]
        )

        assert "  Resolution: 640x480" in result.stdout

    def test_json_output(self, runner, video_dir, introspector):
        """--json prints a machine-readable summary."""
        result = runner.invoke(
            main, ["process", "--dir", str(video_dir), "--compliance", "--json"]
        )

        assert result.exit_code == ExitCode.SUCCESS
        data = json.loads(result.stdout)
        assert data["summary"]["total_videos"] == 3
        assert data["compliance"]["compliant_files"] == 1
        assert [f["file_id"] for f in data["files"]] == ["F001", "F002", "F003"]
        assert data["files"][1]["compliance"]["score"] == 80


class TestProcessConversion:
    """Tests for --convert."""

    def test_convert_with_compliance(
        self, runner, video_dir, introspector, transcoder, hardware
    ):
        """Non-compliant files are fixed and the report is written."""
        result = runner.invoke(
            main,
            ["process", "--dir", str(video_dir), "--compliance", "--convert"],
        )

        assert result.exit_code == ExitCode.SUCCESS
        hardware.assert_called_once()
        assert transcoder.transcode.call_count == 2
        assert "File is already compliant, no fixing needed" in result.stdout
        assert "Fixed file saved: " in result.stdout
        assert "Batch Processing Report" in result.stdout
        assert "Files Fixed: 2 (66.7%)" in result.stdout
        report = video_dir / "H264" / "conversion_report.txt"
        assert report.exists()
        assert f"Report written to {report}" in result.stdout

    def test_suffixed_naming(
        self, runner, video_dir, introspector, transcoder, hardware
    ):
        """--naming suffixed marks the fixed categories in output names."""
        result = runner.invoke(
            main,
            [
                "process",
                "--dir",
                str(video_dir),
                "--compliance",
                "--convert",
                "--naming",
                "suffixed",
            ],
        )

        assert result.exit_code == ExitCode.SUCCESS
        plans = [c.args[0] for c in transcoder.transcode.call_args_list]
        assert [p.output_path.name for p in plans] == [
            "hevc.compliant.h264.mp4",
            "small.compliant.scaled.avi",
        ]

    def test_failed_transcode_exits_nonzero(
        self, runner, video_dir, introspector, transcoder, hardware
    ):
        """A failed file gives OPERATION_FAILED after finishing the batch."""
        transcoder.transcode.side_effect = lambda plan, **kwargs: TranscodeResult(
            False, plan.output_path, exit_code=1, stderr="Conversion failed!"
        )

        result = runner.invoke(
            main, ["process", "--dir", str(video_dir), "--convert"]
        )

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "Failed: ffmpeg exited with code 1: Conversion failed!" in (
            result.stderr
        )
        assert "Processed 3 file(s): 0 ok, 3 failed" in result.stdout

    def test_software_encoder_without_gpu(
        self, runner, video_dir, temp_dir, introspector, transcoder
    ):
        """A libx264 catalog converts on a host without an NVIDIA GPU."""
        standards = temp_dir / "standards.yaml"
        standards.write_text("remediation:\n  video_encoder: libx264\n")
        encoders = "Encoders:\n V....D libx264  libx264 H.264 / AVC\n"

        with patch(
            "vsc.tools.hardware.run_command", return_value=(encoders, "", 0)
        ) as mock_run:
            result = runner.invoke(
                main,
                [
                    "process",
                    "--dir",
                    str(video_dir),
                    "--compliance",
                    "--convert",
                    "--standards",
                    str(standards),
                ],
            )

        assert result.exit_code == ExitCode.SUCCESS
        mock_run.assert_called_once()
        assert mock_run.call_args.args[0][1:] == ["-hide_banner", "-encoders"]
        plans = [c.args[0] for c in transcoder.transcode.call_args_list]
        assert {p.video.encoder for p in plans} == {"libx264"}

    def test_hardware_unavailable(self, runner, video_dir, introspector, transcoder):
        """Missing GPU support aborts with HARDWARE_UNAVAILABLE."""
        with patch(
            "vsc.cli.process.check_hardware_support",
            side_effect=HardwareUnavailableError("NVIDIA GPU not detected"),
        ):
            result = runner.invoke(
                main, ["process", "--dir", str(video_dir), "--convert"]
            )

        assert result.exit_code == ExitCode.HARDWARE_UNAVAILABLE
        assert "NVIDIA GPU not detected" in result.stderr
        transcoder.transcode.assert_not_called()


class TestProcessErrors:
    """Tests for process error handling and exit codes."""

    def test_missing_directory(self, runner, temp_dir):
        """A missing directory exits with TARGET_NOT_FOUND."""
        result = runner.invoke(
            main, ["process", "--dir", str(temp_dir / "missing")]
        )

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "Error: Not a directory" in result.stderr

    def test_no_videos(self, runner, temp_dir):
        """A directory without videos exits with NO_VIDEOS_FOUND."""
        empty = temp_dir / "empty"
        empty.mkdir()

        result = runner.invoke(
            main, ["--log-level", "error", "process", "--dir", str(empty), "--json"]
        )

        assert result.exit_code == ExitCode.NO_VIDEOS_FOUND
        error = json.loads(result.stderr)
        assert error["error"]["code"] == "NO_VIDEOS_FOUND"

    def test_introspection_failure_continues(self, runner, video_dir, introspector):
        """By default an ffprobe failure is recorded and the batch continues."""
        del introspector["hevc.mp4"]

        result = runner.invoke(
            main, ["process", "--dir", str(video_dir), "--compliance"]
        )

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "Total Files Analyzed: 2" in result.stdout

    def test_introspection_failure_fail_fast(self, runner, video_dir, introspector):
        """--on-error fail aborts with ANALYSIS_ERROR."""
        del introspector["hevc.mp4"]

        result = runner.invoke(
            main,
            ["process", "--dir", str(video_dir), "--on-error", "fail"],
        )

        assert result.exit_code == ExitCode.ANALYSIS_ERROR
        assert "Processing Summary" not in result.stdout

    def test_invalid_standards(self, runner, video_dir, temp_dir, introspector):
        """An invalid standards file exits with STANDARDS_ERROR."""
        standards = temp_dir / "standards.yaml"
        standards.write_text("video:\n  bogus: 1\n")

        result = runner.invoke(
            main,
            [
                "process",
                "--dir",
                str(video_dir),
                "--compliance",
                "--standards",
                str(standards),
            ],
        )

        assert result.exit_code == ExitCode.STANDARDS_ERROR
        assert "video.bogus" in result.stderr

    def test_invalid_config(self, runner, video_dir, temp_dir):
        """An invalid config file exits with CONFIG_ERROR."""
        config = temp_dir / "config.toml"
        config.write_text('[processing]\noutput_dir_name = "a/b"\n')

        result = runner.invoke(
            main, ["--config", str(config), "process", "--dir", str(video_dir)]
        )

        assert result.exit_code == ExitCode.CONFIG_ERROR
