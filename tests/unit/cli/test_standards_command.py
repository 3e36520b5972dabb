"""Tests for the standards CLI commands and the main group."""

import json

import yaml

from vsc.cli import main
from vsc.cli.exit_codes import ExitCode
from vsc.standards import load_default_catalog, load_standards_from_dict


class TestStandardsShow:
    """Tests for vsc standards show."""

    def test_yaml_output(self, runner):
        """The built-in catalog is printed as loadable YAML."""
        result = runner.invoke(main, ["standards", "show"])

        assert result.exit_code == ExitCode.SUCCESS
        data = yaml.safe_load(result.stdout)
        assert data["video"]["preferred_codecs"] == ["h264", "libx264"]
        assert load_standards_from_dict(data) == load_default_catalog()

    def test_json_output(self, runner):
        """--json prints the same data as JSON."""
        result = runner.invoke(main, ["standards", "show", "--json"])

        data = json.loads(result.stdout)
        assert data["remediation"]["video_encoder"] == "h264_nvenc"

    def test_custom_file(self, runner, temp_dir):
        """--standards shows the merged custom catalog."""
        path = temp_dir / "standards.yaml"
        path.write_text("audio:\n  acceptable_codecs: [aac, mp3]\n")

        result = runner.invoke(main, ["standards", "show", "--standards", str(path)])

        data = yaml.safe_load(result.stdout)
        assert data["audio"]["acceptable_codecs"] == ["aac", "mp3"]
        assert data["audio"]["preferred_codecs"] == ["pcm", "alac"]

    def test_standards_from_environment(self, runner, temp_dir, monkeypatch):
        """VSC_STANDARDS_PATH selects the catalog."""
        path = temp_dir / "standards.yaml"
        path.write_text("video:\n  unsupported_containers: [mkv, avi]\n")
        monkeypatch.setenv("VSC_STANDARDS_PATH", str(path))

        result = runner.invoke(main, ["standards", "show", "--json"])

        data = json.loads(result.stdout)
        assert data["video"]["unsupported_containers"] == ["mkv", "avi"]


class TestStandardsValidate:
    """Tests for vsc standards validate."""

    def test_valid(self, runner, temp_dir):
        """A valid file is reported with its primary codec."""
        path = temp_dir / "standards.yaml"
        path.write_text("video:\n  preferred_codecs: [hevc, h264]\n")

        result = runner.invoke(main, ["standards", "validate", str(path), "--json"])

        assert result.exit_code == ExitCode.SUCCESS
        data = json.loads(result.stdout)
        assert data["status"] == "completed"
        assert data["primary_codec"] == "hevc"

    def test_invalid(self, runner, temp_dir):
        """An invalid file exits with STANDARDS_ERROR."""
        path = temp_dir / "standards.yaml"
        path.write_text("quality:\n  keyframe_interval_min: -1\n")

        result = runner.invoke(main, ["standards", "validate", str(path)])

        assert result.exit_code == ExitCode.STANDARDS_ERROR
        assert "keyframe_interval_min" in result.stderr

    def test_missing(self, runner, temp_dir):
        """A missing file exits with STANDARDS_ERROR."""
        result = runner.invoke(
            main, ["standards", "validate", str(temp_dir / "none.yaml")]
        )

        assert result.exit_code == ExitCode.STANDARDS_ERROR
        assert "not found" in result.stderr


class TestMainGroup:
    """Tests for global options of the main command group."""

    def test_help_lists_commands(self, runner):
        """All commands are registered."""
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        for command in ("inspect", "process", "standards"):
            assert command in result.stdout

    def test_invalid_logging_config(self, runner, temp_dir):
        """An invalid logging section exits with CONFIG_ERROR."""
        config = temp_dir / "config.toml"
        config.write_text('[logging]\nlevel = "loud"\n')

        result = runner.invoke(main, ["--config", str(config), "standards", "show"])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Invalid configuration" in result.stderr

    def test_log_file_option(self, runner, temp_dir):
        """--log-file and --log-json write JSON logs to the file."""
        log_file = temp_dir / "vsc.log"

        result = runner.invoke(
            main,
            [
                "--log-level",
                "debug",
                "--log-file",
                str(log_file),
                "--log-json",
                "standards",
                "show",
            ],
        )

        assert result.exit_code == ExitCode.SUCCESS
        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert "DEBUG" in {record["level"] for record in records}
