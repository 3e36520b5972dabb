"""Unit tests for text report formatting."""

from pathlib import Path

from vsc.compliance import ComplianceEngine
from vsc.domain import ContentType
from vsc.remediation import AudioDirective, RemediationPlan, VideoDirective
from vsc.reports import (
    format_batch_report,
    format_compliance_result,
    format_compliance_summary,
    format_metadata,
    format_plan,
    format_processing_summary,
    metadata_to_dict,
    result_to_dict,
)
from vsc.summary import BatchProcessor, ComplianceSummary, ProcessingSummary


class TestFormatMetadata:
    """Tests for format_metadata."""

    def test_runtime_only(self, make_metadata):
        """Non-verbose output shows only the runtime."""
        assert format_metadata(make_metadata(duration=61.5)) == [
            "  Runtime: 00:01:01.50"
        ]

    def test_verbose(self, make_metadata):
        """Verbose output lists every field."""
        lines = format_metadata(make_metadata(), verbose=True)

        assert "  Codec: h264" in lines
        assert "  Bitrate: 8.0 Mbps" in lines
        assert "  Size: 120.00 MB" in lines
        assert "  Frame Rate: 30.0 fps" in lines


class TestFormatComplianceResult:
    """Tests for format_compliance_result."""

    def test_compliant(self, catalog, compliant_metadata):
        """A compliant result has no violation section."""
        text = format_compliance_result(
            ComplianceEngine(catalog).analyze(compliant_metadata)
        )

        assert "Status: COMPLIANT" in text
        assert "Compliance Score: 100/100" in text
        assert "Violations Found:" not in text

    def test_violations_and_recommendations(self, catalog, make_metadata):
        """Violations are numbered with severity labels."""
        result = ComplianceEngine(catalog).analyze(
            make_metadata(codec="hevc", audio_codec="aac")
        )

        text = format_compliance_result(result)

        assert "Status: NON-COMPLIANT" in text
        assert "1. [Critical] Video codec not in preferred list" in text
        assert "   Current: hevc" in text
        assert "2. [Info] Audio codec is acceptable but not preferred" in text
        assert "Recommendations:\n1. Convert to H.264 codec" in text


class TestFormatComplianceSummary:
    """Tests for format_compliance_summary."""

    def test_batch(self, catalog, make_metadata):
        """Rates, breakdown and files needing attention are shown."""
        engine = ComplianceEngine(catalog)
        summary = ComplianceSummary()
        summary.add_result(engine.analyze(make_metadata()), "good.mp4")
        summary.add_result(engine.analyze(make_metadata(codec="hevc")), "bad.mp4")

        text = format_compliance_summary(summary)

        assert "Total Files Analyzed: 2" in text
        assert "Compliant Files: 1 (50.0%)" in text
        assert "Non-Compliant Files: 1 (50.0%)" in text
        assert "Average Compliance Score: 90.0/100" in text
        assert "  Critical: 1" in text
        assert "  Warnings:" not in text
        assert "Files Needing Attention:\n  bad.mp4 - Score: 80/100" in text
        assert "good.mp4" not in text

    def test_single_file_has_no_attention_list(self, catalog, make_metadata):
        """A one-file batch does not repeat its score."""
        summary = ComplianceSummary()
        summary.add_result(
            ComplianceEngine(catalog).analyze(make_metadata(codec="hevc")), "a.mp4"
        )

        assert "Files Needing Attention" not in format_compliance_summary(summary)

    def test_empty(self):
        """An empty summary renders zero rates."""
        text = format_compliance_summary(ComplianceSummary())

        assert "Non-Compliant Files: 0 (0.0%)" in text
        assert "Violation Breakdown" not in text


class TestFormatBatchReport:
    """Tests for format_batch_report."""

    def test_fixed_list_is_truncated(self):
        """Only the first five fixed files are listed."""
        batch = BatchProcessor(total_files=7)
        for i in range(7):
            batch.record_fixed(Path(f"in{i}.mp4"), Path(f"out/in{i}.mp4"))

        text = format_batch_report(batch)

        assert "Files Fixed: 7 (100.0%)" in text
        assert "out/in4.mp4" in text
        assert "out/in5.mp4" not in text
        assert "  ... and 2 more" in text
        assert "Files Failed" not in text

    def test_failures_listed(self):
        """Failed files are listed with their errors."""
        batch = BatchProcessor(total_files=2)
        batch.record_skipped(Path("a.mp4"))
        batch.record_failure(Path("b.mp4"), "ffmpeg exited with code 1")

        text = format_batch_report(batch)

        assert "Files Skipped: 1 (50.0%)" in text
        assert "Files Failed: 1 (50.0%)" in text
        assert "  b.mp4 - ffmpeg exited with code 1" in text


class TestFormatProcessingSummary:
    """Tests for format_processing_summary."""

    def test_distributions(self, make_metadata):
        """Each distribution lists counts per value."""
        summary = ProcessingSummary()
        summary.add_video(make_metadata(duration=30.0, size=2000))
        summary.add_video(make_metadata(duration=30.0, size=2000))

        text = format_processing_summary(summary)

        assert "Total Videos: 2" in text
        assert "Total Duration: 00:01:00.00" in text
        assert "Total Size: 4.00 kB" in text
        assert "  2 videos using h264" in text
        assert "  2 videos at 1920x1080" in text

    def test_empty_omits_sections(self):
        """Empty distributions are not rendered."""
        text = format_processing_summary(ProcessingSummary())

        assert "Distribution" not in text


class TestFormatPlan:
    """Tests for format_plan."""

    def test_plan(self):
        """Stream actions and hardware decode are shown."""
        plan = RemediationPlan(
            input_path=Path("/v/a.mp4"),
            output_path=Path("/v/H264/a.mp4"),
            content_type=ContentType.LIVE_ACTION,
            video=VideoDirective(copy=False, encoder="h264_nvenc"),
            audio=AudioDirective.stream_copy(),
            hwaccel="cuda",
            bitrate_hint_kbps=12000,
        )

        text = format_plan(plan)

        assert "Content Type: LIVE_ACTION" in text
        assert "Video:        re-encode" in text
        assert "Audio:        copy" in text
        assert "HW Decode:    cuda" in text
        assert "Bitrate Hint: 12000 kbps" in text


class TestJsonSerialization:
    """Tests for metadata_to_dict and result_to_dict."""

    def test_metadata(self, make_metadata):
        """Every metadata field is serialized."""
        data = metadata_to_dict(make_metadata())

        assert data["codec"] == "h264"
        assert data["color_space"] == "bt709"
        assert len(data) == 12

    def test_result(self, catalog, make_metadata):
        """Enums are serialized by value."""
        result = ComplianceEngine(catalog).analyze(make_metadata(container="mkv"))

        data = result_to_dict(result)

        assert data["score"] == 85
        assert data["violations"][0]["severity"] == "critical"
        assert data["violations"][0]["category"] == "container"
        assert data["recommendations"] == ["Convert to MP4 or MOV container"]
