"""Unit tests for RemediationPlanner and plan helpers."""

from dataclasses import replace
from pathlib import Path

import pytest

from vsc.compliance import ComplianceEngine
from vsc.domain import (
    ComplianceResult,
    ComplianceViolation,
    ContentType,
    ViolationCategory,
    ViolationSeverity,
)
from vsc.remediation import (
    OutputNamingPolicy,
    RemediationPlanner,
    build_basic_conversion_plan,
    build_ffmpeg_args,
    should_use_hw_decode,
    target_resolution,
)

INPUT = Path("/videos/lecture.mp4")
OUTPUT_DIR = Path("/videos/H264")


@pytest.fixture
def engine(catalog):
    return ComplianceEngine(catalog)


@pytest.fixture
def planner(catalog):
    return RemediationPlanner(catalog)


def _violation(category, expected="n/a"):
    return ComplianceViolation(
        severity=ViolationSeverity.CRITICAL,
        category=category,
        description="test",
        current_value="x",
        expected_value=expected,
    )


class TestPlanStreams:
    """Tests for which streams a plan re-encodes."""

    def test_codec_violation_encodes_video_only(
        self, engine, planner, make_metadata
    ):
        """A codec problem re-encodes video and copies audio."""
        metadata = make_metadata(codec="hevc")
        result = engine.analyze(metadata)

        plan = planner.plan(
            result, ContentType.LIVE_ACTION, metadata, INPUT, OUTPUT_DIR
        )

        assert plan.needs_video_transcode is True
        assert plan.needs_audio_transcode is False
        assert plan.video.encoder == "h264_nvenc"
        assert (plan.video.tuning.preset, plan.video.tuning.cq) == ("p5", 18)
        assert plan.video.scale is None
        assert plan.video.color_space is None
        assert plan.reasons == (ViolationCategory.VIDEO_CODEC,)

    def test_audio_violation_encodes_audio_only(
        self, engine, planner, make_metadata
    ):
        """An audio problem re-encodes audio to 24-bit PCM and copies video."""
        metadata = make_metadata(audio_codec="mp3")
        result = engine.analyze(metadata)

        plan = planner.plan(
            result, ContentType.SCREEN_CAPTURE, metadata, INPUT, OUTPUT_DIR
        )

        assert plan.needs_video_transcode is False
        assert plan.audio.encoder == "pcm_s24le"
        assert plan.audio.sample_rate == 48000
        assert plan.audio.channels == 2

    def test_container_only_violation_copies_streams(
        self, engine, planner, make_metadata
    ):
        """A container problem is fixed by remuxing."""
        metadata = make_metadata(container="mkv")
        result = engine.analyze(metadata)

        plan = planner.plan(
            result, ContentType.SCREEN_CAPTURE, metadata, INPUT, OUTPUT_DIR
        )

        assert plan.needs_video_transcode is False
        assert plan.needs_audio_transcode is False
        assert plan.container_flags == ("+faststart",)

    def test_resolution_violation_scales(self, engine, planner, make_metadata):
        """Unsupported resolutions are scaled to a preferred resolution."""
        metadata = make_metadata(resolution="640x480")
        result = engine.analyze(metadata)

        plan = planner.plan(
            result, ContentType.ANIMATION, metadata, INPUT, OUTPUT_DIR
        )

        assert plan.video.scale == (1920, 1080)
        assert (plan.video.tuning.preset, plan.video.tuning.cq) == ("p6", 16)

    def test_hdr_violation_forces_rec709(self, engine, planner, make_metadata):
        """HDR content gets an explicit Rec. 709 color space."""
        metadata = make_metadata(color_space="smpte2084_hdr10")
        result = engine.analyze(metadata)

        plan = planner.plan(
            result, ContentType.LIVE_ACTION, metadata, INPUT, OUTPUT_DIR
        )

        assert plan.video.color_space == "bt709"
        assert plan.hwaccel == "cuda"

    def test_bitrate_hint(self, engine, planner, make_metadata):
        """The plan carries the optimal bitrate for the content type."""
        metadata = make_metadata(codec="hevc", resolution="1280x720")
        result = engine.analyze(metadata)

        plan = planner.plan(
            result, ContentType.LIVE_ACTION, metadata, INPUT, OUTPUT_DIR
        )

        assert plan.bitrate_hint_kbps == 8000

    def test_custom_remediation_targets(self, catalog, engine, make_metadata):
        """Encoder settings come from the catalog."""
        remediation = replace(catalog.remediation, video_encoder="libx264")
        planner = RemediationPlanner(replace(catalog, remediation=remediation))
        metadata = make_metadata(codec="hevc")

        plan = planner.plan(
            engine.analyze(metadata),
            ContentType.UNKNOWN,
            metadata,
            INPUT,
            OUTPUT_DIR,
        )

        assert plan.video.encoder == "libx264"

    def test_blank_hwaccel_disables_hw_decode(self, catalog, engine, make_metadata):
        """An empty hwaccel in the catalog keeps decoding on the CPU."""
        remediation = replace(catalog.remediation, hwaccel="")
        planner = RemediationPlanner(replace(catalog, remediation=remediation))
        metadata = make_metadata(color_space="smpte2084_hdr10")

        plan = planner.plan(
            engine.analyze(metadata),
            ContentType.LIVE_ACTION,
            metadata,
            INPUT,
            OUTPUT_DIR,
        )

        assert plan.uses_hw_decode is False
        assert "-hwaccel" not in build_ffmpeg_args(plan)


class TestContentTuning:
    """Tests for the encoder tuning each content type receives."""

    @pytest.mark.parametrize(
        ("content_type", "expected"),
        [
            (
                ContentType.SCREEN_CAPTURE,
                ["-preset", "p7", "-cq", "15", "-temporal-aq", "1",
                 "-rc-lookahead", "32"],
            ),
            (
                ContentType.PRESENTATION,
                ["-preset", "p7", "-cq", "15", "-temporal-aq", "1",
                 "-rc-lookahead", "32"],
            ),
            (
                ContentType.LIVE_ACTION,
                ["-preset", "p5", "-cq", "18", "-spatial-aq", "1",
                 "-temporal-aq", "1"],
            ),
            (
                ContentType.ANIMATION,
                ["-preset", "p6", "-cq", "16", "-aq-mode", "3"],
            ),
            (ContentType.UNKNOWN, ["-preset", "p6", "-cq", "18"]),
        ],
    )  # fmt: skip
    def test_tuning_in_ffmpeg_args(
        self, engine, planner, make_metadata, content_type, expected
    ):
        """The video arguments carry the preset, quality and AQ flags."""
        metadata = make_metadata(codec="hevc")
        plan = planner.plan(
            engine.analyze(metadata), content_type, metadata, INPUT, OUTPUT_DIR
        )

        args = build_ffmpeg_args(plan)

        start = args.index("-preset")
        assert args[start : args.index("-c:a")] == expected


class TestOutputPath:
    """Tests for plan output paths."""

    def test_preserve_keeps_name(self, engine, planner, make_metadata):
        """The default policy keeps the input file name."""
        metadata = make_metadata(codec="hevc")

        plan = planner.plan(
            engine.analyze(metadata),
            ContentType.UNKNOWN,
            metadata,
            INPUT,
            OUTPUT_DIR,
        )

        assert plan.output_path == OUTPUT_DIR / "lecture.mp4"

    def test_suffixed_policy(self, catalog, engine, make_metadata):
        """The suffixed policy marks each fixed category."""
        planner = RemediationPlanner(catalog, naming=OutputNamingPolicy.SUFFIXED)
        metadata = make_metadata(codec="hevc", resolution="640x480")

        plan = planner.plan(
            engine.analyze(metadata),
            ContentType.UNKNOWN,
            metadata,
            INPUT,
            OUTPUT_DIR,
        )

        assert plan.output_path == OUTPUT_DIR / "lecture.compliant.scaled.h264.mp4"


class TestHelpers:
    """Tests for target_resolution and should_use_hw_decode."""

    def test_target_resolution_prefers_first_label(self):
        """The first known label in the expected value wins."""
        result = ComplianceResult(
            is_compliant=False,
            score=75,
            violations=(
                _violation(ViolationCategory.RESOLUTION, "Preferred: 1280x720"),
            ),
        )

        assert target_resolution(result) == (1280, 720)

    def test_target_resolution_default(self):
        """Without a resolution violation the target is 1920x1080."""
        result = ComplianceResult(is_compliant=True, score=100)

        assert target_resolution(result) == (1920, 1080)

    def test_hw_decode_for_many_violations(self):
        """More than two violations enable GPU decoding."""
        result = ComplianceResult(
            is_compliant=False,
            score=40,
            violations=(
                _violation(ViolationCategory.VIDEO_CODEC),
                _violation(ViolationCategory.CONTAINER),
                _violation(ViolationCategory.AUDIO_CODEC),
            ),
        )

        assert should_use_hw_decode(result) is True

    def test_no_hw_decode_for_codec_only(self):
        """A lone codec violation decodes on the CPU."""
        result = ComplianceResult(
            is_compliant=False,
            score=80,
            violations=(_violation(ViolationCategory.VIDEO_CODEC),),
        )

        assert should_use_hw_decode(result) is False


class TestBasicConversionPlan:
    """Tests for conversion without compliance analysis."""

    def test_plan(self):
        """Basic conversion encodes H.264 NVENC with 320k AAC."""
        plan = build_basic_conversion_plan(INPUT, OUTPUT_DIR)

        assert plan.output_path == OUTPUT_DIR / "lecture.mp4"
        assert plan.video.encoder == "h264_nvenc"
        assert plan.video.tuning.preset == "p7"
        assert plan.audio.encoder == "aac"
        assert plan.audio.bitrate_kbps == 320
        assert plan.hwaccel is None
