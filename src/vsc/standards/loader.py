"""Standards catalog loading.

The built-in catalog is returned by ``load_default_catalog``. A YAML file
can override any subset of it; each section that is present replaces the
matching default fields, everything else keeps its default value.

Example YAML::

    video:
      preferred_codecs: [h264, libx264]
      unsupported_containers: [mkv, avi]
    audio:
      acceptable_codecs: [aac, mp3]
    remediation:
      video_encoder: libx264
"""

from __future__ import annotations

import logging
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from vsc.exceptions import StandardsLoadError
from vsc.standards.models import (
    AudioStandards,
    BitrateRange,
    QualityStandards,
    StandardsCatalog,
    VideoStandards,
)

logger = logging.getLogger(__name__)


def load_default_catalog() -> StandardsCatalog:
    """Build the built-in content delivery standards.

    Returns:
        A fresh, immutable StandardsCatalog.
    """
    logger.debug("Loading default content delivery standards")

    video = VideoStandards(
        preferred_resolutions=(
            "1280x720",
            "1920x1080",
            "720x1280",  # vertical
            "1080x1920",  # vertical HD
        ),
        acceptable_resolutions=(
            "1360x768",
            "1280x800",
            "1600x900",
            "1440x900",
            "1680x1048",
            "1440x810",
            "2160x3840",  # vertical 4K
        ),
        preferred_codecs=("h264", "libx264"),
        preferred_frame_rates=(15.0, 23.976, 24.0, 25.0, 29.97, 30.0),
        bitrate_ranges={
            "screen_capture": BitrateRange(6000, 8000, "Screen Capture"),
            "live_action": BitrateRange(8000, 15000, "Live Action"),
        },
        containers=("mp4", "mov"),
        unsupported_containers=("mkv",),
        profiles=("main", "high"),
    )

    audio = AudioStandards(
        preferred_codecs=("pcm", "alac"),
        acceptable_codecs=("aac",),
        sample_rates=(44100, 48000),
        bit_depths=(16, 24),
        bitrate_ranges={"aac": 320},
        channels=("stereo", "2.0"),
    )

    quality = QualityStandards(
        color_spaces=("rec709", "bt709"),
        unsupported_color_spaces=("bt2020", "dci-p3", "rec2020"),
        keyframe_interval_min=2,
        chroma_subsampling=("4:2:0", "4:2:2"),
        hdr_restrictions=("hdr10", "hdr10+", "dolby_vision", "hlg"),
    )

    return StandardsCatalog(video=video, audio=audio, quality=quality)


# =============================================================================
# YAML schema
# =============================================================================


class BitrateRangeModel(BaseModel):
    """Pydantic model for a bitrate window."""

    model_config = ConfigDict(extra="forbid")

    min_kbps: int
    max_kbps: int
    content_type: str

    @field_validator("max_kbps")
    @classmethod
    def validate_max(cls, v: int, info: ValidationInfo) -> int:
        min_kbps = info.data.get("min_kbps")
        if min_kbps is not None and v < min_kbps:
            raise ValueError("max_kbps must be >= min_kbps")
        return v


class VideoSectionModel(BaseModel):
    """Pydantic model for the video section."""

    model_config = ConfigDict(extra="forbid")

    preferred_resolutions: list[str] | None = None
    acceptable_resolutions: list[str] | None = None
    preferred_codecs: list[str] | None = None
    preferred_frame_rates: list[float] | None = None
    bitrate_ranges: dict[str, BitrateRangeModel] | None = None
    containers: list[str] | None = None
    unsupported_containers: list[str] | None = None
    profiles: list[str] | None = None

    @field_validator("preferred_codecs")
    @classmethod
    def validate_codecs(cls, v: list[str] | None) -> list[str] | None:
        if v is not None and not v:
            raise ValueError("preferred_codecs must contain at least one codec")
        return v

    @field_validator("preferred_resolutions", "acceptable_resolutions")
    @classmethod
    def validate_resolutions(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        for res in v:
            width, sep, height = res.partition("x")
            if not sep or not width.isdigit() or not height.isdigit():
                raise ValueError(f"resolution must look like WIDTHxHEIGHT: {res!r}")
        return v

    @field_validator("containers", "unsupported_containers")
    @classmethod
    def lowercase_containers(cls, v: list[str] | None) -> list[str] | None:
        return [c.lower() for c in v] if v is not None else v


class AudioSectionModel(BaseModel):
    """Pydantic model for the audio section."""

    model_config = ConfigDict(extra="forbid")

    preferred_codecs: list[str] | None = None
    acceptable_codecs: list[str] | None = None
    sample_rates: list[int] | None = None
    bit_depths: list[int] | None = None
    bitrate_ranges: dict[str, int] | None = None
    channels: list[str] | None = None


class QualitySectionModel(BaseModel):
    """Pydantic model for the quality section."""

    model_config = ConfigDict(extra="forbid")

    color_spaces: list[str] | None = None
    unsupported_color_spaces: list[str] | None = None
    keyframe_interval_min: int | None = None
    chroma_subsampling: list[str] | None = None
    hdr_restrictions: list[str] | None = None

    @field_validator("keyframe_interval_min")
    @classmethod
    def validate_keyframe(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("keyframe_interval_min must be >= 0")
        return v


class RemediationSectionModel(BaseModel):
    """Pydantic model for the remediation targets section."""

    model_config = ConfigDict(extra="forbid")

    video_encoder: str | None = None
    pixel_format: str | None = None
    video_profile: str | None = None
    audio_encoder: str | None = None
    audio_sample_rate: int | None = None
    audio_channels: int | None = None
    color_space: str | None = None
    hwaccel: str | None = None


class StandardsModel(BaseModel):
    """Pydantic model for a complete standards file."""

    model_config = ConfigDict(extra="forbid")

    video: VideoSectionModel | None = None
    audio: AudioSectionModel | None = None
    quality: QualitySectionModel | None = None
    remediation: RemediationSectionModel | None = None


# =============================================================================
# Loading
# =============================================================================


def _overrides(section: BaseModel | None) -> dict[str, Any]:
    """Collect the fields explicitly set in a section, lists as tuples."""
    if section is None:
        return {}
    result: dict[str, Any] = {}
    for name, value in section.model_dump(exclude_none=True).items():
        result[name] = tuple(value) if isinstance(value, list) else value
    return result


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"Standards validation failed: {loc}: {msg}", loc
        return f"Standards validation failed: {msg}", None
    return f"Standards validation failed: {error}", None


def load_standards_from_dict(
    data: dict[str, Any], base: StandardsCatalog | None = None
) -> StandardsCatalog:
    """Build a catalog from a mapping, layered over ``base``.

    Args:
        data: Parsed standards document.
        base: Catalog supplying values for omitted fields. Defaults to the
            built-in catalog.

    Returns:
        New StandardsCatalog.

    Raises:
        StandardsLoadError: If the data does not match the schema.
    """
    try:
        model = StandardsModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise StandardsLoadError(message, field=field) from e

    base = base or load_default_catalog()

    video_overrides = _overrides(model.video)
    if "bitrate_ranges" in video_overrides:
        video_overrides["bitrate_ranges"] = {
            key: BitrateRange(**value)
            for key, value in video_overrides["bitrate_ranges"].items()
        }

    try:
        return StandardsCatalog(
            video=replace(base.video, **video_overrides),
            audio=replace(base.audio, **_overrides(model.audio)),
            quality=replace(base.quality, **_overrides(model.quality)),
            remediation=replace(base.remediation, **_overrides(model.remediation)),
        )
    except ValueError as e:
        raise StandardsLoadError(f"Standards validation failed: {e}") from e


def load_standards(path: Path) -> StandardsCatalog:
    """Load and validate a standards catalog from a YAML file.

    Args:
        path: Path to the YAML standards file.

    Returns:
        Validated StandardsCatalog.

    Raises:
        StandardsLoadError: If the file is missing, unreadable or invalid.
    """
    if not path.exists():
        raise StandardsLoadError(f"Standards file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise StandardsLoadError(f"Invalid YAML syntax: {e}") from e
    except OSError as e:
        raise StandardsLoadError(f"Cannot read standards file {path}: {e}") from e

    if data is None:
        raise StandardsLoadError("Standards file is empty")

    if not isinstance(data, dict):
        raise StandardsLoadError("Standards file must be a YAML mapping")

    catalog = load_standards_from_dict(data)
    logger.info("Loaded standards from %s", path)
    return catalog


def dump_standards(catalog: StandardsCatalog) -> dict[str, Any]:
    """Render a catalog as plain data (lists and dicts).

    The result can be written back with ``yaml.safe_dump`` and reloaded
    with ``load_standards``.
    """
    result: dict[str, Any] = {}
    for section in fields(catalog):
        value = getattr(catalog, section.name)
        section_data: dict[str, Any] = {}
        for f in fields(value):
            item = getattr(value, f.name)
            if f.name == "bitrate_ranges":
                section_data[f.name] = {
                    key: asdict(v) if isinstance(v, BitrateRange) else v
                    for key, v in item.items()
                }
            elif isinstance(item, tuple):
                section_data[f.name] = list(item)
            else:
                section_data[f.name] = item
        result[section.name] = section_data
    return result
