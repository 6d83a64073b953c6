"""Media metadata record and its value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AudioCodec(str, Enum):
    AAC = "AAC"
    AC3 = "AC3"
    DTS = "DTS"
    FLAC = "FLAC"
    MP3 = "MP3"
    OGG = "OGG"


class PixelBitDepth(str, Enum):
    EIGHT_BITS = "8bit"
    TEN_BITS = "10bit"


class VideoCodec(str, Enum):
    H264 = "H264"
    H265 = "H265"
    VC1 = "VC1"
    XVID = "XVID"


class VideoMedia(str, Enum):
    BLURAY = "Bluray"
    DVD = "DVD"
    BROADCAST = "Broadcast"


class VideoMode(str, Enum):
    FOUR_EIGHTY_INTERLACED = "480i"
    FOUR_EIGHTY_PROGRESSIVE = "480p"
    FIVE_SEVENTY_SIX_INTERLACED = "576i"
    FIVE_SEVENTY_SIX_PROGRESSIVE = "576p"
    SEVEN_TWENTY_PROGRESSIVE = "720p"
    TEN_EIGHTY_INTERLACED = "1080i"
    TEN_EIGHTY_PROGRESSIVE = "1080p"


@dataclass(frozen=True)
class Resolution:
    """Frame size in pixels."""

    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class MediaMetadata:
    """Technical attributes classified from a name's tags.

    Every field is optional and is filled by the first tag that matches its
    category. ``unused_tags`` keeps, in order, the tags that matched no
    category at all; it feeds release group detection and is not part of
    equality.

    Attributes:
        audio_codec: Audio codec, e.g. FLAC.
        crc32: Upper-cased 8 digit hexadecimal checksum.
        pixel_bit_depth: 8 or 10 bit video.
        resolution: Frame size parsed from a ``<W>x<H>`` tag.
        video_codec: Video codec, e.g. H264.
        video_media: Source medium, e.g. Blu-ray.
        video_mode: Scan mode and line count, e.g. 720p.
        unused_tags: Tags no category matched.
    """

    audio_codec: AudioCodec | None = None
    crc32: str | None = None
    pixel_bit_depth: PixelBitDepth | None = None
    resolution: Resolution | None = None
    video_codec: VideoCodec | None = None
    video_media: VideoMedia | None = None
    video_mode: VideoMode | None = None
    unused_tags: tuple[str, ...] = field(default=(), compare=False)

    @property
    def is_empty(self) -> bool:
        """True when no category matched any tag."""
        return all(
            value is None
            for value in (
                self.audio_codec,
                self.crc32,
                self.pixel_bit_depth,
                self.resolution,
                self.video_codec,
                self.video_media,
                self.video_mode,
            )
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "audio_codec": self.audio_codec.value if self.audio_codec else None,
            "crc32": self.crc32,
            "pixel_bit_depth": self.pixel_bit_depth.value if self.pixel_bit_depth else None,
            "resolution": (
                {"width": self.resolution.width, "height": self.resolution.height}
                if self.resolution
                else None
            ),
            "video_codec": self.video_codec.value if self.video_codec else None,
            "video_media": self.video_media.value if self.video_media else None,
            "video_mode": self.video_mode.value if self.video_mode else None,
            "unused_tags": list(self.unused_tags),
        }

    def __str__(self) -> str:
        parts = [
            str(value.value if isinstance(value, Enum) else value)
            for value in (
                self.video_mode,
                self.resolution,
                self.video_media,
                self.video_codec,
                self.pixel_bit_depth,
                self.audio_codec,
                self.crc32,
            )
            if value is not None
        ]
        return " ".join(parts)
