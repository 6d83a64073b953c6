"""Entity and metadata records produced by the parser."""

from fansubparser.core.models.entities import (
    EntityHeader,
    FansubDirectoryEntity,
    FansubEntity,
    FansubEpisodeEntity,
    FansubMovieEntity,
    FansubOPEDEntity,
    FansubOriginalAnimationEntity,
    ReleaseType,
    Segment,
)
from fansubparser.core.models.metadata import (
    AudioCodec,
    MediaMetadata,
    PixelBitDepth,
    Resolution,
    VideoCodec,
    VideoMedia,
    VideoMode,
)
from fansubparser.core.models.tags import MediaMetadataTags

__all__ = [
    "AudioCodec",
    "EntityHeader",
    "FansubDirectoryEntity",
    "FansubEntity",
    "FansubEpisodeEntity",
    "FansubMovieEntity",
    "FansubOPEDEntity",
    "FansubOriginalAnimationEntity",
    "MediaMetadata",
    "MediaMetadataTags",
    "PixelBitDepth",
    "ReleaseType",
    "Resolution",
    "Segment",
    "VideoCodec",
    "VideoMedia",
    "VideoMode",
]
