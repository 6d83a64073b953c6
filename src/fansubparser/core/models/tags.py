"""Lookup tables mapping tag spellings to metadata values.

Spellings are upper-case; tags are upper-cased before lookup. Within a
table the first matching entry wins, so longer spellings that contain a
shorter one come first.
"""

from __future__ import annotations

from fansubparser.core.models.metadata import (
    AudioCodec,
    PixelBitDepth,
    VideoCodec,
    VideoMedia,
    VideoMode,
)


class MediaMetadataTags:
    """Known tag spellings, grouped by metadata category."""

    AUDIO_CODECS: tuple[tuple[str, AudioCodec], ...] = (
        ("AAC", AudioCodec.AAC),
        ("AC3", AudioCodec.AC3),
        ("DTS", AudioCodec.DTS),
        ("FLAC", AudioCodec.FLAC),
        ("MP3", AudioCodec.MP3),
        ("OGG", AudioCodec.OGG),
    )

    PIXEL_BIT_DEPTHS: tuple[tuple[str, PixelBitDepth], ...] = (
        ("8BIT", PixelBitDepth.EIGHT_BITS),
        ("8 BIT", PixelBitDepth.EIGHT_BITS),
        ("8-BIT", PixelBitDepth.EIGHT_BITS),
        ("10BIT", PixelBitDepth.TEN_BITS),
        ("10 BIT", PixelBitDepth.TEN_BITS),
        ("10-BIT", PixelBitDepth.TEN_BITS),
        ("HI10P", PixelBitDepth.TEN_BITS),
    )

    VIDEO_CODECS: tuple[tuple[str, VideoCodec], ...] = (
        ("H264", VideoCodec.H264),
        ("X264", VideoCodec.H264),
        ("AVC", VideoCodec.H264),
        ("H265", VideoCodec.H265),
        ("X265", VideoCodec.H265),
        ("HEVC", VideoCodec.H265),
        ("VC1", VideoCodec.VC1),
        ("XVID", VideoCodec.XVID),
    )

    VIDEO_MEDIA: tuple[tuple[str, VideoMedia], ...] = (
        ("BDRIP", VideoMedia.BLURAY),
        ("BLURAY", VideoMedia.BLURAY),
        ("BLU-RAY", VideoMedia.BLURAY),
        ("BD", VideoMedia.BLURAY),
        ("DVDRIP", VideoMedia.DVD),
        ("DVD", VideoMedia.DVD),
        ("TV", VideoMedia.BROADCAST),
    )

    VIDEO_MODES: tuple[tuple[str, VideoMode], ...] = (
        ("480I", VideoMode.FOUR_EIGHTY_INTERLACED),
        ("480 I", VideoMode.FOUR_EIGHTY_INTERLACED),
        ("480P", VideoMode.FOUR_EIGHTY_PROGRESSIVE),
        ("576I", VideoMode.FIVE_SEVENTY_SIX_INTERLACED),
        ("576 I", VideoMode.FIVE_SEVENTY_SIX_INTERLACED),
        ("576P", VideoMode.FIVE_SEVENTY_SIX_PROGRESSIVE),
        ("576 P", VideoMode.FIVE_SEVENTY_SIX_PROGRESSIVE),
        ("720P", VideoMode.SEVEN_TWENTY_PROGRESSIVE),
        ("1080I", VideoMode.TEN_EIGHTY_INTERLACED),
        ("1080 I", VideoMode.TEN_EIGHTY_INTERLACED),
        ("1080P", VideoMode.TEN_EIGHTY_PROGRESSIVE),
    )
