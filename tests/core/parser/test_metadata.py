"""Tests for the metadata tag classifier and release group detection."""

from __future__ import annotations

import pytest

from fansubparser.core.models.metadata import (
    AudioCodec,
    MediaMetadata,
    PixelBitDepth,
    Resolution,
    VideoCodec,
    VideoMedia,
    VideoMode,
)
from fansubparser.core.parser.metadata import (
    classify_tags,
    fansub_group,
    find_crc32,
    find_resolution,
    is_date,
    media_metadata,
    parse_media_metadata,
    select_group,
    unused_tags,
)


class TestClassifyTags:
    """Classifying tags into metadata categories."""

    def test_one_tag_many_categories(self) -> None:
        """A single tag can fill several fields at once."""
        metadata = classify_tags(["1920x1080 Hi10P BD FLAC"])

        assert metadata.resolution == Resolution(1920, 1080)
        assert metadata.pixel_bit_depth == PixelBitDepth.TEN_BITS
        assert metadata.video_media == VideoMedia.BLURAY
        assert metadata.audio_codec == AudioCodec.FLAC
        assert metadata.video_codec is None
        assert metadata.unused_tags == ()

    def test_first_match_wins(self) -> None:
        """A later tag never overwrites an earlier match."""
        metadata = classify_tags(["720p", "1080p"])
        assert metadata.video_mode == VideoMode.SEVEN_TWENTY_PROGRESSIVE

    def test_unused_tags_keep_order(self) -> None:
        """Unmatched tags are kept in the order they appeared."""
        metadata = classify_tags(["Commie", "76ADB77A", "Extra"])
        assert metadata.crc32 == "76ADB77A"
        assert metadata.unused_tags == ("Commie", "Extra")

    @pytest.mark.parametrize(
        ("tag", "field", "expected"),
        [
            ("x264", "video_codec", VideoCodec.H264),
            ("HEVC", "video_codec", VideoCodec.H265),
            ("10-bit", "pixel_bit_depth", PixelBitDepth.TEN_BITS),
            ("8bit", "pixel_bit_depth", PixelBitDepth.EIGHT_BITS),
            ("BDRip", "video_media", VideoMedia.BLURAY),
            ("Blu-ray", "video_media", VideoMedia.BLURAY),
            ("DVD", "video_media", VideoMedia.DVD),
            ("1080p-FLAC", "video_mode", VideoMode.TEN_EIGHTY_PROGRESSIVE),
            ("1080p-FLAC", "audio_codec", AudioCodec.FLAC),
            ("480p", "video_mode", VideoMode.FOUR_EIGHTY_PROGRESSIVE),
            ("AC3", "audio_codec", AudioCodec.AC3),
        ],
    )
    def test_known_spellings(self, tag: str, field: str, expected: object) -> None:
        """Common spellings map to their category value."""
        assert getattr(classify_tags([tag]), field) == expected

    def test_spellings_must_stand_alone(self) -> None:
        """A spelling glued to other letters is not a match."""
        metadata = classify_tags(["ABDUCTION"])
        assert metadata.is_empty
        assert metadata.unused_tags == ("ABDUCTION",)

    def test_lookup_is_case_insensitive(self) -> None:
        """Tags are matched regardless of case."""
        assert classify_tags(["flac"]).audio_codec == AudioCodec.FLAC


class TestHelpers:
    """CRC32, resolution and date helpers."""

    def test_find_crc32_upper_cases(self) -> None:
        """Checksums are reported upper-case."""
        assert find_crc32("76adb77a") == "76ADB77A"

    @pytest.mark.parametrize("tag", ["BD", "DEADBEEF1", "1280x720"])
    def test_find_crc32_rejects(self, tag: str) -> None:
        """Only standalone eight digit hex values are checksums."""
        assert find_crc32(tag) is None

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("1280x720", Resolution(1280, 720)),
            ("BD 1920 x 1080 FLAC", Resolution(1920, 1080)),
            ("848X480", Resolution(848, 480)),
        ],
    )
    def test_find_resolution(self, tag: str, expected: Resolution) -> None:
        """Resolutions are read from WIDTHxHEIGHT."""
        assert find_resolution(tag) == expected

    def test_find_resolution_missing(self) -> None:
        """Tags without a frame size give None."""
        assert find_resolution("1080p") is None

    @pytest.mark.parametrize("text", ["2012", "2015-04-01", "March 2014", "01/02/2015"])
    def test_is_date(self, text: str) -> None:
        """Years and common date spellings are dates."""
        assert is_date(text)

    @pytest.mark.parametrize("text", ["", "Doki-Chihiro", "Commie", "12345"])
    def test_is_not_date(self, text: str) -> None:
        """Group names and arbitrary numbers are not dates."""
        assert not is_date(text)

    def test_select_group_skips_dates(self) -> None:
        """The first non-date unused tag is the group."""
        assert select_group(["2012", "Doki-Chihiro"]) == "Doki-Chihiro"
        assert select_group(["2012"]) is None
        assert select_group([]) is None

    def test_parse_media_metadata_none_when_empty(self) -> None:
        """No recognised tag at all gives None."""
        assert parse_media_metadata(["Group", "Other"]) is None
        assert parse_media_metadata(["720p"]) == MediaMetadata(
            video_mode=VideoMode.SEVEN_TWENTY_PROGRESSIVE
        )


class TestMetadataParsers:
    """Grammars over a whole name."""

    def test_media_metadata_from_name(self) -> None:
        """Metadata is collected from every tag in the name."""
        result = media_metadata.parse("[Commie] Teekyuu - 38 [76ADB77A].mkv")
        assert result.value.crc32 == "76ADB77A"

    def test_media_metadata_fails_without_tags(self) -> None:
        """A name without recognised tags has no metadata."""
        assert not media_metadata.parse("[Group] Show - 01.mkv")

    def test_fansub_group(self) -> None:
        """The group is the first unused tag."""
        assert fansub_group.parse("[Commie] Teekyuu - 38 [76ADB77A].mkv").value == "Commie"

    def test_fansub_group_skips_year(self) -> None:
        """A year tag before the group is not the group."""
        name = "Kokoro Connect (2012) [Doki-Chihiro][1920x1080 Hi10P BD FLAC]"
        assert fansub_group.parse(name).value == "Doki-Chihiro"

    def test_fansub_group_without_metadata(self) -> None:
        """The group is found even when no tag is metadata."""
        assert fansub_group.parse("[Group] Show - 01.mkv").value == "Group"

    def test_fansub_group_missing(self) -> None:
        """A name without tags has no group."""
        assert not fansub_group.parse("Show - 01.mkv")

    def test_unused_tags(self) -> None:
        """Every tag is unused when nothing was recognised."""
        assert unused_tags.parse("[A] Show [B]").value == ("A", "B")
