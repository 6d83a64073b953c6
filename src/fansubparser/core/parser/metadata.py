"""Metadata tag classifier.

Each tag is checked against seven independent categories: audio codec,
CRC32 checksum, pixel bit depth, resolution, video codec, video media and
video mode. A tag may match several categories at once (``"1920x1080 Hi10P
BD FLAC"`` sets four fields). Within a category the first tag that matches
wins; later matches never overwrite it. Tags that match no category are
kept as "unused" tags, which is where the release group name usually ends
up.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import date, datetime
from enum import Enum
from typing import Any, TypeVar

from fansubparser.core.models.metadata import MediaMetadata, Resolution
from fansubparser.core.models.tags import MediaMetadataTags
from fansubparser.core.parser.combinators import Parser
from fansubparser.core.parser.tags import collect_tags

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

CRC32_PATTERN = re.compile(r"(?<![0-9A-Z])[0-9A-F]{8}(?![0-9A-Z])")
RESOLUTION_PATTERN = re.compile(r"(\D*)(\d{3,4})\s?x\s?(\d{3,4})(\D*)", re.IGNORECASE)

DATE_FORMATS: tuple[str, ...] = (
    "%Y",
    "%Y-%m",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%d-%m-%Y",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%d %B %Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%b %d %Y",
    "%B %Y",
)


def _compile_table(table: Sequence[tuple[str, E]]) -> tuple[tuple[re.Pattern[str], E], ...]:
    return tuple(
        (re.compile(rf"(?<![A-Z0-9]){re.escape(spelling)}(?![A-Z0-9])"), value)
        for spelling, value in table
    )


_AUDIO_CODECS = _compile_table(MediaMetadataTags.AUDIO_CODECS)
_PIXEL_BIT_DEPTHS = _compile_table(MediaMetadataTags.PIXEL_BIT_DEPTHS)
_VIDEO_CODECS = _compile_table(MediaMetadataTags.VIDEO_CODECS)
_VIDEO_MEDIA = _compile_table(MediaMetadataTags.VIDEO_MEDIA)
_VIDEO_MODES = _compile_table(MediaMetadataTags.VIDEO_MODES)


def _lookup(tag: str, table: tuple[tuple[re.Pattern[str], E], ...]) -> E | None:
    upper = tag.upper()
    for pattern, value in table:
        if pattern.search(upper):
            return value
    return None


def find_crc32(tag: str) -> str | None:
    match = CRC32_PATTERN.search(tag.upper())
    return match.group(0) if match else None


def find_resolution(tag: str) -> Resolution | None:
    match = RESOLUTION_PATTERN.search(tag)
    if match is None:
        return None
    return Resolution(int(match.group(2)), int(match.group(3)))


def _classify_tag(tag: str) -> dict[str, Any]:
    found = {
        "audio_codec": _lookup(tag, _AUDIO_CODECS),
        "crc32": find_crc32(tag),
        "pixel_bit_depth": _lookup(tag, _PIXEL_BIT_DEPTHS),
        "resolution": find_resolution(tag),
        "video_codec": _lookup(tag, _VIDEO_CODECS),
        "video_media": _lookup(tag, _VIDEO_MEDIA),
        "video_mode": _lookup(tag, _VIDEO_MODES),
    }
    return {name: value for name, value in found.items() if value is not None}


def classify_tags(tags: Sequence[str]) -> MediaMetadata:
    """Classify every tag and build a metadata record.

    Args:
        tags: Tag contents in the order they appear in the name.

    Returns:
        A record holding the first match for each category plus the tags that
        matched nothing. The record is empty when nothing matched.
    """
    fields: dict[str, Any] = {}
    unused: list[str] = []
    for tag in tags:
        matches = _classify_tag(tag)
        if not matches:
            unused.append(tag)
            continue
        if len(matches) > 1:
            logger.debug("Tag %r matched several categories: %s", tag, sorted(matches))
        for name, value in matches.items():
            fields.setdefault(name, value)
    return MediaMetadata(**fields, unused_tags=tuple(unused))


def parse_media_metadata(tags: Sequence[str]) -> MediaMetadata | None:
    """Like :func:`classify_tags`, but None when no tag matched any category."""
    metadata = classify_tags(tags)
    return None if metadata.is_empty else metadata


def is_date(text: str) -> bool:
    """True when ``text`` reads as a date or a bare four digit year."""
    candidate = text.strip()
    if not candidate:
        return False
    try:
        date.fromisoformat(candidate)
    except ValueError:
        pass
    else:
        return True
    for date_format in DATE_FORMATS:
        try:
            datetime.strptime(candidate, date_format)
        except ValueError:
            continue
        return True
    return False


def select_group(unused_tags: Sequence[str]) -> str | None:
    """Pick the release group: the first unused tag that is not a date."""
    for tag in unused_tags:
        if tag and not is_date(tag):
            return tag
    return None


media_metadata: Parser[MediaMetadata] = (
    collect_tags.map(parse_media_metadata)
    .where(lambda metadata: metadata is not None, "no recognised metadata tags")
    .named("media metadata")
    .memoize()
)

# Tags no category matched, from every tag in the input. When nothing matched
# at all this is every tag.
unused_tags: Parser[tuple[str, ...]] = (
    collect_tags.map(lambda tags: classify_tags(tags).unused_tags).named("unused tags").memoize()
)

fansub_group: Parser[str] = (
    unused_tags.map(select_group)
    .where(lambda group: group is not None, "no release group tag")
    .named("fansub group")
    .memoize()
)
