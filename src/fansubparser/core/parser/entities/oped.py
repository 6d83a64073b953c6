"""Opening and ending theme grammar.

Recognises names such as::

    [Commie] Monogatari Series Second Season - NCOP 3 [BD 1080p AAC] [EDF5B72C].mkv
    [Final8]Mirai Nikki (Creditless OP3 - The Live World) (BD 10-bit 1280x720 x264 AAC)[8F8B757F].mkv

The OP/ED token is looked for as the last token of the main content first.
When the title carries no token, the unused tags are searched instead and
the series name comes from the header.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, replace

from fansubparser.core.models.entities import FansubOPEDEntity, Segment
from fansubparser.core.parser.combinators import (
    Failure,
    Parser,
    ParseInput,
    Result,
    Success,
    any_of,
    line_up_to,
    scan_for,
    sequence,
    string_ignore_case,
    whitespace,
)
from fansubparser.core.parser.entities.common import entity_header, in_main_content, trim_series
from fansubparser.core.parser.grammars import integer, letter_or_digit, version_token, word_start
from fansubparser.core.parser.metadata import unused_tags

CLEAN_TAG_PATTERN = re.compile(r"(?<![A-Z0-9])CLEAN(?![A-Z0-9])")


@dataclass(frozen=True)
class OPEDToken:
    """Parsed ``NCOP3``-style token."""

    segment: Segment
    sequence_number: int | None = None
    no_credits: bool = False


creditless_prefix: Parser[str] = any_of(
    string_ignore_case("CREDITLESS"),
    string_ignore_case("NONCREDIT"),
    string_ignore_case("NON-CREDIT"),
    string_ignore_case("NC"),
).named("creditless prefix")

opening_token: Parser[Segment] = any_of(
    string_ignore_case("OPENING"),
    string_ignore_case("OP"),
).map(lambda _: Segment.OP)

ending_token: Parser[Segment] = any_of(
    string_ignore_case("ENDING"),
    string_ignore_case("ED"),
).map(lambda _: Segment.ED)

segment_token: Parser[Segment] = any_of(opening_token, ending_token).named("OP/ED")


def _build_token(values: tuple) -> OPEDToken:
    prefix, segment, sequence_number, _version = values
    return OPEDToken(segment=segment, sequence_number=sequence_number, no_credits=prefix is not None)


oped_token: Parser[OPEDToken] = (
    word_start
    >> sequence(
        creditless_prefix.optional_maybe(),
        whitespace.many() >> segment_token,
        (whitespace.many() >> integer).optional_maybe(),
        version_token.optional_maybe(),
    ).not_followed_by(letter_or_digit)
).map(_build_token).named("OP/ED token")

# Title text before the last OP/ED token, and the token itself.
token_after_series: Parser[tuple[str, OPEDToken]] = sequence(
    line_up_to(oped_token.last()),
    oped_token,
)

_find_oped_token = scan_for(oped_token)


def find_token_in_tags(tags: Sequence[str]) -> OPEDToken | None:
    """First OP/ED token found inside any of ``tags``."""
    for tag in tags:
        result = _find_oped_token.parse(tag)
        if result:
            return result.value
    return None


def has_clean_tag(tags: Sequence[str]) -> bool:
    """True when a tag marks the video as clean, e.g. ``(Clean)``."""
    return any(CLEAN_TAG_PATTERN.search(tag.upper()) for tag in tags)


_content_token = in_main_content >> token_after_series
_header_and_tags = sequence(entity_header, unused_tags.reset_input())


def _opening_ending(inp: ParseInput) -> Result:
    header, tags = _header_and_tags(inp).value

    found = _content_token(inp)
    if found:
        series_text, token = found.value
        series = trim_series(series_text)
    else:
        token = find_token_in_tags(tags)
        series = header.series

    if token is None:
        return Failure(inp, "no OP/ED token", ("OP/ED token",))
    if series is None:
        return Failure(inp, "OP/ED without a series name", ("series name",))

    entity = FansubOPEDEntity(
        header=replace(header, series=series),
        segment=token.segment,
        sequence_number=token.sequence_number,
        no_credits=token.no_credits or has_clean_tag(tags),
    )
    return Success(entity, inp.seek(len(inp.source)))


opening_ending: Parser[FansubOPEDEntity] = Parser(_opening_ending, "opening/ending")
