"""Directory grammar.

Anything without a media file extension is treated as a directory. The
series name runs up to an episode range (``01-03``), a volume number
(``Vol. 2``) or a dash separator in front of either; both the range and the
volume are optional::

    [Coalgirls]_Cross_Ange_01-03_(1280x720_Blu-ray_FLAC)
    Kokoro Connect (2012) [Doki-Chihiro][1920x1080 Hi10P BD FLAC]
"""

from __future__ import annotations

from dataclasses import replace

from fansubparser.core.models.entities import FansubDirectoryEntity
from fansubparser.core.parser.combinators import (
    Failure,
    Parser,
    ParseInput,
    Result,
    Success,
    any_of,
    line_up_to,
    preceded_by,
    scan_for,
    sequence,
    string_ignore_case,
    whitespace,
)
from fansubparser.core.parser.entities.common import entity_header, trim_series
from fansubparser.core.parser.grammars import (
    dash,
    dash_separator_token,
    file_extension,
    integer,
    letter,
    letter_or_digit,
    non_digit,
    word_start,
)
from fansubparser.core.parser.tags import content_between_tag_groups

volume_number: Parser[int] = (
    preceded_by(lambda ch: ch is None or not ch.isalpha(), "word start")
    >> any_of(string_ignore_case("VOLUME"), string_ignore_case("VOL")).not_followed_by(letter)
    >> non_digit.many()
    >> integer
).named("volume number")

episode_range: Parser[tuple[int, int]] = (
    word_start
    >> sequence(
        integer,
        whitespace.many() >> dash << whitespace.many(),
        integer,
    ).not_followed_by(letter_or_digit)
).map(lambda values: (values[0], values[2])).named("episode range")

_series_terminator = any_of(
    episode_range,
    volume_number,
    dash_separator_token >> episode_range,
    dash_separator_token >> volume_number,
)

series_before_range_or_volume: Parser[str | None] = (
    content_between_tag_groups.set_result_as_remainder() >> line_up_to(_series_terminator)
).map(trim_series)

_has_extension = scan_for(file_extension).was_successful()
_volume = scan_for(volume_number).optional_maybe().reset_input()
_range = scan_for(episode_range).optional_maybe().reset_input()


def _directory(inp: ParseInput) -> Result:
    if _has_extension(inp).value:
        return Failure(inp, "name has a media file extension", ("directory name",))

    header, series, volume, range_ = sequence(
        entity_header,
        series_before_range_or_volume.reset_input(),
        _volume,
        _range,
    )(inp).value

    entity = FansubDirectoryEntity(
        header=replace(header, series=series),
        volume=volume,
        episode_range=range_,
    )
    return Success(entity, inp.seek(len(inp.source)))


directory: Parser[FansubDirectoryEntity] = Parser(_directory, "directory")
