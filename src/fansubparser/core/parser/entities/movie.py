"""Movie grammar.

A movie number can be written three ways: ``#3``, ``EP3`` or an upper-case
Roman numeral word (``III``, ``IX``). The series name runs up to the number;
an optional dash separator and subtitle may follow it::

    [Group] Kara no Kyoukai #5 - Mujun Rasen [BD 1080p].mkv
    [Group] Evangelion EP 2 [720p].mkv
    [Group] Ghost in the Shell II - Innocence (1920x1080).mkv

A name with a series but no number is still a movie; the subtitle then is
whatever follows the last dash separator.
"""

from __future__ import annotations

import re
from dataclasses import replace

from fansubparser.core.models.entities import EntityHeader, FansubMovieEntity
from fansubparser.core.parser.combinators import (
    Failure,
    Parser,
    ParseInput,
    Result,
    Success,
    char,
    line_up_to,
    preceded_by,
    sequence,
    string,
    string_ignore_case,
    whitespace,
)
from fansubparser.core.parser.entities.common import entity_header, in_main_content, trim_series
from fansubparser.core.parser.grammars import dash_separator_token, integer, letter_or_digit, line, word_start
from fansubparser.core.parser.roman_numerals import translate_roman_numeral
from fansubparser.core.parser.tags import line_up_to_last_dash_separator_token

number_sign_movie_number: Parser[int] = (string("#") >> whitespace.many() >> integer).named("#<n>")

episode_prefixed_movie_number: Parser[int] = (
    word_start >> string_ignore_case("EP") >> whitespace.many() >> integer
).not_followed_by(letter_or_digit).named("EP<n>")

_DASH_SEPARATOR_BEFORE = re.compile(r"\s-\s$")


def _not_after_dash_separator(inp: ParseInput) -> Result:
    # A word right after a dash separator starts the subtitle.
    if _DASH_SEPARATOR_BEFORE.search(inp.source, 0, inp.position):
        return Failure(inp, "roman numeral after a dash separator", ("movie number",))
    return Success(None, inp)


roman_numeral_movie_number: Parser[int] = (
    preceded_by(lambda ch: ch is not None and ch.isspace(), "whitespace")
    >> Parser(_not_after_dash_separator, "not after dash separator")
    >> char("IVX", "roman numeral").at_least_once().text().not_followed_by(letter_or_digit)
).map(translate_roman_numeral).named("roman numeral")

MOVIE_NUMBER_NOTATIONS: tuple[Parser[int], ...] = (
    number_sign_movie_number,
    episode_prefixed_movie_number,
    roman_numeral_movie_number,
)

_subtitle = (dash_separator_token.optional_maybe() >> line).map(lambda text: text.strip() or None)

# (series text, movie number, subtitle) for each notation, tried in order.
_numbered_movies = tuple(
    sequence(line_up_to(notation), notation, _subtitle) for notation in MOVIE_NUMBER_NOTATIONS
)

_after_last_dash = line_up_to_last_dash_separator_token >> dash_separator_token >> line


def _numbered(content: ParseInput) -> tuple[str | None, int, str | None] | None:
    for notation in _numbered_movies:
        result = notation(content)
        if not result:
            continue
        series_text, number, subtitle = result.value
        series = trim_series(series_text)
        if series is not None:
            return series, number, subtitle
    return None


def _unnumbered(content: ParseInput, header: EntityHeader) -> tuple[str | None, None, str | None]:
    subtitle = None
    found = _after_last_dash(content)
    if found and found.value.strip():
        subtitle = found.value.strip()
    return header.series, None, subtitle


def _movie(inp: ParseInput) -> Result:
    header = entity_header(inp).value
    content = in_main_content(inp).remainder

    series, movie_number, subtitle = _numbered(content) or _unnumbered(content, header)
    if series is None:
        return Failure(inp, "movie without a series name", ("series name",))

    entity = FansubMovieEntity(
        header=replace(header, series=series),
        movie_number=movie_number,
        subtitle=subtitle,
    )
    return Success(entity, inp.seek(len(inp.source)))


movie: Parser[FansubMovieEntity] = Parser(_movie, "movie")
