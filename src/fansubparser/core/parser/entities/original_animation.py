"""OVA, ONA and OAD grammar.

The release type token follows the series name, either after a dash
separator or after plain whitespace. Whatever comes after it holds an
optional episode number and an optional title, in either order::

    [TastyMelon] Black Lagoon OVA - Roberta's Blood Trail - 04 [BD][480p][926257C1].mkv
    [WCP] Nisekoi OAD 3 - Bath House & Service [576p][BCBBA0B2].mkv
"""

from __future__ import annotations

from dataclasses import replace

from fansubparser.core.models.entities import FansubOriginalAnimationEntity, ReleaseType
from fansubparser.core.parser.combinators import (
    Parser,
    any_of,
    filter_out,
    line_up_to,
    sequence,
    string_ignore_case,
    whitespace,
)
from fansubparser.core.parser.entities.common import entity_header, in_main_content, trim_series
from fansubparser.core.parser.grammars import (
    dash_separator_token,
    integer,
    letter_or_digit,
    line,
    version_token,
    word_start,
)

release_type_token: Parser[ReleaseType] = (
    any_of(
        string_ignore_case("OVA"),
        string_ignore_case("ONA"),
        string_ignore_case("OAD"),
    )
    .map(lambda text: ReleaseType(text.upper()))
    .not_followed_by(letter_or_digit)
    .named("OVA/ONA/OAD")
)

_release_type_lead: Parser[ReleaseType] = any_of(dash_separator_token, whitespace) >> release_type_token

episode_number_token: Parser[tuple[int, int | None]] = (
    word_start
    >> sequence(integer, version_token.optional_maybe()).not_followed_by(letter_or_digit)
).named("episode number")

# Text before the number, the number if any, text after it.
_title_and_episode = sequence(
    line_up_to(episode_number_token),
    episode_number_token.optional_maybe(),
    line,
)


def split_title_and_episode(text: str) -> tuple[str | None, int | None]:
    """Split the text after the release type into (title, episode number).

    Dash separators are dropped first. The first standalone number is the
    episode; everything else, joined, is the title.
    """
    cleaned = filter_out(dash_separator_token).parse(text).value
    before, number, after = _title_and_episode.parse(cleaned).value
    title = " ".join(part.strip() for part in (before, after) if part.strip())
    episode = number[0] if number is not None else None
    return title or None, episode


def _build(values: tuple) -> FansubOriginalAnimationEntity:
    header, (series_text, release_type, rest) = values
    title, episode_number = split_title_and_episode(rest)
    return FansubOriginalAnimationEntity(
        header=replace(header, series=trim_series(series_text)),
        release_type=release_type,
        episode_number=episode_number,
        title=title,
    )


_release_in_content = in_main_content >> sequence(
    line_up_to(_release_type_lead),
    _release_type_lead,
    line,
).where(lambda values: trim_series(values[0]) is not None, "empty series name")

original_animation: Parser[FansubOriginalAnimationEntity] = (
    sequence(entity_header, _release_in_content).map(_build).named("original animation")
)
