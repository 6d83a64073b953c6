"""Tag and content grammars.

Fansub names wrap their metadata in bracket or parenthesis groups that can
appear before, inside or after the title::

    [Doki] GJ-bu - 01v2 (1920x1080 Hi10P BD FLAC) [AB38621D].mkv
    ^tag^  ^--main----^ ^---------tag----------^ ^--tag---^

The grammars here pull out every tag, isolate the untagged "main content"
and carve series names out of it. Open and close delimiters do not have to
be of the same kind: ``[tag)`` is a tag.
"""

from __future__ import annotations

import logging

from fansubparser.core.parser.combinators import (
    Parser,
    any_of,
    line_up_to,
    scan_for,
    sequence,
    whitespace,
)
from fansubparser.core.parser.grammars import (
    closed_tag_delimiter,
    dash_separator_token,
    file_extension,
    integer,
    letter_or_digit,
    open_tag_delimiter,
    tag_delimiter,
    version_token,
)

logger = logging.getLogger(__name__)

meta_tag_content: Parser[str] = (
    line_up_to(tag_delimiter)
    .contained(open_tag_delimiter, closed_tag_delimiter)
    .map(str.strip)
    .named("meta tag")
)

meta_tag: Parser[str] = meta_tag_content.token()

# Adjacent tags, optionally separated by whitespace. Stops at the first
# character that is neither.
meta_tag_group: Parser[list[str]] = meta_tag.many()

# Every tag anywhere in the input, left to right.
collect_tags: Parser[list[str]] = scan_for(meta_tag_content).many().memoize()

line_up_to_tag_delimiter: Parser[str] = line_up_to(tag_delimiter).map(str.strip)

# Optional leading tag group, the text up to the next delimiter, optional
# trailing tag group. The value is the trimmed text in the middle.
content_between_tag_groups: Parser[str] = (
    meta_tag_group >> line_up_to_tag_delimiter << meta_tag_group
).named("content between tag groups")


def strip_media_extension(text: str) -> str:
    """Drop a trailing media file extension, if any."""
    result = scan_for(file_extension).parse(text)
    if not result:
        return text
    start = result.remainder.position - len(result.value)
    return text[:start].rstrip()


main_content: Parser[str] = (
    content_between_tag_groups.map(strip_media_extension).named("main content").memoize()
)

line_up_to_last_dash_separator_token: Parser[str] = line_up_to(dash_separator_token.last())

# Whitespace, an episode number and an optional "v2" style version, not
# glued to further letters or digits: " 07", " 01v2".
episode_version_token: Parser[tuple[int, int | None]] = (
    sequence(whitespace >> integer, version_token.optional_maybe())
    .not_followed_by(letter_or_digit)
    .named("episode number")
)

line_up_to_episode_number_token: Parser[str] = line_up_to(episode_version_token)

_series_before_dash = scan_for(dash_separator_token).reset_input() >> line_up_to_last_dash_separator_token

# Series name inside a block of main content: everything before the last
# " - " when there is one, otherwise everything before the episode number.
series_in_content: Parser[str] = (
    any_of(_series_before_dash, line_up_to_episode_number_token)
    .map(str.strip)
    .where(bool, "empty series name")
    .named("series name")
)

series_name: Parser[str] = (
    main_content.set_result_as_remainder() >> series_in_content
).memoize()


def clean_input_string(value: str) -> str:
    """Normalise separators in a raw name.

    Underscores become spaces. Dots become spaces too, except the dot of a
    recognised media extension at the very end, which is kept verbatim. A
    name whose last dot is its first or last character has every dot
    replaced. Running this twice gives the same result as running it once.

    Example:
        >>> clean_input_string("[gg]_Binbougami_ga!_-_01_[D909F54C].mkv")
        '[gg] Binbougami ga! - 01 [D909F54C].mkv'
    """
    text = value.replace("_", " ")
    last_dot = text.rfind(".")
    if last_dot == -1:
        return text
    if last_dot in (0, len(text) - 1):
        return text.replace(".", " ")

    suffix = text[last_dot:]
    if file_extension.parse(suffix):
        return text[:last_dot].replace(".", " ") + suffix
    return text.replace(".", " ")
