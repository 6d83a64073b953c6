"""Character and token grammars.

The atomic recognisers every other grammar is assembled from. Each one
matches a single token at the cursor and fails without consuming input
otherwise.
"""

from __future__ import annotations

from fansubparser.core.parser.combinators import (
    Parser,
    ParseInput,
    Result,
    Success,
    any_of,
    char,
    digit,
    integer,
    preceded_by,
    sequence,
    string_ignore_case,
    whitespace,
)
from fansubparser.shared.constants import ParserDefaults

__all__ = [
    "MEDIA_EXTENSIONS",
    "closed_tag_delimiter",
    "dash",
    "dash_separator_token",
    "digit",
    "dot",
    "file_extension",
    "integer",
    "letter",
    "letter_or_digit",
    "line",
    "non_digit",
    "open_tag_delimiter",
    "tag_delimiter",
    "underscore",
    "version_token",
    "whitespace",
    "word_start",
]

MEDIA_EXTENSIONS = ParserDefaults.MEDIA_EXTENSIONS

dash = char("-", "dash")
dot = char(".", "dot")
underscore = char("_", "underscore")
letter = char(str.isalpha, "letter")
letter_or_digit = char(str.isalnum, "letter or digit")
non_digit = char(lambda ch: ch not in "0123456789", "non-digit")

open_tag_delimiter = char("[(", "open tag delimiter")
closed_tag_delimiter = char("])", "closed tag delimiter")
tag_delimiter = any_of(open_tag_delimiter, closed_tag_delimiter).named("tag delimiter")

# Exactly one whitespace character on each side: " - "
dash_separator_token = (
    sequence(whitespace, dash, whitespace).map("".join).named("dash separator")
)

# Start of a word: start of input or a non-alphanumeric character before the cursor
word_start = preceded_by(lambda ch: ch is None or not ch.isalnum(), "word start")

version_token = (string_ignore_case("v") >> integer).named("version")


def _line(inp: ParseInput) -> Result:
    return Success(inp.remaining, inp.seek(len(inp.source)))


line: Parser[str] = Parser(_line, "line")

# "." followed by a known container extension, at the very end of the input.
# The extension is returned exactly as written.
file_extension: Parser[str] = (
    sequence(
        dot,
        any_of(*(string_ignore_case(extension).end() for extension in MEDIA_EXTENSIONS)),
    )
    .map("".join)
    .named("file extension")
)
