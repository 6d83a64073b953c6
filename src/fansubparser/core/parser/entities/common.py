"""Grammars shared by every entity kind."""

from __future__ import annotations

from fansubparser.core.models.entities import EntityHeader
from fansubparser.core.parser.combinators import Parser, scan_for, sequence
from fansubparser.core.parser.grammars import file_extension
from fansubparser.core.parser.metadata import fansub_group, media_metadata
from fansubparser.core.parser.tags import main_content, series_name


def _build_header(values: tuple) -> EntityHeader:
    metadata, group, series, extension = values
    return EntityHeader(group=group, series=series, metadata=metadata, extension=extension)


# Metadata, release group, series name and extension, each looked up from the
# cursor's position and each optional. Never fails and consumes nothing.
entity_header: Parser[EntityHeader] = (
    sequence(
        media_metadata.optional_maybe().reset_input(),
        fansub_group.optional_maybe().reset_input(),
        series_name.optional_maybe().reset_input(),
        scan_for(file_extension).optional_maybe().reset_input(),
    )
    .map(_build_header)
    .named("entity header")
)

# Continue on the untagged title text instead of the whole name.
in_main_content: Parser[str] = main_content.set_result_as_remainder()


def trim_series(text: str | None) -> str | None:
    """Strip whitespace and a trailing dash from a series fragment; None if blank."""
    if text is None:
        return None
    trimmed = text.strip().rstrip("-").strip()
    return trimmed or None
