"""Regular episode grammar.

The episode number is the last whitespace-prefixed number in the main
content, with an optional ``v<n>`` version. Nothing but whitespace may follow
it, which keeps titles such as ``Movie 2 - Subtitle`` away from this grammar.
"""

from __future__ import annotations

from fansubparser.core.models.entities import FansubEpisodeEntity
from fansubparser.core.parser.combinators import Parser, scan_for, sequence
from fansubparser.core.parser.entities.common import entity_header, in_main_content
from fansubparser.core.parser.grammars import line
from fansubparser.core.parser.tags import episode_version_token

_trailing_blank = line.where(lambda rest: not rest.strip(), "text after the episode number")

last_episode_number: Parser[tuple[int, int | None]] = (
    in_main_content >> (scan_for(episode_version_token.last()) << _trailing_blank)
)


def _build(values: tuple) -> FansubEpisodeEntity:
    header, (episode_number, version) = values
    return FansubEpisodeEntity(header=header, episode_number=episode_number, version=version)


episode: Parser[FansubEpisodeEntity] = (
    sequence(entity_header, last_episode_number).map(_build).named("episode")
)
