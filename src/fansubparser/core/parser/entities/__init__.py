"""Entity grammars, one module per entity kind."""

from fansubparser.core.parser.entities.common import entity_header
from fansubparser.core.parser.entities.directory import directory
from fansubparser.core.parser.entities.episode import episode
from fansubparser.core.parser.entities.movie import movie
from fansubparser.core.parser.entities.oped import opening_ending
from fansubparser.core.parser.entities.original_animation import original_animation

__all__ = [
    "directory",
    "entity_header",
    "episode",
    "movie",
    "opening_ending",
    "original_animation",
]
