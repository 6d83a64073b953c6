"""
fansubparser - Fansub File Name Parser

Parses fansub media file and directory names into structured entities:
release group, series, episode, movie, OP/ED, OVA/ONA/OAD and directory
information plus the technical metadata carried in bracket tags.

Example:
    >>> from fansubparser import parse_entity
    >>> entity = parse_entity("[HorribleSubs] Working!!! - 07 [720p].mkv")
    >>> entity.group, entity.series, entity.episode_number
    ('HorribleSubs', 'Working!!!', 7)
"""

__version__ = "0.1.0"

from .core.models import (
    EntityHeader,
    FansubDirectoryEntity,
    FansubEntity,
    FansubEpisodeEntity,
    FansubMovieEntity,
    FansubOPEDEntity,
    FansubOriginalAnimationEntity,
    MediaMetadata,
)
from .core.parser import FansubEntityParser, ParseContext, parse_entity

__all__ = [
    "EntityHeader",
    "FansubDirectoryEntity",
    "FansubEntity",
    "FansubEntityParser",
    "FansubEpisodeEntity",
    "FansubMovieEntity",
    "FansubOPEDEntity",
    "FansubOriginalAnimationEntity",
    "MediaMetadata",
    "ParseContext",
    "parse_entity",
]
