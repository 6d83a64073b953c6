"""Fansub name grammars and the entity dispatcher."""

from fansubparser.core.parser.context import ParseCache, ParseContext, ParserProfiler
from fansubparser.core.parser.factory import FansubEntityParser, parse_entity
from fansubparser.core.parser.tags import clean_input_string

__all__ = [
    "FansubEntityParser",
    "ParseCache",
    "ParseContext",
    "ParserProfiler",
    "clean_input_string",
    "parse_entity",
]
