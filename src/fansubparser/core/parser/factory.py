"""Entity dispatch: the primary entry point of the parser.

This module tries the entity grammars in priority order and returns the
first entity any of them produces:

1. Directory (only for names without a media extension)
2. Opening / ending
3. OVA / ONA / OAD
4. Episode
5. Movie

A name no grammar recognises yields None. Nothing here raises for bad input.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from fansubparser.config.settings import ParserSettings
from fansubparser.core.models.entities import FansubEntity
from fansubparser.core.parser.combinators import Parser, ParseInput
from fansubparser.core.parser.context import ParseContext, ParserProfiler
from fansubparser.core.parser.entities import (
    directory,
    episode,
    movie,
    opening_ending,
    original_animation,
)
from fansubparser.core.parser.tags import clean_input_string

logger = logging.getLogger(__name__)

ENTITY_GRAMMARS: tuple[Parser[FansubEntity], ...] = (
    directory.profile("directory"),
    opening_ending.profile("opening_ending"),
    original_animation.profile("original_animation"),
    episode.profile("episode"),
    movie.profile("movie"),
)


def parse_entity(name: str | None, context: ParseContext | None = None) -> FansubEntity | None:
    """Parse a file or directory name into an entity.

    Args:
        name: Raw file or directory name, e.g.
            ``"[HorribleSubs] Working!!! - 07 [720p].mkv"``.
        context: Optional parse context carrying the memo cache and the
            profiling hook.

    Returns:
        The entity produced by the first grammar that matches, or None when
        the name is empty or no grammar recognises it.

    Examples:
        >>> entity = parse_entity("[Commie] Teekyuu - 38 [76ADB77A].mkv")
        >>> entity.series, entity.episode_number
        ('Teekyuu', 38)
    """
    if name is None or not name.strip():
        return None

    cleaned = clean_input_string(name.strip())
    cursor = ParseInput(cleaned, 0, context)
    for grammar in ENTITY_GRAMMARS:
        result = grammar(cursor)
        if result:
            logger.debug("Parsed %r as %s", name, grammar.name)
            return result.value

    logger.debug("No grammar recognised %r", name)
    return None


class FansubEntityParser:
    """Parser bound to a settings object and one shared parse context.

    One instance can be used from several threads; the memo cache and the
    profiler are both lock-protected.

    Examples:
        >>> parser = FansubEntityParser()
        >>> [entity.kind for entity in parser.parse_many(["[Vivid] Kekkai Sensen - 01 [81AA3BB7].mkv"])]
        ['episode']
    """

    def __init__(
        self,
        settings: ParserSettings | None = None,
        context: ParseContext | None = None,
    ) -> None:
        self.settings = settings or ParserSettings()
        self._profiler: ParserProfiler | None = None
        if context is None:
            if self.settings.enable_profiling:
                self._profiler = ParserProfiler()
            context = ParseContext.create(
                memoize=self.settings.enable_memoization,
                cache_max_entries=self.settings.cache_max_entries,
                profiler=self._profiler,
            )
        self.context = context

    @property
    def profiler(self) -> ParserProfiler | None:
        """The profiler collecting grammar timings, when profiling is enabled."""
        return self._profiler

    def parse(self, name: str | None) -> FansubEntity | None:
        return parse_entity(name, self.context)

    def parse_many(
        self,
        names: Iterable[str],
        max_workers: int | None = None,
    ) -> list[FansubEntity | None]:
        """Parse names concurrently, keeping the input order.

        Args:
            names: Names to parse.
            max_workers: Worker threads; defaults to ``settings.max_workers``.

        Returns:
            One entry per name: the entity, or None if it was not recognised.
        """
        names = list(names)
        workers = max_workers or self.settings.max_workers
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(self.parse, names))

        recognised = sum(result is not None for result in results)
        logger.info(
            "Parsed %d names with %d workers: %d recognised, %d unrecognised",
            len(names),
            workers,
            recognised,
            len(names) - recognised,
        )
        cache = self.context.cache
        if cache is not None:
            logger.debug(
                "Parse cache: %d entries, %d hits, %d misses",
                len(cache),
                cache.hits,
                cache.misses,
            )
        return results
