"""Parse context: memoization cache and profiling hook.

A :class:`ParseContext` travels on every :class:`ParseInput` cursor. It owns
the only mutable state the grammars touch, so a batch of names can share one
context across threads while independent callers use separate ones.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fansubparser.shared.constants import ParserDefaults

if TYPE_CHECKING:
    from fansubparser.core.parser.combinators import Result

logger = logging.getLogger(__name__)

ProfileHook = Callable[[str, float], None]


class ParseCache:
    """Thread-safe, size-bounded LRU cache of parse results.

    Values are computed outside the lock. Two threads missing on the same key
    may both compute it; grammars are pure, so either result is correct.
    """

    def __init__(self, max_entries: int = ParserDefaults.CACHE_MAX_ENTRIES) -> None:
        if max_entries <= 0:
            msg = f"max_entries must be positive, got {max_entries}"
            raise ValueError(msg)
        self.max_entries = max_entries
        self._entries: OrderedDict[Hashable, Result] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: Hashable, compute: Callable[[], Result]) -> Result:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                return self._entries[key]
            self.misses += 1

        result = compute()

        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return result

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


@dataclass(frozen=True)
class ProfileRecord:
    """Accumulated timings for one named grammar."""

    parser_name: str
    call_count: int
    total_seconds: float

    @property
    def average_seconds(self) -> float:
        return self.total_seconds / self.call_count if self.call_count else 0.0

    def to_dict(self) -> dict[str, str | int | float]:
        return {
            "parser_name": self.parser_name,
            "call_count": self.call_count,
            "total_seconds": self.total_seconds,
            "average_seconds": self.average_seconds,
        }


class ParserProfiler:
    """Collects (grammar name, elapsed seconds) samples.

    Instances are callable so they can be passed straight in as a
    :data:`ProfileHook`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._totals: dict[str, tuple[int, float]] = {}

    def __call__(self, parser_name: str, elapsed: float) -> None:
        self.record(parser_name, elapsed)

    def record(self, parser_name: str, elapsed: float) -> None:
        with self._lock:
            count, total = self._totals.get(parser_name, (0, 0.0))
            self._totals[parser_name] = (count + 1, total + elapsed)

    def records(self) -> list[ProfileRecord]:
        """Return the records, slowest grammar first."""
        with self._lock:
            snapshot = dict(self._totals)
        records = [
            ProfileRecord(name, count, total) for name, (count, total) in snapshot.items()
        ]
        return sorted(records, key=lambda record: record.total_seconds, reverse=True)

    def to_dicts(self) -> list[dict[str, Any]]:
        """Return the records as JSON-ready dicts, slowest grammar first."""
        return [record.to_dict() for record in self.records()]

    def log_summary(self) -> None:
        for record in self.records():
            logger.info(
                "Grammar %s: %d calls, %.3f ms total",
                record.parser_name,
                record.call_count,
                record.total_seconds * 1000,
            )


@dataclass(eq=False)
class ParseContext:
    """State shared by every grammar run on a cursor.

    Attributes:
        cache: Memoization cache, or None to disable memoization.
        profile_hook: Called with (grammar name, elapsed seconds), or None.
    """

    cache: ParseCache | None = None
    profile_hook: ProfileHook | None = None

    @classmethod
    def create(
        cls,
        *,
        memoize: bool = True,
        cache_max_entries: int = ParserDefaults.CACHE_MAX_ENTRIES,
        profiler: ProfileHook | None = None,
    ) -> ParseContext:
        return cls(
            cache=ParseCache(cache_max_entries) if memoize else None,
            profile_hook=profiler,
        )