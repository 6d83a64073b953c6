"""Parsed entity records.

Each kind of fansub name parses into one immutable record. The fields every
kind shares (release group, series, metadata, file extension) live in an
:class:`EntityHeader` embedded in each record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

from fansubparser.core.models.metadata import MediaMetadata


class Segment(str, Enum):
    """Which theme song an OP/ED file contains."""

    OP = "OP"
    ED = "ED"


class ReleaseType(str, Enum):
    """Original animation release outside the TV episode numbering."""

    OVA = "OVA"
    ONA = "ONA"
    OAD = "OAD"


@dataclass(frozen=True)
class EntityHeader:
    """Fields common to every entity kind.

    Attributes:
        group: Release group, usually the leading bracket tag.
        series: Series title as written in the name.
        metadata: Classified technical tags, if any tag was recognised.
        extension: Media file extension including the dot; None for directories.
    """

    group: str | None = None
    series: str | None = None
    metadata: MediaMetadata | None = None
    extension: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "group": self.group,
            "series": self.series,
            "extension": self.extension,
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }

    def describe(self) -> str:
        """Render "[group] series" without the missing parts."""
        parts = []
        if self.group:
            parts.append(f"[{self.group}]")
        if self.series:
            parts.append(self.series)
        return " ".join(parts) or "<unknown>"


@dataclass(frozen=True)
class _FansubEntity:
    header: EntityHeader = field(default_factory=EntityHeader)

    kind: ClassVar[str] = "entity"

    @property
    def group(self) -> str | None:
        return self.header.group

    @property
    def series(self) -> str | None:
        return self.header.series

    @property
    def metadata(self) -> MediaMetadata | None:
        return self.header.metadata

    @property
    def extension(self) -> str | None:
        return self.header.extension

    def _fields(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **self.header.to_dict(), **self._fields()}

    def _suffix(self) -> str:
        details = []
        if self.metadata is not None and str(self.metadata):
            details.append(str(self.metadata))
        if self.extension:
            details.append(self.extension)
        return f" ({', '.join(details)})" if details else ""


@dataclass(frozen=True)
class FansubEpisodeEntity(_FansubEntity):
    """A regular numbered episode."""

    episode_number: int | None = None
    version: int | None = None

    kind: ClassVar[str] = "episode"

    def _fields(self) -> dict[str, Any]:
        return {"episode_number": self.episode_number, "version": self.version}

    def __str__(self) -> str:
        version = f"v{self.version}" if self.version is not None else ""
        return f"Episode {self.episode_number}{version}: {self.header.describe()}{self._suffix()}"


@dataclass(frozen=True)
class FansubMovieEntity(_FansubEntity):
    """A movie, optionally numbered within its series and with a subtitle."""

    movie_number: int | None = None
    subtitle: str | None = None

    kind: ClassVar[str] = "movie"

    def _fields(self) -> dict[str, Any]:
        return {"movie_number": self.movie_number, "subtitle": self.subtitle}

    def __str__(self) -> str:
        number = f" {self.movie_number}" if self.movie_number is not None else ""
        subtitle = f" - {self.subtitle}" if self.subtitle else ""
        return f"Movie{number}: {self.header.describe()}{subtitle}{self._suffix()}"


@dataclass(frozen=True)
class FansubOPEDEntity(_FansubEntity):
    """An opening or ending theme video."""

    segment: Segment | None = None
    sequence_number: int | None = None
    no_credits: bool = False

    kind: ClassVar[str] = "oped"

    def _fields(self) -> dict[str, Any]:
        return {
            "segment": self.segment.value if self.segment else None,
            "sequence_number": self.sequence_number,
            "no_credits": self.no_credits,
        }

    def __str__(self) -> str:
        creditless = "Creditless " if self.no_credits else ""
        segment = self.segment.value if self.segment else "OP/ED"
        number = str(self.sequence_number) if self.sequence_number is not None else ""
        return f"{creditless}{segment}{number}: {self.header.describe()}{self._suffix()}"


@dataclass(frozen=True)
class FansubOriginalAnimationEntity(_FansubEntity):
    """An OVA, ONA or OAD release."""

    release_type: ReleaseType | None = None
    episode_number: int | None = None
    title: str | None = None

    kind: ClassVar[str] = "original_animation"

    def _fields(self) -> dict[str, Any]:
        return {
            "release_type": self.release_type.value if self.release_type else None,
            "episode_number": self.episode_number,
            "title": self.title,
        }

    def __str__(self) -> str:
        release = self.release_type.value if self.release_type else "OA"
        number = f" {self.episode_number}" if self.episode_number is not None else ""
        title = f" - {self.title}" if self.title else ""
        return f"{release}{number}: {self.header.describe()}{title}{self._suffix()}"


@dataclass(frozen=True)
class FansubDirectoryEntity(_FansubEntity):
    """A directory, typically a volume or a range of episodes."""

    volume: int | None = None
    episode_range: tuple[int, int] | None = None

    kind: ClassVar[str] = "directory"

    def _fields(self) -> dict[str, Any]:
        return {
            "volume": self.volume,
            "episode_range": list(self.episode_range) if self.episode_range else None,
        }

    def __str__(self) -> str:
        details = []
        if self.volume is not None:
            details.append(f"Vol {self.volume}")
        if self.episode_range is not None:
            details.append(f"{self.episode_range[0]}-{self.episode_range[1]}")
        extra = f" {' '.join(details)}" if details else ""
        return f"Directory: {self.header.describe()}{extra}{self._suffix()}"


FansubEntity = Union[
    FansubEpisodeEntity,
    FansubMovieEntity,
    FansubOPEDEntity,
    FansubOriginalAnimationEntity,
    FansubDirectoryEntity,
]
