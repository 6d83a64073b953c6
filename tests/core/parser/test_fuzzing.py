"""Property-based fuzzing tests for the fansub name parser using Hypothesis."""

from __future__ import annotations

from hypothesis import given, settings, strategies as st

from fansubparser.core.models.entities import FansubEpisodeEntity
from fansubparser.core.models.metadata import Resolution
from fansubparser.core.parser.combinators import filter_out, integer
from fansubparser.core.parser.factory import parse_entity
from fansubparser.core.parser.metadata import find_resolution
from fansubparser.core.parser.tags import clean_input_string, collect_tags
from fansubparser.shared.constants import ParserDefaults

SERIES_TITLES = [
    "Working!!!",
    "Teekyuu",
    "Kekkai Sensen",
    "Binbougami ga!",
    "Shirobako",
    "Hibike! Euphonium",
]

tag_text = st.text(
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd", "Zs")),
    min_size=1,
    max_size=20,
).filter(lambda text: text.strip() == text and bool(text))

non_digit_text = st.text(
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Zs", "Po")),
    max_size=10,
)


@st.composite
def episode_filename_strategy(draw):
    """Generate episode file names with a known series and number.

    Args:
        draw: Hypothesis draw function.

    Returns:
        Tuple of (file name, series, episode number).
    """
    group = draw(st.sampled_from(["HorribleSubs", "Commie", "Vivid", "gg"]))
    series = draw(st.sampled_from(SERIES_TITLES))
    episode = draw(st.integers(min_value=1, max_value=999))
    quality = draw(st.sampled_from(["720p", "1080p", "480p"]))
    extension = draw(st.sampled_from([".mkv", ".mp4", ".avi"]))
    separator = draw(st.sampled_from([" ", "_"]))

    filename = f"[{group}] {series} - {episode:02d} [{quality}]{extension}"
    if separator == "_":
        filename = filename.replace(" ", "_")
    return filename, series, episode


class TestParserRobustness:
    """Property-based tests for parser robustness using Hypothesis."""

    @settings(deadline=None, max_examples=200)
    @given(st.text(min_size=0, max_size=120))
    def test_parsing_never_crashes_on_arbitrary_text(self, text: str):
        """Test that the parser never raises on arbitrary text.

        Property: Any string parses to an entity or to None.
        """
        result = parse_entity(text)

        assert result is None or result.kind in {
            "directory",
            "episode",
            "movie",
            "oped",
            "original_animation",
        }

    @settings(deadline=None)
    @given(episode_filename_strategy())
    def test_episode_names_round_trip(self, case):
        """Test that generated episode names parse back to their parts.

        Property: Series and episode number survive formatting.
        """
        filename, series, episode = case
        entity = parse_entity(filename)

        assert isinstance(entity, FansubEpisodeEntity), filename
        assert entity.series == series
        assert entity.episode_number == episode


class TestNormalisationProperties:
    """Properties of the cleaning and tag helpers."""

    @given(st.text(max_size=80))
    def test_clean_input_string_is_idempotent(self, text: str):
        """Cleaning an already cleaned name changes nothing."""
        once = clean_input_string(text)
        assert clean_input_string(once) == once

    @given(
        st.text(alphabet="ab._ 1", min_size=1, max_size=30),
        st.sampled_from(ParserDefaults.MEDIA_EXTENSIONS),
        st.booleans(),
    )
    def test_extension_is_preserved(self, stem: str, extension: str, upper: bool):
        """Only the dot of a known extension survives cleaning, in any case."""
        if upper:
            extension = extension.upper()

        cleaned = clean_input_string(f"{stem}.{extension}")

        assert cleaned.endswith(f".{extension}")
        assert cleaned.count(".") == 1
        assert "_" not in cleaned

    @given(st.lists(tag_text, max_size=5))
    def test_tags_are_collected_in_order(self, tags: list[str]):
        """Bracketed tags come back exactly and in order."""
        text = "".join(f"[{tag}]" for tag in tags)
        assert collect_tags.parse(text).value == tags

    @given(
        non_digit_text,
        st.integers(min_value=100, max_value=9999),
        st.integers(min_value=100, max_value=9999),
        non_digit_text,
    )
    def test_resolution_is_found(self, prefix: str, width: int, height: int, suffix: str):
        """A WIDTHxHEIGHT pair is found among non-digit text."""
        assert find_resolution(f"{prefix}{width}x{height}{suffix}") == Resolution(width, height)

    @given(st.text(max_size=60))
    def test_filter_out_integer_leaves_no_digits(self, text: str):
        """After filtering out integers no ASCII digit remains."""
        value = filter_out(integer).parse(text).value
        assert not any(ch in "0123456789" for ch in value)
