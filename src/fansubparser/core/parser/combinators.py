"""Parser combinator primitives.

Every grammar in fansubparser is a :class:`Parser`: a callable taking an
immutable :class:`ParseInput` cursor and returning either a :class:`Success`
(value plus the cursor after the match) or a :class:`Failure` (the cursor
where matching stopped, a message and what was expected there).

Parsers compose through methods (``map``, ``then``, ``many``, ``last`` ...)
and through the operators ``>>`` (keep the right value), ``<<`` (keep the
left value) and ``|`` (ordered alternation). Nothing here raises for bad
input; a failed match is always a value.
"""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

if TYPE_CHECKING:
    from fansubparser.core.parser.context import ParseContext

T = TypeVar("T")
U = TypeVar("U")

_parser_keys = itertools.count()


@dataclass(frozen=True)
class ParseInput:
    """Immutable cursor into the text being parsed.

    Attributes:
        source: The full text. Never sliced, so look-behind checks keep
            working after a cursor has moved.
        position: Index of the next character to read.
        context: Optional parse context carrying the memo cache and the
            profiling hook. Not part of equality.
    """

    source: str
    position: int = 0
    context: ParseContext | None = field(default=None, compare=False, repr=False)

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.source)

    @property
    def current(self) -> str:
        return self.source[self.position]

    @property
    def previous(self) -> str | None:
        """Character just before the cursor, or None at the start."""
        if self.position == 0:
            return None
        return self.source[self.position - 1]

    @property
    def remaining(self) -> str:
        return self.source[self.position :]

    def advance(self, count: int = 1) -> ParseInput:
        return self.seek(min(self.position + count, len(self.source)))

    def seek(self, position: int) -> ParseInput:
        return ParseInput(self.source, position, self.context)


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful match: the value and the cursor after it."""

    value: T
    remainder: ParseInput

    def __bool__(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.value), self.remainder)

    def and_then(self, fn: Callable[[T, ParseInput], Result]) -> Result:
        return fn(self.value, self.remainder)

    def or_else(self, fn: Callable[[], Result]) -> Result:
        return self


@dataclass(frozen=True)
class Failure:
    """A failed match.

    ``map`` and ``and_then`` return the failure unchanged without calling
    their argument; only ``or_else`` runs its fallback.
    """

    remainder: ParseInput
    message: str = ""
    expectations: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> Failure:
        return self

    def and_then(self, fn: Callable[[Any, ParseInput], Result]) -> Failure:
        return self

    def or_else(self, fn: Callable[[], Result]) -> Result:
        return fn()


Result = Union[Success[Any], Failure]


class Parser(Generic[T]):
    """A composable grammar over a :class:`ParseInput`."""

    __slots__ = ("_fn", "_key", "name")

    def __init__(self, fn: Callable[[ParseInput], Result], name: str | None = None) -> None:
        self._fn = fn
        self._key = next(_parser_keys)
        self.name = name or getattr(fn, "__name__", "parser").lstrip("_")

    def __call__(self, inp: ParseInput) -> Result:
        return self._fn(inp)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    def parse(self, text: str, context: ParseContext | None = None) -> Result:
        """Run the parser from the start of ``text``."""
        return self(ParseInput(text, 0, context))

    # Sequencing and alternation

    def __rshift__(self, other: Parser[U]) -> Parser[U]:
        def _keep_right(inp: ParseInput) -> Result:
            return self(inp).and_then(lambda _value, rest: other(rest))

        return Parser(_keep_right, other.name)

    def __lshift__(self, other: Parser[Any]) -> Parser[T]:
        def _keep_left(inp: ParseInput) -> Result:
            first = self(inp)
            if not first:
                return first
            second = other(first.remainder)
            if not second:
                return second
            return Success(first.value, second.remainder)

        return Parser(_keep_left, self.name)

    def __or__(self, other: Parser[Any]) -> Parser[Any]:
        return any_of(self, other)

    def then(self, fn: Callable[[T], Parser[U]]) -> Parser[U]:
        """Feed the value of this parser into ``fn`` and run the parser it returns."""

        def _then(inp: ParseInput) -> Result:
            return self(inp).and_then(lambda value, rest: fn(value)(rest))

        return Parser(_then, self.name)

    # Value shaping

    def map(self, fn: Callable[[T], U]) -> Parser[U]:
        def _map(inp: ParseInput) -> Result:
            return self(inp).map(fn)

        return Parser(_map, self.name)

    def where(self, predicate: Callable[[T], bool], message: str = "condition not met") -> Parser[T]:
        def _where(inp: ParseInput) -> Result:
            result = self(inp)
            if result and not predicate(result.value):
                return Failure(inp, f"{self.name}: {message}", (self.name,))
            return result

        return Parser(_where, self.name)

    def text(self) -> Parser[str]:
        """Join a list of characters or strings into one string."""
        return self.map(lambda value: value if isinstance(value, str) else "".join(value))

    def named(self, name: str) -> Parser[T]:
        def _named(inp: ParseInput) -> Result:
            result = self(inp)
            if result:
                return result
            return Failure(result.remainder, f"expected {name}", (name,))

        return Parser(_named, name)

    # Repetition and optionality

    def optional_maybe(self) -> Parser[T | None]:
        """Yield None instead of failing. Consumes input only on success."""

        def _optional_maybe(inp: ParseInput) -> Result:
            result = self(inp)
            return result if result else Success(None, inp)

        return Parser(_optional_maybe, self.name)

    def many(self) -> Parser[list[T]]:
        """Zero or more repetitions. Stops on failure or on a match that consumes nothing."""

        def _many(inp: ParseInput) -> Result:
            values: list[T] = []
            cursor = inp
            while True:
                result = self(cursor)
                if not result or result.remainder.position == cursor.position:
                    return Success(values, cursor)
                values.append(result.value)
                cursor = result.remainder

        return Parser(_many, self.name)

    def at_least_once(self) -> Parser[list[T]]:
        repeated = self.many()

        def _at_least_once(inp: ParseInput) -> Result:
            result = repeated(inp)
            if not result.value:
                return Failure(inp, f"expected at least one {self.name}", (self.name,))
            return result

        return Parser(_at_least_once, self.name)

    def token(self) -> Parser[T]:
        """Allow surrounding whitespace."""
        padding = whitespace.many()
        return (padding >> self << padding).named(self.name)

    def contained(self, opening: Parser[Any], closing: Parser[Any]) -> Parser[T]:
        return (opening >> self << closing).named(self.name)

    # Lookahead and position control

    def end(self) -> Parser[T]:
        """Succeed only when nothing follows the match."""
        return self << end_of_input

    def not_followed_by(self, other: Parser[Any]) -> Parser[T]:
        def _not_followed_by(inp: ParseInput) -> Result:
            result = self(inp)
            if result and other(result.remainder):
                return Failure(inp, f"{self.name} followed by {other.name}", (self.name,))
            return result

        return Parser(_not_followed_by, self.name)

    def was_successful(self) -> Parser[bool]:
        """Report whether the parser matched. Never fails; consumes only on a match."""

        def _was_successful(inp: ParseInput) -> Result:
            result = self(inp)
            if result:
                return Success(True, result.remainder)
            return Success(False, inp)

        return Parser(_was_successful, self.name)

    def reset_input(self) -> Parser[T]:
        """Run as lookahead: keep the value, restore the cursor."""

        def _reset_input(inp: ParseInput) -> Result:
            result = self(inp)
            if result:
                return Success(result.value, inp)
            return Failure(inp, result.message, result.expectations)

        return Parser(_reset_input, self.name)

    def last(self) -> Parser[T]:
        """Match only if the same parser cannot match again anywhere after this match."""
        later = scan_for(self)

        def _last(inp: ParseInput) -> Result:
            result = self(inp)
            if result and later(result.remainder):
                return Failure(inp, f"{self.name} occurs again later", (self.name,))
            return result

        return Parser(_last, self.name)

    def set_result_as_remainder(self) -> Parser[T]:
        """Continue parsing on the matched value instead of the original text."""

        def _set_result_as_remainder(inp: ParseInput) -> Result:
            result = self(inp)
            if not result:
                return result
            return Success(result.value, ParseInput(str(result.value), 0, inp.context))

        return Parser(_set_result_as_remainder, self.name)

    # Context-backed behaviour

    def memoize(self) -> Parser[T]:
        """Cache results per (parser, source, position) in the context's cache.

        Without a context, or with a context that has no cache, the parser runs
        directly. Either way the result is the same.
        """
        key = self._key

        def _memoize(inp: ParseInput) -> Result:
            context = inp.context
            if context is None or context.cache is None:
                return self(inp)
            return context.cache.get_or_compute(
                (key, inp.source, inp.position), lambda: self(inp)
            )

        return Parser(_memoize, self.name)

    def profile(self, name: str | None = None) -> Parser[T]:
        """Report the elapsed time of each run to the context's profile hook."""
        label = name or self.name

        def _profile(inp: ParseInput) -> Result:
            hook = inp.context.profile_hook if inp.context is not None else None
            if hook is None:
                return self(inp)
            started = time.perf_counter()
            try:
                return self(inp)
            finally:
                hook(label, time.perf_counter() - started)

        return Parser(_profile, label)


def succeed(value: T) -> Parser[T]:
    """A parser that always succeeds with ``value`` and consumes nothing."""
    return Parser(lambda inp: Success(value, inp), "succeed")


def char(accept: str | Callable[[str], bool], description: str | None = None) -> Parser[str]:
    """Match a single character from a set of characters or by predicate."""
    if isinstance(accept, str):
        allowed = accept
        description = description or repr(allowed)

        def predicate(ch: str) -> bool:
            return ch in allowed

    else:
        predicate = accept
        description = description or getattr(accept, "__name__", "character")

    def _char(inp: ParseInput) -> Result:
        if not inp.at_end and predicate(inp.current):
            return Success(inp.current, inp.advance())
        return Failure(inp, f"expected {description}", (description,))

    return Parser(_char, description)


def string(expected: str, *, ignore_case: bool = False) -> Parser[str]:
    """Match a literal. With ``ignore_case`` the text is returned as written in the input."""
    length = len(expected)
    folded = expected.upper()

    def _string(inp: ParseInput) -> Result:
        candidate = inp.source[inp.position : inp.position + length]
        if len(candidate) == length and (
            candidate.upper() == folded if ignore_case else candidate == expected
        ):
            return Success(candidate, inp.advance(length))
        return Failure(inp, f"expected {expected!r}", (expected,))

    return Parser(_string, expected)


def string_ignore_case(expected: str) -> Parser[str]:
    return string(expected, ignore_case=True)


def preceded_by(predicate: Callable[[str | None], bool], description: str) -> Parser[None]:
    """Zero-width check on the character before the cursor (None at the start)."""

    def _preceded_by(inp: ParseInput) -> Result:
        if predicate(inp.previous):
            return Success(None, inp)
        return Failure(inp, f"expected {description}", (description,))

    return Parser(_preceded_by, description)


def _end_of_input(inp: ParseInput) -> Result:
    if inp.at_end:
        return Success(None, inp)
    return Failure(inp, "expected end of input", ("end of input",))


end_of_input: Parser[None] = Parser(_end_of_input, "end of input")

whitespace: Parser[str] = char(str.isspace, "whitespace")


def any_of(*parsers: Parser[Any]) -> Parser[Any]:
    """Ordered alternation: the first parser that succeeds wins."""

    def _any_of(inp: ParseInput) -> Result:
        expectations: list[str] = []
        for parser in parsers:
            result = parser(inp)
            if result:
                return result
            expectations.extend(result.expectations)
        return Failure(inp, "no alternative matched", tuple(expectations))

    return Parser(_any_of, " | ".join(parser.name for parser in parsers))


def sequence(*parsers: Parser[Any]) -> Parser[tuple[Any, ...]]:
    """Run parsers one after another and collect their values in a tuple."""

    def _sequence(inp: ParseInput) -> Result:
        values = []
        cursor = inp
        for parser in parsers:
            result = parser(cursor)
            if not result:
                return result
            values.append(result.value)
            cursor = result.remainder
        return Success(tuple(values), cursor)

    return Parser(_sequence, ", ".join(parser.name for parser in parsers))


def scan_for(parser: Parser[T]) -> Parser[T]:
    """Skip ahead to the first position where ``parser`` matches, then match it."""

    def _scan_for(inp: ParseInput) -> Result:
        for position in range(inp.position, len(inp.source) + 1):
            result = parser(inp.seek(position))
            if result:
                return result
        return Failure(inp, f"{parser.name} not found", (parser.name,))

    return Parser(_scan_for, parser.name)


def line_up_to(parser: Parser[Any]) -> Parser[str]:
    """Capture text up to the first position where ``parser`` would match.

    The match itself is not consumed. When ``parser`` never matches the rest
    of the input is captured, so this never fails.
    """

    def _line_up_to(inp: ParseInput) -> Result:
        for position in range(inp.position, len(inp.source)):
            if parser(inp.seek(position)):
                return Success(inp.source[inp.position : position], inp.seek(position))
        return Success(inp.remaining, inp.seek(len(inp.source)))

    return Parser(_line_up_to, f"line up to {parser.name}")


def filter_out(parser: Parser[Any]) -> Parser[str]:
    """Remove every non-overlapping match of ``parser`` from the rest of the input.

    The remaining fragments are trimmed and joined with single spaces; empty
    fragments are dropped. Consumes the whole input and never fails.

    Example:
        >>> filter_out(integer).parse("abc23efghij00").value
        'abc efghij'
    """

    def _filter_out(inp: ParseInput) -> Result:
        source = inp.source
        fragments: list[str] = []
        start = position = inp.position
        while position < len(source):
            result = parser(inp.seek(position))
            if result and result.remainder.position > position:
                fragments.append(source[start:position])
                start = position = result.remainder.position
            else:
                position += 1
        fragments.append(source[start:])
        text = " ".join(fragment.strip() for fragment in fragments if fragment.strip())
        return Success(text, inp.seek(len(source)))

    return Parser(_filter_out, f"filter out {parser.name}")


digit: Parser[str] = char("0123456789", "digit")
integer: Parser[int] = digit.at_least_once().text().map(int).named("integer")
