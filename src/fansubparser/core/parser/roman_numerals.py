"""Roman numeral translation for movie numbers."""

from __future__ import annotations

ROMAN_VALUES: dict[str, int] = {
    "I": 1,
    "V": 5,
    "X": 10,
    "L": 50,
    "C": 100,
    "D": 500,
    "M": 1000,
}


def translate_roman_numeral(numeral: str) -> int:
    """Convert an upper-case Roman numeral to an integer.

    Subtractive notation is honoured: a symbol smaller than the one after it
    is subtracted (``IX`` is 9, ``XIV`` is 14).

    Args:
        numeral: Upper-case Roman numeral, e.g. ``"III"``.

    Returns:
        The numeral's value.

    Raises:
        ValueError: If ``numeral`` is empty or contains other characters.
    """
    if not numeral:
        msg = "empty roman numeral"
        raise ValueError(msg)

    try:
        values = [ROMAN_VALUES[symbol] for symbol in numeral]
    except KeyError as e:
        msg = f"invalid roman numeral: {numeral!r}"
        raise ValueError(msg) from e

    total = 0
    for index, value in enumerate(values):
        if index + 1 < len(values) and value < values[index + 1]:
            total -= value
        else:
            total += value
    return total
