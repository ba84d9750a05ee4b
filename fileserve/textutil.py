"""Small text helpers used to parse requests."""

from __future__ import annotations

_DIGITS = frozenset("0123456789")


def split(text: str, delimiter: str = " ") -> list[str]:
    """Split ``text`` on every ``delimiter``, keeping empty pieces."""
    return text.split(delimiter)


def split_nonempty(text: str, delimiter: str = " ") -> list[str]:
    """Split ``text`` on ``delimiter`` and drop the empty pieces."""
    return [piece for piece in text.split(delimiter) if piece]


def is_number(text: str) -> bool:
    """Return True if ``text`` is non-empty and made of ASCII digits only."""
    return bool(text) and all(char in _DIGITS for char in text)


def div_round_up(numerator: int, denominator: int) -> int:
    """Divide, truncating toward zero, then add one if there is a remainder.

    For non-negative operands this is the ceiling of the quotient.
    Raises ZeroDivisionError when ``denominator`` is zero.
    """
    if denominator == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    remainder = numerator - quotient * denominator
    return quotient + (1 if remainder != 0 else 0)