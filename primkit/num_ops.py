"""Checked arithmetic, square roots and radix parsing for fixed-width unsigned integers."""

from __future__ import annotations

import math
import string
from typing import TypeVar

from .primitives import BigUInt

U = TypeVar("U", bound=BigUInt)

_DIGITS = string.digits + string.ascii_lowercase


def _operands(a: U, b: U) -> type[U]:
    if not isinstance(a, BigUInt) or type(a) is not type(b):
        raise TypeError("both operands must be unsigned integers of the same type")
    return type(a)


def _fitting(cls: type[U], value: int) -> U | None:
    if value < 0 or value > int(cls.MAX):
        return None
    return cls(value)


def checked_add(a: U, b: U) -> U | None:
    """``a + b``, or None on overflow."""
    return _fitting(_operands(a, b), int(a) + int(b))


def checked_sub(a: U, b: U) -> U | None:
    """``a - b``, or None on underflow."""
    return _fitting(_operands(a, b), int(a) - int(b))


def checked_mul(a: U, b: U) -> U | None:
    """``a * b``, or None on overflow."""
    return _fitting(_operands(a, b), int(a) * int(b))


def checked_div(a: U, b: U) -> U | None:
    """``a // b``, or None when ``b`` is zero."""
    cls = _operands(a, b)
    if int(b) == 0:
        return None
    return cls(int(a) // int(b))


def integer_sqrt(value: U) -> U:
    """The largest integer whose square does not exceed ``value``."""
    if not isinstance(value, BigUInt):
        raise TypeError("integer_sqrt needs an unsigned integer")
    return type(value)(math.isqrt(int(value)))


def from_str_radix(text: str, radix: int, cls: type[U]) -> U:
    """Parse digits in ``radix`` into a ``cls`` integer.

    Raises ValueError for an empty string, a bad radix or a character that is
    not a digit, and ConversionOverflow when the number does not fit.
    """
    if not 2 <= radix <= 36:
        raise ValueError(f"unsupported radix {radix}")
    if not text:
        raise ValueError("cannot parse an empty string")
    allowed = _DIGITS[:radix]
    for index, char in enumerate(text):
        if char.lower() not in allowed:
            raise ValueError(f"invalid character {char!r} at {index}")
    return cls(int(text, radix))