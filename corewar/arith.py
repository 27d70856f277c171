"""Integer helpers: lenient parsing, powers, roots and primes."""

from __future__ import annotations

import math
import re
from itertools import count

_INT_MAX = 2147483647
_DIGITS = re.compile(r"[0-9]+")


def _within_limits(value: int, negative: bool) -> bool:
    return value <= (_INT_MAX + 1 if negative else _INT_MAX)


def getnbr(text: str) -> int:
    """Parse the first run of digits in text, signed by the '-' before it.

    Returns 0 when there are no digits or the value leaves the 32-bit range.
    """
    match = _DIGITS.search(text)
    if match is None:
        return 0
    negative = text[:match.start()].count("-") % 2 == 1
    value = 0
    for digit in match.group():
        value = value * 10 + int(digit)
        if not _within_limits(value, negative):
            return 0
    return -value if negative else value


def intlen(number: int) -> int:
    """Return how many characters the decimal form of number takes."""
    return len(str(number))


def compute_power_rec(nb: int, power: int) -> int:
    """Return nb raised to power, or 0 for a negative power."""
    if power < 0:
        return 0
    return nb ** power


def compute_square_root(nb: int) -> int:
    """Return the whole square root of nb, or 0 if it has none."""
    if nb < 0:
        return 0
    root = math.isqrt(nb)
    return root if root * root == nb and root <= 46400 else 0


def is_prime(nb: int) -> bool:
    """Tell whether nb is prime (trial division capped at 50000)."""
    if nb <= 1:
        return False
    limit = min(nb // 2, 49999)
    return all(nb % divisor for divisor in range(2, limit + 1))


def find_prime_sup(nb: int) -> int:
    """Return the smallest prime not below nb; 0 at the top of the int range."""
    if nb <= 1:
        return 2
    if nb >= _INT_MAX:
        return 0
    return next(candidate for candidate in count(nb) if is_prime(candidate))


def sort_int_array(values: list[int]) -> list[int]:
    """Sort values ascending in place and return the same list."""
    values.sort()
    return values