"""A lenient decimal number parser used for distance-matrix cells."""

from __future__ import annotations

import re
from functools import reduce

_NUMBER = re.compile(r"([+-]?)([0-9]*)(?:(\.)([0-9]*))?(?:(e)([+-]?)([0-9]*))?")


def pow10(n: int) -> float:
    """Return 10 to the power ``n`` by repeated squaring."""
    result = 1.0
    base = 10.0
    if n < 0:
        n = -n
        base = 0.1
    while n:
        if n & 1:
            result *= base
        base *= base
        n >>= 1
    return result


def parse_float(text: str) -> float:
    """Parse the leading number of ``text``.

    Parsing stops quietly at the first character that does not fit; an empty or
    unparsable string gives 0.0. Only a lower-case ``e`` starts an exponent.
    """
    match = _NUMBER.match(text)
    sign_text, int_digits, _dot, frac_digits, exp_mark, exp_sign, exp_digits = match.groups()
    sign = -1 if sign_text == "-" else 1

    int_part = reduce(lambda acc, d: acc * 10 + int(d), int_digits, 0.0)

    frac_part = 0.0
    frac_exp = 0.1
    for digit in frac_digits or "":
        frac_part += frac_exp * int(digit)
        frac_exp *= 0.1

    exp_part = 1.0
    if exp_mark and len(match.group(0)) > match.start(6):
        exponent = int(exp_digits) if exp_digits else 0
        exp_part = pow10(-exponent if exp_sign == "-" else exponent)

    return sign * (int_part + frac_part) * exp_part