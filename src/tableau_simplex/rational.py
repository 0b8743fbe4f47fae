"""Exact rational helpers shared by the solver, the parser and the front-ends."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Union

Num = Union[int, float, Fraction, Decimal, str]


def F(x: Num) -> Fraction:
    """Convert a number to Fraction exactly when possible.
    - Fraction -> as is
    - Decimal -> exact rational
    - int -> exact
    - float -> best rational approx (limit large denominator)
    - str -> parsed through Decimal, so "2.5" and "5." are exact
    """
    if isinstance(x, Fraction):
        return x
    if isinstance(x, Decimal):
        return Fraction(x)
    if isinstance(x, int):
        return Fraction(x)
    if isinstance(x, float):
        # Use from_float to preserve the exact binary rational, then limit to a large denominator
        return Fraction.from_float(x).limit_denominator(10**12)
    text = str(x).strip()
    if "/" in text:
        return Fraction(text)
    try:
        return Fraction(Decimal(text))
    except InvalidOperation:
        raise ValueError(f"{text!r} is not a number") from None


def fmt_out(x: Num) -> str:
    """Pretty-print numbers as integers or reduced fractions."""
    fr = F(x)
    if fr.denominator == 1:
        return str(fr.numerator)
    sign = '-' if fr.numerator * fr.denominator < 0 else ''
    return f"{sign}{abs(fr.numerator)}/{abs(fr.denominator)}"
