"""Numeric capability interface the tableau code is written against.

The solver never inspects element types itself: it asks a field for ``zero()``,
``one()`` and ``coerce()``, and uses the Python operators of the elements for the
field operations and comparisons. ``RationalField`` works on ``Fraction``,
``BigMField`` on :class:`~tableau_simplex.bigm.ExtendedNumber`.
"""

from __future__ import annotations

from fractions import Fraction

from .bigm import ExtendedNumber
from .rational import F, fmt_out


class NumberField:
    name = "abstract"

    def zero(self): raise NotImplementedError
    def one(self): raise NotImplementedError
    def coerce(self, x): raise NotImplementedError
    def parse(self, text): return self.coerce(F(text))

    def __repr__(self):
        return f"{type(self).__name__}()"


class RationalField(NumberField):
    name = "rational"

    def __init__(self):
        self._one = Fraction(1)
        self._zero = Fraction(0)

    def one(self): return self._one
    def zero(self): return self._zero

    def coerce(self, x):
        if isinstance(x, ExtendedNumber):
            if not x.is_finite:
                raise ValueError(f"{x} is not a rational number")
            return x.real
        return F(x)


class BigMField(NumberField):
    name = "big_m"

    def __init__(self):
        self._one = ExtendedNumber.one()
        self._zero = ExtendedNumber.zero()

    def one(self): return self._one
    def zero(self): return self._zero

    def M(self):
        return ExtendedNumber(0, 1)

    def coerce(self, x):
        if isinstance(x, ExtendedNumber):
            return x
        return ExtendedNumber(F(x), 0)

    def parse(self, text):
        return ExtendedNumber.parse(text)


RATIONAL = RationalField()
BIG_M = BigMField()


def fmt(x) -> str:
    """Render any tableau element: integers, reduced fractions or Big-M values."""
    if isinstance(x, ExtendedNumber):
        return str(x)
    return fmt_out(x)
