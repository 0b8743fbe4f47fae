"""Numbers of the form ``real + penalty*M`` used by the Big-M method.

``M`` stands for an unspecified, arbitrarily large positive constant. Values are
ordered by their penalty coefficient first and by the real part only on ties, so
any positive multiple of M outweighs every finite quantity. That lets the pivot
engine compare reduced costs with the ordinary ``<``/``>`` operators.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from functools import total_ordering

from .rational import F, fmt_out

_PLAIN = (int, Fraction, Decimal)


@total_ordering
class ExtendedNumber:
    __slots__ = ("real", "penalty")

    def __init__(self, real=0, penalty=0):
        self.real = F(real)
        self.penalty = F(penalty)

    @classmethod
    def parse(cls, text: str) -> "ExtendedNumber":
        """A bare ``M`` is (0, 1); anything else must be a numeric literal."""
        text = text.strip()
        if text == "M":
            return cls(0, 1)
        return cls(F(text), 0)

    @classmethod
    def zero(cls) -> "ExtendedNumber":
        return cls(0, 0)

    @classmethod
    def one(cls) -> "ExtendedNumber":
        return cls(1, 0)

    @property
    def is_finite(self) -> bool:
        return self.penalty == 0

    def __float__(self):
        if not self.is_finite:
            raise OverflowError(f"{self} has no finite value")
        return float(self.real)

    # --- arithmetic ---

    def _other(self, other):
        if isinstance(other, ExtendedNumber):
            return other
        if isinstance(other, _PLAIN):
            return ExtendedNumber(other, 0)
        return None

    def __add__(self, other):
        o = self._other(other)
        if o is None:
            return NotImplemented
        return ExtendedNumber(self.real + o.real, self.penalty + o.penalty)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._other(other)
        if o is None:
            return NotImplemented
        return ExtendedNumber(self.real - o.real, self.penalty - o.penalty)

    def __rsub__(self, other):
        o = self._other(other)
        if o is None:
            return NotImplemented
        return o - self

    def __mul__(self, other):
        o = self._other(other)
        if o is None:
            return NotImplemented
        if self.penalty != 0 and o.penalty != 0:
            raise ArithmeticError(f"({self}) * ({o}) has an M^2 term")
        return ExtendedNumber(self.real * o.real, self.real * o.penalty + self.penalty * o.real)

    __rmul__ = __mul__

    def __truediv__(self, other):
        o = self._other(other)
        if o is None:
            return NotImplemented
        if o.penalty != 0:
            raise ArithmeticError(f"cannot divide by {o}")
        return ExtendedNumber(self.real / o.real, self.penalty / o.real)

    def __rtruediv__(self, other):
        o = self._other(other)
        if o is None:
            return NotImplemented
        return o / self

    def __neg__(self):
        return ExtendedNumber(-self.real, -self.penalty)

    def __pos__(self):
        return self

    # --- ordering ---

    def __eq__(self, other):
        o = self._other(other)
        if o is None:
            return NotImplemented
        return self.real == o.real and self.penalty == o.penalty

    def __lt__(self, other):
        o = self._other(other)
        if o is None:
            return NotImplemented
        return (self.penalty, self.real) < (o.penalty, o.real)

    def __hash__(self):
        if self.penalty == 0:
            return hash(self.real)
        return hash((self.real, self.penalty))

    def __bool__(self):
        return self.real != 0 or self.penalty != 0

    # --- display ---

    def __str__(self):
        if not self:
            return "0"
        if self.penalty == 0:
            return fmt_out(self.real)
        penalty = f"{fmt_out(self.penalty)}M"
        if self.real == 0:
            return penalty
        if self.penalty < 0:
            return f"{fmt_out(self.real)} - {fmt_out(-self.penalty)}M"
        return f"{fmt_out(self.real)} + {penalty}"

    def __repr__(self):
        return f"ExtendedNumber({str(self)!r})"
