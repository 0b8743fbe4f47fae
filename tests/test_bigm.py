from fractions import Fraction

import pytest

from tableau_simplex.bigm import ExtendedNumber as E
from tableau_simplex.fields import BIG_M, RATIONAL, fmt


def test_parse_literals():
    assert E.parse("M") == E(0, 1)
    assert E.parse("2.5") == E(Fraction(5, 2), 0)
    assert E.parse(" -3 ") == E(-3, 0)
    with pytest.raises(ValueError):
        E.parse("3M")


def test_zero_and_one():
    assert E.zero() == E(0, 0)
    assert E.one() == E(1, 0)
    assert not E.zero()
    assert E(0, 1)


def test_componentwise_addition():
    assert E(1, 2) + E(3, 4) == E(4, 6)
    assert E(1, 2) - E(3, 4) == E(-2, -2)
    assert -E(1, -2) == E(-1, 2)
    assert 1 + E(0, 1) == E(1, 1)
    assert 1 - E(0, 1) == E(1, -1)


def test_scaling_by_finite_numbers():
    assert E(2, 3) * 2 == E(4, 6)
    assert Fraction(1, 2) * E(2, 3) == E(1, Fraction(3, 2))
    assert E(2, 3) / E(2, 0) == E(1, Fraction(3, 2))
    assert E(1, 0) * E(0, 5) == E(0, 5)


def test_unrepresentable_products():
    with pytest.raises(ArithmeticError):
        E(0, 1) * E(0, 1)
    with pytest.raises(ArithmeticError):
        E(1, 0) / E(0, 1)
    with pytest.raises(ZeroDivisionError):
        E(1, 1) / 0


@pytest.mark.parametrize("a, b", [(0, 0), (-10**9, 10**9), (10**9, -10**9), (5, 5)])
def test_penalty_dominates_finite_part(a, b):
    assert E(a, 2) > E(b, 1)
    assert E(b, -1) < E(a, 0)


def test_ties_on_penalty_compare_finite_part():
    assert E(1, 3) < E(2, 3)
    assert E(-1, 0) < 0 < E(1, 0)
    assert E(0, -1) < -10**12
    assert sorted([E(5, 0), E(0, 1), E(-3, -1)]) == [E(-3, -1), E(5, 0), E(0, 1)]


def test_equality_with_plain_numbers():
    assert E(3, 0) == 3
    assert E(3, 0) == Fraction(3)
    assert E(3, 1) != 3
    assert hash(E(3, 0)) == hash(Fraction(3))


@pytest.mark.parametrize("value, text", [
    (E(0, 0), "0"),
    (E(5, 0), "5"),
    (E(0, 3), "3M"),
    (E(2, 3), "2 + 3M"),
    (E(2, -3), "2 - 3M"),
    (E(Fraction(1, 2), 0), "1/2"),
])
def test_display(value, text):
    assert str(value) == text


def test_fields():
    assert RATIONAL.zero() == 0 and isinstance(RATIONAL.zero(), Fraction)
    assert RATIONAL.coerce("1.5") == Fraction(3, 2)
    assert RATIONAL.coerce(E(2, 0)) == 2
    with pytest.raises(ValueError):
        RATIONAL.coerce(E(0, 1))
    assert BIG_M.parse("M") == BIG_M.M()
    assert BIG_M.coerce(Fraction(1, 3)) == E(Fraction(1, 3), 0)
    assert fmt(Fraction(-7, 2)) == "-7/2"
    assert fmt(E(0, 1)) == "1M"
