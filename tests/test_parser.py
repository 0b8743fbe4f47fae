from fractions import Fraction

import pytest

from tableau_simplex.errors import (
    Composite,
    EndOfInput,
    NoTarget,
    NotANumber,
    ParseError,
    UnexpectedRelation,
)
from tableau_simplex.parser import parse_objective, parse_restriction, parse_task, tokenize
from tableau_simplex.task import Goal, Objective, Relation, Restriction, Term


@pytest.mark.parametrize("text, number", [
    ("5.2", Fraction(26, 5)),
    ("-555.111", Fraction(-555111, 1000)),
    ("5.", Fraction(5)),
    ("5", Fraction(5)),
])
def test_coefficients(text, number):
    assert parse_restriction(f"{text}x1 <= 1").terms == [Term(number, 1)]


def test_restriction():
    assert parse_restriction("x1 + 2x2 == 3") == Restriction(
        [Term(1, 1), Term(2, 2)], Relation.EQUAL, 3
    )
    assert parse_restriction("2 * x1 - 3.5x2 >= -1") == Restriction(
        [Term(2, 1), Term(Fraction(-7, 2), 2)], Relation.GREATER, -1
    )
    assert parse_restriction("-x3+x10<=0").terms == [Term(-1, 3), Term(1, 10)]


def test_objective():
    assert parse_objective("z = 2x1 -> min") == Objective([Term(2, 1)], Goal.MINIMIZE)
    assert parse_objective("z =  5 * x2  + -x4  -> max") == Objective(
        [Term(5, 2), Term(-1, 4)], Goal.MAXIMIZE
    )
    assert parse_objective("Z=X1    ->    MIN").goal is Goal.MINIMIZE
    with pytest.raises(ParseError):
        parse_objective("z = min")


@pytest.mark.parametrize("line, error", [
    ("x1 < 3", UnexpectedRelation),
    ("x1 3", UnexpectedRelation),
    ("x1 <=", EndOfInput),
    ("x1 +", EndOfInput),
    ("x1 <= y", NotANumber),
    ("x1 + y <= 1", NotANumber),
])
def test_restriction_errors(line, error):
    with pytest.raises(error):
        parse_restriction(line)


def test_objective_without_goal():
    with pytest.raises(NoTarget):
        parse_objective("z = x1 -> best")
    with pytest.raises(EndOfInput):
        parse_objective("z = x1")


def test_task():
    task = parse_task(
        """
        # production plan
        x1 + x2 <= 4
        x1 - x2 >= -2   # keeps x2 close

        z = 3x1 + 2x2 -> max
        """
    )
    assert len(task.restrictions) == 2
    assert task.restrictions[1].terms == [Term(1, 1), Term(-1, 2)]
    assert task.objective.goal is Goal.MAXIMIZE
    assert task.variable_count() == 2


def test_composite_keeps_both_reasons():
    with pytest.raises(Composite) as info:
        parse_task("x1 + x2 <= 4\nx1 ? 3\nz = x1 -> max")
    err = info.value
    assert err.line == 2
    assert isinstance(err.first, UnexpectedRelation)
    assert isinstance(err.second, NoTarget)
    assert "line 2" in str(err)


def test_missing_objective():
    with pytest.raises(NoTarget):
        parse_task("x1 <= 4\n")


def test_missing_restrictions():
    with pytest.raises(EndOfInput):
        parse_task("z = x1 -> max")


def test_duplicate_objective():
    with pytest.raises(ParseError):
        parse_task("x1 <= 4\nz = x1 -> max\nz = x1 -> min")


def test_tokenize():
    assert tokenize("2.5*x1 -> max") == [
        ("num", "2.5"), ("op", "*"), ("var", "x1"), ("op", "->"), ("word", "max"),
    ]
