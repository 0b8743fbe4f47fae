from fractions import Fraction

import pytest

from tableau_simplex.bigm import ExtendedNumber
from tableau_simplex.errors import Infeasible, NoLimit
from tableau_simplex.methods import solve, solve_canonical
from tableau_simplex.task import Goal, Method, Objective, Relation, Restriction, Task, Term, canonicalize


def lp(rows, objective, goal=Goal.MAXIMIZE, constant=0):
    return Task(
        [Restriction([Term(c, i) for c, i in terms], rel, b) for terms, rel, b in rows],
        Objective([Term(c, i) for c, i in objective], goal, constant),
    )


TASKS = [
    # x1 + x2 == 4, x1 <= 3, max 2x1 + x2
    (lp([([(1, 1), (1, 2)], Relation.EQUAL, 4), ([(1, 1)], Relation.LESS, 3)],
        [(2, 1), (1, 2)]), 7),
    # x1 + x2 >= 2, x1 <= 5, min x1 + x2
    (lp([([(1, 1), (1, 2)], Relation.GREATER, 2), ([(1, 1)], Relation.LESS, 5)],
        [(1, 1), (1, 2)], Goal.MINIMIZE), 2),
    # x1 + x2 >= 4, x1 + 3x2 >= 6, x1 <= 3, min 2x1 + 3x2
    (lp([([(1, 1), (1, 2)], Relation.GREATER, 4),
         ([(1, 1), (3, 2)], Relation.GREATER, 6),
         ([(1, 1)], Relation.LESS, 3)],
        [(2, 1), (3, 2)], Goal.MINIMIZE), 9),
    # x1 == 4, max x1 + 5
    (lp([([(1, 1)], Relation.EQUAL, 4)], [(1, 1)], constant=5), 9),
]


@pytest.mark.parametrize("task, expected", TASKS)
def test_big_m_and_two_phase_agree(task, expected):
    big_m = solve(task, Method.BIG_M)
    two_phase = solve(task, Method.TWO_PHASE)
    assert big_m.optimal_value == expected
    assert two_phase.optimal_value == expected
    assert big_m.optimal_value == two_phase.optimal_value


def test_big_m_values_are_finite():
    task, _ = TASKS[0]
    solution = solve(task, "big_m")
    assert isinstance(solution.optimal_value, ExtendedNumber)
    assert solution.optimal_value.is_finite
    assert solution.values(2) == [3, 1]
    assert solution.method == "big_m"


def test_two_phase_solution_point():
    task, _ = TASKS[1]
    solution = solve(task, "two_phase")
    assert solution.values(2) == [2, 0]
    assert all(isinstance(v, Fraction) for v in solution.variables.values())
    assert solution.iterations == 3


@pytest.mark.parametrize("method", [Method.BIG_M, Method.TWO_PHASE])
def test_infeasible(method):
    task = lp([([(1, 1)], Relation.LESS, 1), ([(1, 1)], Relation.GREATER, 3)], [(1, 1)])
    with pytest.raises(Infeasible):
        solve(task, method)


@pytest.mark.parametrize("method", [Method.BIG_M, Method.TWO_PHASE])
def test_infeasible_with_unbounded_objective(method):
    # x1 + x2 <= -1 has no non-negative point; x3 only appears in the objective
    task = lp([([(1, 1), (1, 2)], Relation.LESS, -1)], [(1, 3)])
    with pytest.raises(Infeasible):
        solve(task, method)


@pytest.mark.parametrize("method", [Method.BIG_M, Method.TWO_PHASE])
def test_unbounded(method):
    task = lp([([(1, 1), (-1, 2)], Relation.EQUAL, 1)], [(1, 1)])
    with pytest.raises(NoLimit):
        solve(task, method)


def test_redundant_row_is_dropped():
    task = lp(
        [([(1, 1), (1, 2)], Relation.EQUAL, 2), ([(2, 1), (2, 2)], Relation.EQUAL, 4)],
        [(1, 1)],
    )
    solution = solve(task, "two_phase")
    assert solution.optimal_value == 2
    assert solution.variables == {1: 2}


def test_auto_method():
    simple = lp([([(1, 1), (1, 2)], Relation.LESS, 4)], [(3, 1), (2, 2)])
    assert solve(simple).method == "simple"
    assert solve(simple).optimal_value == 12
    task, expected = TASKS[0]
    solution = solve(task)
    assert solution.method == "two_phase"
    assert solution.optimal_value == expected


def test_unknown_method():
    with pytest.raises(ValueError):
        solve(TASKS[0][0], "dual")


def test_solve_canonical_sets_method():
    canonical = canonicalize(TASKS[0][0], Method.TWO_PHASE)
    assert solve_canonical(canonical).method == "two_phase"


def test_two_phase_verbose(capsys):
    solve(TASKS[0][0], "two_phase", verbose=True)
    out = capsys.readouterr().out
    assert "=== Phase I ===" in out
    assert "=== Phase II ===" in out
    assert "a1" in out


@pytest.mark.parametrize("method", ["auto", Method.BIG_M, Method.TWO_PHASE])
def test_all_rows_redundant(method):
    # 0*x1 == 0 leaves x1 bounded only by x1 >= 0
    task = lp([([(0, 1)], Relation.EQUAL, 0)], [(1, 1)], Goal.MINIMIZE)
    solution = solve(task, method)
    assert solution.optimal_value == 0
    assert solution.variables == {}


@pytest.mark.parametrize("method", [Method.BIG_M, Method.TWO_PHASE])
def test_all_rows_redundant_unbounded(method):
    task = lp([([(0, 1)], Relation.EQUAL, 0)], [(1, 1)])
    with pytest.raises(NoLimit):
        solve(task, method)


def test_big_m_hides_zero_level_artificials():
    task = lp(
        [([(1, 1), (1, 2)], Relation.EQUAL, 2), ([(2, 1), (2, 2)], Relation.EQUAL, 4)],
        [(1, 1)],
    )
    solution = solve(task, "big_m")
    assert solution.optimal_value == 2
    assert solution.variables == {1: 2}
    assert str(solution) == "Optimal value: 2\nBasic variables:\n   x1 = 2"
