"""Method dispatch: direct simplex, Big-M and two-phase.

``solve`` is the one-call API: it picks a method (``auto`` prefers the direct
method when every restriction already has a slack basis and falls back to
two-phase otherwise), canonicalizes, assembles and runs the pivot engine.
"""

from __future__ import annotations

from typing import Union

from .errors import Infeasible, NoLimit
from .solver import SimplexSolver, Solution, _subtract_scaled_row
from .tableau import assemble
from .task import CanonicalTask, Goal, Method, Task, canonicalize, choose_method


def build_solver(canonical: CanonicalTask, verbose: bool = False) -> SimplexSolver:
    return SimplexSolver.from_tableau(assemble(canonical), verbose=verbose)


def solve_simple(canonical: CanonicalTask, verbose: bool = False) -> Solution:
    return build_solver(canonical, verbose).solve()


def _positive_artificial(solver: SimplexSolver, first_art: int):
    for col, value in zip(solver.basis, solver.b):
        if col >= first_art and value > 0:
            return solver.var_names[col], value
    return None


def solve_big_m(canonical: CanonicalTask, verbose: bool = False) -> Solution:
    tab = assemble(canonical)
    solver = SimplexSolver.from_tableau(tab, verbose=verbose)
    try:
        solution = solver.solve()
    except NoLimit:
        # a finite entering column with penalties still owed: the penalty part
        # is already minimal, so the restrictions cannot be met
        if not solver.T[-1][-1].is_finite or _positive_artificial(solver, tab.artificial):
            raise Infeasible("artificials cannot be driven to zero") from None
        raise
    # an artificial still carrying a positive value means no feasible point exists
    stuck = _positive_artificial(solver, tab.artificial)
    if stuck is not None:
        raise Infeasible(f"artificial {stuck[0]} stays at {stuck[1]}")
    # artificials left basic at level zero are not user variables
    solution.basis_coeffs = [(col, value) for col, value in solution.basis_coeffs if col < tab.artificial]
    return solution


def solve_two_phase(canonical: CanonicalTask, verbose: bool = False) -> Solution:
    tab = assemble(canonical)
    first_art = tab.artificial

    # Phase I: minimise the sum of artificials
    if verbose:
        print("\n=== Phase I ===")
    phase1 = SimplexSolver.from_tableau(tab, verbose=verbose)
    phase1.iterate()
    if phase1.T[-1][-1] > 0:
        raise Infeasible(f"phase I optimum is {phase1.T[-1][-1]}, not 0")

    # Drive zero-level artificials out of the basis; rows left without a
    # structural entry are redundant and get dropped
    keep = []
    for r in range(phase1.m):
        if phase1.basis[r] >= first_art:
            col = next((j for j in range(first_art) if phase1.T[r][j] != 0), None)
            if col is None:
                continue
            phase1.eliminate(r, col)
        keep.append(r)

    # Phase II: original objective over the structural columns
    if not keep:
        return _unconstrained(list(tab.objective), canonical.goal, phase1.iter)

    contents = [phase1.T[r][:first_art] + [phase1.T[r][-1]] for r in keep]
    basis = [phase1.basis[r] for r in keep]
    objective = list(tab.objective)
    for row, col in zip(contents, basis):
        _subtract_scaled_row(objective, row, objective[col])
    contents.append(objective)

    if verbose:
        print("\n=== Phase II ===")
    phase2 = SimplexSolver(
        contents,
        canonical.goal,
        basis,
        numbers=tab.numbers,
        verbose=verbose,
        var_names=tab.var_names[:first_art],
    )
    solution = phase2.solve()
    solution.iterations += phase1.iter
    return solution


def _unconstrained(objective: list, goal: Goal, iterations: int) -> Solution:
    """Every restriction was redundant: variables are bounded only by x >= 0."""
    for j, rc in enumerate(objective[:-1]):
        if (rc < 0) if goal is Goal.MAXIMIZE else (rc > 0):
            raise NoLimit(j)
    return Solution([], objective, iterations=iterations)


_DRIVERS = {
    Method.SIMPLE: solve_simple,
    Method.BIG_M: solve_big_m,
    Method.TWO_PHASE: solve_two_phase,
}


def solve_canonical(canonical: CanonicalTask, verbose: bool = False) -> Solution:
    solution = _DRIVERS[canonical.method](canonical, verbose)
    solution.method = canonical.method.value
    return solution


def solve(task: Task, method: Union[str, Method] = "auto", verbose: bool = False) -> Solution:
    if method == "auto":
        method = choose_method(task)
    elif not isinstance(method, Method):
        try:
            method = Method(method)
        except ValueError:
            raise ValueError("method must be one of auto, simple, big_m, two_phase") from None
    return solve_canonical(canonicalize(task, method), verbose=verbose)
