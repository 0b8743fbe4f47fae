"""Tableau simplex pivot engine.

The solver owns a dense (m+1) x (n+1) matrix and the basis (one column index per
restriction row) and mutates both in place until the objective row passes the
optimality test for its aim. Every element goes through the operators of the
field the tableau was built over, so the same loop runs on ``Fraction`` and on
Big-M numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, List, Optional, Tuple

from .errors import EmptyProblem, NoLimit, NoSolutions, ShapeMismatch
from .fields import RATIONAL, NumberField, fmt
from .tableau import Tableau, initial_basis
from .task import Goal


def _subtract_scaled_row(row1, row2, k):
    """row1 -= k*row2"""
    if k == 0:
        return
    for i, row2_i in enumerate(row2):
        row1[i] = row1[i] - k * row2_i


@dataclass
class Solution:
    # one (column, value) pair per restriction row, in row order
    basis_coeffs: List[Tuple[int, object]]
    # final objective row, the trailing entry is its right-hand side
    coefficients: list
    iterations: int = 0
    method: str = ""

    @property
    def optimal_value(self):
        xs = self.coefficients[:-1]
        value = self.coefficients[-1]
        for i, item in self.basis_coeffs:
            value = value + xs[i] * item
        return value

    @property
    def variables(self) -> Dict[int, object]:
        """Basic variables by 1-based index."""
        return {i + 1: item for i, item in self.basis_coeffs}

    def value_of(self, index: int):
        return self.variables.get(index, Fraction(0))

    def values(self, n: Optional[int] = None) -> list:
        if n is None:
            n = len(self.coefficients) - 1
        return [self.value_of(i + 1) for i in range(n)]

    @property
    def alternate_vars(self) -> List[int]:
        """Non-basic variables with zero reduced cost."""
        basic = {i for i, _ in self.basis_coeffs}
        xs = self.coefficients[:-1]
        return [j + 1 for j in range(len(xs)) if j not in basic and xs[j] == 0]

    @property
    def alternate_optimal(self) -> bool:
        return len(self.alternate_vars) > 0

    def __str__(self):
        lines = [f"Optimal value: {fmt(self.optimal_value)}", "Basic variables:"]
        for i, item in self.basis_coeffs:
            lines.append(f"   x{i + 1} = {fmt(item)}")
        return "\n".join(lines)


class SimplexSolver:
    def __init__(
        self,
        contents: List[list],
        aim: Goal,
        basis: Optional[List[int]] = None,
        numbers: NumberField = RATIONAL,
        verbose: bool = False,
        var_names: Optional[List[str]] = None,
    ):
        if len(contents) < 2:
            raise EmptyProblem("given zero restrictions")
        cols = len(contents[0])
        if cols < 2:
            raise EmptyProblem("no variables to solve for")
        for i, row in enumerate(contents):
            if len(row) != cols:
                raise ShapeMismatch(f"tableau row {i} has {len(row)} entries, expected {cols}")

        self.T = [list(row) for row in contents]
        self.m = len(contents) - 1
        self.n = cols - 1
        self.aim = aim
        self.numbers = numbers
        self.basis = list(basis) if basis is not None else initial_basis(self.T)
        if len(self.basis) != self.m:
            raise ShapeMismatch(f"basis has {len(self.basis)} entries for {self.m} restrictions")
        self.var_names = var_names or [f"x{j + 1}" for j in range(self.n)]
        self.verbose = verbose
        self.iter = 0
        self._consumed = False

    @classmethod
    def from_tableau(cls, tableau: Tableau, verbose: bool = False) -> "SimplexSolver":
        return cls(
            tableau.contents,
            tableau.aim,
            tableau.basis,
            numbers=tableau.numbers,
            verbose=verbose,
            var_names=tableau.var_names,
        )

    @property
    def z(self) -> list:
        return self.T[-1][:-1]

    @property
    def a(self) -> List[list]:
        return [row[:-1] for row in self.T[:-1]]

    @property
    def b(self) -> list:
        return [row[-1] for row in self.T[:-1]]

    def is_optimal(self) -> bool:
        zero = self.numbers.zero()
        if self.aim is Goal.MINIMIZE:
            return all(x <= zero for x in self.z)
        return all(x >= zero for x in self.z)

    def pivot_column(self) -> int:
        best_j = None
        best_val = self.numbers.zero()
        for j, rc in enumerate(self.z):
            if self.aim is Goal.MAXIMIZE:
                if rc < best_val:
                    best_val = rc
                    best_j = j
            else:
                if rc > best_val:
                    best_val = rc
                    best_j = j
        if best_j is None:
            raise NoSolutions()
        return best_j

    def pivot_row(self, col: int) -> int:
        zero = self.numbers.zero()
        ratios = []
        for i in range(self.m):
            aij = self.T[i][col]
            if aij > zero:
                ratios.append((self.T[i][-1] / aij, i))
        if not ratios:
            raise NoLimit(col)
        ratios.sort()
        return ratios[0][1]

    def pivot(self) -> Tuple[int, int, object]:
        col = self.pivot_column()
        row = self.pivot_row(col)
        return row, col, self.T[row][col]

    def eliminate(self, row: int, col: int):
        """Gauss-Jordan step on (row, col); col becomes basic in row."""
        piv = self.T[row][col]
        if piv == 0:
            raise RuntimeError("Zero pivot encountered")
        self.T[row] = [x / piv for x in self.T[row]]
        pivot_row = self.T[row]
        for i in range(self.m + 1):
            if i == row:
                continue
            _subtract_scaled_row(self.T[i], pivot_row, self.T[i][col])
        self.basis[row] = col

    def make_iteration(self):
        row, col, _ = self.pivot()
        self.iter += 1
        if self.verbose:
            self.print_tableau(header=f"Iteration {self.iter}", enter_j=col, leave_i=row)
        self.eliminate(row, col)

    def iterate(self):
        """Pivot until optimal; pivot failures propagate unchanged."""
        if self.verbose:
            self.print_tableau(header="Initial tableau")
        while not self.is_optimal():
            self.make_iteration()
        if self.verbose:
            self.print_tableau(header=f"Final tableau (Iteration {self.iter})")

    def solve(self) -> Solution:
        if self._consumed:
            raise RuntimeError("solver was already used; build a new one per task")
        self._consumed = True
        self.iterate()
        return self.solution()

    def solution(self) -> Solution:
        return Solution(
            basis_coeffs=list(zip(self.basis, self.b)),
            coefficients=list(self.T[-1]),
            iterations=self.iter,
        )

    def print_tableau(self, header: str = "", enter_j: Optional[int] = None, leave_i: Optional[int] = None):
        title = header or f"Iteration {self.iter}"
        print(f"\n{title}")
        headers = [""] + self.var_names + ["RHS", "BV", "Ratio"]

        cells = []
        for i in range(self.m):
            row_cells = [""] + [fmt(x) for x in self.T[i]]
            if enter_j is not None and leave_i is not None and i == leave_i:
                row_cells[enter_j + 1] = f"*{row_cells[enter_j + 1]}"
            bv = self.basis[i]
            row_cells.append(self.var_names[bv] if 0 <= bv < len(self.var_names) else f"x{bv + 1}")
            ratio_cell = ""
            if enter_j is not None:
                aij = self.T[i][enter_j]
                if aij > self.numbers.zero():
                    ratio_cell = fmt(self.T[i][-1] / aij)
            row_cells.append(ratio_cell)
            cells.append(row_cells)
        cells.append(["z"] + [fmt(x) for x in self.T[-1]] + ["z", ""])

        colw = max(6, max(len(s) for row in cells + [headers] for s in row) + 2)
        print(" ".join(f"{h:>{colw}}" for h in headers))
        print("-" * (len(headers) * (colw + 1)))
        for row_cells in cells:
            print(" ".join(f"{c:>{colw}}" for c in row_cells))
