"""Dense simplex tableau assembly.

Matrix layout: rows 0..m-1 are restrictions, the last row is the objective;
columns 0..n-1 are variables, the last column is the right-hand side. The
objective row stores the negated objective coefficients, and its right-hand side
is the objective value of the current basis.

Augmentation steps per method, applied in this order:
- SIMPLE:    invert_z
- BIG_M:     add_taxes (unit M), add_basis, invert_z
- TWO_PHASE: phase-one objective (add_taxes with unit 1 on a zero objective,
             minimised), add_basis, invert_z
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .errors import ShapeMismatch
from .fields import NumberField
from .task import CanonicalTask, Goal, Method


class TableauParts:
    def __init__(self, a: List[list], b: list, z: list, numbers: NumberField):
        self.a = a
        self.b = b
        # z has one slot per column of a, plus the objective constant moved to the
        # left-hand side of ``z - c.x = const``
        self.z = z
        self.numbers = numbers
        self.check()

    @classmethod
    def from_canonical(cls, canonical: CanonicalTask) -> "TableauParts":
        numbers = canonical.field
        zero = numbers.zero()
        n = canonical.max_index
        task = canonical.task

        a = []
        for restriction in task.restrictions:
            row = [zero] * n
            for t in restriction.terms:
                row[t.index - 1] = row[t.index - 1] + t.coef
            a.append(row)
        b = [restriction.value for restriction in task.restrictions]

        z = [zero] * n
        for t in task.objective.terms:
            if t.index > n:
                raise ShapeMismatch(f"objective references x{t.index} beyond {n} columns")
            z[t.index - 1] = z[t.index - 1] + t.coef
        z.append(-task.objective.value)
        return cls(a, b, z, numbers)

    @property
    def width(self) -> int:
        return len(self.z) - 1

    def check(self):
        if len(self.a) != len(self.b):
            raise ShapeMismatch(f"{len(self.a)} restriction rows but {len(self.b)} right-hand sides")
        for i, row in enumerate(self.a):
            if len(row) != self.width:
                raise ShapeMismatch(
                    f"restriction row {i + 1} has {len(row)} columns, objective has {self.width}"
                )

    def add_taxes(self, goal: Goal, unit):
        """Charge ``unit`` per unit of the implicit artificial variables.

        Each artificial equals ``b_i - A_i.x``, so the charge is folded into the
        objective through the column sums of A and the sum of b. The charge works
        against the goal: subtracted when maximising, added when minimising.
        """
        sign = 1 if goal is Goal.MAXIMIZE else -1
        zero = self.numbers.zero()
        for j in range(self.width):
            col_sum = sum((row[j] for row in self.a), zero)
            self.z[j] = self.z[j] + sign * col_sum * unit
        self.z[-1] = self.z[-1] + sign * sum(self.b, zero) * unit

    def add_basis(self):
        """Append an identity block of artificial columns."""
        m = len(self.a)
        zero, one = self.numbers.zero(), self.numbers.one()
        for i, row in enumerate(self.a):
            row.extend(one if k == i else zero for k in range(m))
        constant = self.z.pop()
        self.z.extend([zero] * m)
        self.z.append(constant)

    def invert_z(self):
        self.z = [-x for x in self.z]

    def into_contents(self) -> List[list]:
        self.check()
        rows = [row + [bi] for row, bi in zip(self.a, self.b)]
        rows.append(list(self.z))
        return rows


@dataclass
class Tableau:
    contents: List[list]
    basis: List[int]
    aim: Goal
    numbers: NumberField
    var_names: List[str]
    # first artificial column; equals the column count when there are none
    artificial: int
    # the task's own objective row (inverted, trailing constant), before augmentation
    objective: list


def initial_basis(contents: List[list]) -> List[int]:
    """For every restriction row pick a column that is already basic in it.

    A column qualifies for row r when its objective entry is zero and its
    constraint column is the unit vector e_r. Later columns win, which prefers
    artificial and slack columns over structural ones.
    """
    m = len(contents) - 1
    n = len(contents[0]) - 1
    z = contents[-1]
    basis = []
    for r in range(m):
        for j in reversed(range(n)):
            if z[j] != 0 or contents[r][j] != 1:
                continue
            if all(contents[k][j] == 0 for k in range(m) if k != r):
                basis.append(j)
                break
        else:
            raise ShapeMismatch(
                f"restriction {r + 1} has no basic column; use the big_m or two_phase method"
            )
    return basis


def assemble(canonical: CanonicalTask) -> Tableau:
    parts = TableauParts.from_canonical(canonical)
    numbers = parts.numbers
    objective = [-x for x in parts.z]
    n = parts.width
    m = len(parts.a)
    aim = canonical.goal

    if canonical.method is Method.BIG_M:
        parts.add_taxes(aim, numbers.M())
    elif canonical.method is Method.TWO_PHASE:
        parts.z = [numbers.zero()] * (n + 1)
        aim = Goal.MINIMIZE
        parts.add_taxes(aim, numbers.one())

    var_names = [f"x{j + 1}" for j in range(n)]
    if canonical.method is not Method.SIMPLE:
        parts.add_basis()
        var_names += [f"a{i + 1}" for i in range(m)]
    parts.invert_z()

    contents = parts.into_contents()
    return Tableau(
        contents=contents,
        basis=initial_basis(contents),
        aim=aim,
        numbers=numbers,
        var_names=var_names,
        artificial=n,
        objective=objective,
    )
