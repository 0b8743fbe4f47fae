"""Linear program data model and conversion to standard equality form.

Input contract (programmatic API):
- Term(coef, index): ``index`` is the 1-based variable number, ``x1`` is index 1
- Restriction(terms, relation, value): ``relation`` in {<=, ==, >=}
- Objective(terms, goal, value): ``value`` is a constant added to the objective
- Task(restrictions, objective)

``canonicalize`` appends one slack (<=) or surplus (>=) column per inequality,
turns every relation into ``==`` and flips rows with a negative right-hand side.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from .errors import EmptyProblem, ShapeMismatch
from .fields import BIG_M, RATIONAL, NumberField
from .rational import Num


class Relation(Enum):
    LESS = "<="
    EQUAL = "=="
    GREATER = ">="


class Goal(Enum):
    MAXIMIZE = "max"
    MINIMIZE = "min"


class Method(Enum):
    SIMPLE = "simple"
    BIG_M = "big_m"
    TWO_PHASE = "two_phase"

    @property
    def field(self) -> NumberField:
        return BIG_M if self is Method.BIG_M else RATIONAL


@dataclass
class Term:
    coef: Num
    index: int


@dataclass
class Restriction:
    terms: List[Term]
    relation: Relation
    value: Num


@dataclass
class Objective:
    terms: List[Term]
    goal: Goal = Goal.MAXIMIZE
    value: Num = 0


@dataclass
class Task:
    restrictions: List[Restriction]
    objective: Objective

    def variable_count(self) -> int:
        """Largest variable index referenced anywhere in the task."""
        indices = [t.index for r in self.restrictions for t in r.terms]
        indices += [t.index for t in self.objective.terms]
        return max(indices, default=0)


@dataclass
class CanonicalTask:
    task: Task
    max_index: int
    method: Method = Method.SIMPLE

    @property
    def field(self) -> NumberField:
        return self.method.field

    @property
    def goal(self) -> Goal:
        return self.task.objective.goal


def choose_method(task: Task) -> Method:
    """SIMPLE when every row gets a slack basis for free, TWO_PHASE otherwise."""
    for r in task.restrictions:
        if r.relation is not Relation.LESS or RATIONAL.coerce(r.value) < 0:
            return Method.TWO_PHASE
    return Method.SIMPLE


def _convert_terms(terms: List[Term], numbers: NumberField) -> List[Term]:
    out = []
    for t in terms:
        if t.index < 1:
            raise ShapeMismatch(f"variable index must be positive, got x{t.index}")
        out.append(Term(numbers.coerce(t.coef), t.index))
    return out


def canonicalize(task: Task, method: Method = Method.SIMPLE) -> CanonicalTask:
    if not task.restrictions:
        raise EmptyProblem("given zero restrictions")
    if not any(r.terms for r in task.restrictions):
        raise EmptyProblem("no variables to solve for")

    numbers = method.field
    # objective indices count too, so a slack never takes the slot of a user variable
    max_index = task.variable_count()

    restrictions = []
    for r in task.restrictions:
        terms = _convert_terms(r.terms, numbers)
        value = numbers.coerce(r.value)
        if r.relation is Relation.LESS:
            max_index += 1
            terms.append(Term(numbers.one(), max_index))
        elif r.relation is Relation.GREATER:
            max_index += 1
            terms.append(Term(-numbers.one(), max_index))
        elif r.relation is not Relation.EQUAL:
            raise ValueError(f"unknown relation {r.relation!r}")

        if value < numbers.zero():
            terms = [Term(-t.coef, t.index) for t in terms]
            value = -value
        restrictions.append(Restriction(terms, Relation.EQUAL, value))

    objective = Objective(
        _convert_terms(task.objective.terms, numbers),
        task.objective.goal,
        numbers.coerce(task.objective.value),
    )
    return CanonicalTask(Task(restrictions, objective), max_index, method)
