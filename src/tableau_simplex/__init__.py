"""Exact tableau simplex solver with direct, Big-M and two-phase methods."""

from .bigm import ExtendedNumber
from .errors import (
    Composite,
    EmptyProblem,
    EndOfInput,
    Infeasible,
    NoLimit,
    NoSolutions,
    NoTarget,
    NotANumber,
    ParseError,
    ShapeMismatch,
    SimplexError,
    SolveError,
    UnexpectedRelation,
)
from .fields import BIG_M, RATIONAL, BigMField, RationalField
from .methods import build_solver, solve, solve_canonical
from .parser import parse_task
from .solver import SimplexSolver, Solution
from .tableau import Tableau, TableauParts, assemble
from .task import (
    CanonicalTask,
    Goal,
    Method,
    Objective,
    Relation,
    Restriction,
    Task,
    Term,
    canonicalize,
    choose_method,
)

__version__ = "0.1.0"
