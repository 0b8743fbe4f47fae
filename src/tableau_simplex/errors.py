"""Exceptions raised while building, solving or parsing a linear program."""

from __future__ import annotations

from typing import Optional


class SimplexError(Exception):
    """Base class for every error raised by this package."""


# --- construction ---

class EmptyProblem(SimplexError):
    """The task has no restrictions or references no variables."""


class ShapeMismatch(SimplexError):
    """Assembled parts do not line up, or no initial basis can be read off the tableau."""


# --- solving ---

class SolveError(SimplexError):
    """A terminal condition of the pivot loop. No partial solution is produced."""


class NoLimit(SolveError):
    """No valid pivot row: the objective is unbounded in the improving direction."""

    def __init__(self, column: Optional[int] = None):
        self.column = column
        msg = "objective is unbounded"
        if column is not None:
            msg += f" along x{column + 1}"
        super().__init__(msg)


class NoSolutions(SolveError):
    """No valid pivot column although the tableau is not optimal."""

    def __init__(self, msg: str = "no entering column in a non-optimal tableau"):
        super().__init__(msg)


class Infeasible(SolveError):
    """The restrictions admit no non-negative point."""

    def __init__(self, msg: str = "restrictions are inconsistent"):
        super().__init__(msg)


# --- parsing ---

class ParseError(SimplexError):
    def __init__(self, msg: str, line: Optional[int] = None):
        self.msg = msg
        self.line = line
        super().__init__(msg if line is None else f"line {line}: {msg}")


class UnexpectedRelation(ParseError):
    pass


class EndOfInput(ParseError):
    pass


class NotANumber(ParseError):
    pass


class NoTarget(ParseError):
    pass


class Composite(ParseError):
    """A line is neither a restriction nor an objective; keeps both reasons."""

    def __init__(self, first: ParseError, second: ParseError, line: Optional[int] = None):
        self.first = first
        self.second = second
        super().__init__(
            f"not a restriction ({first.msg}) and not an objective ({second.msg})", line
        )
