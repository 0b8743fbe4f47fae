"""Text format for linear programs.

One restriction per line, then the objective line, e.g.::

    x1 + x2 <= 4
    2x1 - 3.5*x2 >= -1
    z = 3x1 + 2x2 -> max

Relations are ``<=``, ``==`` and ``>=``. A term is ``[sign][coefficient][*]x<index>``;
terms are joined by ``+`` or ``-``. Blank lines and ``#`` comments are ignored.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import List, Optional, Tuple

from .errors import (
    Composite,
    EndOfInput,
    NoTarget,
    NotANumber,
    ParseError,
    UnexpectedRelation,
)
from .task import Goal, Objective, Relation, Restriction, Task, Term

_TOKEN = re.compile(
    r"\s*(?:"
    r"(?P<num>\d+(?:_\d+)*(?:\.\d*)?|\.\d+)"
    r"|(?P<var>[xX]\d+)"
    r"|(?P<op>->|<=|>=|==|[-+*=<>])"
    r"|(?P<word>[A-Za-z_]\w*)"
    r"|(?P<bad>\S)"
    r")"
)

_RELATIONS = {"<=": Relation.LESS, "==": Relation.EQUAL, ">=": Relation.GREATER}

Token = Tuple[str, str]


def tokenize(line: str) -> List[Token]:
    tokens = []
    pos = 0
    line = line.rstrip()
    while pos < len(line):
        m = _TOKEN.match(line, pos)
        kind = m.lastgroup
        tokens.append((kind, m.group(kind)))
        pos = m.end()
    return tokens


class _Line:
    """Cursor over the tokens of one line."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def next(self, what: str) -> Token:
        tok = self.peek()
        if tok is None:
            raise EndOfInput(f"expected {what}, line ended")
        self.pos += 1
        return tok

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)


def _number(text: str) -> Fraction:
    try:
        return Fraction(Decimal(text.replace("_", "")))
    except InvalidOperation:
        raise NotANumber(f"{text!r} is not a number") from None


def _signs(cur: _Line) -> int:
    sign = 1
    while cur.peek() in (("op", "+"), ("op", "-")):
        if cur.next("sign")[1] == "-":
            sign = -sign
    return sign


def _term(cur: _Line, sign: int) -> Term:
    sign *= _signs(cur)
    coef = Fraction(1)
    kind, text = cur.next("a term")
    if kind == "num":
        coef = _number(text)
        if cur.peek() == ("op", "*"):
            cur.next("*")
        kind, text = cur.next("a variable")
    if kind != "var":
        raise NotANumber(f"expected a coefficient or variable, got {text!r}")
    return Term(sign * coef, int(text[1:]))


def _terms(cur: _Line) -> List[Term]:
    terms = [_term(cur, 1)]
    while cur.peek() in (("op", "+"), ("op", "-")):
        sign = -1 if cur.next("sign")[1] == "-" else 1
        terms.append(_term(cur, sign))
    return terms


def _value(cur: _Line) -> Fraction:
    sign = _signs(cur)
    kind, text = cur.next("a value")
    if kind != "num":
        raise NotANumber(f"expected a number, got {text!r}")
    return sign * _number(text)


def _finish(cur: _Line):
    if not cur.at_end():
        raise ParseError(f"unexpected {cur.peek()[1]!r} after the end of the line")


def parse_restriction(line: str) -> Restriction:
    cur = _Line(tokenize(line))
    terms = _terms(cur)
    kind, text = cur.next("a relation")
    if kind != "op" or text not in _RELATIONS:
        raise UnexpectedRelation(f"expected one of <=, ==, >=, got {text!r}")
    value = _value(cur)
    _finish(cur)
    return Restriction(terms, _RELATIONS[text], value)


def parse_objective(line: str) -> Objective:
    cur = _Line(tokenize(line))
    kind, text = cur.next("z")
    if kind != "word" or text.lower() != "z":
        raise NoTarget(f"objective must start with 'z =', got {text!r}")
    if cur.next("=") != ("op", "="):
        raise NoTarget("objective must start with 'z ='")
    terms = _terms(cur)
    if cur.next("->") != ("op", "->"):
        raise NoTarget("expected '->' before the goal")
    kind, text = cur.next("max or min")
    if kind != "word" or text.lower() not in ("max", "min"):
        raise NoTarget(f"goal must be max or min, got {text!r}")
    _finish(cur)
    return Objective(terms, Goal(text.lower()))


def parse_task(text: str) -> Task:
    restrictions = []
    objective = None
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            restrictions.append(parse_restriction(line))
            continue
        except ParseError as e:
            first = e
        try:
            parsed = parse_objective(line)
        except ParseError as second:
            raise Composite(first, second, lineno) from None
        if objective is not None:
            raise ParseError("more than one objective line", lineno)
        objective = parsed
    if objective is None:
        raise NoTarget("no objective line 'z = ... -> max|min'")
    if not restrictions:
        raise EndOfInput("no restrictions before the objective")
    return Task(restrictions, objective)
