# MIT License
"""Sandboxed evaluator for custom biomass equations.

Users may replace the regional allometry of a species with their own
equation in a single variable ``D`` (diameter at breast height, cm),
for example ``exp(-1.996 + 2.32*ln(D))``.

The text is never handed to :func:`eval`.  It is screened against a
character whitelist and a blocklist, tokenised, parsed by a small
recursive-descent parser into an expression tree and the tree is then
interpreted.  The only names the tree can reference are ``D`` and the
functions in :data:`FUNCTIONS`.

Grammar::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('+' | '-') unary | primary
    primary := NUMBER | 'D' | NAME '(' expr (',' expr)* ')' | '(' expr ')'

:func:`evaluate_expression` is the entry point used by the engine.  It
returns ``None`` (the invalid sentinel) for anything that fails to parse
or evaluate to a finite number and never raises.
"""

from __future__ import annotations
import math
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Tuple, Union

MAX_EXPRESSION_LENGTH = 500

# digits, operators, whitespace, D and the letters of the function names
_ALLOWED = re.compile(r"^[0-9+\-*/().,\sDdepxowlnqrtmacs]*$", re.IGNORECASE)
_BLOCKED = re.compile(r"(constructor|__proto__|prototype|=>|new\s)", re.IGNORECASE)
_TOKEN = re.compile(
    r"\s*(?:"
    r"(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<name>[A-Za-z_][A-Za-z_0-9]*)"
    r"|(?P<op>[-+*/(),])"
    r")"
)

VARIABLE = "D"


def _pow(a: float, b: float) -> float:
    return math.pow(a, b)


def _nan_aware(fn: Callable[..., float]) -> Callable[..., float]:
    # builtin min/max drop NaN depending on argument order
    def wrapped(*args: float) -> float:
        if any(math.isnan(a) for a in args):
            return math.nan
        return fn(*args)
    return wrapped


# name -> (callable, min args, max args); None means unbounded
FUNCTIONS: Dict[str, Tuple[Callable[..., float], int, Optional[int]]] = {
    "exp": (math.exp, 1, 1),
    "ln": (math.log, 1, 1),
    "sqrt": (math.sqrt, 1, 1),
    "pow": (_pow, 2, 2),
    "min": (_nan_aware(min), 2, None),
    "max": (_nan_aware(max), 2, None),
}


class ExpressionError(ValueError):
    """Raised by :func:`parse_expression` for text outside the grammar."""


# ---------------------------------------------------------------------------
# expression tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Const:
    value: float

    def evaluate(self, d: float) -> float:
        return self.value


@dataclass(frozen=True)
class Var:
    def evaluate(self, d: float) -> float:
        return d


@dataclass(frozen=True)
class Negate:
    operand: "Expression"

    def evaluate(self, d: float) -> float:
        return -self.operand.evaluate(d)


@dataclass(frozen=True)
class Arithmetic:
    op: str
    left: "Expression"
    right: "Expression"

    def evaluate(self, d: float) -> float:
        a = self.left.evaluate(d)
        b = self.right.evaluate(d)
        if self.op == "+":
            return a + b
        if self.op == "-":
            return a - b
        if self.op == "*":
            return a * b
        return a / b


@dataclass(frozen=True)
class Call:
    name: str
    args: Tuple["Expression", ...]

    def evaluate(self, d: float) -> float:
        fn = FUNCTIONS[self.name][0]
        return fn(*(a.evaluate(d) for a in self.args))


Expression = Union[Const, Var, Negate, Arithmetic, Call]


# ---------------------------------------------------------------------------
# tokenizer / parser
# ---------------------------------------------------------------------------

def _tokenize(text: str) -> List[Tuple[str, str]]:
    tokens: List[Tuple[str, str]] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        m = _TOKEN.match(text, pos)
        if m is None or m.end() == pos:
            raise ExpressionError(f"Unexpected character at position {pos}: {text[pos]!r}")
        kind = m.lastgroup
        tokens.append((kind, m.group(kind)))
        pos = m.end()
    return tokens


class _Parser:
    def __init__(self, tokens: List[Tuple[str, str]]):
        self.tokens = tokens
        self.i = 0

    def peek(self) -> Optional[Tuple[str, str]]:
        return self.tokens[self.i] if self.i < len(self.tokens) else None

    def next(self) -> Tuple[str, str]:
        tok = self.peek()
        if tok is None:
            raise ExpressionError("Unexpected end of expression")
        self.i += 1
        return tok

    def expect(self, op: str) -> None:
        kind, value = self.next()
        if kind != "op" or value != op:
            raise ExpressionError(f"Expected {op!r}, found {value!r}")

    def parse(self):
        if not self.tokens:
            raise ExpressionError("Empty expression")
        node = self.expr()
        if self.peek() is not None:
            raise ExpressionError(f"Unexpected token {self.peek()[1]!r}")
        return node

    def expr(self):
        node = self.term()
        while self.peek() in (("op", "+"), ("op", "-")):
            op = self.next()[1]
            node = Arithmetic(op, node, self.term())
        return node

    def term(self):
        node = self.unary()
        while self.peek() in (("op", "*"), ("op", "/")):
            op = self.next()[1]
            node = Arithmetic(op, node, self.unary())
        return node

    def unary(self):
        tok = self.peek()
        if tok == ("op", "-"):
            self.next()
            return Negate(self.unary())
        if tok == ("op", "+"):
            self.next()
            return self.unary()
        return self.primary()

    def primary(self):
        kind, value = self.next()
        if kind == "number":
            return Const(float(value))
        if kind == "op" and value == "(":
            node = self.expr()
            self.expect(")")
            return node
        if kind == "name":
            if value == VARIABLE:
                return Var()
            name = value.lower()
            if name not in FUNCTIONS:
                raise ExpressionError(f"Unknown name {value!r}")
            return self.call(name)
        raise ExpressionError(f"Unexpected token {value!r}")

    def call(self, name: str):
        self.expect("(")
        args = [self.expr()]
        while self.peek() == ("op", ","):
            self.next()
            args.append(self.expr())
        self.expect(")")
        _, lo, hi = FUNCTIONS[name]
        if len(args) < lo or (hi is not None and len(args) > hi):
            raise ExpressionError(f"{name}() takes {lo if lo == hi else f'at least {lo}'} argument(s), got {len(args)}")
        return Call(name, tuple(args))


def parse_expression(text: str) -> Expression:
    """Parse `text` into an expression tree.

    Raises
    ------
    ExpressionError
        If the text contains disallowed characters or blocked patterns,
        is too long, or does not follow the grammar.
    """
    if text is None or not text.strip():
        raise ExpressionError("Empty expression")
    if len(text) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError("Expression is too long")
    if not _ALLOWED.match(text):
        raise ExpressionError("Expression contains characters that are not allowed")
    if _BLOCKED.search(text):
        raise ExpressionError("Expression contains a blocked pattern")
    try:
        return _Parser(_tokenize(text.strip())).parse()
    except RecursionError:
        raise ExpressionError("Expression is nested too deeply") from None


@lru_cache(maxsize=256)
def _compiled(text: str):
    try:
        return parse_expression(text)
    except ExpressionError:
        return None


def is_valid_expression(text: Optional[str]) -> bool:
    """Whether `text` parses; says nothing about its value at a given D."""
    return bool(text) and _compiled(text) is not None


def evaluate_expression(text: Optional[str], diameter_cm: float) -> Optional[float]:
    """Evaluate a biomass equation at ``D = diameter_cm``.

    Returns
    -------
    float or None
        The finite result, or ``None`` when the expression is invalid,
        fails at run time (domain error, overflow, division by zero) or
        produces a non-finite value.
    """
    if not text:
        return None
    tree = _compiled(text)
    if tree is None:
        return None
    try:
        value = float(tree.evaluate(float(diameter_cm)))
    except (ArithmeticError, ValueError, TypeError, RecursionError):
        return None
    if not math.isfinite(value):
        return None
    return value
