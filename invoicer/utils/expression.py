"""
Numeric gateway for invoice amounts.

Invoice fields may hold plain numbers, blank strings, or short arithmetic
shorthand typed into the entry form (e.g. "40*25"). Every amount used in a
calculation passes through numeric_value(), which always returns a finite
Decimal and never raises.

Expressions are evaluated by a small recursive-descent parser that only
understands decimal literals, + - * /, unary signs and parentheses:

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := ('+' | '-') factor | NUMBER | '(' expression ')'
"""

import re
from contextlib import contextmanager
from decimal import Decimal, DivisionByZero, InvalidOperation, Overflow, localcontext
from functools import wraps
from typing import Any, List, Tuple

ZERO = Decimal("0")

ALLOWED_EXPRESSION = re.compile(r'^[0-9+\-*/().\s]+$')
TOKEN_PATTERN = re.compile(r'\s*(?:(\d+\.?\d*|\.\d+)|(.))')

# unary signs and parentheses combined
MAX_NESTING = 64


class ExpressionError(ValueError):
    """Raised when an arithmetic expression cannot be parsed."""


def tokenize(text: str) -> List[Tuple[str, str]]:
    """Split an expression into ('num', literal) and ('op', char) tokens."""
    tokens = []
    position = 0
    text = text.rstrip()
    while position < len(text):
        match = TOKEN_PATTERN.match(text, position)
        if not match:
            raise ExpressionError(f"Unexpected input at position {position}")
        number, symbol = match.groups()
        if number is not None:
            tokens.append(('num', number))
        elif symbol in '+-*/()':
            tokens.append(('op', symbol))
        else:
            raise ExpressionError(f"Unexpected character {symbol!r}")
        position = match.end()
    return tokens


class ExpressionParser:
    """Recursive-descent evaluator over the tokens of one expression."""

    def __init__(self, text: str):
        self.tokens = tokenize(text)
        self.index = 0
        self.depth = 0

    def parse(self) -> Decimal:
        if not self.tokens:
            raise ExpressionError("Empty expression")
        value = self._expression()
        if self.index != len(self.tokens):
            raise ExpressionError(f"Unexpected token {self.tokens[self.index][1]!r}")
        return value

    def _peek(self):
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _take(self):
        token = self._peek()
        if token is None:
            raise ExpressionError("Unexpected end of expression")
        self.index += 1
        return token

    def _expression(self) -> Decimal:
        value = self._term()
        while self._peek() in (('op', '+'), ('op', '-')):
            _, operator = self._take()
            right = self._term()
            value = value + right if operator == '+' else value - right
        return value

    def _term(self) -> Decimal:
        value = self._factor()
        while self._peek() in (('op', '*'), ('op', '/')):
            _, operator = self._take()
            right = self._factor()
            value = value * right if operator == '*' else value / right
        return value

    def _factor(self) -> Decimal:
        kind, text = self._take()
        if kind == 'num':
            return Decimal(text)
        if text not in '+-(':
            raise ExpressionError(f"Unexpected token {text!r}")

        self.depth += 1
        if self.depth > MAX_NESTING:
            raise ExpressionError(f"Expression nested deeper than {MAX_NESTING} levels")
        try:
            if text == '+':
                return self._factor()
            if text == '-':
                return -self._factor()
            value = self._expression()
            if self._take() != ('op', ')'):
                raise ExpressionError("Missing closing parenthesis")
            return value
        finally:
            self.depth -= 1


def evaluate_expression(text: str) -> Decimal:
    """
    Evaluate a whitelisted arithmetic expression.

    Raises:
        ExpressionError: malformed expression
        ArithmeticError: division by zero or other decimal failure
    """
    return ExpressionParser(text).parse()


def _finite_or_zero(value: Decimal) -> Decimal:
    return value if value.is_finite() else ZERO


def numeric_value(raw: Any) -> Decimal:
    """
    Normalize a raw invoice amount to a finite Decimal.

    Numbers are returned as-is when finite. Strings are trimmed; blank
    strings give 0, plain numbers are parsed directly, and strings made only
    of digits, '.', whitespace and + - * / ( ) are evaluated arithmetically.
    Anything else, or any evaluation failure, gives 0.
    """
    if raw is None:
        return ZERO
    if isinstance(raw, Decimal):
        return _finite_or_zero(raw)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            return _finite_or_zero(Decimal(str(raw)))
        except InvalidOperation:
            return ZERO

    text = str(raw).strip()
    # Decimal() accepts "1_000"; digit grouping is not an amount here
    if not text or '_' in text:
        return ZERO

    # parsing relies on InvalidOperation, even inside lenient_arithmetic()
    with localcontext() as context:
        context.traps[InvalidOperation] = True
        try:
            return _finite_or_zero(Decimal(text))
        except InvalidOperation:
            pass

        if not ALLOWED_EXPRESSION.match(text):
            return ZERO

        try:
            return _finite_or_zero(evaluate_expression(text))
        except (ExpressionError, ArithmeticError):
            return ZERO


@contextmanager
def lenient_arithmetic():
    """
    Decimal context in which overflow, division by zero and invalid
    operations produce Infinity/NaN instead of raising.
    """
    with localcontext() as context:
        for signal in (Overflow, DivisionByZero, InvalidOperation):
            context.traps[signal] = False
        yield context


def finite_result(func):
    """Run an amount calculation under lenient_arithmetic(); non-finite results become 0."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        with lenient_arithmetic():
            return numeric_value(func(*args, **kwargs))
    return wrapper


__all__ = [
    "ExpressionError",
    "ExpressionParser",
    "evaluate_expression",
    "finite_result",
    "lenient_arithmetic",
    "numeric_value",
    "tokenize",
]
