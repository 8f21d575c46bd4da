"""
Postfix (Reverse Polish) expression evaluator for the Countdown Numbers Game.

Evaluates and renders the token sequences produced by the solver. Only
integer arithmetic is allowed: division must be exact and never by zero.
"""

import operator
from enum import Enum
from typing import Sequence, Tuple, Union


class EvaluationError(ValueError):
    """Raised when a postfix expression cannot be evaluated."""
    pass


class Operator(str, Enum):
    """Arithmetic operators, in the order the solver tries them."""
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'

    @property
    def precedence(self) -> int:
        return 2 if self in (Operator.MUL, Operator.DIV) else 1

    def apply(self, left: int, right: int) -> int:
        if self is Operator.DIV:
            if right == 0:
                raise EvaluationError("Division by zero")
            if left % right:
                raise EvaluationError(f"Non-integer division: {left} / {right}")
            return left // right
        return _FUNCTIONS[self](left, right)

    def __str__(self) -> str:
        return self.value


_FUNCTIONS = {
    Operator.ADD: operator.add,
    Operator.SUB: operator.sub,
    Operator.MUL: operator.mul,
}

Token = Union[int, Operator]


class RpnEvaluator:
    """
    Evaluates postfix skeletons and converts them to infix for display.

    Skeletons may be passed either as token sequences (ints and Operators)
    or as strings joined with ``token_separator``.
    """

    operators: Tuple[Operator, ...] = tuple(Operator)
    token_separator = ' '

    def parse(self, text: str) -> Tuple[Token, ...]:
        """Split a postfix string into tokens."""
        tokens = []
        for raw in text.split():
            try:
                tokens.append(Operator(raw))
                continue
            except ValueError:
                pass
            try:
                tokens.append(int(raw))
            except ValueError:
                raise EvaluationError(f"Unknown token: {raw!r}") from None
        return tuple(tokens)

    def format(self, skeleton: Sequence[Token]) -> str:
        """Join tokens into a postfix string."""
        return self.token_separator.join(str(token) for token in skeleton)

    def _tokens(self, skeleton: Union[str, Sequence[Token]]) -> Sequence[Token]:
        if isinstance(skeleton, str):
            return self.parse(skeleton)
        return skeleton

    def evaluate(self, skeleton: Union[str, Sequence[Token]]) -> int:
        """
        Compute the value of a postfix expression.

        Raises:
            EvaluationError: On stack underflow, leftover operands,
                division by zero or non-integer division.
        """
        stack = []
        for token in self._tokens(skeleton):
            if isinstance(token, Operator):
                if len(stack) < 2:
                    raise EvaluationError(f"Not enough operands for {token}")
                right = stack.pop()
                left = stack.pop()
                stack.append(token.apply(left, right))
            else:
                stack.append(token)

        if len(stack) != 1:
            raise EvaluationError("Expression does not reduce to a single value")
        return stack[0]

    def to_infix(self, skeleton: Union[str, Sequence[Token]]) -> str:
        """
        Render a postfix expression as infix with minimal parentheses.

        Raises:
            EvaluationError: If the expression is not well formed.
        """
        # Each stack entry is (text, precedence); operands bind tightest.
        stack = []
        for token in self._tokens(skeleton):
            if not isinstance(token, Operator):
                stack.append((str(token), 3))
                continue
            if len(stack) < 2:
                raise EvaluationError(f"Not enough operands for {token}")
            right, right_prec = stack.pop()
            left, left_prec = stack.pop()
            if left_prec < token.precedence:
                left = f"({left})"
            if right_prec < token.precedence or (
                    right_prec == token.precedence and token in (Operator.SUB, Operator.DIV)):
                right = f"({right})"
            stack.append((f"{left} {token} {right}", token.precedence))

        if len(stack) != 1:
            raise EvaluationError("Expression does not reduce to a single value")
        return stack[0][0]
