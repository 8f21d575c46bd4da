"""
Countdown Numbers Game - request/result model and chat formatting.

A search takes a set of source numbers and a target and reports every
postfix expression (using each number exactly once) that reaches the target.
"""

import json
import re
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Optional, List, Tuple, Dict, Any


class InvalidInputError(ValueError):
    """Raised when a search request is rejected before the search starts."""
    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SearchRequest:
    """Immutable input of one search run."""
    numbers: Tuple[int, ...]
    target: int
    max_matches: Optional[int] = None

    def __post_init__(self):
        # Accept any sequence but keep the request hashable and immutable.
        # Anything else is left as-is for validate() to reject.
        try:
            object.__setattr__(self, 'numbers', tuple(self.numbers or ()))
        except TypeError:
            pass

    def validate(self) -> None:
        """
        Check the request before searching.

        Raises:
            InvalidInputError: If the numbers are empty or not integers, the
                target is not an integer, or max_matches is not positive.
        """
        if not isinstance(self.numbers, tuple):
            raise InvalidInputError(
                f"Source numbers must be a sequence of integers, got {self.numbers!r}")

        if not self.numbers:
            raise InvalidInputError("At least one source number is required")

        for number in self.numbers:
            if not _is_int(number):
                raise InvalidInputError(f"Source numbers must be integers, got {number!r}")

        if not _is_int(self.target):
            raise InvalidInputError(f"Target must be an integer, got {self.target!r}")

        if self.max_matches is not None:
            if not _is_int(self.max_matches) or self.max_matches <= 0:
                raise InvalidInputError(
                    f"max_matches must be a positive integer, got {self.max_matches!r}")


@dataclass(frozen=True)
class SearchResult:
    """A postfix expression that reaches the target."""
    skeleton: str
    value: int
    infix: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict())


class OutcomeStatus(Enum):
    """How a search run ended."""
    SUCCESS = "success"
    TIMEOUT = "timeout"
    INVALID_INPUT = "invalid_input"


@dataclass
class SearchOutcome:
    """
    Result of a search run.

    Only SUCCESS carries results. An empty SUCCESS means no expression
    reaches the target; a TIMEOUT never carries partial results.
    """
    status: OutcomeStatus
    results: List[SearchResult] = field(default_factory=list)
    reason: Optional[str] = None

    @classmethod
    def success(cls, results: List[SearchResult]) -> 'SearchOutcome':
        return cls(OutcomeStatus.SUCCESS, list(results))

    @classmethod
    def timed_out(cls, seconds: float) -> 'SearchOutcome':
        return cls(OutcomeStatus.TIMEOUT, reason=f"Search did not finish within {seconds}s")

    @classmethod
    def invalid(cls, reason: str) -> 'SearchOutcome':
        return cls(OutcomeStatus.INVALID_INPUT, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS


def parse_solve_args(text: Optional[str], max_matches: Optional[int] = None) -> SearchRequest:
    """
    Build a request from chat arguments: the target followed by the numbers.

    Commas are accepted as separators, e.g. ``952 25, 50, 75, 100, 3, 6``.

    Raises:
        InvalidInputError: If the text does not hold a target and at least
            one number.
    """
    parts = re.split(r'[\s,]+', (text or '').strip())
    parts = [p for p in parts if p]
    if len(parts) < 2:
        raise InvalidInputError("Usage: !solve <target> <number> [number ...]")

    try:
        values = [int(p) for p in parts]
    except ValueError:
        raise InvalidInputError("Target and numbers must be whole numbers") from None

    request = SearchRequest(numbers=tuple(values[1:]), target=values[0], max_matches=max_matches)
    request.validate()
    return request


def format_outcome(request: Optional[SearchRequest], outcome: SearchOutcome, limit: int = 5) -> str:
    """
    Render an outcome as a chat message.

    Args:
        request: The request that was searched
        outcome: The outcome of the search
        limit: Maximum number of expressions to list

    Returns:
        Message text (may exceed the chat length limit; callers chunk it)
    """
    if outcome.status is OutcomeStatus.INVALID_INPUT:
        return f"Invalid input: {outcome.reason}"

    if outcome.status is OutcomeStatus.TIMEOUT:
        return f"Timed out: {outcome.reason}. Try fewer numbers."

    numbers = ', '.join(str(n) for n in request.numbers)
    if not outcome.results:
        return f"No expression using **{numbers}** reaches **{request.target}**."

    lines = [f"Found {len(outcome.results)} way(s) to reach **{request.target}** with **{numbers}**:"]
    for result in outcome.results[:limit]:
        lines.append(f"- `{result.infix} = {result.value}`  (RPN: `{result.skeleton}`)")
    hidden = len(outcome.results) - limit
    if hidden > 0:
        lines.append(f"...and {hidden} more.")
    return '\n'.join(lines)
