"""
Brute-force solver for the Countdown Numbers Game.

Enumerates every postfix expression that uses all the source numbers once,
evaluates each one and keeps those equal to the target.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from .countdown import InvalidInputError, SearchOutcome, SearchRequest, SearchResult
from .rpn import EvaluationError, Operator, RpnEvaluator, Token
from .timeout import DEFAULT_TIMEOUT, TimeoutGate

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    """
    Mutable state of one generator, restored after every branch.

    ``used`` is a bitmask over the source numbers; a slot is flipped on when
    the number is pushed and flipped back when its branch returns.
    """
    used: List[bool]
    stack_depth: int = 0
    tokens: List[Token] = field(default_factory=list)

    @classmethod
    def for_numbers(cls, count: int) -> 'SearchState':
        return cls(used=[False] * count)

    def push_operand(self, index: int, number: int) -> None:
        self.used[index] = True
        self.tokens.append(number)
        self.stack_depth += 1

    def pop_operand(self, index: int) -> None:
        self.tokens.pop()
        self.stack_depth -= 1
        self.used[index] = False

    def push_operator(self, op: Operator) -> None:
        self.tokens.append(op)
        self.stack_depth -= 1

    def pop_operator(self) -> None:
        self.tokens.pop()
        self.stack_depth += 1

    @property
    def pristine(self) -> bool:
        return self.stack_depth == 0 and not self.tokens and not any(self.used)


class SkeletonGenerator:
    """
    Depth-first enumeration of postfix skeletons over the source numbers.

    An operator is only appended while at least two values are on the
    implicit stack, and a skeleton is complete once every number is used and
    exactly one value remains. Iterating yields token tuples in discovery
    order; the numbers passed in are never modified.
    """

    def __init__(self, numbers: Sequence[int], gate: TimeoutGate,
                 operators: Sequence[Operator] = tuple(Operator)):
        self.numbers = tuple(numbers)
        self.gate = gate
        self.operators = tuple(operators)
        self.state = SearchState.for_numbers(len(self.numbers))

    def __iter__(self) -> Iterator[Tuple[Token, ...]]:
        return self._expand()

    def _expand(self) -> Iterator[Tuple[Token, ...]]:
        if self.gate.check():
            return

        state = self.state
        depth = state.stack_depth

        if depth >= 2:
            for op in self.operators:
                state.push_operator(op)
                try:
                    yield from self._expand()
                finally:
                    state.pop_operator()
                if self.gate.expired:
                    return

        all_used = True
        tried = set()
        for index, number in enumerate(self.numbers):
            if state.used[index]:
                continue
            all_used = False
            # Equal numbers in different slots give identical skeletons.
            if number in tried:
                continue
            tried.add(number)

            state.push_operand(index, number)
            try:
                yield from self._expand()
            finally:
                state.pop_operand(index)
            if self.gate.expired:
                return

        if all_used and depth == 1:
            yield tuple(state.tokens)


class CountdownSolver:
    """
    Solver for the Countdown Numbers Game.
    Finds every expression that reaches the target, up to an optional cap.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 evaluator: Optional[RpnEvaluator] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.timeout = timeout
        self.evaluator = evaluator or RpnEvaluator()
        self.clock = clock

    def run(self, request: SearchRequest) -> SearchOutcome:
        """
        Search for expressions matching the request's target.

        Args:
            request: Numbers, target and optional match cap

        Returns:
            SUCCESS with the matches (possibly none), TIMEOUT if the budget
            ran out, or INVALID_INPUT if the request was rejected.
        """
        try:
            request.validate()
        except InvalidInputError as e:
            logger.info("Rejected search request: %s", e)
            return SearchOutcome.invalid(str(e))

        logger.info("Searching %s for target %s (max_matches=%s, timeout=%ss)",
                    list(request.numbers), request.target, request.max_matches, self.timeout)

        gate = TimeoutGate(self.timeout, clock=self.clock)
        generator = SkeletonGenerator(request.numbers, gate, self.evaluator.operators)
        results = self._collect(request, gate, iter(generator))

        if gate.expired:
            logger.warning("Search for %s timed out, discarding %d match(es)",
                           request.target, len(results))
            return SearchOutcome.timed_out(self.timeout)

        logger.info("Search for %s finished with %d match(es)", request.target, len(results))
        return SearchOutcome.success(results)

    def _collect(self, request: SearchRequest, gate: TimeoutGate,
                 skeletons: Iterator[Tuple[Token, ...]]) -> List[SearchResult]:
        evaluator = self.evaluator
        results = []
        try:
            for skeleton in skeletons:
                if gate.check():
                    break

                try:
                    value = evaluator.evaluate(skeleton)
                except EvaluationError as e:
                    if logger.isEnabledFor(logging.DEBUG):
                        logger.debug("Skipping %s: %s", evaluator.format(skeleton), e)
                    value = None

                if value == request.target:
                    results.append(SearchResult(
                        skeleton=evaluator.format(skeleton),
                        value=value,
                        infix=evaluator.to_infix(skeleton),
                    ))

                # Stops once the count exceeds the cap, so max_matches + 1 may be returned.
                if request.max_matches and len(results) > request.max_matches:
                    break
        finally:
            skeletons.close()
        return results

    def solve(self, numbers: Sequence[int], target: int,
              max_matches: Optional[int] = None) -> SearchOutcome:
        """Convenience wrapper around run()."""
        return self.run(SearchRequest(numbers=numbers, target=target,
                                      max_matches=max_matches))
