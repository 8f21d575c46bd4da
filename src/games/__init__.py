# Countdown numbers solver package
from .countdown import (
    InvalidInputError,
    OutcomeStatus,
    SearchOutcome,
    SearchRequest,
    SearchResult,
)
from .rpn import EvaluationError, Operator, RpnEvaluator
from .solver import CountdownSolver, SkeletonGenerator
from .timeout import TimeoutGate

__all__ = [
    'CountdownSolver',
    'EvaluationError',
    'InvalidInputError',
    'Operator',
    'OutcomeStatus',
    'RpnEvaluator',
    'SearchOutcome',
    'SearchRequest',
    'SearchResult',
    'SkeletonGenerator',
    'TimeoutGate',
]
