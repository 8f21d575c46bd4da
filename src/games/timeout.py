"""Wall-clock budget shared by the skeleton generator and the result collector."""

import logging
import time
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30  # seconds


class GateState(Enum):
    """Lifecycle of a timeout gate. EXPIRED is terminal."""
    UNSET = "unset"
    ARMED = "armed"
    EXPIRED = "expired"


class TimeoutGate:
    """
    Cooperative cancellation token for one search run.

    The deadline is armed by the first call to check(), not at construction,
    so the budget covers only the search itself.
    """

    def __init__(self, seconds: float = DEFAULT_TIMEOUT,
                 clock: Callable[[], float] = time.monotonic):
        self.seconds = seconds
        self._clock = clock
        self._state = GateState.UNSET
        self._deadline: Optional[float] = None

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def expired(self) -> bool:
        return self._state is GateState.EXPIRED

    def check(self) -> bool:
        """
        Poll the gate.

        Returns:
            True once the budget is spent, False otherwise. The first call
            arms the deadline and always returns False.
        """
        if self._state is GateState.EXPIRED:
            return True

        if self._state is GateState.UNSET:
            self._deadline = self._clock() + self.seconds
            self._state = GateState.ARMED
            return False

        if self._clock() >= self._deadline:
            self._state = GateState.EXPIRED
            logger.warning("Search budget of %ss exhausted", self.seconds)
            return True
        return False
