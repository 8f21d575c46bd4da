class FakeClock:
    """Manually driven replacement for time.monotonic."""

    def __init__(self, now: float = 0.0):
        self.now = now
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return self.now
