import unittest
from games.timeout import DEFAULT_TIMEOUT, GateState, TimeoutGate
from tests.utils import FakeClock


class TestTimeoutGate(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock(100.0)
        self.gate = TimeoutGate(30, clock=self.clock)

    def test_default_budget(self):
        self.assertEqual(DEFAULT_TIMEOUT, 30)
        self.assertEqual(TimeoutGate().seconds, 30)

    def test_first_check_arms(self):
        self.assertEqual(self.gate.state, GateState.UNSET)
        self.assertIsNone(self.gate.deadline)

        self.assertFalse(self.gate.check())
        self.assertEqual(self.gate.state, GateState.ARMED)
        self.assertEqual(self.gate.deadline, 130.0)

    def test_expires_at_deadline(self):
        self.gate.check()
        self.clock.now = 129.9
        self.assertFalse(self.gate.check())
        self.assertFalse(self.gate.expired)

        self.clock.now = 130.0
        self.assertTrue(self.gate.check())
        self.assertTrue(self.gate.expired)
        self.assertEqual(self.gate.state, GateState.EXPIRED)

    def test_expired_is_terminal_and_skips_clock(self):
        self.gate.check()
        self.clock.now = 200.0
        self.gate.check()
        calls = self.clock.calls

        self.clock.now = 0.0
        self.assertTrue(self.gate.check())
        self.assertTrue(self.gate.check())
        self.assertEqual(self.clock.calls, calls)

    def test_zero_budget_expires_on_second_check(self):
        gate = TimeoutGate(0, clock=FakeClock(5.0))
        self.assertFalse(gate.check())
        self.assertTrue(gate.check())


if __name__ == '__main__':
    unittest.main()
