"""Unit tests for the CPU dispatcher throttle."""

from unittest.mock import MagicMock, patch

from stitcher import scheduler
from stitcher.scheduler import DispatcherThrottle, make_throttle


class TestDispatcherThrottle:

    def test_returns_when_below_limit(self):
        sleep = MagicMock()
        with patch.object(scheduler.psutil, "cpu_percent", return_value=10.0):
            assert DispatcherThrottle(max_cpu_percent=90.0, sleep=sleep).wait_for_capacity() == 10.0
        sleep.assert_not_called()

    def test_waits_until_capacity(self):
        sleep = MagicMock()
        readings = [99.0, 95.0, 40.0]
        with patch.object(scheduler.psutil, "cpu_percent", side_effect=readings) as cpu:
            assert DispatcherThrottle(max_cpu_percent=90.0, check_interval=0.0, sleep=sleep).wait_for_capacity() == 40.0
        assert cpu.call_count == 3
        assert sleep.call_count == 2

    def test_sampling_error_counts_as_idle(self):
        with patch.object(scheduler.psutil, "cpu_percent", side_effect=OSError("no /proc")):
            assert DispatcherThrottle().wait_for_capacity() == 0.0


class TestMakeThrottle:

    def test_disabled(self):
        assert make_throttle(0) is None
        assert make_throttle(None) is None
        assert make_throttle(100) is None

    def test_enabled(self):
        throttle = make_throttle(75)
        assert isinstance(throttle, DispatcherThrottle)
        assert throttle.max_cpu == 75.0


def test_gives_up_after_max_wait():
    sleep = MagicMock()
    clock = MagicMock(side_effect=[0.0, 5.0, 11.0])
    with patch.object(scheduler.psutil, "cpu_percent", return_value=99.0) as cpu:
        throttle = DispatcherThrottle(max_cpu_percent=90.0, check_interval=0.0, max_wait=10.0,
                                      sleep=sleep, clock=clock)
        assert throttle.wait_for_capacity() == 99.0
    assert cpu.call_count == 2
    assert sleep.call_count == 1
