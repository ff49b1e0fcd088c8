"""Tests for wiggler.core.monitor — idle detection and wiggle triggering."""
import threading
import time
from types import SimpleNamespace

import pytest

from conftest import FakePointer
from wiggler.core.config import WigglerConfig
from wiggler.core.monitor import ActivityMonitor
from wiggler.core.signals import ActivitySignal, CancelToken


def _config(**kwargs):
    kwargs.setdefault("idle_timeout", 0.3)
    kwargs.setdefault("poll_interval", 0.025)
    kwargs.setdefault("wiggle_duration", 0.05)
    kwargs.setdefault("wiggle_step", 0.01)
    return WigglerConfig(**kwargs)


class WiggleSpy:
    def __init__(self, action=None) -> None:
        self.times: list[float] = []
        self._action = action

    def __call__(self) -> int:
        self.times.append(time.monotonic())
        if self._action:
            self._action()
        return 0


class Runner:
    """Runs a monitor in a background thread."""

    def __init__(self, monitor: ActivityMonitor, cancel: CancelToken) -> None:
        self.cancel  = cancel
        self.thread  = threading.Thread(target=monitor.run, daemon=True)
        self.started = time.monotonic()
        self.thread.start()

    def stop(self) -> None:
        self.cancel.cancel()
        self.thread.join(2.0)
        assert not self.thread.is_alive()


class TestIdleDetection:
    def test_stationary_pointer_wiggles_once(self, pointer):
        cancel, spy = CancelToken(), WiggleSpy()
        runner = Runner(ActivityMonitor(_config(), pointer, cancel, wiggle=spy), cancel)
        time.sleep(0.5)
        runner.stop()
        assert len(spy.times) == 1
        assert spy.times[0] - runner.started >= 0.3

    def test_real_wiggle_restores_pointer(self, pointer):
        cancel = CancelToken()
        monitor = ActivityMonitor(_config(), pointer, cancel)
        runner = Runner(monitor, cancel)
        time.sleep(0.45)
        runner.stop()
        assert monitor.wiggle_count == 1
        assert len(pointer.moves) > 1
        assert pointer.position() == (100, 100)

    def test_wiggles_again_after_full_timeout(self, pointer):
        cancel, spy = CancelToken(), WiggleSpy()
        runner = Runner(
            ActivityMonitor(_config(idle_timeout=0.15), pointer, cancel, wiggle=spy),
            cancel,
        )
        time.sleep(0.4)
        runner.stop()
        assert len(spy.times) == 2
        assert spy.times[1] - spy.times[0] >= 0.15

    def test_moving_pointer_never_wiggles(self):
        ptr = FakePointer()
        stop = threading.Event()

        def jiggle():
            x = 0
            while not stop.wait(0.1):
                x += 1
                ptr.user_move(100 + x, 100)

        mover = threading.Thread(target=jiggle, daemon=True)
        mover.start()
        cancel, spy = CancelToken(), WiggleSpy()
        runner = Runner(ActivityMonitor(_config(), ptr, cancel, wiggle=spy), cancel)
        time.sleep(1.0)
        runner.stop()
        stop.set()
        mover.join(1.0)
        assert spy.times == []

    def test_pointer_move_resets_clock(self, pointer):
        cancel, spy = CancelToken(), WiggleSpy()
        runner = Runner(ActivityMonitor(_config(), pointer, cancel, wiggle=spy), cancel)
        time.sleep(0.2)
        pointer.user_move(150, 150)
        time.sleep(0.2)
        assert spy.times == []
        time.sleep(0.3)
        runner.stop()
        assert len(spy.times) == 1


class TestActivityNotifications:
    def test_activity_resets_clock(self, pointer):
        cancel, activity, spy = CancelToken(), ActivitySignal(), WiggleSpy()
        runner = Runner(
            ActivityMonitor(_config(), pointer, cancel, activity, wiggle=spy),
            cancel,
        )
        deadline = time.monotonic() + 0.5
        while time.monotonic() < deadline:
            activity.offer()
            time.sleep(0.05)
        last_offer = time.monotonic()

        time.sleep(0.15)
        assert spy.times == []
        time.sleep(0.3)
        runner.stop()
        assert len(spy.times) == 1
        assert spy.times[0] - last_offer >= 0.3 - 0.05

    def test_poll_only_without_listener(self, pointer):
        cancel, spy = CancelToken(), WiggleSpy()
        monitor = ActivityMonitor(_config(), pointer, cancel, activity=None, wiggle=spy)
        runner = Runner(monitor, cancel)
        time.sleep(0.45)
        runner.stop()
        assert len(spy.times) == 1

    def test_own_wiggle_activity_is_discarded(self, pointer):
        cancel, activity = CancelToken(), ActivitySignal()
        spy = WiggleSpy(action=activity.offer)
        runner = Runner(
            ActivityMonitor(_config(idle_timeout=0.15), pointer, cancel, activity, wiggle=spy),
            cancel,
        )
        time.sleep(0.25)
        assert len(spy.times) == 1
        assert activity.pending is False
        runner.stop()


class TestCancellation:
    def test_cancel_returns_promptly(self, pointer):
        cancel = CancelToken()
        monitor = ActivityMonitor(_config(poll_interval=5.0), pointer, cancel, ActivitySignal())
        runner = Runner(monitor, cancel)
        time.sleep(0.05)
        start = time.monotonic()
        runner.stop()
        assert time.monotonic() - start < 0.5

    def test_cancel_returns_promptly_poll_only(self, pointer):
        cancel = CancelToken()
        runner = Runner(ActivityMonitor(_config(poll_interval=5.0), pointer, cancel), cancel)
        time.sleep(0.05)
        start = time.monotonic()
        runner.stop()
        assert time.monotonic() - start < 0.5

    def test_cancel_during_wiggle_restores(self, pointer):
        cancel = CancelToken()
        cfg = _config(idle_timeout=0.1, wiggle_duration=5.0)
        monitor = ActivityMonitor(cfg, pointer, cancel)
        runner = Runner(monitor, cancel)
        time.sleep(0.3)
        assert pointer.moves, "wiggle should be in progress"
        runner.stop()
        assert monitor.wiggle_count == 1
        assert pointer.position() == (100, 100)
        assert pointer.moves[-1][1] == (100, 100)

    def test_already_cancelled(self, pointer):
        cancel, spy = CancelToken(), WiggleSpy()
        cancel.cancel()
        ActivityMonitor(_config(), pointer, cancel, ActivitySignal(), wiggle=spy).run()
        assert spy.times == []


class TestValidation:
    def test_rejects_non_positive_timeout(self, pointer):
        cfg = SimpleNamespace(idle_timeout=0, poll_interval=0.25, wiggle_duration=1.0,
                              wiggle_step=0.01, amplitude=6)
        with pytest.raises(ValueError):
            ActivityMonitor(cfg, pointer, CancelToken())

    def test_logs_idle(self, pointer, log):
        cancel = CancelToken()
        runner = Runner(
            ActivityMonitor(_config(), pointer, cancel, wiggle=WiggleSpy(), log_fn=log),
            cancel,
        )
        time.sleep(0.45)
        runner.stop()
        assert ("INFO" in log.levels())
        assert any("wiggling" in msg for _, msg in log.entries)
