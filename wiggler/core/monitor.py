"""Activity monitor — decides when the workstation counts as idle.

Architecture
------------
ActivityMonitor.run()  (main thread)
  ├─ samples the pointer every ``poll_interval``
  ├─ consumes ActivitySignal notifications from the event listener
  └─ Wiggler.run()  — called synchronously once idle_timeout is reached

The monitor is the only owner of ``last_pos`` / ``last_activity``; the
listener thread talks to it exclusively through the ActivitySignal.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from wiggler.core.config import WigglerConfig
from wiggler.core.signals import ActivitySignal, CancelToken
from wiggler.core.wiggle import Wiggler


class ActivityMonitor:
    """Poll loop that triggers a wiggle after ``idle_timeout`` of inactivity.

    Parameters
    ----------
    config : WigglerConfig
    pointer
        Backend with ``position()`` and ``move_to(x, y)``.
    cancel : CancelToken
    activity : ActivitySignal | None
        Fed by the event listener.  None means poll-only detection.
    wiggle : callable | None
        Zero-argument episode runner; defaults to ``Wiggler(...).run``.
    """

    def __init__(
        self,
        config:   WigglerConfig,
        pointer,
        cancel:   CancelToken,
        activity: Optional[ActivitySignal] = None,
        wiggle:   Optional[Callable[[], object]] = None,
        log_fn:   Optional[Callable[[str, str], None]] = None,
        clock:    Callable[[], float] = time.monotonic,
    ) -> None:
        if config.idle_timeout <= 0:
            raise ValueError(f"idle_timeout must be positive: {config.idle_timeout!r}")
        self._config   = config
        self._pointer  = pointer
        self._cancel   = cancel
        self._activity = activity
        self._log      = log_fn or (lambda level, msg: None)
        self._clock    = clock
        self._wiggle   = wiggle or Wiggler(
            config, pointer, cancel, log_fn=self._log, clock=clock,
        ).run

        self.wiggle_count = 0

        if activity is not None:
            # Wakes the wait below as soon as cancellation happens.
            cancel.on_cancel(activity.close)

    # ------------------------------------------------------------------

    def run(self) -> None:
        """Block until the cancel token fires."""
        cfg           = self._config
        last_pos      = self._pointer.position()
        last_activity = self._clock()
        next_tick     = last_activity + cfg.poll_interval

        while not self._cancel.cancelled:
            if self._wait(next_tick - self._clock()):
                return

            now = self._clock()
            if self._activity is not None and self._activity.take():
                last_activity = now

            if now < next_tick:
                continue
            next_tick = now + cfg.poll_interval

            pos = self._pointer.position()
            if pos != last_pos:
                last_pos      = pos
                last_activity = now
                continue

            if now - last_activity >= cfg.idle_timeout:
                self._log("INFO", f"Idle for {now - last_activity:.1f}s, wiggling")
                self._wiggle()
                self.wiggle_count += 1
                if self._cancel.cancelled:
                    return
                last_pos      = self._pointer.position()
                last_activity = self._clock()
                next_tick     = last_activity + cfg.poll_interval
                if self._activity is not None:
                    # Our own synthetic moves are not user activity.
                    self._activity.take()

    def _wait(self, timeout: float) -> bool:
        """Sleep until the next tick, an activity notification, or cancel.

        Returns True when cancelled.
        """
        timeout = max(0.0, timeout)
        if self._activity is not None:
            self._activity.wait(timeout)
            return self._cancel.cancelled
        return self._cancel.wait(timeout)
