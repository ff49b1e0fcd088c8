"""Cross-thread signalling primitives.

CancelToken
    Process-wide stop request.  Wraps ``threading.Event`` and runs the
    callbacks registered with :meth:`CancelToken.on_cancel` exactly once,
    on the thread that cancels.

ActivitySignal
    Single-slot activity channel between the event listener and the
    monitor.  ``offer()`` never blocks: if a notification is already
    pending the new one is dropped, so duplicates collapse but a pending
    notification is never lost.
"""
from __future__ import annotations

import threading
from typing import Callable, Optional


class CancelToken:
    def __init__(self) -> None:
        self._event     = threading.Event()
        self._lock      = threading.RLock()   # cancel() may run inside a signal handler
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb()

    def on_cancel(self, cb: Callable[[], None]) -> None:
        """Register ``cb``; runs immediately if already cancelled."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(cb)
                return
        cb()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block up to ``timeout`` seconds; True once cancelled."""
        return self._event.wait(timeout)


class ActivitySignal:
    def __init__(self) -> None:
        self._cond    = threading.Condition()
        self._pending = False
        self._closed  = False

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def closed(self) -> bool:
        return self._closed

    def offer(self) -> bool:
        """Post a notification.  Returns False when it was dropped."""
        with self._cond:
            if self._pending or self._closed:
                return False
            self._pending = True
            self._cond.notify_all()
            return True

    def take(self) -> bool:
        """Consume the pending notification, if any (test-and-clear)."""
        with self._cond:
            had, self._pending = self._pending, False
            return had

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until a notification is pending, the signal closes, or timeout.

        Returns True if a notification is pending.  Does not consume it.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._pending or self._closed, timeout)
            return self._pending

    def close(self) -> None:
        """Wake every waiter; later offers are dropped."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
