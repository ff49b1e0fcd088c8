"""Global input listener — feeds raw keyboard/mouse activity to the monitor.

Any key press/release, mouse move, click or scroll anywhere on the desktop
offers one notification to the ActivitySignal.  The pynput listeners run
in their own daemon threads; a small supervisor thread stops them when the
cancel token fires and notices when either of them dies (hook closed), in
which case the monitor carries on in poll-only mode.
"""
from __future__ import annotations

import threading
from typing import Callable, Optional

from wiggler.core.constants import SUPERVISE_CHUNK_S
from wiggler.core.signals import ActivitySignal, CancelToken
from wiggler.utils.optional_deps import HAS_PYNPUT, PYNPUT_ERROR, keyboard, mouse


class EventListener:
    """Owns one mouse and one keyboard pynput listener.

    ``mouse_factory`` / ``keyboard_factory`` build the listeners from the
    callback keywords pynput expects; they default to ``mouse.Listener``
    and ``keyboard.Listener``.
    """

    def __init__(
        self,
        activity:         ActivitySignal,
        cancel:           CancelToken,
        log_fn:           Optional[Callable[[str, str], None]] = None,
        mouse_factory:    Optional[Callable[..., object]] = None,
        keyboard_factory: Optional[Callable[..., object]] = None,
        supervise_s:      float = SUPERVISE_CHUNK_S,
    ) -> None:
        self._activity   = activity
        self._cancel     = cancel
        self._log        = log_fn or (lambda level, msg: None)
        self._supervise  = supervise_s
        self._mouse_factory    = mouse_factory or (mouse.Listener if HAS_PYNPUT else None)
        self._keyboard_factory = keyboard_factory or (keyboard.Listener if HAS_PYNPUT else None)

        self._ml = None
        self._kl = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Install the global hooks.  Returns False if they are unavailable."""
        if self._thread is not None:
            return True
        if self._mouse_factory is None or self._keyboard_factory is None:
            self._log("WARNING", f"Input hook unavailable ({PYNPUT_ERROR}), poll-only mode")
            return False

        try:
            self._ml = self._mouse_factory(
                on_move=self._on_event,
                on_click=self._on_event,
                on_scroll=self._on_event,
            )
            self._kl = self._keyboard_factory(
                on_press=self._on_event,
                on_release=self._on_event,
            )
            self._ml.daemon = True
            self._kl.daemon = True
            self._ml.start()
            self._kl.start()
        except Exception as exc:          # noqa: BLE001
            self._log("WARNING", f"Input hook failed to start: {exc!r}, poll-only mode")
            self._release()
            return False

        self._thread = threading.Thread(
            target=self._supervise_loop, name="event-listener", daemon=True,
        )
        self._thread.start()
        self._log("INFO", "Input hook started")
        return True

    def stop(self, timeout: Optional[float] = None) -> None:
        """Release the hooks and wait for the supervisor to exit."""
        self._release()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_event(self, *args) -> None:
        # Called from pynput threads for every raw input event.
        self._activity.offer()

    def _supervise_loop(self) -> None:
        try:
            while not self._cancel.wait(self._supervise):
                with self._lock:
                    ml, kl = self._ml, self._kl
                if ml is None or kl is None:
                    return
                if not (ml.is_alive() and kl.is_alive()):
                    self._log("WARNING", "Input hook closed, continuing in poll-only mode")
                    return
        finally:
            self._release()

    def _release(self) -> None:
        with self._lock:
            ml, kl = self._ml, self._kl
            self._ml = self._kl = None
        for listener in (ml, kl):
            if listener is not None:
                listener.stop()
        if ml is not None or kl is not None:
            self._log("INFO", "Input hook released")
