"""Wiggle generator — one bounded episode of synthetic pointer motion.

The pointer is walked around a small circle centred on its position at
call time, one point every ``wiggle_step`` seconds, until
``wiggle_duration`` has elapsed.  The origin is restored on every exit
path: normal completion, cancellation, or a backend error.
"""
from __future__ import annotations

import math
import time
from typing import Callable, Optional

from wiggler.core.config import WigglerConfig
from wiggler.core.constants import PATH_POINTS
from wiggler.core.signals import CancelToken


def circle_path(amplitude: int, points: int = PATH_POINTS) -> tuple[tuple[int, int], ...]:
    """Return ``points`` (dx, dy) offsets evenly spaced on a circle.

    Offsets are truncated toward zero, not rounded, so a radius-6 circle
    tops out at 5 px on the diagonals.
    """
    offsets = []
    for i in range(points):
        angle = 2 * math.pi * i / points
        offsets.append((int(amplitude * math.cos(angle)),
                        int(amplitude * math.sin(angle))))
    return tuple(offsets)


class Wiggler:
    """Runs wiggle episodes against a pointer backend.

    Parameters
    ----------
    config : WigglerConfig
    pointer
        Anything with ``position() -> (x, y)`` and ``move_to(x, y)``.
    cancel : CancelToken
        Checked between every step; firing it ends the episode early.
    """

    def __init__(
        self,
        config:  WigglerConfig,
        pointer,
        cancel:  CancelToken,
        log_fn:  Optional[Callable[[str, str], None]] = None,
        clock:   Callable[[], float] = time.monotonic,
    ) -> None:
        self._config  = config
        self._pointer = pointer
        self._cancel  = cancel
        self._log     = log_fn or (lambda level, msg: None)
        self._clock   = clock

    def run(self) -> int:
        """Perform one episode.  Returns the number of synthetic moves."""
        ox, oy   = self._pointer.position()
        path     = circle_path(self._config.amplitude)
        step     = self._config.wiggle_step
        deadline = self._clock() + self._config.wiggle_duration
        moves    = 0
        idx      = 0

        self._log("DEBUG", f"Wiggle start at ({ox}, {oy})")
        try:
            while True:
                remaining = deadline - self._clock()
                if remaining <= 0:
                    break
                if self._cancel.wait(min(step, remaining)):
                    self._log("DEBUG", "Wiggle cancelled")
                    break
                if self._clock() >= deadline:
                    break
                dx, dy = path[idx]
                self._pointer.move_to(ox + dx, oy + dy)
                moves += 1
                idx = (idx + 1) % len(path)
        finally:
            self._pointer.move_to(ox, oy)

        self._log("DEBUG", f"Wiggle done ({moves} moves), pointer restored")
        return moves
