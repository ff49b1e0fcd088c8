"""Pointer backend — reads and moves the system cursor via pynput."""
from __future__ import annotations

from wiggler.utils.optional_deps import HAS_PYNPUT, PYNPUT_ERROR, mouse


class BackendUnavailable(RuntimeError):
    """pynput could not be loaded (no display server, missing package)."""


class PynputPointer:
    """Thin wrapper over ``pynput.mouse.Controller``.

    Failures from the OS are not caught here; a pointer that cannot be
    read or moved is unrecoverable for the caller.
    """

    def __init__(self, controller=None) -> None:
        if controller is None:
            if not HAS_PYNPUT:
                raise BackendUnavailable(f"pynput is unavailable: {PYNPUT_ERROR}")
            controller = mouse.Controller()
        self._mc = controller

    def position(self) -> tuple[int, int]:
        """Return the current mouse position as (x, y)."""
        x, y = self._mc.position
        return int(x), int(y)

    def move_to(self, x: int, y: int) -> None:
        self._mc.position = (x, y)
