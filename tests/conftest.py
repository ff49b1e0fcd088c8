"""Shared test fixtures."""
import sys
import threading
import time
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `wiggler.*` imports work
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class FakePointer:
    """In-memory pointer backend recording every move."""

    def __init__(self, x: int = 100, y: int = 100) -> None:
        self._pos  = (x, y)
        self._lock = threading.Lock()
        self.moves: list[tuple[float, tuple[int, int]]] = []

    def position(self) -> tuple[int, int]:
        with self._lock:
            return self._pos

    def move_to(self, x: int, y: int) -> None:
        with self._lock:
            self._pos = (x, y)
            self.moves.append((time.monotonic(), (x, y)))

    def user_move(self, x: int, y: int) -> None:
        """Simulate a human moving the mouse (not recorded as synthetic)."""
        with self._lock:
            self._pos = (x, y)


class LogRecorder:
    def __init__(self) -> None:
        self.entries: list[tuple[str, str]] = []

    def __call__(self, level: str, msg: str) -> None:
        self.entries.append((level, msg))

    def levels(self) -> list[str]:
        return [level for level, _ in self.entries]


@pytest.fixture
def pointer():
    return FakePointer()


@pytest.fixture
def log():
    return LogRecorder()
