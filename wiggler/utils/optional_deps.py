"""Centralised pynput import.

pynput binds to the display server when it is imported, so on a headless
machine the import itself fails.  It is imported once here; consumers
check ``HAS_PYNPUT`` before touching ``mouse`` / ``keyboard``.  This keeps
the core logic (and its tests) importable without a desktop session.
"""
from __future__ import annotations

try:
    from pynput import keyboard as keyboard   # type: ignore[import]
    from pynput import mouse as mouse         # type: ignore[import]
    HAS_PYNPUT = True
    PYNPUT_ERROR = ""
except ImportError as exc:
    keyboard = None  # type: ignore[assignment]
    mouse = None     # type: ignore[assignment]
    HAS_PYNPUT = False
    PYNPUT_ERROR = str(exc)
