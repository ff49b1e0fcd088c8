"""Terminal log sink — timestamped, colour-coded execution messages.

Components take a ``log_fn(level, message)`` callback; the CLI passes
``ConsoleLog.log``.  Colours are only emitted when the stream is a TTY.
"""
from __future__ import annotations

import sys
import threading
from datetime import datetime
from typing import Optional, TextIO

_LEVEL_COLORS: dict[str, str] = {
    "INFO":    "\033[37m",
    "SUCCESS": "\033[36m",
    "WARNING": "\033[33m",
    "ERROR":   "\033[31m",
    "DEBUG":   "\033[90m",
}
_RESET = "\033[0m"
_TS_COLOR = "\033[90m"


class ConsoleLog:
    """Writes ``[HH:MM:SS.mmm] [LEVEL  ] message`` lines to a stream."""

    def __init__(self, stream: Optional[TextIO] = None, verbose: bool = False,
                 color: Optional[bool] = None) -> None:
        self._stream  = stream if stream is not None else sys.stderr
        self.verbose  = verbose
        if color is None:
            color = hasattr(self._stream, "isatty") and self._stream.isatty()
        self._color = color
        self._lock  = threading.Lock()

    def log(self, level: str, message: str) -> None:
        """Append one entry.  DEBUG is dropped unless verbose."""
        level = level.upper()
        if level == "DEBUG" and not self.verbose:
            return
        ts = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        if self._color:
            color = _LEVEL_COLORS.get(level, _LEVEL_COLORS["INFO"])
            line = f"{_TS_COLOR}[{ts}]{_RESET} {color}[{level:7}] {message}{_RESET}\n"
        else:
            line = f"[{ts}] [{level:7}] {message}\n"
        # Listener and monitor threads both log.
        with self._lock:
            self._stream.write(line)
            self._stream.flush()
