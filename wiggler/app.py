"""Command-line wiring — config, signals, listener and monitor.

    mouse-wiggler [idle_timeout] [--settings PATH] [--no-listener] [-v]
"""
from __future__ import annotations

import argparse
import os
import signal
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from wiggler.core.config import WigglerConfig, build_config
from wiggler.core.listener import EventListener
from wiggler.core.monitor import ActivityMonitor
from wiggler.core.pointer import BackendUnavailable, PynputPointer
from wiggler.core.settings_manager import SettingsManager
from wiggler.core.signals import ActivitySignal, CancelToken
from wiggler.utils.console_log import ConsoleLog

_STOP_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM") if hasattr(signal, name)
)
_LISTENER_JOIN_S = 2.0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mouse-wiggler",
        description="Wiggle the mouse pointer whenever the desktop has been idle too long.",
    )
    parser.add_argument(
        "idle_timeout",
        nargs="?",
        default=None,
        help="Seconds of inactivity before wiggling (IDLE_TIMEOUT env var wins).",
    )
    parser.add_argument(
        "--settings",
        default="settings.ini",
        help="Path to an optional settings.ini (default: ./settings.ini).",
    )
    parser.add_argument(
        "--no-listener",
        action="store_true",
        help="Do not hook global keyboard/mouse events; poll the pointer only.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show DEBUG log lines.",
    )
    return parser.parse_args(argv)


def banner(config: WigglerConfig) -> str:
    return f"Mouse Wiggler started. {config.describe()}. Press Ctrl+C to exit."


def _install_signal_handlers(cancel: CancelToken) -> dict:
    """Route SIGINT/SIGTERM to ``cancel``.  Returns the previous handlers."""
    previous = {}

    def _handler(signum, frame):
        cancel.cancel()

    for sig in _STOP_SIGNALS:
        previous[sig] = signal.signal(sig, _handler)
    return previous


def _restore_signal_handlers(previous: dict) -> None:
    for sig, handler in previous.items():
        signal.signal(sig, handler)


def main(argv: Optional[Sequence[str]] = None,
         env: Optional[Mapping[str, str]] = None) -> int:
    args     = parse_args(argv)
    env      = os.environ if env is None else env
    settings = SettingsManager(Path(args.settings))
    console  = ConsoleLog(verbose=args.verbose or settings.verbose)
    log      = console.log

    positional = [args.idle_timeout] if args.idle_timeout is not None else []
    config = build_config(
        env, positional, settings,
        listen_events=False if args.no_listener else None,
    )

    try:
        pointer = PynputPointer()
    except BackendUnavailable as exc:
        log("ERROR", str(exc))
        return 1

    cancel   = CancelToken()
    previous = _install_signal_handlers(cancel)
    print(banner(config), flush=True)

    activity: Optional[ActivitySignal] = None
    listener: Optional[EventListener]  = None
    if config.listen_events:
        activity = ActivitySignal()
        listener = EventListener(activity, cancel, log_fn=log)
        if not listener.start():
            activity = listener = None
    else:
        log("INFO", "Event listener disabled, poll-only mode")

    monitor = ActivityMonitor(config, pointer, cancel, activity, log_fn=log)
    try:
        monitor.run()
    except Exception as exc:          # noqa: BLE001
        log("ERROR", f"Pointer backend failed: {exc!r}")
        return 1
    finally:
        cancel.cancel()
        if listener is not None:
            listener.stop(_LISTENER_JOIN_S)
        _restore_signal_handlers(previous)

    log("INFO", f"Stopped after {monitor.wiggle_count} wiggle(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
