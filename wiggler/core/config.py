"""Runtime configuration — resolved once, then passed around explicitly.

Idle timeout sources, highest priority first:

    1. ``IDLE_TIMEOUT`` environment variable
    2. first positional command-line argument
    3. ``[GENERAL] idle_timeout`` in settings.ini
    4. built-in default (60 s)

A value that does not parse as a positive integer is skipped silently and
the next source is tried.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from wiggler.core.constants import (
    AMPLITUDE_PX, DEFAULT_IDLE_TIMEOUT_S, IDLE_TIMEOUT_ENV,
    MIN_AMPLITUDE_PX, MIN_POLL_INTERVAL_S, POLL_INTERVAL_S,
    WIGGLE_DURATION_S, WIGGLE_STEP_S,
)


@dataclass(frozen=True)
class WigglerConfig:
    """Immutable settings shared by the monitor, wiggler and listener."""

    idle_timeout:    float = DEFAULT_IDLE_TIMEOUT_S
    poll_interval:   float = POLL_INTERVAL_S
    wiggle_duration: float = WIGGLE_DURATION_S
    wiggle_step:     float = WIGGLE_STEP_S
    amplitude:       int   = AMPLITUDE_PX
    listen_events:   bool  = True

    def __post_init__(self) -> None:
        if self.idle_timeout <= 0:
            raise ValueError(f"idle_timeout must be positive: {self.idle_timeout!r}")
        if self.poll_interval < MIN_POLL_INTERVAL_S:
            raise ValueError(
                f"poll_interval must be >= {MIN_POLL_INTERVAL_S}s: {self.poll_interval!r}"
            )
        if self.wiggle_duration <= 0:
            raise ValueError(f"wiggle_duration must be positive: {self.wiggle_duration!r}")
        if self.wiggle_step <= 0:
            raise ValueError(f"wiggle_step must be positive: {self.wiggle_step!r}")
        if self.amplitude < MIN_AMPLITUDE_PX:
            raise ValueError(
                f"amplitude must be >= {MIN_AMPLITUDE_PX}px: {self.amplitude!r}"
            )

    def describe(self) -> str:
        """One-line summary for the start-up banner."""
        return (
            f"Idle timeout: {_fmt_duration(self.idle_timeout)}, "
            f"Wiggle: {_fmt_duration(self.wiggle_duration)}, "
            f"Poll: {_fmt_duration(self.poll_interval)}, "
            f"Amplitude: {self.amplitude}px"
        )


def _fmt_duration(seconds: float) -> str:
    """60 → '60s', 0.25 → '250ms', 1.5 → '1.5s'."""
    if seconds < 1:
        return f"{round(seconds * 1000)}ms"
    if float(seconds).is_integer():
        return f"{int(seconds)}s"
    return f"{seconds:g}s"


def parse_timeout(raw: Optional[str]) -> Optional[int]:
    """Return ``raw`` as a positive int of seconds, or None if unusable."""
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def resolve_idle_timeout(
    env:      Mapping[str, str],
    argv:     Iterable[Optional[str]] = (),
    settings = None,
) -> int:
    """Pick the idle timeout from the first source holding a valid value.

    ``argv`` is the positional arguments only (program name excluded); just
    the first one is considered.
    """
    candidates: list[Optional[str]] = [env.get(IDLE_TIMEOUT_ENV)]
    candidates.append(next(iter(argv), None))
    if settings is not None:
        candidates.append(settings.get("GENERAL", "idle_timeout", "") or None)

    for raw in candidates:
        value = parse_timeout(raw)
        if value is not None:
            return value
    return DEFAULT_IDLE_TIMEOUT_S


def build_config(
    env:           Mapping[str, str],
    argv:          Iterable[Optional[str]] = (),
    settings      = None,
    listen_events: Optional[bool] = None,
) -> WigglerConfig:
    """Assemble the process-wide :class:`WigglerConfig`.

    ``listen_events`` overrides ``[INPUT] listen_events`` when not None.
    """
    if listen_events is None:
        listen_events = settings.listen_events if settings is not None else True
    return WigglerConfig(
        idle_timeout  = resolve_idle_timeout(env, argv, settings),
        listen_events = listen_events,
    )
