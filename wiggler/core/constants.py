"""Centralised tunables and magic numbers.

All numeric constants that control runtime behaviour are collected here
so they are easy to find, document, and adjust.  Durations are in seconds.
"""

# ---------------------------------------------------------------------------
# Configuration  (wiggler/core/config.py)
# ---------------------------------------------------------------------------
DEFAULT_IDLE_TIMEOUT_S = 60        # used when no source provides a valid value
IDLE_TIMEOUT_ENV       = "IDLE_TIMEOUT"

# ---------------------------------------------------------------------------
# Monitor  (wiggler/core/monitor.py)
# ---------------------------------------------------------------------------
POLL_INTERVAL_S     = 0.25     # pointer sampling cadence
MIN_POLL_INTERVAL_S = 0.025    # anything faster just burns CPU

# ---------------------------------------------------------------------------
# Wiggle  (wiggler/core/wiggle.py)
# ---------------------------------------------------------------------------
WIGGLE_DURATION_S = 1.0    # total span of one wiggle episode
WIGGLE_STEP_S     = 0.01   # pause between synthetic moves
AMPLITUDE_PX      = 6      # circle radius; 1 is the smallest visible wiggle
MIN_AMPLITUDE_PX  = 1
PATH_POINTS       = 16     # points on the circle

# ---------------------------------------------------------------------------
# Listener  (wiggler/core/listener.py)
# ---------------------------------------------------------------------------
SUPERVISE_CHUNK_S = 0.5    # seconds between pynput listener health checks
