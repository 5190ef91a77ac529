"""
SiderealClock — the single owner of local sidereal time.

The render loop advances it once per frame; everybody else only reads the
value it reports back. Pause state and speed come from the observer
snapshot of that frame, the angle itself never does (after seeding).

Diurnal motion runs only while the sky view is the requested mode:

    lst += dt_ms * sidereal_rate * time_speed      (wrapped to [0, 360))
"""

from __future__ import annotations
from typing import Optional

from core.coords import wrap_deg
from core.types import ObserverState, ProjectionMode


# Degrees of sidereal rotation per wall-clock millisecond at speed 1
SIDEREAL_RATE_DEG_PER_MS = 0.01


class SiderealClock:
    """
    Frame-stepped sidereal time.

    Parameters
    ----------
    lst_deg : starting local sidereal time; None = adopt the first observer seen
    rate    : degrees per ms at time_speed 1
    """

    def __init__(self, lst_deg: Optional[float] = None,
                 rate: float = SIDEREAL_RATE_DEG_PER_MS):
        self._lst = None if lst_deg is None else wrap_deg(lst_deg)
        self._rate = rate
        self._last_ms: Optional[float] = None

    # ── Properties ───────────────────────────────────────────────────────────

    @property
    def lst(self) -> float:
        return 0.0 if self._lst is None else self._lst

    # ── Frame update ─────────────────────────────────────────────────────────

    def step(self, now_ms: float, observer: ObserverState,
             mode: ProjectionMode) -> float:
        """
        Advance to wall time now_ms and return the updated LST in degrees.
        The first call only records the clock origin.
        """
        if self._lst is None:
            self._lst = observer.local_sidereal_time
        if self._last_ms is None:
            self._last_ms = now_ms
        delta = max(0.0, now_ms - self._last_ms)
        self._last_ms = now_ms

        if not observer.is_paused and mode is ProjectionMode.SKY:
            self._lst = wrap_deg(self._lst + delta * self._rate * observer.time_speed)
        return self._lst
