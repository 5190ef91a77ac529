"""
TransitionAnimator — eased animation between two projection modes.

    idle           progress == 1, source == target (or the last finished pair)
    transitioning  progress in [0, 1)

request(mode) with a mode different from the current target pushes the
target to the source, adopts the new target and restarts the clock.
advance(now) recomputes the eased progress:

    t = clamp((now - start) / duration, 0, 1)
    progress = 1 - (1 - t)^3
"""

from __future__ import annotations
import logging
from dataclasses import replace

from core.coords import clamp
from core.types import ProjectionMode, TransitionState

logger = logging.getLogger(__name__)

TRANSITION_DURATION_MS = 1500.0


def ease_out_cubic(t: float) -> float:
    t = clamp(t, 0.0, 1.0)
    return 1.0 - (1.0 - t) ** 3


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class TransitionAnimator:
    """Sole owner of the transition state."""

    def __init__(self, initial_mode: ProjectionMode,
                 duration_ms: float = TRANSITION_DURATION_MS):
        self.duration_ms = duration_ms
        self._state = TransitionState(source_mode=initial_mode,
                                      target_mode=initial_mode,
                                      progress=1.0, start_time=0.0)

    @property
    def state(self) -> TransitionState:
        return self._state

    @property
    def progress(self) -> float:
        return self._state.progress

    @property
    def in_progress(self) -> bool:
        return self._state.in_progress

    def request(self, mode: ProjectionMode, now_ms: float) -> bool:
        """Retarget if `mode` differs from the current target. True if restarted."""
        current = self._state
        if mode is current.target_mode:
            return False
        self._state = TransitionState(source_mode=current.target_mode,
                                      target_mode=mode,
                                      progress=0.0,
                                      start_time=now_ms)
        logger.debug("Transition %s -> %s", current.target_mode.value, mode.value)
        return True

    def advance(self, now_ms: float) -> TransitionState:
        current = self._state
        if current.in_progress:
            t = (now_ms - current.start_time) / self.duration_ms
            self._state = replace(current, progress=ease_out_cubic(t))
        return self._state

    # Chrome opacities ------------------------------------------------------

    def horizon_ring_alpha(self) -> float:
        """Horizon ring fades in with a horizon-based target, out with such a source."""
        s = self._state
        if s.target_mode.is_horizon_based:
            return 1.0 if s.source_mode.is_horizon_based else s.progress
        if s.source_mode.is_horizon_based:
            return 1.0 - s.progress
        return 0.0

    def hr_axes_alpha(self) -> float:
        s = self._state
        if s.target_mode is ProjectionMode.HR_DIAGRAM:
            return s.progress
        if s.source_mode is ProjectionMode.HR_DIAGRAM:
            return 1.0 - s.progress
        return 0.0
