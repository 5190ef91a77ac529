"""
RenderLoop — per-frame driver of the census engine.

Each frame:
  1. advance sidereal time (sky view, unpaused only)
  2. retarget / advance the transition animator
  3. for every star: visibility, both projections, interpolate, size
  4. paint stars and mode chrome (horizon ring, HR axes)
  5. report the visible count and the new LST in a FrameResult

All external parameters enter through one FrameInput snapshot per frame.
The loop owns the clock and the animator; nothing else writes to them.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field, replace
from typing import NamedTuple, Optional, Sequence

from core.config import EngineConfig
from core.coords import is_finite_point
from core.projection import CoordinateProjector, SKY_RADIUS
from core.time_controller import SiderealClock
from core.transition import TransitionAnimator, lerp
from core.types import FrameInput, ProjectionMode, Star, TransitionState, Viewport
from atmosphere.visibility import VisibilityModel
from rendering.surface import DrawSurface

logger = logging.getLogger(__name__)


# Palette
BG_FLAT = (2, 6, 23)                 # #020617
SKY_GRADIENT = ((0.0, (0, 0, 0)),    # top
                (0.6, (2, 6, 23)),
                (1.0, (15, 23, 42)))  # horizon glow at the bottom
RING_COLOR = (30, 41, 59)            # #1e293b
RING_LABEL = (100, 116, 139)         # #64748b
AXIS_COLOR = (51, 65, 85)            # #334155
AXIS_LABEL = (148, 163, 184)         # #94a3b8

GLOW_MIN_RADIUS = 1.8
GLOW_MIN_ALPHA = 0.5
HIT_SLOP_PX = 4.0


def star_radius(star: Star, mode: ProjectionMode) -> float:
    """Screen radius: magnitude based, or physical (log) radius on the HR diagram."""
    if mode.basis is ProjectionMode.HR_DIAGRAM:
        r = math.log10(star.radius * 10.0) * 2.0 if star.radius > 0 else 1.0
        return max(1.0, r)
    return max(0.5, (15.0 - star.apparent_magnitude) / 5.0)


class StarDraw(NamedTuple):
    star: Star
    x: float
    y: float
    radius: float
    alpha: float
    glow: float


@dataclass
class FrameResult:
    """Everything one frame produced: draw commands plus outward reports."""
    viewport: Viewport
    transition: TransitionState
    lst: float
    draws: list[StarDraw] = field(default_factory=list)
    skipped: int = 0
    horizon_alpha: float = 0.0
    hr_axes_alpha: float = 0.0

    @property
    def visible_count(self) -> int:
        return len(self.draws)

    @property
    def sky_background(self) -> bool:
        t = self.transition
        if t.target_mode.is_horizon_based:
            return True
        return t.in_progress and t.source_mode.is_horizon_based


class RenderLoop:
    """
    Drives one engine instance over a fixed catalog.

    Parameters
    ----------
    stars        : the session catalog (read only)
    surface      : where tick() paints; None for compute-only use
    initial_mode : mode shown before the first request
    config       : engine tunables
    """

    def __init__(self, stars: Sequence[Star],
                 surface: Optional[DrawSurface] = None,
                 initial_mode: ProjectionMode = ProjectionMode.SKY,
                 config: Optional[EngineConfig] = None):
        cfg = config or EngineConfig()
        self.stars = tuple(stars)
        self.surface = surface
        self.projector = CoordinateProjector(galaxy_spin_rate=cfg.galaxy_spin_rate,
                                             horizon_cull_deg=cfg.horizon_cull_deg)
        self.animator = TransitionAnimator(initial_mode, cfg.transition_duration_ms)
        self.clock = SiderealClock(rate=cfg.sidereal_rate)
        self._last: Optional[FrameResult] = None
        self._closed = False

    # ── Lifecycle ───────────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return not self._closed

    @property
    def last_frame(self) -> Optional[FrameResult]:
        return self._last

    def close(self):
        """Stop for good and release the drawing surface."""
        if self._closed:
            return
        self._closed = True
        if self.surface is not None:
            self.surface.close()
            self.surface = None
        self._last = None
        logger.info("Render loop closed")

    # ── Frame ───────────────────────────────────────────────────────────────

    def tick(self, frame: FrameInput, now_ms: float) -> FrameResult:
        """Compute and paint one frame."""
        result = self.compute(frame, now_ms)
        if self.surface is not None:
            self.paint(self.surface, result)
        return result

    def compute(self, frame: FrameInput, now_ms: float) -> FrameResult:
        if self._closed:
            raise RuntimeError("Render loop is closed")

        lst = self.clock.step(now_ms, frame.observer, frame.mode)
        observer = replace(frame.observer, local_sidereal_time=lst)

        self.animator.request(frame.mode, now_ms)
        tstate = self.animator.advance(now_ms)
        t = tstate.progress

        vp = frame.viewport
        cx, cy = vp.center
        scale = vp.scale_factor
        vis = VisibilityModel.from_frame(frame)
        proj = self.projector
        source, target = tstate.source_mode, tstate.target_mode

        result = FrameResult(viewport=vp, transition=tstate, lst=lst,
                             horizon_alpha=self.animator.horizon_ring_alpha(),
                             hr_axes_alpha=self.animator.hr_axes_alpha())

        for star in self.stars:
            if not vis.admits(star):
                continue

            altaz = proj.horizontal(star, observer)
            alt = altaz[0]
            if proj.is_culled(alt, tstate):
                continue

            sx, sy = proj.project(star, source, observer, now_ms, altaz)
            ex, ey = proj.project(star, target, observer, now_ms, altaz)
            x = cx + lerp(sx, ex, t) * scale
            y = cy + lerp(sy, ey, t) * scale
            if not is_finite_point(x, y):
                result.skipped += 1
                continue

            included, alpha = vis.assess(star, alt, tstate)
            if not included:
                continue

            radius = star_radius(star, target)
            glow = radius * 3.0 if (radius > GLOW_MIN_RADIUS and alpha > GLOW_MIN_ALPHA) else 0.0
            result.draws.append(StarDraw(star, x, y, radius, alpha, glow))

        if result.skipped:
            logger.debug("Skipped %d stars with non-finite positions", result.skipped)

        self._last = result
        return result

    # ── Painting ────────────────────────────────────────────────────────────

    def paint(self, surface: DrawSurface, result: FrameResult):
        surface.set_global_alpha(1.0)
        if result.sky_background:
            surface.fill_vertical_gradient(SKY_GRADIENT)
        else:
            surface.fill(BG_FLAT)

        for d in result.draws:
            surface.fill_circle((d.x, d.y), d.radius, d.star.color, d.alpha, d.glow)

        if result.horizon_alpha > 0.0:
            self._draw_horizon(surface, result.viewport, result.horizon_alpha)
        if result.hr_axes_alpha > 0.0:
            self._draw_hr_axes(surface, result.viewport, result.hr_axes_alpha)
        surface.set_global_alpha(1.0)

    def _draw_horizon(self, surface: DrawSurface, vp: Viewport, opacity: float):
        cx, cy = vp.center
        R = vp.scale_factor * SKY_RADIUS
        surface.set_global_alpha(opacity)
        surface.stroke_circle((cx, cy), R, RING_COLOR, width=2)

        surface.text((cx, cy - R - 10), "N", RING_LABEL, 12, align='center')
        surface.text((cx, cy + R + 20), "S", RING_LABEL, 12, align='center')
        surface.text((cx + R + 15, cy + 4), "E", RING_LABEL, 12, align='center')
        surface.text((cx - R - 15, cy + 4), "W", RING_LABEL, 12, align='center')

        # zenith cross
        surface.fill_rect(cx - 1, cy - 5, 2, 10, RING_COLOR)
        surface.fill_rect(cx - 5, cy - 1, 10, 2, RING_COLOR)

    def _draw_hr_axes(self, surface: DrawSurface, vp: Viewport, opacity: float):
        cx, cy = vp.center
        s = vp.scale_factor
        surface.set_global_alpha(opacity)

        left, right = cx - s * 1.6, cx + s * 1.6
        top, bottom = cy - s * 0.9, cy + s * 0.9
        surface.line((left, top), (left, bottom), AXIS_COLOR, width=2)       # luminosity
        surface.line((left, bottom), (right, bottom), AXIS_COLOR, width=2)   # temperature

        surface.text((cx - s * 1.7, cy), "Luminosity (Solar)", AXIS_LABEL, 10, align='right')
        surface.text((cx, cy + s * 1.0), "Temperature (Kelvin)", AXIS_LABEL, 10, align='center')
        surface.text((cx - s * 1.7, cy - s * 0.8), "10⁶", AXIS_LABEL, 10, align='center')
        surface.text((cx - s * 1.7, cy + s * 0.8), "10⁻⁴", AXIS_LABEL, 10, align='center')
        surface.text((cx - s * 1.5, cy + s * 1.0), "40,000K", AXIS_LABEL, 10, align='center')
        surface.text((cx + s * 1.5, cy + s * 1.0), "2,000K", AXIS_LABEL, 10, align='center')

    # ── Queries ─────────────────────────────────────────────────────────────

    def star_at(self, x: float, y: float) -> Optional[Star]:
        """
        Star drawn nearest to (x, y) in the last frame, within its radius
        plus a few pixels. None while a transition is animating.
        """
        last = self._last
        if last is None or last.transition.in_progress:
            return None
        best, best_d = None, math.inf
        for d in last.draws:
            dist = math.hypot(d.x - x, d.y - y)
            if dist <= d.radius + HIT_SLOP_PX and dist < best_d:
                best, best_d = d.star, dist
        return best
