"""
CoordinateProjector

Maps a star onto the shared abstract plane for each projection mode.
Positions are in units of the viewport scale factor; the render loop
multiplies by it and offsets by the viewport centre.

  SKY / CLASSIFICATION  polar alt/az chart, zenith at the centre,
                        horizon on radius 1.8, North up, East right
  GALAXY                face-on disk, slowly spinning with wall time,
                        tilted so that the thickness shows
  HR_DIAGRAM            (hr_x, hr_y) stretched to a landscape box
"""

from __future__ import annotations
import math
from typing import Optional, Tuple

from core.coords import equatorial_to_horizontal
from core.types import ObserverState, ProjectionMode, Star, TransitionState

SKY_RADIUS = 1.8
GALAXY_SCALE = 2.5
GALAXY_TILT = 0.4
GALAXY_Z_GAIN = 20.0
HR_SCALE_X = 1.5
HR_SCALE_Y = 0.8

HORIZON_CULL_DEG = -5.0
GALAXY_SPIN_RATE = 0.00005   # rad per ms


def polar_sky_position(alt_deg: float, az_deg: float) -> Tuple[float, float]:
    r = (90.0 - alt_deg) / 90.0
    theta = math.radians(az_deg - 90.0)
    return r * math.cos(theta) * SKY_RADIUS, r * math.sin(theta) * SKY_RADIUS


class CoordinateProjector:
    """
    Pure projection functions, parameterised by the galaxy spin rate
    and the horizon cull altitude.
    """

    def __init__(self, galaxy_spin_rate: float = GALAXY_SPIN_RATE,
                 horizon_cull_deg: float = HORIZON_CULL_DEG):
        self.galaxy_spin_rate = galaxy_spin_rate
        self.horizon_cull_deg = horizon_cull_deg

    def horizontal(self, star: Star, observer: ObserverState) -> Tuple[float, float]:
        """(alt_deg, az_deg) of the star for this observer."""
        return equatorial_to_horizontal(star.ra, star.dec, observer.latitude,
                                        observer.local_sidereal_time)

    def project(self, star: Star, mode: ProjectionMode, observer: ObserverState,
                clock_ms: float,
                altaz: Optional[Tuple[float, float]] = None) -> Tuple[float, float]:
        """
        Position of `star` in `mode` on the abstract plane.

        altaz may be passed in when the caller already has it; it is only
        used by the horizon-based modes.
        """
        basis = mode.basis
        if basis is ProjectionMode.HR_DIAGRAM:
            return star.hr_x * HR_SCALE_X, star.hr_y * HR_SCALE_Y

        if basis is ProjectionMode.GALAXY:
            rot = clock_ms * self.galaxy_spin_rate
            c, s = math.cos(rot), math.sin(rot)
            gx = star.gal_x * c - star.gal_y * s
            gy = star.gal_x * s + star.gal_y * c
            return (gx * GALAXY_SCALE,
                    (gy * GALAXY_TILT + star.gal_z * GALAXY_Z_GAIN) * GALAXY_SCALE)

        alt, az = altaz if altaz is not None else self.horizontal(star, observer)
        return polar_sky_position(alt, az)

    def is_culled(self, alt_deg: float, transition: TransitionState) -> bool:
        """
        Hard cut for stars well below the horizon in a settled
        horizon-based view. Never applied mid-transition.
        """
        return (not transition.in_progress
                and transition.target_mode.is_horizon_based
                and alt_deg < self.horizon_cull_deg)
