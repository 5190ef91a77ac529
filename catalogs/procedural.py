"""
Procedural Star Catalog
Generates a deterministic, physically plausible star population once per session.

Every star carries coordinates for all four projections, computed together
here and never again:
  - equatorial RA/Dec (sky view), derived from the galactic position
  - galactic cartesian x/y/z (galaxy view)
  - HR-diagram x/y (from temperature and luminosity)
"""

from __future__ import annotations
import logging
import math
import time
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np

from core.coords import cart_to_sph, galactic_to_equatorial
from core.types import SpectralType, Star

logger = logging.getLogger(__name__)

DEFAULT_STAR_COUNT = 7000
SUN_TEMPERATURE_K = 5778.0
SUN_ABS_MAG = 4.83

# HR diagram axes: log10(T) and log10(L) ranges mapped onto [-1, 1]
HR_LOG_T_RANGE = (3.3, 4.7)
HR_LOG_L_RANGE = (-4.0, 6.0)


# RNG utilities (per-star deterministic streams)
def splitmix64(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & 0xFFFFFFFFFFFFFFFF
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & 0xFFFFFFFFFFFFFFFF
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & 0xFFFFFFFFFFFFFFFF
    return (z ^ (z >> 31)) & 0xFFFFFFFFFFFFFFFF

def hash_u64(*vals: int) -> int:
    x = 0xA5A5A5A5A5A5A5A5
    for v in vals:
        x ^= (v & 0xFFFFFFFFFFFFFFFF)
        x = splitmix64(x)
    return x

def rng_from_seed(seed_u64: int) -> np.random.Generator:
    return np.random.default_rng(np.uint64(seed_u64))


@dataclass(frozen=True)
class SpectralClass:
    """One row of the spectral weight table"""
    spectral_type: SpectralType
    weight: float
    min_temp: float   # K
    max_temp: float   # K


# Walked in order; weights need not sum to 1, the last row is the fallback.
SPECTRAL_TABLE: tuple[SpectralClass, ...] = (
    SpectralClass(SpectralType.O, 0.00003, 30000.0, 50000.0),
    SpectralClass(SpectralType.B, 0.0013,  10000.0, 30000.0),
    SpectralClass(SpectralType.A, 0.006,    7500.0, 10000.0),
    SpectralClass(SpectralType.F, 0.03,     6000.0,  7500.0),
    SpectralClass(SpectralType.G, 0.076,    5200.0,  6000.0),
    SpectralClass(SpectralType.K, 0.121,    3700.0,  5200.0),
    SpectralClass(SpectralType.M, 0.7645,   2400.0,  3700.0),
)

SPECTRAL_COLORS: dict[SpectralType, tuple[int, int, int]] = {
    SpectralType.O: (155, 176, 255),   # #9bb0ff
    SpectralType.B: (170, 191, 255),   # #aabfff
    SpectralType.A: (202, 215, 255),   # #cad7ff
    SpectralType.F: (248, 247, 255),   # #f8f7ff
    SpectralType.G: (255, 244, 234),   # #fff4ea
    SpectralType.K: (255, 210, 161),   # #ffd2a1
    SpectralType.M: (255, 204, 111),   # #ffcc6f
}


def pick_spectral_class(u: float,
                        table: Sequence[SpectralClass] = SPECTRAL_TABLE) -> SpectralClass:
    """Walk the weight table with a uniform draw u in [0, 1)."""
    for row in table:
        if u < row.weight:
            return row
        u -= row.weight
    return table[-1]


def hr_coordinates(temperature: float, luminosity: float) -> tuple[float, float]:
    """
    Map (T, L) onto the HR plane in [-1, 1]².
    Hot stars to the left (negative x), luminous stars up (negative y).
    """
    t0, t1 = HR_LOG_T_RANGE
    l0, l1 = HR_LOG_L_RANGE
    x = -((math.log10(temperature) - t0) / (t1 - t0) * 2.0 - 1.0)
    y = -((math.log10(luminosity) - l0) / (l1 - l0) * 2.0 - 1.0)
    return max(-1.0, min(1.0, x)), max(-1.0, min(1.0, y))


def spectral_census(stars: Iterable[Star]) -> Counter:
    """Count stars per spectral type."""
    return Counter(s.spectral_type for s in stars)


class StarCatalogGenerator:
    """Generates the session's star catalog"""

    def __init__(self, seed: Optional[int] = None,
                 table: Sequence[SpectralClass] = SPECTRAL_TABLE):
        if not table:
            raise ValueError("Spectral table is empty")
        for row in table:
            if row.weight < 0 or row.min_temp <= 0 or row.max_temp < row.min_temp:
                raise ValueError(f"Invalid spectral table row: {row}")
        if seed is None:
            seed = int(np.random.SeedSequence().entropy) & 0xFFFFFFFFFFFFFFFF
        self.global_seed = seed
        self.table = tuple(table)

    def generate(self, count: int = DEFAULT_STAR_COUNT) -> tuple[Star, ...]:
        """
        Generate `count` stars, sorted brightest first (paint order only).
        Same seed and count -> identical catalog.
        """
        if count < 0:
            raise ValueError(f"Star count must be >= 0, got {count}")

        t0 = time.perf_counter()
        base_seed = hash_u64(self.global_seed, 0x57A2)
        stars = [self._make_star(i, rng_from_seed(hash_u64(base_seed, i)))
                 for i in range(count)]
        stars.sort(key=lambda s: s.apparent_magnitude)

        census = spectral_census(stars)
        logger.info("Generated %d stars in %.2fs (%s)", count,
                    time.perf_counter() - t0,
                    " ".join(f"{t.value}:{census.get(t, 0)}" for t in SpectralType))
        return tuple(stars)

    def _make_star(self, star_id: int, rng: np.random.Generator) -> Star:
        # 1. Spectral class and physics
        row = pick_spectral_class(rng.random(), self.table)
        temperature = float(rng.uniform(row.min_temp, row.max_temp))
        norm_t = temperature / SUN_TEMPERATURE_K
        luminosity = norm_t ** 7 * float(rng.uniform(0.5, 1.5))
        radius = math.sqrt(luminosity) / norm_t ** 2

        # 2. Thick disk with a mild spiral twist
        angle = float(rng.uniform(0.0, 2.0 * math.pi))
        r_gal = abs(float(rng.normal(0.0, 0.6)))
        gal_x = math.cos(angle + r_gal * 4.0) * r_gal
        gal_y = math.sin(angle + r_gal * 4.0) * r_gal
        gal_z = float(rng.normal(0.0, 0.08))

        l_deg, b_deg = cart_to_sph(gal_x, gal_y, gal_z)
        ra, dec = galactic_to_equatorial(l_deg, b_deg)

        # 3. Distance and magnitudes
        distance = 10.0 ** float(rng.uniform(0.0, 3.8))
        abs_mag = -2.5 * math.log10(luminosity) + SUN_ABS_MAG
        app_mag = abs_mag + 5.0 * (math.log10(distance) - 1.0)

        # 4. HR plane
        hr_x, hr_y = hr_coordinates(temperature, luminosity)

        return Star(
            id=star_id,
            ra=ra, dec=dec,
            gal_x=gal_x, gal_y=gal_y, gal_z=gal_z,
            hr_x=hr_x, hr_y=hr_y,
            spectral_type=row.spectral_type,
            temperature=temperature,
            luminosity=luminosity,
            radius=radius,
            apparent_magnitude=app_mag,
            absolute_magnitude=abs_mag,
            distance=distance,
            color=SPECTRAL_COLORS[row.spectral_type],
            base_size=max(0.5, 2.0 - app_mag / 10.0),
        )
