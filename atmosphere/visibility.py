"""
VisibilityModel — what the observer can see, and how faintly.

Combines, per star and per frame:
  1. Spectral filter       : star class must be among the active filters
  2. Magnitude limit       : instrument power vs. light pollution
  3. Limit fade            : linear fade over the last magnitude above the limit
  4. Atmospheric extinction: dimming near the horizon (horizon-based views only)
  5. Horizon fade          : 5° soft edge below the horizon (sky view only)

Limits (magnitudes, lower = brighter):
    instrument = 3   + power * 12
    pollution  = 2.5 + darkness * 4.5
    effective  = min(instrument, pollution + power * 5)

Every factor is clamped to [0, 1] before it is multiplied in, and the
product is clamped again.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, NamedTuple, Optional

from core.coords import clamp
from core.types import (
    ALL_SPECTRAL_TYPES, FrameInput, ProjectionMode, SpectralType, Star,
    TransitionState,
)


# ---------------------------------------------------------------------------
# Magnitude limits
# ---------------------------------------------------------------------------

def instrument_limit(power: float) -> float:
    return 3.0 + power * 12.0


def pollution_limit(light_pollution: float) -> float:
    return 2.5 + light_pollution * 4.5


def effective_limit(power: float, light_pollution: float) -> float:
    """Faintest apparent magnitude reachable with this instrument under this sky."""
    return min(instrument_limit(power), pollution_limit(light_pollution) + power * 5.0)


def magnitude_alpha(apparent_mag: float, limit: float) -> float:
    """1 well above the limit, fading linearly to 0 over the last magnitude."""
    if apparent_mag > limit - 1.0:
        return clamp(limit - apparent_mag, 0.0, 1.0)
    return 1.0


# ---------------------------------------------------------------------------
# Atmosphere
# ---------------------------------------------------------------------------

EXTINCTION_ALT_DEG = 30.0    # extinction starts below this altitude
EXTINCTION_DEPTH = 0.7       # fraction of light lost at the horizon
HORIZON_FADE_DEG = 5.0


def extinction_fraction(alt_deg: float) -> float:
    return max(0.0, (EXTINCTION_ALT_DEG - alt_deg) / EXTINCTION_ALT_DEG)


def extinction_factor(alt_deg: float, source: ProjectionMode,
                      target: ProjectionMode, progress: float) -> float:
    """
    Alpha multiplier for atmospheric dimming.

    Full strength while a horizon-based view is the target; when leaving
    one, it relaxes towards 1 as the transition progresses.
    """
    sky = clamp(1.0 - extinction_fraction(alt_deg) * EXTINCTION_DEPTH, 0.0, 1.0)
    if target.is_horizon_based:
        return sky
    if source.is_horizon_based:
        return sky + (1.0 - sky) * clamp(progress, 0.0, 1.0)
    return 1.0


def horizon_fade(alt_deg: float, target: ProjectionMode) -> float:
    """Soft cut below the horizon while the sky view is (becoming) active."""
    if target.basis is ProjectionMode.SKY:
        return clamp(1.0 + alt_deg / HORIZON_FADE_DEG, 0.0, 1.0)
    return 1.0


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

class Visibility(NamedTuple):
    included: bool
    alpha: float


HIDDEN = Visibility(False, 0.0)


@dataclass(frozen=True)
class VisibilityModel:
    """Per-frame visibility rules, built from that frame's inputs."""
    observational_power: float
    light_pollution: float
    active_filters: FrozenSet[SpectralType] = ALL_SPECTRAL_TYPES

    @classmethod
    def from_frame(cls, frame: FrameInput) -> "VisibilityModel":
        return cls(observational_power=frame.observational_power,
                   light_pollution=frame.observer.light_pollution_limit,
                   active_filters=frame.active_filters)

    @property
    def limit(self) -> float:
        return effective_limit(self.observational_power, self.light_pollution)

    def admits(self, star: Star) -> bool:
        """Filter and magnitude test only; no geometry needed."""
        return (star.spectral_type in self.active_filters
                and star.apparent_magnitude <= self.limit)

    def assess(self, star: Star, alt_deg: Optional[float] = None,
               transition: Optional[TransitionState] = None) -> Visibility:
        """
        Inclusion and final alpha for one star.

        Without an altitude or transition only the filter and magnitude
        rules apply.
        """
        if not self.admits(star):
            return HIDDEN

        alpha = magnitude_alpha(star.apparent_magnitude, self.limit)
        if alt_deg is not None and transition is not None:
            alpha *= extinction_factor(alt_deg, transition.source_mode,
                                       transition.target_mode, transition.progress)
            alpha *= horizon_fade(alt_deg, transition.target_mode)

        alpha = clamp(alpha, 0.0, 1.0)
        if alpha <= 0.0:
            return HIDDEN
        return Visibility(True, alpha)


# ---------------------------------------------------------------------------
# Instrument presets and sky quality
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PowerPreset:
    label: str
    value: float
    max_range: float
    description: str


POWER_PRESETS: tuple[PowerPreset, ...] = (
    PowerPreset("Naked Eye",   0.05, 0.2, "Limit ~Mag 6 (Human Eye)"),
    PowerPreset("Binoculars",  0.35, 0.5, "Limit ~Mag 10 (7x50)"),
    PowerPreset("Telescope",   0.65, 0.8, "Limit ~Mag 13 (6-inch)"),
    PowerPreset("Deep Survey", 1.0,  1.1, "Limit ~Mag 16+ (Observatory)"),
)


def preset_for(power: float) -> PowerPreset:
    for preset in POWER_PRESETS:
        if power < preset.max_range:
            return preset
    return POWER_PRESETS[-1]


def sky_quality_label(light_pollution: float) -> str:
    if light_pollution < 0.2:
        return "Urban"
    if light_pollution > 0.8:
        return "Dark Sky"
    return "Suburban"
