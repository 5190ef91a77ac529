from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Tuple

from core.coords import clamp, wrap_deg


class SpectralType(str, Enum):
    """Harvard spectral classes, hottest first."""
    O = "O"
    B = "B"
    A = "A"
    F = "F"
    G = "G"
    K = "K"
    M = "M"


ALL_SPECTRAL_TYPES: FrozenSet[SpectralType] = frozenset(SpectralType)


class ProjectionMode(str, Enum):
    SKY = "SKY"
    CLASSIFICATION = "CLASSIFICATION"
    GALAXY = "GALAXY"
    HR_DIAGRAM = "HR_DIAGRAM"
    CENSUS = "CENSUS"   # presentation only, projects like CLASSIFICATION

    @property
    def basis(self) -> "ProjectionMode":
        """Mode whose coordinate space this mode is drawn in."""
        if self is ProjectionMode.CENSUS:
            return ProjectionMode.CLASSIFICATION
        return self

    @property
    def is_horizon_based(self) -> bool:
        return self.basis in (ProjectionMode.SKY, ProjectionMode.CLASSIFICATION)


@dataclass(frozen=True, slots=True)
class Star:
    id: int
    # equatorial, degrees
    ra: float
    dec: float
    # galactic cartesian, roughly [-1, 1]
    gal_x: float
    gal_y: float
    gal_z: float
    # HR diagram, [-1, 1]
    hr_x: float
    hr_y: float
    spectral_type: SpectralType
    temperature: float          # K
    luminosity: float           # L_sun
    radius: float               # R_sun
    apparent_magnitude: float
    absolute_magnitude: float
    distance: float             # pc
    color: Tuple[int, int, int]
    base_size: float


@dataclass(frozen=True, slots=True)
class ObserverState:
    """
    Where and when the observer stands, as seen by one frame.

    Values outside their domain are clamped on construction; the engine
    never rejects an observer.
    """
    latitude: float = 45.0
    local_sidereal_time: float = 0.0
    light_pollution_limit: float = 0.2
    is_paused: bool = False
    time_speed: float = 1.0

    def __post_init__(self):
        lat = self.latitude if math.isfinite(self.latitude) else 0.0
        lst = self.local_sidereal_time if math.isfinite(self.local_sidereal_time) else 0.0
        lp = self.light_pollution_limit if math.isfinite(self.light_pollution_limit) else 0.0
        speed = self.time_speed if math.isfinite(self.time_speed) else 0.0
        object.__setattr__(self, "latitude", clamp(lat, -90.0, 90.0))
        object.__setattr__(self, "local_sidereal_time", wrap_deg(lst))
        object.__setattr__(self, "light_pollution_limit", clamp(lp, 0.0, 1.0))
        object.__setattr__(self, "time_speed", max(0.0, speed))


@dataclass(frozen=True, slots=True)
class Viewport:
    width: float
    height: float
    pixel_ratio: float = 1.0

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    @property
    def scale_factor(self) -> float:
        return min(self.width, self.height) * 0.4


@dataclass(frozen=True, slots=True)
class FrameInput:
    """
    Immutable snapshot of every external parameter, taken once at the top
    of a frame. The render loop never reads session state any other way.
    """
    mode: ProjectionMode
    observer: ObserverState
    viewport: Viewport
    observational_power: float = 0.05
    active_filters: FrozenSet[SpectralType] = field(default=ALL_SPECTRAL_TYPES)

    def __post_init__(self):
        power = self.observational_power if math.isfinite(self.observational_power) else 0.0
        object.__setattr__(self, "observational_power", clamp(power, 0.0, 1.0))
        object.__setattr__(self, "active_filters", frozenset(self.active_filters))


@dataclass(frozen=True, slots=True)
class TransitionState:
    source_mode: ProjectionMode
    target_mode: ProjectionMode
    progress: float = 1.0
    start_time: float = 0.0

    @property
    def in_progress(self) -> bool:
        return self.progress < 1.0
