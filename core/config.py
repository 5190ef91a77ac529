"""
Engine configuration

All tunables of the census engine in one frozen dataclass, plus the
command-line parser that overrides them.

    cfg = EngineConfig.from_args(["--stars", "3000", "--seed", "7"])
"""

from __future__ import annotations
import argparse
from dataclasses import dataclass, asdict
from typing import Optional, Sequence

from core.coords import clamp


@dataclass(frozen=True)
class EngineConfig:
    """Engine and window settings"""
    # Catalog
    star_count: int = 7000
    seed: Optional[int] = None

    # Animation
    transition_duration_ms: float = 1500.0
    galaxy_spin_rate: float = 0.00005   # rad per ms of wall time
    sidereal_rate: float = 0.01         # deg per ms per unit time speed
    horizon_cull_deg: float = -5.0

    # Window
    width: int = 1280
    height: int = 800
    fps: int = 60
    pixel_ratio: float = 1.0

    # Initial session
    latitude: float = 45.0
    light_pollution: float = 0.2
    observational_power: float = 0.05
    time_speed: float = 1.0
    paused: bool = False

    log_level: str = "INFO"

    def __post_init__(self):
        object.__setattr__(self, "star_count", max(0, int(self.star_count)))
        object.__setattr__(self, "latitude", clamp(float(self.latitude), -90.0, 90.0))
        object.__setattr__(self, "light_pollution", clamp(float(self.light_pollution), 0.0, 1.0))
        object.__setattr__(self, "observational_power", clamp(float(self.observational_power), 0.0, 1.0))
        object.__setattr__(self, "time_speed", max(0.0, float(self.time_speed)))
        object.__setattr__(self, "transition_duration_ms", max(1.0, float(self.transition_duration_ms)))
        object.__setattr__(self, "width", max(64, int(self.width)))
        object.__setattr__(self, "height", max(64, int(self.height)))
        object.__setattr__(self, "fps", max(1, int(self.fps)))
        object.__setattr__(self, "pixel_ratio", max(0.25, float(self.pixel_ratio)))

    def as_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def build_parser(cls) -> argparse.ArgumentParser:
        d = cls()
        ap = argparse.ArgumentParser(
            prog="stellar-census",
            description="Procedural star census under four animated projections.")
        ap.add_argument("--stars", type=int, default=d.star_count,
                        help="Number of stars to generate (default: %(default)s)")
        ap.add_argument("--seed", type=int, default=None,
                        help="RNG seed for a reproducible catalog")
        ap.add_argument("--latitude", type=float, default=d.latitude,
                        help="Observer latitude in degrees, clamped to [-90, 90]")
        ap.add_argument("--light-pollution", type=float, default=d.light_pollution,
                        help="Sky darkness 0 (city) .. 1 (dark site)")
        ap.add_argument("--power", type=float, default=d.observational_power,
                        help="Observational power 0..1 (0.05 = naked eye)")
        ap.add_argument("--time-speed", type=float, default=d.time_speed,
                        help="Diurnal motion speed multiplier")
        ap.add_argument("--paused", action="store_true",
                        help="Start with diurnal motion paused")
        ap.add_argument("--width", type=int, default=d.width)
        ap.add_argument("--height", type=int, default=d.height)
        ap.add_argument("--fps", type=int, default=d.fps)
        ap.add_argument("--pixel-ratio", type=float, default=d.pixel_ratio,
                        help="Device pixel ratio applied when painting")
        ap.add_argument("--log-level", default=d.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
        return ap

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "EngineConfig":
        args = cls.build_parser().parse_args(argv)
        return cls(
            star_count=args.stars,
            seed=args.seed,
            width=args.width,
            height=args.height,
            fps=args.fps,
            pixel_ratio=args.pixel_ratio,
            latitude=args.latitude,
            light_pollution=args.light_pollution,
            observational_power=args.power,
            time_speed=args.time_speed,
            paused=args.paused,
            log_level=args.log_level,
        )
