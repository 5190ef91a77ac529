"""
Atmosphere package — what the observer can see.

Main exports:
    VisibilityModel    — per-frame inclusion test and alpha per star
    effective_limit    — faintest magnitude for instrument + sky
    extinction_factor  — horizon dimming, blended across transitions
    horizon_fade       — soft edge below the horizon
    POWER_PRESETS      — Naked Eye / Binoculars / Telescope / Deep Survey
"""
from .visibility import (
    VisibilityModel,
    Visibility,
    PowerPreset,
    POWER_PRESETS,
    instrument_limit,
    pollution_limit,
    effective_limit,
    magnitude_alpha,
    extinction_fraction,
    extinction_factor,
    horizon_fade,
    preset_for,
    sky_quality_label,
)

__all__ = [
    "VisibilityModel",
    "Visibility",
    "PowerPreset",
    "POWER_PRESETS",
    "instrument_limit",
    "pollution_limit",
    "effective_limit",
    "magnitude_alpha",
    "extinction_fraction",
    "extinction_factor",
    "horizon_fade",
    "preset_for",
    "sky_quality_label",
]
