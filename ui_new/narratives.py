"""
Mode narratives

One title and body per ProjectionMode. The mapping must cover every
mode; a missing entry fails at import time.
"""

from __future__ import annotations
from typing import NamedTuple

from core.types import ProjectionMode


class Narrative(NamedTuple):
    title: str
    body: str


NARRATIVES: dict[ProjectionMode, Narrative] = {
    ProjectionMode.SKY: Narrative(
        "The Living Sky",
        "You are standing on a rotating planet. The stars rise and set not "
        "because they move, but because Earth spins.\n"
        "Adjust Time Speed to see the diurnal motion. Change your Latitude to "
        "see how the sky changes from the Equator to the Poles. Light "
        "pollution hides the faint stars that exist just beyond your sight."),
    ProjectionMode.CLASSIFICATION: Narrative(
        "Spectral Census",
        "A census is about categorizing populations.\n"
        "Use the Spectral Filters. Select 'O' (blue) and you see rare, bright "
        "giants; select 'M' (red) and you see the common but faint dwarfs.\n"
        "Most stars in the universe are M-dwarfs, yet they are invisible to "
        "the naked eye."),
    ProjectionMode.GALAXY: Narrative(
        "Galactic Context",
        "We leave the Earth's surface to view our census from outside.\n"
        "The band of light you saw in the sky is actually the disk of the "
        "Milky Way. Our census is just a small sample of this structure."),
    ProjectionMode.HR_DIAGRAM: Narrative(
        "The Astronomer's Map",
        "This is the Hertzsprung-Russell Diagram. It maps stars by "
        "Temperature (x axis) and Luminosity (y axis).\n"
        "Watch the Main Sequence diagonal appear. Increase observational "
        "power and the bottom right fills with faint red stars."),
    ProjectionMode.CENSUS: Narrative(
        "Data & Discovery",
        "Your star count is not the total number of stars in the universe. "
        "It is only what your instrument could detect from your location, "
        "through your atmosphere.\n"
        "Every astronomical catalog is biased by the observer's limits."),
}

_missing = set(ProjectionMode) - NARRATIVES.keys()
if _missing:
    raise RuntimeError(f"No narrative for modes: {sorted(m.value for m in _missing)}")


def narrative_for(mode: ProjectionMode) -> Narrative:
    return NARRATIVES[mode]
