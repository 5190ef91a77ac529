import pytest

from core.types import SpectralType, Star


def make_star(star_id: int = 0, **overrides) -> Star:
    """A bright G star near the north celestial pole unless told otherwise."""
    fields = dict(
        id=star_id,
        ra=0.0, dec=60.0,
        gal_x=0.1, gal_y=0.2, gal_z=0.0,
        hr_x=0.2, hr_y=0.3,
        spectral_type=SpectralType.G,
        temperature=5778.0,
        luminosity=1.0,
        radius=1.0,
        apparent_magnitude=2.0,
        absolute_magnitude=4.83,
        distance=10.0,
        color=(255, 244, 234),
        base_size=1.8,
    )
    fields.update(overrides)
    return Star(**fields)


class RecordingSurface:
    """DrawSurface that records every call instead of painting."""

    def __init__(self, width: float = 800, height: float = 600):
        self.width, self.height = width, height
        self.calls: list[tuple] = []
        self.closed = False

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def size(self):
        return self.width, self.height

    def set_global_alpha(self, alpha):
        self.calls.append(("set_global_alpha", alpha))

    def fill(self, color):
        self.calls.append(("fill", color))

    def fill_vertical_gradient(self, stops):
        self.calls.append(("fill_vertical_gradient", tuple(stops)))

    def fill_circle(self, center, radius, color, alpha=1.0, glow=0.0):
        self.calls.append(("fill_circle", center, radius, color, alpha, glow))

    def stroke_circle(self, center, radius, color, width=1):
        self.calls.append(("stroke_circle", center, radius, color, width))

    def fill_rect(self, x, y, w, h, color):
        self.calls.append(("fill_rect", x, y, w, h, color))

    def line(self, start, end, color, width=1):
        self.calls.append(("line", start, end, color, width))

    def text(self, pos, text, color, size=12, align="left"):
        self.calls.append(("text", pos, text, color, size, align))

    def close(self):
        self.closed = True


@pytest.fixture
def star_factory():
    return make_star


@pytest.fixture
def recording_surface():
    return RecordingSurface()
