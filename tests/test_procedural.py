import math

import pytest

from catalogs.procedural import (
    SPECTRAL_COLORS, SPECTRAL_TABLE, SpectralClass, StarCatalogGenerator,
    hr_coordinates, pick_spectral_class, spectral_census,
)
from core.coords import cart_to_sph, equatorial_to_galactic, ang_diff_deg
from core.types import SpectralType


@pytest.fixture(scope="module")
def catalog():
    return StarCatalogGenerator(seed=1234).generate(7000)


def test_catalog_size_and_order(catalog):
    assert len(catalog) == 7000
    mags = [s.apparent_magnitude for s in catalog]
    assert mags == sorted(mags)
    assert len({s.id for s in catalog}) == 7000


def test_same_seed_same_catalog():
    a = StarCatalogGenerator(seed=99).generate(200)
    b = StarCatalogGenerator(seed=99).generate(200)
    c = StarCatalogGenerator(seed=100).generate(200)
    assert a == b
    assert a != c


def test_every_value_is_finite(catalog):
    for s in catalog:
        for v in (s.ra, s.dec, s.gal_x, s.gal_y, s.gal_z, s.hr_x, s.hr_y,
                  s.temperature, s.luminosity, s.radius,
                  s.apparent_magnitude, s.absolute_magnitude, s.distance):
            assert math.isfinite(v)
        assert 0.0 <= s.ra < 360.0
        assert -90.0 <= s.dec <= 90.0
        assert -1.0 <= s.hr_x <= 1.0
        assert -1.0 <= s.hr_y <= 1.0
        assert 1.0 <= s.distance <= 10 ** 3.8
        assert s.base_size >= 0.5


def test_temperature_within_class_range(catalog):
    ranges = {row.spectral_type: row for row in SPECTRAL_TABLE}
    for s in catalog:
        row = ranges[s.spectral_type]
        assert row.min_temp <= s.temperature <= row.max_temp
        assert s.color == SPECTRAL_COLORS[s.spectral_type]


def test_derived_physics_is_consistent(catalog):
    for s in catalog[:500]:
        norm_t = s.temperature / 5778.0
        assert s.radius == pytest.approx(math.sqrt(s.luminosity) / norm_t ** 2)
        assert s.absolute_magnitude == pytest.approx(-2.5 * math.log10(s.luminosity) + 4.83)
        assert s.apparent_magnitude == pytest.approx(
            s.absolute_magnitude + 5.0 * (math.log10(s.distance) - 1.0))
        assert (s.hr_x, s.hr_y) == pytest.approx(hr_coordinates(s.temperature, s.luminosity))


def test_equatorial_position_matches_galactic_direction(catalog):
    for s in catalog[:300]:
        l_expected, b_expected = cart_to_sph(s.gal_x, s.gal_y, s.gal_z)
        l, b = equatorial_to_galactic(s.ra, s.dec)
        assert b == pytest.approx(b_expected, abs=1e-6)
        if abs(b_expected) < 89.0:
            assert ang_diff_deg(l, l_expected) == pytest.approx(0.0, abs=1e-5)


def test_spectral_distribution(catalog):
    census = spectral_census(catalog)
    assert sum(census.values()) == len(catalog)
    m_share = census[SpectralType.M] / len(catalog)
    assert m_share == pytest.approx(0.7645, abs=0.03)
    # O stars are ~0.003 %: a handful at most in 7000
    assert census[SpectralType.O] <= 5
    assert census[SpectralType.K] > census[SpectralType.G] > census[SpectralType.F]


def test_pick_spectral_class_walks_the_table():
    assert pick_spectral_class(0.0).spectral_type is SpectralType.O
    assert pick_spectral_class(0.00003).spectral_type is SpectralType.B
    assert pick_spectral_class(0.5).spectral_type is SpectralType.M
    # weights sum slightly below 1: the remainder falls on the last row
    assert pick_spectral_class(0.99999).spectral_type is SpectralType.M


def test_hr_coordinates_orientation_and_clamp():
    hot_x, _ = hr_coordinates(40000.0, 1.0)
    cool_x, _ = hr_coordinates(3000.0, 1.0)
    assert hot_x < cool_x
    _, bright_y = hr_coordinates(5000.0, 1e4)
    _, faint_y = hr_coordinates(5000.0, 1e-3)
    assert bright_y < faint_y
    # an O star can exceed the luminosity axis; it stays on the plane
    assert hr_coordinates(60000.0, 1e8) == (-1.0, -1.0)


def test_generate_edge_counts():
    gen = StarCatalogGenerator(seed=5)
    assert gen.generate(0) == ()
    with pytest.raises(ValueError):
        gen.generate(-1)


def test_invalid_tables_are_rejected():
    with pytest.raises(ValueError):
        StarCatalogGenerator(seed=1, table=())
    with pytest.raises(ValueError):
        StarCatalogGenerator(seed=1, table=(SpectralClass(SpectralType.M, -0.1, 2400.0, 3700.0),))


def test_custom_table_is_honoured():
    only_a = (SpectralClass(SpectralType.A, 1.0, 7500.0, 10000.0),)
    stars = StarCatalogGenerator(seed=3, table=only_a).generate(50)
    assert {s.spectral_type for s in stars} == {SpectralType.A}


def test_unseeded_generators_differ():
    a = StarCatalogGenerator().generate(20)
    b = StarCatalogGenerator().generate(20)
    assert a != b
