import math

import pytest

from core.config import EngineConfig
from core.types import FrameInput, ObserverState, ProjectionMode, SpectralType, Viewport
from rendering.render_loop import RenderLoop, star_radius
from conftest import RecordingSurface, make_star

SKY = ProjectionMode.SKY
GALAXY = ProjectionMode.GALAXY
HR = ProjectionMode.HR_DIAGRAM

VIEWPORT = Viewport(800, 600)          # centre (400, 300), scale 240
POLE = ObserverState(latitude=90.0, local_sidereal_time=0.0)


def frame(mode=SKY, observer=POLE, power=1.0, filters=frozenset(SpectralType)):
    return FrameInput(mode=mode, observer=observer, viewport=VIEWPORT,
                      observational_power=power, active_filters=filters)


@pytest.fixture
def stars():
    return [
        make_star(0, dec=60.0, apparent_magnitude=2.0, hr_x=0.5, hr_y=-0.5),
        make_star(1, dec=30.0, apparent_magnitude=6.0, spectral_type=SpectralType.M),
        make_star(2, dec=45.0, apparent_magnitude=30.0),          # too faint for anything
        make_star(3, dec=-30.0, apparent_magnitude=3.0),          # below the pole horizon
    ]


def test_visible_count_follows_frame_inputs(stars):
    loop = RenderLoop(stars)
    assert loop.compute(frame(), 0.0).visible_count == 2

    # filters and power are read fresh every frame
    only_m = loop.compute(frame(filters=frozenset({SpectralType.M})), 16.0)
    assert [d.star.id for d in only_m.draws] == [1]
    naked_eye = loop.compute(frame(power=0.05), 32.0)
    assert [d.star.id for d in naked_eye.draws] == [0]


def test_below_horizon_culled_only_in_sky_views(stars):
    loop = RenderLoop(stars, initial_mode=GALAXY)
    ids = {d.star.id for d in loop.compute(frame(GALAXY), 0.0).draws}
    assert ids == {0, 1, 3}


def test_sky_positions(stars):
    loop = RenderLoop(stars)
    result = loop.compute(frame(), 0.0)
    bright = next(d for d in result.draws if d.star.id == 0)
    # altitude 60 at the pole: a third of the way to the horizon ring
    dist = math.hypot(bright.x - 400.0, bright.y - 300.0)
    assert dist == pytest.approx(240.0 * 1.8 / 3.0)
    assert bright.alpha == 1.0
    assert bright.radius == pytest.approx(2.6)
    assert bright.glow == pytest.approx(7.8)


def test_transition_interpolates_positions(stars):
    loop = RenderLoop(stars, config=EngineConfig(transition_duration_ms=1000.0))
    start = loop.compute(frame(), 0.0)
    sky_pos = {d.star.id: (d.x, d.y) for d in start.draws}

    first = loop.compute(frame(HR), 100.0)
    assert first.transition.in_progress
    assert first.transition.progress == 0.0
    moved = {d.star.id: (d.x, d.y) for d in first.draws}
    assert moved[0] == pytest.approx(sky_pos[0])

    done = loop.compute(frame(HR), 1100.0)
    assert not done.transition.in_progress
    hr = next(d for d in done.draws if d.star.id == 0)
    assert (hr.x, hr.y) == pytest.approx((400.0 + 0.5 * 1.5 * 240.0,
                                          300.0 - 0.5 * 0.8 * 240.0))
    assert hr.radius == pytest.approx(star_radius(hr.star, HR))


def test_sidereal_time_advances_in_sky_view():
    loop = RenderLoop([make_star()])
    obs = ObserverState(latitude=45.0, local_sidereal_time=355.0)
    assert loop.compute(frame(observer=obs), 0.0).lst == pytest.approx(355.0)
    # 1000 ms at 0.01 deg/ms wraps past 360
    assert loop.compute(frame(observer=obs), 1000.0).lst == pytest.approx(5.0)


def test_sidereal_time_ignores_observer_after_seeding():
    loop = RenderLoop([make_star()])
    loop.compute(frame(observer=ObserverState(local_sidereal_time=10.0)), 0.0)
    result = loop.compute(frame(observer=ObserverState(local_sidereal_time=200.0)), 100.0)
    assert result.lst == pytest.approx(11.0)


def test_sidereal_time_frozen_when_paused_or_off_sky():
    loop = RenderLoop([make_star()])
    paused = ObserverState(local_sidereal_time=20.0, is_paused=True)
    loop.compute(frame(observer=paused), 0.0)
    assert loop.compute(frame(observer=paused), 5000.0).lst == pytest.approx(20.0)

    running = ObserverState(local_sidereal_time=20.0, time_speed=2.0)
    assert loop.compute(frame(GALAXY, observer=running), 6000.0).lst == pytest.approx(20.0)
    assert loop.compute(frame(SKY, observer=running), 6500.0).lst == pytest.approx(30.0)


def test_non_finite_stars_are_skipped():
    loop = RenderLoop([make_star(0), make_star(1, ra=float("nan"))])
    result = loop.compute(frame(), 0.0)
    assert result.visible_count == 1
    assert result.skipped == 1


def test_paint_sky_frame(stars):
    surface = RecordingSurface()
    loop = RenderLoop(stars, surface=surface)
    result = loop.tick(frame(), 0.0)
    names = surface.names()
    assert names[1] == "fill_vertical_gradient"
    assert names.count("fill_circle") == result.visible_count
    assert "stroke_circle" in names       # horizon ring
    assert "line" not in names            # no HR axes


def test_paint_hr_frame(stars):
    surface = RecordingSurface()
    loop = RenderLoop(stars, surface=surface, initial_mode=HR)
    loop.tick(frame(HR), 0.0)
    names = surface.names()
    assert ("fill", (2, 6, 23)) in surface.calls
    assert "fill_vertical_gradient" not in names
    assert "stroke_circle" not in names
    assert names.count("line") == 2


def test_star_at_hit_testing(stars):
    loop = RenderLoop(stars)
    assert loop.star_at(0.0, 0.0) is None

    result = loop.compute(frame(), 0.0)
    target = next(d for d in result.draws if d.star.id == 0)
    assert loop.star_at(target.x + 1.0, target.y).id == 0
    assert loop.star_at(target.x + 50.0, target.y + 50.0) is None

    loop.compute(frame(GALAXY), 10.0)
    assert loop.star_at(target.x, target.y) is None


def test_close_releases_surface_and_stops(stars):
    surface = RecordingSurface()
    loop = RenderLoop(stars, surface=surface)
    loop.tick(frame(), 0.0)
    loop.close()
    assert surface.closed
    assert not loop.running
    assert loop.last_frame is None
    with pytest.raises(RuntimeError):
        loop.tick(frame(), 16.0)
    loop.close()
