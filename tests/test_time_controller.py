import pytest

from core.time_controller import SiderealClock
from core.types import ObserverState, ProjectionMode

SKY = ProjectionMode.SKY


def test_unseeded_clock_adopts_first_observer():
    clock = SiderealClock(rate=0.01)
    assert clock.lst == 0.0
    assert clock.step(500.0, ObserverState(local_sidereal_time=42.0), SKY) == pytest.approx(42.0)
    assert clock.lst == pytest.approx(42.0)


def test_explicit_start_wins_over_observer():
    clock = SiderealClock(lst_deg=-10.0, rate=0.01)
    assert clock.lst == pytest.approx(350.0)
    clock.step(0.0, ObserverState(local_sidereal_time=100.0), SKY)
    assert clock.step(2000.0, ObserverState(local_sidereal_time=100.0), SKY) == pytest.approx(10.0)


def test_time_speed_and_backwards_wall_clock():
    clock = SiderealClock(lst_deg=0.0, rate=0.01)
    fast = ObserverState(time_speed=3.0)
    clock.step(1000.0, fast, SKY)
    assert clock.step(1100.0, fast, SKY) == pytest.approx(3.0)
    # a wall clock that jumps back never rewinds the sky
    assert clock.step(900.0, fast, SKY) == pytest.approx(3.0)
    assert clock.step(1000.0, fast, SKY) == pytest.approx(6.0)


def test_frozen_outside_sky_view():
    clock = SiderealClock(lst_deg=5.0)
    for mode in (ProjectionMode.CLASSIFICATION, ProjectionMode.GALAXY,
                 ProjectionMode.HR_DIAGRAM, ProjectionMode.CENSUS):
        clock.step(0.0, ObserverState(), mode)
        assert clock.step(10000.0, ObserverState(), mode) == pytest.approx(5.0)
