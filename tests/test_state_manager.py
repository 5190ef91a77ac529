import pytest

from core.config import EngineConfig
from core.types import ObserverState, ProjectionMode, SpectralType, Viewport
from game.state_manager import StateManager
from rendering.render_loop import RenderLoop
from conftest import make_star


@pytest.fixture
def manager():
    return StateManager(EngineConfig(latitude=30.0, light_pollution=0.6,
                                     observational_power=0.2, paused=True))


def test_initial_state_from_config(manager):
    state = manager.get_state()
    assert state.mode is ProjectionMode.SKY
    assert state.observer.latitude == 30.0
    assert state.observer.light_pollution_limit == 0.6
    assert state.observer.is_paused
    assert state.observational_power == 0.2
    assert state.active_filters == frozenset(SpectralType)


def test_parameters_are_clamped(manager):
    manager.set_power(3.0)
    assert manager.get_state().observational_power == 1.0
    manager.update_observer(latitude=120.0, light_pollution_limit=-1.0, time_speed=-2.0)
    obs = manager.get_state().observer
    assert obs.latitude == 90.0
    assert obs.light_pollution_limit == 0.0
    assert obs.time_speed == 0.0


def test_sidereal_time_is_not_writable_from_the_ui(manager):
    with pytest.raises(ValueError):
        manager.update_observer(local_sidereal_time=100.0)


def test_filters_and_presets(manager):
    manager.toggle_filter(SpectralType.M)
    assert SpectralType.M not in manager.get_state().active_filters
    manager.toggle_filter(SpectralType.M)
    assert SpectralType.M in manager.get_state().active_filters

    manager.apply_preset(2)
    assert manager.get_state().observational_power == 0.65
    assert manager.get_state().magnitude_limit == pytest.approx(min(3 + 0.65 * 12,
                                                                    2.5 + 0.6 * 4.5 + 0.65 * 5))


def test_snapshot_is_detached(manager):
    snap = manager.snapshot(Viewport(800, 600))
    manager.set_mode(ProjectionMode.GALAXY)
    manager.toggle_filter(SpectralType.O)
    assert snap.mode is ProjectionMode.SKY
    assert SpectralType.O in snap.active_filters
    assert snap.observational_power == 0.2


def test_report_frame_writes_back_loop_outputs(manager):
    manager.toggle_pause()
    loop = RenderLoop([make_star(0), make_star(1, apparent_magnitude=40.0)])
    loop.compute(manager.snapshot(Viewport(800, 600)), 0.0)
    result = loop.compute(manager.snapshot(Viewport(800, 600)), 500.0)
    manager.report_frame(result)

    state = manager.get_state()
    assert state.visible_count == 1
    assert state.observer.local_sidereal_time == pytest.approx(5.0)


def test_config_from_args_clamps():
    cfg = EngineConfig.from_args(["--stars", "300", "--seed", "7", "--latitude", "100",
                                  "--power", "2", "--paused", "--log-level", "DEBUG"])
    assert cfg.star_count == 300
    assert cfg.seed == 7
    assert cfg.latitude == 90.0
    assert cfg.observational_power == 1.0
    assert cfg.paused
    assert cfg.log_level == "DEBUG"


def test_config_defaults():
    cfg = EngineConfig.from_args([])
    assert cfg.star_count == 7000
    assert cfg.seed is None
    assert cfg.transition_duration_ms == 1500.0
    assert cfg.as_dict()["width"] == 1280


def test_observer_state_repairs_bad_values():
    obs = ObserverState(latitude=float("nan"), local_sidereal_time=-30.0,
                        light_pollution_limit=float("inf"))
    assert obs.latitude == 0.0
    assert obs.local_sidereal_time == pytest.approx(330.0)
    assert obs.light_pollution_limit == 0.0
