"""
Session State Manager

Owns the UI-side session (mode, observer settings, instrument, filters)
and screen navigation. The render loop never reads this object directly:
it receives a FrameInput snapshot each frame and reports back through
report_frame().
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, TYPE_CHECKING

import pygame

from core.config import EngineConfig
from core.coords import clamp
from core.types import (
    ALL_SPECTRAL_TYPES, FrameInput, ObserverState, ProjectionMode, SpectralType,
    Star, Viewport,
)
from atmosphere.visibility import POWER_PRESETS, effective_limit

if TYPE_CHECKING:
    from rendering.render_loop import FrameResult
    from ui_new.base_screen import BaseScreen

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Global session state"""
    mode: ProjectionMode = ProjectionMode.SKY
    observer: ObserverState = field(default_factory=ObserverState)
    observational_power: float = 0.05
    active_filters: frozenset = ALL_SPECTRAL_TYPES

    # Reported back by the render loop
    visible_count: int = 0
    hovered_star: Optional[Star] = None

    @property
    def magnitude_limit(self) -> float:
        return effective_limit(self.observational_power,
                               self.observer.light_pollution_limit)


class StateManager:
    """
    Manages session state and screen navigation

    Responsibilities:
    - Screen registration and lifecycle
    - Session parameters, clamped at the boundary
    - Per-frame snapshots for the render loop
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        cfg = config or EngineConfig()
        self.config = cfg
        self.state = SessionState(
            observer=ObserverState(latitude=cfg.latitude,
                                   light_pollution_limit=cfg.light_pollution,
                                   is_paused=cfg.paused,
                                   time_speed=cfg.time_speed),
            observational_power=cfg.observational_power,
        )
        self.screens: Dict[str, 'BaseScreen'] = {}
        self.current_screen: Optional[str] = None
        self.quit_requested = False

    # -----------------------------------------------------------------------
    # Session parameters
    # -----------------------------------------------------------------------

    def set_mode(self, mode: ProjectionMode):
        self.state.mode = mode

    def set_power(self, power: float):
        self.state.observational_power = clamp(power, 0.0, 1.0)

    def apply_preset(self, index: int):
        """Jump to one of the instrument presets (0 = Naked Eye)."""
        preset = POWER_PRESETS[index]
        self.set_power(preset.value)

    def toggle_filter(self, spectral_type: SpectralType):
        filters = set(self.state.active_filters)
        filters.symmetric_difference_update({spectral_type})
        self.state.active_filters = frozenset(filters)

    def update_observer(self, **changes):
        """
        Change observer settings. Values are clamped by ObserverState.
        Sidereal time belongs to the render loop and cannot be set here.
        """
        if 'local_sidereal_time' in changes:
            raise ValueError("local_sidereal_time is written by the render loop only")
        self.state.observer = replace(self.state.observer, **changes)

    def toggle_pause(self):
        self.update_observer(is_paused=not self.state.observer.is_paused)

    # -----------------------------------------------------------------------
    # Render loop boundary
    # -----------------------------------------------------------------------

    def snapshot(self, viewport: Viewport) -> FrameInput:
        """Immutable read of everything the next frame needs."""
        s = self.state
        return FrameInput(mode=s.mode, observer=s.observer, viewport=viewport,
                          observational_power=s.observational_power,
                          active_filters=s.active_filters)

    def report_frame(self, result: 'FrameResult'):
        """Take the loop's outputs: sidereal time and visible count."""
        self.state.observer = replace(self.state.observer,
                                      local_sidereal_time=result.lst)
        self.state.visible_count = result.visible_count

    def set_hovered(self, star: Optional[Star]):
        self.state.hovered_star = star

    # -----------------------------------------------------------------------
    # Screens
    # -----------------------------------------------------------------------

    def register_screen(self, name: str, screen: 'BaseScreen'):
        """
        Register a screen

        Args:
            name: Screen identifier
            screen: Screen instance
        """
        self.screens[name] = screen
        logger.debug("Registered screen: %s", name)

    def switch_to(self, screen_name: str):
        """
        Activate a registered screen, exiting the current one

        Args:
            screen_name: Name of screen to activate
        """
        if screen_name not in self.screens:
            logger.warning("Screen '%s' not registered", screen_name)
            return

        if self.current_screen:
            self.screens[self.current_screen].on_exit()

        self.current_screen = screen_name
        self.screens[screen_name].on_enter()
        logger.info("Switched to screen: %s", screen_name)

    def update(self, dt: float):
        if self.current_screen:
            self.screens[self.current_screen].update(dt)

    def render(self, surface: pygame.Surface):
        if self.current_screen:
            self.screens[self.current_screen].render(surface)

    def handle_input(self, events: list[pygame.event.Event]):
        """Handle input for current screen; a "QUIT" reply ends the session."""
        if not self.current_screen:
            return
        if self.screens[self.current_screen].handle_input(events) == "QUIT":
            self.quit_requested = True

    def shutdown(self):
        """Exit the active screen so it can release its resources."""
        if self.current_screen:
            self.screens[self.current_screen].on_exit()
            self.current_screen = None

    def get_state(self) -> SessionState:
        return self.state
