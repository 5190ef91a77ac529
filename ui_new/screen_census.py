"""
Census Screen — the star field and its overlays.

Hosts the render loop: every frame it snapshots the session, lets the loop
compute and paint, then writes the loop's report (LST, visible count)
back into the session.

Controls
--------
  1..5                  Sky / Classification / Galaxy / HR diagram / Census
  Space                 Pause diurnal motion
  [ / ]                 Time speed -/+ 0.5  (0..10)
  Up / Down             Latitude +/- 1°
  , / .                 Light pollution -/+ 0.05 (0 = city, 1 = dark site)
  - / =                 Observational power -/+ 0.01
  F1..F4                Naked Eye / Binoculars / Telescope / Deep Survey
  O B A F G K M         Toggle spectral filters
  ESC                   Quit
"""

import logging
import pygame
from typing import Optional, Sequence

from .base_screen import BaseScreen
from .narratives import narrative_for
from core.config import EngineConfig
from core.coords import clamp
from core.types import ProjectionMode, SpectralType, Star, Viewport
from atmosphere.visibility import preset_for, sky_quality_label
from rendering.render_loop import RenderLoop
from rendering.surface import PygameSurface

logger = logging.getLogger(__name__)

_MODE_KEYS = {
    pygame.K_1: ProjectionMode.SKY,
    pygame.K_2: ProjectionMode.CLASSIFICATION,
    pygame.K_3: ProjectionMode.GALAXY,
    pygame.K_4: ProjectionMode.HR_DIAGRAM,
    pygame.K_5: ProjectionMode.CENSUS,
}

_MODE_LABELS = {
    ProjectionMode.SKY: "Sky View",
    ProjectionMode.CLASSIFICATION: "Classification",
    ProjectionMode.GALAXY: "Galaxy",
    ProjectionMode.HR_DIAGRAM: "HR Diagram",
    ProjectionMode.CENSUS: "Census",
}

_FILTER_KEYS = {
    pygame.K_o: SpectralType.O,
    pygame.K_b: SpectralType.B,
    pygame.K_a: SpectralType.A,
    pygame.K_f: SpectralType.F,
    pygame.K_g: SpectralType.G,
    pygame.K_k: SpectralType.K,
    pygame.K_m: SpectralType.M,
}

_PRESET_KEYS = {pygame.K_F1: 0, pygame.K_F2: 1, pygame.K_F3: 2, pygame.K_F4: 3}

MAX_TIME_SPEED = 10.0


class CensusScreen(BaseScreen):
    """Star census view."""

    def __init__(self, state_manager, stars: Sequence[Star],
                 config: Optional[EngineConfig] = None):
        super().__init__("CENSUS")
        self.state_manager = state_manager
        self.stars = stars
        self.config = config or EngineConfig()
        self.loop: Optional[RenderLoop] = None
        self._draw_surface: Optional[PygameSurface] = None
        self._mouse_pos: Optional[tuple[int, int]] = None

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------

    def on_enter(self):
        super().on_enter()
        self.loop = RenderLoop(self.stars,
                               initial_mode=self.state_manager.get_state().mode,
                               config=self.config)
        logger.info("Render loop started over %d stars", len(self.stars))

    def on_exit(self):
        super().on_exit()
        if self.loop is not None:
            self.loop.close()
        self.loop = None
        self._draw_surface = None
        self.state_manager.set_hovered(None)

    # -----------------------------------------------------------------------
    # Input
    # -----------------------------------------------------------------------

    def handle_input(self, events) -> Optional[str]:
        sm = self.state_manager
        for event in events:
            if event.type == pygame.KEYDOWN:
                k = event.key
                obs = sm.get_state().observer
                if k == pygame.K_ESCAPE:
                    return "QUIT"
                elif k in _MODE_KEYS:
                    sm.set_mode(_MODE_KEYS[k])
                elif k in _FILTER_KEYS:
                    sm.toggle_filter(_FILTER_KEYS[k])
                elif k in _PRESET_KEYS:
                    sm.apply_preset(_PRESET_KEYS[k])
                elif k == pygame.K_SPACE:
                    sm.toggle_pause()
                elif k == pygame.K_LEFTBRACKET:
                    sm.update_observer(time_speed=clamp(obs.time_speed - 0.5, 0.0, MAX_TIME_SPEED))
                elif k == pygame.K_RIGHTBRACKET:
                    sm.update_observer(time_speed=clamp(obs.time_speed + 0.5, 0.0, MAX_TIME_SPEED))
                elif k == pygame.K_UP:
                    sm.update_observer(latitude=obs.latitude + 1.0)
                elif k == pygame.K_DOWN:
                    sm.update_observer(latitude=obs.latitude - 1.0)
                elif k == pygame.K_COMMA:
                    sm.update_observer(light_pollution_limit=obs.light_pollution_limit - 0.05)
                elif k == pygame.K_PERIOD:
                    sm.update_observer(light_pollution_limit=obs.light_pollution_limit + 0.05)
                elif k == pygame.K_MINUS:
                    sm.set_power(sm.get_state().observational_power - 0.01)
                elif k == pygame.K_EQUALS:
                    sm.set_power(sm.get_state().observational_power + 0.01)

            elif event.type == pygame.MOUSEMOTION:
                self._mouse_pos = event.pos
                self._refresh_hover()
        return None

    def _refresh_hover(self):
        """Hover follows the last frame; nothing is hovered while a transition runs."""
        if self.loop is None or self._mouse_pos is None:
            self.state_manager.set_hovered(None)
            return
        ratio = self.config.pixel_ratio
        self.state_manager.set_hovered(self.loop.star_at(self._mouse_pos[0] / ratio,
                                                         self._mouse_pos[1] / ratio))

    # -----------------------------------------------------------------------
    # Update / render
    # -----------------------------------------------------------------------

    def update(self, dt: float):
        # The loop keeps its own wall clock; nothing to integrate here.
        pass

    def render(self, surface: pygame.Surface):
        if self.loop is None:
            return
        ratio = self.config.pixel_ratio
        if self._draw_surface is None:
            self._draw_surface = PygameSurface(surface, ratio)
            self.loop.surface = self._draw_surface
        elif self._draw_surface.target is not surface:
            self._draw_surface.retarget(surface)

        W, H = surface.get_size()
        viewport = Viewport(W / ratio, H / ratio, ratio)
        frame = self.state_manager.snapshot(viewport)
        result = self.loop.tick(frame, pygame.time.get_ticks())
        self.state_manager.report_frame(result)
        self._refresh_hover()

        self._draw_mode_tabs(surface)
        self._draw_narrative(surface)
        self._draw_instrument_panel(surface)
        self._draw_star_info(surface)
        self.draw_footer(surface,
                         "[1-5] Mode  [Space] Pause  [ ] Speed  [Up/Dn] Latitude  "
                         "[, .] Sky  [- =] Power  [F1-F4] Presets  [OBAFGKM] Filters  [ESC] Quit")

    # -----------------------------------------------------------------------
    # Overlays
    # -----------------------------------------------------------------------

    def _draw_mode_tabs(self, surface):
        th = self.theme
        font = th.fonts.small()
        current = self.state_manager.get_state().mode
        x = surface.get_width() - th.margin
        for i, mode in reversed(list(enumerate(_MODE_LABELS))):
            label = f"{i + 1} {_MODE_LABELS[mode]}"
            w = font.size(label)[0] + 16
            x -= w
            rect = pygame.Rect(x, th.margin, w, font.get_linesize() + 8)
            active = mode is current
            th.draw_panel(surface, rect, th.colors.BORDER_FOCUS if active else None)
            th.draw_text(surface, font, rect.x + 8, rect.y + 4, label,
                         th.colors.ACCENT_CYAN if active else th.colors.FG_DIM)
            x -= 6

    def _draw_narrative(self, surface):
        th = self.theme
        story = narrative_for(self.state_manager.get_state().mode)
        width = 340
        x, y = th.margin, th.margin
        body_font = th.fonts.tiny()

        # measure by drawing onto a scratch surface first
        scratch = pygame.Surface((width, 600), pygame.SRCALPHA)
        bottom = th.draw_wrapped(scratch, body_font, 0, 0, width - 2 * th.padding,
                                 story.body, th.colors.FG_DIM)
        title_h = th.fonts.title().get_linesize()
        rect = pygame.Rect(x, y, width, title_h + bottom + 3 * th.padding)
        th.draw_panel(surface, rect)
        th.draw_text(surface, th.fonts.title(), x + th.padding, y + th.padding,
                     story.title, th.colors.FG_BRIGHT)
        surface.blit(scratch, (x + th.padding, y + 2 * th.padding + title_h),
                     pygame.Rect(0, 0, width, bottom))

    def _draw_instrument_panel(self, surface):
        th = self.theme
        state = self.state_manager.get_state()
        obs = state.observer
        font = th.fonts.small()
        preset = preset_for(state.observational_power)

        lines = [
            (f"VISIBLE STARS  {state.visible_count:,}", th.colors.ACCENT_CYAN),
            (f"Instrument  {preset.label}  ({state.observational_power:.2f})  "
             f"{preset.description}", th.colors.FG_PRIMARY),
            (f"Limit mag  {state.magnitude_limit:.2f}", th.colors.FG_DIM),
        ]
        if state.mode.is_horizon_based:
            speed = "PAUSED" if obs.is_paused else f"x{obs.time_speed:.1f}"
            lines += [
                (f"LST {obs.local_sidereal_time:6.1f}°  |  {speed}  |  "
                 f"Lat {obs.latitude:+.0f}°", th.colors.FG_DIM),
                (f"Sky  {sky_quality_label(obs.light_pollution_limit)}  "
                 f"({obs.light_pollution_limit:.2f})", th.colors.FG_DIM),
            ]

        line_h = font.get_linesize()
        h = line_h * (len(lines) + 1) + 2 * th.padding
        footer_h = th.fonts.tiny().get_linesize() + 6
        rect = pygame.Rect(th.margin, surface.get_height() - footer_h - th.margin - h,
                           520, h)
        th.draw_panel(surface, rect)
        y = rect.y + th.padding
        for text, color in lines:
            th.draw_text(surface, font, rect.x + th.padding, y, text, color)
            y += line_h

        # spectral filter chips
        x = rect.x + th.padding
        for st in SpectralType:
            active = st in state.active_filters
            x += th.draw_text(surface, font, x, y, f"[{st.value}]",
                              th.colors.filter_color(st, active)) + 6

    def _draw_star_info(self, surface):
        star = self.state_manager.get_state().hovered_star
        if star is None:
            return
        th = self.theme
        font = th.fonts.small()
        lines = [
            (f"Star #{star.id}", th.colors.FG_BRIGHT),
            (f"Class         {star.spectral_type.value}-Type", th.colors.ACCENT_CYAN),
            (f"Apparent Mag  {star.apparent_magnitude:.2f}", th.colors.FG_PRIMARY),
            (f"Distance      {star.distance:.1f} pc", th.colors.FG_PRIMARY),
            (f"RA / Dec      {int(star.ra)}° / {int(star.dec)}°", th.colors.FG_PRIMARY),
            ("Invisible to naked eye." if star.apparent_magnitude > 6
             else "Visible to naked eye.", th.colors.FG_DIM),
        ]
        line_h = font.get_linesize()
        w = 260
        rect = pygame.Rect(surface.get_width() - th.margin - w, 70, w,
                           line_h * len(lines) + 2 * th.padding)
        th.draw_panel(surface, rect, star.color)
        y = rect.y + th.padding
        for text, color in lines:
            th.draw_text(surface, font, rect.x + th.padding, y, text, color)
            y += line_h
