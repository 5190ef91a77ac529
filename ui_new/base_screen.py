"""
Base Screen Class

Abstract base class for all screens.
Provides common functionality and enforces screen interface.
"""

import pygame
from abc import ABC, abstractmethod
from typing import Optional
from .theme import get_theme


class BaseScreen(ABC):
    """
    Abstract base class for all screens

    All screens should inherit from this class and implement the
    required methods.
    """

    def __init__(self, screen_name: str):
        """
        Initialize base screen

        Args:
            screen_name: Unique identifier for this screen
        """
        self.screen_name = screen_name
        self.theme = get_theme()

    @abstractmethod
    def on_enter(self):
        """
        Called when screen becomes active

        Use this to initialize or reset screen state.
        """
        pass

    @abstractmethod
    def on_exit(self):
        """
        Called when screen becomes inactive

        Use this to cleanup resources.
        """
        pass

    @abstractmethod
    def handle_input(self, events: list[pygame.event.Event]) -> Optional[str]:
        """
        Handle input events

        Args:
            events: List of pygame events for this frame

        Returns:
            "QUIT" to close the application, or None to stay
        """
        pass

    @abstractmethod
    def update(self, dt: float):
        """
        Update screen logic

        Args:
            dt: Delta time in seconds since last update
        """
        pass

    @abstractmethod
    def render(self, surface: pygame.Surface):
        """
        Render screen

        Args:
            surface: Main display surface to render to
        """
        pass

    def draw_footer(self, surface: pygame.Surface, controls: str):
        """
        Draw the control hints along the bottom edge

        Args:
            surface: Target surface
            controls: Control hints (e.g., "[ESC] Quit  [1-5] Mode")
        """
        h = self.theme.fonts.tiny().get_linesize() + 6
        rect = pygame.Rect(0, surface.get_height() - h, surface.get_width(), h)
        self.theme.draw_panel(surface, rect)
        self.theme.draw_text(surface, self.theme.fonts.tiny(),
                             rect.x + 8, rect.y + 3,
                             controls, self.theme.colors.FG_DIM)
