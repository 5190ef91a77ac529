"""
UI Theme - Night Slate

Colors and fonts for the census overlay panels. The star field itself is
painted by the render loop; this module only styles text and panels.
"""

import pygame
from typing import Optional, Tuple
from dataclasses import dataclass

from catalogs.procedural import SPECTRAL_COLORS
from core.types import SpectralType


class Colors:
    """
    Slate/cyan palette, dark enough not to wash out faint stars.
    """

    # Background colors
    BG_PANEL = (15, 23, 42)         # #0f172a
    BG_PANEL_ALPHA = 170            # panel translucency

    # Foreground colors
    FG_PRIMARY = (226, 232, 240)    # slate-200
    FG_DIM = (148, 163, 184)        # slate-400
    FG_BRIGHT = (255, 255, 255)

    # Accents
    ACCENT_CYAN = (34, 211, 238)

    BORDER_NORMAL = (51, 65, 85)    # slate-700
    BORDER_FOCUS = ACCENT_CYAN

    @staticmethod
    def lerp_color(color1: Tuple[int, int, int],
                   color2: Tuple[int, int, int],
                   t: float) -> Tuple[int, int, int]:
        """
        Linearly interpolate between two colors

        Args:
            color1: Start color (RGB)
            color2: End color (RGB)
            t: Interpolation factor (0-1)
        """
        r = int(color1[0] + (color2[0] - color1[0]) * t)
        g = int(color1[1] + (color2[1] - color1[1]) * t)
        b = int(color1[2] + (color2[2] - color1[2]) * t)
        return (r, g, b)

    @staticmethod
    def filter_color(spectral_type: SpectralType, active: bool) -> Tuple[int, int, int]:
        base = SPECTRAL_COLORS[spectral_type]
        return base if active else Colors.lerp_color(base, Colors.BG_PANEL, 0.7)


@dataclass
class FontConfig:
    """Font configuration"""
    family: str = "DejaVu Sans Mono"
    size_title: int = 22
    size_normal: int = 15
    size_small: int = 13
    size_tiny: int = 11
    bold_title: bool = False


class Fonts:
    """
    Font manager

    Loads and caches fonts on first use.
    """

    _initialized = False
    _fonts: dict = {}
    _config = FontConfig()

    @classmethod
    def initialize(cls, config: Optional[FontConfig] = None):
        if config is not None:
            cls._config = config

        pygame.font.init()
        c = cls._config
        # SysFont falls back to pygame's default font for unknown families
        cls._fonts['title'] = pygame.font.SysFont(c.family, c.size_title, bold=c.bold_title)
        cls._fonts['normal'] = pygame.font.SysFont(c.family, c.size_normal)
        cls._fonts['small'] = pygame.font.SysFont(c.family, c.size_small)
        cls._fonts['tiny'] = pygame.font.SysFont(c.family, c.size_tiny)
        cls._initialized = True

    @classmethod
    def get(cls, size: str = 'normal') -> pygame.font.Font:
        """
        Get font by size name: 'title', 'normal', 'small' or 'tiny'
        """
        if not cls._initialized:
            cls.initialize()
        return cls._fonts.get(size, cls._fonts['normal'])

    @classmethod
    def title(cls) -> pygame.font.Font:
        return cls.get('title')

    @classmethod
    def normal(cls) -> pygame.font.Font:
        return cls.get('normal')

    @classmethod
    def small(cls) -> pygame.font.Font:
        return cls.get('small')

    @classmethod
    def tiny(cls) -> pygame.font.Font:
        return cls.get('tiny')

    @classmethod
    def release(cls):
        cls._fonts = {}
        cls._initialized = False


class Theme:
    """
    Complete theme configuration

    Bundles colors, fonts, and spacing into single object.
    """

    def __init__(self):
        self.colors = Colors()
        self.fonts = Fonts()
        self.padding = 10
        self.margin = 16
        self.border_width = 1

    def draw_panel(self, surface: pygame.Surface, rect: pygame.Rect,
                   border: Optional[Tuple[int, int, int]] = None):
        """Translucent panel with a thin border."""
        panel = pygame.Surface(rect.size, pygame.SRCALPHA)
        panel.fill((*self.colors.BG_PANEL, self.colors.BG_PANEL_ALPHA))
        surface.blit(panel, rect.topleft)
        pygame.draw.rect(surface, border or self.colors.BORDER_NORMAL, rect,
                         self.border_width)

    def draw_text(self, surface: pygame.Surface, font: pygame.font.Font,
                  x: int, y: int, text: str, color: Tuple[int, int, int],
                  align: str = 'left') -> int:
        """
        Draw one line of text

        Args:
            surface: Target surface
            font: Font to use
            x, y: Position (top)
            text: Text to render
            color: Text color
            align: 'left', 'center', or 'right'

        Returns:
            Rendered width in pixels
        """
        rendered = font.render(text, True, color)
        if align == 'center':
            x -= rendered.get_width() // 2
        elif align == 'right':
            x -= rendered.get_width()
        surface.blit(rendered, (x, y))
        return rendered.get_width()

    def draw_wrapped(self, surface: pygame.Surface, font: pygame.font.Font,
                     x: int, y: int, width: int, text: str,
                     color: Tuple[int, int, int]) -> int:
        """Word-wrap `text` into `width` pixels. Returns the y below the block."""
        line_h = font.get_linesize()
        for paragraph in text.split("\n"):
            line = ""
            for word in paragraph.split():
                trial = f"{line} {word}".strip()
                if font.size(trial)[0] > width and line:
                    self.draw_text(surface, font, x, y, line, color)
                    y += line_h
                    line = word
                else:
                    line = trial
            if line:
                self.draw_text(surface, font, x, y, line, color)
            y += line_h
        return y


# Global theme instance
_theme = None


def get_theme() -> Theme:
    """Get global theme instance (lazily created)"""
    global _theme
    if _theme is None:
        _theme = Theme()
    return _theme
