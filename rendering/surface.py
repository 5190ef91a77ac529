"""
Drawing surfaces

The render loop paints through the small DrawSurface protocol below, in
logical (device independent) pixels. PygameSurface is the real one; tests
use a recording stand-in.

Alpha: every primitive takes its own alpha and is further multiplied by
the surface-wide global alpha (see set_global_alpha).
"""

from __future__ import annotations
from typing import Optional, Protocol, Sequence, Tuple

import pygame
import pygame.gfxdraw

Color = Tuple[int, int, int]
Point = Tuple[float, float]


class DrawSurface(Protocol):
    def size(self) -> Tuple[float, float]: ...
    def set_global_alpha(self, alpha: float) -> None: ...
    def fill(self, color: Color) -> None: ...
    def fill_vertical_gradient(self, stops: Sequence[Tuple[float, Color]]) -> None: ...
    def fill_circle(self, center: Point, radius: float, color: Color,
                    alpha: float = 1.0, glow: float = 0.0) -> None: ...
    def stroke_circle(self, center: Point, radius: float, color: Color,
                      width: int = 1) -> None: ...
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...
    def line(self, start: Point, end: Point, color: Color, width: int = 1) -> None: ...
    def text(self, pos: Point, text: str, color: Color, size: int = 12,
             align: str = 'left') -> None: ...
    def close(self) -> None: ...


def _a8(alpha: float) -> int:
    return max(0, min(255, int(round(alpha * 255))))


class PygameSurface:
    """
    DrawSurface over a pygame.Surface (usually the display).

    Coordinates arrive in logical pixels and are multiplied by
    pixel_ratio. Circles and lines go through pygame.gfxdraw, which blends
    RGBA colours onto the target.
    """

    GLOW_LAYERS = 3

    def __init__(self, target: pygame.Surface, pixel_ratio: float = 1.0):
        self.target = target
        self.pixel_ratio = pixel_ratio
        self._alpha = 1.0
        self._fonts: dict[int, pygame.font.Font] = {}
        self._gradient_key = None
        self._gradient: Optional[pygame.Surface] = None

    # ------------------------------------------------------------------
    def retarget(self, target: pygame.Surface):
        """Point at a new display surface (after a window resize)."""
        self.target = target

    def size(self) -> Tuple[float, float]:
        w, h = self.target.get_size()
        return w / self.pixel_ratio, h / self.pixel_ratio

    def set_global_alpha(self, alpha: float) -> None:
        self._alpha = max(0.0, min(1.0, alpha))

    def _px(self, v: float) -> int:
        return int(round(v * self.pixel_ratio))

    def _font(self, size: int) -> pygame.font.Font:
        px = self._px(size)
        font = self._fonts.get(px)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont('monospace', px)
            self._fonts[px] = font
        return font

    # ------------------------------------------------------------------
    def fill(self, color: Color) -> None:
        self.target.fill(color)

    def fill_vertical_gradient(self, stops: Sequence[Tuple[float, Color]]) -> None:
        """stops: (offset from the top 0..1, colour), ascending offsets."""
        W, H = self.target.get_size()
        key = (W, H, tuple(stops))
        if key != self._gradient_key:
            strip = pygame.Surface((1, H))
            for y in range(H):
                f = y / max(1, H - 1)
                strip.set_at((0, y), _gradient_color(stops, f))
            self._gradient = pygame.transform.scale(strip, (W, H))
            self._gradient_key = key
        self.target.blit(self._gradient, (0, 0))

    def fill_circle(self, center: Point, radius: float, color: Color,
                    alpha: float = 1.0, glow: float = 0.0) -> None:
        a = alpha * self._alpha
        if a <= 0.0:
            return
        x, y = self._px(center[0]), self._px(center[1])
        r = radius * self.pixel_ratio
        reach = int(r + glow * self.pixel_ratio) + 1
        W, H = self.target.get_size()
        if x + reach < 0 or y + reach < 0 or x - reach > W or y - reach > H:
            return

        if glow > 0.0:
            # Cheap halo: a few concentric translucent discs
            g = glow * self.pixel_ratio
            for i in range(self.GLOW_LAYERS, 0, -1):
                gr = int(r + g * i / self.GLOW_LAYERS)
                pygame.gfxdraw.filled_circle(self.target, x, y, gr,
                                             (*color, _a8(a * 0.12)))

        if r < 1.0:
            pygame.gfxdraw.pixel(self.target, x, y, (*color, _a8(a * max(r, 0.5))))
        else:
            ri = int(round(r))
            pygame.gfxdraw.filled_circle(self.target, x, y, ri, (*color, _a8(a)))
            pygame.gfxdraw.aacircle(self.target, x, y, ri, (*color, _a8(a)))

    def stroke_circle(self, center: Point, radius: float, color: Color,
                      width: int = 1) -> None:
        if self._alpha <= 0.0:
            return
        x, y = self._px(center[0]), self._px(center[1])
        r = self._px(radius)
        rgba = (*color, _a8(self._alpha))
        for i in range(max(1, self._px(width))):
            pygame.gfxdraw.aacircle(self.target, x, y, r - i, rgba)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        if self._alpha <= 0.0:
            return
        rect = pygame.Rect(self._px(x), self._px(y), max(1, self._px(w)), max(1, self._px(h)))
        pygame.gfxdraw.box(self.target, rect, (*color, _a8(self._alpha)))

    def line(self, start: Point, end: Point, color: Color, width: int = 1) -> None:
        if self._alpha <= 0.0:
            return
        x1, y1 = self._px(start[0]), self._px(start[1])
        x2, y2 = self._px(end[0]), self._px(end[1])
        rgba = (*color, _a8(self._alpha))
        vertical = abs(x2 - x1) < abs(y2 - y1)
        for i in range(max(1, self._px(width))):
            if vertical:
                pygame.gfxdraw.line(self.target, x1 + i, y1, x2 + i, y2, rgba)
            else:
                pygame.gfxdraw.line(self.target, x1, y1 + i, x2, y2 + i, rgba)

    def text(self, pos: Point, text: str, color: Color, size: int = 12,
             align: str = 'left') -> None:
        """pos is the left/centre/right end of the text baseline."""
        if self._alpha <= 0.0:
            return
        font = self._font(size)
        rendered = font.render(text, True, color)
        rendered.set_alpha(_a8(self._alpha))
        x, y = self._px(pos[0]), self._px(pos[1]) - font.get_ascent()
        if align == 'center':
            x -= rendered.get_width() // 2
        elif align == 'right':
            x -= rendered.get_width()
        self.target.blit(rendered, (x, y))

    def close(self) -> None:
        self._fonts.clear()
        self._gradient = None
        self._gradient_key = None


def _gradient_color(stops: Sequence[Tuple[float, Color]], f: float) -> Color:
    if f <= stops[0][0]:
        return stops[0][1]
    for (f0, c0), (f1, c1) in zip(stops, stops[1:]):
        if f <= f1:
            t = (f - f0) / max(1e-9, f1 - f0)
            return (int(c0[0] + (c1[0] - c0[0]) * t),
                    int(c0[1] + (c1[1] - c0[1]) * t),
                    int(c0[2] + (c1[2] - c0[2]) * t))
    return stops[-1][1]
