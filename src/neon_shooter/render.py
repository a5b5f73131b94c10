"""
Pygame render sink: neon outlines with a soft halo.
"""

from __future__ import annotations

from typing import Callable

import pygame

from neon_shooter.constants import COLOR_BACKGROUND, Color
from neon_shooter.sinks import DrawRequest, RenderUnavailable, Shape

LINE_WIDTH = 2
GLOW_ALPHA = 70
TRAIL_ALPHA = 102  # 0.4 of the previous frame is painted over


def _ship(target: pygame.Surface, x, y, w, h, color, width: int):
    pygame.draw.rect(target, color, pygame.Rect(x, y, w, h), width or LINE_WIDTH)
    # swept-back wings
    pygame.draw.line(target, color, (x, y + h), (x - 10, y + h + 10), width or LINE_WIDTH)
    pygame.draw.line(
        target, color, (x + w, y + h), (x + w + 10, y + h + 10), width or LINE_WIDTH
    )


def _triangle(target: pygame.Surface, x, y, w, h, color, width: int):
    pygame.draw.polygon(target, color, [(x, y), (x + w, y), (x + w / 2, y + h)], width)


def _circle(target: pygame.Surface, x, y, w, h, color, width: int):
    pygame.draw.circle(target, color, (x + w / 2, y + h / 2), w / 2, width)


def _square(target: pygame.Surface, x, y, w, h, color, width: int):
    pygame.draw.rect(target, color, pygame.Rect(x, y, w, h), width)


def _bar(target: pygame.Surface, x, y, w, h, color, width: int):
    pygame.draw.rect(target, color, pygame.Rect(x, y, w, h))


def _heart(target: pygame.Surface, x, y, w, h, color, width: int):
    r = w / 4
    pygame.draw.circle(target, color, (x + r, y + r + 1), r)
    pygame.draw.circle(target, color, (x + 3 * r, y + r + 1), r)
    pygame.draw.polygon(
        target, color, [(x, y + r + 2), (x + w, y + r + 2), (x + w / 2, y + h)]
    )


def _spark(target: pygame.Surface, x, y, w, h, color, width: int):
    pygame.draw.rect(target, color, pygame.Rect(x, y, w, h))


ShapeDrawer = Callable[..., None]

SHAPES: dict[Shape, ShapeDrawer] = {
    Shape.SHIP: _ship,
    Shape.TRIANGLE: _triangle,
    Shape.CIRCLE: _circle,
    Shape.SQUARE: _square,
    Shape.BAR: _bar,
    Shape.HEART: _heart,
    Shape.SPARK: _spark,
}

# outline shapes are stroked, the rest are filled
OUTLINED = {Shape.SHIP, Shape.TRIANGLE, Shape.CIRCLE, Shape.SQUARE}


class PygameRenderer:
    """
    Render sink drawing onto a pygame surface (the display by default).
    """

    def __init__(self, surface: pygame.Surface | None = None):
        """
        :param surface: Target surface; ``None`` draws onto the display
        :type surface: pygame.Surface | None
        """
        self._surface = surface

    @property
    def surface(self) -> pygame.Surface:
        """
        :raise RenderUnavailable: If there is nothing to draw on
        """
        surface = self._surface
        if surface is None:
            surface = pygame.display.get_surface()
        if surface is None:
            raise RenderUnavailable("no display surface")
        return surface

    def begin_frame(self, trail: bool = True):
        """
        Dim the previous frame instead of wiping it, leaving short trails.
        """
        surface = self.surface
        try:
            if not trail:
                surface.fill(COLOR_BACKGROUND)
                return
            veil = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            veil.fill((*COLOR_BACKGROUND, TRAIL_ALPHA))
            surface.blit(veil, (0, 0))
        except pygame.error as e:
            raise RenderUnavailable(str(e)) from e

    def draw(self, request: DrawRequest):
        surface = self.surface
        try:
            if request.glow > 0:
                self._draw_glow(surface, request)
            self._draw_body(surface, request)
        except pygame.error as e:
            raise RenderUnavailable(str(e)) from e

    def _draw_body(self, surface: pygame.Surface, request: DrawRequest):
        drawer = SHAPES[request.shape]
        width = LINE_WIDTH if request.shape in OUTLINED else 0
        x, y, w, h = request.x, request.y, request.width, request.height

        if request.alpha < 1.0:
            layer = pygame.Surface((max(1, int(w)), max(1, int(h))), pygame.SRCALPHA)
            drawer(layer, 0, 0, w, h, _rgba(request.color, request.alpha), width)
            surface.blit(layer, (int(x), int(y)))
        else:
            drawer(surface, x, y, w, h, request.color, width)

        if request.marker:
            pygame.draw.circle(surface, request.color, (x + w / 2, y + h / 2), 4)

    def _draw_glow(self, surface: pygame.Surface, request: DrawRequest):
        pad = int(request.glow) + 12  # room for the ship's wings
        w, h = request.width, request.height
        layer = pygame.Surface((int(w) + 2 * pad, int(h) + 2 * pad), pygame.SRCALPHA)
        halo_width = LINE_WIDTH + int(request.glow // 2)
        SHAPES[request.shape](
            layer,
            pad,
            pad,
            w,
            h,
            _rgba(request.color, GLOW_ALPHA / 255 * request.alpha),
            halo_width if request.shape in OUTLINED else 0,
        )
        if request.shape not in OUTLINED:
            layer = pygame.transform.smoothscale(
                layer,
                (layer.get_width() + halo_width, layer.get_height() + halo_width),
            )
            pad += halo_width // 2
        surface.blit(layer, (int(request.x) - pad, int(request.y) - pad))


def _rgba(color: Color, alpha: float) -> tuple[int, int, int, int]:
    return (*color, int(255 * max(0.0, min(1.0, alpha))))
