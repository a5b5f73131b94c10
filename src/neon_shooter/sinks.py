"""
Interfaces of the engine's collaborators: rendering, audio and input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from neon_shooter.constants import Color


class SoundEvent(str, Enum):
    SHOOT = "shoot"
    EXPLOSION = "explosion"
    GAMEOVER = "gameover"
    POWERUP = "powerup"


class Shape(str, Enum):
    SHIP = "ship"
    TRIANGLE = "triangle"
    CIRCLE = "circle"
    SQUARE = "square"
    BAR = "bar"
    HEART = "heart"
    SPARK = "spark"


@dataclass(frozen=True)
class DrawRequest:
    """
    One visible entity, as the engine wants it drawn.
    """

    shape: Shape
    x: float
    y: float
    width: float
    height: float
    color: Color
    glow: float = 0.0
    alpha: float = 1.0
    marker: bool = False  # filled dot in the middle (power-up carriers)


@dataclass(frozen=True)
class InputSnapshot:
    """
    Point-in-time controls. Level triggered: a held key stays True.
    """

    left: bool = False
    right: bool = False
    shoot: bool = False


class RenderUnavailable(RuntimeError):
    """The drawing surface is gone; the frame cannot be rendered."""


class RenderSink(Protocol):
    def draw(self, request: DrawRequest) -> None: ...


class AudioSink(Protocol):
    def play(self, event: SoundEvent) -> None: ...


class InputSource(Protocol):
    def snapshot(self) -> InputSnapshot: ...


class NullAudio:
    """Audio sink that drops every event."""

    def play(self, event: SoundEvent) -> None:
        return None


class NullRenderer:
    """Render sink that draws nothing."""

    def draw(self, request: DrawRequest) -> None:
        return None
