"""
Neon Shooter entities
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from neon_shooter.constants import (
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_ORANGE,
    COLOR_PINK,
    COLOR_RED,
    ENEMY_SIZE,
    PARTICLE_SIZE,
    PLAYER_SIZE,
    PLAYER_SPEED,
    POWERUP_SIZE,
    PROJECTILE_SIZE,
    Color,
)
from neon_shooter.geometry import RectCollider


class EntityKind(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"
    PROJECTILE = "projectile"
    POWERUP = "powerup"
    PARTICLE = "particle"


# enemy kind -> (color, points); kind 1 is the top row
ENEMY_TABLE: dict[int, tuple[Color, int]] = {
    1: (COLOR_RED, 50),
    2: (COLOR_PINK, 30),
    3: (COLOR_GREEN, 10),
}


@dataclass
class Player:
    """
    Player ship
    """

    tag: ClassVar[EntityKind] = EntityKind.PLAYER

    x: float
    y: float
    width: float = PLAYER_SIZE[0]
    height: float = PLAYER_SIZE[1]
    color: Color = COLOR_BLUE
    speed: float = PLAYER_SPEED
    last_shot_ms: float | None = None  # None until the first shot
    marked_for_deletion: bool = False

    @property
    def collider(self) -> RectCollider:
        return RectCollider.of(self)


@dataclass
class Projectile:
    """
    Projectile entity; the sign of ``speed`` is the travel direction
    (negative goes up).
    """

    tag: ClassVar[EntityKind] = EntityKind.PROJECTILE

    x: float
    y: float
    speed: float
    owner_is_player: bool
    color: Color
    width: float = PROJECTILE_SIZE[0]
    height: float = PROJECTILE_SIZE[1]
    marked_for_deletion: bool = False

    @property
    def collider(self) -> RectCollider:
        return RectCollider.of(self)


@dataclass
class Enemy:
    """
    Enemy entity
    """

    tag: ClassVar[EntityKind] = EntityKind.ENEMY

    x: float
    y: float
    kind: int
    has_powerup: bool = False
    width: float = ENEMY_SIZE[0]
    height: float = ENEMY_SIZE[1]
    color: Color = field(init=False)
    points: int = field(init=False)
    marked_for_deletion: bool = False

    def __post_init__(self):
        if self.kind not in ENEMY_TABLE:
            raise ValueError(f"Unknown enemy kind: {self.kind}")
        self.color, self.points = ENEMY_TABLE[self.kind]
        if self.has_powerup:
            self.color = COLOR_ORANGE

    @property
    def collider(self) -> RectCollider:
        return RectCollider.of(self)


@dataclass
class Powerup:
    """
    Life-restoring pickup
    """

    tag: ClassVar[EntityKind] = EntityKind.POWERUP

    x: float
    y: float
    width: float = POWERUP_SIZE[0]
    height: float = POWERUP_SIZE[1]
    color: Color = COLOR_GREEN
    marked_for_deletion: bool = False

    @property
    def collider(self) -> RectCollider:
        return RectCollider.of(self)


@dataclass
class Particle:
    """
    Cosmetic debris. ``life`` fades from 1 to 0.
    """

    tag: ClassVar[EntityKind] = EntityKind.PARTICLE

    x: float
    y: float
    vx: float
    vy: float
    color: Color
    life: float = 1.0
    width: float = PARTICLE_SIZE[0]
    height: float = PARTICLE_SIZE[1]
    marked_for_deletion: bool = False
