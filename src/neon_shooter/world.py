"""
The mutable game world. The host owns it and hands it to the engine
every frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from neon_shooter.constants import STARTING_LIVES
from neon_shooter.entities import Enemy, Particle, Player, Powerup, Projectile


@dataclass
class ShooterWorld:
    """
    Neon Shooter World
    """

    viewport: tuple[float, float]
    player: Player
    enemies: list[Enemy] = field(default_factory=list)
    projectiles: list[Projectile] = field(default_factory=list)
    powerups: list[Powerup] = field(default_factory=list)
    particles: list[Particle] = field(default_factory=list)
    score: int = 0
    lives: int = STARTING_LIVES
    level: int = 1
    enemy_direction: int = 1  # 1 for right, -1 for left

    @property
    def width(self) -> float:
        return self.viewport[0]

    @property
    def height(self) -> float:
        return self.viewport[1]

    def entities(self):
        """Every entity, in draw order."""
        yield self.player
        yield from self.enemies
        yield from self.projectiles
        yield from self.powerups
        yield from self.particles
