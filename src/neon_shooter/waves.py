"""
Player and enemy-wave construction.
"""

from __future__ import annotations

import random

from neon_shooter.constants import (
    ENEMY_COLS,
    ENEMY_PITCH,
    ENEMY_ROWS,
    ENEMY_TOP,
    PLAYER_BOTTOM_MARGIN,
    PLAYER_SIZE,
    STARTING_LIVES,
    VIEWPORT_HEIGHT,
    VIEWPORT_WIDTH,
)
from neon_shooter.entities import Enemy, Player
from neon_shooter.utils import logger
from neon_shooter.world import ShooterWorld


def make_player(viewport: tuple[float, float]) -> Player:
    """
    Player at the horizontal center, ``PLAYER_BOTTOM_MARGIN`` above the bottom.
    """
    vw, vh = viewport
    return Player(x=vw / 2 - PLAYER_SIZE[0] / 2, y=vh - PLAYER_BOTTOM_MARGIN)


def _kind_for_row(row: int) -> int:
    if row == 0:
        return 1
    if row == 1:
        return 2
    return 3


def build_wave(viewport_width: float, rng: random.Random) -> list[Enemy]:
    """
    Build a centered grid of enemies.

    One column of the top row, picked uniformly, carries the power-up drop.

    :param viewport_width: Width of the viewport
    :type viewport_width: float

    :param rng: Random source
    :type rng: random.Random

    :return: The new enemies, row by row
    :rtype: list[Enemy]
    """
    start_x = (viewport_width - ENEMY_COLS * ENEMY_PITCH) / 2
    powerup_col = rng.randrange(ENEMY_COLS)

    enemies: list[Enemy] = []
    for r in range(ENEMY_ROWS):
        for c in range(ENEMY_COLS):
            enemies.append(
                Enemy(
                    x=start_x + c * ENEMY_PITCH,
                    y=ENEMY_TOP + r * ENEMY_PITCH,
                    kind=_kind_for_row(r),
                    has_powerup=(r == 0 and c == powerup_col),
                )
            )

    logger.debug(
        f"Built wave of {len(enemies)} enemies, power-up in column {powerup_col}"
    )
    return enemies


def next_wave(world: ShooterWorld, rng: random.Random) -> None:
    """Replace the enemy set with a fresh wave. Score and lives persist."""
    world.enemies = build_wave(world.width, rng)
    world.enemy_direction = 1


def build_new_game(world: ShooterWorld, rng: random.Random) -> ShooterWorld:
    """
    Reset ``world`` in place for a new run.

    :param world: The world to reset
    :type world: ShooterWorld

    :param rng: Random source
    :type rng: random.Random

    :return: The same world
    :rtype: ShooterWorld
    """
    logger.debug("Setting up a new game")

    world.score = 0
    world.lives = STARTING_LIVES
    world.level = 1
    world.projectiles = []
    world.particles = []
    world.powerups = []
    world.player = make_player(world.viewport)
    next_wave(world, rng)
    return world


def new_world(
    viewport: tuple[float, float] = (VIEWPORT_WIDTH, VIEWPORT_HEIGHT),
) -> ShooterWorld:
    """
    A world with a player and no enemies yet. Starting the game fills it in.
    """
    return ShooterWorld(viewport=viewport, player=make_player(viewport))
