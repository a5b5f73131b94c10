"""
Constants for the game.
"""

from __future__ import annotations

FPS = 60
WINDOW_SIZE = (800, 600)
VIEWPORT_WIDTH, VIEWPORT_HEIGHT = WINDOW_SIZE

Color = tuple[int, int, int]

COLOR_BLUE: Color = (0, 255, 255)
COLOR_PINK: Color = (255, 0, 255)
COLOR_GREEN: Color = (0, 255, 0)
COLOR_RED: Color = (255, 0, 0)
COLOR_YELLOW: Color = (255, 255, 0)
COLOR_WHITE: Color = (255, 255, 255)
COLOR_ORANGE: Color = (255, 170, 0)
COLOR_BACKGROUND: Color = (5, 5, 5)

# player
PLAYER_SIZE = (40, 40)
PLAYER_SPEED = 8.0
PLAYER_BOTTOM_MARGIN = 60
PLAYER_SHOT_COOLDOWN_MS = 200.0
PLAYER_SHOT_SPEED = -12.0

# lives / score
STARTING_LIVES = 3
MAX_LIVES = 5
WAVE_CLEAR_BONUS = 1000

# enemies
ENEMY_SIZE = (35, 35)
ENEMY_ROWS = 4
ENEMY_COLS = 8
ENEMY_PITCH = 50
ENEMY_TOP = 50
ENEMY_BASE_SPEED = 1.5
ENEMY_SCORE_SPEEDUP = 0.001
ENEMY_EDGE_LEFT = 10
ENEMY_EDGE_RIGHT_MARGIN = 40
ENEMY_DROP_STEP = 20
ENEMY_FIRE_BASE = 0.001
ENEMY_FIRE_PER_LEVEL = 0.0002
ENEMY_SHOT_SPEED = 5.0
ENEMY_SHOT_OFFSET = (15, 30)

# projectiles
PROJECTILE_SIZE = (4, 12)
PROJECTILE_CULL_MARGIN = 20

# powerups
POWERUP_SIZE = (20, 20)
POWERUP_FALL_SPEED = 3.0
POWERUP_DROP_OFFSET = 5

# particles
PARTICLE_SIZE = (3, 3)
PARTICLE_MAX_SPEED = 4.0
PARTICLE_DECAY = 0.04
ENEMY_KILL_PARTICLES = 5
PLAYER_HIT_PARTICLES = 10
POWERUP_PARTICLES = 8
