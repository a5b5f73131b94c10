"""
Per-frame systems. Each one does one job on the world; the pipeline runs
them by ``order``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Protocol

from neon_shooter.constants import (
    COLOR_GREEN,
    COLOR_RED,
    COLOR_YELLOW,
    ENEMY_BASE_SPEED,
    ENEMY_DROP_STEP,
    ENEMY_EDGE_LEFT,
    ENEMY_EDGE_RIGHT_MARGIN,
    ENEMY_FIRE_BASE,
    ENEMY_FIRE_PER_LEVEL,
    ENEMY_KILL_PARTICLES,
    ENEMY_SCORE_SPEEDUP,
    ENEMY_SHOT_OFFSET,
    ENEMY_SHOT_SPEED,
    MAX_LIVES,
    PARTICLE_DECAY,
    PARTICLE_MAX_SPEED,
    PLAYER_HIT_PARTICLES,
    PLAYER_SHOT_COOLDOWN_MS,
    PLAYER_SHOT_SPEED,
    POWERUP_DROP_OFFSET,
    POWERUP_FALL_SPEED,
    POWERUP_PARTICLES,
    PROJECTILE_CULL_MARGIN,
    WAVE_CLEAR_BONUS,
    Color,
)
from neon_shooter.entities import (
    Enemy,
    EntityKind,
    Particle,
    Player,
    Powerup,
    Projectile,
)
from neon_shooter.sinks import (
    AudioSink,
    DrawRequest,
    InputSnapshot,
    Shape,
    SoundEvent,
)
from neon_shooter.state import GameStateMachine
from neon_shooter.utils import clamp, logger
from neon_shooter.waves import next_wave
from neon_shooter.world import ShooterWorld


@dataclass
class TickContext:
    """
    Everything a system may touch during one frame.
    """

    world: ShooterWorld
    intent: InputSnapshot
    now_ms: float
    rng: random.Random
    audio: AudioSink
    machine: GameStateMachine
    draw_ops: list[DrawRequest] = field(default_factory=list)

    def play(self, event: SoundEvent):
        self.audio.play(event)

    def spawn_particles(self, count: int, x: float, y: float, color: Color):
        for _ in range(count):
            self.world.particles.append(
                Particle(
                    x=x,
                    y=y,
                    vx=self.rng.uniform(-PARTICLE_MAX_SPEED, PARTICLE_MAX_SPEED),
                    vy=self.rng.uniform(-PARTICLE_MAX_SPEED, PARTICLE_MAX_SPEED),
                    color=color,
                )
            )


class System(Protocol):
    name: str
    order: int

    def step(self, ctx: TickContext) -> None: ...


@dataclass
class SystemPipeline:
    """
    Runs systems sorted by ``order``; ties keep insertion order.
    """

    systems: list[System] = field(default_factory=list)

    def add(self, *systems: System) -> SystemPipeline:
        self.systems.extend(systems)
        self.systems.sort(key=lambda s: s.order)
        return self

    def step(self, ctx: TickContext):
        for system in self.systems:
            system.step(ctx)


@dataclass
class PlayerSystem:
    """
    Move the ship from input and fire a pair of shots off the cooldown.
    """

    name: str = "player"
    order: int = 20

    cooldown_ms: float = PLAYER_SHOT_COOLDOWN_MS

    def step(self, ctx: TickContext):
        w = ctx.world
        ship = w.player
        it = ctx.intent

        if it.left:
            ship.x -= ship.speed
        if it.right:
            ship.x += ship.speed
        ship.x = clamp(ship.x, 0.0, w.width - ship.width)

        if not it.shoot:
            return
        if (
            ship.last_shot_ms is not None
            and ctx.now_ms - ship.last_shot_ms < self.cooldown_ms
        ):
            return

        # one shot from each wingtip
        for bx in (ship.x, ship.x + ship.width):
            w.projectiles.append(
                Projectile(
                    x=bx,
                    y=ship.y,
                    speed=PLAYER_SHOT_SPEED,
                    owner_is_player=True,
                    color=COLOR_YELLOW,
                )
            )
        ship.last_shot_ms = ctx.now_ms
        ctx.play(SoundEvent.SHOOT)


@dataclass
class EnemySystem:
    """
    March the formation, roll each enemy's shot, and end the game when
    anyone reaches the player's row.
    """

    name: str = "enemies"
    order: int = 30

    def step(self, ctx: TickContext):
        w = ctx.world
        if not w.enemies:
            return

        # faster as the score grows
        dx = (ENEMY_BASE_SPEED + w.score * ENEMY_SCORE_SPEEDUP) * w.enemy_direction
        # per enemy, regardless of how many are left
        fire_chance = ENEMY_FIRE_BASE + w.level * ENEMY_FIRE_PER_LEVEL

        for e in w.enemies:
            e.x += dx

            if ctx.rng.random() < fire_chance:
                w.projectiles.append(
                    Projectile(
                        x=e.x + ENEMY_SHOT_OFFSET[0],
                        y=e.y + ENEMY_SHOT_OFFSET[1],
                        speed=ENEMY_SHOT_SPEED,
                        owner_is_player=False,
                        color=COLOR_RED,
                    )
                )

            if e.y + e.height >= w.player.y:
                w.lives = 0
                if ctx.machine.game_over():
                    logger.debug(f"Enemy reached the player row at y={e.y}")


@dataclass
class FormationEdgeSystem:
    """
    If any enemy touched a side margin, reverse the formation once and drop
    every enemy a row.
    """

    name: str = "formation_edge"
    order: int = 32

    drop_step: float = ENEMY_DROP_STEP

    def step(self, ctx: TickContext):
        w = ctx.world
        right_edge = w.width - ENEMY_EDGE_RIGHT_MARGIN
        hit_edge = any(
            e.x <= ENEMY_EDGE_LEFT or e.x >= right_edge for e in w.enemies
        )
        if not hit_edge:
            return

        w.enemy_direction *= -1
        for e in w.enemies:
            e.y += self.drop_step


@dataclass
class WaveSystem:
    """Start the next wave once the current one is wiped out."""

    name: str = "wave"
    order: int = 34

    def step(self, ctx: TickContext):
        w = ctx.world
        if w.enemies:
            return

        w.level += 1
        w.score += WAVE_CLEAR_BONUS
        next_wave(w, ctx.rng)
        logger.info(f"Wave cleared, now on level {w.level}")


@dataclass
class ProjectileMoveSystem:
    """Move projectiles and flag the ones that left the screen vertically."""

    name: str = "projectile_move"
    order: int = 40

    margin: float = PROJECTILE_CULL_MARGIN

    def step(self, ctx: TickContext):
        vh = ctx.world.height
        for p in ctx.world.projectiles:
            p.y += p.speed
            if p.y < -self.margin or p.y > vh + self.margin:
                p.marked_for_deletion = True


@dataclass
class PlayerShotCollisionSystem:
    """
    Player shots against enemies. A shot stops at the first enemy it hits.
    """

    name: str = "player_shot_collision"
    order: int = 45

    def step(self, ctx: TickContext):
        w = ctx.world
        if not w.enemies:
            return

        for p in w.projectiles:
            if not p.owner_is_player or p.marked_for_deletion:
                continue

            for e in w.enemies:
                if e.marked_for_deletion:
                    continue  # already hit this frame

                if p.collider.intersects(e.collider):
                    p.marked_for_deletion = True
                    e.marked_for_deletion = True
                    w.score += e.points
                    ctx.play(SoundEvent.EXPLOSION)
                    if e.has_powerup:
                        w.powerups.append(
                            Powerup(
                                x=e.x + POWERUP_DROP_OFFSET,
                                y=e.y + POWERUP_DROP_OFFSET,
                            )
                        )
                    ctx.spawn_particles(ENEMY_KILL_PARTICLES, e.x, e.y, e.color)
                    logger.debug(f"Kind {e.kind} enemy destroyed, score {w.score}")
                    break


@dataclass
class EnemyShotCollisionSystem:
    """Enemy shots against the player."""

    name: str = "enemy_shot_collision"
    order: int = 46

    def step(self, ctx: TickContext):
        w = ctx.world
        ship = w.player

        for p in w.projectiles:
            if p.owner_is_player or p.marked_for_deletion:
                continue
            if not p.collider.intersects(ship.collider):
                continue

            p.marked_for_deletion = True
            if w.lives <= 0:
                continue  # already lost this frame

            w.lives -= 1
            ctx.play(SoundEvent.EXPLOSION)
            ctx.spawn_particles(PLAYER_HIT_PARTICLES, ship.x, ship.y, ship.color)
            logger.debug(f"Player hit, {w.lives} lives left")

            if w.lives <= 0:
                ctx.machine.game_over()


@dataclass
class PowerupSystem:
    """Drop power-ups and hand out a life when the player catches one."""

    name: str = "powerups"
    order: int = 50

    fall_speed: float = POWERUP_FALL_SPEED
    max_lives: int = MAX_LIVES

    def step(self, ctx: TickContext):
        w = ctx.world
        ship = w.player

        for p in w.powerups:
            p.y += self.fall_speed
            if p.y > w.height:
                p.marked_for_deletion = True
                continue

            if p.collider.intersects(ship.collider):
                p.marked_for_deletion = True
                if w.lives <= 0:
                    continue  # run already lost this frame

                w.lives = min(w.lives + 1, self.max_lives)
                ctx.play(SoundEvent.POWERUP)
                ctx.spawn_particles(POWERUP_PARTICLES, ship.x, ship.y, COLOR_GREEN)


@dataclass
class ParticleSystem:
    name: str = "particles"
    order: int = 60

    decay: float = PARTICLE_DECAY

    def step(self, ctx: TickContext):
        for p in ctx.world.particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= self.decay
            if p.life <= 0:
                p.marked_for_deletion = True


@dataclass
class SweepSystem:
    """
    Drop every entity flagged this frame. Runs after all collision checks.
    """

    name: str = "sweep"
    order: int = 90

    def step(self, ctx: TickContext):
        w = ctx.world
        w.enemies = [e for e in w.enemies if not e.marked_for_deletion]
        w.projectiles = [p for p in w.projectiles if not p.marked_for_deletion]
        w.powerups = [p for p in w.powerups if not p.marked_for_deletion]
        w.particles = [p for p in w.particles if not p.marked_for_deletion]


ENEMY_SHAPES: dict[int, Shape] = {
    1: Shape.TRIANGLE,
    2: Shape.CIRCLE,
    3: Shape.SQUARE,
}


def _draw_player(p: Player) -> DrawRequest:
    return DrawRequest(Shape.SHIP, p.x, p.y, p.width, p.height, p.color, glow=10)


def _draw_enemy(e: Enemy) -> DrawRequest:
    return DrawRequest(
        ENEMY_SHAPES[e.kind],
        e.x,
        e.y,
        e.width,
        e.height,
        e.color,
        glow=15 if e.has_powerup else 5,
        marker=e.has_powerup,
    )


def _draw_projectile(p: Projectile) -> DrawRequest:
    return DrawRequest(Shape.BAR, p.x, p.y, p.width, p.height, p.color, glow=10)


def _draw_powerup(p: Powerup) -> DrawRequest:
    return DrawRequest(Shape.HEART, p.x, p.y, p.width, p.height, p.color, glow=10)


def _draw_particle(p: Particle) -> DrawRequest:
    return DrawRequest(
        Shape.SPARK,
        p.x,
        p.y,
        p.width,
        p.height,
        p.color,
        alpha=max(0.0, p.life),
    )


DRAWERS: dict[EntityKind, Callable[..., DrawRequest]] = {
    EntityKind.PLAYER: _draw_player,
    EntityKind.ENEMY: _draw_enemy,
    EntityKind.PROJECTILE: _draw_projectile,
    EntityKind.POWERUP: _draw_powerup,
    EntityKind.PARTICLE: _draw_particle,
}


def draw_requests(world: ShooterWorld) -> list[DrawRequest]:
    """
    Draw requests for every entity: player, enemies, projectiles,
    powerups, particles. Later requests end up on top.
    """
    return [DRAWERS[ent.tag](ent) for ent in world.entities()]


@dataclass
class RenderSystem:
    """
    Collect the frame's draw requests.
    """

    name: str = "render"
    order: int = 100

    def step(self, ctx: TickContext):
        ctx.draw_ops = draw_requests(ctx.world)


def default_pipeline() -> SystemPipeline:
    return SystemPipeline().add(
        PlayerSystem(),
        EnemySystem(),
        FormationEdgeSystem(),
        WaveSystem(),
        ProjectileMoveSystem(),
        PlayerShotCollisionSystem(),
        EnemyShotCollisionSystem(),
        PowerupSystem(),
        ParticleSystem(),
        SweepSystem(),
        RenderSystem(),
    )
