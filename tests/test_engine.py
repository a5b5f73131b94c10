import random

import pytest

from conftest import FixedRandom
from neon_shooter.constants import COLOR_BLUE, COLOR_GREEN, COLOR_ORANGE
from neon_shooter.engine import SimulationEngine
from neon_shooter.entities import Enemy, Particle, Powerup, Projectile
from neon_shooter.sinks import InputSnapshot, RenderUnavailable, Shape, SoundEvent
from neon_shooter.state import GameState, GameStateMachine
from neon_shooter.waves import new_world

IDLE = InputSnapshot()
FIRE = InputSnapshot(shoot=True)


def player_shot(x, y):
    return Projectile(x=x, y=y, speed=-12, owner_is_player=True, color=(255, 255, 0))


def enemy_shot(x, y):
    return Projectile(x=x, y=y, speed=5, owner_is_player=False, color=(255, 0, 0))


def all_entities(world):
    return [world.player, *world.enemies, *world.projectiles, *world.powerups, *world.particles]


# --- player ---------------------------------------------------------------


def test_player_moves_and_stays_on_screen(engine, machine, world):
    world.player.x = 4
    engine.step(world, machine, InputSnapshot(left=True))
    assert world.player.x == 0

    world.player.x = 756
    engine.step(world, machine, InputSnapshot(right=True))
    assert world.player.x == 760

    world.player.x = 300
    engine.step(world, machine, InputSnapshot(right=True))
    assert world.player.x == 308


def test_shot_pairs_leave_from_the_wingtips(engine, machine, world, audio):
    engine.step(world, machine, FIRE)

    shots = [p for p in world.projectiles if p.owner_is_player]
    assert sorted(p.x for p in shots) == [380, 420]
    # spawned at the ship's top, then moved this frame
    assert all(p.y == 540 - 12 for p in shots)
    assert audio.events == [SoundEvent.SHOOT]


def test_fire_cooldown(engine, machine, world, clock, audio):
    def player_shots():
        return sum(1 for p in world.projectiles if p.owner_is_player)

    engine.step(world, machine, FIRE)
    assert player_shots() == 2

    clock.advance(100)
    engine.step(world, machine, FIRE)
    clock.advance(99)
    engine.step(world, machine, FIRE)
    assert player_shots() == 2

    clock.advance(1)  # 200 ms after the first shot
    engine.step(world, machine, FIRE)
    assert player_shots() == 4
    assert audio.events.count(SoundEvent.SHOOT) == 2


def test_holding_fire_keeps_shooting(engine, machine, world, clock, audio):
    for _ in range(30):  # ~480 ms at 60 fps
        engine.step(world, machine, FIRE)
        clock.advance(16)

    assert audio.events.count(SoundEvent.SHOOT) == 3


# --- enemies ----------------------------------------------------------------


def test_enemy_speed_grows_with_score(engine, machine, world):
    world.enemies = [Enemy(x=300, y=100, kind=3)]
    world.score = 1000

    engine.step(world, machine, IDLE)

    assert world.enemies[0].x == pytest.approx(302.5)


def test_edge_bounce_flips_direction_and_steps_down(engine, machine, world):
    world.enemies = [Enemy(x=600, y=100, kind=3), Enemy(x=759, y=150, kind=2)]

    engine.step(world, machine, IDLE)

    assert world.enemy_direction == -1
    assert [e.y for e in world.enemies] == [120, 170]


def test_left_edge_bounce(engine, machine, world):
    world.enemy_direction = -1
    world.enemies = [Enemy(x=11, y=100, kind=1), Enemy(x=200, y=100, kind=1)]

    engine.step(world, machine, IDLE)

    assert world.enemy_direction == 1
    assert [e.y for e in world.enemies] == [120, 120]


def test_no_bounce_away_from_the_edges(engine, machine, world):
    ys = [e.y for e in world.enemies]

    engine.step(world, machine, IDLE)

    assert world.enemy_direction == 1
    assert [e.y for e in world.enemies] == ys


def test_every_enemy_may_fire(audio, renderer, clock, machine, world):
    engine = SimulationEngine(audio=audio, render=renderer, clock=clock, rng=FixedRandom(0.0))
    world.enemies = [Enemy(x=100, y=100, kind=3), Enemy(x=300, y=150, kind=1)]

    engine.step(world, machine, IDLE)

    shots = [p for p in world.projectiles if not p.owner_is_player]
    assert len(shots) == 2
    # spawned under the enemy, then moved 5px
    assert (shots[0].x, shots[0].y) == (101.5 + 15, 100 + 30 + 5)


@pytest.mark.parametrize("level, fires", [(1, False), (2, True)])
def test_enemy_fire_rate_scales_with_level(audio, renderer, clock, machine, world, level, fires):
    # level 1 -> 0.0012, level 2 -> 0.0014
    engine = SimulationEngine(audio=audio, render=renderer, clock=clock, rng=FixedRandom(0.0013))
    world.level = level
    world.enemies = [Enemy(x=100, y=100, kind=3)]

    engine.step(world, machine, IDLE)

    assert any(not p.owner_is_player for p in world.projectiles) is fires


def test_enemy_reaching_the_player_ends_the_game(engine, machine, world, audio):
    world.lives = 3
    world.enemies = [Enemy(x=100, y=505, kind=3), Enemy(x=300, y=510, kind=3)]

    engine.step(world, machine, IDLE)

    assert machine.state is GameState.GAMEOVER
    assert world.lives == 0
    assert audio.events.count(SoundEvent.GAMEOVER) == 1


# --- collisions -------------------------------------------------------------


def test_player_shot_destroys_enemy(engine, machine, world, audio):
    world.enemies = [Enemy(x=300, y=100, kind=2), Enemy(x=500, y=100, kind=3)]
    world.projectiles = [player_shot(310, 130)]

    engine.step(world, machine, IDLE)

    assert world.score == 30
    assert [e.x for e in world.enemies] == [501.5]
    assert world.projectiles == []
    assert audio.events == [SoundEvent.EXPLOSION]
    assert len(world.particles) == 5


def test_one_shot_kills_one_enemy(engine, machine, world):
    # two overlapping enemies, one shot
    world.enemies = [Enemy(x=300, y=100, kind=3), Enemy(x=305, y=100, kind=3)]
    world.projectiles = [player_shot(310, 130)]

    engine.step(world, machine, IDLE)

    assert len(world.enemies) == 1
    assert world.score == 10


def test_powerup_drop_and_pickup(engine, machine, world, audio):
    carrier = Enemy(x=100, y=100, kind=1, has_powerup=True)
    world.enemies = [carrier, Enemy(x=400, y=100, kind=3)]
    world.projectiles = [player_shot(110, 130)]

    engine.step(world, machine, IDLE)

    assert len(world.powerups) == 1
    drop = world.powerups[0]
    # dropped at the carrier's last position, then fell 3px this frame
    assert drop.x == pytest.approx(carrier.x + 5)
    assert drop.y == pytest.approx(carrier.y + 5 + 3)
    assert [p.color for p in world.particles] == [COLOR_ORANGE] * 5
    assert world.score == 50

    score = world.score
    audio.events.clear()
    world.particles = []
    drop.x, drop.y = world.player.x + 10, world.player.y - 10

    engine.step(world, machine, IDLE)

    assert world.powerups == []
    assert world.lives == 4
    assert world.score >= score
    assert audio.events == [SoundEvent.POWERUP]
    assert [p.color for p in world.particles] == [COLOR_GREEN] * 8


def test_powerup_lives_are_capped(engine, machine, world):
    world.lives = 5
    world.powerups = [Powerup(x=world.player.x, y=world.player.y - 10)]

    engine.step(world, machine, IDLE)

    assert world.lives == 5
    assert world.powerups == []


def test_powerup_falls_off_screen(engine, machine, world):
    world.powerups = [Powerup(x=10, y=598)]

    engine.step(world, machine, IDLE)

    assert world.powerups == []
    assert world.lives == 3


def test_enemy_shot_costs_a_life(engine, machine, world, audio):
    world.projectiles = [enemy_shot(world.player.x + 10, world.player.y - 5)]

    engine.step(world, machine, IDLE)

    assert world.lives == 2
    assert machine.state is GameState.PLAYING
    assert world.projectiles == []
    assert audio.events == [SoundEvent.EXPLOSION]
    assert [p.color for p in world.particles] == [COLOR_BLUE] * 10


def test_last_life_lost_ends_the_game_in_the_same_step(engine, machine, world, audio):
    world.lives = 1
    world.projectiles = [
        enemy_shot(world.player.x + 10, world.player.y - 5),
        enemy_shot(world.player.x + 20, world.player.y - 5),
    ]

    engine.step(world, machine, IDLE)

    assert world.lives == 0
    assert machine.state is GameState.GAMEOVER
    assert audio.events == [SoundEvent.EXPLOSION, SoundEvent.GAMEOVER]
    assert engine.step(world, machine, IDLE) is False


def test_no_powerup_life_after_the_last_life_is_lost(engine, machine, world, audio, rng):
    world.lives = 1
    world.score = 777
    world.projectiles = [enemy_shot(world.player.x + 10, world.player.y - 5)]
    world.powerups = [Powerup(x=world.player.x, y=world.player.y - 10)]

    engine.step(world, machine, IDLE)

    assert machine.state is GameState.GAMEOVER
    assert world.lives == 0
    assert world.powerups == []
    assert SoundEvent.POWERUP not in audio.events
    assert [p.color for p in world.particles] == [COLOR_BLUE] * 10

    machine.restart(world, rng)

    assert (world.score, world.lives, world.level) == (0, 3, 1)


def test_shots_leaving_the_screen_are_removed(engine, machine, world):
    world.projectiles = [player_shot(10, -15), enemy_shot(10, 617)]

    engine.step(world, machine, IDLE)

    assert world.projectiles == []


# --- waves ------------------------------------------------------------------


def test_clearing_a_wave_starts_the_next_one(engine, machine, world):
    world.enemies = [Enemy(x=300, y=100, kind=3)]
    world.projectiles = [player_shot(310, 130)]
    world.enemy_direction = -1

    engine.step(world, machine, IDLE)  # last enemy destroyed
    assert world.enemies == []
    score = world.score

    engine.step(world, machine, IDLE)

    assert len(world.enemies) == 32
    assert world.level == 2
    assert world.score == score + 1000
    assert world.enemy_direction == 1
    assert machine.state is GameState.PLAYING


# --- frame invariants -------------------------------------------------------


def test_long_run_invariants(audio, renderer, clock, machine, world):
    engine = SimulationEngine(audio=audio, render=renderer, clock=clock, rng=random.Random(7))
    moves = [InputSnapshot(left=True, shoot=True), InputSnapshot(right=True, shoot=True)]
    score = world.score

    for frame in range(600):
        if not engine.step(world, machine, moves[(frame // 40) % 2]):
            break
        clock.advance(16)

        assert not any(e.marked_for_deletion for e in all_entities(world))
        assert 0 <= world.lives <= 5
        assert world.score >= score
        score = world.score
        if world.lives == 0:
            assert machine.state is GameState.GAMEOVER


# --- drawing ----------------------------------------------------------------


def test_draw_order(engine, machine, world, renderer):
    world.enemies = [Enemy(x=300, y=100, kind=1)]
    world.projectiles = [enemy_shot(10, 300)]
    world.powerups = [Powerup(x=600, y=100)]
    world.particles = [Particle(x=50, y=50, vx=1, vy=1, color=(255, 0, 0))]

    engine.step(world, machine, IDLE)

    shapes = [r.shape for r in renderer.requests]
    assert shapes == [Shape.SHIP, Shape.TRIANGLE, Shape.BAR, Shape.HEART, Shape.SPARK]
    assert renderer.requests[-1].alpha == pytest.approx(0.96)


def test_powerup_carrier_glows_brighter(engine, machine, world, renderer):
    world.enemies = [Enemy(x=300, y=100, kind=1, has_powerup=True), Enemy(x=400, y=100, kind=2)]

    engine.step(world, machine, IDLE)

    carrier, plain = renderer.requests[1:3]
    assert (carrier.glow, carrier.marker) == (15, True)
    assert (plain.shape, plain.glow, plain.marker) == (Shape.CIRCLE, 5, False)


def test_missing_surface_skips_render_but_not_simulation(audio, clock, rng, machine, world):
    class GoneRenderer:
        def draw(self, request):
            raise RenderUnavailable("no surface")

    engine = SimulationEngine(audio=audio, render=GoneRenderer(), clock=clock, rng=rng)
    xs = [e.x for e in world.enemies]

    assert engine.step(world, machine, IDLE) is True
    assert [e.x for e in world.enemies] == [x + 1.5 for x in xs]


def test_nothing_runs_before_the_game_starts(engine, renderer):
    world = new_world()

    assert engine.step(world, GameStateMachine(), FIRE) is False
    assert world.projectiles == []
    assert renderer.requests == []
