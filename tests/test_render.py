import pygame
import pytest

from neon_shooter.engine import SimulationEngine
from neon_shooter.render import PygameRenderer
from neon_shooter.sinks import DrawRequest, InputSnapshot, RenderUnavailable, Shape

YELLOW = (255, 255, 0)


@pytest.fixture
def surface():
    return pygame.Surface((800, 600))


def test_bar_is_filled(surface):
    PygameRenderer(surface).draw(DrawRequest(Shape.BAR, 10, 10, 4, 12, YELLOW, glow=10))

    assert tuple(surface.get_at((11, 15)))[:3] == YELLOW


def test_outline_shapes_leave_the_middle_dark(surface):
    PygameRenderer(surface).draw(DrawRequest(Shape.SQUARE, 100, 100, 35, 35, (0, 255, 0)))

    assert tuple(surface.get_at((100, 110)))[:3] == (0, 255, 0)
    assert tuple(surface.get_at((117, 117)))[:3] == (0, 0, 0)


def test_marker_dot(surface):
    PygameRenderer(surface).draw(
        DrawRequest(Shape.TRIANGLE, 100, 100, 35, 35, (255, 170, 0), glow=15, marker=True)
    )

    assert tuple(surface.get_at((117, 117)))[:3] == (255, 170, 0)


def test_faded_spark_is_dimmer(surface):
    PygameRenderer(surface).draw(DrawRequest(Shape.SPARK, 50, 50, 3, 3, (255, 0, 0), alpha=0.5))

    r, g, b = tuple(surface.get_at((51, 51)))[:3]
    assert 0 < r < 255
    assert (g, b) == (0, 0)


@pytest.mark.parametrize("shape", list(Shape))
def test_every_shape_draws(surface, shape):
    PygameRenderer(surface).draw(DrawRequest(shape, 400, 300, 40, 40, (0, 255, 255), glow=10))


def test_trail_dims_the_previous_frame(surface):
    surface.fill((255, 255, 255))
    renderer = PygameRenderer(surface)

    renderer.begin_frame()
    dimmed = tuple(surface.get_at((0, 0)))[:3]
    renderer.begin_frame(trail=False)

    assert all(100 < c < 255 for c in dimmed)
    assert tuple(surface.get_at((0, 0)))[:3] == (5, 5, 5)


def test_missing_display_surface(monkeypatch):
    monkeypatch.setattr(pygame.display, "get_surface", lambda: None)
    renderer = PygameRenderer()

    with pytest.raises(RenderUnavailable):
        renderer.draw(DrawRequest(Shape.BAR, 0, 0, 4, 12, YELLOW))
    with pytest.raises(RenderUnavailable):
        renderer.begin_frame()


def test_engine_survives_a_missing_display(monkeypatch, machine, world, clock, rng, caplog):
    monkeypatch.setattr(pygame.display, "get_surface", lambda: None)
    engine = SimulationEngine(render=PygameRenderer(), clock=clock, rng=rng)

    assert engine.step(world, machine, InputSnapshot()) is True
    assert "Skipping frame render" in caplog.text
