"""
Pygame host for Neon Shooter: window, event loop, HUD and menus.
"""

from __future__ import annotations

import random
from typing import Any

import pygame

from neon_shooter.audio import PygameAudio
from neon_shooter.constants import (
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_PINK,
    COLOR_RED,
    COLOR_WHITE,
    COLOR_YELLOW,
    VIEWPORT_HEIGHT,
    VIEWPORT_WIDTH,
)
from neon_shooter.controls import PygameInput
from neon_shooter.engine import SimulationEngine
from neon_shooter.render import PygameRenderer
from neon_shooter.settings import GameSettings
from neon_shooter.sinks import RenderUnavailable
from neon_shooter.state import GameState, GameStateMachine
from neon_shooter.utils import configure_logging, logger, set_screen
from neon_shooter.waves import new_world

# NOTE: dict based so it can later come from a file or CLI arguments.
DEFAULT_SETTINGS: dict[str, Any] = {
    "window": {"width": 800, "height": 600, "title": "Neon Space Shooter"},
    "audio": {"enable": True, "volume": 1.0},
    "fps": 60,
    "log_level": "INFO",
}


class ShooterApp:  # pylint: disable=too-many-instance-attributes
    """
    Neon Shooter application
    """

    def __init__(self, settings: GameSettings | None = None):
        """
        :param settings: Host settings; ``DEFAULT_SETTINGS`` when omitted
        :type settings: GameSettings | None
        """
        self.settings = settings or GameSettings.from_dict(DEFAULT_SETTINGS)
        logger.debug(f"Initializing {self.settings.window.title}")
        pygame.init()

        self._carry_on = True
        self._clock = pygame.time.Clock()
        self._screen = set_screen(
            self.settings.window.title,
            self.settings.window.width,
            self.settings.window.height,
        )
        # the game always runs on the logical viewport; the window only scales it
        self._canvas = pygame.Surface((VIEWPORT_WIDTH, VIEWPORT_HEIGHT), 0, 32)
        self._font = pygame.font.Font(None, 28)
        self._big_font = pygame.font.Font(None, 72)

        self.rng = random.Random()
        self.audio = PygameAudio(self.settings.audio)
        self.renderer = PygameRenderer(self._canvas)
        self.controls = PygameInput()
        self.machine = GameStateMachine(audio=self.audio)
        self.engine = SimulationEngine(
            audio=self.audio, render=self.renderer, rng=self.rng
        )
        self.world = new_world()

    def handle_events(self):
        """
        Handle the events
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.debug("Quitting the game")
                self._carry_on = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._carry_on = False
                elif event.key == pygame.K_RETURN and self.machine.can_start:
                    self.machine.start(self.world, self.rng)
                elif event.key == pygame.K_p:
                    self.machine.toggle_pause()

    def handle_game_logic(self):
        """
        Advance the simulation (it draws the entities as it goes).
        """
        try:
            self.renderer.begin_frame(trail=self.machine.is_running)
        except RenderUnavailable as e:
            logger.warning(f"Skipping frame render: {e}")
            return

        if self.machine.is_running:
            self.engine.step(self.world, self.machine, self.controls.snapshot())
        elif self.machine.state is not GameState.START:
            # frozen frame under the pause / game over overlays
            self.engine.draw(self.world)

    def draw_stuff(self):
        """
        Draw HUD and overlays
        """
        self._blit_text(
            f"SCORE: {self.world.score:06d}", COLOR_YELLOW, (16, 12), self._font
        )
        lives = f"LIVES: {'<3 ' * max(0, self.world.lives)}".rstrip()
        lives_img = self._font.render(lives, True, COLOR_GREEN)
        self._canvas.blit(lives_img, (VIEWPORT_WIDTH - lives_img.get_width() - 16, 12))

        state = self.machine.state
        if state is GameState.START:
            self._overlay("NEON SPACE SHOOTER", COLOR_PINK, "ENTER to play")
        elif state is GameState.PAUSED:
            self._overlay("PAUSED", COLOR_BLUE, "P to resume")
        elif state is GameState.GAMEOVER:
            self._overlay(
                "GAME OVER", COLOR_RED, f"SCORE {self.world.score}  -  ENTER to retry"
            )

        self.present()

    def _overlay(self, title: str, color, hint: str):
        w, h = VIEWPORT_WIDTH, VIEWPORT_HEIGHT
        veil = pygame.Surface((w, h), pygame.SRCALPHA)
        veil.fill((0, 0, 0, 170))
        self._canvas.blit(veil, (0, 0))
        title_img = self._big_font.render(title, True, color)
        hint_img = self._font.render(hint, True, COLOR_WHITE)
        self._canvas.blit(title_img, title_img.get_rect(center=(w / 2, h / 2 - 30)))
        self._canvas.blit(hint_img, hint_img.get_rect(center=(w / 2, h / 2 + 30)))

    def _blit_text(self, text: str, color, pos, font: pygame.font.Font):
        self._canvas.blit(font.render(text, True, color), pos)

    def present(self):
        """
        Copy the canvas onto the window, scaled to the window size.
        """
        if self._screen.get_size() == self._canvas.get_size():
            self._screen.blit(self._canvas, (0, 0))
        else:
            scaled = pygame.transform.smoothscale(self._canvas, self._screen.get_size())
            self._screen.blit(scaled, (0, 0))
        pygame.display.flip()

    def run(self):
        """
        Run the game
        """
        logger.info("Starting Neon Shooter...")
        logger.info(self.settings.to_dict())

        while self._carry_on:
            self._clock.tick(self.settings.fps)
            self.handle_events()
            self.handle_game_logic()
            self.draw_stuff()

        pygame.quit()


def run(settings: dict[str, Any] | None = None):
    """
    Main entry point for Neon Shooter.

    - Builds the settings from ``DEFAULT_SETTINGS`` overlaid with ``settings``.
    - Configures logging at the requested level.
    - Opens the window and runs the game on the START screen.
    """
    data = {**DEFAULT_SETTINGS, **(settings or {})}
    game_settings = GameSettings.from_dict(data)
    configure_logging(game_settings.log_level)
    ShooterApp(game_settings).run()


if __name__ == "__main__":
    run()
