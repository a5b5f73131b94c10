"""
Game lifecycle: which state the game is in and which transitions exist.
"""

from __future__ import annotations

import random
from enum import Enum

from neon_shooter.sinks import AudioSink, NullAudio, SoundEvent
from neon_shooter.utils import logger
from neon_shooter.waves import build_new_game
from neon_shooter.world import ShooterWorld


class GameState(str, Enum):
    START = "START"
    PLAYING = "PLAYING"
    GAMEOVER = "GAMEOVER"
    PAUSED = "PAUSED"


class StateTransitionError(RuntimeError):
    """Raised for a transition the lifecycle does not define."""

    def __init__(self, current: GameState, action: str):
        super().__init__(f"Cannot {action} while {current.value}")
        self.current = current
        self.action = action


class GameStateMachine:
    """
    START -> PLAYING -> GAMEOVER -> PLAYING ..., plus PLAYING <-> PAUSED.

    The simulation only runs while the state is PLAYING; every other state
    freezes it.
    """

    def __init__(self, audio: AudioSink | None = None):
        """
        :param audio: Sink for the game-over sound
        :type audio: AudioSink | None
        """
        self.state = GameState.START
        self._audio = audio if audio is not None else NullAudio()

    @property
    def is_running(self) -> bool:
        return self.state is GameState.PLAYING

    @property
    def can_start(self) -> bool:
        return self.state in (GameState.START, GameState.GAMEOVER)

    def _move_to(self, state: GameState):
        logger.debug(f"Game state {self.state.value} -> {state.value}")
        self.state = state

    def start(self, world: ShooterWorld, rng: random.Random) -> ShooterWorld:
        """
        Enter PLAYING from START or GAMEOVER.

        The world is rebuilt only when the last run ended (no lives left)
        or there is no wave yet; otherwise play resumes where it was.

        :param world: The world to play in
        :type world: ShooterWorld

        :param rng: Random source for the new wave
        :type rng: random.Random

        :raise StateTransitionError: If the game is already playing or paused
        """
        if not self.can_start:
            raise StateTransitionError(self.state, "start")

        if world.lives <= 0 or not world.enemies:
            build_new_game(world, rng)
        self._move_to(GameState.PLAYING)
        logger.info("Game started")
        return world

    def restart(self, world: ShooterWorld, rng: random.Random) -> ShooterWorld:
        """
        Enter PLAYING again after a game over.

        :raise StateTransitionError: If the game is not over
        """
        if self.state is not GameState.GAMEOVER:
            raise StateTransitionError(self.state, "restart")
        return self.start(world, rng)

    def game_over(self) -> bool:
        """
        Leave PLAYING for GAMEOVER and play the game-over sound.

        Calling it again once the game is over does nothing, so the sound
        plays exactly once per run.

        :return: True if this call performed the transition
        :rtype: bool

        :raise StateTransitionError: If the game never started or is paused
        """
        if self.state is GameState.GAMEOVER:
            return False
        if self.state is not GameState.PLAYING:
            raise StateTransitionError(self.state, "end the game")

        self._move_to(GameState.GAMEOVER)
        self._audio.play(SoundEvent.GAMEOVER)
        logger.info("Game over")
        return True

    def pause(self):
        """Freeze the simulation."""
        if self.state is not GameState.PLAYING:
            raise StateTransitionError(self.state, "pause")
        self._move_to(GameState.PAUSED)

    def resume(self):
        """Unfreeze the simulation. The world is left untouched."""
        if self.state is not GameState.PAUSED:
            raise StateTransitionError(self.state, "resume")
        self._move_to(GameState.PLAYING)

    def toggle_pause(self):
        if self.state is GameState.PAUSED:
            self.resume()
        elif self.state is GameState.PLAYING:
            self.pause()
