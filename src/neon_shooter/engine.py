"""
Simulation engine: advances a world by one frame.
"""

from __future__ import annotations

import random
from typing import Callable

from neon_shooter.sinks import (
    AudioSink,
    DrawRequest,
    InputSnapshot,
    NullAudio,
    NullRenderer,
    RenderSink,
    RenderUnavailable,
)
from neon_shooter.state import GameStateMachine
from neon_shooter.systems import (
    SystemPipeline,
    TickContext,
    default_pipeline,
    draw_requests,
)
from neon_shooter.utils import logger, monotonic_ms
from neon_shooter.world import ShooterWorld


class SimulationEngine:
    """
    Runs the system pipeline over a world the caller owns.

    The engine keeps no game state of its own: collaborators, the clock
    and the random source are injected, the world and the state machine
    are passed into every ``step``.
    """

    def __init__(
        self,
        audio: AudioSink | None = None,
        render: RenderSink | None = None,
        clock: Callable[[], float] = monotonic_ms,
        rng: random.Random | None = None,
        pipeline: SystemPipeline | None = None,
    ):  # pylint: disable=too-many-arguments,too-many-positional-arguments
        """
        :param audio: Sink for sound events
        :type audio: AudioSink | None

        :param render: Sink for draw requests
        :type render: RenderSink | None

        :param clock: Wall-clock milliseconds, read once per frame
        :type clock: Callable[[], float]

        :param rng: Random source for enemy fire and particles
        :type rng: random.Random | None

        :param pipeline: Systems to run; the full game by default
        :type pipeline: SystemPipeline | None
        """
        self.audio = audio if audio is not None else NullAudio()
        self.render = render if render is not None else NullRenderer()
        self.clock = clock
        self.rng = rng if rng is not None else random.Random()
        self.pipeline = pipeline if pipeline is not None else default_pipeline()

    def step(
        self,
        world: ShooterWorld,
        machine: GameStateMachine,
        intent: InputSnapshot,
    ) -> bool:
        """
        Advance ``world`` by one frame and draw it.

        Does nothing unless ``machine`` is PLAYING.

        :param world: The world to advance
        :type world: ShooterWorld

        :param machine: Lifecycle gate; may move to GAMEOVER during the step
        :type machine: GameStateMachine

        :param intent: Controls sampled for this frame
        :type intent: InputSnapshot

        :return: True if a frame was simulated
        :rtype: bool
        """
        if not machine.is_running:
            return False

        ctx = TickContext(
            world=world,
            intent=intent,
            now_ms=self.clock(),
            rng=self.rng,
            audio=self.audio,
            machine=machine,
        )
        self.pipeline.step(ctx)
        self.flush(ctx.draw_ops)
        return True

    def draw(self, world: ShooterWorld):
        """Draw ``world`` as it is, without advancing it."""
        self.flush(draw_requests(world))

    def flush(self, draw_ops: list[DrawRequest]):
        """
        Hand draw requests to the render sink. If the surface is gone the
        rest of the frame is skipped; the world is not touched either way.
        """
        try:
            for op in draw_ops:
                self.render.draw(op)
        except RenderUnavailable as e:
            logger.warning(f"Skipping frame render: {e}")
