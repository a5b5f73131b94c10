import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import random

import pytest

from neon_shooter.engine import SimulationEngine
from neon_shooter.state import GameStateMachine
from neon_shooter.waves import new_world


class FakeClock:
    """Millisecond clock the test moves by hand."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms


class FixedRandom(random.Random):
    """``random()`` always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class RecordingAudio:
    def __init__(self):
        self.events = []

    def play(self, event):
        self.events.append(event)


class RecordingRenderer:
    def __init__(self):
        self.requests = []

    def draw(self, request):
        self.requests.append(request)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def rng():
    # high enough that no enemy ever fires
    return FixedRandom(0.99)


@pytest.fixture
def machine(audio):
    return GameStateMachine(audio=audio)


@pytest.fixture
def engine(audio, renderer, clock, rng):
    return SimulationEngine(audio=audio, render=renderer, clock=clock, rng=rng)


@pytest.fixture
def world(machine, rng):
    w = new_world()
    machine.start(w, rng)
    return w
