"""
Procedural sound effects played through pygame's mixer.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Literal

import pygame

from neon_shooter.settings import AudioSettings
from neon_shooter.sinks import SoundEvent
from neon_shooter.utils import logger

Waveform = Literal["sine", "square", "sawtooth", "triangle"]
Ramp = Literal["exponential", "linear"]


@dataclass(frozen=True)
class ToneSpec:
    """
    A single oscillator sweep with a gain envelope.
    """

    waveform: Waveform
    freq_start: float
    freq_end: float
    duration: float  # seconds
    gain_start: float
    gain_end: float
    ramp: Ramp = "exponential"


TONES: dict[SoundEvent, ToneSpec] = {
    SoundEvent.SHOOT: ToneSpec("square", 800, 100, 0.1, 0.05, 0.001),
    SoundEvent.EXPLOSION: ToneSpec("sawtooth", 200, 10, 0.3, 0.1, 0.001),
    SoundEvent.GAMEOVER: ToneSpec("triangle", 300, 50, 1.5, 0.1, 0.0, ramp="linear"),
    SoundEvent.POWERUP: ToneSpec("sine", 400, 1200, 0.3, 0.1, 0.001),
}


def _ramp(start: float, end: float, t: float, kind: Ramp) -> float:
    # t in [0, 1]
    if kind == "linear" or start <= 0 or end <= 0:
        return start + (end - start) * t
    return start * (end / start) ** t


def _oscillator(waveform: Waveform, phase: float) -> float:
    frac = (phase / (2 * math.pi)) % 1.0
    if waveform == "sine":
        return math.sin(phase)
    if waveform == "square":
        return 1.0 if frac < 0.5 else -1.0
    if waveform == "sawtooth":
        return 2.0 * frac - 1.0
    if waveform == "triangle":
        return 4.0 * abs(frac - 0.5) - 1.0
    raise ValueError(f"Unknown waveform: {waveform}")


def synthesize(tone: ToneSpec, sample_rate: int, channels: int = 1) -> bytes:
    """
    Render a tone as signed 16-bit little-endian PCM.

    :param tone: What to play
    :type tone: ToneSpec

    :param sample_rate: Samples per second
    :type sample_rate: int

    :param channels: Interleaved copies of each sample
    :type channels: int

    :return: Raw PCM bytes
    :rtype: bytes
    """
    n = max(1, int(sample_rate * tone.duration))
    buf = bytearray()
    phase = 0.0
    for i in range(n):
        t = i / n
        freq = _ramp(tone.freq_start, tone.freq_end, t, tone.ramp)
        gain = _ramp(tone.gain_start, tone.gain_end, t, tone.ramp)
        sample = _oscillator(tone.waveform, phase) * gain
        value = int(max(-1.0, min(1.0, sample)) * 32767)
        buf += struct.pack("<h", value) * channels
        phase += 2 * math.pi * freq / sample_rate
    return bytes(buf)


class PygameAudio:
    """
    Audio sink backed by ``pygame.mixer``. Sound is best effort: if the
    mixer cannot start or a sound fails to play, the sink goes quiet.
    """

    def __init__(self, settings: AudioSettings | None = None):
        """
        :param settings: Audio section of the game settings
        :type settings: AudioSettings | None
        """
        self.settings = settings if settings is not None else AudioSettings()
        self.enabled = self.settings.enable
        self.sounds: dict[SoundEvent, pygame.mixer.Sound] = {}
        if self.enabled:
            self._init_mixer()

    def _init_mixer(self):
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.pre_init(
                    frequency=self.settings.sample_rate,
                    size=-16,
                    channels=1,
                    buffer=512,
                )
                pygame.mixer.init()
            rate, _, channels = pygame.mixer.get_init()
            for event, tone in TONES.items():
                sound = pygame.mixer.Sound(buffer=synthesize(tone, rate, channels))
                sound.set_volume(self.settings.volume)
                self.sounds[event] = sound
        except (pygame.error, ValueError) as e:
            logger.debug(f"Audio disabled: {e}")
            self.enabled = False
            self.sounds = {}

    def play(self, event: SoundEvent):
        if not self.enabled:
            return
        sound = self.sounds.get(event)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.debug(f"Could not play {event.value}: {e}")
