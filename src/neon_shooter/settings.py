"""
Host settings, built from a plain dictionary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any

from neon_shooter.constants import FPS, WINDOW_SIZE


@dataclass
class WindowSettings:
    width: int = WINDOW_SIZE[0]
    height: int = WINDOW_SIZE[1]
    title: str = "Neon Space Shooter"


@dataclass
class AudioSettings:
    enable: bool = True
    volume: float = 1.0
    sample_rate: int = 22050


@dataclass
class GameSettings:
    """
    Settings for the pygame host.
    """

    window: WindowSettings = field(default_factory=WindowSettings)
    audio: AudioSettings = field(default_factory=AudioSettings)
    fps: int = FPS
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameSettings:
        """
        Build settings from a dictionary; missing keys keep their defaults.

        :param data: e.g. ``{"window": {"width": 800}, "audio": {"enable": False}}``
        :type data: dict[str, Any]

        :raise ValueError: On unknown keys or out-of-range values
        :raise TypeError: When a section is not a dictionary
        """
        data = dict(data)
        window = _section(WindowSettings, data.pop("window", {}), "window")
        audio = _section(AudioSettings, data.pop("audio", {}), "audio")

        unknown = set(data) - {"fps", "log_level"}
        if unknown:
            raise ValueError(f"Unknown settings: {sorted(unknown)}")

        settings = cls(
            window=window,
            audio=audio,
            fps=int(data.get("fps", FPS)),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )
        settings.validate()
        return settings

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def validate(self):
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.window.width <= 0 or self.window.height <= 0:
            raise ValueError(
                f"Invalid window size {self.window.width}x{self.window.height}"
            )
        if not 0.0 <= self.audio.volume <= 1.0:
            raise ValueError(f"volume must be within [0, 1], got {self.audio.volume}")


def _section(kind, values, name: str):
    if not isinstance(values, dict):
        raise TypeError(f"'{name}' settings must be a dict, got {type(values).__name__}")
    known = {f.name for f in fields(kind)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown {name} settings: {sorted(unknown)}")
    return kind(**values)
