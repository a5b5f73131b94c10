"""
Neon Shooter utils
"""

from __future__ import annotations

import logging
import time

import pygame

logger = logging.getLogger("neon_shooter")


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Configure the package logger.

    :param level: Logging level (name or number)
    :type level: int | str
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.setLevel(level)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def monotonic_ms() -> float:
    """Wall-clock milliseconds from a monotonic source."""
    return time.monotonic() * 1000.0


def set_screen(caption: str, width: int, height: int) -> pygame.Surface:
    """
    Set the screen

    :param caption: Caption of the screen
    :type caption: str

    :param width: Width of the screen
    :type width: int

    :param height: Height of the screen
    :type height: int

    :return: pygame.Surface
    """
    logger.debug("Setting screen %sx%s", width, height)

    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(caption)

    return screen
