"""
Keyboard input source.
"""

from __future__ import annotations

import pygame

from neon_shooter.sinks import InputSnapshot

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
SHOOT_KEYS = (pygame.K_SPACE,)


class PygameInput:
    """
    Reads the keyboard state once per call. Holding a key keeps it on.
    """

    def snapshot(self) -> InputSnapshot:
        keys = pygame.key.get_pressed()
        return InputSnapshot(
            left=any(keys[k] for k in LEFT_KEYS),
            right=any(keys[k] for k in RIGHT_KEYS),
            shoot=any(keys[k] for k in SHOOT_KEYS),
        )
