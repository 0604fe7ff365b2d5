"""
Keyboard input - maps pygame key codes to directions and forwards them to an engine.
"""

import os
from typing import Dict, Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from ..domain.constants import DOWN, LEFT, RIGHT, UP, Direction  # noqa: E402

KEY_BINDINGS: Dict[int, Direction] = {
    pygame.K_UP: UP,
    pygame.K_w: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
}


def direction_for_key(key: int) -> Optional[Direction]:
    """Return the direction bound to a key code, or None for any other key."""
    return KEY_BINDINGS.get(key)


class KeyboardPlayer:
    """
    Forwards key presses to an engine.

    The engine is passed in explicitly; anything with a
    request_direction(direction) method works.
    """

    def __init__(self, engine, bindings: Optional[Dict[int, Direction]] = None):
        self.engine = engine
        self.bindings = dict(KEY_BINDINGS if bindings is None else bindings)

    def key_pressed(self, key: int) -> bool:
        """Handle one key press. Returns True if the engine accepted a new direction."""
        direction = self.bindings.get(key)
        if direction is None:
            return False
        return self.engine.request_direction(direction)

    def handle_event(self, event) -> bool:
        """Handle a pygame event; only KEYDOWN events are considered."""
        if event.type != pygame.KEYDOWN:
            return False
        return self.key_pressed(event.key)
