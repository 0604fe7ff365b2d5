"""
Input arbitration - decides whether a requested direction may replace the current one.
"""

from typing import Tuple

from .constants import Direction


def request_direction(current: Direction, requested: Direction) -> Tuple[bool, Direction]:
    """
    Validate a direction change.

    Args:
        current: the snake's current direction
        requested: the direction asked for by an input source

    Returns:
        (accepted, new_current). A request for the exact opposite of the
        current direction is rejected and leaves the current direction as it
        was; every other request is accepted.
    """
    requested = Direction(requested)
    if current.is_opposite(requested):
        return False, current
    return True, requested
