"""
Game setup - starting positions and position construction.
"""

from .setup import initial_state, create_position, DEFAULT_STARS

__all__ = [
    "initial_state",
    "create_position",
    "DEFAULT_STARS",
]
