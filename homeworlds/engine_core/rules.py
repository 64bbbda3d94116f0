"""
Reachability and color rules.

Pure predicates over systems:
- Two systems are reachable from one another iff both have stars and their
  star size sets are disjoint.
- A player may act with a color at a system iff the color is among the
  system's stars or the player's own ships there.
"""

from __future__ import annotations

from .action import ActionType
from .pieces import Color, PieceType
from .systems import Player, System


CATASTROPHE_THRESHOLD = 4

COLOR_ACTIONS: dict[Color, ActionType] = {
    Color.RED: ActionType.CAPTURE,
    Color.GREEN: ActionType.BUILD,
    Color.BLUE: ActionType.TRADE,
    Color.YELLOW: ActionType.MOVE,
}

_ACTION_COLORS = {kind: color for color, kind in COLOR_ACTIONS.items()}


def action_color(kind: ActionType) -> Color | None:
    """The color unlocking an action kind (None for sacrifice/catastrophe)."""
    return _ACTION_COLORS.get(kind)


def reachable(a: System, b: System) -> bool:
    """Whether ships can travel between a and b."""
    sizes_a = a.sizes()
    sizes_b = b.sizes()
    if not sizes_a or not sizes_b:
        return False
    return sizes_a.isdisjoint(sizes_b)


def can_found(src: System, star_type: PieceType) -> bool:
    """Whether a ship at src may found a colony around a star of star_type."""
    return src.has_stars and star_type.size not in src.sizes()


def unlocks(system: System, player: Player, color: Color) -> bool:
    return color in system.colors(player)


def largest_ship_rank(system: System, player: Player) -> int:
    """Rank of the player's largest ship at system, 0 when there is none."""
    return max((ship.size.rank for ship in system.ships_of(player)), default=0)


def color_count(system: System, color: Color) -> int:
    """Pieces of a color at a system, counting stars and every ship."""
    return sum(1 for piece in system.pieces() if piece.color == color)


def overpopulated_colors(system: System) -> list[Color]:
    """Colors that have reached the catastrophe threshold, in color order."""
    return [c for c in Color if color_count(system, c) >= CATASTROPHE_THRESHOLD]
