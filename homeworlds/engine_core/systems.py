"""
System Model - Homeworlds and colonies.

A system is a location holding stars and ships. There are exactly two
homeworlds (one per player) and any number of colonies founded mid-game.
Both variants expose the same queries, so rules code can treat them alike:

- sizes()        sizes of the remaining stars
- colors(player) star colors plus colors of that player's ships
- ships_of(player)

System is a closed variant (Homeworld | Colony). Colonies live in a
ColonyArena: a slot table indexed by colony id, tombstoned on removal.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union

from .pieces import Color, Piece, PieceType, Size


class Player(Enum):
    """The two players. FIRST moves first."""
    FIRST = "first"
    SECOND = "second"

    @property
    def opponent(self) -> Player:
        return Player.SECOND if self is Player.FIRST else Player.FIRST


@dataclass(frozen=True)
class HomeworldId:
    player: Player

    def __str__(self) -> str:
        return f"homeworld({self.player.value})"


@dataclass(frozen=True)
class ColonyId:
    colony_id: int

    def __str__(self) -> str:
        return f"colony({self.colony_id})"


@dataclass(frozen=True)
class NewColony:
    """Move destination that founds a colony around a star drawn from the bank."""
    star_type: PieceType

    def __str__(self) -> str:
        return f"new colony({self.star_type})"


SystemId = Union[HomeworldId, ColonyId]
Destination = Union[HomeworldId, ColonyId, NewColony]


@dataclass(frozen=True)
class OwnedPiece:
    """A ship: a piece plus the player controlling it."""
    piece: Piece
    owner: Player

    @property
    def piece_type(self) -> PieceType:
        return self.piece.piece_type

    @property
    def size(self) -> Size:
        return self.piece.size

    @property
    def color(self) -> Color:
        return self.piece.color


class _SystemQueries:
    """Queries shared by Homeworld and Colony. Subclasses provide star_pieces and ships."""

    @property
    def star_pieces(self) -> tuple[Piece, ...]:
        raise NotImplementedError

    @property
    def has_stars(self) -> bool:
        return len(self.star_pieces) > 0

    def sizes(self) -> frozenset[Size]:
        return frozenset(star.size for star in self.star_pieces)

    def star_colors(self) -> frozenset[Color]:
        return frozenset(star.color for star in self.star_pieces)

    def ships_of(self, player: Player) -> list[OwnedPiece]:
        return [ship for ship in self.ships if ship.owner == player]

    def colors(self, player: Player) -> frozenset[Color]:
        """Colors the player can act with here."""
        return self.star_colors() | frozenset(ship.color for ship in self.ships_of(player))

    def pieces(self) -> list[Piece]:
        """Every piece at the system, stars first."""
        return list(self.star_pieces) + [ship.piece for ship in self.ships]

    def find_ship(self, player: Player, piece_type: PieceType) -> OwnedPiece | None:
        """The last ship of a type owned by player, if any."""
        for ship in reversed(self.ships):
            if ship.owner == player and ship.piece_type == piece_type:
                return ship
        return None


@dataclass
class Homeworld(_SystemQueries):
    """
    A player's home system.

    Holds up to two stars. A homeworld that loses every star after the
    opening ends the game for its owner, but stays addressable.
    """
    owner: Player
    stars: tuple[Piece, ...] = ()
    ships: tuple[OwnedPiece, ...] = ()

    @property
    def system_id(self) -> HomeworldId:
        return HomeworldId(self.owner)

    @property
    def star_pieces(self) -> tuple[Piece, ...]:
        return self.stars

    def with_ships(self, ships) -> Homeworld:
        return Homeworld(owner=self.owner, stars=self.stars, ships=tuple(ships))

    def with_ship(self, ship: OwnedPiece) -> Homeworld:
        return self.with_ships(self.ships + (ship,))

    def without_ship(self, ship: OwnedPiece) -> Homeworld:
        return self.with_ships(_drop_one(self.ships, ship))

    def without_stars_of(self, color: Color) -> Homeworld:
        return Homeworld(
            owner=self.owner,
            stars=tuple(s for s in self.stars if s.color != color),
            ships=self.ships,
        )


@dataclass
class Colony(_SystemQueries):
    """A system founded mid-game around a single star."""
    colony_id: int
    star: Piece | None
    ships: tuple[OwnedPiece, ...] = ()

    @property
    def system_id(self) -> ColonyId:
        return ColonyId(self.colony_id)

    @property
    def star_pieces(self) -> tuple[Piece, ...]:
        return (self.star,) if self.star is not None else ()

    def with_ships(self, ships) -> Colony:
        return Colony(colony_id=self.colony_id, star=self.star, ships=tuple(ships))

    def with_ship(self, ship: OwnedPiece) -> Colony:
        return self.with_ships(self.ships + (ship,))

    def without_ship(self, ship: OwnedPiece) -> Colony:
        return self.with_ships(_drop_one(self.ships, ship))

    def without_stars_of(self, color: Color) -> Colony:
        star = self.star if self.star is not None and self.star.color != color else None
        return Colony(colony_id=self.colony_id, star=star, ships=self.ships)


System = Union[Homeworld, Colony]


def _drop_one(ships: tuple[OwnedPiece, ...], ship: OwnedPiece) -> tuple[OwnedPiece, ...]:
    items = list(ships)
    items.remove(ship)
    return tuple(items)


@dataclass
class ColonyArena:
    """
    Colonies indexed by id.

    slots[i] holds colony i, or None once it has been removed. Ids are never
    reused, so the next id is always the number of slots.
    """
    slots: tuple[Colony | None, ...] = field(default_factory=tuple)

    @property
    def next_id(self) -> int:
        return len(self.slots)

    def get(self, colony_id: int) -> Colony | None:
        if 0 <= colony_id < len(self.slots):
            return self.slots[colony_id]
        return None

    def live(self) -> Iterator[Colony]:
        """Live colonies in id order."""
        return (colony for colony in self.slots if colony is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self.live())

    def allocate(self, star: Piece, ships=()) -> tuple[Colony, ColonyArena]:
        """Return (new colony, new arena)."""
        colony = Colony(colony_id=self.next_id, star=star, ships=tuple(ships))
        return colony, ColonyArena(slots=self.slots + (colony,))

    def replace(self, colony: Colony) -> ColonyArena:
        if self.get(colony.colony_id) is None:
            raise KeyError(f"No live colony {colony.colony_id}")
        slots = list(self.slots)
        slots[colony.colony_id] = colony
        return ColonyArena(slots=tuple(slots))

    def remove(self, colony_id: int) -> ColonyArena:
        if self.get(colony_id) is None:
            raise KeyError(f"No live colony {colony_id}")
        slots = list(self.slots)
        slots[colony_id] = None
        return ColonyArena(slots=tuple(slots))
