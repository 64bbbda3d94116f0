"""
Piece Catalog - Piece types and the shared supply bank.

The game is played with 36 physical pieces: three copies of each of the
twelve (size, color) combinations. Pieces not in play sit in the bank.

Design principles:
- Piece types and pieces are hashable values
- The bank is immutable-friendly: every change returns a new bank
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .errors import OutOfStock, InvariantViolation


COPIES_PER_TYPE = 3


class Size(Enum):
    """Piece sizes, ordered small < medium < large."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def rank(self) -> int:
        """1 for small, 2 for medium, 3 for large."""
        return _SIZE_RANKS[self]

    def __lt__(self, other):
        if not isinstance(other, Size):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Size):
            return NotImplemented
        return self.rank <= other.rank

    @classmethod
    def all_sizes(cls) -> frozenset[Size]:
        return frozenset(cls)


_SIZE_RANKS = {Size.SMALL: 1, Size.MEDIUM: 2, Size.LARGE: 3}


class Color(Enum):
    """Piece colors. Each color unlocks one action kind."""
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"


@dataclass(frozen=True)
class PieceType:
    """A (size, color) combination. There are twelve of them."""
    size: Size
    color: Color

    def __str__(self) -> str:
        return f"{self.size.value} {self.color.value}"


SMALL_RED = PieceType(Size.SMALL, Color.RED)
SMALL_GREEN = PieceType(Size.SMALL, Color.GREEN)
SMALL_BLUE = PieceType(Size.SMALL, Color.BLUE)
SMALL_YELLOW = PieceType(Size.SMALL, Color.YELLOW)
MEDIUM_RED = PieceType(Size.MEDIUM, Color.RED)
MEDIUM_GREEN = PieceType(Size.MEDIUM, Color.GREEN)
MEDIUM_BLUE = PieceType(Size.MEDIUM, Color.BLUE)
MEDIUM_YELLOW = PieceType(Size.MEDIUM, Color.YELLOW)
LARGE_RED = PieceType(Size.LARGE, Color.RED)
LARGE_GREEN = PieceType(Size.LARGE, Color.GREEN)
LARGE_BLUE = PieceType(Size.LARGE, Color.BLUE)
LARGE_YELLOW = PieceType(Size.LARGE, Color.YELLOW)

ALL_PIECE_TYPES: tuple[PieceType, ...] = tuple(
    PieceType(size, color) for size in Size for color in Color
)


@dataclass(frozen=True)
class Piece:
    """
    A physical piece.

    Pieces are fungible by type for rules purposes, but the instance id
    (0, 1 or 2) keeps bank accounting honest.
    """
    piece_type: PieceType
    instance_id: int

    @property
    def size(self) -> Size:
        return self.piece_type.size

    @property
    def color(self) -> Color:
        return self.piece_type.color

    def __str__(self) -> str:
        return f"{self.piece_type}#{self.instance_id}"


@dataclass
class PieceBank:
    """
    The shared supply of unplayed pieces.

    Maps each piece type to the tuple of its banked instances. Instances are
    popped from the end, so the highest instance id leaves first.
    """
    pieces: dict[PieceType, tuple[Piece, ...]] = field(default_factory=dict)

    @classmethod
    def full(cls) -> PieceBank:
        """A bank holding every piece of the game."""
        return cls(
            pieces={
                piece_type: tuple(Piece(piece_type, i) for i in range(COPIES_PER_TYPE))
                for piece_type in ALL_PIECE_TYPES
            }
        )

    @classmethod
    def empty(cls) -> PieceBank:
        return cls(pieces={piece_type: () for piece_type in ALL_PIECE_TYPES})

    def contains(self, piece_type: PieceType) -> bool:
        return bool(self.pieces.get(piece_type))

    def count(self, piece_type: PieceType) -> int:
        return len(self.pieces.get(piece_type, ()))

    def total(self) -> int:
        return sum(len(instances) for instances in self.pieces.values())

    def stocked_types(self) -> list[PieceType]:
        """Piece types with at least one banked instance, in catalog order."""
        return [t for t in ALL_PIECE_TYPES if self.contains(t)]

    def all_pieces(self) -> list[Piece]:
        return [piece for t in ALL_PIECE_TYPES for piece in self.pieces.get(t, ())]

    def pop(self, piece_type: PieceType) -> tuple[Piece, PieceBank]:
        """Return (removed piece, new bank). Raises OutOfStock if none left."""
        instances = self.pieces.get(piece_type, ())
        if not instances:
            raise OutOfStock(piece_type)
        new_pieces = self.pieces.copy()
        new_pieces[piece_type] = instances[:-1]
        return instances[-1], PieceBank(pieces=new_pieces)

    def put_back(self, piece: Piece) -> PieceBank:
        """Return new bank with the piece returned to supply."""
        instances = self.pieces.get(piece.piece_type, ())
        if piece in instances:
            raise InvariantViolation([f"{piece} returned to the bank twice"])
        if len(instances) >= COPIES_PER_TYPE:
            raise InvariantViolation([f"bank would hold more than {COPIES_PER_TYPE} {piece.piece_type}"])
        new_pieces = self.pieces.copy()
        new_pieces[piece.piece_type] = tuple(
            sorted(instances + (piece,), key=lambda p: p.instance_id)
        )
        return PieceBank(pieces=new_pieces)

    def put_back_all(self, pieces) -> PieceBank:
        bank = self
        for piece in pieces:
            bank = bank.put_back(piece)
        return bank
