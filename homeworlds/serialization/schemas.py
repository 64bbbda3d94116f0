"""
Pydantic schemas for actions and game states.

These models mirror the engine's tagged unions one to one, so a state or
action survives a trip through JSON unchanged:
- SystemId:    homeworld(player) | colony(id)
- Destination: SystemId | new_colony(star type)
- Action:      move | build | trade | capture | sacrifice | catastrophe
"""

from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field, TypeAdapter

from ..engine_core.action import ActionType
from ..engine_core.pieces import Color, Size
from ..engine_core.systems import Player


# =============================================================================
# Pieces
# =============================================================================

class PieceTypeModel(BaseModel):
    """A (size, color) piece type."""
    size: Size
    color: Color

    model_config = {"frozen": True}


class PieceModel(BaseModel):
    """A physical piece instance."""
    size: Size
    color: Color
    instance_id: int = Field(ge=0, le=2)


class ShipModel(BaseModel):
    """A piece owned by a player."""
    piece: PieceModel
    owner: Player


# =============================================================================
# System identifiers
# =============================================================================

class HomeworldIdModel(BaseModel):
    kind: Literal["homeworld"] = "homeworld"
    player: Player


class ColonyIdModel(BaseModel):
    kind: Literal["colony"] = "colony"
    colony_id: int = Field(ge=0)


class NewColonyModel(BaseModel):
    kind: Literal["new_colony"] = "new_colony"
    star: PieceTypeModel


SystemIdModel = Annotated[Union[HomeworldIdModel, ColonyIdModel], Field(discriminator="kind")]
DestinationModel = Annotated[
    Union[HomeworldIdModel, ColonyIdModel, NewColonyModel],
    Field(discriminator="kind"),
]


# =============================================================================
# Actions
# =============================================================================

class MoveModel(BaseModel):
    type: Literal["move"] = "move"
    player: Player
    src: SystemIdModel
    dest: DestinationModel
    piece_type: PieceTypeModel


class BuildModel(BaseModel):
    type: Literal["build"] = "build"
    player: Player
    location: SystemIdModel
    piece_type: PieceTypeModel


class TradeModel(BaseModel):
    type: Literal["trade"] = "trade"
    player: Player
    location: SystemIdModel
    piece_type: PieceTypeModel
    new_type: PieceTypeModel


class CaptureModel(BaseModel):
    type: Literal["capture"] = "capture"
    player: Player
    location: SystemIdModel
    piece_type: PieceTypeModel


class SacrificeModel(BaseModel):
    type: Literal["sacrifice"] = "sacrifice"
    player: Player
    location: SystemIdModel
    piece_type: PieceTypeModel


class CatastropheModel(BaseModel):
    type: Literal["catastrophe"] = "catastrophe"
    player: Player
    location: SystemIdModel
    color: Color


ActionModel = Annotated[
    Union[MoveModel, BuildModel, TradeModel, CaptureModel, SacrificeModel, CatastropheModel],
    Field(discriminator="type"),
]

action_adapter = TypeAdapter(ActionModel)


# =============================================================================
# Game state
# =============================================================================

class HomeworldModel(BaseModel):
    owner: Player
    stars: list[PieceModel] = Field(default_factory=list, max_length=2)
    ships: list[ShipModel] = Field(default_factory=list)


class ColonyModel(BaseModel):
    colony_id: int = Field(ge=0)
    star: PieceModel
    ships: list[ShipModel] = Field(min_length=1)


class GrantModel(BaseModel):
    """Remaining actions of a kind; kind None means any kind."""
    kind: Optional[ActionType] = None
    remaining: int = Field(ge=1)


class GameStateModel(BaseModel):
    """
    Complete game state.

    colony_slots keeps removed colonies as null entries so colony ids
    (and the next id to allocate) are preserved.
    """
    bank: list[PieceModel] = Field(default_factory=list)
    homeworlds: list[HomeworldModel] = Field(min_length=2, max_length=2)
    colony_slots: list[Optional[ColonyModel]] = Field(default_factory=list)
    to_move: Player
    turn_number: int = Field(ge=0)
    budget: list[GrantModel] = Field(default_factory=list)
