"""
Conversions between engine values and their pydantic schemas.

Loading a state re-checks piece accounting, so a hand-edited or corrupt
document fails with InvariantViolation instead of producing a broken game.
"""

from __future__ import annotations

from ..engine_core.action import Action, ActionType
from ..engine_core.budget import ActionGrant, TurnBudget
from ..engine_core.pieces import Piece, PieceBank, PieceType
from ..engine_core.state import GameState, check_invariants
from ..engine_core.systems import (
    Colony,
    ColonyArena,
    ColonyId,
    Homeworld,
    HomeworldId,
    NewColony,
    OwnedPiece,
    Player,
)
from .schemas import (
    ActionModel,
    BuildModel,
    CaptureModel,
    CatastropheModel,
    ColonyIdModel,
    ColonyModel,
    GameStateModel,
    GrantModel,
    HomeworldIdModel,
    HomeworldModel,
    MoveModel,
    NewColonyModel,
    PieceModel,
    PieceTypeModel,
    SacrificeModel,
    ShipModel,
    TradeModel,
    action_adapter,
)


def _type_to_model(piece_type: PieceType) -> PieceTypeModel:
    return PieceTypeModel(size=piece_type.size, color=piece_type.color)


def _type_from_model(model: PieceTypeModel) -> PieceType:
    return PieceType(model.size, model.color)


def _piece_to_model(piece: Piece) -> PieceModel:
    return PieceModel(size=piece.size, color=piece.color, instance_id=piece.instance_id)


def _piece_from_model(model: PieceModel) -> Piece:
    return Piece(PieceType(model.size, model.color), model.instance_id)


def _ship_to_model(ship: OwnedPiece) -> ShipModel:
    return ShipModel(piece=_piece_to_model(ship.piece), owner=ship.owner)


def _ship_from_model(model: ShipModel) -> OwnedPiece:
    return OwnedPiece(_piece_from_model(model.piece), model.owner)


def _system_id_to_model(system_id):
    if isinstance(system_id, HomeworldId):
        return HomeworldIdModel(player=system_id.player)
    if isinstance(system_id, ColonyId):
        return ColonyIdModel(colony_id=system_id.colony_id)
    if isinstance(system_id, NewColony):
        return NewColonyModel(star=_type_to_model(system_id.star_type))
    raise TypeError(f"Not a system id: {system_id!r}")


def _system_id_from_model(model):
    if isinstance(model, HomeworldIdModel):
        return HomeworldId(model.player)
    if isinstance(model, ColonyIdModel):
        return ColonyId(model.colony_id)
    if isinstance(model, NewColonyModel):
        return NewColony(_type_from_model(model.star))
    raise TypeError(f"Not a system id model: {model!r}")


def action_to_model(action: Action) -> ActionModel:
    p = action.payload
    kind = action.action_type
    if kind == ActionType.MOVE:
        return MoveModel(
            player=p.player,
            src=_system_id_to_model(p.src),
            dest=_system_id_to_model(p.dest),
            piece_type=_type_to_model(p.piece_type),
        )
    if kind == ActionType.TRADE:
        return TradeModel(
            player=p.player,
            location=_system_id_to_model(p.location),
            piece_type=_type_to_model(p.piece_type),
            new_type=_type_to_model(p.new_type),
        )
    if kind == ActionType.CATASTROPHE:
        return CatastropheModel(
            player=p.player, location=_system_id_to_model(p.location), color=p.color
        )
    located = {
        ActionType.BUILD: BuildModel,
        ActionType.CAPTURE: CaptureModel,
        ActionType.SACRIFICE: SacrificeModel,
    }[kind]
    return located(
        player=p.player,
        location=_system_id_to_model(p.location),
        piece_type=_type_to_model(p.piece_type),
    )


def action_from_model(model: ActionModel) -> Action:
    if isinstance(model, MoveModel):
        return Action.move(
            model.player,
            _system_id_from_model(model.src),
            _system_id_from_model(model.dest),
            _type_from_model(model.piece_type),
        )
    if isinstance(model, TradeModel):
        return Action.trade(
            model.player,
            _system_id_from_model(model.location),
            _type_from_model(model.piece_type),
            _type_from_model(model.new_type),
        )
    if isinstance(model, CatastropheModel):
        return Action.catastrophe(model.player, _system_id_from_model(model.location), model.color)

    factories = {
        BuildModel: Action.build,
        CaptureModel: Action.capture,
        SacrificeModel: Action.sacrifice,
    }
    factory = factories.get(type(model))
    if factory is None:
        raise TypeError(f"Not an action model: {model!r}")
    return factory(
        model.player, _system_id_from_model(model.location), _type_from_model(model.piece_type)
    )


def action_to_dict(action: Action) -> dict:
    return action_to_model(action).model_dump(mode="json")


def action_from_dict(data: dict) -> Action:
    """Raises pydantic.ValidationError for malformed input."""
    return action_from_model(action_adapter.validate_python(data))


def state_to_model(state: GameState) -> GameStateModel:
    homeworlds = [
        HomeworldModel(
            owner=player,
            stars=[_piece_to_model(s) for s in state.homeworld(player).stars],
            ships=[_ship_to_model(s) for s in state.homeworld(player).ships],
        )
        for player in Player
    ]
    colony_slots = [
        None
        if colony is None
        else ColonyModel(
            colony_id=colony.colony_id,
            star=_piece_to_model(colony.star),
            ships=[_ship_to_model(s) for s in colony.ships],
        )
        for colony in state.colonies.slots
    ]
    return GameStateModel(
        bank=[_piece_to_model(p) for p in state.bank.all_pieces()],
        homeworlds=homeworlds,
        colony_slots=colony_slots,
        to_move=state.to_move,
        turn_number=state.turn_number,
        budget=[GrantModel(kind=g.kind, remaining=g.remaining) for g in state.budget.grants],
    )


def state_from_model(model: GameStateModel) -> GameState:
    bank = PieceBank.empty().put_back_all(_piece_from_model(p) for p in model.bank)

    homeworlds = {}
    for hw in model.homeworlds:
        if hw.owner in homeworlds:
            raise ValueError(f"Duplicate homeworld for {hw.owner.value}")
        homeworlds[hw.owner] = Homeworld(
            owner=hw.owner,
            stars=tuple(_piece_from_model(s) for s in hw.stars),
            ships=tuple(_ship_from_model(s) for s in hw.ships),
        )

    slots = []
    for index, slot in enumerate(model.colony_slots):
        if slot is None:
            slots.append(None)
            continue
        if slot.colony_id != index:
            raise ValueError(f"Colony {slot.colony_id} stored in slot {index}")
        slots.append(
            Colony(
                colony_id=slot.colony_id,
                star=_piece_from_model(slot.star),
                ships=tuple(_ship_from_model(s) for s in slot.ships),
            )
        )

    state = GameState(
        bank=bank,
        homeworlds=homeworlds,
        colonies=ColonyArena(slots=tuple(slots)),
        to_move=model.to_move,
        turn_number=model.turn_number,
        budget=TurnBudget(grants=tuple(ActionGrant(g.kind, g.remaining) for g in model.budget)),
    )
    check_invariants(state)
    return state


def dump_state_json(state: GameState) -> str:
    return state_to_model(state).model_dump_json()


def load_state_json(text: str) -> GameState:
    """Raises pydantic.ValidationError or InvariantViolation for bad input."""
    return state_from_model(GameStateModel.model_validate_json(text))
