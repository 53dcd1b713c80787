"""Plain-record form of a game state, for persistence and network sync.

The record uses the camelCase keys the stored games and remote peers use::

    {
      "pieces": [{"type": "pawn", "color": "white", "position": [4, 1]}, ...],
      "currentTurn": "white",
      "moveHistory": [{"from": [4, 1], "to": [4, 3]}, ...],
      "capturedPieces": [...],
      "status": "active",
      "winner": null
    }

Schema checks (types, coordinate range, one piece per square) are done by
the pydantic models. ``load_state`` adds the reachability checks and always
recomputes status and winner from the pieces.
"""
from __future__ import annotations

import logging
from typing import Annotated, Any, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from chessrules.core.board import Color, Piece, PieceKind, Position, square_name
from chessrules.core.history import GameState
from chessrules.core.rules import is_in_check
from chessrules.core.status import GameStatus
from chessrules.errors import InvalidStateError

logger = logging.getLogger(__name__)

Coord = Annotated[int, Field(ge=0, le=7)]
SquareField = Tuple[Coord, Coord]


class PieceRecord(BaseModel):
    type: PieceKind
    color: Color
    position: SquareField

    @classmethod
    def from_piece(cls, piece: Piece) -> "PieceRecord":
        return cls(type=piece.kind, color=piece.color, position=piece.square)

    def to_piece(self) -> Piece:
        return Piece(self.type, self.color, tuple(self.position))


class MoveRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: SquareField = Field(alias="from")
    to: SquareField


class GameRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pieces: List[PieceRecord]
    current_turn: Color = Field(Color.WHITE, alias="currentTurn")
    move_history: List[MoveRecord] = Field(default_factory=list, alias="moveHistory")
    captured_pieces: List[PieceRecord] = Field(default_factory=list, alias="capturedPieces")
    status: GameStatus = GameStatus.ACTIVE
    winner: Optional[Color] = None

    @model_validator(mode="after")
    def one_piece_per_square(self) -> "GameRecord":
        seen = set()
        for piece in self.pieces:
            if piece.position in seen:
                raise ValueError(f"two pieces on {square_name(piece.position)}")
            seen.add(piece.position)
        return self

    @classmethod
    def from_state(cls, state: GameState) -> "GameRecord":
        return cls(
            pieces=[PieceRecord.from_piece(p) for p in state.position.pieces],
            current_turn=state.turn,
            move_history=[MoveRecord(from_=frm, to=to) for frm, to in state.move_log],
            captured_pieces=[PieceRecord.from_piece(p) for p in state.captured],
            status=state.status,
            winner=state.winner,
        )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def dump_state(state: GameState) -> dict:
    return GameRecord.from_state(state).to_dict()


def _check_reachable(position: Position):
    for color in Color:
        kings = sum(1 for p in position.pieces_of(color) if p.kind is PieceKind.KING)
        if kings != 1:
            raise InvalidStateError(f"{color.value} has {kings} kings")
    idle = position.turn.opponent
    if is_in_check(position, idle):
        raise InvalidStateError(f"{idle.value} is in check but it is {position.turn.value} to move")


def load_state(data: Mapping[str, Any], validate: bool = True) -> GameState:
    """Turn a record into a GameState, or raise InvalidStateError.

    With ``validate`` off, only the schema and one-piece-per-square checks
    run; the position is otherwise trusted as given.
    """
    try:
        record = GameRecord.model_validate(data)
    except ValidationError as exc:
        raise InvalidStateError(f"invalid game record: {exc}") from exc

    position = Position(tuple(p.to_piece() for p in record.pieces), record.current_turn)
    if validate:
        _check_reachable(position)

    state = GameState.from_position(
        position,
        move_log=[(tuple(m.from_), tuple(m.to)) for m in record.move_history],
        captured=[p.to_piece() for p in record.captured_pieces],
    )
    if (record.status, record.winner) != (state.status, state.winner):
        logger.warning(
            "record said %s/%s, position is %s/%s; using the position",
            record.status.value,
            record.winner.value if record.winner else None,
            state.status.value,
            state.winner.value if state.winner else None,
        )
    return state
