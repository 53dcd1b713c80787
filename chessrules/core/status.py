"""Game status of a position, from the point of view of the side to move."""
from __future__ import annotations

import enum
from typing import Optional, Tuple

from chessrules.core.board import Color, Position
from chessrules.core.rules import has_legal_move, is_in_check


class GameStatus(str, enum.Enum):
    ACTIVE = "active"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"

    @property
    def is_over(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)


def evaluate_status(position: Position) -> Tuple[GameStatus, Optional[Color]]:
    """Classify ``position`` and name the winner, if there is one.

    The side to move is the one whose king matters; the side that just moved
    wins on checkmate. Searching for a legal move is exhaustive but stops at
    the first one found.
    """
    to_move = position.turn
    in_check = is_in_check(position, to_move)
    can_move = has_legal_move(position)
    if in_check and not can_move:
        return GameStatus.CHECKMATE, to_move.opponent
    if in_check:
        return GameStatus.CHECK, None
    if not can_move:
        return GameStatus.STALEMATE, None
    return GameStatus.ACTIVE, None
