"""Game states and the linear undo/redo history."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from chessrules.core.board import Color, Piece, Position, Square, check_square, starting_position
from chessrules.core.rules import Move, is_legal, simulate
from chessrules.core.status import GameStatus, evaluate_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    position: Position
    status: GameStatus
    winner: Optional[Color]
    move_log: Tuple[Move, ...] = ()
    captured: Tuple[Piece, ...] = ()

    @property
    def turn(self) -> Color:
        return self.position.turn

    @classmethod
    def from_position(cls, position: Position, move_log=(), captured=()) -> "GameState":
        """Build a state whose status and winner are derived from ``position``."""
        status, winner = evaluate_status(position)
        return cls(position, status, winner, tuple(move_log), tuple(captured))

    @classmethod
    def initial(cls) -> "GameState":
        return cls.from_position(starting_position())

    def after(self, frm: Square, to: Square) -> "GameState":
        """The state after a move already known to be legal."""
        position, taken = simulate(self.position, frm, to)
        captured = self.captured + (taken,) if taken is not None else self.captured
        return GameState.from_position(position, self.move_log + ((frm, to),), captured)


class History:
    """Snapshots of one game plus a cursor pointing at the current one.

    Entries are never modified. Undo and redo only move the cursor; a new
    move drops everything after the cursor first.
    """

    def __init__(self, initial: Optional[GameState] = None):
        self._states: List[GameState] = [initial or GameState.initial()]
        self._cursor = 0

    def __len__(self):
        return len(self._states)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> GameState:
        return self._states[self._cursor]

    def apply_move(self, frm: Square, to: Square) -> bool:
        frm, to = check_square(frm), check_square(to)
        state = self.current
        if state.status.is_over or not is_legal(state.position, frm, to):
            logger.debug("rejected move %s -> %s", frm, to)
            return False
        new_state = state.after(frm, to)
        del self._states[self._cursor + 1:]
        self._states.append(new_state)
        self._cursor += 1
        return True

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._states) - 1

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        self._cursor += 1
        return True

    def reset(self):
        self.replace(GameState.initial())

    def replace(self, state: GameState) -> GameState:
        """Make ``state`` the only snapshot. Status and winner are recomputed."""
        state = GameState.from_position(state.position, state.move_log, state.captured)
        self._states = [state]
        self._cursor = 0
        return state
