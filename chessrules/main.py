import logging
import random
from typing import List, Mapping, Optional, Tuple

from chessrules.config import CONFIG, EngineConfig
from chessrules.core.board import Square, check_square, square_name
from chessrules.core.history import GameState, History
from chessrules.core.record import dump_state, load_state
from chessrules.core.rules import Move, is_legal, legal_moves, legal_targets

logger = logging.getLogger(__name__)


class Engine:
    """One game of chess, owned by whoever created it.

    Illegal moves are silent no-ops. Squares outside the board raise
    InvalidSquareError. Nothing here is thread-safe; callers that receive
    moves from several sources must hand them over one at a time.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or CONFIG.engine
        self.history = History()
        self._rng = random.Random(self.config.random_seed)

    def get_state(self) -> GameState:
        return self.history.current

    def is_valid_move(self, frm: Square, to: Square) -> bool:
        state = self.history.current
        if state.status.is_over:
            check_square(frm)
            check_square(to)
            return False
        return is_legal(state.position, frm, to)

    def apply_move(self, frm: Square, to: Square) -> bool:
        frm, to = check_square(frm), check_square(to)
        if not self.history.apply_move(frm, to):
            return False
        state = self.history.current
        logger.info("%s %s%s -> %s", state.turn.opponent.value, square_name(frm), square_name(to), state.status.value)
        if state.status.is_over:
            logger.info("game over: %s, winner %s", state.status.value, state.winner.value if state.winner else "none")
        return True

    def valid_moves(self, square: Square) -> List[Square]:
        """Squares the piece on ``square`` may move to, for highlighting."""
        state = self.history.current
        if state.status.is_over:
            check_square(square)
            return []
        return legal_targets(state.position, square)

    def legal_moves(self) -> List[Move]:
        state = self.history.current
        if state.status.is_over:
            return []
        return legal_moves(state.position)

    def random_move(self) -> Optional[Tuple[Square, Square]]:
        """A random legal move for the side to move, or None if there is none."""
        moves = self.legal_moves()
        if not moves:
            return None
        return self._rng.choice(moves)

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def reset(self):
        self.history.reset()
        logger.info("game reset")

    def to_record(self) -> dict:
        return dump_state(self.history.current)

    def load_record(self, data: Mapping) -> GameState:
        """Install a saved or remote game as the only history entry."""
        state = load_state(data, validate=self.config.validate_on_load)
        state = self.history.replace(state)
        logger.info("loaded game: %s to move, %s, %d moves played",
                    state.turn.value, state.status.value, len(state.move_log))
        return state

    def fen(self) -> str:
        return self.history.current.position.fen()

    def board_ascii(self) -> str:
        return self.history.current.position.ascii()
