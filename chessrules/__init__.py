"""chessrules: a caller-held chess rules engine with undo/redo history."""

from chessrules.core.board import Color, Piece, PieceKind, Position, parse_square, square_name
from chessrules.core.history import GameState
from chessrules.core.status import GameStatus
from chessrules.errors import ChessRulesError, InvalidSquareError, InvalidStateError
from chessrules.main import Engine

__version__ = "1.0.0"
