"""Core rules components: board model, move legality, status, history and records."""

from .board import Color, Piece, PieceKind, Position, Square, starting_position
from .history import GameState, History
from .rules import is_in_check, is_legal, legal_moves, legal_targets
from .status import GameStatus, evaluate_status
