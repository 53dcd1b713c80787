"""Immutable board model: colors, piece kinds, pieces and positions.

A Position is a plain value. Moves never mutate one; the rules module builds
a new Position for every candidate move. python-chess is used only at the
edges, to name squares and to export a position as FEN or ASCII.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple

import chess

from chessrules.errors import InvalidSquareError, InvalidStateError

Square = Tuple[int, int]

BOARD_SIZE = 8


class Color(str, enum.Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Rank step of a pawn push."""
        return 1 if self is Color.WHITE else -1

    @property
    def pawn_rank(self) -> int:
        """Rank the pawns start on, the only rank a double push is allowed from."""
        return 1 if self is Color.WHITE else 6


class PieceKind(str, enum.Enum):
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"


# python-chess piece types, for FEN export
_CHESS_PIECE_TYPES = {
    PieceKind.PAWN: chess.PAWN,
    PieceKind.ROOK: chess.ROOK,
    PieceKind.KNIGHT: chess.KNIGHT,
    PieceKind.BISHOP: chess.BISHOP,
    PieceKind.QUEEN: chess.QUEEN,
    PieceKind.KING: chess.KING,
}
_KINDS_BY_CHESS_TYPE = {v: k for k, v in _CHESS_PIECE_TYPES.items()}


def check_square(square) -> Square:
    """Return ``square`` as a (file, rank) tuple or raise InvalidSquareError."""
    try:
        file, rank = square
    except (TypeError, ValueError):
        raise InvalidSquareError(f"square must be a (file, rank) pair, got {square!r}") from None
    for coord in (file, rank):
        if isinstance(coord, bool) or not isinstance(coord, int):
            raise InvalidSquareError(f"square coordinates must be ints, got {square!r}")
        if not 0 <= coord < BOARD_SIZE:
            raise InvalidSquareError(f"square {square!r} is off the board")
    return (file, rank)


def square_name(square: Square) -> str:
    """(4, 1) -> 'e2'."""
    file, rank = check_square(square)
    return chess.square_name(chess.square(file, rank))


def parse_square(name: str) -> Square:
    """'e2' -> (4, 1)."""
    try:
        sq = chess.parse_square(name.strip().lower())
    except (ValueError, AttributeError):
        raise InvalidSquareError(f"not a square name: {name!r}") from None
    return (chess.square_file(sq), chess.square_rank(sq))


def all_squares() -> Iterator[Square]:
    for file in range(BOARD_SIZE):
        for rank in range(BOARD_SIZE):
            yield (file, rank)


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color
    square: Square

    def __post_init__(self):
        object.__setattr__(self, "square", check_square(self.square))

    def moved_to(self, square: Square) -> "Piece":
        return Piece(self.kind, self.color, square)

    def to_chess(self) -> chess.Piece:
        return chess.Piece(_CHESS_PIECE_TYPES[self.kind], self.color is Color.WHITE)


@dataclass(frozen=True)
class Position:
    """Piece placement plus side to move.

    Construction fails with InvalidStateError if two pieces share a square,
    so every Position in existence satisfies the one-piece-per-square rule.
    """

    pieces: Tuple[Piece, ...]
    turn: Color = Color.WHITE
    _by_square: Dict[Square, Piece] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        pieces = tuple(self.pieces)
        by_square: Dict[Square, Piece] = {}
        for piece in pieces:
            if piece.square in by_square:
                raise InvalidStateError(f"two pieces on {square_name(piece.square)}")
            by_square[piece.square] = piece
        object.__setattr__(self, "pieces", pieces)
        object.__setattr__(self, "_by_square", by_square)

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self._by_square.get(square)

    def pieces_of(self, color: Color) -> Iterable[Piece]:
        return [p for p in self.pieces if p.color is color]

    def king_square(self, color: Color) -> Optional[Square]:
        for piece in self.pieces:
            if piece.kind is PieceKind.KING and piece.color is color:
                return piece.square
        return None

    @classmethod
    def from_fen(cls, fen: str) -> "Position":
        """Read placement and side to move; castling and en passant fields are ignored."""
        board = chess.Board(fen)
        pieces = []
        for sq, p in sorted(board.piece_map().items()):
            kind = _KINDS_BY_CHESS_TYPE[p.piece_type]
            color = Color.WHITE if p.color == chess.WHITE else Color.BLACK
            pieces.append(Piece(kind, color, (chess.square_file(sq), chess.square_rank(sq))))
        return cls(tuple(pieces), Color.WHITE if board.turn == chess.WHITE else Color.BLACK)

    def to_board(self) -> chess.Board:
        """Export as a python-chess board without castling rights or en passant."""
        board = chess.Board(None)
        for piece in self.pieces:
            file, rank = piece.square
            board.set_piece_at(chess.square(file, rank), piece.to_chess())
        board.turn = self.turn is Color.WHITE
        return board

    def fen(self) -> str:
        return self.to_board().fen()

    def ascii(self) -> str:
        return str(self.to_board())


_BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def starting_position() -> Position:
    """The standard 32-piece setup, White to move."""
    pieces = []
    for color, back, pawns in ((Color.WHITE, 0, 1), (Color.BLACK, 7, 6)):
        pieces.extend(Piece(kind, color, (file, back)) for file, kind in enumerate(_BACK_RANK))
        pieces.extend(Piece(PieceKind.PAWN, color, (file, pawns)) for file in range(BOARD_SIZE))
    return Position(tuple(pieces), Color.WHITE)
