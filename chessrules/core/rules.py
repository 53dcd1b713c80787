"""Move legality.

Two layers decide whether a move is legal:

- geometric legality: how each piece kind moves, including blocking, and
  nothing else. ``GEOMETRY`` maps every ``PieceKind`` to its rule.
- check safety: the move is simulated on a copy of the position and
  rejected if it leaves the mover's own king attacked.

Attack detection (``is_in_check``) uses the geometric layer only; whether
the attacker is itself pinned does not matter for giving check.

All functions here are pure. Squares passed to the public functions are
validated with ``check_square``; the enumeration helpers only ever produce
on-board squares and skip that step.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from chessrules.core.board import (
    Color,
    Piece,
    PieceKind,
    Position,
    Square,
    all_squares,
    check_square,
)

Move = Tuple[Square, Square]


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def path_blocked(position: Position, frm: Square, to: Square) -> bool:
    """True if any square strictly between ``frm`` and ``to`` is occupied.

    Only meaningful for straight or diagonal lines.
    """
    df = _sign(to[0] - frm[0])
    dr = _sign(to[1] - frm[1])
    file, rank = frm[0] + df, frm[1] + dr
    while (file, rank) != to:
        if position.piece_at((file, rank)) is not None:
            return True
        file += df
        rank += dr
    return False


def _pawn(position: Position, piece: Piece, to: Square) -> bool:
    dx = to[0] - piece.square[0]
    dz = to[1] - piece.square[1]
    step = piece.color.forward
    target = position.piece_at(to)
    if dx == 0 and dz == step:
        return target is None
    if dx == 0 and dz == 2 * step and piece.square[1] == piece.color.pawn_rank:
        middle = (piece.square[0], piece.square[1] + step)
        return target is None and position.piece_at(middle) is None
    if abs(dx) == 1 and dz == step:
        return target is not None and target.color is not piece.color
    return False


def _rook(position: Position, piece: Piece, to: Square) -> bool:
    if piece.square[0] != to[0] and piece.square[1] != to[1]:
        return False
    return not path_blocked(position, piece.square, to)


def _bishop(position: Position, piece: Piece, to: Square) -> bool:
    if abs(to[0] - piece.square[0]) != abs(to[1] - piece.square[1]):
        return False
    return not path_blocked(position, piece.square, to)


def _queen(position: Position, piece: Piece, to: Square) -> bool:
    return _rook(position, piece, to) or _bishop(position, piece, to)


def _knight(position: Position, piece: Piece, to: Square) -> bool:
    delta = (abs(to[0] - piece.square[0]), abs(to[1] - piece.square[1]))
    return delta in ((1, 2), (2, 1))


def _king(position: Position, piece: Piece, to: Square) -> bool:
    return abs(to[0] - piece.square[0]) <= 1 and abs(to[1] - piece.square[1]) <= 1


GEOMETRY: Dict[PieceKind, Callable[[Position, Piece, Square], bool]] = {
    PieceKind.PAWN: _pawn,
    PieceKind.ROOK: _rook,
    PieceKind.KNIGHT: _knight,
    PieceKind.BISHOP: _bishop,
    PieceKind.QUEEN: _queen,
    PieceKind.KING: _king,
}


def reaches(position: Position, piece: Piece, to: Square) -> bool:
    """Geometric legality of ``piece`` moving to ``to``, ignoring check and turn."""
    if to == piece.square:
        return False
    target = position.piece_at(to)
    if target is not None and target.color is piece.color:
        return False
    return GEOMETRY[piece.kind](position, piece, to)


def simulate(position: Position, frm: Square, to: Square) -> Tuple[Position, Optional[Piece]]:
    """Apply a move without any legality check.

    Returns the new position (other side to move) and the captured piece,
    if any. The input position is left untouched.
    """
    mover = position.piece_at(frm)
    captured = position.piece_at(to)
    pieces = []
    for piece in position.pieces:
        if piece is captured:
            continue
        pieces.append(mover.moved_to(to) if piece is mover else piece)
    return Position(tuple(pieces), position.turn.opponent), captured


def is_attacked(position: Position, square: Square, by: Color) -> bool:
    for piece in position.pieces:
        if piece.color is by and reaches(position, piece, square):
            return True
    return False


def is_in_check(position: Position, color: Color) -> bool:
    king = position.king_square(color)
    if king is None:
        return False
    return is_attacked(position, king, color.opponent)


def _is_legal(position: Position, frm: Square, to: Square) -> bool:
    piece = position.piece_at(frm)
    if piece is None or piece.color is not position.turn:
        return False
    if not reaches(position, piece, to):
        return False
    after, _ = simulate(position, frm, to)
    return not is_in_check(after, piece.color)


def is_legal(position: Position, frm: Square, to: Square) -> bool:
    """Whether the side to move may play ``frm`` -> ``to``."""
    return _is_legal(position, check_square(frm), check_square(to))


def legal_targets(position: Position, frm: Square) -> List[Square]:
    frm = check_square(frm)
    piece = position.piece_at(frm)
    if piece is None or piece.color is not position.turn:
        return []
    return [to for to in all_squares() if _is_legal(position, frm, to)]


def legal_moves(position: Position) -> List[Move]:
    moves = []
    for piece in sorted(position.pieces_of(position.turn), key=lambda p: p.square):
        moves.extend((piece.square, to) for to in legal_targets(position, piece.square))
    return moves


def has_legal_move(position: Position) -> bool:
    for piece in position.pieces_of(position.turn):
        for to in all_squares():
            if _is_legal(position, piece.square, to):
                return True
    return False
