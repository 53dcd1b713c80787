"""Exceptions raised by the rules engine.

Illegal moves are never exceptions; these cover contract violations by the
caller and records that cannot be installed as a game state.
"""


class ChessRulesError(Exception):
    """Base class for every error raised by chessrules."""


class InvalidSquareError(ChessRulesError, ValueError):
    """A square was not a (file, rank) pair of ints in [0, 7]."""


class InvalidStateError(ChessRulesError, ValueError):
    """An external game record is malformed or describes an impossible position."""
