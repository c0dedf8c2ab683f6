from __future__ import annotations

from .board import Board
from .move import Move, Square
from .piece import Color
from .rules import is_legal_geometry


def is_attacked(board: Board, target: Square, by_color: Color) -> bool:
    """Return True if any piece of ``by_color`` could move onto ``target``."""
    for sq, _ in board.pieces(by_color):
        if is_legal_geometry(board, Move(sq, target)):
            return True
    return False


def is_king_in_check(board: Board, king_color: Color) -> bool:
    """Return True if ``king_color``'s king is attacked by the other side.

    A board without such a king is never in check.
    """
    king_sq = board.find_king(king_color)
    if king_sq is None:
        return False
    return is_attacked(board, king_sq, king_color.opposite)
