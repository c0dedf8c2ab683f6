"""Piece movement geometry.

Pure functions of board contents and move endpoints. None of them look at
whose turn it is or whether the mover's king ends up attacked; that is the
job of :func:`chessprog.engine.game.is_legal_move`.
"""

from __future__ import annotations

from typing import Callable, Dict

from .board import Board
from .move import Move, Square, delta
from .piece import Color, PieceKind


PieceRule = Callable[[Board, Move], bool]

# Rank a pawn of each color starts on; only from here may it advance two squares.
PAWN_START_RANK: Dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
PAWN_DIRECTION: Dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}


def is_on_board(move: Move) -> bool:
    return move.from_sq.on_board and move.to_sq.on_board


def is_valid_destination(board: Board, move: Move) -> bool:
    """Friendly-fire rule: the destination may not hold a piece of the mover's color."""
    mover = board.piece_at(move.from_sq).color
    return board.piece_at(move.to_sq).color is not mover


def _path_is_clear(board: Board, move: Move) -> bool:
    # Walks the squares strictly between the endpoints of a straight or diagonal line
    df, dr = delta(move)
    step_f = (df > 0) - (df < 0)
    step_r = (dr > 0) - (dr < 0)
    f = move.from_sq.file + step_f
    r = move.from_sq.rank + step_r
    while (f, r) != (move.to_sq.file, move.to_sq.rank):
        if not board.is_empty_at(Square(f, r)):
            return False
        f += step_f
        r += step_r
    return True


def pawn_rule(board: Board, move: Move) -> bool:
    color = board.piece_at(move.from_sq).color
    target = board.piece_at(move.to_sq)
    df, dr = delta(move)
    forward = dr * PAWN_DIRECTION[color]
    is_capture = not target.is_empty and target.color is not color
    if is_capture:
        return forward == 1 and abs(df) == 1
    if df != 0 or not target.is_empty:
        return False
    if forward == 1:
        return True
    # Double step checks only the destination square
    return forward == 2 and move.from_sq.rank == PAWN_START_RANK[color]


def rook_rule(board: Board, move: Move) -> bool:
    df, dr = delta(move)
    if (df != 0) == (dr != 0):
        return False
    return _path_is_clear(board, move)


def knight_rule(board: Board, move: Move) -> bool:
    df, dr = delta(move)
    return (abs(df), abs(dr)) in ((1, 2), (2, 1))


def bishop_rule(board: Board, move: Move) -> bool:
    df, dr = delta(move)
    if abs(df) != abs(dr) or df == 0:
        return False
    if abs(df) == 1:
        return True
    return _path_is_clear(board, move)


def queen_rule(board: Board, move: Move) -> bool:
    return rook_rule(board, move) or bishop_rule(board, move)


def king_rule(board: Board, move: Move) -> bool:
    df, dr = delta(move)
    return abs(df) <= 1 and abs(dr) <= 1 and (df, dr) != (0, 0)


PIECE_RULES: Dict[PieceKind, PieceRule] = {
    PieceKind.PAWN: pawn_rule,
    PieceKind.ROOK: rook_rule,
    PieceKind.KNIGHT: knight_rule,
    PieceKind.BISHOP: bishop_rule,
    PieceKind.QUEEN: queen_rule,
    PieceKind.KING: king_rule,
}


def is_legal_geometry(board: Board, move: Move) -> bool:
    """Return whether the piece on ``move.from_sq`` may geometrically reach ``move.to_sq``.

    Both squares must already be on the board. An empty origin is never legal.
    """
    rule = PIECE_RULES.get(board.piece_at(move.from_sq).kind)
    if rule is None:
        return False
    if not is_valid_destination(board, move):
        return False
    return rule(board, move)
